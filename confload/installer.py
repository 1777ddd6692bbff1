# File: confload/installer.py
# Purpose: Installer download, silent install/uninstall and firewall toggling
#
# Each operation is a single external command or HTTP request.

import logging
import os
import subprocess
from typing import Any, Dict, List, Optional, Sequence

import requests

from .contracts.installer_contract import InstallerContract
from .errors import InstallerError, PreconditionError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class ZoomInstaller(InstallerContract):
    """Installer operations driven by configured commands"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    def _run(self, command: Sequence[str]) -> Dict[str, Any]:
        logger.info(f"Running: {' '.join(command)}")
        try:
            completed = subprocess.run(list(command), capture_output=True, text=True)
        except OSError as e:
            logger.error(f"Could not run {command[0]}: {e}")
            return {'command': list(command), 'success': False, 'returncode': None, 'output': str(e)}

        output = (completed.stdout or '') + (completed.stderr or '')
        if completed.returncode != 0:
            logger.error(f"{command[0]} exited with {completed.returncode}: {output.strip()}")
        else:
            logger.info(f"{command[0]} completed")
        return {
            'command': list(command),
            'success': completed.returncode == 0,
            'returncode': completed.returncode,
            'output': output.strip(),
        }

    def download(self, url: Optional[str] = None, destination: Optional[str] = None) -> str:
        url = url or self.config['download_url']
        destination = destination or self.config['installer_path']

        logger.info(f"Downloading {url} to {destination}")
        try:
            directory = os.path.dirname(destination)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with requests.get(url, stream=True, timeout=self.config['download_timeout']) as response:
                response.raise_for_status()
                with open(destination, 'wb') as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except (requests.RequestException, OSError) as e:
            logger.error(f"Download of {url} failed: {e}")
            raise InstallerError(f"Download failed: {e}")

        logger.info(f"Downloaded {os.path.getsize(destination)} bytes to {destination}")
        return destination

    def install_silently(self, installer_file: Optional[str] = None) -> bool:
        installer_file = installer_file or self.config['installer_path']
        if not os.path.isfile(installer_file):
            logger.error(f"Installer not found at {installer_file}")
            raise PreconditionError(f"Installer not found: {installer_file}. Download it first.")

        command = [part.format(installer=installer_file) for part in self.config['install_command']]
        return self._run(command)['success']

    def uninstall_all(self) -> List[Dict[str, Any]]:
        installer_file = self.config['installer_path']
        results = []
        for template in self.config['uninstall_commands']:
            command = [part.format(installer=installer_file) for part in template]
            results.append(self._run(command))
        return results

    def set_firewall_enabled(self, enabled: bool) -> bool:
        state = 'on' if enabled else 'off'
        command = [part.format(state=state) for part in self.config['firewall_command']]
        result = self._run(command)
        if result['success']:
            logger.info(f"Firewall turned {state}")
        return result['success']
