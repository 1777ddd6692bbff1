# File: confload/process_inventory.py
# Purpose: OS process and binary copy management

import logging
import os
import shutil
import subprocess
from re import Pattern
from typing import Any, Dict, List, Sequence

import psutil

from .contracts.process_inventory_contract import ProcessInventoryContract
from .models import ProcessRef

logger = logging.getLogger(__name__)


class ProcessInventory(ProcessInventoryContract):
    """Process inventory backed by psutil and the local file system"""

    def find_running(self, name_pattern: Pattern) -> List[ProcessRef]:
        matches = []
        for proc in psutil.process_iter(['pid', 'name']):
            name = proc.info.get('name')
            if name and name_pattern.match(name):
                matches.append(ProcessRef(pid=proc.info['pid'], name=name))
        logger.info(f"Found {len(matches)} running processes matching {name_pattern.pattern}")
        return matches

    def terminate_all(self, processes: Sequence[ProcessRef]) -> Dict[str, Any]:
        result = {'terminated': [], 'failures': []}
        for ref in processes:
            try:
                psutil.Process(ref.pid).kill()
                logger.info(f"Killed {ref.name} (PID {ref.pid})")
                result['terminated'].append(ref.pid)
            except psutil.NoSuchProcess:
                # Exited on its own
                result['terminated'].append(ref.pid)
            except (psutil.AccessDenied, OSError) as e:
                logger.error(f"Failed to kill {ref.name} (PID {ref.pid}): {e}")
                result['failures'].append({'pid': ref.pid, 'stage': 'terminate', 'error': str(e)})
        return result

    def copy_template(self, source_path: str, dest_path: str) -> bool:
        try:
            shutil.copy2(source_path, dest_path)
        except OSError as e:
            logger.error(f"Failed to copy {source_path} to {dest_path}: {e}")
            return False
        logger.info(f"Copied {source_path} to {dest_path}")
        return True

    def list_copies(self, directory: str, name_pattern: Pattern) -> List[str]:
        try:
            names = os.listdir(directory)
        except FileNotFoundError:
            return []
        return sorted(
            os.path.join(directory, name) for name in names
            if name_pattern.match(name) and os.path.isfile(os.path.join(directory, name))
        )

    def delete_files(self, paths: Sequence[str]) -> Dict[str, Any]:
        result = {'deleted': [], 'failures': []}
        for path in paths:
            try:
                os.remove(path)
                logger.info(f"Deleted {path}")
                result['deleted'].append(path)
            except FileNotFoundError:
                result['deleted'].append(path)
            except OSError as e:
                logger.error(f"Failed to delete {path}: {e}")
                result['failures'].append({'path': path, 'stage': 'delete', 'error': str(e)})
        return result

    def spawn_detached(self, binary_path: str, args: Sequence[str]) -> int:
        kwargs: Dict[str, Any] = {
            'stdin': subprocess.DEVNULL,
            'stdout': subprocess.DEVNULL,
            'stderr': subprocess.DEVNULL,
            'close_fds': True,
        }
        if os.name == 'nt':
            kwargs['creationflags'] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
        else:
            kwargs['start_new_session'] = True

        process = subprocess.Popen([binary_path, *args], **kwargs)
        logger.info(f"Started {binary_path} (PID {process.pid})")
        return process.pid
