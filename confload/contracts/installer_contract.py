# File: confload/contracts/installer_contract.py
# Purpose: Define the boundary for client installation and host setup

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class InstallerContract(ABC):
    """Abstract contract for installer acquisition, install and firewall"""

    @abstractmethod
    def download(self, url: Optional[str] = None, destination: Optional[str] = None) -> str:
        """Download the client installer

        Args:
            url: Installer URL, configured default when None
            destination: Target file, configured installer path when None

        Returns:
            Path of the downloaded file

        Raises:
            InstallerError if the download fails
        """
        pass

    @abstractmethod
    def install_silently(self, installer_file: Optional[str] = None) -> bool:
        """Install the client without user interaction

        Returns:
            True if the installer exited successfully

        Preconditions:
            - Installer file exists (PreconditionError otherwise)
        """
        pass

    @abstractmethod
    def uninstall_all(self) -> List[Dict[str, Any]]:
        """Run every configured uninstaller

        Returns:
            One {'command', 'success', 'returncode', 'output'} dict per command
        """
        pass

    @abstractmethod
    def set_firewall_enabled(self, enabled: bool) -> bool:
        """Turn the host firewall profiles on or off

        Returns:
            True if the firewall command succeeded
        """
        pass
