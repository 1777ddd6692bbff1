# File: confload/contracts/installer_stub.py
# Purpose: Concrete stub implementation for testing

from typing import Any, Dict, List, Optional

from .installer_contract import InstallerContract


class InstallerStub(InstallerContract):
    """Stub that records calls instead of touching the host"""

    def __init__(self):
        self.calls = []
        self.firewall_enabled = True
        self.installed = False

    def download(self, url: Optional[str] = None, destination: Optional[str] = None) -> str:
        """Stub that pretends the installer was downloaded"""
        self.calls.append(('download', url, destination))
        return destination or 'ZoomInstaller.msi'

    def install_silently(self, installer_file: Optional[str] = None) -> bool:
        """Stub that marks the client installed"""
        self.calls.append(('install', installer_file))
        self.installed = True
        return True

    def uninstall_all(self) -> List[Dict[str, Any]]:
        """Stub that marks the client removed"""
        self.calls.append(('uninstall',))
        self.installed = False
        return [{'command': ['uninstall'], 'success': True, 'returncode': 0, 'output': ''}]

    def set_firewall_enabled(self, enabled: bool) -> bool:
        """Stub that records the firewall state"""
        self.calls.append(('firewall', enabled))
        self.firewall_enabled = enabled
        return True
