"""
Load-test configuration.
Defaults, optional JSON file and explicit overrides merged into one dict.
"""

import json
import os
from typing import Any, Dict, Optional

from .errors import ConfigError

CONFIG_ENV_VAR = 'CONFLOAD_CONFIG'


def _default_install_dir() -> str:
    if os.name == 'nt':
        return os.path.join(os.environ.get('APPDATA', os.path.expanduser('~')), 'Zoom', 'bin')
    return os.path.join(os.sep, 'opt', 'zoom')


DEFAULT_CONFIG: Dict[str, Any] = {
    'install_dir': _default_install_dir(),
    'template_name': 'Zoom.exe' if os.name == 'nt' else 'zoom',
    'state_dir': os.path.join(os.path.expanduser('~'), '.confload'),
    'credentials_file': 'credentials.json',
    'counter_file': 'counter.txt',
    'log_file': 'confload.log',
    'log_level': 'INFO',

    # Resource gating
    'cpu_threshold': 90.0,
    'memory_threshold': 90.0,
    'sample_interval': 1.0,

    # Teardown
    'grace_period': 5.0,
    'include_template_in_teardown': True,

    # Join target
    'user_name_prefix': 'User',
    'join_url_base': 'zoommtg://zoom.us/join',
    'join_arg_prefix': '--url=',

    # Installer
    'download_url': 'https://zoom.us/client/latest/ZoomInstallerFull.msi',
    'installer_path': os.path.join(os.path.expanduser('~'), 'Downloads', 'ZoomInstallerFull.msi'),
    'download_timeout': 60,
    'install_command': ['msiexec', '/i', '{installer}', '/quiet', '/norestart'],
    'uninstall_commands': [
        ['msiexec', '/x', '{installer}', '/quiet', '/norestart'],
    ],
    'firewall_command': ['netsh', 'advfirewall', 'set', 'allprofiles', 'state', '{state}'],
}


def load_config(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Build the effective configuration.

    Args:
        path: JSON config file; falls back to $CONFLOAD_CONFIG when None
        overrides: Values that win over everything else

    Raises:
        ConfigError if the file is missing, unreadable or not a JSON object
    """
    file_config: Dict[str, Any] = {}
    path = path or os.environ.get(CONFIG_ENV_VAR)

    if path:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read config file {path}: {e}")
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")

    env_config = {}
    if os.environ.get('CONFLOAD_STATE_DIR'):
        env_config['state_dir'] = os.environ['CONFLOAD_STATE_DIR']
    if os.environ.get('CONFLOAD_INSTALL_DIR'):
        env_config['install_dir'] = os.environ['CONFLOAD_INSTALL_DIR']

    return {**DEFAULT_CONFIG, **file_config, **env_config, **(overrides or {})}


def state_path(config: Dict[str, Any], key: str) -> str:
    """Full path of a file kept in the state directory"""
    return os.path.join(config['state_dir'], config[key])


def template_path(config: Dict[str, Any]) -> str:
    return os.path.join(config['install_dir'], config['template_name'])
