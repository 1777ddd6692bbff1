"""Component boundaries and in-memory stubs used by tests"""

from .state_store_contract import StateStoreContract
from .resource_monitor_contract import ResourceMonitorContract
from .process_inventory_contract import ProcessInventoryContract
from .prompt_contract import PromptContract
from .installer_contract import InstallerContract

__all__ = [
    'StateStoreContract',
    'ResourceMonitorContract',
    'ProcessInventoryContract',
    'PromptContract',
    'InstallerContract',
]
