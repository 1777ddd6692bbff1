# File: confload/teardown.py
# Purpose: Reverse every effect of the launcher

import logging
import os
import time
from typing import Any, Callable, Dict

from .contracts.process_inventory_contract import ProcessInventoryContract
from .contracts.state_store_contract import StateStoreContract
from .naming import copy_pattern, process_pattern

logger = logging.getLogger(__name__)


class TeardownController:
    """Stops every instance and deletes every numbered copy"""

    def __init__(self, config: Dict[str, Any],
                 state_store: StateStoreContract,
                 inventory: ProcessInventoryContract,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.state_store = state_store
        self.inventory = inventory
        self.sleep = sleep

        self.install_dir = config['install_dir']
        self.template_name = config['template_name']
        self.grace_period = config['grace_period']

    def _running_instances(self):
        processes = self.inventory.find_running(process_pattern(self.template_name))
        if self.config.get('include_template_in_teardown', True):
            return processes
        template_base = os.path.splitext(self.template_name)[0].lower()
        return [p for p in processes if os.path.splitext(p.name)[0].lower() != template_base]

    def stop_stress_load(self) -> Dict[str, Any]:
        """Terminate instances, wait for handles to close, delete copies, reset the counter

        Safe to call with nothing running; the counter is still reset.

        Returns:
            Dictionary with success, found, terminated, remaining, deleted,
            failures, counter and message

        Raises:
            PersistenceError if the counter cannot be reset
        """
        failures = []

        processes = self._running_instances()
        result = self.inventory.terminate_all(processes)
        failures.extend(result['failures'])

        if processes:
            logger.info(f"Waiting {self.grace_period}s for {len(processes)} processes to release files")
            self.sleep(self.grace_period)

        remaining = self._running_instances()
        if remaining:
            logger.warning(f"{len(remaining)} processes still running after teardown: "
                           f"{', '.join(str(p.pid) for p in remaining)}")

        copies = self.inventory.list_copies(self.install_dir, copy_pattern(self.template_name))
        deleted = self.inventory.delete_files(copies)
        failures.extend(deleted['failures'])

        self.state_store.save_counter(0)

        message = (f"Terminated {len(result['terminated'])} of {len(processes)} processes, "
                   f"deleted {len(deleted['deleted'])} of {len(copies)} copies")
        if failures:
            message += f", {len(failures)} failed"
        logger.info(message)

        return {
            'success': not failures and not remaining,
            'found': len(processes),
            'terminated': result['terminated'],
            'remaining': [p.pid for p in remaining],
            'deleted': deleted['deleted'],
            'failures': failures,
            'counter': 0,
            'message': message,
        }
