"""
Instance launcher.

Creates numbered copies of the installed client and starts each one
against the same meeting. Spawned instances are never waited on; they
are found again later by name. Running two launchers at once, or a
launch alongside a teardown, is unsupported: the counter file and the
install directory are not locked.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlencode

from .config import template_path
from .contracts.process_inventory_contract import ProcessInventoryContract
from .contracts.prompt_contract import PromptContract
from .contracts.resource_monitor_contract import ResourceMonitorContract
from .contracts.state_store_contract import StateStoreContract
from .errors import InvalidInputError, PreconditionError
from .models import Instance, MeetingCredentials
from .naming import copy_name, copy_pattern, process_pattern

logger = logging.getLogger(__name__)


def parse_count(requested_count: Union[int, str]) -> int:
    """Validate a requested instance count

    Raises:
        InvalidInputError for anything but a non-negative integer
    """
    if isinstance(requested_count, bool):
        raise InvalidInputError(f"Invalid instance count: {requested_count!r}")
    if isinstance(requested_count, int):
        count = requested_count
    elif isinstance(requested_count, str):
        text = requested_count.strip()
        # isdigit() alone accepts Unicode digits such as '²' that int() rejects
        if not (text.isascii() and text.isdigit()):
            raise InvalidInputError(f"Invalid instance count: {requested_count!r}")
        count = int(text)
    else:
        raise InvalidInputError(f"Invalid instance count: {requested_count!r}")
    if count < 0:
        raise InvalidInputError(f"Instance count must not be negative: {count}")
    return count


def build_join_url(base_url: str, user_name: str, credentials: MeetingCredentials) -> str:
    """Deep link that makes the client join the meeting as user_name"""
    query = urlencode([
        ('action', 'join'),
        ('uname', user_name),
        ('confno', credentials.meeting_id),
        ('pwd', credentials.meeting_code),
        ('opt', 'join'),
        ('role', '0'),
    ])
    return f"{base_url}?{query}"


class InstanceLauncher:
    """Launches batches of client instances"""

    def __init__(self, config: Dict[str, Any],
                 state_store: StateStoreContract,
                 resource_monitor: ResourceMonitorContract,
                 inventory: ProcessInventoryContract,
                 prompt: PromptContract):
        self.config = config
        self.state_store = state_store
        self.resource_monitor = resource_monitor
        self.inventory = inventory
        self.prompt = prompt

        self.install_dir = config['install_dir']
        self.template_name = config['template_name']
        self.template_path = template_path(config)

    def instance_path(self, ordinal: int) -> str:
        return os.path.join(self.install_dir, copy_name(self.template_name, ordinal))

    def _require_template(self) -> None:
        if not os.path.isfile(self.template_path):
            logger.error(f"Template binary not found at {self.template_path}")
            raise PreconditionError(
                f"Client not installed: {self.template_path} is missing. Install it first."
            )

    def _prompt_credentials(self) -> MeetingCredentials:
        meeting_id = self.prompt.ask("Meeting ID: ").replace(' ', '')
        meeting_code = self.prompt.ask("Meeting passcode: ")
        credentials = MeetingCredentials(meeting_id=meeting_id, meeting_code=meeting_code)
        if not credentials.is_complete():
            logger.error("Meeting ID or passcode left empty")
            raise InvalidInputError("Meeting ID and passcode are both required")
        self.state_store.save_credentials(credentials)
        return credentials

    def resolve_credentials(self) -> MeetingCredentials:
        """Reuse saved credentials if the operator agrees, otherwise ask and save"""
        saved, found = self.state_store.load_credentials()
        if found:
            if self.prompt.confirm(f"Use saved meeting {saved.meeting_id}? (y/n): "):
                logger.info(f"Reusing saved meeting {saved.meeting_id}")
                return saved
            logger.info("Operator declined saved credentials")
        return self._prompt_credentials()

    def _check_resources(self, ordinal: int, warnings: List[str]) -> bool:
        """Sample the host; True to keep launching"""
        sample = self.resource_monitor.sample()

        if sample.unreadable:
            message = (f"Resource counters unreadable before instance {ordinal} "
                       f"({', '.join(sample.unreadable)}); treated as 0%")
            logger.warning(message)
            warnings.append(message)

        if not sample.exceeds(self.config['cpu_threshold'], self.config['memory_threshold']):
            return True

        logger.warning(f"Resource threshold exceeded before instance {ordinal}: "
                       f"CPU {sample.cpu_percent:.1f}%, memory {sample.memory_percent:.1f}%")
        if self.prompt.confirm(
            f"CPU {sample.cpu_percent:.1f}% / memory {sample.memory_percent:.1f}% is high. "
            f"Continue launching? (y/n): "
        ):
            logger.info(f"Operator chose to continue at instance {ordinal}")
            return True

        logger.warning(f"Operator aborted the batch at instance {ordinal}")
        return False

    def _launch_one(self, ordinal: int, credentials: MeetingCredentials,
                    failures: List[Dict[str, Any]]) -> Optional[Instance]:
        binary_path = self.instance_path(ordinal)

        if not self.inventory.copy_template(self.template_path, binary_path):
            logger.error(f"Instance {ordinal}: copy to {binary_path} failed")
            failures.append({'ordinal': ordinal, 'stage': 'copy', 'error': f"Could not copy to {binary_path}"})
            return None

        user_name = f"{self.config['user_name_prefix']}{ordinal}"
        join_url = build_join_url(self.config['join_url_base'], user_name, credentials)

        try:
            pid = self.inventory.spawn_detached(binary_path, [f"{self.config['join_arg_prefix']}{join_url}"])
        except OSError as e:
            logger.error(f"Instance {ordinal}: failed to start {binary_path}: {e}")
            failures.append({'ordinal': ordinal, 'stage': 'spawn', 'error': str(e)})
            return None

        logger.info(f"Instance {ordinal}: started {binary_path} as {user_name} (PID {pid})")
        return Instance(ordinal=ordinal, binary_path=binary_path, pid=pid)

    def run_stress_load(self, requested_count: Union[int, str]) -> Dict[str, Any]:
        """Launch a batch of instances

        Args:
            requested_count: Number of instances, as int or operator-typed string

        Returns:
            Dictionary with success, requested, launched, attempted, aborted,
            first_ordinal, last_ordinal, counter, instances, failures,
            warnings and message

        Raises:
            PreconditionError if the client is not installed
            InvalidInputError for a bad count or empty credentials
            PersistenceError if state cannot be read or written
        """
        self._require_template()

        try:
            count = parse_count(requested_count)
        except InvalidInputError as e:
            logger.error(str(e))
            raise

        credentials = self.resolve_credentials()
        starting_ordinal = self.state_store.load_counter() + 1
        logger.info(f"Launching {count} instances starting at ordinal {starting_ordinal}")

        instances: List[Instance] = []
        failures: List[Dict[str, Any]] = []
        warnings: List[str] = []
        attempted = 0
        aborted = False

        for i in range(count):
            ordinal = starting_ordinal + i
            if not self._check_resources(ordinal, warnings):
                aborted = True
                break
            attempted += 1
            instance = self._launch_one(ordinal, credentials, failures)
            if instance is not None:
                instances.append(instance)

        counter = starting_ordinal - 1
        if attempted:
            counter = starting_ordinal + attempted - 1
            self.state_store.save_counter(counter)

        if aborted:
            message = f"Aborted after {len(instances)} of {count} instances (resource threshold)"
        else:
            message = f"Launched {len(instances)} of {count} instances"
        if failures:
            message += f", {len(failures)} failed"
        logger.info(message)

        return {
            'success': not failures,
            'requested': count,
            'launched': len(instances),
            'attempted': attempted,
            'aborted': aborted,
            'first_ordinal': starting_ordinal if attempted else None,
            'last_ordinal': counter if attempted else None,
            'counter': counter,
            'instances': instances,
            'failures': failures,
            'warnings': warnings,
            'message': message,
        }

    def get_status(self) -> Dict[str, Any]:
        """Current load-test state as seen from the host"""
        _, credentials_saved = self.state_store.load_credentials()
        return {
            'counter': self.state_store.load_counter(),
            'running': len(self.inventory.find_running(process_pattern(self.template_name))),
            'copies': len(self.inventory.list_copies(self.install_dir, copy_pattern(self.template_name))),
            'credentials_saved': credentials_saved,
            'template_present': os.path.isfile(self.template_path),
        }
