# File: confload/state_store.py
# Purpose: File-backed persisted state
#
# Credentials live in a JSON record, the counter in a plain-text file.
# Nothing is locked: two tool invocations running at once can race on
# the counter file, and that usage is unsupported.

import json
import logging
import os
import tempfile
from typing import Optional, Tuple

from .contracts.state_store_contract import StateStoreContract
from .errors import PersistenceError
from .models import MeetingCredentials

logger = logging.getLogger(__name__)


class FileStateStore(StateStoreContract):
    """State store that survives process restarts"""

    def __init__(self, credentials_path: str, counter_path: str):
        self.credentials_path = credentials_path
        self.counter_path = counter_path

    @classmethod
    def from_config(cls, config):
        state_dir = config['state_dir']
        return cls(
            os.path.join(state_dir, config['credentials_file']),
            os.path.join(state_dir, config['counter_file']),
        )

    def _write(self, path: str, content: str) -> None:
        try:
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory or None, prefix='.tmp-')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(content)
                # Readers see either the old file or the complete new one
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise PersistenceError(f"Could not write {path}: {e}")

    def load_credentials(self) -> Tuple[Optional[MeetingCredentials], bool]:
        try:
            with open(self.credentials_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return None, False
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read credentials from {self.credentials_path}: {e}")
            raise PersistenceError(f"Could not read {self.credentials_path}: {e}")

        if not isinstance(data, dict):
            logger.error(f"Credentials file {self.credentials_path} is not a JSON object")
            raise PersistenceError(f"Malformed credentials file {self.credentials_path}")

        credentials = MeetingCredentials.from_dict(data)
        if not credentials.is_complete():
            logger.warning(f"Ignoring incomplete credentials in {self.credentials_path}")
            return None, False
        return credentials, True

    def save_credentials(self, credentials: MeetingCredentials) -> None:
        if not credentials.is_complete():
            raise ValueError("Meeting ID and meeting code must both be non-empty")
        self._write(self.credentials_path, json.dumps(credentials.to_dict(), indent=2))
        logger.info(f"Saved meeting credentials: meetingID={credentials.meeting_id} "
                    f"meetingCode={credentials.meeting_code}")

    def load_counter(self) -> int:
        try:
            with open(self.counter_path, 'r', encoding='utf-8') as f:
                raw = f.read().strip()
        except FileNotFoundError:
            return 0
        except OSError as e:
            logger.error(f"Failed to read counter from {self.counter_path}: {e}")
            raise PersistenceError(f"Could not read {self.counter_path}: {e}")

        if not raw:
            logger.error(f"Counter file {self.counter_path} is empty")
            raise PersistenceError(f"Empty counter file {self.counter_path}")
        try:
            value = int(raw)
        except ValueError:
            logger.error(f"Counter file {self.counter_path} holds non-integer value {raw!r}")
            raise PersistenceError(f"Corrupt counter file {self.counter_path}: {raw!r}")
        if value < 0:
            logger.error(f"Counter file {self.counter_path} holds negative value {value}")
            raise PersistenceError(f"Corrupt counter file {self.counter_path}: {value}")
        return value

    def save_counter(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"Counter must be a non-negative integer, got {value!r}")
        self._write(self.counter_path, str(value))
        logger.info(f"Saved instance counter: {value}")
