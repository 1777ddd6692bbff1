# File: confload/contracts/state_store_stub.py
# Purpose: Concrete stub implementation for testing

from typing import Optional, Tuple

from ..errors import PersistenceError
from ..models import MeetingCredentials
from .state_store_contract import StateStoreContract


class StateStoreStub(StateStoreContract):
    """Stub that keeps state in memory"""

    def __init__(self, credentials: Optional[MeetingCredentials] = None, counter: int = 0):
        self.credentials = credentials
        self.counter = counter
        self.fail_writes = False
        self.saved_counters = []

    def load_credentials(self) -> Tuple[Optional[MeetingCredentials], bool]:
        """Stub that returns stored credentials"""
        if self.credentials is None:
            return None, False
        return self.credentials, True

    def save_credentials(self, credentials: MeetingCredentials) -> None:
        """Stub that stores credentials"""
        if self.fail_writes:
            raise PersistenceError("Stub configured to fail writes")
        self.credentials = credentials

    def load_counter(self) -> int:
        """Stub that returns the stored counter"""
        return self.counter

    def save_counter(self, value: int) -> None:
        """Stub that stores the counter"""
        if self.fail_writes:
            raise PersistenceError("Stub configured to fail writes")
        self.counter = value
        self.saved_counters.append(value)
