# File: confload/contracts/state_store_contract.py
# Purpose: Define the boundary for persisted load-test state

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..models import MeetingCredentials


class StateStoreContract(ABC):
    """Abstract contract defining the persisted state store interface"""

    @abstractmethod
    def load_credentials(self) -> Tuple[Optional[MeetingCredentials], bool]:
        """Load saved meeting credentials

        Returns:
            (credentials, found). credentials is None when found is False

        Postconditions:
            - Returned credentials have non-empty ID and code

        Raises:
            PersistenceError if the stored record is unreadable
        """
        pass

    @abstractmethod
    def save_credentials(self, credentials: MeetingCredentials) -> None:
        """Persist meeting credentials, replacing any previous record

        Args:
            credentials: Meeting ID and code, both non-empty

        Postconditions:
            - load_credentials returns the same values
            - Saved values are logged

        Raises:
            PersistenceError if the record cannot be written
        """
        pass

    @abstractmethod
    def load_counter(self) -> int:
        """Highest instance ordinal ever assigned

        Returns:
            Counter value, 0 when nothing has been persisted

        Raises:
            PersistenceError if the stored value is unreadable or invalid
        """
        pass

    @abstractmethod
    def save_counter(self, value: int) -> None:
        """Persist the instance counter

        Args:
            value: Non-negative integer

        Postconditions:
            - load_counter returns value
            - Saved value is logged

        Raises:
            PersistenceError if the value cannot be written
        """
        pass
