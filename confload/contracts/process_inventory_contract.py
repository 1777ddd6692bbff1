# File: confload/contracts/process_inventory_contract.py
# Purpose: Define the boundary for instance processes and binary copies

from abc import ABC, abstractmethod
from re import Pattern
from typing import Any, Dict, List, Sequence

from ..models import ProcessRef


class ProcessInventoryContract(ABC):
    """Abstract contract defining the process inventory interface

    Instances are discovered by name on every call, never from an
    in-memory registry, so a fresh invocation can clean up after an
    earlier one.
    """

    @abstractmethod
    def find_running(self, name_pattern: Pattern) -> List[ProcessRef]:
        """Find running processes whose name matches the pattern

        Args:
            name_pattern: Compiled process name pattern

        Returns:
            List of process references, possibly empty
        """
        pass

    @abstractmethod
    def terminate_all(self, processes: Sequence[ProcessRef]) -> Dict[str, Any]:
        """Forcefully terminate processes

        Args:
            processes: Processes returned by find_running

        Returns:
            Dictionary with:
                - terminated: List of pids killed or already gone
                - failures: List of {'pid', 'stage', 'error'} dicts

        Postconditions:
            - Individual failures are logged and skipped, never raised
        """
        pass

    @abstractmethod
    def copy_template(self, source_path: str, dest_path: str) -> bool:
        """Copy the template binary, overwriting dest_path if it exists

        Returns:
            True if the copy succeeded
        """
        pass

    @abstractmethod
    def list_copies(self, directory: str, name_pattern: Pattern) -> List[str]:
        """List numbered copies in a directory

        Args:
            directory: Directory to scan
            name_pattern: Compiled copy name pattern

        Returns:
            Sorted list of full paths; empty when the directory is missing
        """
        pass

    @abstractmethod
    def delete_files(self, paths: Sequence[str]) -> Dict[str, Any]:
        """Delete files

        Returns:
            Dictionary with:
                - deleted: List of removed paths
                - failures: List of {'path', 'stage', 'error'} dicts

        Postconditions:
            - Individual failures are logged and skipped, never raised
        """
        pass

    @abstractmethod
    def spawn_detached(self, binary_path: str, args: Sequence[str]) -> int:
        """Start a process without waiting for it

        Args:
            binary_path: Executable to start
            args: Command arguments

        Returns:
            System process ID

        Postconditions:
            - The process outlives the caller; no handle is kept

        Raises:
            OSError if the process could not be started
        """
        pass
