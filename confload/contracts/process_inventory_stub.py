# File: confload/contracts/process_inventory_stub.py
# Purpose: Concrete stub implementation for testing

import os
from re import Pattern
from typing import Any, Dict, List, Sequence

from ..models import ProcessRef
from .process_inventory_contract import ProcessInventoryContract


class ProcessInventoryStub(ProcessInventoryContract):
    """Stub with an in-memory file system and process table"""

    def __init__(self):
        self.files = set()
        self.processes = {}
        self.next_pid = 1000
        self.spawned = []
        self.failing_copies = set()
        self.failing_spawns = set()
        self.failing_deletes = set()
        self.unkillable = set()

    def add_file(self, path: str) -> None:
        self.files.add(path)

    def add_process(self, name: str) -> int:
        pid = self.next_pid
        self.processes[pid] = name
        self.next_pid += 1
        return pid

    def find_running(self, name_pattern: Pattern) -> List[ProcessRef]:
        """Stub that filters the process table by name"""
        return [
            ProcessRef(pid=pid, name=name)
            for pid, name in sorted(self.processes.items())
            if name_pattern.match(name)
        ]

    def terminate_all(self, processes: Sequence[ProcessRef]) -> Dict[str, Any]:
        """Stub that removes processes from the table"""
        result = {'terminated': [], 'failures': []}
        for proc in processes:
            if proc.pid in self.unkillable:
                result['failures'].append({'pid': proc.pid, 'stage': 'terminate', 'error': 'Access denied'})
                continue
            self.processes.pop(proc.pid, None)
            result['terminated'].append(proc.pid)
        return result

    def copy_template(self, source_path: str, dest_path: str) -> bool:
        """Stub that copies within the in-memory file system"""
        if source_path not in self.files or dest_path in self.failing_copies:
            return False
        self.files.add(dest_path)
        return True

    def list_copies(self, directory: str, name_pattern: Pattern) -> List[str]:
        """Stub that lists matching in-memory files"""
        return sorted(
            path for path in self.files
            if os.path.dirname(path) == directory and name_pattern.match(os.path.basename(path))
        )

    def delete_files(self, paths: Sequence[str]) -> Dict[str, Any]:
        """Stub that removes in-memory files"""
        result = {'deleted': [], 'failures': []}
        for path in paths:
            if path in self.failing_deletes:
                result['failures'].append({'path': path, 'stage': 'delete', 'error': 'File in use'})
                continue
            self.files.discard(path)
            result['deleted'].append(path)
        return result

    def spawn_detached(self, binary_path: str, args: Sequence[str]) -> int:
        """Stub that adds a process named after the binary"""
        if binary_path in self.failing_spawns or binary_path not in self.files:
            raise OSError(f"Cannot execute {binary_path}")
        pid = self.add_process(os.path.basename(binary_path))
        self.spawned.append({'pid': pid, 'binary': binary_path, 'args': list(args)})
        return pid
