# File: confload/contracts/resource_monitor_stub.py
# Purpose: Concrete stub implementation for testing

from typing import Iterable, Optional

from ..models import ResourceSample
from .resource_monitor_contract import ResourceMonitorContract


class ResourceMonitorStub(ResourceMonitorContract):
    """Stub that replays scripted samples, repeating the last one"""

    def __init__(self, samples: Optional[Iterable[ResourceSample]] = None):
        self.samples = list(samples or [ResourceSample(cpu_percent=10.0, memory_percent=10.0)])
        self.sample_count = 0

    def sample(self) -> ResourceSample:
        """Stub that returns the next scripted sample"""
        index = min(self.sample_count, len(self.samples) - 1)
        self.sample_count += 1
        return self.samples[index]
