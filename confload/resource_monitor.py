# File: confload/resource_monitor.py
# Purpose: Host CPU and memory sampling

import logging

import psutil

from .contracts.resource_monitor_contract import ResourceMonitorContract
from .models import ResourceSample

logger = logging.getLogger(__name__)


class PsutilResourceMonitor(ResourceMonitorContract):
    """Samples system-wide utilization with psutil"""

    def __init__(self, interval: float = 1.0):
        self.interval = interval

    def sample(self) -> ResourceSample:
        unreadable = []

        try:
            # Blocks for the sampling window
            cpu = float(psutil.cpu_percent(interval=self.interval))
        except Exception as e:
            logger.warning(f"CPU counter unreadable, treating as 0%: {e}")
            cpu = 0.0
            unreadable.append('cpu')

        try:
            memory = float(psutil.virtual_memory().percent)
        except Exception as e:
            logger.warning(f"Memory counter unreadable, treating as 0%: {e}")
            memory = 0.0
            unreadable.append('memory')

        return ResourceSample(cpu_percent=cpu, memory_percent=memory, unreadable=unreadable)
