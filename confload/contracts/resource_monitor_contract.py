# File: confload/contracts/resource_monitor_contract.py
# Purpose: Define the boundary for host resource sampling

from abc import ABC, abstractmethod

from ..models import ResourceSample


class ResourceMonitorContract(ABC):
    """Abstract contract defining the resource monitor interface"""

    @abstractmethod
    def sample(self) -> ResourceSample:
        """Sample host CPU and memory utilization

        Blocks for the sampling window of the underlying counters.

        Returns:
            ResourceSample with percentages in the 0-100 range

        Postconditions:
            - Never raises; unreadable counters read as 0.0 and are
              listed in ResourceSample.unreadable
        """
        pass
