# File: confload/models.py
# Purpose: Data records shared across components

from dataclasses import dataclass, field
from typing import List, Optional


def _text(value) -> str:
    """Stored field as stripped text; null and non-string values read as empty"""
    return value.strip() if isinstance(value, str) else ''


@dataclass(frozen=True)
class MeetingCredentials:
    """Meeting the load-test instances join"""

    meeting_id: str
    meeting_code: str

    def to_dict(self):
        return {'meetingID': self.meeting_id, 'meetingCode': self.meeting_code}

    @classmethod
    def from_dict(cls, data):
        return cls(
            meeting_id=_text(data.get('meetingID')),
            meeting_code=_text(data.get('meetingCode')),
        )

    def is_complete(self) -> bool:
        return bool(self.meeting_id) and bool(self.meeting_code)


@dataclass
class Instance:
    """One numbered client copy and, once spawned, its process id"""

    ordinal: int
    binary_path: str
    pid: Optional[int] = None


@dataclass(frozen=True)
class ResourceSample:
    cpu_percent: float
    memory_percent: float
    # Counters that could not be read and were reported as 0.0
    unreadable: List[str] = field(default_factory=list)

    def exceeds(self, cpu_threshold: float, memory_threshold: float) -> bool:
        return self.cpu_percent > cpu_threshold or self.memory_percent > memory_threshold


@dataclass(frozen=True)
class ProcessRef:
    pid: int
    name: str
