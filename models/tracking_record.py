"""
Tracking record model for datasets watched by the monitor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UpdateFrequency(str, Enum):
    """Update cadence label reported by the catalog."""

    DAILY = 'DAILY'
    WEEKLY = 'WEEKLY'
    MONTHLY = 'MONTHLY'
    QUARTERLY = 'QUARTERLY'
    YEARLY = 'YEARLY'
    REAL_TIME = 'REAL_TIME'
    UNKNOWN = 'UNKNOWN'

    @classmethod
    def from_label(cls, label: Optional[str]) -> 'UpdateFrequency':
        """Map a raw catalog label to a member, UNKNOWN when unrecognised."""
        if not label:
            return cls.UNKNOWN
        normalized = str(label).strip().upper().replace('-', '_').replace(' ', '_')
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN

    @property
    def expected_days(self) -> int:
        """Expected interval between upstream updates, in days."""
        return EXPECTED_DAYS.get(self, DEFAULT_EXPECTED_DAYS)


DEFAULT_EXPECTED_DAYS = 30

EXPECTED_DAYS = {
    UpdateFrequency.DAILY: 1,
    UpdateFrequency.WEEKLY: 7,
    UpdateFrequency.MONTHLY: 30,
    UpdateFrequency.QUARTERLY: 90,
    UpdateFrequency.YEARLY: 365,
    UpdateFrequency.REAL_TIME: 0,
}


@dataclass
class DatasetTrackingRecord:
    """Last observed state of one known dataset."""

    id: str
    title: str
    last_known_update: str
    last_checked: str
    provider_name: Optional[str] = None
    update_frequency: UpdateFrequency = UpdateFrequency.UNKNOWN

    @classmethod
    def from_dict(cls, data: dict) -> 'DatasetTrackingRecord':
        """Create a record from its persisted form."""
        return cls(
            id=data['id'],
            title=data.get('title', data['id']),
            last_known_update=data.get('last_known_update', ''),
            last_checked=data.get('last_checked', ''),
            provider_name=data.get('provider_name'),
            update_frequency=UpdateFrequency.from_label(data.get('update_frequency')),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'provider_name': self.provider_name,
            'update_frequency': self.update_frequency.value,
            'last_known_update': self.last_known_update,
            'last_checked': self.last_checked,
        }
