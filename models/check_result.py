"""
Check Result model.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class CheckResult:
    """Represents the result of checking one dataset for upstream changes."""

    dataset_id: str
    title: str
    has_update: bool
    current_update: str
    previous_update: Optional[str] = None
    provider_name: Optional[str] = None
    check_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        status = "UPDATED" if self.has_update else "NO CHANGE"
        return (
            f"[{status}] {self.title}\n"
            f"  Provider: {self.provider_name or 'N/A'}\n"
            f"  Current:  {self.current_update}\n"
            f"  Previous: {self.previous_update or 'unknown'}"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'dataset_id': self.dataset_id,
            'title': self.title,
            'provider_name': self.provider_name,
            'has_update': self.has_update,
            'previous_update': self.previous_update,
            'current_update': self.current_update,
            'check_time': self.check_time.isoformat() if self.check_time else None,
        }

    @property
    def status(self) -> str:
        """Get status string."""
        return 'updated' if self.has_update else 'unchanged'
