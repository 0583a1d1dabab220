"""
Curated catalog entry model.
"""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class DatasetEntry:
    """Represents one dataset in the curated catalog."""

    id: str
    title: str
    category: Optional[str] = None
    columns: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'DatasetEntry':
        """Create DatasetEntry from configuration dictionary."""
        return cls(
            id=str(data['id']).strip().lower(),
            title=data.get('title') or data['id'],
            category=data.get('category') or None,
            columns=list(data.get('columns') or []),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'category': self.category,
            'columns': self.columns,
        }
