"""
Discovery models - candidate datasets found outside the curated catalog.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

logger = logging.getLogger('DiscoveryState')


class DiscoverySource(str, Enum):
    """How a candidate identifier was found."""

    MANUAL = 'manual'
    PROBE = 'probe'
    SCRAPE = 'scrape'

    @classmethod
    def from_label(cls, label) -> 'DiscoverySource':
        """Map a persisted label to a member, MANUAL when unrecognised."""
        try:
            return cls(str(label or 'manual').strip().lower())
        except ValueError:
            logger.warning(f"Unknown discovery source {label!r}, using manual")
            return cls.MANUAL


@dataclass
class DiscoveredDataset:
    """A verified dataset that has not been promoted yet."""

    id: str
    title: str
    discovered_at: str
    source: DiscoverySource = DiscoverySource.MANUAL
    verified: bool = False
    title_en: Optional[str] = None
    provider_name: Optional[str] = None
    update_frequency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'DiscoveredDataset':
        """Create from the persisted dictionary."""
        return cls(
            id=data['id'],
            title=data.get('title') or data['id'],
            discovered_at=data.get('discovered_at', ''),
            source=DiscoverySource.from_label(data.get('source')),
            verified=bool(data.get('verified', False)),
            title_en=data.get('title_en'),
            provider_name=data.get('provider_name'),
            update_frequency=data.get('update_frequency'),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'title_en': self.title_en,
            'provider_name': self.provider_name,
            'update_frequency': self.update_frequency,
            'discovered_at': self.discovered_at,
            'source': self.source.value,
            'verified': self.verified,
        }


@dataclass
class DiscoveryState:
    """Full persisted snapshot of the discovery registry."""

    known_dataset_ids: List[str] = field(default_factory=list)
    discovered_datasets: List[DiscoveredDataset] = field(default_factory=list)
    last_probe_time: Optional[str] = None
    last_discovery_time: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'DiscoveryState':
        discovered = []
        for item in data.get('discovered_datasets') or []:
            try:
                discovered.append(DiscoveredDataset.from_dict(item))
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed discovered dataset: {e!r}")

        return cls(
            known_dataset_ids=list(data.get('known_dataset_ids') or []),
            discovered_datasets=discovered,
            last_probe_time=data.get('last_probe_time'),
            last_discovery_time=data.get('last_discovery_time'),
        )

    def to_dict(self) -> dict:
        return {
            'known_dataset_ids': list(self.known_dataset_ids),
            'discovered_datasets': [d.to_dict() for d in self.discovered_datasets],
            'last_probe_time': self.last_probe_time,
            'last_discovery_time': self.last_discovery_time,
        }

    def find_discovered(self, dataset_id: str) -> Optional[DiscoveredDataset]:
        for dataset in self.discovered_datasets:
            if dataset.id == dataset_id:
                return dataset
        return None
