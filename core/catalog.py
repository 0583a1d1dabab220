"""
Dataset Catalog - The curated set of known datasets.
"""

import logging
import os
from collections import Counter
from typing import Dict, List, Optional, Iterable

import yaml

from models.dataset import DatasetEntry

DEFAULT_CATALOG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'config', 'catalog.yaml'
)


class DatasetCatalog:
    """Curated catalog injected into the monitor and the discovery registry."""

    def __init__(self, datasets: Iterable[DatasetEntry] = ()):
        self.logger = logging.getLogger('DatasetCatalog')
        self._datasets: Dict[str, DatasetEntry] = {}
        for entry in datasets:
            if entry.id in self._datasets:
                self.logger.warning(f"Duplicate catalog entry ignored: {entry.id}")
                continue
            self._datasets[entry.id] = entry

    @classmethod
    def from_yaml(cls, path: str = None) -> 'DatasetCatalog':
        """
        Load the catalog from a YAML file.

        The file holds a top-level ``datasets`` list whose items carry
        ``id``, ``title``, ``category`` and ``columns``.
        """
        if path is None:
            path = DEFAULT_CATALOG_PATH

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        entries = [DatasetEntry.from_dict(item) for item in data.get('datasets') or []]
        return cls(entries)

    @classmethod
    def from_ids(cls, dataset_ids: Iterable[str]) -> 'DatasetCatalog':
        """Build a catalog holding only identifiers."""
        return cls(DatasetEntry(id=dataset_id, title=dataset_id) for dataset_id in dataset_ids)

    def __contains__(self, dataset_id: str) -> bool:
        return dataset_id in self._datasets

    def __len__(self) -> int:
        return len(self._datasets)

    def get_dataset(self, dataset_id: str) -> Optional[DatasetEntry]:
        return self._datasets.get(dataset_id)

    def list_ids(self) -> List[str]:
        """List all dataset ids in catalog order."""
        return list(self._datasets.keys())

    def list_datasets(self) -> List[DatasetEntry]:
        return list(self._datasets.values())

    def count_by_category(self) -> Dict[str, int]:
        return dict(Counter(entry.category or 'Uncategorized' for entry in self._datasets.values()))
