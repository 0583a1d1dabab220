"""
Discovery Registry - Tracks dataset ids found outside the curated catalog.

The catalog has no listing endpoint, so candidates come from operators
(pasted ids, saved listing pages, probe lists). Each candidate is verified
against the lookup endpoint before it is recorded, and stays a discovery
until an operator promotes it or merges the exported snippet into
``config/catalog.yaml``.
"""

import time
import logging
from collections import Counter
from typing import Optional, List, Dict, Any, Iterable

import yaml

from core.catalog import DatasetCatalog
from core.errors import CatalogError
from core.state_manager import DiscoveryStateStore
from handlers.base_handler import BaseCatalogClient
from models.discovered_dataset import DiscoveredDataset, DiscoverySource
from models.metadata import DatasetMetadata
from utils.date_parser import utc_now_iso
from utils.id_extractor import extract_dataset_ids, extract_ids_from_html, unique_ids


class DiscoveryRegistry:
    """Known-id set plus verified, not yet promoted discoveries."""

    def __init__(
        self,
        catalog: DatasetCatalog,
        client: BaseCatalogClient,
        store: DiscoveryStateStore,
        settings: Dict[str, Any] = None
    ):
        self.catalog = catalog
        self.client = client
        self.store = store
        self.logger = logging.getLogger('DiscoveryRegistry')

        discovery_settings = (settings or {}).get('discovery', {})
        self.delay_between_requests = float(discovery_settings.get('delay_between_requests', 0.5))

        self.state = self.store.load(seed_ids=self.catalog.list_ids())
        self._sync_with_catalog()

    def _sync_with_catalog(self) -> None:
        """Fold catalog ids into the known set and drop discoveries that became known."""
        known = set(self.state.known_dataset_ids)
        for dataset_id in self.catalog.list_ids():
            if dataset_id not in known:
                self.state.known_dataset_ids.append(dataset_id)
                known.add(dataset_id)

        merged = [d for d in self.state.discovered_datasets if d.id in known]
        if merged:
            self.logger.info(f"{len(merged)} discovered dataset(s) are now in the catalog")
            self.state.discovered_datasets = [
                d for d in self.state.discovered_datasets if d.id not in known
            ]

    def is_known(self, dataset_id: str) -> bool:
        return dataset_id in self.state.known_dataset_ids

    def is_discovered(self, dataset_id: str) -> bool:
        return self.state.find_discovered(dataset_id) is not None

    def verify_candidate(self, dataset_id: str) -> Optional[DatasetMetadata]:
        """
        Look up a candidate id.

        Returns:
            Metadata when the catalog knows the id, None otherwise
        """
        try:
            return self.client.fetch_metadata(dataset_id)
        except CatalogError as e:
            self.logger.debug(f"Verification failed for {dataset_id}: {e}")
            return None

    def add_manual_discovery(
        self,
        dataset_id: str,
        source: DiscoverySource = DiscoverySource.MANUAL
    ) -> Optional[DiscoveredDataset]:
        """
        Verify and record one candidate.

        Known and already-discovered ids are skipped without a lookup.

        Args:
            dataset_id: Candidate identifier
            source: How the candidate was found

        Returns:
            The new record, or None when skipped or not verified
        """
        dataset_id = dataset_id.strip().lower()

        if self.is_known(dataset_id):
            self.logger.info(f"Dataset {dataset_id} is already known")
            return None

        if self.is_discovered(dataset_id):
            self.logger.info(f"Dataset {dataset_id} was already discovered")
            return None

        metadata = self.verify_candidate(dataset_id)
        if metadata is None:
            self.logger.warning(f"Dataset {dataset_id} not found in catalog")
            return None

        now = utc_now_iso()
        discovered = DiscoveredDataset(
            id=dataset_id,
            title=metadata.title,
            title_en=metadata.title_en,
            provider_name=metadata.provider_name,
            update_frequency=metadata.update_frequency,
            discovered_at=now,
            source=source,
            verified=True,
        )

        self.state.discovered_datasets.append(discovered)
        self.state.last_discovery_time = now
        self.store.save(self.state)

        self.logger.info(f"Discovered: {discovered.title}")
        return discovered

    def add_discoveries(
        self,
        dataset_ids: Iterable[str],
        source: DiscoverySource = DiscoverySource.MANUAL
    ) -> List[DiscoveredDataset]:
        """
        Verify and record a list of candidate ids, one lookup at a time.

        Args:
            dataset_ids: Candidate identifiers, duplicates allowed
            source: How the candidates were found

        Returns:
            Newly created records
        """
        candidates = [
            dataset_id for dataset_id in unique_ids(dataset_ids)
            if not self.is_known(dataset_id) and not self.is_discovered(dataset_id)
        ]
        self.logger.info(f"{len(candidates)} new candidate(s) to verify")

        discovered = []
        for index, dataset_id in enumerate(candidates):
            result = self.add_manual_discovery(dataset_id, source=source)
            if result:
                discovered.append(result)

            if index < len(candidates) - 1:
                time.sleep(self.delay_between_requests)

        self.logger.info(f"Added {len(discovered)} new dataset(s)")
        return discovered

    def import_from_file(self, file_path: str) -> List[DiscoveredDataset]:
        """
        Import every identifier-shaped token found in a text file.

        Args:
            file_path: Path to a file of pasted ids or arbitrary text

        Returns:
            Newly created records
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()

        ids = extract_dataset_ids(content)
        self.logger.info(f"Found {len(ids)} id(s) in {file_path}")
        return self.add_discoveries(ids, source=DiscoverySource.MANUAL)

    def import_from_html(self, file_path: str) -> List[DiscoveredDataset]:
        """Import ids linked from a saved catalog listing page."""
        with open(file_path, 'r', encoding='utf-8') as f:
            html = f.read()

        ids = extract_ids_from_html(html)
        self.logger.info(f"Found {len(ids)} dataset link(s) in {file_path}")
        return self.add_discoveries(ids, source=DiscoverySource.SCRAPE)

    def probe(self, dataset_ids: Iterable[str]) -> List[DiscoveredDataset]:
        """Verify a list of guessed ids and stamp the probe time."""
        discovered = self.add_discoveries(dataset_ids, source=DiscoverySource.PROBE)
        self.state.last_probe_time = utc_now_iso()
        self.store.save(self.state)
        return discovered

    def promote_discovered(self, dataset_id: str) -> bool:
        """
        Move a discovery into the known set.

        Returns:
            True when promoted, False when the id is not a discovery
        """
        dataset_id = dataset_id.strip().lower()
        dataset = self.state.find_discovered(dataset_id)
        if dataset is None:
            return False

        self.state.discovered_datasets = [
            d for d in self.state.discovered_datasets if d.id != dataset_id
        ]
        self.state.known_dataset_ids.append(dataset.id)
        self.store.save(self.state)

        self.logger.info(f"Promoted {dataset_id} to known datasets")
        return True

    def list_discovered(self) -> List[DiscoveredDataset]:
        return list(self.state.discovered_datasets)

    def export_as_code(self) -> str:
        """
        Render verified discoveries as a catalog.yaml snippet for review.

        ``category`` and ``columns`` are left for the operator to fill in.
        """
        datasets = [d for d in self.state.discovered_datasets if d.verified]

        if not datasets:
            return '# No verified discovered datasets to export\n'

        entries = [
            {
                'id': d.id,
                'title': d.title,
                'category': '',
                'columns': [],
            }
            for d in datasets
        ]

        header = (
            '# Newly discovered datasets - review, fill in category/columns,\n'
            '# then merge under `datasets:` in config/catalog.yaml\n'
            f'# Exported: {utc_now_iso()}\n'
        )
        body = yaml.safe_dump(entries, allow_unicode=True, sort_keys=False, default_flow_style=False)
        return header + body

    def get_stats(self) -> Dict[str, Any]:
        known_count = len(self.state.known_dataset_ids)
        discovered_count = len(self.state.discovered_datasets)
        return {
            'known_count': known_count,
            'discovered_count': discovered_count,
            'total_count': known_count + discovered_count,
            'last_discovery': self.state.last_discovery_time,
            'last_probe': self.state.last_probe_time,
            'by_provider': dict(Counter(
                d.provider_name or 'Unknown' for d in self.state.discovered_datasets
            )),
        }
