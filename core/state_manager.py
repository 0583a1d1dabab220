"""
State Manager - Whole-document JSON persistence for the monitor and discovery registry.
"""

import os
import json
import logging
import tempfile
from typing import Any, Dict, Iterable, List, Optional
from threading import Lock

from core.errors import PersistenceError
from models.discovered_dataset import DiscoveryState
from models.tracking_record import DatasetTrackingRecord

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class JsonStateStore:
    """Reads and rewrites a single JSON document."""

    def __init__(self, state_file: str):
        self.state_file = state_file
        self._lock = Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    def _read_document(self, default: Any) -> Any:
        """Load the document, falling back to ``default`` when missing or unreadable."""
        try:
            if os.path.exists(self.state_file):
                with open(self.state_file, 'r', encoding='utf-8') as f:
                    return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self.logger.warning(f"Could not load state file {self.state_file}: {e}")
        return default

    def _write_document(self, document: Any) -> None:
        """Rewrite the whole document through a temp file and an atomic rename."""
        directory = os.path.dirname(self.state_file) or '.'
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix='.' + os.path.basename(self.state_file) + '.',
                suffix='.tmp',
                dir=directory,
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False, default=str)
            os.replace(tmp_path, self.state_file)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PersistenceError(
                f"Error saving state file {self.state_file}: {e}", path=self.state_file
            ) from e

    def delete(self) -> None:
        """Remove the state file if it exists."""
        if os.path.exists(self.state_file):
            os.unlink(self.state_file)


class MonitorStateStore(JsonStateStore):
    """Tracking records for known datasets, persisted as a JSON array."""

    def __init__(self, state_file: str = None):
        """
        Initialize the monitor's state store.

        Args:
            state_file: Path to the state JSON file
        """
        if state_file is None:
            state_file = os.path.join(BASE_DIR, 'state', 'dataset_update_state.json')

        super().__init__(state_file)
        self._records: Dict[str, DatasetTrackingRecord] = self._load_records()

    def _load_records(self) -> Dict[str, DatasetTrackingRecord]:
        records: Dict[str, DatasetTrackingRecord] = {}
        document = self._read_document(default=[])
        if not isinstance(document, list):
            self.logger.warning(f"Ignoring malformed state file {self.state_file}")
            return records

        for item in document:
            try:
                record = DatasetTrackingRecord.from_dict(item)
            except (KeyError, TypeError) as e:
                self.logger.warning(f"Skipping malformed tracking record: {e}")
                continue
            records[record.id] = record

        if records:
            self.logger.info(f"Loaded {len(records)} tracking records from {self.state_file}")
        return records

    def get_record(self, dataset_id: str) -> Optional[DatasetTrackingRecord]:
        with self._lock:
            return self._records.get(dataset_id)

    def put_record(self, record: DatasetTrackingRecord) -> None:
        """Replace the in-memory record for ``record.id``. Call ``save`` to persist."""
        with self._lock:
            self._records[record.id] = record

    def get_all_records(self) -> List[DatasetTrackingRecord]:
        with self._lock:
            return list(self._records.values())

    def save(self) -> None:
        """Write every record to disk in one overwrite."""
        with self._lock:
            self._write_document([record.to_dict() for record in self._records.values()])

    def clear(self) -> None:
        """Drop all records and delete the state file."""
        with self._lock:
            self._records = {}
            self.delete()


class DiscoveryStateStore(JsonStateStore):
    """The discovery registry snapshot, persisted as one JSON object."""

    def __init__(self, state_file: str = None):
        if state_file is None:
            state_file = os.path.join(BASE_DIR, 'state', 'discovery_state.json')
        super().__init__(state_file)

    def load(self, seed_ids: Iterable[str] = ()) -> DiscoveryState:
        """
        Load the registry snapshot.

        Args:
            seed_ids: Known ids used when no snapshot exists yet

        Returns:
            DiscoveryState
        """
        with self._lock:
            document = self._read_document(default=None)

        if isinstance(document, dict):
            try:
                return DiscoveryState.from_dict(document)
            except (KeyError, TypeError, ValueError) as e:
                self.logger.warning(f"Ignoring malformed discovery state: {e}")

        return DiscoveryState(known_dataset_ids=list(seed_ids))

    def save(self, state: DiscoveryState) -> None:
        with self._lock:
            self._write_document(state.to_dict())
