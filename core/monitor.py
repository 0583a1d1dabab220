"""
Dataset Monitor - Detects upstream metadata changes for known datasets.
"""

import time
import logging
from collections import Counter
from datetime import datetime
from typing import Optional, List, Dict, Any, Callable, Iterable

from core.catalog import DatasetCatalog
from core.errors import NotFoundError
from core.state_manager import MonitorStateStore
from handlers.base_handler import BaseCatalogClient
from models.check_result import CheckResult
from models.tracking_record import DatasetTrackingRecord, UpdateFrequency
from reporters.base_reporter import BaseReporter
from reporters.console_reporter import ConsoleReporter
from utils.date_parser import DateParser, utc_now_iso

# Fraction of the expected interval after which a dataset counts as due
DUE_THRESHOLD = 0.8

ErrorHook = Callable[[Exception, str], None]


class DatasetMonitor:
    """Polls the catalog for every known dataset, one request at a time."""

    def __init__(
        self,
        catalog: DatasetCatalog,
        client: BaseCatalogClient,
        store: MonitorStateStore,
        reporter: BaseReporter = None,
        on_error: ErrorHook = None,
        settings: Dict[str, Any] = None
    ):
        """
        Initialize the monitor.

        Args:
            catalog: Curated catalog whose ids are swept
            client: Catalog metadata client
            store: Tracking record store
            reporter: Sink for detected updates (logs to console by default)
            on_error: Called with ``(error, dataset_id)`` when a lookup fails
            settings: Settings dictionary, ``monitor`` section is read
        """
        self.catalog = catalog
        self.client = client
        self.store = store
        self.reporter = reporter or ConsoleReporter()
        self.logger = logging.getLogger('DatasetMonitor')
        self.on_error = on_error or self._log_error

        monitor_settings = (settings or {}).get('monitor', {})
        self.delay_between_requests = float(monitor_settings.get('delay_between_requests', 0.5))
        # Upper bound for future parallel workers; sweeps stay sequential.
        self.concurrency_limit = int(monitor_settings.get('concurrency_limit', 3))

    def _log_error(self, error: Exception, dataset_id: str) -> None:
        self.logger.error(f"Error checking {dataset_id}: {type(error).__name__}: {error}")

    def check_dataset(self, dataset_id: str) -> Optional[CheckResult]:
        """
        Check one dataset against its stored baseline.

        The stored record is only replaced after a successful fetch.

        Args:
            dataset_id: Catalog identifier

        Returns:
            CheckResult, or None when the lookup failed
        """
        dataset_id = dataset_id.strip().lower()
        try:
            metadata = self.client.fetch_metadata(dataset_id)
            if not metadata.updated_at:
                raise NotFoundError(f"No updatedAt in metadata for {dataset_id}", dataset_id)
        except Exception as e:
            self.on_error(e, dataset_id)
            return None

        current_update = str(metadata.updated_at)
        previous_record = self.store.get_record(dataset_id)
        previous_update = previous_record.last_known_update if previous_record else None
        if not previous_update:
            previous_update = None

        has_update = previous_update is not None and previous_update != current_update

        entry = self.catalog.get_dataset(dataset_id)
        title = metadata.title_ar or metadata.title_en or (entry.title if entry else dataset_id)

        self.store.put_record(DatasetTrackingRecord(
            id=dataset_id,
            title=title,
            last_known_update=current_update,
            last_checked=utc_now_iso(),
            provider_name=metadata.provider_name,
            update_frequency=UpdateFrequency.from_label(metadata.update_frequency),
        ))

        self.logger.debug(f"Result for {dataset_id}: has_update={has_update}, updated_at={current_update}")
        return CheckResult(
            dataset_id=dataset_id,
            title=title,
            has_update=has_update,
            previous_update=previous_update,
            current_update=current_update,
            provider_name=metadata.provider_name,
        )

    def check_all_datasets(self) -> List[CheckResult]:
        """
        Sweep every dataset in the catalog.

        Returns:
            CheckResults for every dataset whose lookup succeeded
        """
        return self._run_checks(self.catalog.list_ids())

    def check_specific_datasets(self, dataset_ids: Iterable[str]) -> List[CheckResult]:
        """Same as a full sweep, restricted to ``dataset_ids``."""
        return self._run_checks([dataset_id.strip().lower() for dataset_id in dataset_ids])

    def _run_checks(self, dataset_ids: List[str]) -> List[CheckResult]:
        self.logger.info(f"Checking {len(dataset_ids)} datasets...")
        start_time = time.monotonic()
        results = []

        for index, dataset_id in enumerate(dataset_ids):
            entry = self.catalog.get_dataset(dataset_id)
            label = entry.title if entry else dataset_id
            self.logger.info(f"Checking {index + 1}/{len(dataset_ids)}: {label[:40]}")

            result = self.check_dataset(dataset_id)
            if result:
                results.append(result)

            if index < len(dataset_ids) - 1:
                time.sleep(self.delay_between_requests)

        # One write per sweep; a crash mid-sweep loses the batch.
        self.store.save()

        duration = time.monotonic() - start_time
        self.logger.info(f"Checked {len(results)}/{len(dataset_ids)} datasets in {duration:.1f}s")

        updates = [result for result in results if result.has_update]
        if updates:
            self.reporter.report(updates)
        else:
            self.logger.info("No new updates")

        return results

    def get_dataset_state(self, dataset_id: str) -> Optional[DatasetTrackingRecord]:
        return self.store.get_record(dataset_id)

    def get_all_state(self) -> List[DatasetTrackingRecord]:
        return self.store.get_all_records()

    def get_last_check_time(self) -> Optional[str]:
        """Most recent ``last_checked`` across all records."""
        parser = DateParser()
        latest = None
        latest_time = None
        for record in self.get_all_state():
            checked = parser.parse(record.last_checked)
            if checked and (latest_time is None or checked > latest_time):
                latest, latest_time = record.last_checked, checked
        return latest

    def get_summary(self) -> Dict[str, Any]:
        """Counts describing what is tracked."""
        records = self.get_all_state()
        categories = Counter()
        for record in records:
            entry = self.catalog.get_dataset(record.id)
            categories[(entry.category if entry else None) or 'Uncategorized'] += 1

        return {
            'total_datasets': len(self.catalog),
            'tracked_datasets': len(records),
            'last_check_time': self.get_last_check_time(),
            'update_frequencies': dict(Counter(r.update_frequency.value for r in records)),
            'categories': dict(categories),
        }

    def clear_state(self) -> None:
        """Forget every tracking record and delete the state file."""
        self.store.clear()
        self.logger.info("Cleared saved monitor state")


def update_frequency_to_days(frequency) -> int:
    """
    Expected days between updates for a frequency label.

    Args:
        frequency: UpdateFrequency or raw label

    Returns:
        Days, 30 for unknown labels
    """
    if not isinstance(frequency, UpdateFrequency):
        frequency = UpdateFrequency.from_label(frequency)
    return frequency.expected_days


def get_expected_updates(
    records: Iterable[DatasetTrackingRecord],
    now: datetime = None
) -> List[DatasetTrackingRecord]:
    """
    Records whose next upstream update is due soon.

    A record is due once the time since ``last_known_update`` reaches 80% of
    the interval implied by its update frequency. Advisory only.

    Args:
        records: Tracking records to filter
        now: Reference time, defaults to the current UTC time

    Returns:
        The due records, in input order
    """
    parser = DateParser()
    due = []
    for record in records:
        elapsed = parser.days_since(record.last_known_update, now=now)
        if elapsed is None:
            continue
        if elapsed >= update_frequency_to_days(record.update_frequency) * DUE_THRESHOLD:
            due.append(record)
    return due
