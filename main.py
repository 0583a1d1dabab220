#!/usr/bin/env python3
"""
Main entry point for the Open Data Sentinel update monitor.

Sweeps every dataset in the curated catalog, reports the ones whose upstream
metadata changed and exports the results to a CSV file. Meant to be run by
hand or from cron:

    0 */6 * * * cd /path/to/sentinel && python main.py >> monitor.log 2>&1

Usage:
    python main.py                       # Check all catalog datasets
    python main.py --dataset ID          # Check specific datasets
    python main.py --summary             # Show tracking summary
    python main.py --expected            # List datasets due for an update
    python main.py --webhook URL         # Also POST updates to a webhook
    python main.py --reset               # Delete saved state and update log
"""

import argparse
import sys
from typing import Any, Dict

from core.catalog import DatasetCatalog
from core.errors import SentinelError
from core.monitor import DatasetMonitor, get_expected_updates
from core.settings import load_settings, resolve_path
from core.state_manager import MonitorStateStore
from handlers.catalog_client import CatalogClient
from reporters import (
    ConsoleReporter,
    CSVReporter,
    MultiReporter,
    UpdateLogReporter,
    WebhookReporter,
)
from utils.logger import setup_logging_from_settings


def build_update_log(settings: Dict[str, Any]) -> UpdateLogReporter:
    reporting = settings['reporting']
    return UpdateLogReporter(
        resolve_path(reporting['update_log_file']),
        max_entries=int(reporting.get('max_log_entries', 100))
    )


def build_monitor(settings: Dict[str, Any], catalog: DatasetCatalog, webhook_url: str = None) -> DatasetMonitor:
    """Wire the monitor with its client, state store and reporters."""
    reporters = [ConsoleReporter(), build_update_log(settings)]

    webhook_url = webhook_url or settings['reporting'].get('webhook_url')
    if webhook_url:
        reporters.append(WebhookReporter(
            webhook_url,
            source_name=settings['reporting'].get('source_name', 'Saudi Open Data Monitor'),
            timeout=settings['http'].get('timeout', 30)
        ))

    return DatasetMonitor(
        catalog=catalog,
        client=CatalogClient(settings),
        store=MonitorStateStore(resolve_path(settings['monitor']['state_file'])),
        reporter=MultiReporter(reporters),
        settings=settings
    )


def print_summary(monitor: DatasetMonitor, update_log: UpdateLogReporter) -> None:
    summary = monitor.get_summary()

    print("\nMonitoring Summary:")
    print("-" * 50)
    print(f"  Catalog datasets: {summary['total_datasets']}")
    print(f"  Tracked datasets: {summary['tracked_datasets']}")

    if summary['tracked_datasets'] == 0:
        print("\nNo datasets checked yet. Run: python main.py")
        return

    print(f"  Last check:       {summary['last_check_time']}")

    print("\n  Categories:")
    for category, count in sorted(summary['categories'].items()):
        print(f"    - {category}: {count}")

    print("\n  Update frequencies:")
    for frequency, count in sorted(summary['update_frequencies'].items()):
        print(f"    - {frequency}: {count}")

    recent = update_log.recent(5)
    if recent:
        print("\n  Recently detected updates:")
        for entry in recent:
            print(f"    {entry['timestamp']}: {len(entry['updates'])} update(s)")


def print_expected(monitor: DatasetMonitor) -> None:
    due = get_expected_updates(monitor.get_all_state())

    print("\nDatasets due for an update:")
    print("-" * 50)
    if not due:
        print("  None")
        return
    for record in due:
        print(f"  [{record.update_frequency.value:9}] {record.title}")
        print(f"    Last update: {record.last_known_update}")


def main():
    parser = argparse.ArgumentParser(
        description='Open Data Sentinel - Dataset Update Monitor'
    )
    parser.add_argument(
        '--dataset',
        action='append',
        metavar='ID',
        help='Dataset id to check (repeatable; checks the whole catalog if omitted)'
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Show a summary of the saved monitoring state'
    )
    parser.add_argument(
        '--expected',
        action='store_true',
        help='List tracked datasets expected to update soon'
    )
    parser.add_argument(
        '--reset',
        action='store_true',
        help='Delete the saved monitoring state and update log'
    )
    parser.add_argument(
        '--webhook',
        type=str,
        metavar='URL',
        help='POST detected updates to this URL'
    )
    parser.add_argument(
        '--output',
        type=str,
        help='Output CSV file path (default from settings)'
    )
    parser.add_argument(
        '--settings',
        type=str,
        help='Path to settings.yaml'
    )
    parser.add_argument(
        '--catalog',
        type=str,
        help='Path to catalog.yaml'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args()

    settings = load_settings(args.settings)
    setup_logging_from_settings(settings, verbose=args.verbose)

    catalog = DatasetCatalog.from_yaml(args.catalog)
    monitor = build_monitor(settings, catalog, webhook_url=args.webhook)
    update_log = build_update_log(settings)

    if args.summary:
        print_summary(monitor, update_log)
        return

    if args.expected:
        print_expected(monitor)
        return

    if args.reset:
        monitor.clear_state()
        update_log.clear()
        print("Saved state and update log deleted")
        return

    try:
        if args.dataset:
            results = monitor.check_specific_datasets(args.dataset)
        else:
            results = monitor.check_all_datasets()
    except SentinelError as e:
        print(f"Fatal: {e}", file=sys.stderr)
        sys.exit(1)

    print("\nResults Summary:")
    print("-" * 70)
    for result in results:
        status = "UPDATED" if result.has_update else "NO CHANGE"
        print(f"  [{status:10}] {result.title}")

    output_path = resolve_path(args.output or settings['reporting']['csv_output'])
    CSVReporter(output_path).export(results)
    print(f"\nResults exported to: {output_path}")

    attempted = len(args.dataset) if args.dataset else len(catalog)
    updated = sum(1 for r in results if r.has_update)
    print(
        f"\nSummary: {updated} updated, {len(results) - updated} unchanged, "
        f"{attempted - len(results)} failed"
    )


if __name__ == '__main__':
    main()
