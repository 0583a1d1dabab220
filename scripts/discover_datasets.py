#!/usr/bin/env python3
"""
CLI script for discovering datasets that are not in the curated catalog.

Usage:
    python discover_datasets.py --browser             # Print the browser snippet
    python discover_datasets.py --add ID              # Verify and add one id
    python discover_datasets.py --import new-ids.txt  # Import ids from a text file
    python discover_datasets.py --import-html page.html
    python discover_datasets.py --list                # List discoveries
    python discover_datasets.py --export [FILE]       # Export as a catalog.yaml snippet
    python discover_datasets.py --promote ID          # Move a discovery to the known set
    python discover_datasets.py --stats               # Show statistics
    python discover_datasets.py --verify ID           # Look up one id
"""

import argparse
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.catalog import DatasetCatalog
from core.discovery import DiscoveryRegistry
from core.errors import SentinelError
from core.settings import load_settings, resolve_path
from core.state_manager import DiscoveryStateStore
from handlers.catalog_client import CatalogClient
from utils.id_extractor import BROWSER_EXTRACTION_SCRIPT
from utils.logger import setup_logging_from_settings

CATALOG_LISTING_URL = 'https://open.data.gov.sa/ar/datasets'


def print_browser_script() -> None:
    print("=" * 70)
    print("   Extract dataset ids from the catalog website")
    print("=" * 70)
    print(f"\n1. Open {CATALOG_LISTING_URL} and page through the listing")
    print("2. Open the browser developer tools (F12) and go to the Console tab")
    print("3. Paste the snippet below and press Enter:\n")
    print("-" * 70)
    print(BROWSER_EXTRACTION_SCRIPT)
    print("-" * 70)
    print("\n4. The ids are copied to the clipboard; save them to a file")
    print("5. Run: python scripts/discover_datasets.py --import new-ids.txt\n")


def print_discovered(registry: DiscoveryRegistry) -> None:
    discovered = registry.list_discovered()

    print("\nDiscovered Datasets:")
    print("-" * 50)
    if not discovered:
        print("  None yet. Start with: python scripts/discover_datasets.py --browser")
        return

    for index, dataset in enumerate(discovered, start=1):
        print(f"{index}. {dataset.title}")
        print(f"   ID:         {dataset.id}")
        print(f"   Provider:   {dataset.provider_name or 'N/A'}")
        print(f"   Source:     {dataset.source.value}")
        print(f"   Discovered: {dataset.discovered_at}")
        print()

    print(f"Total: {len(discovered)} discovered dataset(s)")


def print_stats(registry: DiscoveryRegistry) -> None:
    stats = registry.get_stats()

    print("\nDiscovery Statistics:")
    print("-" * 50)
    print(f"  Known datasets:      {stats['known_count']}")
    print(f"  Discovered datasets: {stats['discovered_count']}")
    print(f"  Total:               {stats['total_count']}")
    print(f"  Last discovery:      {stats['last_discovery'] or 'never'}")
    print(f"  Last probe:          {stats['last_probe'] or 'never'}")

    if stats['by_provider']:
        print("\n  Discoveries by provider:")
        for provider, count in sorted(stats['by_provider'].items()):
            print(f"    - {provider}: {count}")


def verify_id(registry: DiscoveryRegistry, dataset_id: str) -> None:
    dataset_id = dataset_id.strip().lower()
    print(f"\nVerifying: {dataset_id}\n")
    metadata = registry.verify_candidate(dataset_id)
    if metadata is None:
        print("No dataset found for this id")
        return

    print("Dataset is valid:")
    print(f"  Title (ar):       {metadata.title_ar or 'N/A'}")
    print(f"  Title (en):       {metadata.title_en or 'N/A'}")
    print(f"  Provider:         {metadata.provider_name or 'N/A'}")
    print(f"  Created:          {metadata.created_at or 'N/A'}")
    print(f"  Last updated:     {metadata.updated_at or 'N/A'}")
    print(f"  Update frequency: {metadata.update_frequency or 'N/A'}")

    if registry.is_known(dataset_id):
        print("\nThis dataset is already in the known set")


def main():
    parser = argparse.ArgumentParser(
        description='Open Data Sentinel - Dataset Discovery Tool'
    )
    commands = parser.add_mutually_exclusive_group(required=True)
    commands.add_argument('--browser', '-b', action='store_true',
                          help='Print a browser snippet that extracts ids from the website')
    commands.add_argument('--add', metavar='ID', help='Verify and add one dataset id')
    commands.add_argument('--import', dest='import_file', metavar='FILE',
                          help='Import every id found in a text file')
    commands.add_argument('--import-html', metavar='FILE',
                          help='Import ids linked from a saved catalog listing page')
    commands.add_argument('--list', '-l', action='store_true', help='List discovered datasets')
    commands.add_argument('--export', '-e', nargs='?', const='-', metavar='FILE',
                          help='Export verified discoveries as a catalog.yaml snippet')
    commands.add_argument('--promote', metavar='ID', help='Move a discovered dataset into the known set')
    commands.add_argument('--stats', '-s', action='store_true', help='Show discovery statistics')
    commands.add_argument('--verify', metavar='ID', help='Check whether a dataset id exists')
    parser.add_argument('--settings', type=str, help='Path to settings.yaml')
    parser.add_argument('--catalog', type=str, help='Path to catalog.yaml')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    args = parser.parse_args()

    if args.browser:
        print_browser_script()
        return

    settings = load_settings(args.settings)
    setup_logging_from_settings(settings, verbose=args.verbose)

    registry = DiscoveryRegistry(
        catalog=DatasetCatalog.from_yaml(args.catalog),
        client=CatalogClient(settings),
        store=DiscoveryStateStore(resolve_path(settings['discovery']['state_file'])),
        settings=settings
    )

    try:
        if args.add:
            result = registry.add_manual_discovery(args.add)
            if result:
                print(f"\nNew dataset discovered: {result.title}")
                print(f"  Provider: {result.provider_name or 'N/A'}")
                print(f"  Update frequency: {result.update_frequency or 'N/A'}")
            else:
                print("\nNothing added (already known, already discovered, or not found)")

        elif args.import_file or args.import_html:
            path = args.import_file or args.import_html
            if not os.path.exists(path):
                print(f"File not found: {path}", file=sys.stderr)
                sys.exit(1)
            if args.import_file:
                added = registry.import_from_file(path)
            else:
                added = registry.import_from_html(path)
            print(f"\nAdded {len(added)} new dataset(s)")

        elif args.list:
            print_discovered(registry)

        elif args.export:
            snippet = registry.export_as_code()
            if args.export == '-':
                print(snippet)
            else:
                with open(args.export, 'w', encoding='utf-8') as f:
                    f.write(snippet)
                print(f"Exported to: {args.export}")

        elif args.promote:
            if registry.promote_discovered(args.promote):
                print(f"Promoted {args.promote} to the known set")
            else:
                print(f"{args.promote} is not a discovered dataset")

        elif args.stats:
            print_stats(registry)

        elif args.verify:
            verify_id(registry, args.verify)

    except SentinelError as e:
        print(f"Fatal: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
