"""
Pytest configuration and fixtures.
"""

import pytest
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.catalog import DatasetCatalog
from core.errors import NotFoundError
from core.settings import DEFAULT_SETTINGS, _merge
from core.state_manager import MonitorStateStore, DiscoveryStateStore
from handlers.base_handler import BaseCatalogClient
from models.dataset import DatasetEntry
from models.metadata import DatasetMetadata

DATASET_A = '1e7e8621-fd39-42fb-b78f-3c50b0be4f2e'
DATASET_B = '5948497a-d84f-45a4-944c-50c59cff9629'
DATASET_C = 'ad218919-2014-4917-a85d-d4ec1a43c050'
NEW_DATASET_1 = 'aaaaaaaa-1111-4222-8333-bbbbbbbbbbbb'
NEW_DATASET_2 = 'cccccccc-4444-4555-8666-dddddddddddd'


def make_payload(dataset_id, updated_at='2025-01-01', title=None, frequency='MONTHLY'):
    return {
        'id': dataset_id,
        'titleAr': title or f'Dataset {dataset_id[:8]}',
        'titleEn': f'Dataset {dataset_id[:8]} (en)',
        'providerNameAr': 'Real Estate General Authority',
        'updateFrequency': frequency,
        'createdAt': '2024-01-01',
        'updatedAt': updated_at,
    }


class FakeCatalogClient(BaseCatalogClient):
    """In-memory client; values are payload dicts or exceptions to raise."""

    def __init__(self, payloads=None):
        super().__init__()
        self.payloads = dict(payloads or {})
        self.calls = []

    def get_method_name(self) -> str:
        return "fake"

    def fetch_metadata(self, dataset_id: str) -> DatasetMetadata:
        self.calls.append(dataset_id)
        value = self.payloads.get(dataset_id)
        if isinstance(value, Exception):
            raise value
        if not value:
            raise NotFoundError(f"No metadata found for dataset {dataset_id}", dataset_id)
        return DatasetMetadata.from_dict(value, dataset_id=dataset_id)


@pytest.fixture
def settings():
    """Default settings with no delay between requests."""
    return _merge(DEFAULT_SETTINGS, {
        'monitor': {'delay_between_requests': 0},
        'discovery': {'delay_between_requests': 0},
    })


@pytest.fixture
def catalog():
    """Three-entry catalog for testing."""
    return DatasetCatalog([
        DatasetEntry(id=DATASET_A, title='Regional real estate index', category='Real estate'),
        DatasetEntry(id=DATASET_B, title='Real estate transactions Q3', category='Real estate'),
        DatasetEntry(id=DATASET_C, title='Real estate transactions Q2', category='Auctions'),
    ])


@pytest.fixture
def fake_client():
    return FakeCatalogClient({
        DATASET_A: make_payload(DATASET_A),
        DATASET_B: make_payload(DATASET_B),
        DATASET_C: make_payload(DATASET_C),
    })


@pytest.fixture
def monitor_store(tmp_path):
    return MonitorStateStore(str(tmp_path / 'state' / 'dataset_update_state.json'))


@pytest.fixture
def discovery_store(tmp_path):
    return DiscoveryStateStore(str(tmp_path / 'state' / 'discovery_state.json'))
