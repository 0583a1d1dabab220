"""
Tests for the discovery CLI helpers.
"""

import pytest
import os
import sys

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT_DIR)
sys.path.insert(0, os.path.join(ROOT_DIR, 'scripts'))

from conftest import FakeCatalogClient, make_payload, DATASET_A
from core.discovery import DiscoveryRegistry
from discover_datasets import verify_id


class TestVerifyId:

    def test_uppercase_known_id_is_reported_known(self, catalog, discovery_store, settings, capsys):
        client = FakeCatalogClient({DATASET_A: make_payload(DATASET_A)})
        registry = DiscoveryRegistry(catalog, client, discovery_store, settings)

        verify_id(registry, DATASET_A.upper())

        output = capsys.readouterr().out
        assert 'Dataset is valid' in output
        assert 'already in the known set' in output
        assert client.calls == [DATASET_A]

    def test_unknown_id(self, catalog, discovery_store, settings, capsys):
        registry = DiscoveryRegistry(catalog, FakeCatalogClient(), discovery_store, settings)

        verify_id(registry, 'ffffffff-0000-4000-8000-000000000000')

        assert 'No dataset found' in capsys.readouterr().out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
