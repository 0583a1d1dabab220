"""
Tests for the catalog, settings and model helpers.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.catalog import DatasetCatalog
from core.settings import load_settings, resolve_path, BASE_DIR
from models.dataset import DatasetEntry
from models.discovered_dataset import DiscoverySource
from models.tracking_record import UpdateFrequency


class TestDatasetCatalog:
    """Tests for DatasetCatalog."""

    def test_from_yaml(self, tmp_path):
        path = tmp_path / 'catalog.yaml'
        path.write_text(
            "datasets:\n"
            "  - id: 4B7B45CB-E8B2-4864-A80D-6D9110865B99\n"
            "    title: Freelance work\n"
            "    category: Freelance\n"
            "  - id: 3a3ea3cc-dbf3-4d69-99db-a5c2f0165ae6\n"
            "    title: Endowment assets\n",
            encoding='utf-8'
        )

        catalog = DatasetCatalog.from_yaml(str(path))

        assert len(catalog) == 2
        assert catalog.list_ids()[0] == '4b7b45cb-e8b2-4864-a80d-6d9110865b99'
        assert '3a3ea3cc-dbf3-4d69-99db-a5c2f0165ae6' in catalog
        assert catalog.count_by_category() == {'Freelance': 1, 'Uncategorized': 1}

    def test_bundled_catalog_loads(self):
        catalog = DatasetCatalog.from_yaml()
        assert len(catalog) > 0

    def test_duplicates_ignored(self):
        catalog = DatasetCatalog([
            DatasetEntry(id='a', title='First'),
            DatasetEntry(id='a', title='Second'),
        ])
        assert len(catalog) == 1
        assert catalog.get_dataset('a').title == 'First'

    def test_independent_instances(self):
        first = DatasetCatalog.from_ids(['a'])
        second = DatasetCatalog.from_ids(['b'])
        assert first.list_ids() == ['a']
        assert second.list_ids() == ['b']


class TestSettings:
    """Tests for settings loading."""

    def test_defaults_fill_missing_sections(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text("monitor:\n  delay_between_requests: 2\n", encoding='utf-8')

        settings = load_settings(str(path), use_env=False)

        assert settings['monitor']['delay_between_requests'] == 2
        assert settings['monitor']['concurrency_limit'] == 3
        assert settings['catalog']['base_url'] == 'https://open.data.gov.sa/data/api'

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(str(tmp_path / 'missing.yaml'), use_env=False)
        assert settings['http']['timeout'] == 30

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv('CATALOG_BASE_URL', 'https://mirror.example.com/api')
        settings = load_settings(str(tmp_path / 'missing.yaml'))
        assert settings['catalog']['base_url'] == 'https://mirror.example.com/api'

    def test_resolve_path(self):
        assert resolve_path('state/x.json') == os.path.join(BASE_DIR, 'state/x.json')
        assert resolve_path('/tmp/x.json') == '/tmp/x.json'


class TestEnums:

    def test_update_frequency_from_label(self):
        assert UpdateFrequency.from_label('monthly') == UpdateFrequency.MONTHLY
        assert UpdateFrequency.from_label('Real-Time') == UpdateFrequency.REAL_TIME
        assert UpdateFrequency.from_label('sometimes') == UpdateFrequency.UNKNOWN
        assert UpdateFrequency.from_label(None) == UpdateFrequency.UNKNOWN

    def test_discovery_source_values(self):
        assert {s.value for s in DiscoverySource} == {'manual', 'probe', 'scrape'}


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
