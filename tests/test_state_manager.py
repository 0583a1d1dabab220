"""
Tests for the JSON state stores.
"""

import pytest
import os
import sys
import json
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.errors import PersistenceError
from core.state_manager import MonitorStateStore, DiscoveryStateStore
from models.discovered_dataset import DiscoveredDataset, DiscoveryState, DiscoverySource
from models.tracking_record import DatasetTrackingRecord, UpdateFrequency


def make_record(dataset_id='test_id', last_known_update='2025-01-15'):
    return DatasetTrackingRecord(
        id=dataset_id,
        title='Test dataset',
        last_known_update=last_known_update,
        last_checked='2025-01-16T08:00:00+00:00',
        provider_name='Provider',
        update_frequency=UpdateFrequency.WEEKLY,
    )


class TestMonitorStateStore:
    """Tests for MonitorStateStore."""

    def test_save_and_load(self, tmp_path):
        state_file = str(tmp_path / 'state.json')
        store = MonitorStateStore(state_file)
        store.put_record(make_record())
        store.save()

        reloaded = MonitorStateStore(state_file)
        record = reloaded.get_record('test_id')

        assert record is not None
        assert record.last_known_update == '2025-01-15'
        assert record.update_frequency == UpdateFrequency.WEEKLY

    def test_document_is_a_json_array(self, tmp_path):
        state_file = str(tmp_path / 'state.json')
        store = MonitorStateStore(state_file)
        store.put_record(make_record('a'))
        store.put_record(make_record('b'))
        store.save()

        with open(state_file, encoding='utf-8') as f:
            document = json.load(f)

        assert isinstance(document, list)
        assert [item['id'] for item in document] == ['a', 'b']

    def test_put_does_not_write(self, tmp_path):
        state_file = str(tmp_path / 'state.json')
        store = MonitorStateStore(state_file)
        store.put_record(make_record())

        assert not os.path.exists(state_file)

    def test_get_nonexistent_record(self, tmp_path):
        store = MonitorStateStore(str(tmp_path / 'state.json'))
        assert store.get_record('nonexistent') is None

    def test_corrupt_file_starts_fresh(self, tmp_path):
        state_file = tmp_path / 'state.json'
        state_file.write_text('{not json', encoding='utf-8')

        store = MonitorStateStore(str(state_file))
        assert store.get_all_records() == []

    def test_write_failure_raises_persistence_error(self, tmp_path):
        store = MonitorStateStore(str(tmp_path / 'state.json'))
        store.put_record(make_record())

        with patch('core.state_manager.os.replace', side_effect=OSError('disk full')):
            with pytest.raises(PersistenceError):
                store.save()

        assert not os.path.exists(store.state_file)
        assert [p for p in os.listdir(tmp_path) if p.endswith('.tmp')] == []

    def test_clear(self, tmp_path):
        store = MonitorStateStore(str(tmp_path / 'state.json'))
        store.put_record(make_record())
        store.save()

        store.clear()

        assert store.get_all_records() == []
        assert not os.path.exists(store.state_file)


class TestDiscoveryStateStore:
    """Tests for DiscoveryStateStore."""

    def test_load_seeds_when_missing(self, tmp_path):
        store = DiscoveryStateStore(str(tmp_path / 'discovery.json'))
        state = store.load(seed_ids=['a', 'b'])

        assert state.known_dataset_ids == ['a', 'b']
        assert state.discovered_datasets == []
        assert state.last_probe_time is None

    def test_round_trip(self, tmp_path):
        store = DiscoveryStateStore(str(tmp_path / 'discovery.json'))
        state = DiscoveryState(
            known_dataset_ids=['a'],
            discovered_datasets=[DiscoveredDataset(
                id='b',
                title='العنوان',
                discovered_at='2025-01-01T00:00:00+00:00',
                source=DiscoverySource.SCRAPE,
                verified=True,
            )],
            last_discovery_time='2025-01-01T00:00:00+00:00',
        )
        store.save(state)

        loaded = store.load(seed_ids=['ignored'])

        assert loaded.known_dataset_ids == ['a']
        assert loaded.discovered_datasets[0].source == DiscoverySource.SCRAPE
        assert loaded.discovered_datasets[0].title == 'العنوان'

        with open(store.state_file, encoding='utf-8') as f:
            assert 'العنوان' in f.read()

    def test_bad_discovered_record_does_not_drop_state(self, tmp_path):
        state_file = tmp_path / 'discovery.json'
        state_file.write_text(json.dumps({
            'known_dataset_ids': ['a', 'promoted'],
            'discovered_datasets': [
                {'id': 'b', 'title': 'First', 'source': 'Manual', 'verified': True},
                {'id': 'c', 'title': 'Second', 'source': 'guessed', 'verified': True},
                {'title': 'No id'},
                'not a record',
            ],
        }), encoding='utf-8')

        loaded = DiscoveryStateStore(str(state_file)).load(seed_ids=['seed'])

        assert loaded.known_dataset_ids == ['a', 'promoted']
        assert [d.id for d in loaded.discovered_datasets] == ['b', 'c']
        assert loaded.discovered_datasets[0].source == DiscoverySource.MANUAL
        assert loaded.discovered_datasets[1].source == DiscoverySource.MANUAL


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
