"""
Models package - Data classes for the application.
"""

from models.dataset import DatasetEntry
from models.metadata import DatasetMetadata
from models.check_result import CheckResult
from models.tracking_record import DatasetTrackingRecord, UpdateFrequency
from models.discovered_dataset import DiscoveredDataset, DiscoveryState, DiscoverySource

__all__ = [
    'DatasetEntry',
    'DatasetMetadata',
    'CheckResult',
    'DatasetTrackingRecord',
    'UpdateFrequency',
    'DiscoveredDataset',
    'DiscoveryState',
    'DiscoverySource',
]
