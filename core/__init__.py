"""
Core package - Contains main business logic.
"""

from core.errors import (
    SentinelError,
    CatalogError,
    NotFoundError,
    CatalogNetworkError,
    CatalogTimeoutError,
    PersistenceError,
)
from core.settings import load_settings
from core.catalog import DatasetCatalog
from core.state_manager import MonitorStateStore, DiscoveryStateStore
from core.monitor import DatasetMonitor, get_expected_updates, update_frequency_to_days
from core.discovery import DiscoveryRegistry

__version__ = "1.0.0"

__all__ = [
    'SentinelError',
    'CatalogError',
    'NotFoundError',
    'CatalogNetworkError',
    'CatalogTimeoutError',
    'PersistenceError',
    'load_settings',
    'DatasetCatalog',
    'MonitorStateStore',
    'DiscoveryStateStore',
    'DatasetMonitor',
    'get_expected_updates',
    'update_frequency_to_days',
    'DiscoveryRegistry',
]
