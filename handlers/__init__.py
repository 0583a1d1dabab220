"""
Handlers package - Catalog metadata clients.
"""

from handlers.base_handler import BaseCatalogClient
from handlers.catalog_client import CatalogClient

__all__ = [
    'BaseCatalogClient',
    'CatalogClient',
]
