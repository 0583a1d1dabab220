"""
Abstract base for catalog metadata clients.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
import logging

from models.metadata import DatasetMetadata


class BaseCatalogClient(ABC):
    """Abstract base class for single-dataset metadata lookups."""

    def __init__(self, settings: Dict[str, Any] = None):
        """
        Initialize client with application settings.

        Args:
            settings: Settings dictionary (``catalog`` and ``http`` sections are read)
        """
        self.settings = settings or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def fetch_metadata(self, dataset_id: str) -> DatasetMetadata:
        """
        Fetch metadata for one dataset.

        Args:
            dataset_id: Catalog identifier

        Returns:
            DatasetMetadata

        Raises:
            NotFoundError: No usable metadata for the identifier
            CatalogNetworkError: Transport failure (CatalogTimeoutError on timeout)
        """
        pass

    @abstractmethod
    def get_method_name(self) -> str:
        """
        Get the name of the retrieval method.

        Returns:
            String identifier for this client
        """
        pass
