"""
Catalog API client.
Looks up a single dataset's metadata on the open data platform.
"""

import requests
from typing import Dict, Any

from .base_handler import BaseCatalogClient
from core.errors import NotFoundError, CatalogNetworkError, CatalogTimeoutError
from models.metadata import DatasetMetadata


class CatalogClient(BaseCatalogClient):
    """Client for the catalog's per-identifier lookup endpoint."""

    def __init__(self, settings: Dict[str, Any] = None):
        super().__init__(settings)
        catalog_settings = self.settings.get('catalog', {})
        self.base_url = catalog_settings.get(
            'base_url', 'https://open.data.gov.sa/data/api'
        ).rstrip('/')
        self.api_version = catalog_settings.get('api_version', -1)

    def get_method_name(self) -> str:
        return "api"

    def build_url(self) -> str:
        return f"{self.base_url}/datasets"

    def fetch_metadata(self, dataset_id: str) -> DatasetMetadata:
        """
        Perform one lookup. No retries; callers own the retry policy.

        Args:
            dataset_id: Catalog identifier

        Returns:
            DatasetMetadata decoded from the response
        """
        http_settings = self.settings.get('http', {})
        timeout = http_settings.get('timeout', 30)
        user_agent = http_settings.get('user_agent', 'OpenData-Sentinel/1.0')

        headers = {
            'User-Agent': user_agent,
            'Accept': 'application/json'
        }
        params = {
            'version': self.api_version,
            'dataset': dataset_id,
        }

        self.logger.debug(f"Fetching metadata for {dataset_id}")
        try:
            response = requests.get(
                self.build_url(),
                params=params,
                headers=headers,
                timeout=timeout
            )
        except requests.exceptions.Timeout as e:
            raise CatalogTimeoutError(
                f"Timed out after {timeout}s fetching {dataset_id}", dataset_id
            ) from e
        except requests.exceptions.RequestException as e:
            raise CatalogNetworkError(f"Request failed for {dataset_id}: {e}", dataset_id) from e

        if not 200 <= response.status_code < 300:
            raise NotFoundError(
                f"HTTP {response.status_code} for dataset {dataset_id}", dataset_id
            )

        try:
            data = response.json()
        except ValueError as e:
            raise NotFoundError(f"Invalid JSON for dataset {dataset_id}", dataset_id) from e

        if not data or not isinstance(data, dict):
            raise NotFoundError(f"No metadata found for dataset {dataset_id}", dataset_id)

        return DatasetMetadata.from_dict(data, dataset_id=dataset_id)
