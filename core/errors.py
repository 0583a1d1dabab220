"""
Exception types raised by the catalog client and the state stores.
"""

from typing import Optional


class SentinelError(Exception):
    """Base class for all errors raised by this package."""


class CatalogError(SentinelError):
    """A single-dataset lookup against the catalog failed."""

    def __init__(self, message: str, dataset_id: Optional[str] = None):
        super().__init__(message)
        self.dataset_id = dataset_id


class NotFoundError(CatalogError):
    """The catalog returned no usable metadata for the identifier."""


class CatalogNetworkError(CatalogError):
    """Transport-level failure talking to the catalog."""


class CatalogTimeoutError(CatalogNetworkError):
    """The catalog did not answer within the configured timeout."""


class PersistenceError(SentinelError):
    """A state document could not be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
