"""
Abstract base reporter for update notifications.
"""

from abc import ABC, abstractmethod
from typing import List, Iterable
import logging

from models.check_result import CheckResult


class BaseReporter(ABC):
    """Receives the list of datasets whose upstream metadata changed."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def report(self, updates: List[CheckResult]) -> None:
        """
        Deliver a batch of detected updates.

        Args:
            updates: Results with ``has_update`` set, never empty
        """
        pass


class MultiReporter(BaseReporter):
    """Fans one batch out to several reporters in order."""

    def __init__(self, reporters: Iterable[BaseReporter]):
        super().__init__()
        self.reporters = list(reporters)

    def report(self, updates: List[CheckResult]) -> None:
        """Deliver to every reporter; a failing reporter is logged and skipped."""
        for reporter in self.reporters:
            try:
                reporter.report(updates)
            except Exception as e:
                self.logger.error(f"{reporter.__class__.__name__} failed: {type(e).__name__}: {e}")
