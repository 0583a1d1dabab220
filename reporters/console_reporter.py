"""
Console reporter - the default update sink.
"""

from typing import List

from .base_reporter import BaseReporter
from models.check_result import CheckResult


class ConsoleReporter(BaseReporter):
    """Writes detected updates to the log."""

    def report(self, updates: List[CheckResult]) -> None:
        self.logger.info(f"Detected {len(updates)} dataset update(s)")
        for update in updates:
            self.logger.info(
                f"{update.title} | provider: {update.provider_name or 'N/A'} | "
                f"previous: {update.previous_update or 'unknown'} | "
                f"current: {update.current_update}"
            )
