"""
Date Parser utility for catalog timestamps.
"""

import re
from datetime import datetime, timezone
from typing import Optional, Union
import logging

from dateutil import parser as dateutil_parser


class DateParser:
    """Parses the timestamp strings the catalog and the state files carry."""

    def __init__(self):
        self.logger = logging.getLogger('DateParser')

    def parse(self, value: Union[str, int, float, None]) -> Optional[datetime]:
        """
        Parse a timestamp into a timezone-aware datetime.

        Naive values are taken to be UTC. Unix timestamps in seconds or
        milliseconds are accepted.

        Args:
            value: Timestamp string or number

        Returns:
            datetime in UTC or None if parsing fails
        """
        if value is None or value == '':
            return None

        if isinstance(value, (int, float)):
            return self._from_unix(value)

        value = ' '.join(str(value).split())
        if re.fullmatch(r'\d{10}(\d{3})?(\.\d+)?', value):
            return self._from_unix(float(value))

        try:
            parsed = dateutil_parser.isoparse(value)
        except (ValueError, OverflowError):
            try:
                parsed = dateutil_parser.parse(value)
            except (ValueError, OverflowError, TypeError):
                self.logger.debug(f"Could not parse date: {value}")
                return None

        return self.to_utc(parsed)

    def _from_unix(self, value: float) -> Optional[datetime]:
        try:
            if value > 1e12:
                value = value / 1000
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            return None

    @staticmethod
    def to_utc(dt: datetime) -> datetime:
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    def days_since(self, value: Union[str, int, float, None], now: datetime = None) -> Optional[float]:
        """Elapsed days between ``value`` and ``now`` (defaults to the current UTC time)."""
        parsed = self.parse(value)
        if parsed is None:
            return None
        if now is None:
            now = datetime.now(timezone.utc)
        return (self.to_utc(now) - parsed).total_seconds() / 86400


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()
