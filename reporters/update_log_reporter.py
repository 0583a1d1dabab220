"""
Update log reporter - appends update batches to a bounded JSON history.
"""

import json
import os
from typing import List, Dict, Any

from .base_reporter import BaseReporter
from core.errors import PersistenceError
from models.check_result import CheckResult
from utils.date_parser import utc_now_iso


class UpdateLogReporter(BaseReporter):
    """Keeps the most recent update batches in a JSON file."""

    def __init__(self, log_file: str, max_entries: int = 100):
        super().__init__()
        self.log_file = log_file
        self.max_entries = max_entries

    def load(self) -> List[Dict[str, Any]]:
        try:
            if os.path.exists(self.log_file):
                with open(self.log_file, 'r', encoding='utf-8') as f:
                    entries = json.load(f)
                if isinstance(entries, list):
                    return entries
        except (json.JSONDecodeError, IOError) as e:
            self.logger.warning(f"Could not load update log: {e}")
        return []

    def report(self, updates: List[CheckResult]) -> None:
        entries = self.load()
        entries.append({
            'timestamp': utc_now_iso(),
            'updates': [update.to_dict() for update in updates],
        })
        entries = entries[-self.max_entries:]

        try:
            directory = os.path.dirname(self.log_file)
            os.makedirs(directory if directory else '.', exist_ok=True)
            with open(self.log_file, 'w', encoding='utf-8') as f:
                json.dump(entries, f, indent=2, ensure_ascii=False)
        except IOError as e:
            raise PersistenceError(f"Error writing update log: {e}", path=self.log_file) from e

    def recent(self, count: int = 5) -> List[Dict[str, Any]]:
        """The last ``count`` logged batches, oldest first."""
        return self.load()[-count:]

    def clear(self) -> None:
        if os.path.exists(self.log_file):
            os.unlink(self.log_file)
