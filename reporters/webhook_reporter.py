"""
Webhook reporter - POSTs detected updates to an HTTP endpoint.
"""

import requests
from typing import List, Dict, Any

from .base_reporter import BaseReporter
from models.check_result import CheckResult
from utils.date_parser import utc_now_iso


class WebhookReporter(BaseReporter):
    """Sends each update batch as one JSON payload."""

    def __init__(self, url: str, source_name: str = 'Saudi Open Data Monitor', timeout: int = 30):
        super().__init__()
        self.url = url
        self.source_name = source_name
        self.timeout = timeout

    def build_payload(self, updates: List[CheckResult]) -> Dict[str, Any]:
        return {
            'source': self.source_name,
            'timestamp': utc_now_iso(),
            'updates': [
                {
                    'id': update.dataset_id,
                    'title': update.title,
                    'provider': update.provider_name,
                    'previousUpdate': update.previous_update,
                    'newUpdate': update.current_update,
                }
                for update in updates
            ],
        }

    def report(self, updates: List[CheckResult]) -> None:
        # Delivery is best effort; a failed POST is logged, never raised.
        try:
            response = requests.post(
                self.url,
                json=self.build_payload(updates),
                timeout=self.timeout
            )
            response.raise_for_status()
            self.logger.info(f"Webhook delivered {len(updates)} update(s) to {self.url}")
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Webhook delivery failed: {e}")
