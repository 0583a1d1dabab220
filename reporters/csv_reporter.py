"""
CSV reporter - exports check results to a CSV file.
"""

import csv
import os
from typing import List

from .base_reporter import BaseReporter
from models.check_result import CheckResult

FIELDNAMES = [
    'dataset_id',
    'title',
    'provider_name',
    'status',
    'previous_update',
    'current_update',
    'check_time',
]


class CSVReporter(BaseReporter):
    """Writes update batches to a CSV file, overwriting it each time."""

    def __init__(self, output_path: str):
        super().__init__()
        self.output_path = output_path

    def report(self, updates: List[CheckResult]) -> None:
        self.export(updates)

    def export(self, results: List[CheckResult]) -> str:
        """
        Export results to the CSV file.

        Args:
            results: List of CheckResult objects, changed or not

        Returns:
            Path to the created CSV file
        """
        directory = os.path.dirname(self.output_path)
        os.makedirs(directory if directory else '.', exist_ok=True)

        with open(self.output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
            writer.writeheader()

            for result in results:
                writer.writerow({
                    'dataset_id': result.dataset_id,
                    'title': result.title,
                    'provider_name': result.provider_name or '',
                    'status': result.status,
                    'previous_update': result.previous_update or '',
                    'current_update': result.current_update or '',
                    'check_time': result.check_time.isoformat() if result.check_time else '',
                })

        self.logger.info(f"Results exported to: {self.output_path}")
        return self.output_path
