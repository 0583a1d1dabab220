"""
Reporters package - Sinks that receive detected dataset updates.
"""

from reporters.base_reporter import BaseReporter, MultiReporter
from reporters.console_reporter import ConsoleReporter
from reporters.csv_reporter import CSVReporter
from reporters.update_log_reporter import UpdateLogReporter
from reporters.webhook_reporter import WebhookReporter

__all__ = [
    'BaseReporter',
    'MultiReporter',
    'ConsoleReporter',
    'CSVReporter',
    'UpdateLogReporter',
    'WebhookReporter',
]
