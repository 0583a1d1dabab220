"""
Utils package - Shared utility functions.
"""

from utils.date_parser import DateParser, utc_now_iso
from utils.logger import setup_logging, setup_logging_from_settings
from utils.id_extractor import extract_dataset_ids, extract_ids_from_html

__all__ = [
    'DateParser',
    'utc_now_iso',
    'setup_logging',
    'setup_logging_from_settings',
    'extract_dataset_ids',
    'extract_ids_from_html',
]
