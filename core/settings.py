"""
Settings loader - YAML settings merged over defaults, with .env overrides.
"""

import copy
import logging
import os
from typing import Dict, Any

import yaml
from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_SETTINGS_PATH = os.path.join(BASE_DIR, 'config', 'settings.yaml')

DEFAULT_SETTINGS: Dict[str, Any] = {
    'catalog': {
        'base_url': 'https://open.data.gov.sa/data/api',
        'api_version': -1,
    },
    'http': {
        'timeout': 30,
        'user_agent': 'OpenData-Sentinel/1.0',
    },
    'monitor': {
        'state_file': 'state/dataset_update_state.json',
        'delay_between_requests': 0.5,
        'concurrency_limit': 3,
    },
    'discovery': {
        'state_file': 'state/discovery_state.json',
        'delay_between_requests': 0.5,
    },
    'reporting': {
        'update_log_file': 'state/update_log.json',
        'max_log_entries': 100,
        'csv_output': 'output.csv',
        'webhook_url': None,
        'source_name': 'Saudi Open Data Monitor',
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'file': None,
    },
}

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    'CATALOG_BASE_URL': ('catalog', 'base_url'),
    'SENTINEL_WEBHOOK_URL': ('reporting', 'webhook_url'),
    'SENTINEL_LOG_LEVEL': ('logging', 'level'),
}

logger = logging.getLogger('Settings')


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path: str = None, use_env: bool = True) -> Dict[str, Any]:
    """
    Load application settings.

    Args:
        path: Path to settings.yaml (defaults to config/settings.yaml)
        use_env: Apply .env / environment variable overrides

    Returns:
        Settings dictionary with every default section present
    """
    if path is None:
        path = DEFAULT_SETTINGS_PATH

    file_settings: Dict[str, Any] = {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            file_settings = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Settings file not found: {path}, using defaults")
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML file {path}: {e}")

    settings = _merge(DEFAULT_SETTINGS, file_settings)

    if use_env:
        load_dotenv()
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                settings[section][key] = value

    return settings


def resolve_path(path: str) -> str:
    """Resolve a settings path relative to the project root."""
    if os.path.isabs(path):
        return path
    return os.path.join(BASE_DIR, path)
