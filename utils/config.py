"""
Configuration loading from YAML files.
"""

import copy
import os
from pathlib import Path
from typing import Dict

import yaml

DEFAULT_CONFIG_PATH = str(Path(__file__).parent.parent / 'config' / 'config.yaml')

DEFAULT_CONFIG = {
    'columns': [
        {'id': 'col1', 'name': 'ID', 'kind': 'identifier'},
        {'id': 'col2', 'name': 'Grade 1', 'kind': 'grade'},
    ],
    'parser': {
        'skip_blank_lines': False,
    },
    'ranking': {
        'percentile_decimals': 2,
    },
    'export': {
        'csv_filename': 'grade_results.csv',
        'quote_fields': False,
    },
    'api': {
        'host': '0.0.0.0',
        'port': 8000,
        'reload': True,
        'cors_origins': ['http://localhost:5173'],
    },
}


def _merge(base: Dict, override: Dict) -> Dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = DEFAULT_CONFIG_PATH, required: bool = False) -> Dict:
    """
    Load configuration from YAML file, filling gaps with defaults.

    Args:
        config_path: Path to config file
        required: Raise if the file does not exist

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If required and the config file doesn't exist
    """
    if not os.path.exists(config_path):
        if required:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    return _merge(DEFAULT_CONFIG, loaded)
