"""
Utility modules for configuration loading.
"""

from .config import (
    DEFAULT_CONFIG,
    DEFAULT_CONFIG_PATH,
    load_config
)

__all__ = [
    'DEFAULT_CONFIG',
    'DEFAULT_CONFIG_PATH',
    'load_config',
]
