"""Utility modules for spoon."""

from .config_manager import ConfigManager
from .naming import apply_prefix, has_prefix, remove_prefix

__all__ = [
    'ConfigManager',
    'apply_prefix',
    'has_prefix',
    'remove_prefix',
]
