"""Utilities for containerdev."""

from .config_manager import ConfigManager, default_config_path

__all__ = [
    'ConfigManager',
    'default_config_path'
]
