"""
pymemfs Core Module

Configuration shared by the store and its logging.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    FilesystemConfig,
    LoggingConfig,
    get_config,
)

__all__ = [
    'ConfigLoader',
    'Config',
    'FilesystemConfig',
    'LoggingConfig',
    'get_config',
]
