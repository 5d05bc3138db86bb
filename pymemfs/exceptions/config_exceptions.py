"""
Configuration Exceptions

Raised when a configuration file cannot be read or contains values of
the wrong shape.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any

from .fs_exceptions import MemFSException, ErrorKind


class ConfigError(MemFSException):
    """
    Configuration loading or validation failed.
    
    Example:
        >>> raise ConfigError("Invalid configuration key: foo.bar", key="foo.bar")
    """
    
    kind = ErrorKind.CONFIG
    
    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(
            message=message,
            path=config_path,
            error_code=5100,
            context=ctx
        )
        self.key = key
