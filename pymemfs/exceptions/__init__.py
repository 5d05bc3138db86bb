"""
pymemfs Exception Hierarchy

All exceptions inherit from MemFSException. Each one carries an
ErrorKind so failures can be classified without inspecting messages.

Architecture:
    MemFSException (Base)
    ├── InvalidPathError
    ├── NotExistError          (also builtins.FileNotFoundError)
    ├── AlreadyExistsError     (also builtins.FileExistsError)
    ├── ClosedError
    ├── StaleHandleError
    ├── EndOfDataError         (also builtins.EOFError)
    └── ConfigError
"""

from .fs_exceptions import (
    ErrorKind,
    MemFSException,
    InvalidPathError,
    NotExistError,
    AlreadyExistsError,
    ClosedError,
    StaleHandleError,
    EndOfDataError,
)

from .config_exceptions import ConfigError

__all__ = [
    "ErrorKind",
    "MemFSException",
    "InvalidPathError",
    "NotExistError",
    "AlreadyExistsError",
    "ClosedError",
    "StaleHandleError",
    "EndOfDataError",
    "ConfigError",
]
