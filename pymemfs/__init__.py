"""
pymemfs - An in-memory hierarchical file store

Reproduces the observable behaviour of host file APIs (paths,
directories, open flags, offset reads and writes, seeking, directory
listing, temporary files) so code can be exercised without touching
real storage. Implemented in Python 3.10+ using only the standard
library.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .filesystem import (
    MemFS,
    FileHandle,
    OpenFlag,
    FileInfo,
    DirEntry,
    Whence,
)
from .exceptions import (
    ErrorKind,
    MemFSException,
    InvalidPathError,
    NotExistError,
    AlreadyExistsError,
    ClosedError,
    StaleHandleError,
    EndOfDataError,
    ConfigError,
)

__all__ = [
    'MemFS',
    'FileHandle',
    'OpenFlag',
    'FileInfo',
    'DirEntry',
    'Whence',
    'ErrorKind',
    'MemFSException',
    'InvalidPathError',
    'NotExistError',
    'AlreadyExistsError',
    'ClosedError',
    'StaleHandleError',
    'EndOfDataError',
    'ConfigError',
]
