"""
Filesystem Exceptions

Exceptions raised by the in-memory store, its handles and its path
resolution. Every exception carries an ErrorKind so callers can classify
failures without matching on message text.

Author: YSNRFD
Version: 1.0.0
"""

import builtins
from enum import Enum
from typing import Optional, Any


class ErrorKind(Enum):
    """Classification of store failures."""
    INVALID_PATH = "invalid_path"
    NOT_EXIST = "not_exist"
    ALREADY_EXISTS = "already_exists"
    CLOSED = "closed"
    STALE = "stale"
    END_OF_DATA = "end_of_data"
    CONFIG = "config"


class MemFSException(Exception):
    """
    Base exception for all store errors.
    
    Attributes:
        message: Human-readable error description
        path: Path or handle name associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        kind: ErrorKind classifying the failure
        context: Additional context about the error
    """
    
    kind: ErrorKind = ErrorKind.INVALID_PATH
    
    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 5000
        self.context = context or {}
        if path:
            self.context["path"] = path
    
    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"path={self.path!r}, "
            f"error_code={self.error_code})"
        )


class InvalidPathError(MemFSException):
    """
    The path or the requested operation is invalid.
    
    Raised for malformed path text, a non-directory intermediate path
    component, negative offsets, a disallowed flag combination, and
    removal of a non-empty directory.
    
    Example:
        >>> raise InvalidPathError("/a/file/b", reason="not a directory")
    """
    
    kind = ErrorKind.INVALID_PATH
    
    def __init__(
        self,
        path: Optional[str],
        reason: str = "invalid path",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(
            message=f"{reason}: {path}",
            path=path,
            error_code=5001,
            context=ctx
        )
        self.reason = reason


class NotExistError(MemFSException, builtins.FileNotFoundError):
    """
    The path does not exist.
    
    Example:
        >>> raise NotExistError("/missing/file")
    """
    
    kind = ErrorKind.NOT_EXIST
    
    def __init__(
        self,
        path: Optional[str],
        reason: str = "path does not exist",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(
            message=f"{reason}: {path}",
            path=path,
            error_code=5002,
            context=ctx
        )
        self.reason = reason


class AlreadyExistsError(MemFSException, builtins.FileExistsError):
    """
    The path already exists.
    
    Raised by exclusive creates and by mkdir over an existing entry.
    """
    
    kind = ErrorKind.ALREADY_EXISTS
    
    def __init__(
        self,
        path: Optional[str],
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"path exists: {path}",
            path=path,
            error_code=5003,
            context=context
        )


class ClosedError(MemFSException):
    """An operation was attempted on a handle that is already closed."""
    
    kind = ErrorKind.CLOSED
    
    def __init__(
        self,
        name: Optional[str],
        handle_id: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if handle_id is not None:
            ctx["handle_id"] = handle_id
        super().__init__(
            message=f"file closed: {name}",
            path=name,
            error_code=5004,
            context=ctx
        )
        self.handle_id = handle_id


class StaleHandleError(MemFSException):
    """
    The handle refers to a node that has been removed from the tree.
    
    Only close() is allowed on such a handle.
    """
    
    kind = ErrorKind.STALE
    
    def __init__(
        self,
        name: Optional[str],
        handle_id: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if handle_id is not None:
            ctx["handle_id"] = handle_id
        super().__init__(
            message=f"file unlinked: {name}",
            path=name,
            error_code=5005,
            context=ctx
        )
        self.handle_id = handle_id


class EndOfDataError(MemFSException, EOFError):
    """The read cursor is at or past the end of the content."""
    
    kind = ErrorKind.END_OF_DATA
    
    def __init__(
        self,
        name: Optional[str],
        position: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if position is not None:
            ctx["position"] = position
        super().__init__(
            message=f"end of data: {name}",
            path=name,
            error_code=5006,
            context=ctx
        )
        self.position = position
