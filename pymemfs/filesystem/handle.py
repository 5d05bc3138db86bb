"""
File Handle Module

An open-file session: a node reference, the flags it was opened with,
a content cursor, listing state for the three listing views and a
closed flag.

Author: YSNRFD
Version: 1.0.0
"""

import os
from enum import IntFlag
from typing import Optional, List

from .content import ContentCursor, Whence
from .listing import DirectoryIterator, DirEntry, FileInfo, ListingView
from .node import Node, FileNode, DirectoryNode
from pymemfs.exceptions import (
    InvalidPathError,
    ClosedError,
    StaleHandleError,
)
from pymemfs.logger import get_logger


class OpenFlag(IntFlag):
    """
    Open-mode flags. Values follow the host's os.O_* constants so raw
    integers from the os module can be passed straight through.
    """
    RDONLY = os.O_RDONLY
    WRONLY = os.O_WRONLY
    RDWR = os.O_RDWR
    APPEND = os.O_APPEND
    CREATE = os.O_CREAT
    EXCL = os.O_EXCL
    TRUNC = os.O_TRUNC
    
    def is_set(self, mask: int) -> bool:
        return (int(self) & int(mask)) == int(mask)
    
    @property
    def is_read_only(self) -> bool:
        # Exact bit pattern: RDONLY|CREATE is *not* read-only.
        return int(self) == os.O_RDONLY
    
    @property
    def can_read(self) -> bool:
        return self.is_read_only or self.is_set(OpenFlag.RDWR)
    
    @property
    def can_write(self) -> bool:
        return self.is_set(OpenFlag.WRONLY) or self.is_set(OpenFlag.RDWR)
    
    @property
    def is_append(self) -> bool:
        return self.is_set(OpenFlag.APPEND)
    
    @property
    def is_create(self) -> bool:
        return self.is_set(OpenFlag.CREATE)
    
    @property
    def is_exclusive(self) -> bool:
        return self.is_set(OpenFlag.EXCL)
    
    @property
    def is_truncate(self) -> bool:
        return self.is_set(OpenFlag.TRUNC)


class FileHandle:
    """
    A handle to an open file or directory.
    
    Handles are created by MemFS.open_file() and friends. After that
    they work directly on their node without going through path
    resolution. Several handles on one node keep separate cursors.
    
    Order of checks for every operation: closed, then stale (node
    removed from the tree), then whether the operation is valid for
    the flags and node kind.
    
    Example:
        >>> with fs.create('/tmp/a.txt') as f:
        ...     f.write(b'hello')
        5
    """
    
    def __init__(
        self,
        handle_id: int,
        node: Node,
        flags: OpenFlag,
        position: int = 0
    ):
        self._id = handle_id
        self._node = node
        self._flags = flags
        self._closed = False
        self._cursor: Optional[ContentCursor] = None
        self._listing: Optional[DirectoryIterator] = None
        if isinstance(node, FileNode):
            self._cursor = ContentCursor(node, position)
        elif isinstance(node, DirectoryNode):
            self._listing = DirectoryIterator(node)
        self._logger = get_logger('handle')
    
    def __repr__(self) -> str:
        state = 'closed' if self._closed else 'open'
        return f"<FileHandle id={self._id} name={self.name!r} flags={self._flags!r} {state}>"
    
    def __enter__(self) -> 'FileHandle':
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._closed:
            self.close()
    
    @property
    def id(self) -> int:
        """Diagnostic identifier; has no meaning outside this process."""
        return self._id
    
    @property
    def name(self) -> str:
        """Name of the node (last path segment), not its full path."""
        return self._node.name
    
    @property
    def flags(self) -> OpenFlag:
        return self._flags
    
    @property
    def closed(self) -> bool:
        return self._closed
    
    def is_dir(self) -> bool:
        return self._node.is_directory
    
    def _check_open(self) -> None:
        if self._closed:
            raise ClosedError(self.name, handle_id=self._id)
        if self._node.detached:
            raise StaleHandleError(self.name, handle_id=self._id)
    
    def _content(self, reading: bool) -> ContentCursor:
        self._check_open()
        if self._cursor is None:
            raise InvalidPathError(self.name, reason="is a directory")
        if reading and not self._flags.can_read:
            raise InvalidPathError(self.name, reason="not open for reading")
        if not reading and not self._flags.can_write:
            raise InvalidPathError(self.name, reason="not open for writing")
        return self._cursor
    
    def _directory(self) -> DirectoryIterator:
        self._check_open()
        if self._listing is None:
            raise InvalidPathError(self.name, reason="not a directory")
        return self._listing
    
    def close(self) -> None:
        """
        Close the handle.
        
        Always allowed on a removed node. A second close raises
        ClosedError.
        """
        if self._closed:
            raise ClosedError(self.name, handle_id=self._id)
        self._closed = True
        self._logger.debug("Closed handle", context={'id': self._id, 'name': self.name})
    
    def stat(self) -> FileInfo:
        """Metadata of the node behind the handle."""
        self._check_open()
        return FileInfo(self._node)
    
    def tell(self) -> int:
        self._check_open()
        return self._cursor.position if self._cursor is not None else 0
    
    # Content operations
    
    def readinto(self, buffer) -> int:
        """
        Read into ``buffer`` from the cursor.
        
        Args:
            buffer: Writable buffer (bytearray or memoryview)
        
        Returns:
            Number of bytes read, at most ``len(buffer)``
        
        Raises:
            EndOfDataError: If the cursor is at or past the end
        """
        return self._content(reading=True).read_into(buffer)
    
    def read(self, size: int = -1) -> bytes:
        """
        Read up to ``size`` bytes (everything left if negative).
        
        Raises:
            EndOfDataError: If the cursor is at or past the end
        """
        return self._content(reading=True).read(size)
    
    def readinto_at(self, buffer, offset: int) -> int:
        """
        Read into ``buffer`` starting at ``offset``.
        
        The cursor moves to ``offset`` and then past the bytes read; it
        is the same cursor read() and seek() use.
        
        Raises:
            InvalidPathError: If ``offset`` is negative
        """
        return self._content(reading=True).read_into_at(buffer, offset)
    
    def read_at(self, size: int, offset: int) -> bytes:
        """Read up to ``size`` bytes at ``offset``. See readinto_at()."""
        return self._content(reading=True).read_at(max(size, 0), offset)
    
    def write(self, data) -> int:
        """
        Write ``data`` at the cursor.
        
        A cursor past the end zero-fills the gap first.
        
        Returns:
            Number of bytes in ``data``
        """
        return self._content(reading=False).write(data)
    
    def write_at(self, data, offset: int) -> int:
        """
        Write ``data`` at ``offset`` without moving the cursor.
        
        Raises:
            InvalidPathError: If ``offset`` is negative or the handle
                was opened with APPEND
        """
        cursor = self._content(reading=False)
        if self._flags.is_append:
            raise InvalidPathError(self.name, reason="write_at on append-mode handle")
        return cursor.write_at(data, offset)
    
    def seek(self, offset: int, whence: int = Whence.SET) -> int:
        """Move the cursor; returns the new absolute position."""
        self._check_open()
        if self._cursor is None:
            raise InvalidPathError(self.name, reason="is a directory")
        return self._cursor.seek(offset, whence)
    
    # Directory listing
    
    def read_dir(self, n: int = -1) -> List[DirEntry]:
        """
        Next ``n`` directory entries (all remaining if ``n`` < 0).
        
        A call that returns everything left resets this view, so the
        following call starts from the first entry again.
        """
        return self._directory().next_page(ListingView.ENTRIES, n)
    
    def readdir(self, n: int = -1) -> List[FileInfo]:
        """Like read_dir(), returning FileInfo objects."""
        return self._directory().next_page(ListingView.INFOS, n)
    
    def readdirnames(self, n: int = -1) -> List[str]:
        """Like read_dir(), returning bare names."""
        return self._directory().next_page(ListingView.NAMES, n)
