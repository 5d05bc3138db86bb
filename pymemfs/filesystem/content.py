"""
Content Module

Cursor-based read/write/seek over a single file node's byte buffer.
Every call runs under the node's lock. Writes beyond the current end
zero-fill the gap; seeking alone never changes the content.

Author: YSNRFD
Version: 1.0.0
"""

import io
from enum import IntEnum
from typing import Optional

from .node import FileNode
from pymemfs.exceptions import (
    InvalidPathError,
    StaleHandleError,
    EndOfDataError,
)


class Whence(IntEnum):
    """Reference point for seek()."""
    SET = io.SEEK_SET
    CUR = io.SEEK_CUR
    END = io.SEEK_END


def _as_bytes(data) -> memoryview:
    """Flat unsigned-byte view of any bytes-like object."""
    view = memoryview(data)
    if view.format != 'B' or view.ndim != 1:
        view = view.cast('B')
    return view


def _splice(content: bytearray, data: memoryview, offset: int) -> None:
    """Write ``data`` at ``offset``, growing and zero-filling as needed."""
    gap = offset - len(content)
    if gap > 0:
        content.extend(bytes(gap))
    content[offset:offset + len(data)] = data


class ContentCursor:
    """
    Read/write position on one file node.
    
    Several cursors may share a node; each keeps its own position.
    The ``label`` is only used in error messages. Buffers may be any
    bytes-like object; sizes and counts are always in bytes.
    """
    
    def __init__(self, node: FileNode, position: int = 0, label: Optional[str] = None):
        self._node = node
        self._position = position
        self._label = label if label is not None else node.name
    
    @property
    def position(self) -> int:
        return self._position
    
    @property
    def node(self) -> FileNode:
        return self._node
    
    def _check_live(self) -> None:
        # Caller holds the node lock.
        if self._node.detached:
            raise StaleHandleError(self._label)
    
    def _check_readable(self) -> int:
        # Caller holds the node lock.
        size = len(self._node.content)
        if self._position >= size:
            raise EndOfDataError(self._label, position=self._position)
        return size
    
    def _read_locked(self, buffer) -> int:
        target = _as_bytes(buffer)
        size = self._check_readable()
        count = min(size - self._position, len(target))
        target[:count] = self._node.content[self._position:self._position + count]
        self._position += count
        return count
    
    def _slice_locked(self, size: int) -> bytes:
        end = self._check_readable()
        if size >= 0:
            end = min(end, self._position + size)
        data = bytes(self._node.content[self._position:end])
        self._position = end
        return data
    
    def read_into(self, buffer) -> int:
        """
        Copy bytes at the cursor into ``buffer`` and advance.
        
        Args:
            buffer: Writable bytes-like buffer (bytearray, memoryview, array)
        
        Returns:
            Number of bytes copied
        
        Raises:
            EndOfDataError: If the cursor is at or past the end
            StaleHandleError: If the node was removed
        """
        with self._node.lock:
            self._check_live()
            return self._read_locked(buffer)
    
    def read(self, size: int = -1) -> bytes:
        """
        Return up to ``size`` bytes at the cursor (the rest if negative).
        
        Only the bytes actually present are copied, whatever ``size`` asks.
        """
        with self._node.lock:
            self._check_live()
            return self._slice_locked(size)
    
    def _seek_for_read(self, offset: int) -> None:
        if offset < 0:
            raise InvalidPathError(self._label, reason="negative offset")
        self._check_live()
        self._position = offset
    
    def read_into_at(self, buffer, offset: int) -> int:
        """
        Move the cursor to ``offset`` and read from there.
        
        The cursor is shared with read_into() and seek(); after the call
        it sits just past the bytes that were read.
        """
        with self._node.lock:
            self._seek_for_read(offset)
            return self._read_locked(buffer)
    
    def read_at(self, size: int, offset: int) -> bytes:
        """Like read_into_at(), returning up to ``size`` bytes."""
        with self._node.lock:
            self._seek_for_read(offset)
            return self._slice_locked(size)
    
    def write(self, data) -> int:
        """
        Write ``data`` at the cursor and advance by its length in bytes.
        
        Returns:
            Number of bytes in ``data``; writes are never short
        """
        data = _as_bytes(data)
        with self._node.lock:
            self._check_live()
            _splice(self._node.content, data, self._position)
            self._node.touch()
            self._position += len(data)
            return len(data)
    
    def write_at(self, data, offset: int) -> int:
        """Write ``data`` at ``offset`` without moving the cursor."""
        data = _as_bytes(data)
        if offset < 0:
            raise InvalidPathError(self._label, reason="negative offset")
        with self._node.lock:
            self._check_live()
            _splice(self._node.content, data, offset)
            self._node.touch()
            return len(data)
    
    def seek(self, offset: int, whence: int = Whence.SET) -> int:
        """
        Move the cursor.
        
        Args:
            offset: Offset relative to ``whence``
            whence: Whence.SET, Whence.CUR or Whence.END
        
        Returns:
            New absolute position
        
        Raises:
            InvalidPathError: For an unknown whence or a negative result
        """
        with self._node.lock:
            self._check_live()
            if whence == Whence.SET:
                position = offset
            elif whence == Whence.CUR:
                position = self._position + offset
            elif whence == Whence.END:
                position = len(self._node.content) + offset
            else:
                raise InvalidPathError(self._label, reason=f"invalid whence {whence}")
            if position < 0:
                raise InvalidPathError(self._label, reason="negative position")
            self._position = position
            return position
