"""
Listing Module

Metadata views over nodes and the paginated directory listing used by
file handles.

Author: YSNRFD
Version: 1.0.0
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List

from .node import Node, DirectoryNode


@dataclass(frozen=True)
class FileInfo:
    """
    Metadata of a node.
    
    Values are read from the node on access, so a FileInfo taken before
    a write reports the size after it.
    """
    
    _node: Node
    
    @property
    def name(self) -> str:
        return self._node.name
    
    @property
    def size(self) -> int:
        """Content length; 0 for directories and removed files."""
        return self._node.size()
    
    @property
    def mode(self) -> int:
        return self._node.mode
    
    @property
    def mtime(self) -> float:
        return self._node.mtime
    
    @property
    def is_dir(self) -> bool:
        return self._node.is_directory
    
    def sys(self) -> None:
        """No native handle backs this store."""
        return None
    
    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for display."""
        return {
            'name': self.name,
            'type': self._node.file_type.name,
            'mode': oct(self.mode),
            'size': self.size,
            'mtime': time.strftime('%Y-%m-%d %H:%M', time.localtime(self.mtime)),
        }


@dataclass(frozen=True)
class DirEntry:
    """A directory entry, shaped after os.DirEntry."""
    
    _node: Node
    
    @property
    def name(self) -> str:
        return self._node.name
    
    def is_dir(self) -> bool:
        return self._node.is_directory
    
    def is_file(self) -> bool:
        return self._node.is_regular_file
    
    def type(self) -> int:
        """stat.S_IFDIR for directories, 0 for files."""
        return self._node.type_bits
    
    def info(self) -> FileInfo:
        return FileInfo(self._node)


class ListingView(Enum):
    """The three listing APIs a handle exposes."""
    ENTRIES = 'read_dir'
    INFOS = 'readdir'
    NAMES = 'readdirnames'


_CONVERTERS: dict[ListingView, Callable[[Node], Any]] = {
    ListingView.ENTRIES: DirEntry,
    ListingView.INFOS: FileInfo,
    ListingView.NAMES: lambda node: node.name,
}


def list_directory(directory: DirectoryNode) -> List[DirEntry]:
    """Sorted entries of a directory."""
    return [DirEntry(node) for node in directory.snapshot()]


class DirectoryIterator:
    """
    Resumable listing state for one handle.
    
    Each view keeps its own index. Every call takes a fresh sorted
    snapshot of the directory, so entries added or removed between
    calls show up in (or vanish from) later pages.
    """
    
    def __init__(self, directory: DirectoryNode):
        self._directory = directory
        self._indexes = {view: 0 for view in ListingView}
    
    def next_page(self, view: ListingView, n: int) -> List[Any]:
        """
        Return the next page of ``view``.
        
        If ``n`` is negative or covers everything left, the rest is
        returned and the view restarts from the top on the next call.
        Otherwise exactly ``n`` items are returned.
        """
        children = self._directory.snapshot()
        start = min(self._indexes[view], len(children))
        remaining = children[start:]
        
        if n < 0 or n >= len(remaining):
            self._indexes[view] = 0
            page = remaining
        else:
            self._indexes[view] = start + n
            page = remaining[:n]
        
        convert = _CONVERTERS[view]
        return [convert(node) for node in page]
