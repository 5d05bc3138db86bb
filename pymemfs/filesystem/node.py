"""
Node Module

Tree entities of the in-memory store. A node is either a directory
holding a name-keyed child mapping or a file holding a byte buffer.
Both carry permission bits, a modification time and a detached marker.

Each node owns exactly one lock guarding its own fields. Callers take
one node lock at a time and never nest two of them.

Author: YSNRFD
Version: 1.0.0
"""

import stat
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from pymemfs.exceptions import NotExistError


class FileType(Enum):
    """Kinds of node."""
    REGULAR = 1
    DIRECTORY = 2


@dataclass(eq=False)
class Node:
    """
    Common node state.
    
    Nodes compare by identity; two files with equal content are still
    distinct tree entities.
    """
    
    name: str
    mode: int = 0o666
    mtime: float = field(default_factory=time.time)
    detached: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    
    file_type = FileType.REGULAR
    
    @property
    def is_directory(self) -> bool:
        return self.file_type == FileType.DIRECTORY
    
    @property
    def is_regular_file(self) -> bool:
        return self.file_type == FileType.REGULAR
    
    @property
    def type_bits(self) -> int:
        """File-type bits as reported by directory entries."""
        return stat.S_IFDIR if self.is_directory else 0
    
    def touch(self) -> None:
        """Update the modification time. Caller holds the lock."""
        self.mtime = time.time()
    
    def detach(self) -> None:
        """Mark the node as removed from the tree."""
        with self.lock:
            self.detached = True
    
    def size(self) -> int:
        return 0


@dataclass(eq=False)
class FileNode(Node):
    """A regular file; ``content`` is the whole byte buffer."""
    
    content: bytearray = field(default_factory=bytearray, repr=False)
    
    file_type = FileType.REGULAR
    
    def size(self) -> int:
        """Current content length, 0 once detached."""
        with self.lock:
            if self.detached:
                return 0
            return len(self.content)
    
    def truncate(self) -> None:
        """Discard all content."""
        with self.lock:
            self.content = bytearray()
            self.touch()


@dataclass(eq=False)
class DirectoryNode(Node):
    """A directory; ``children`` maps a segment name to its node."""
    
    mode: int = 0o777
    children: dict[str, Node] = field(default_factory=dict, repr=False)
    
    file_type = FileType.DIRECTORY
    
    def get_child(self, name: str) -> Optional[Node]:
        with self.lock:
            return self.children.get(name)
    
    def add_child(self, node: Node) -> Optional[Node]:
        """
        Insert a child unless its name is already taken.
        
        Returns:
            The existing sibling with that name, or None if ``node``
            was inserted
        
        Raises:
            NotExistError: If this directory has been removed
        """
        with self.lock:
            if self.detached:
                raise NotExistError(self.name, reason="directory removed")
            existing = self.children.get(node.name)
            if existing is not None:
                return existing
            self.children[node.name] = node
            self.touch()
            return None
    
    def remove_child(self, node: Node) -> bool:
        """Remove ``node`` if it is still the child under its name."""
        with self.lock:
            if self.children.get(node.name) is not node:
                return False
            del self.children[node.name]
            self.touch()
            return True
    
    def snapshot(self) -> List[Node]:
        """Children in name order, taken under a single lock hold."""
        with self.lock:
            return [self.children[name] for name in sorted(self.children)]
    
    def detach_if_empty(self) -> bool:
        """
        Mark the directory removed, but only while it has no children.
        
        Checked and set under one lock hold, so no child can slip in
        between.
        """
        with self.lock:
            if self.children:
                return False
            self.detached = True
            return True
    
    def take_children(self) -> List[Node]:
        """Mark the directory removed; remove and return every child."""
        with self.lock:
            self.detached = True
            children = list(self.children.values())
            self.children.clear()
            if children:
                self.touch()
            return children
