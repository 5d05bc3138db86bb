"""
pymemfs Filesystem Module

The in-memory store:
- Directory/file node tree with per-node locks
- Path validation and resolution
- Cursor-based content engine with sparse writes
- File handles with os.open()-style flags
- Paginated directory listing
"""

from .node import Node, FileNode, DirectoryNode, FileType
from .path_resolver import PathResolver, ParsedPath
from .content import ContentCursor, Whence
from .listing import FileInfo, DirEntry, DirectoryIterator, ListingView
from .handle import FileHandle, OpenFlag
from .memfs import MemFS, Resolution

__all__ = [
    # Nodes
    'Node',
    'FileNode',
    'DirectoryNode',
    'FileType',
    # Path Resolver
    'PathResolver',
    'ParsedPath',
    # Content
    'ContentCursor',
    'Whence',
    # Listing
    'FileInfo',
    'DirEntry',
    'DirectoryIterator',
    'ListingView',
    # Handles
    'FileHandle',
    'OpenFlag',
    # Store
    'MemFS',
    'Resolution',
]
