"""
Memory File System Module

An in-process, memory-resident hierarchical file store that behaves
like the host's file APIs:
- Hierarchical directory tree with per-node locks
- Absolute and working-directory-relative paths
- open() flag semantics modelled on os.open()
- Temporary file and directory creation

Path resolution walks the tree hand over hand, holding one directory
lock per hop. A resolution is not atomic end to end; concurrent
creation or removal between two hops is an accepted race.

Author: YSNRFD
Version: 1.0.0
"""

import os
import secrets
import string
import threading
from dataclasses import dataclass
from typing import Optional, Any, List

from .content import ContentCursor
from .handle import FileHandle, OpenFlag
from .listing import DirEntry, FileInfo, list_directory
from .node import Node, FileNode, DirectoryNode
from .path_resolver import PathResolver, PathLike, SEPARATOR
from pymemfs.core.config_loader import Config, get_config
from pymemfs.exceptions import (
    InvalidPathError,
    NotExistError,
    AlreadyExistsError,
    EndOfDataError,
)
from pymemfs.logger import get_logger

TEMP_NAME_ALPHABET = string.ascii_letters + string.digits


@dataclass
class Resolution:
    """
    Result of walking a path.
    
    ``parent`` is the deepest existing directory on the way. ``target``
    is the node itself when it exists, in which case ``missing`` is
    empty. Otherwise ``missing`` lists the segments below ``parent``
    that do not exist. The root resolves to itself as parent with no
    target and nothing missing.
    """
    path: str
    parent: DirectoryNode
    target: Optional[Node]
    missing: List[str]
    
    @property
    def is_root(self) -> bool:
        return self.target is None and not self.missing
    
    @property
    def node(self) -> Optional[Node]:
        """The node the path names, the root included."""
        if self.is_root:
            return self.parent
        return self.target


class MemFS:
    """
    In-memory file store.
    
    All methods are safe to call from several threads. Errors are
    raised as MemFSException subclasses.
    
    Example:
        >>> fs = MemFS()
        >>> fs.mkdir_all('/data/logs', 0o755)
        >>> with fs.create('/data/logs/app.log') as f:
        ...     f.write(b'started')
        7
        >>> fs.stat('/data/logs/app.log').size
        7
    """
    
    def __init__(self, config: Optional[Config] = None, cwd: Optional[str] = None):
        self._config = config or get_config()
        self._logger = get_logger('memfs')
        fs_config = self._config.filesystem
        
        self._lock = threading.Lock()
        self._next_handle_id = fs_config.first_handle_id
        self._handles_issued = 0
        
        self._root = DirectoryNode(name='', mode=0o777)
        self._root.add_child(DirectoryNode(name=fs_config.temp_dir, mode=0o777))
        
        self._cwd = SEPARATOR
        if cwd is None and fs_config.seed_working_directory:
            cwd = os.getcwd()
        if cwd is not None:
            cwd = PathResolver.resolve(PathResolver.validate(cwd), SEPARATOR)
            self.mkdir_all(cwd, fs_config.default_dir_mode)
            self._cwd = cwd
        
        self._logger.info(
            "Memory filesystem initialized",
            context={'cwd': self._cwd, 'temp_dir': self.temp_dir()}
        )
    
    def _generate_handle_id(self) -> int:
        with self._lock:
            handle_id = self._next_handle_id
            self._next_handle_id += 1
            self._handles_issued += 1
            return handle_id
    
    # Path resolution
    
    def valid_path(self, path: object) -> bool:
        """Check whether ``path`` is well-formed text."""
        return PathResolver.is_valid(path)
    
    def _absolute(self, path: PathLike) -> str:
        return PathResolver.resolve(PathResolver.validate(path), self._cwd)
    
    def _resolve(self, path: PathLike) -> Resolution:
        """
        Walk ``path`` from the root.
        
        One directory lock is held per hop and released before the
        next is taken.
        
        Raises:
            InvalidPathError: If the path is malformed or an existing
                intermediate component is not a directory
        """
        absolute = self._absolute(path)
        parts = PathResolver.components(absolute)
        
        if not parts:
            return Resolution(absolute, self._root, None, [])
        
        current = self._root
        for i, part in enumerate(parts[:-1]):
            child = current.get_child(part)
            if child is None:
                return Resolution(absolute, current, None, parts[i:])
            if not isinstance(child, DirectoryNode):
                raise InvalidPathError(absolute, reason=f"not a directory: {part}")
            current = child
        
        leaf = parts[-1]
        target = current.get_child(leaf)
        if target is None:
            return Resolution(absolute, current, None, [leaf])
        return Resolution(absolute, current, target, [])
    
    def _resolve_existing(self, path: PathLike) -> Resolution:
        resolution = self._resolve(path)
        if resolution.node is None:
            raise NotExistError(resolution.path)
        return resolution
    
    def getcwd(self) -> str:
        """The simulated working directory relative paths resolve against."""
        return self._cwd
    
    def chdir(self, path: PathLike) -> None:
        """
        Change the simulated working directory.
        
        Raises:
            NotExistError: If the path does not exist
            InvalidPathError: If the path is not a directory
        """
        resolution = self._resolve_existing(path)
        if not resolution.node.is_directory:
            raise InvalidPathError(resolution.path, reason="not a directory")
        self._cwd = resolution.path
    
    # Directory creation
    
    def mkdir_all(self, path: PathLike, perm: int = 0o777) -> None:
        """
        Create ``path`` and every missing parent as directories.
        
        Existing directories on the way are left untouched, so calling
        it again with the same path succeeds without changes.
        
        Raises:
            InvalidPathError: If a component exists as a file
        """
        absolute = self._absolute(path)
        
        current = self._root
        for part in PathResolver.components(absolute):
            candidate = DirectoryNode(name=part, mode=perm)
            existing = current.add_child(candidate)
            if existing is None:
                self._logger.debug(
                    "Created directory",
                    context={'name': part, 'path': absolute, 'mode': oct(perm)}
                )
                current = candidate
            elif isinstance(existing, DirectoryNode):
                current = existing
            else:
                raise InvalidPathError(absolute, reason=f"not a directory: {part}")
    
    def mkdir(self, path: PathLike, perm: int = 0o777) -> None:
        """
        Create a single directory.
        
        Recreating the root is a no-op.
        
        Raises:
            AlreadyExistsError: If the path exists
            NotExistError: If the parent directory does not exist
        """
        resolution = self._resolve(path)
        if resolution.is_root:
            return
        if resolution.target is not None:
            raise AlreadyExistsError(resolution.path)
        if len(resolution.missing) > 1:
            raise NotExistError(resolution.path)
        
        node = DirectoryNode(name=resolution.missing[0], mode=perm)
        if resolution.parent.add_child(node) is not None:
            raise AlreadyExistsError(resolution.path)
        
        self._logger.debug(
            "Created directory",
            context={'path': resolution.path, 'mode': oct(perm)}
        )
    
    # Opening files
    
    def open(self, path: PathLike) -> FileHandle:
        """Open for reading."""
        return self.open_file(path, OpenFlag.RDONLY, 0)
    
    def create(self, path: PathLike) -> FileHandle:
        """Create or truncate a file and open it for reading and writing."""
        return self.open_file(
            path,
            OpenFlag.RDWR | OpenFlag.CREATE | OpenFlag.TRUNC,
            self._config.filesystem.default_file_mode
        )
    
    def open_file(self, path: PathLike, flags: int, perm: int = 0o666) -> FileHandle:
        """
        Open a file or directory.
        
        Args:
            path: Path to open
            flags: OpenFlag bits (or raw os.O_* integers)
            perm: Mode for a newly created file
        
        Returns:
            A new FileHandle
        
        Raises:
            NotExistError: If the path is absent and either the open is
                read-only or the parent directory is missing
            InvalidPathError: If the path is absent and CREATE was not
                requested
            AlreadyExistsError: If CREATE|EXCL was requested and the
                file exists
        """
        flag = OpenFlag(flags)
        resolution = self._resolve(path)
        
        if len(resolution.missing) > 1:
            raise NotExistError(resolution.path)
        
        node = resolution.node
        position = 0
        
        if node is None:
            if flag.is_read_only:
                raise NotExistError(resolution.path)
            if not flag.is_create:
                raise InvalidPathError(
                    resolution.path,
                    reason="path does not exist and cannot create"
                )
            node = FileNode(name=resolution.missing[0], mode=perm)
            existing = resolution.parent.add_child(node)
            if existing is not None:
                # Lost a race with another creator; open what is there.
                if flag.is_exclusive:
                    raise AlreadyExistsError(resolution.path)
                node = existing
            else:
                self._logger.debug(
                    "Created file",
                    context={'path': resolution.path, 'mode': oct(perm)}
                )
        elif isinstance(node, FileNode) and flag.can_write:
            if flag.is_create and flag.is_exclusive:
                raise AlreadyExistsError(resolution.path)
            if flag.is_truncate:
                node.truncate()
            elif flag.is_append:
                position = ContentCursor(node).seek(0, os.SEEK_END)
        
        handle = FileHandle(self._generate_handle_id(), node, flag, position)
        self._logger.debug(
            "Opened handle",
            context={'path': resolution.path, 'id': handle.id, 'flags': int(flag)}
        )
        return handle
    
    # Metadata and listing
    
    def stat(self, path: PathLike) -> FileInfo:
        """
        Metadata for a path.
        
        Raises:
            NotExistError: If the path does not exist
        """
        return FileInfo(self._resolve_existing(path).node)
    
    def exists(self, path: PathLike) -> bool:
        try:
            return self._resolve(path).node is not None
        except InvalidPathError:
            return False
    
    def read_dir(self, path: PathLike) -> List[DirEntry]:
        """
        Sorted entries of a directory.
        
        Raises:
            NotExistError: If the path does not exist
            InvalidPathError: If the path is a file
        """
        resolution = self._resolve_existing(path)
        node = resolution.node
        if not isinstance(node, DirectoryNode):
            raise InvalidPathError(resolution.path, reason="not a directory")
        return list_directory(node)
    
    # Removal
    
    def remove(self, path: PathLike) -> None:
        """
        Remove a file or an empty directory.
        
        Handles already open on the node keep working only for close().
        
        Raises:
            NotExistError: If the path does not exist
            InvalidPathError: For the root or a non-empty directory
        """
        resolution = self._resolve_existing(path)
        if resolution.is_root:
            raise InvalidPathError(resolution.path, reason="cannot remove root")
        
        node = resolution.target
        if isinstance(node, DirectoryNode):
            # Emptiness check and detach share one lock hold; a detached
            # directory refuses new children.
            if not node.detach_if_empty():
                raise InvalidPathError(resolution.path, reason="directory not empty")
            resolution.parent.remove_child(node)
        else:
            self._detach(resolution.parent, node)
        
        self._logger.debug("Removed", context={'path': resolution.path})
    
    def remove_all(self, path: PathLike) -> None:
        """
        Remove a path and, for a directory, everything below it.
        
        Every removed node is detached, so handles on any of them
        become stale.
        
        Raises:
            NotExistError: If the path does not exist
            InvalidPathError: For the root
        """
        resolution = self._resolve_existing(path)
        if resolution.is_root:
            raise InvalidPathError(resolution.path, reason="cannot remove root")
        
        count = self._detach(resolution.parent, resolution.target)
        self._logger.debug(
            "Removed tree",
            context={'path': resolution.path, 'nodes': count}
        )
    
    def _detach(self, parent: DirectoryNode, node: Node) -> int:
        """Unlink ``node`` from ``parent`` and detach its subtree."""
        parent.remove_child(node)
        
        count = 0
        pending = [node]
        while pending:
            current = pending.pop()
            if isinstance(current, DirectoryNode):
                pending.extend(current.take_children())
            current.detach()
            count += 1
        return count
    
    # Temporary names
    
    def temp_dir(self) -> str:
        """Path of the store's temporary directory."""
        return SEPARATOR + self._config.filesystem.temp_dir
    
    def _random_name(self, pattern: str) -> str:
        length = self._config.filesystem.temp_name_length
        token = ''.join(secrets.choice(TEMP_NAME_ALPHABET) for _ in range(length))
        if '*' in pattern:
            return pattern.replace('*', token, 1)
        return pattern + token
    
    def _temp_pattern(self, pattern: PathLike) -> str:
        pattern = PathResolver.validate(pattern)
        if SEPARATOR in pattern:
            raise InvalidPathError(pattern, reason="pattern contains path separator")
        return pattern
    
    def _temp_parent(self, dir: PathLike) -> str:
        if not dir:
            dir = self.temp_dir()
        resolution = self._resolve(dir)
        if not isinstance(resolution.node, DirectoryNode):
            raise NotExistError(resolution.path, reason="dir does not exist")
        return resolution.path
    
    def create_temp(self, dir: PathLike = '', pattern: str = '') -> FileHandle:
        """
        Create a new file with a random name and open it read-write.
        
        Args:
            dir: Existing directory (the temp directory if empty)
            pattern: Name pattern; the first ``*`` is replaced by a
                random string, which is appended if there is none
        
        Raises:
            NotExistError: If ``dir`` is not an existing directory
        """
        parent = self._temp_parent(dir)
        pattern = self._temp_pattern(pattern)
        flags = OpenFlag.RDWR | OpenFlag.CREATE | OpenFlag.EXCL
        
        while True:
            path = PathResolver.join(parent, self._random_name(pattern))
            try:
                return self.open_file(path, flags, 0o600)
            except AlreadyExistsError:
                self._logger.debug("Temp name collision", context={'path': path})
    
    def mkdir_temp(self, dir: PathLike = '', pattern: str = '') -> str:
        """
        Create a new directory with a random name.
        
        Returns:
            Absolute path of the new directory
        
        Raises:
            NotExistError: If ``dir`` is not an existing directory
        """
        parent = self._temp_parent(dir)
        pattern = self._temp_pattern(pattern)
        
        while True:
            path = PathResolver.join(parent, self._random_name(pattern))
            try:
                self.mkdir(path, 0o700)
                return path
            except AlreadyExistsError:
                self._logger.debug("Temp name collision", context={'path': path})
    
    # Whole-file helpers
    
    def read_file(self, path: PathLike) -> bytes:
        """Return the whole content of a file."""
        with self.open(path) as f:
            try:
                return f.read()
            except EndOfDataError:
                return b''
    
    def write_file(self, path: PathLike, data: bytes, perm: int = 0o666) -> None:
        """Create or replace a file with ``data``."""
        flags = OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC
        with self.open_file(path, flags, perm) as f:
            f.write(data)
    
    def get_stats(self) -> dict[str, Any]:
        """Get store statistics."""
        directories = files = total_size = 0
        pending: List[Node] = [self._root]
        while pending:
            node = pending.pop()
            if isinstance(node, DirectoryNode):
                directories += 1
                pending.extend(node.snapshot())
            else:
                files += 1
                total_size += node.size()
        
        with self._lock:
            handles_issued = self._handles_issued
        
        return {
            'directories': directories,
            'files': files,
            'total_size': total_size,
            'handles_issued': handles_issued,
            'cwd': self._cwd,
        }
