"""
Path Resolver Module

Handles path validation and textual path manipulation for the store.
Resolution against the node tree lives in MemFS; this module only
deals with strings.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from pymemfs.exceptions import InvalidPathError

PathLike = Union[str, bytes]

SEPARATOR = '/'


@dataclass
class ParsedPath:
    """A parsed path with its components."""
    is_absolute: bool
    components: List[str]
    
    def __str__(self) -> str:
        if self.is_absolute:
            return SEPARATOR + SEPARATOR.join(self.components)
        return SEPARATOR.join(self.components) if self.components else '.'


class PathResolver:
    """
    Validates, resolves and manipulates store paths.
    
    Handles:
    - str and UTF-8 bytes input
    - Absolute and relative paths
    - . and .. components
    - Path normalization
    """
    
    @staticmethod
    def is_valid(path: object) -> bool:
        """
        Check that a path is well-formed text.
        
        Bytes must decode as strict UTF-8; strings must encode as UTF-8
        (no lone surrogates). NUL is never allowed.
        """
        if isinstance(path, bytes):
            try:
                path = path.decode('utf-8')
            except UnicodeDecodeError:
                return False
        if not isinstance(path, str):
            return False
        try:
            path.encode('utf-8')
        except UnicodeEncodeError:
            return False
        return '\x00' not in path
    
    @staticmethod
    def validate(path: object) -> str:
        """
        Return ``path`` as text, raising if it is malformed.
        
        Raises:
            InvalidPathError: If the path is not well-formed text
        """
        if not PathResolver.is_valid(path):
            raise InvalidPathError(repr(path), reason="invalid path")
        if isinstance(path, bytes):
            return path.decode('utf-8')
        return path
    
    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into components.
        
        Args:
            path: Path string to parse
        
        Returns:
            ParsedPath with components
        """
        is_absolute = path.startswith(SEPARATOR)
        components = [c for c in path.split(SEPARATOR) if c and c != '.']
        return ParsedPath(is_absolute=is_absolute, components=components)
    
    @staticmethod
    def normalize(path: str) -> str:
        """
        Normalize a path by resolving . and ..
        
        ``..`` never climbs above the root of an absolute path.
        
        Args:
            path: Path to normalize
        
        Returns:
            Normalized path string
        """
        parsed = PathResolver.parse(path)
        
        result: List[str] = []
        
        for component in parsed.components:
            if component == '..':
                if result and result[-1] != '..':
                    result.pop()
                elif not parsed.is_absolute:
                    result.append(component)
            else:
                result.append(component)
        
        return str(ParsedPath(is_absolute=parsed.is_absolute, components=result))
    
    @staticmethod
    def join(*paths: str) -> str:
        """
        Join multiple path components.
        
        A later absolute component discards everything before it.
        """
        if not paths:
            return '.'
        
        result = paths[0]
        
        for path in paths[1:]:
            if path.startswith(SEPARATOR):
                result = path
            elif result:
                result = result.rstrip(SEPARATOR) + SEPARATOR + path
            else:
                result = path
        
        return PathResolver.normalize(result)
    
    @staticmethod
    def resolve(path: str, cwd: str = SEPARATOR) -> str:
        """
        Resolve a path relative to a working directory.
        
        Args:
            path: Path to resolve
            cwd: Absolute working directory
        
        Returns:
            Absolute, cleaned path
        """
        if PathResolver.is_absolute(path):
            return PathResolver.normalize(path)
        return PathResolver.normalize(cwd.rstrip(SEPARATOR) + SEPARATOR + path)
    
    @staticmethod
    def components(path: str) -> List[str]:
        """Segments of an absolute, cleaned path; empty for the root."""
        return [c for c in path.split(SEPARATOR) if c]
    
    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """Split a path into directory and base name."""
        normalized = PathResolver.normalize(path)
        if normalized == SEPARATOR:
            return (SEPARATOR, '')
        if SEPARATOR not in normalized:
            return ('.', normalized)
        head, tail = normalized.rsplit(SEPARATOR, 1)
        return (head or SEPARATOR, tail)
    
    @staticmethod
    def is_absolute(path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith(SEPARATOR)
