"""Cached source parser adapter.

Decorator pattern: wraps SourceParserPort with content-hash based caching.
Serves on-demand re-parses of a single file keyed by path.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from forceloader.domain.exceptions import ParseError
from forceloader.domain.ports.source_parser import SourceParserPort

if TYPE_CHECKING:
    from pathlib import Path

    from forceloader.domain.model.program import CompilationUnit, Program


@dataclass
class CachedSourceParser(SourceParserPort):
    """Parser with content-hash based caching.

    Decorator pattern: wraps another SourceParserPort.
    Uses SHA-256 hash of file content for cache invalidation.

    Cache is in-memory only - no persistence between runs.
    Not thread-safe.

    Attributes:
        _inner: Wrapped parser implementation
        _cache: Path → (content_hash, CompilationUnit) mapping
    """

    _inner: SourceParserPort
    _cache: dict[Path, tuple[str, CompilationUnit]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self._inner is None:
            raise TypeError("_inner parser must not be None")

    def parse_file(self, path: Path) -> CompilationUnit:
        """Parse with cache lookup.

        Cache hit: return cached unit if content hash matches.
        Cache miss: parse with inner parser, cache result.

        Args:
            path: Path to .py file

        Returns:
            Parsed CompilationUnit (cached or fresh)

        Raises:
            ParseError: If file cannot be read or parsed
        """
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ParseError(path=str(path), reason=f"cannot read: {e.strerror}") from e
        content_hash = hashlib.sha256(content).hexdigest()

        if path in self._cache:
            cached_hash, cached_unit = self._cache[path]
            if cached_hash == content_hash:
                return cached_unit

        unit = self._inner.parse_file(path)
        self._cache[path] = (content_hash, unit)
        return unit

    def parse_directory(self, path: Path) -> Program:
        """Parse directory (delegates to inner parser).

        Args:
            path: Root directory path

        Returns:
            Program with all units
        """
        return self._inner.parse_directory(path)

    def invalidate(self, path: Path) -> None:
        """Explicitly invalidate cache entry.

        Args:
            path: Path to invalidate
        """
        self._cache.pop(path, None)

    @property
    def cache_size(self) -> int:
        """Number of cached units."""
        return len(self._cache)
