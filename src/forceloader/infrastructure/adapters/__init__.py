"""Infrastructure adapters for external interfaces."""

from forceloader.infrastructure.adapters.ast_parser import ASTSourceParser
from forceloader.infrastructure.adapters.cached_parser import CachedSourceParser

__all__ = [
    "ASTSourceParser",
    "CachedSourceParser",
]
