"""AST analyzers for parsing Python code into the program model."""

from forceloader.infrastructure.analyzers.base import (
    compute_module_name,
    find_package_root,
    has_decorator,
    iter_preorder,
    iter_statements,
    line_offsets,
    make_location,
    node_start_lines,
    resolve_relative_import,
    shallow_walk,
    unwrap_annotation,
)
from forceloader.infrastructure.analyzers.comment_analyzer import (
    build_comment_index,
    extract_comments,
)
from forceloader.infrastructure.analyzers.import_analyzer import ImportAnalyzer
from forceloader.infrastructure.analyzers.type_analyzer import TypeAnalyzer

__all__ = [
    # Base utilities
    "compute_module_name",
    "find_package_root",
    "has_decorator",
    "iter_preorder",
    "iter_statements",
    "line_offsets",
    "make_location",
    "node_start_lines",
    "resolve_relative_import",
    "shallow_walk",
    "unwrap_annotation",
    # Comments
    "build_comment_index",
    "extract_comments",
    # Analyzers
    "ImportAnalyzer",
    "TypeAnalyzer",
]
