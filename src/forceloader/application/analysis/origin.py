"""Origin resolution: the access path responsible for a flagged call.

The full call expression may carry arguments over many lines or nested
lambdas. Diagnostics name only the member-access chain behind the call.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from forceloader.domain.exceptions import ParseError
from forceloader.infrastructure.analyzers.base import iter_preorder, iter_statements

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from forceloader.domain.model.call_site import CallSite
    from forceloader.domain.model.program import CompilationUnit

logger = logging.getLogger(__name__)


class OriginResolver:
    """Recovers the shortest member-access text enclosing a call position.

    Algorithm:
        1. Target offset = byte offset just past the callee (the opening
           parenthesis of the call).
        2. Walk the unit's statements in pre-order tracking the preceding
           statement; the first pair bracketing the target names the
           enclosing statement.
        3. Inside it, depth-first, pick the shortest ast.Attribute whose
           span contains the target and render it.
        4. No such attribute: render the whole call.

    With a `reparse` callable the unit is re-read from disk keyed by path
    before resolving. A ParseError there is recovered: the full call text
    is used for that one site.
    """

    def __init__(self, reparse: Callable[[Path], CompilationUnit] | None = None) -> None:
        """Initialize resolver.

        Args:
            reparse: On-demand re-parse of a single file. None uses the
                already parsed unit.
        """
        self._reparse = reparse

    def resolve(self, site: CallSite) -> str:
        """Access path text for a flagged call site.

        Args:
            site: Flagged call site

        Returns:
            Rendered member access (e.g. "self.use_case.get") or full call text
        """
        fallback = ast.unparse(site.node)
        unit = site.unit

        if self._reparse is not None:
            try:
                unit = self._reparse(unit.path)
            except ParseError as e:
                logger.warning("origin resolution skipped for %s: %s", site.location, e.reason)
                return fallback

        target = site.unit.offset(site.node.func.end_lineno, site.node.func.end_col_offset)  # type: ignore[arg-type]

        enclosing = find_enclosing(unit, list(iter_statements(unit.tree)), target)
        if enclosing is None:
            return fallback

        access = shortest_access(unit, enclosing, target)
        return ast.unparse(access) if access is not None else fallback


def find_enclosing(
    unit: CompilationUnit,
    statements: Sequence[ast.stmt],
    target: int,
) -> ast.stmt | None:
    """Statement bracketing target offset in a pre-order statement sequence.

    Tracks the preceding statement: when the target falls between its start
    and the current statement's start, the preceding one encloses it.
    The last statement encloses anything after its start.

    Args:
        unit: Unit providing byte offsets
        statements: Statements in pre-order
        target: Byte offset to locate

    Returns:
        Enclosing statement or None when target precedes all statements
    """
    previous: ast.stmt | None = None

    for current in statements:
        start = unit.node_span(current)[0]
        if previous is not None and unit.node_span(previous)[0] <= target < start:
            return previous
        previous = current

    if previous is not None and unit.node_span(previous)[0] <= target:
        return previous
    return None


def shortest_access(
    unit: CompilationUnit,
    root: ast.AST,
    target: int,
) -> ast.Attribute | None:
    """Shortest attribute expression under root whose span contains target."""
    best: ast.Attribute | None = None
    best_length = 0

    for node in iter_preorder([root]):
        if not isinstance(node, ast.Attribute):
            continue
        start, end = unit.node_span(node)
        if not start <= target <= end:
            continue
        if best is None or end - start < best_length:
            best, best_length = node, end - start

    return best
