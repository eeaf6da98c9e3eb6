"""Inline suppression via `# nolint: <analyzer>` comments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from forceloader.domain.exceptions import InitializationError, ParseError
from forceloader.domain.model.diagnostic import ANALYZER_NAME

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from forceloader.domain.model.call_site import CallSite
    from forceloader.domain.model.comment import CommentIndex, CommentToken
    from forceloader.domain.model.location import Location
    from forceloader.domain.model.program import CompilationUnit

logger = logging.getLogger(__name__)

_DIRECTIVE = "nolint"


def is_directive(text: str, analyzer_name: str = ANALYZER_NAME) -> bool:
    """Check if comment text is a nolint directive naming the analyzer.

    Rules:
        1. Text contains "nolint".
        2. Comment marker and surrounding whitespace stripped, the text
           splits on ":" into at least two parts.
        3. The second part, split on "," and stripped, names the analyzer.

    Examples:
        "# nolint: forceloader"          → True
        "# nolint: gocyclo, forceloader" → True
        "# nolint"                       → False (no names)
        "# nolint: other"                → False

    Args:
        text: Raw comment text
        analyzer_name: Registered analyzer name

    Returns:
        True if the directive silences this analyzer
    """
    if _DIRECTIVE not in text:
        return False

    raw = text.replace("#", "", 1).strip()
    parts = [part.strip() for part in raw.split(":")]
    if len(parts) < 2:
        return False

    targets = [target.strip() for target in parts[1].split(",")]
    return analyzer_name in targets


class SuppressionMatcher:
    """Decides whether a flagged site carries a suppression directive.

    Eligible comments:
        - on the same line as the site's effective position
        - on the line directly above, attached to the statement (no other
          node begins on the comment's line)
        - with require_column_match, the line-above comment must also start
          at the site's column (several call sites may share a line)

    With a `reparse` callable comments are read from a fresh parse of the
    file. A ParseError there is recovered: the site is not suppressed.
    """

    def __init__(
        self,
        analyzer_name: str = ANALYZER_NAME,
        *,
        require_column_match: bool = False,
        reparse: Callable[[Path], CompilationUnit] | None = None,
    ) -> None:
        """Initialize matcher.

        Args:
            analyzer_name: Name a directive must list
            require_column_match: Previous-line comment must share the column
            reparse: On-demand re-parse of a single file
        """
        if not analyzer_name:
            raise ValueError("analyzer_name must not be empty")

        self._analyzer_name = analyzer_name
        self._require_column_match = require_column_match
        self._reparse = reparse

    def is_suppressed(self, site: CallSite) -> bool:
        """Check suppression for a flagged site.

        Raises:
            InitializationError: If the unit has no comment index
        """
        index = self._comment_index(site)
        if index is None:
            return False

        return any(
            is_directive(comment.text, self._analyzer_name)
            for comment in self.eligible_comments(index, site.position)
        )

    def eligible_comments(
        self,
        index: CommentIndex,
        position: Location,
    ) -> Iterator[CommentToken]:
        """Comments positionally eligible to annotate position."""
        yield from index.on_line(position.line)

        for comment in index.attached_on_line(position.line - 1):
            if self._require_column_match and comment.column != position.column:
                continue
            yield comment

    def _comment_index(self, site: CallSite) -> CommentIndex | None:
        if self._reparse is None:
            if site.unit.comments is None:
                raise InitializationError(f"no comment index for {site.unit.module_name}")
            return site.unit.comments

        try:
            unit = self._reparse(site.unit.path)
        except ParseError as e:
            logger.warning("suppression lookup skipped for %s: %s", site.location, e.reason)
            return None
        return unit.comments
