"""Comment stream of a compilation unit and its attachment to statements.

Comments are not part of the syntax tree. The frontend supplies them as a
separate, position-ordered stream; attaching them to the statement they
annotate is done here by merging that stream with the ordered node starts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True, slots=True)
class CommentToken:
    """Single `#` comment as produced by the tokenizer.

    Attributes:
        text: Raw comment text including the leading `#`
        line: Line number (1-based)
        column: UTF-8 byte column (0-based), comparable with ast col_offset
        offset: Byte offset from start of file
    """

    text: str
    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.text:
            raise ValueError("text must not be empty")
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")


@dataclass(frozen=True, slots=True)
class CommentIndex:
    """Comments of one unit, indexed by line, with attachment info.

    A comment is *attached* when no syntax node other than comments begins
    on its line. An attached comment annotates the statement that follows it;
    a non-attached one trails a statement on the same line.

    Use CommentIndex.build() - the constructor expects prepared mappings.

    Attributes:
        comments: All comments in offset order
        attached: Comments standing alone on their line
        by_line: Line → comments on that line (offset order)
    """

    comments: tuple[CommentToken, ...]
    attached: frozenset[CommentToken]
    by_line: Mapping[int, tuple[CommentToken, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(
        cls,
        node_lines: Iterable[int],
        comments: Iterable[CommentToken],
    ) -> CommentIndex:
        """Merge ordered node start lines with the ordered comment stream.

        Two-pointer merge: both sequences are sorted once, then walked
        together. O(n log n) for sorting, O(n) for the merge.

        Args:
            node_lines: Start line of every syntax node in the unit
            comments: Comment tokens in any order

        Returns:
            CommentIndex with attachment computed
        """
        lines = sorted(set(node_lines))
        ordered = sorted(comments, key=lambda c: c.offset)

        attached: set[CommentToken] = set()
        by_line: dict[int, list[CommentToken]] = {}
        cursor = 0

        for comment in ordered:
            while cursor < len(lines) and lines[cursor] < comment.line:
                cursor += 1
            if cursor == len(lines) or lines[cursor] != comment.line:
                attached.add(comment)
            by_line.setdefault(comment.line, []).append(comment)

        return cls(
            comments=tuple(ordered),
            attached=frozenset(attached),
            by_line=MappingProxyType({k: tuple(v) for k, v in by_line.items()}),
        )

    @classmethod
    def empty(cls) -> CommentIndex:
        """Index for a unit without comments."""
        return cls(comments=(), attached=frozenset())

    def on_line(self, line: int) -> tuple[CommentToken, ...]:
        """Comments located on given line."""
        return self.by_line.get(line, ())

    def attached_on_line(self, line: int) -> tuple[CommentToken, ...]:
        """Comments on given line that stand alone (no code starts there)."""
        return tuple(c for c in self.on_line(line) if c in self.attached)

    def is_attached(self, comment: CommentToken) -> bool:
        """Check if comment annotates the following statement."""
        return comment in self.attached

    def __len__(self) -> int:
        return len(self.comments)
