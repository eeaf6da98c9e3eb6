"""Comment extraction: tokenizer comment stream → CommentIndex."""

from __future__ import annotations

import io
import tokenize
from typing import TYPE_CHECKING

from forceloader.domain.exceptions import ParseError
from forceloader.domain.model.comment import CommentIndex, CommentToken
from forceloader.infrastructure.analyzers.base import node_start_lines

if TYPE_CHECKING:
    import ast
    from pathlib import Path


def extract_comments(
    source: str,
    path: Path,
    offsets: tuple[int, ...],
) -> tuple[CommentToken, ...]:
    """Collect `#` comments in source order.

    Tokenizer columns count characters; they are converted to UTF-8 byte
    columns so they compare with ast col_offset.

    Args:
        source: Source text
        path: Source file path (for errors)
        offsets: Byte offset of every line start

    Returns:
        Comment tokens in offset order

    Raises:
        ParseError: If source cannot be tokenized (FAIL-FIRST)
    """
    comments: list[CommentToken] = []

    try:
        for token in tokenize.generate_tokens(io.StringIO(source).readline):
            if token.type != tokenize.COMMENT:
                continue
            line, char_column = token.start
            column = len(token.line[:char_column].encode("utf-8"))
            comments.append(
                CommentToken(
                    text=token.string,
                    line=line,
                    column=column,
                    offset=offsets[line - 1] + column,
                )
            )
    except (tokenize.TokenError, SyntaxError) as e:
        raise ParseError(path=str(path), reason=f"tokenize error: {e}") from e

    return tuple(comments)


def build_comment_index(
    tree: ast.Module,
    source: str,
    path: Path,
    offsets: tuple[int, ...],
) -> CommentIndex:
    """Extract comments and attach them against node start lines.

    Args:
        tree: Parsed module
        source: Source text
        path: Source file path
        offsets: Byte offset of every line start

    Returns:
        CommentIndex for the unit
    """
    comments = extract_comments(source, path, offsets)
    if not comments:
        return CommentIndex.empty()
    return CommentIndex.build(node_start_lines(tree), comments)
