"""Tests for domain/model/comment.py."""

import pytest

from forceloader.domain.model.comment import CommentIndex, CommentToken


def token(text: str, line: int, column: int = 0) -> CommentToken:
    # Offsets only need to be ordered for the index
    return CommentToken(text=text, line=line, column=column, offset=line * 100 + column)


class TestCommentToken:
    """Tests for CommentToken validation."""

    def test_valid(self) -> None:
        comment = CommentToken(text="# nolint: forceloader", line=3, column=4, offset=40)
        assert comment.text == "# nolint: forceloader"
        assert comment.line == 3

    def test_empty_text_raises(self) -> None:
        with pytest.raises(ValueError, match="text must not be empty"):
            CommentToken(text="", line=1, column=0, offset=0)

    def test_zero_line_raises(self) -> None:
        with pytest.raises(ValueError, match="line must be > 0"):
            CommentToken(text="#", line=0, column=0, offset=0)

    def test_negative_offset_raises(self) -> None:
        with pytest.raises(ValueError, match="offset must be >= 0"):
            CommentToken(text="#", line=1, column=0, offset=-1)


class TestCommentIndexBuild:
    """Tests for the two-pointer attachment merge."""

    def test_comment_alone_on_line_is_attached(self) -> None:
        comment = token("# note", line=2, column=4)

        index = CommentIndex.build([1, 3], [comment])

        assert index.is_attached(comment)
        assert index.attached_on_line(2) == (comment,)

    def test_trailing_comment_is_not_attached(self) -> None:
        comment = token("# trailing", line=3, column=20)

        index = CommentIndex.build([1, 3, 3, 4], [comment])

        assert not index.is_attached(comment)
        assert index.on_line(3) == (comment,)
        assert index.attached_on_line(3) == ()

    def test_comment_after_last_node_is_attached(self) -> None:
        comment = token("# end", line=10)

        index = CommentIndex.build([1, 2], [comment])

        assert index.is_attached(comment)

    def test_mixed_stream(self) -> None:
        header = token("# header", line=1)
        trailing = token("# trailing", line=2, column=12)
        above = token("# above", line=3, column=4)

        index = CommentIndex.build([2, 4, 4, 5], [above, header, trailing])

        assert index.comments == (header, trailing, above)
        assert index.attached == frozenset({header, above})
        assert len(index) == 3

    def test_node_lines_order_irrelevant(self) -> None:
        comment = token("# x", line=2)

        index = CommentIndex.build([5, 1, 3], [comment])

        assert index.is_attached(comment)

    def test_multiple_comments_on_line_in_offset_order(self) -> None:
        first = CommentToken(text="# a", line=2, column=0, offset=10)
        second = CommentToken(text="# b", line=2, column=4, offset=14)

        index = CommentIndex.build([1], [second, first])

        assert index.on_line(2) == (first, second)


class TestCommentIndexEmpty:
    """Tests for CommentIndex.empty()."""

    def test_empty(self) -> None:
        index = CommentIndex.empty()
        assert len(index) == 0
        assert index.on_line(1) == ()
        assert index.attached_on_line(1) == ()
