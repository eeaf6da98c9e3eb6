"""Tests for application/analysis/origin.py."""

import ast
import logging
from pathlib import Path

import pytest

from forceloader.application.analysis.call_sites import CallSiteExtractor
from forceloader.application.analysis.origin import (
    OriginResolver,
    find_enclosing,
    shortest_access,
)
from forceloader.domain.exceptions import ParseError
from forceloader.domain.model.call_site import CallSite
from forceloader.infrastructure.adapters.ast_parser import ASTSourceParser
from forceloader.infrastructure.adapters.cached_parser import CachedSourceParser
from forceloader.infrastructure.analyzers.base import iter_statements
from tests.factories import get_method, make_unit


def first_site(tmp_path: Path, source: str) -> CallSite:
    unit = make_unit(tmp_path, source)
    return next(iter(CallSiteExtractor().extract(get_method(unit, "user"), unit)))


class TestOriginResolver:
    """Tests for access path recovery."""

    def test_member_access(self, tmp_path: Path) -> None:
        site = first_site(
            tmp_path,
            """
            class Q:
                def user(self, id):
                    return self.use_case.get(id)
            """,
        )
        assert OriginResolver().resolve(site) == "self.use_case.get"

    def test_multiline_arguments(self, tmp_path: Path) -> None:
        site = first_site(
            tmp_path,
            """
            class Q:
                def user(self, id):
                    return self.use_case.get(
                        id,
                        key=lambda item: item.name,
                    )
            """,
        )
        assert OriginResolver().resolve(site) == "self.use_case.get"

    def test_shortest_attribute_wins(self, tmp_path: Path) -> None:
        site = first_site(
            tmp_path,
            """
            class Q:
                def user(self, id):
                    x = self.use_case.get(id).first()
            """,
        )
        assert OriginResolver().resolve(site) == "self.use_case.get"

    def test_plain_name_falls_back_to_call_text(self, tmp_path: Path) -> None:
        site = first_site(
            tmp_path,
            """
            class Q:
                def user(self, id):
                    x = get_user(self.key)
            """,
        )
        assert OriginResolver().resolve(site) == "get_user(self.key)"

    def test_reparse_through_cached_parser(self, tmp_path: Path) -> None:
        site = first_site(
            tmp_path,
            """
            class Q:
                def user(self, id):
                    return self.use_case.get(id)
            """,
        )
        parser = CachedSourceParser(ASTSourceParser(tmp_path))

        assert OriginResolver(parser.parse_file).resolve(site) == "self.use_case.get"
        assert parser.cache_size == 1

    def test_reparse_failure_recovered(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        site = first_site(
            tmp_path,
            """
            class Q:
                def user(self, id):
                    return self.use_case.get(id)
            """,
        )

        def broken(path: Path):
            raise ParseError(path=str(path), reason="syntax error")

        with caplog.at_level(logging.WARNING):
            text = OriginResolver(broken).resolve(site)

        assert text == "self.use_case.get(id)"
        assert "origin resolution skipped" in caplog.text


class TestFindEnclosing:
    """Tests for the pre-order statement bracket."""

    def test_brackets_target(self, tmp_path: Path) -> None:
        unit = make_unit(tmp_path, "a = 1\nif a:\n    b = f(a)\nc = 3\n")
        statements = list(iter_statements(unit.tree))
        target = unit.offset(3, 9)

        enclosing = find_enclosing(unit, statements, target)

        assert isinstance(enclosing, ast.Assign)
        assert enclosing.lineno == 3

    def test_last_statement(self, tmp_path: Path) -> None:
        unit = make_unit(tmp_path, "a = 1\nb = f(a)\n")
        statements = list(iter_statements(unit.tree))

        enclosing = find_enclosing(unit, statements, unit.offset(2, 5))

        assert enclosing is statements[-1]

    def test_empty_sequence(self, tmp_path: Path) -> None:
        unit = make_unit(tmp_path, "a = 1\n")
        assert find_enclosing(unit, [], 0) is None


class TestShortestAccess:
    """Tests for shortest_access()."""

    def test_none_when_no_attribute_contains_target(self, tmp_path: Path) -> None:
        unit = make_unit(tmp_path, "x = f(a.b)\n")
        assert shortest_access(unit, unit.tree.body[0], unit.offset(1, 5)) is None

    def test_picks_innermost(self, tmp_path: Path) -> None:
        unit = make_unit(tmp_path, "x = a.b.c(1).d\n")

        access = shortest_access(unit, unit.tree.body[0], unit.offset(1, 9))

        assert access is not None
        assert ast.unparse(access) == "a.b.c"
