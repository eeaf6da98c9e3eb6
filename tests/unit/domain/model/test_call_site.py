"""Tests for domain/model/call_site.py."""

from pathlib import Path

import pytest

from forceloader.application.analysis.call_sites import CallSiteExtractor
from forceloader.domain.model.call_site import AccessMatch, CallSite
from tests.factories import get_method, make_unit

SOURCE = """
class QueryResolver:
    def user(self, id):
        self.use_case.get(id)
        get_user(id)
        self.repo().get(id)
"""


def sites(tmp_path: Path) -> list[CallSite]:
    unit = make_unit(tmp_path, SOURCE)
    return list(CallSiteExtractor().extract(get_method(unit, "user"), unit))


class TestCallSite:
    """Tests for CallSite properties."""

    def test_target_chain(self, tmp_path: Path) -> None:
        chains = [site.target_chain for site in sites(tmp_path)]

        assert chains == [("self", "use_case", "get"), ("get_user",), ("self", "repo")]

    def test_location_is_call_expression(self, tmp_path: Path) -> None:
        site = sites(tmp_path)[0]

        assert site.location.line == 3
        assert site.location.column == 8
        assert site.location.end_column == len("        self.use_case.get(id)")

    def test_offset(self, tmp_path: Path) -> None:
        site = sites(tmp_path)[0]
        assert site.offset == site.unit.offset(3, 8)


class TestAccessMatch:
    """Tests for AccessMatch."""

    def test_message(self, tmp_path: Path) -> None:
        match = AccessMatch(
            call_site=sites(tmp_path)[0],
            access_path="use_case.get",
            context_name="UserUseCase",
        )
        assert match.message == "use_case.get cannot be used in UserUseCase"

    def test_empty_access_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="access_path must not be empty"):
            AccessMatch(call_site=sites(tmp_path)[0], access_path="", context_name="X")

    def test_empty_context_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="context_name must not be empty"):
            AccessMatch(call_site=sites(tmp_path)[0], access_path="a.b", context_name="")
