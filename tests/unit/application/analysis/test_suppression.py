"""Tests for application/analysis/suppression.py."""

import dataclasses
import logging
from pathlib import Path

import pytest

from forceloader.application.analysis.call_sites import CallSiteExtractor
from forceloader.application.analysis.suppression import SuppressionMatcher, is_directive
from forceloader.domain.exceptions import InitializationError, ParseError
from forceloader.domain.model.call_site import CallSite
from tests.factories import get_method, make_unit


def sites(tmp_path: Path, source: str) -> list[CallSite]:
    unit = make_unit(tmp_path, source)
    return list(CallSiteExtractor().extract(get_method(unit, "user"), unit))


class TestIsDirective:
    """Tests for directive parsing."""

    @pytest.mark.parametrize(
        "text",
        [
            "# nolint: forceloader",
            "#nolint:forceloader",
            "# nolint: gocyclo, forceloader",
            "# nolint: forceloader, gocyclo",
        ],
    )
    def test_names_analyzer(self, text: str) -> None:
        assert is_directive(text)

    @pytest.mark.parametrize(
        "text",
        [
            "# nolint",
            "# nolint: other",
            "# noqa: forceloader",
            "# forceloader",
            "# nolint: forceloaders",
        ],
    )
    def test_does_not_name_analyzer(self, text: str) -> None:
        assert not is_directive(text)

    def test_custom_analyzer_name(self) -> None:
        assert is_directive("# nolint: boundary", "boundary")


class TestSuppressionMatcher:
    """Tests for positional eligibility."""

    def test_same_line(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                self.use_case.get(id)  # nolint: forceloader
        """
        (site,) = sites(tmp_path, source)
        assert SuppressionMatcher().is_suppressed(site)

    def test_same_line_other_analyzer(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                self.use_case.get(id)  # nolint: other
        """
        (site,) = sites(tmp_path, source)
        assert not SuppressionMatcher().is_suppressed(site)

    def test_previous_line_attached(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                # nolint: forceloader
                return self.use_case.get(id)
        """
        (site,) = sites(tmp_path, source)
        assert SuppressionMatcher().is_suppressed(site)

    def test_previous_line_trailing_comment_does_not_suppress(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                x = 1  # nolint: forceloader
                return self.use_case.get(id)
        """
        (site,) = sites(tmp_path, source)
        assert not SuppressionMatcher().is_suppressed(site)

    def test_two_lines_above_does_not_suppress(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                # nolint: forceloader

                return self.use_case.get(id)
        """
        (site,) = sites(tmp_path, source)
        assert not SuppressionMatcher().is_suppressed(site)

    def test_effective_position_is_statement(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                x = (  # nolint: forceloader
                    self.use_case.get(id)
                )
        """
        (site,) = sites(tmp_path, source)

        assert site.location.line == 4
        assert SuppressionMatcher().is_suppressed(site)

    def test_column_match_required(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
            # nolint: forceloader
                return self.use_case.get(id)
        """
        (site,) = sites(tmp_path, source)

        assert SuppressionMatcher().is_suppressed(site)
        assert not SuppressionMatcher(require_column_match=True).is_suppressed(site)

    def test_column_match_aligned(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                # nolint: forceloader
                return self.use_case.get(id)
        """
        (site,) = sites(tmp_path, source)
        assert SuppressionMatcher(require_column_match=True).is_suppressed(site)

    def test_missing_comment_stream_raises(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                self.use_case.get(id)
        """
        (site,) = sites(tmp_path, source)
        bare = dataclasses.replace(site, unit=dataclasses.replace(site.unit, comments=None))

        with pytest.raises(InitializationError, match="no comment index"):
            SuppressionMatcher().is_suppressed(bare)

    def test_reparse_supplies_comments(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                self.use_case.get(id)  # nolint: forceloader
        """
        (site,) = sites(tmp_path, source)
        bare = dataclasses.replace(site, unit=dataclasses.replace(site.unit, comments=None))

        matcher = SuppressionMatcher(reparse=lambda path: site.unit)

        assert matcher.is_suppressed(bare)

    def test_reparse_failure_is_not_suppressed(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        source = """
        class Q:
            def user(self, id):
                self.use_case.get(id)  # nolint: forceloader
        """
        (site,) = sites(tmp_path, source)

        def broken(path: Path):
            raise ParseError(path=str(path), reason="syntax error")

        with caplog.at_level(logging.WARNING):
            suppressed = SuppressionMatcher(reparse=broken).is_suppressed(site)

        assert not suppressed
        assert "suppression lookup skipped" in caplog.text

    def test_empty_analyzer_name(self) -> None:
        with pytest.raises(ValueError, match="analyzer_name"):
            SuppressionMatcher("")
