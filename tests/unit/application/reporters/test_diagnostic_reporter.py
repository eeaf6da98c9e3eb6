"""Tests for reporters/diagnostic_reporter.py."""

from pathlib import Path

from forceloader.application.analysis.call_sites import CallSiteExtractor
from forceloader.application.context import RunContext
from forceloader.application.reporters.diagnostic_reporter import DiagnosticReporter, ListSink
from forceloader.domain.model.call_site import AccessMatch
from forceloader.domain.model.configuration import AnalyzerConfig
from forceloader.domain.model.program import Program
from tests.factories import get_method, make_unit

SOURCE = """
class QueryResolver:
    def user(self, id):
        x = 1
        return (
            self.use_case.get(id)
        )
"""


def make_match(tmp_path: Path) -> AccessMatch:
    unit = make_unit(tmp_path, SOURCE)
    (site,) = CallSiteExtractor().extract(get_method(unit, "user"), unit)
    return AccessMatch(call_site=site, access_path="use_case.get", context_name="UserUseCase")


class TestDiagnosticReporter:
    """Tests for match → diagnostic emission."""

    def test_records_and_forwards(self, tmp_path: Path) -> None:
        ctx = RunContext(config=AnalyzerConfig(), program=Program.empty())
        sink = ListSink()

        diagnostic = DiagnosticReporter(ctx, sink).report(make_match(tmp_path))

        assert ctx.diagnostics == [diagnostic]
        assert sink.diagnostics == [diagnostic]
        assert diagnostic.message == "use_case.get cannot be used in UserUseCase"
        assert diagnostic.analyzer == "forceloader"

    def test_location_is_call_not_statement(self, tmp_path: Path) -> None:
        ctx = RunContext(config=AnalyzerConfig(), program=Program.empty())

        diagnostic = DiagnosticReporter(ctx).report(make_match(tmp_path))

        assert diagnostic.location.line == 5
        assert diagnostic.location.column == 12

    def test_never_deduplicates(self, tmp_path: Path) -> None:
        ctx = RunContext(config=AnalyzerConfig(), program=Program.empty())
        reporter = DiagnosticReporter(ctx)
        match = make_match(tmp_path)

        reporter.report(match)
        reporter.report(match)

        assert len(ctx.diagnostics) == 2
