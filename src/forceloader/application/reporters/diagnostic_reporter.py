"""Diagnostic emission for matched call sites."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from forceloader.domain.model.diagnostic import ANALYZER_NAME, Diagnostic

if TYPE_CHECKING:
    from forceloader.application.context import RunContext
    from forceloader.domain.model.call_site import AccessMatch
    from forceloader.domain.ports.diagnostic_sink import DiagnosticSink


@dataclass(slots=True)
class ListSink:
    """Sink collecting diagnostics in memory."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)


class DiagnosticReporter:
    """Turns unsuppressed matches into diagnostics.

    Each match yields exactly one diagnostic at the literal call location,
    recorded in the run context and forwarded to the host sink.
    """

    def __init__(
        self,
        ctx: RunContext,
        sink: DiagnosticSink | None = None,
        *,
        analyzer_name: str = ANALYZER_NAME,
    ) -> None:
        self._ctx = ctx
        self._sink = sink
        self._analyzer_name = analyzer_name

    def report(self, match: AccessMatch) -> Diagnostic:
        """Emit diagnostic for match.

        Args:
            match: Unsuppressed access match

        Returns:
            The emitted diagnostic
        """
        diagnostic = Diagnostic(
            location=match.call_site.location,
            message=match.message,
            analyzer=self._analyzer_name,
        )
        self._ctx.record(diagnostic)
        if self._sink is not None:
            self._sink.report(diagnostic)
        return diagnostic
