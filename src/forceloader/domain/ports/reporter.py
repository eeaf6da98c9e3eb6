"""Reporter protocol for output formatting.

Users extend forceloader by implementing this Protocol.
NOT rich-specific - users can adapt to any output format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from forceloader.domain.model.result import AnalysisResult


class ReporterProtocol(Protocol):
    """Contract for reporters.

    forceloader provides PlainTextReporter and JSONReporter as defaults.
    ConsoleReporter is separate: it returns a rich formatted string.
    """

    def report(self, result: AnalysisResult) -> None:
        """Report analysis results.

        Implementation decides output format and destination.

        Args:
            result: Complete analysis result with diagnostics and stats
        """
        ...
