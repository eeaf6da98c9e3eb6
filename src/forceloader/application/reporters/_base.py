"""Base reporter class for output formatting.

Provides default implementation of ReporterProtocol.
Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from forceloader.domain.model.result import AnalysisResult


class BaseReporter(ABC):
    """Base class for reporters implementing ReporterProtocol.

    forceloader provides PlainTextReporter and JSONReporter as defaults.

    Example:
        class CountReporter(BaseReporter):
            def report(self, result: AnalysisResult) -> None:
                print(f"Diagnostics: {result.diagnostic_count}")
    """

    @abstractmethod
    def report(self, result: AnalysisResult) -> None:
        """Report analysis results.

        Args:
            result: Complete analysis result with diagnostics and stats
        """
