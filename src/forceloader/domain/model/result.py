"""Analysis result aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from forceloader.domain.model.diagnostic import Diagnostic


@dataclass(frozen=True, slots=True)
class RunStats:
    """Statistics of one analysis run.

    Attributes:
        units_analyzed: Compilation units in the program
        resolver_methods: Methods of resolver classes that were checked
        call_sites: Candidate call sites extracted
        suppressed: Violations silenced by nolint directives
        analysis_time_ms: Wall time of the run
    """

    units_analyzed: int
    resolver_methods: int
    call_sites: int
    suppressed: int
    analysis_time_ms: float

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for name in ("units_analyzed", "resolver_methods", "call_sites", "suppressed"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.analysis_time_ms < 0:
            raise ValueError(f"analysis_time_ms must be >= 0, got {self.analysis_time_ms}")


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Result of one analysis run.

    Attributes:
        diagnostics: Unsuppressed violations in report order
        resolvers: Qualified names of classes classified as resolvers
        restricted_surface: Restricted member names or package paths
        stats: Run statistics
    """

    diagnostics: tuple[Diagnostic, ...]
    resolvers: frozenset[str]
    restricted_surface: frozenset[str]
    stats: RunStats

    @property
    def passed(self) -> bool:
        return not self.diagnostics

    @property
    def diagnostic_count(self) -> int:
        return len(self.diagnostics)
