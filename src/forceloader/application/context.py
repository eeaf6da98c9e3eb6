"""Per-run analysis state.

Owned by one analysis run: constructed fresh by ForceLoaderAnalyzer.analyze()
and passed to each phase. Nothing survives between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from forceloader.domain.exceptions import InitializationError

if TYPE_CHECKING:
    from forceloader.domain.model.configuration import AnalyzerConfig
    from forceloader.domain.model.diagnostic import Diagnostic
    from forceloader.domain.model.program import Program


@dataclass(slots=True)
class RunContext:
    """Mutable state of a single run.

    Classification is a barrier: resolvers and restricted_surface are set
    once, over the whole program, before any call site is filtered.

    Attributes:
        config: Analyzer configuration
        program: Program under analysis
        diagnostics: Reported diagnostics, append-only
        resolver_methods: Checked resolver methods counter
        call_sites: Extracted call sites counter
        suppressed: Suppressed violations counter
    """

    config: AnalyzerConfig
    program: Program
    diagnostics: list[Diagnostic] = field(default_factory=list)
    resolver_methods: int = 0
    call_sites: int = 0
    suppressed: int = 0
    _resolvers: frozenset[str] | None = None
    _restricted_surface: frozenset[str] | None = None

    def complete_classification(
        self,
        resolvers: frozenset[str],
        restricted_surface: frozenset[str],
    ) -> None:
        """Record whole-program classification. Allowed once per run.

        Raises:
            RuntimeError: If classification already completed
        """
        if self.is_classified:
            raise RuntimeError("classification already completed for this run")
        self._resolvers = frozenset(resolvers)
        self._restricted_surface = frozenset(restricted_surface)

    @property
    def is_classified(self) -> bool:
        return self._resolvers is not None

    @property
    def resolvers(self) -> frozenset[str]:
        """Resolver set. Fails before the classification barrier."""
        if self._resolvers is None:
            raise InitializationError("resolver classification has not run")
        return self._resolvers

    @property
    def restricted_surface(self) -> frozenset[str]:
        """Restricted surface set. Fails before the classification barrier."""
        if self._restricted_surface is None:
            raise InitializationError("restricted surface classification has not run")
        return self._restricted_surface

    def record(self, diagnostic: Diagnostic) -> None:
        """Append diagnostic. Never deduplicates."""
        self.diagnostics.append(diagnostic)
