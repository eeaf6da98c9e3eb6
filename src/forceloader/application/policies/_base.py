"""Base class for classification policies.

A policy answers three questions over one run:
    classify_resolvers          - which classes are resolvers
    classify_restricted_surface - which members / packages are restricted
    match                       - does a call site reach the restricted surface
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from forceloader.application.context import RunContext
    from forceloader.domain.model.call_site import AccessMatch, CallSite
    from forceloader.domain.model.configuration import AnalyzerConfig, Policy
    from forceloader.domain.model.declarations import TypeDeclaration
    from forceloader.domain.model.program import CompilationUnit, Program


class ClassificationPolicy(ABC):
    """Interchangeable classification strategy.

    Concrete policies must:
    1. Set `policy` class attribute
    2. Implement classification and matching
    3. Implement `from_config()`

    Exactly one policy is active per run.
    """

    policy: Policy
    """Configuration value selecting this policy."""

    @classmethod
    @abstractmethod
    def from_config(cls, config: AnalyzerConfig) -> Self:
        """Create policy from validated config."""

    @abstractmethod
    def classify_resolvers(self, program: Program) -> frozenset[str]:
        """Qualified names of resolver classes over the whole program.

        Produces no diagnostics.
        """

    @abstractmethod
    def classify_restricted_surface(self, program: Program) -> frozenset[str]:
        """Restricted member names or package paths."""

    @abstractmethod
    def match(self, site: CallSite, ctx: RunContext) -> AccessMatch | None:
        """Classify one call site of a resolver method.

        Args:
            site: Candidate call site
            ctx: Run context past the classification barrier

        Returns:
            AccessMatch with diagnostic subject and context, or None
        """

    def bind(self, program: Program) -> None:
        """Prepare for a run over program. Called before classification."""

    def is_checked(self, decl: TypeDeclaration) -> bool:
        """Whether methods of a resolver class are checked at all."""
        return True

    @property
    def reparse(self) -> Callable[[Path], CompilationUnit] | None:
        """On-demand single-file re-parse used for comments and origin."""
        return None
