"""Package-path policy: symbol based classification.

    from app.graph import base
    from app import usecase

    class UserResolver(base.Resolver):          # embeds marker type
        users: usecase.UserUseCase

        def user(self, id):
            return self.users.get(id)           # app.usecase.UserUseCase.get
                                                # → under "app.usecase", flagged
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from forceloader.application.analysis.origin import OriginResolver
from forceloader.application.policies._base import ClassificationPolicy
from forceloader.domain.model.call_site import AccessMatch
from forceloader.domain.model.configuration import DEFAULT_EXCLUDES, Policy
from forceloader.infrastructure.adapters.ast_parser import ASTSourceParser
from forceloader.infrastructure.adapters.cached_parser import CachedSourceParser

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from forceloader.application.context import RunContext
    from forceloader.domain.model.call_site import CallSite
    from forceloader.domain.model.configuration import AnalyzerConfig
    from forceloader.domain.model.program import CompilationUnit, Program

logger = logging.getLogger(__name__)


def in_package(qualified_name: str, package: str) -> bool:
    """Check if qualified name lies in package or one of its subpackages.

    Examples:
        in_package("app.usecase.User.get", "app.usecase") → True
        in_package("app.usecase", "app.usecase")          → True
        in_package("app.usecases.get", "app.usecase")     → False
    """
    return qualified_name == package or qualified_name.startswith(f"{package}.")


class PackagePathPolicy(ClassificationPolicy):
    """Marker-embedding resolver policy with package-path restricted surface.

    Resolvers: classes with a base matching resolver_marker_type, either as
    written or after resolution through the module's imports.
    Restricted surface: configured package paths.
    Match: callee resolves (via field types or imports) into a restricted
    package. The diagnostic names the recovered access path and the resolver
    method.

    Comments and origin text come from an on-demand, cached re-parse of the
    file holding the call site.
    """

    policy = Policy.PACKAGE_PATH

    def __init__(
        self,
        *,
        resolver_marker_type: str,
        restricted_packages: tuple[str, ...],
        ignore_resolver_markers: frozenset[str] = frozenset(),
        exclude: frozenset[str] = DEFAULT_EXCLUDES,
        reparse: Callable[[Path], CompilationUnit] | None = None,
    ) -> None:
        """Initialize policy.

        Args:
            resolver_marker_type: Embedded type identifying resolvers
            restricted_packages: Package paths resolvers must not call
            ignore_resolver_markers: Class names (simple or qualified)
                exempted from resolver classification
            exclude: Directory names skipped by the re-parser
            reparse: Injected re-parse callable. None builds a cached
                parser rooted at the analyzed program.
        """
        if not resolver_marker_type:
            raise ValueError("resolver_marker_type must not be empty")
        if not restricted_packages:
            raise ValueError("restricted_packages must not be empty")

        self._marker = resolver_marker_type
        self._packages = restricted_packages
        self._ignored = ignore_resolver_markers
        self._exclude = exclude
        self._injected = reparse
        self._reparse = reparse
        self._root: Path | None = None

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> Self:
        return cls(
            resolver_marker_type=config.resolver_marker_type,
            restricted_packages=config.restricted_packages,
            ignore_resolver_markers=config.ignore_resolver_markers,
            exclude=config.exclude,
        )

    @property
    def reparse(self) -> Callable[[Path], CompilationUnit] | None:
        return self._reparse

    def bind(self, program: Program) -> None:
        """Root the re-parser at the program. Cache survives same-root runs."""
        if self._injected is not None or self._root == program.root_path:
            return

        parser = CachedSourceParser(ASTSourceParser(program.root_path, exclude=self._exclude))
        self._reparse = parser.parse_file
        self._root = program.root_path

    def classify_resolvers(self, program: Program) -> frozenset[str]:
        resolvers: set[str] = set()

        for unit, decl in program.iter_types():
            if decl.name in self._ignored or decl.qualified_name in self._ignored:
                continue
            if any(self._is_marker(unit, f.type_name) for f in decl.embedded_fields):
                resolvers.add(decl.qualified_name)

        logger.debug("resolver classes: %s", sorted(resolvers))
        return frozenset(resolvers)

    def classify_restricted_surface(self, program: Program) -> frozenset[str]:
        return frozenset(self._packages)

    def match(self, site: CallSite, ctx: RunContext) -> AccessMatch | None:
        callee = self.resolve_callee(site, ctx.program)
        if callee is None:
            return None
        if not any(in_package(callee, package) for package in ctx.restricted_surface):
            return None

        origin = OriginResolver(self._reparse).resolve(site)
        return AccessMatch(
            call_site=site,
            access_path=origin,
            context_name=site.method.qualified_name,
        )

    def resolve_callee(self, site: CallSite, program: Program) -> str | None:
        """Fully qualified name of the called function or method.

        Resolution:
            receiver.field.rest  → declared type of field (qualified) + rest
            imported.rest        → import target + rest
            anything else        → None (opaque)
        """
        chain = site.target_chain
        if not chain:
            return None

        unit = site.unit
        head, *rest = chain

        if head == site.method.receiver_name:
            if len(rest) < 2:
                return None
            owner = unit.find_type(site.method.receiver_type)
            if owner is None:
                return None
            found = program.lookup_field(unit, owner, rest[0])
            if found is None:
                return None
            field_unit, field = found
            return ".".join([field_unit.qualify(field.type_name), *rest[1:]])

        if head not in (unit.imports or {}):
            return None
        return unit.qualify(".".join(chain))

    def _is_marker(self, unit: CompilationUnit, type_name: str) -> bool:
        return type_name == self._marker or unit.qualify(type_name) == self._marker
