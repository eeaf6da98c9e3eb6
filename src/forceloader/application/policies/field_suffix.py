"""Field-suffix policy: pure syntax classification.

    class Resolver:                        # restricted surface source
        loader: Loader
        user_use_case: UserUseCase         # *UseCase → "user_use_case" restricted

    class QueryResolver(Resolver):         # *Resolver embedding Resolver
        async def user(self, id):
            return await self.user_use_case.get(id)   # flagged
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from forceloader.application.policies._base import ClassificationPolicy
from forceloader.domain.model.call_site import AccessMatch
from forceloader.domain.model.configuration import Policy
from forceloader.domain.model.declarations import type_basename

if TYPE_CHECKING:
    from forceloader.application.context import RunContext
    from forceloader.domain.model.call_site import CallSite
    from forceloader.domain.model.configuration import AnalyzerConfig
    from forceloader.domain.model.declarations import TypeDeclaration
    from forceloader.domain.model.program import Program

logger = logging.getLogger(__name__)

# Name of the root resolver class that aggregates dependencies
ROOT_RESOLVER = "Resolver"


class FieldSuffixPolicy(ClassificationPolicy):
    """Name/embedding resolver policy with field-suffix restricted surface.

    Resolvers: class name ends with resolver_suffix and a base class is
    literally named `Resolver`.
    Restricted surface: named fields of `Resolver` classes whose declared
    type ends with restricted_field_suffix.
    Match: `receiver.field.method(...)` with field restricted.
    """

    policy = Policy.FIELD_SUFFIX

    def __init__(
        self,
        *,
        resolver_suffix: str = "Resolver",
        restricted_field_suffix: str = "UseCase",
        ignore_resolver_names: frozenset[str] = frozenset(),
    ) -> None:
        """Initialize policy.

        Args:
            resolver_suffix: Class name suffix of resolvers
            restricted_field_suffix: Declared type suffix of restricted fields
            ignore_resolver_names: Resolver class names (or field types)
                exempted from checking
        """
        if not resolver_suffix:
            raise ValueError("resolver_suffix must not be empty")
        if not restricted_field_suffix:
            raise ValueError("restricted_field_suffix must not be empty")

        self._resolver_suffix = resolver_suffix
        self._field_suffix = restricted_field_suffix
        self._ignored = ignore_resolver_names

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> Self:
        return cls(
            resolver_suffix=config.resolver_suffix,
            restricted_field_suffix=config.restricted_field_suffix,
            ignore_resolver_names=config.ignore_resolver_names,
        )

    def classify_resolvers(self, program: Program) -> frozenset[str]:
        resolvers: set[str] = set()

        for _, decl in program.iter_types():
            if not decl.name.endswith(self._resolver_suffix):
                continue
            if any(f.type_basename == ROOT_RESOLVER for f in decl.embedded_fields):
                resolvers.add(decl.qualified_name)

        logger.debug("resolver classes: %s", sorted(resolvers))
        return frozenset(resolvers)

    def classify_restricted_surface(self, program: Program) -> frozenset[str]:
        restricted: set[str] = set()

        for _, decl in program.iter_types():
            if decl.name != ROOT_RESOLVER:
                continue
            for field in decl.named_fields:
                if field.type_basename.endswith(self._field_suffix):
                    restricted.add(field.name)

        logger.debug("restricted fields: %s", sorted(restricted))
        return frozenset(restricted)

    def is_checked(self, decl: TypeDeclaration) -> bool:
        return decl.name not in self._ignored

    def match(self, site: CallSite, ctx: RunContext) -> AccessMatch | None:
        chain = site.target_chain
        if len(chain) != 3:
            return None

        receiver, field_name, method_name = chain
        if receiver != site.method.receiver_name:
            return None
        if field_name not in ctx.restricted_surface:
            return None

        owner = site.unit.find_type(site.method.receiver_type)
        if owner is None:
            return None

        found = ctx.program.lookup_field(site.unit, owner, field_name)
        if found is None:
            return None
        _, field = found

        if field.type_name in self._ignored or field.type_basename in self._ignored:
            return None

        return AccessMatch(
            call_site=site,
            access_path=f"{field_name}.{method_name}",
            context_name=type_basename(field.type_name),
        )
