"""Analyzer configuration.

Options arrive string-typed from the host (comma-separated lists).
Two classification policies exist; exactly one is active per run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Self

from forceloader.domain.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping


class Policy(Enum):
    """Classification policy.

    FIELD_SUFFIX: pure syntax. Resolvers are *Resolver classes embedding
        `Resolver`; restricted members are `Resolver` fields typed *UseCase.
    PACKAGE_PATH: symbol based. Resolvers embed a configured marker type;
        restricted calls resolve into configured packages.
    """

    FIELD_SUFFIX = "field_suffix"
    PACKAGE_PATH = "package_path"


# Default directories to exclude from parsing
DEFAULT_EXCLUDES = frozenset(
    {
        "__pycache__",
        ".venv",
        ".git",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "node_modules",
        ".tox",
        ".nox",
        "build",
        "dist",
        ".eggs",
    },
)

DEFAULT_IGNORE_RESOLVER_NAMES = frozenset({"queryResolver", "mutationResolver"})

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def split_list(value: str) -> tuple[str, ...]:
    """Split comma-separated option value, dropping blanks.

    Examples:
        "a.usecase, b.usecase" → ("a.usecase", "b.usecase")
        ""                      → ()
    """
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _parse_bool(option: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(option=option, reason=f"expected boolean, got '{value}'")


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    """Analyzer configuration DTO.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        # Policy selection
        policy: Active classification policy.

        # Field-suffix policy
        resolver_suffix: Class name suffix of resolver classes.
        restricted_field_suffix: Type name suffix of restricted `Resolver` fields.
        ignore_resolver_names: Resolver class names exempted from checking.

        # Package-path policy
        resolver_marker_type: Embedded type identifying resolvers (required).
        restricted_packages: Package paths resolvers must not call (required).
        ignore_resolver_markers: Class names exempted from resolver classification.

        # Suppression
        require_column_match: Previous-line nolint must share the column.

        # Discovery
        exclude: Directory names skipped when reading a source tree.
    """

    policy: Policy = Policy.FIELD_SUFFIX

    resolver_suffix: str = "Resolver"
    restricted_field_suffix: str = "UseCase"
    ignore_resolver_names: frozenset[str] = DEFAULT_IGNORE_RESOLVER_NAMES

    resolver_marker_type: str = ""
    restricted_packages: tuple[str, ...] = ()
    ignore_resolver_markers: frozenset[str] = frozenset()

    require_column_match: bool = False

    exclude: frozenset[str] = DEFAULT_EXCLUDES

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.policy, Policy):
            raise ConfigurationError(
                option="policy",
                reason=f"expected Policy, got {type(self.policy).__name__}",
            )

        match self.policy:
            case Policy.FIELD_SUFFIX:
                if not self.resolver_suffix:
                    raise ConfigurationError(option="resolverSuffix", reason="must not be empty")
                if not self.restricted_field_suffix:
                    raise ConfigurationError(
                        option="restrictedFieldSuffix", reason="must not be empty"
                    )
                if self.resolver_marker_type or self.restricted_packages:
                    raise ConfigurationError(
                        option="policy",
                        reason="package-path options require policy=package_path",
                    )
            case Policy.PACKAGE_PATH:
                if not self.resolver_marker_type:
                    raise ConfigurationError(
                        option="resolverMarkerType", reason="required for package_path policy"
                    )
                if not self.restricted_packages:
                    raise ConfigurationError(
                        option="restrictedPackages", reason="required for package_path policy"
                    )
                for package in self.restricted_packages:
                    if not package or package != package.strip():
                        raise ConfigurationError(
                            option="restrictedPackages",
                            reason=f"invalid package path '{package}'",
                        )

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> Self:
        """Build config from string-typed host options.

        Recognized keys: policy, resolverSuffix, restrictedFieldSuffix,
        ignoreResolverNames, resolverMarkerType, restrictedPackages,
        ignoreResolverMarkers, requireColumnMatch.

        Without an explicit `policy`, the presence of resolverMarkerType or
        restrictedPackages selects the package-path policy.

        Args:
            options: Option key → raw string value

        Returns:
            Validated AnalyzerConfig

        Raises:
            ConfigurationError: Unknown key or invalid value
        """
        unknown = sorted(set(options) - _OPTION_KEYS)
        if unknown:
            raise ConfigurationError(option=unknown[0], reason="unknown option")

        if "policy" in options:
            try:
                policy = Policy(options["policy"].strip().lower())
            except ValueError as e:
                raise ConfigurationError(
                    option="policy", reason=f"unknown policy '{options['policy']}'"
                ) from e
        elif options.get("resolverMarkerType") or options.get("restrictedPackages"):
            policy = Policy.PACKAGE_PATH
        else:
            policy = Policy.FIELD_SUFFIX

        kwargs: dict[str, object] = {"policy": policy}
        if "resolverSuffix" in options:
            kwargs["resolver_suffix"] = options["resolverSuffix"].strip()
        if "restrictedFieldSuffix" in options:
            kwargs["restricted_field_suffix"] = options["restrictedFieldSuffix"].strip()
        if "ignoreResolverNames" in options:
            kwargs["ignore_resolver_names"] = frozenset(split_list(options["ignoreResolverNames"]))
        if "resolverMarkerType" in options:
            kwargs["resolver_marker_type"] = options["resolverMarkerType"].strip()
        if "restrictedPackages" in options:
            kwargs["restricted_packages"] = split_list(options["restrictedPackages"])
        if "ignoreResolverMarkers" in options:
            kwargs["ignore_resolver_markers"] = frozenset(
                split_list(options["ignoreResolverMarkers"])
            )
        if "requireColumnMatch" in options:
            kwargs["require_column_match"] = _parse_bool(
                "requireColumnMatch", options["requireColumnMatch"]
            )

        return cls(**kwargs)  # type: ignore[arg-type]


_OPTION_KEYS = frozenset(
    {
        "policy",
        "resolverSuffix",
        "restrictedFieldSuffix",
        "ignoreResolverNames",
        "resolverMarkerType",
        "restrictedPackages",
        "ignoreResolverMarkers",
        "requireColumnMatch",
    }
)
