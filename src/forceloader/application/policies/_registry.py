"""Policy registry.

Maps the configured Policy to its implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from forceloader.application.policies._base import ClassificationPolicy
from forceloader.application.policies.field_suffix import FieldSuffixPolicy
from forceloader.application.policies.package_path import PackagePathPolicy

if TYPE_CHECKING:
    from forceloader.domain.model.configuration import AnalyzerConfig


# Registry - tuple for immutability
_ALL_POLICIES: tuple[type[ClassificationPolicy], ...] = (
    FieldSuffixPolicy,
    PackagePathPolicy,
)


def policy_from_config(config: AnalyzerConfig) -> ClassificationPolicy:
    """Instantiate the policy selected by config.

    Args:
        config: Validated configuration

    Returns:
        Active classification policy

    Raises:
        LookupError: If no policy is registered for config.policy
    """
    for policy_cls in _ALL_POLICIES:
        if policy_cls.policy is config.policy:
            return policy_cls.from_config(config)

    raise LookupError(f"no policy registered for {config.policy.value}")
