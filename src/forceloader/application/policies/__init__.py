"""Classification policies.

Each policy decides which classes are resolvers and which calls reach the
restricted surface:
- FieldSuffixPolicy: resolver/field names by suffix (default)
- PackagePathPolicy: marker embedding and restricted package paths
"""

from forceloader.application.policies._base import ClassificationPolicy
from forceloader.application.policies._registry import policy_from_config
from forceloader.application.policies.field_suffix import FieldSuffixPolicy
from forceloader.application.policies.package_path import PackagePathPolicy, in_package

__all__ = [
    # Base
    "ClassificationPolicy",
    # Policies
    "FieldSuffixPolicy",
    "PackagePathPolicy",
    # Factory functions
    "policy_from_config",
    "in_package",
]
