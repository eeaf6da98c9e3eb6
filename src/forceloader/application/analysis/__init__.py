"""Per-method analysis: extraction, origin resolution, suppression."""

from forceloader.application.analysis.call_sites import CallSiteExtractor
from forceloader.application.analysis.origin import OriginResolver
from forceloader.application.analysis.suppression import SuppressionMatcher, is_directive

__all__ = [
    "CallSiteExtractor",
    "OriginResolver",
    "SuppressionMatcher",
    "is_directive",
]
