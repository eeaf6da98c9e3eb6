"""Application services for loader boundary analysis.

ForceLoaderAnalyzer is the main facade for running an analysis.
"""

from forceloader.application.services.analyzer import (
    ForceLoaderAnalyzer,
    analyze_path,
    assert_clean,
)

__all__ = [
    "ForceLoaderAnalyzer",
    "analyze_path",
    "assert_clean",
]
