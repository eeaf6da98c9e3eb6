"""forceloader - keeps resolver classes from calling the use-case layer directly."""

__version__ = "0.1.0"

from forceloader.application.services.analyzer import (
    ForceLoaderAnalyzer,
    analyze_path,
    assert_clean,
)
from forceloader.domain.model.configuration import AnalyzerConfig, Policy

__all__ = [
    "AnalyzerConfig",
    "ForceLoaderAnalyzer",
    "Policy",
    "__version__",
    "analyze_path",
    "assert_clean",
]
