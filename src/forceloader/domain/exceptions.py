"""Domain exceptions: all public errors of forceloader.

Hexagonal architecture: all exceptions visible to users defined in domain.
Infrastructure/Application use these, not define their own public exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from forceloader.domain.model.diagnostic import Diagnostic


class ForceLoaderError(Exception):
    """Base for all forceloader error exceptions.

    Allows: except ForceLoaderError to catch all library errors.
    """


class ConfigurationError(ForceLoaderError, ValueError):
    """Analyzer option is invalid or missing.

    Inherits ValueError for semantic correctness (bad option value).

    Attributes:
        option: Option key as supplied by the host.
        reason: Why the option was rejected.
    """

    def __init__(self, *, option: str, reason: str) -> None:
        """Initialize with option key and rejection reason."""
        self.option = option
        self.reason = reason
        super().__init__(f"Invalid option '{option}': {reason}")


class InitializationError(ForceLoaderError, RuntimeError):
    """Required upstream analysis result is absent.

    Fatal for the run: no diagnostics are produced.

    Attributes:
        reason: What was missing.
    """

    def __init__(self, reason: str) -> None:
        """Initialize with description of missing input."""
        self.reason = reason
        super().__init__(f"failed to initialize: {reason}")


class ParseError(ForceLoaderError, SyntaxError):
    """Failed to read or parse Python source file.

    FAIL-FIRST while building the program.
    Recovered locally during on-demand re-parse.
    Inherits SyntaxError for semantic correctness.

    Attributes:
        path: Path to file that failed.
        reason: Error description.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize with file path and error reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ArchitectureViolationError(ForceLoaderError):
    """Resolvers call the restricted layer directly.

    Raised by assert_clean() when diagnostics were produced.

    Attributes:
        diagnostics: All produced diagnostics.
    """

    def __init__(self, diagnostics: Sequence[Diagnostic]) -> None:
        if not diagnostics:
            raise ValueError("ArchitectureViolationError requires at least one diagnostic")

        self.diagnostics = tuple(diagnostics)

        msg_parts = [f"Found {len(self.diagnostics)} loader boundary violation(s):"]
        for diagnostic in self.diagnostics:
            msg_parts.append(f"  {diagnostic}")

        super().__init__("\n".join(msg_parts))
