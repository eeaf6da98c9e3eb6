"""Diagnostic entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from forceloader.domain.model.location import Location

# Registered analyzer name, matched by `# nolint: <name>` directives
ANALYZER_NAME = "forceloader"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Reported loader boundary violation.

    Write-once. Never deduplicated or merged.

    Attributes:
        location: Position range of the offending call
        message: "<access path> cannot be used in <context>"
        analyzer: Name of the analyzer that produced it
    """

    location: Location
    message: str
    analyzer: str = ANALYZER_NAME

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("message must not be empty")
        if not self.analyzer:
            raise ValueError("analyzer must not be empty")

    def __str__(self) -> str:
        """Format as file:line:column: message (analyzer)."""
        return f"{self.location}: {self.message} ({self.analyzer})"
