"""Diagnostic sink protocol: the host's reporting channel."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from forceloader.domain.model.diagnostic import Diagnostic


class DiagnosticSink(Protocol):
    """Receives diagnostics as they are produced.

    Hosts (editors, CI wrappers, pytest plugins) implement this to surface
    diagnostics. Exit status and formatting are the host's responsibility.

    Example:
        class PrintSink:
            def report(self, diagnostic: Diagnostic) -> None:
                print(diagnostic)
    """

    def report(self, diagnostic: Diagnostic) -> None:
        """Deliver one diagnostic.

        Args:
            diagnostic: Diagnostic to surface
        """
        ...
