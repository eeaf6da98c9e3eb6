"""Reporters for diagnostics and analysis results.

- DiagnosticReporter: match → Diagnostic, recorded and sent to the host sink
- PlainTextReporter / JSONReporter: stdlib stream output
- ConsoleReporter: rich formatted string
"""

from forceloader.application.reporters._base import BaseReporter
from forceloader.application.reporters.console import ConsoleConfig, ConsoleReporter
from forceloader.application.reporters.diagnostic_reporter import DiagnosticReporter, ListSink
from forceloader.application.reporters.json_reporter import JSONReporter
from forceloader.application.reporters.plain_text import PlainTextReporter

__all__ = [
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "DiagnosticReporter",
    "JSONReporter",
    "ListSink",
    "PlainTextReporter",
]
