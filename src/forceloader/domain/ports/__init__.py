"""Ports: interfaces the infrastructure and hosts implement."""

from forceloader.domain.ports.diagnostic_sink import DiagnosticSink
from forceloader.domain.ports.reporter import ReporterProtocol
from forceloader.domain.ports.source_parser import SourceParserPort

__all__ = [
    "DiagnosticSink",
    "ReporterProtocol",
    "SourceParserPort",
]
