"""Domain model: value objects for programs, call sites and diagnostics."""

from forceloader.domain.model.call_site import AccessMatch, CallSite
from forceloader.domain.model.comment import CommentIndex, CommentToken
from forceloader.domain.model.configuration import AnalyzerConfig, Policy
from forceloader.domain.model.declarations import (
    FieldDeclaration,
    MethodDeclaration,
    TypeDeclaration,
)
from forceloader.domain.model.diagnostic import ANALYZER_NAME, Diagnostic
from forceloader.domain.model.location import Location
from forceloader.domain.model.program import CompilationUnit, Program
from forceloader.domain.model.result import AnalysisResult, RunStats

__all__ = [
    "ANALYZER_NAME",
    "AccessMatch",
    "AnalysisResult",
    "AnalyzerConfig",
    "CallSite",
    "CommentIndex",
    "CommentToken",
    "CompilationUnit",
    "Diagnostic",
    "FieldDeclaration",
    "Location",
    "MethodDeclaration",
    "Policy",
    "Program",
    "RunStats",
    "TypeDeclaration",
]
