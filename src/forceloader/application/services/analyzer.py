"""Main facade for loader boundary analysis.

ForceLoaderAnalyzer is the primary entry point. One call to analyze() is one
run: a fresh RunContext, the whole-program classification barrier, then
per resolver method extraction → filtering → suppression → reporting.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Self

from forceloader.application.analysis.call_sites import CallSiteExtractor
from forceloader.application.analysis.suppression import SuppressionMatcher
from forceloader.application.context import RunContext
from forceloader.application.policies import policy_from_config
from forceloader.application.reporters.diagnostic_reporter import DiagnosticReporter
from forceloader.domain.exceptions import ArchitectureViolationError, InitializationError
from forceloader.domain.model.configuration import AnalyzerConfig
from forceloader.domain.model.program import Program
from forceloader.domain.model.result import AnalysisResult, RunStats
from forceloader.infrastructure.adapters.ast_parser import ASTSourceParser
from forceloader.infrastructure.analyzers.base import find_package_root

if TYPE_CHECKING:
    from collections.abc import Mapping

    from forceloader.application.policies import ClassificationPolicy
    from forceloader.domain.model.declarations import MethodDeclaration
    from forceloader.domain.model.program import CompilationUnit
    from forceloader.domain.ports.diagnostic_sink import DiagnosticSink
    from forceloader.domain.ports.reporter import ReporterProtocol

logger = logging.getLogger(__name__)


class ForceLoaderAnalyzer:
    """Reports resolver methods that call the restricted layer directly.

    Composition-based: the classification policy and diagnostic sink are
    dependencies. Without an explicit policy, config.policy selects one.

    Example:
        program = ASTSourceParser(root).parse_directory(root)
        result = ForceLoaderAnalyzer().analyze(program)
        for diagnostic in result.diagnostics:
            print(diagnostic)
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        *,
        policy: ClassificationPolicy | None = None,
        sink: DiagnosticSink | None = None,
        reporter: ReporterProtocol | None = None,
    ) -> None:
        """Initialize analyzer.

        Args:
            config: Analyzer configuration (defaults: field-suffix policy)
            policy: Classification policy overriding config.policy
            sink: Host reporting channel receiving each diagnostic
            reporter: Optional reporter receiving each run result
        """
        self._config = config or AnalyzerConfig()
        self._policy = policy or policy_from_config(self._config)
        self._sink = sink
        self._reporter = reporter
        self._extractor = CallSiteExtractor()

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, str],
        *,
        sink: DiagnosticSink | None = None,
    ) -> Self:
        """Create analyzer from string-typed host options.

        Raises:
            ConfigurationError: Unknown key or invalid value
        """
        return cls(AnalyzerConfig.from_options(options), sink=sink)

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    @property
    def policy(self) -> ClassificationPolicy:
        return self._policy

    def analyze(self, program: Program, *, scope: Path | None = None) -> AnalysisResult:
        """Run analysis over a whole program.

        Classification always sees the whole program. With a scope, only
        resolver methods in files under scope are checked.

        Args:
            program: Parsed program with comments and symbol tables
            scope: File or directory restricting which units are checked

        Returns:
            AnalysisResult with diagnostics in report order

        Raises:
            InitializationError: If a unit lacks its comment stream or
                symbol table. No diagnostics are produced.
        """
        start_time = time.perf_counter()

        for unit in program.units:
            _require_upstream(unit)

        ctx = RunContext(config=self._config, program=program)

        # Classification barrier: whole program, before any call site
        self._policy.bind(program)
        ctx.complete_classification(
            self._policy.classify_resolvers(program),
            self._policy.classify_restricted_surface(program),
        )

        suppression = SuppressionMatcher(
            require_column_match=self._config.require_column_match,
            reparse=self._policy.reparse,
        )
        emitter = DiagnosticReporter(ctx, self._sink)

        checked = [unit for unit in program.units if _in_scope(unit, scope)]

        for unit, method in program.iter_methods():
            if _in_scope(unit, scope) and self._is_resolver_method(unit, method, ctx):
                self._check_method(unit, method, ctx, suppression, emitter)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        stats = RunStats(
            units_analyzed=len(checked),
            resolver_methods=ctx.resolver_methods,
            call_sites=ctx.call_sites,
            suppressed=ctx.suppressed,
            analysis_time_ms=elapsed_ms,
        )
        logger.debug(
            "analyzed %d resolver method(s): %d diagnostic(s), %d suppressed",
            stats.resolver_methods,
            len(ctx.diagnostics),
            stats.suppressed,
        )

        result = AnalysisResult(
            diagnostics=tuple(ctx.diagnostics),
            resolvers=ctx.resolvers,
            restricted_surface=ctx.restricted_surface,
            stats=stats,
        )

        if self._reporter is not None:
            self._reporter.report(result)

        return result

    def _is_resolver_method(
        self,
        unit: CompilationUnit,
        method: MethodDeclaration,
        ctx: RunContext,
    ) -> bool:
        if f"{unit.module_name}.{method.receiver_type}" not in ctx.resolvers:
            return False
        decl = unit.find_type(method.receiver_type)
        return decl is not None and self._policy.is_checked(decl)

    def _check_method(
        self,
        unit: CompilationUnit,
        method: MethodDeclaration,
        ctx: RunContext,
        suppression: SuppressionMatcher,
        emitter: DiagnosticReporter,
    ) -> None:
        logger.debug("checking %s", method.qualified_name)
        ctx.resolver_methods += 1

        for site in self._extractor.extract(method, unit):
            ctx.call_sites += 1

            match = self._policy.match(site, ctx)
            if match is None:
                continue

            if suppression.is_suppressed(site):
                ctx.suppressed += 1
                continue

            emitter.report(match)


def _require_upstream(unit: CompilationUnit) -> None:
    """FAIL-FIRST: analysis needs the comment stream and symbol table."""
    if unit.comments is None:
        raise InitializationError(f"no comment stream for module '{unit.module_name}'")
    if unit.imports is None:
        raise InitializationError(f"no symbol table for module '{unit.module_name}'")


def _in_scope(unit: CompilationUnit, scope: Path | None) -> bool:
    return scope is None or unit.path.is_relative_to(scope)


def analyze_path(
    path: Path | str,
    config: AnalyzerConfig | None = None,
    *,
    sink: DiagnosticSink | None = None,
) -> AnalysisResult:
    """Parse a directory or single file and analyze it.

    Module names are computed from the first ancestor that is not a regular
    package, so src/app and src/app/graph/query.py both yield app.* names.
    Inside a package the whole top-level package is parsed for
    classification, and only files under path are checked. A file outside
    any package is parsed alone with its parent directory as root.

    Args:
        path: Directory or .py file
        config: Analyzer configuration (defaults if None)
        sink: Host reporting channel

    Returns:
        AnalysisResult

    Raises:
        InitializationError: If path does not exist
        ParseError: If any file cannot be read or parsed
    """
    path = Path(path).absolute()
    config = config or AnalyzerConfig()

    if not path.exists():
        raise InitializationError(f"path does not exist: {path}")

    directory = path if path.is_dir() else path.parent
    root = find_package_root(directory)
    parser = ASTSourceParser(root, exclude=config.exclude)

    if root != directory:
        top_package = root / directory.relative_to(root).parts[0]
        program = parser.parse_directory(top_package)
    elif path.is_dir():
        program = parser.parse_directory(path)
    else:
        program = Program(root_path=root, units=(parser.parse_file(path),))

    logger.debug("analyzing %s with module root %s", path, root)
    return ForceLoaderAnalyzer(config, sink=sink).analyze(program, scope=path)


def assert_clean(result: AnalysisResult) -> None:
    """Raise if analysis produced diagnostics.

    Usable directly in a test:
        assert_clean(analyze_path("src/app"))

    Raises:
        ArchitectureViolationError: Listing every diagnostic
    """
    if result.diagnostics:
        raise ArchitectureViolationError(result.diagnostics)
