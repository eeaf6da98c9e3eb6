"""Import statement analyzer: builds the module symbol table."""

from __future__ import annotations

import ast
from types import MappingProxyType
from typing import TYPE_CHECKING

from forceloader.domain.exceptions import ParseError
from forceloader.infrastructure.analyzers.base import resolve_relative_import

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


class ImportAnalyzer:
    """Maps names bound by module-scope imports to fully qualified names.

    Handles:
        import X               → {"X": "X"}
        import X.Y             → {"X": "X"}
        import X as Y          → {"Y": "X"}
        from X import Y        → {"Y": "X.Y"}
        from X import Y as Z   → {"Z": "X.Y"}
        from . import Y        → {"Y": "<package>.Y"}

    Imports under `if TYPE_CHECKING:`, `if`/`try` blocks are included:
    annotations commonly rely on them. Function and class bodies are
    separate scopes and are skipped. Star imports bind nothing.

    Stateless analyzer - no state between analyze() calls.
    """

    def analyze(
        self,
        tree: ast.Module,
        path: Path,
        module_name: str,
        *,
        is_package: bool = False,
    ) -> Mapping[str, str]:
        """Extract symbol table from module.

        Args:
            tree: Parsed AST module
            path: Source file path
            module_name: Fully qualified module name
            is_package: Module is a package __init__

        Returns:
            Read-only mapping local name → fully qualified name

        Raises:
            ParseError: If a relative import escapes the package (FAIL-FIRST)
        """
        visitor = _ImportVisitor(path, module_name, is_package)
        visitor.visit(tree)
        return MappingProxyType(visitor.symbols)


class _ImportVisitor(ast.NodeVisitor):
    """Collects module-scope import bindings."""

    def __init__(self, path: Path, module_name: str, is_package: bool) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")
        if not module_name:
            raise ValueError("module_name must be non-empty string")

        self.path = path
        self.module_name = module_name
        self.is_package = is_package
        self.symbols: dict[str, str] = {}

    def visit_Import(self, node: ast.Import) -> None:
        """Handle: import X, import X.Y, import X as Y."""
        for alias in node.names:
            if alias.asname:
                self.symbols[alias.asname] = alias.name
            else:
                root = alias.name.partition(".")[0]
                self.symbols[root] = root

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        """Handle: from X import Y, from . import Y."""
        try:
            resolved = resolve_relative_import(
                node.module,
                node.level,
                self.module_name,
                is_package=self.is_package,
            )
        except ValueError as e:
            raise ParseError(path=str(self.path), reason=str(e)) from e

        for alias in node.names:
            if alias.name == "*":
                continue
            self.symbols[alias.asname or alias.name] = f"{resolved}.{alias.name}"

    # Nested scopes bind their own names
    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        pass

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        pass

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        pass
