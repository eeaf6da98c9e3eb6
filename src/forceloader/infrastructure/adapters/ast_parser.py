"""AST-based source parser adapter.

Implements SourceParserPort using Python ast and tokenize.
Builds a Program with comments, symbol tables and declarations.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from forceloader.domain.exceptions import ParseError
from forceloader.domain.model.configuration import DEFAULT_EXCLUDES
from forceloader.domain.model.program import CompilationUnit, Program
from forceloader.domain.ports.source_parser import SourceParserPort
from forceloader.infrastructure.analyzers.base import compute_module_name, line_offsets
from forceloader.infrastructure.analyzers.comment_analyzer import build_comment_index
from forceloader.infrastructure.analyzers.import_analyzer import ImportAnalyzer
from forceloader.infrastructure.analyzers.type_analyzer import TypeAnalyzer

if TYPE_CHECKING:
    from pathlib import Path

    from forceloader.domain.model.declarations import MethodDeclaration, TypeDeclaration

logger = logging.getLogger(__name__)


class ASTSourceParser(SourceParserPort):
    """Parser using Python AST to build the program model.

    Stateless between parse_file() calls.

    FAIL-FIRST: raises ParseError on any parsing issue.
    """

    def __init__(
        self,
        root_path: Path,
        *,
        exclude: frozenset[str] = DEFAULT_EXCLUDES,
    ) -> None:
        """Initialize parser with root path.

        Args:
            root_path: Root path for computing module names
            exclude: Directory names to skip in parse_directory()

        Raises:
            TypeError: If root_path is None
        """
        if root_path is None:
            raise TypeError("root_path must not be None")

        self._root_path = root_path
        self._exclude = exclude
        self._import_analyzer = ImportAnalyzer()
        self._type_analyzer = TypeAnalyzer()

    @property
    def root_path(self) -> Path:
        return self._root_path

    def parse_file(self, path: Path) -> CompilationUnit:
        """Parse single Python file.

        FAIL-FIRST: raises ParseError on file errors, syntax errors.

        Args:
            path: Path to .py file

        Returns:
            Parsed CompilationUnit

        Raises:
            ParseError: If file cannot be read or parsed
        """
        # Read file - FAIL-FIRST on file errors
        try:
            source = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ParseError(path=str(path), reason="file not found") from e
        except PermissionError as e:
            raise ParseError(path=str(path), reason="permission denied") from e
        except UnicodeDecodeError as e:
            raise ParseError(path=str(path), reason=f"encoding error: {e}") from e

        module_name = compute_module_name(path, self._root_path)
        return self.parse_source(source, path, module_name)

    def parse_source(self, source: str, path: Path, module_name: str) -> CompilationUnit:
        """Parse source text already read from path.

        Args:
            source: Source text
            path: Path reported in locations
            module_name: Fully qualified module name

        Returns:
            Parsed CompilationUnit

        Raises:
            ParseError: If source has invalid syntax or duplicate classes
        """
        # Parse AST - FAIL-FIRST on syntax errors
        try:
            tree = ast.parse(source, filename=str(path))
        except SyntaxError as e:
            raise ParseError(path=str(path), reason=f"syntax error: {e}") from e

        offsets = line_offsets(source)
        imports = self._import_analyzer.analyze(
            tree, path, module_name, is_package=path.stem == "__init__"
        )
        types, methods = self._extract_types(tree, path, module_name)

        return CompilationUnit(
            module_name=module_name,
            path=path,
            source=source,
            tree=tree,
            line_offsets=offsets,
            comments=build_comment_index(tree, source, path, offsets),
            imports=imports,
            types=types,
            methods=methods,
        )

    def parse_directory(self, path: Path) -> Program:
        """Parse directory recursively.

        Parses all .py files, skipping excluded directories. path may be a
        subdirectory of the parser root; module names stay root-relative.

        Args:
            path: Directory to scan

        Returns:
            Program rooted at the parser root, with all units under path

        Raises:
            ParseError: If any file cannot be parsed
        """
        units = tuple(self.parse_file(py_file) for py_file in _find_python_files(path, self._exclude))
        logger.debug("parsed %d module(s) under %s", len(units), path)
        return Program(root_path=self._root_path, units=units)

    def _extract_types(
        self,
        tree: ast.Module,
        path: Path,
        module_name: str,
    ) -> tuple[tuple[TypeDeclaration, ...], tuple[MethodDeclaration, ...]]:
        """Extract top-level classes and their methods."""
        types: list[TypeDeclaration] = []
        methods: list[MethodDeclaration] = []
        seen: set[str] = set()

        for node in tree.body:
            if not isinstance(node, ast.ClassDef):
                continue
            if node.name in seen:
                raise ParseError(
                    path=str(path), reason=f"class '{node.name}' declared more than once"
                )
            seen.add(node.name)

            decl, class_methods = self._type_analyzer.analyze(node, path, module_name)
            types.append(decl)
            methods.extend(class_methods)

        return tuple(types), tuple(methods)


def _find_python_files(root: Path, exclude: frozenset[str]) -> list[Path]:
    """Find all .py files in directory, excluding specified directories.

    Sorted for deterministic unit order.
    """
    result: list[Path] = []

    for item in sorted(root.iterdir()):
        if item.is_dir():
            if item.name not in exclude:
                result.extend(_find_python_files(item, exclude))
        elif item.is_file() and item.suffix == ".py":
            result.append(item)

    return result
