"""Program model: compilation units supplied by the frontend.

Immutable value objects. Read-only to the analysis core.
FAIL-FIRST: invalid input raises immediately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import ast
    from collections.abc import Iterator, Mapping

    from forceloader.domain.model.comment import CommentIndex
    from forceloader.domain.model.declarations import (
        FieldDeclaration,
        MethodDeclaration,
        TypeDeclaration,
    )


@dataclass(frozen=True, slots=True)
class CompilationUnit:
    """Single parsed .py file.

    comments and imports come from upstream analysis. None means the
    frontend did not supply them; the analyzer refuses to run on such a unit.

    Attributes:
        module_name: Fully qualified module name
        path: Source file path
        source: Source text
        tree: Parsed syntax tree
        line_offsets: Byte offset of each line start (index 0 → line 1)
        comments: Comment stream with attachment info
        imports: Symbol table, local name → fully qualified name
        types: Top-level class declarations (names unique)
        methods: Methods of those classes in source order
    """

    module_name: str
    path: Path
    source: str
    tree: ast.Module
    line_offsets: tuple[int, ...]
    comments: CommentIndex | None
    imports: Mapping[str, str] | None
    types: tuple[TypeDeclaration, ...] = ()
    methods: tuple[MethodDeclaration, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.module_name:
            raise ValueError("module_name must not be empty")
        if not self.line_offsets:
            raise ValueError("line_offsets must not be empty")
        seen: set[str] = set()
        for decl in self.types:
            if decl.name in seen:
                raise ValueError(f"duplicate type '{decl.name}' in {self.module_name}")
            seen.add(decl.name)

    def offset(self, line: int, column: int) -> int:
        """Convert (line, byte column) to byte offset from start of file."""
        if line <= 0 or line > len(self.line_offsets):
            raise ValueError(f"line {line} out of range for {self.path}")
        return self.line_offsets[line - 1] + column

    def node_span(self, node: ast.AST) -> tuple[int, int]:
        """Byte offsets (start, end) of a positioned node."""
        start = self.offset(node.lineno, node.col_offset)  # type: ignore[attr-defined]
        end_line = getattr(node, "end_lineno", None) or node.lineno  # type: ignore[attr-defined]
        end_column = getattr(node, "end_col_offset", None)
        if end_column is None:
            return start, start
        return start, self.offset(end_line, end_column)

    def find_type(self, name: str) -> TypeDeclaration | None:
        """Find class declared in this unit by simple name."""
        for decl in self.types:
            if decl.name == name:
                return decl
        return None

    def qualify(self, name: str) -> str:
        """Resolve a name as written in this unit to a fully qualified name.

        Resolution order:
            1. Class declared in this unit      → module.Name
            2. Imported name (first segment)     → import target + rest
            3. Unknown                           → name unchanged (opaque)

        Examples (module "app.graph", `from app import usecase`):
            "Resolver"             → "app.graph.Resolver"
            "usecase.UserUseCase"  → "app.usecase.UserUseCase"
            "int"                  → "int"
        """
        name = name.split("[", 1)[0].strip()
        if self.find_type(name) is not None:
            return f"{self.module_name}.{name}"

        first, _, rest = name.partition(".")
        target = (self.imports or {}).get(first)
        if target is None:
            return name
        return f"{target}.{rest}" if rest else target


@dataclass(frozen=True, slots=True)
class Program:
    """Whole program visible to one analysis run.

    Invariants (FAIL-FIRST):
        - module names are unique across units

    Attributes:
        root_path: Directory the program was read from
        units: Compilation units in discovery order
    """

    root_path: Path
    units: tuple[CompilationUnit, ...]
    _by_module: dict[str, CompilationUnit] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )
    _by_type: dict[str, tuple[CompilationUnit, TypeDeclaration]] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        """Validate invariants and build lookup tables. FAIL-FIRST."""
        for unit in self.units:
            if unit.module_name in self._by_module:
                raise ValueError(f"duplicate module '{unit.module_name}'")
            self._by_module[unit.module_name] = unit
            for decl in unit.types:
                self._by_type[decl.qualified_name] = (unit, decl)

    @classmethod
    def empty(cls) -> Program:
        """Create empty program for tests."""
        return cls(root_path=Path(), units=())

    def unit(self, module_name: str) -> CompilationUnit | None:
        """Find unit by module name."""
        return self._by_module.get(module_name)

    def iter_types(self) -> Iterator[tuple[CompilationUnit, TypeDeclaration]]:
        """All class declarations with their unit, in unit order."""
        for unit in self.units:
            for decl in unit.types:
                yield unit, decl

    def iter_methods(self) -> Iterator[tuple[CompilationUnit, MethodDeclaration]]:
        """All methods with their unit, in unit order."""
        for unit in self.units:
            for method in unit.methods:
                yield unit, method

    def type_by_qualified_name(self, qualified_name: str) -> TypeDeclaration | None:
        entry = self._by_type.get(qualified_name)
        return entry[1] if entry is not None else None

    def resolve_type(
        self,
        unit: CompilationUnit,
        type_name: str,
    ) -> tuple[CompilationUnit, TypeDeclaration] | None:
        """Resolve type reference written in unit to its declaration.

        Returns:
            (declaring unit, declaration) or None if the type is opaque
            (external package, builtin, unresolvable expression).
        """
        return self._by_type.get(unit.qualify(type_name))

    def lookup_field(
        self,
        unit: CompilationUnit,
        decl: TypeDeclaration,
        name: str,
    ) -> tuple[CompilationUnit, FieldDeclaration] | None:
        """Find named field on type or, breadth-first, on its embedded types.

        Cycle-safe: each type is visited once.

        Returns:
            (unit declaring the field, field) or None if not found
        """
        queue: list[tuple[CompilationUnit, TypeDeclaration]] = [(unit, decl)]
        visited: set[str] = set()

        while queue:
            current_unit, current = queue.pop(0)
            if current.qualified_name in visited:
                continue
            visited.add(current.qualified_name)

            found = current.field(name)
            if found is not None:
                return current_unit, found

            for embedded in current.embedded_fields:
                resolved = self.resolve_type(current_unit, embedded.type_name)
                if resolved is not None:
                    queue.append(resolved)

        return None
