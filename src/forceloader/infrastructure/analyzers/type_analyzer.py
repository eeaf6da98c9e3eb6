"""Class analyzer: class statements → type and method declarations."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from forceloader.domain.model.declarations import (
    FieldDeclaration,
    MethodDeclaration,
    TypeDeclaration,
)
from forceloader.infrastructure.analyzers.base import (
    has_decorator,
    make_location,
    shallow_walk,
    unwrap_annotation,
)

if TYPE_CHECKING:
    from pathlib import Path

# Bases that carry no aggregate meaning
_IGNORED_BASES = frozenset({"object", "Protocol", "typing.Protocol", "ABC", "abc.ABC"})


class TypeAnalyzer:
    """Extracts aggregate view of a class from Python AST.

    Fields:
        class Q(Resolver):          → embedded FieldDeclaration("", "Resolver")
            repo: UserUseCase       → FieldDeclaration("repo", "UserUseCase")
            def __init__(self):
                self.x: Optional[T] = None  → FieldDeclaration("x", "T")

    Stateless analyzer - no state between analyze() calls.
    """

    def analyze(
        self,
        node: ast.ClassDef,
        path: Path,
        module_name: str,
    ) -> tuple[TypeDeclaration, tuple[MethodDeclaration, ...]]:
        """Analyze class AST node.

        Args:
            node: ClassDef AST node
            path: Source file path
            module_name: Fully qualified module name

        Returns:
            (TypeDeclaration, methods with a receiver binding)

        Raises:
            TypeError: If required parameters are None (FAIL-FIRST)
            ValueError: If module_name is empty (FAIL-FIRST)
        """
        # FAIL-FIRST: validate required parameters
        if node is None:
            raise TypeError("node must not be None")
        if path is None:
            raise TypeError("path must not be None")
        if not module_name:
            raise ValueError("module_name must be non-empty string")

        fields = (*self._embedded_fields(node, path), *self._named_fields(node, path))

        decl = TypeDeclaration(
            name=node.name,
            qualified_name=f"{module_name}.{node.name}",
            module=module_name,
            fields=fields,
            location=make_location(node, path),
        )

        return decl, self._methods(node, path, module_name)

    def _embedded_fields(self, node: ast.ClassDef, path: Path) -> list[FieldDeclaration]:
        """Base classes are the embedded fields of a class."""
        fields: list[FieldDeclaration] = []
        for base in node.bases:
            type_name = unwrap_annotation(base)
            if type_name in _IGNORED_BASES:
                continue
            fields.append(
                FieldDeclaration(
                    name="",
                    type_name=type_name,
                    embedded=True,
                    location=make_location(base, path),
                )
            )
        return fields

    def _named_fields(self, node: ast.ClassDef, path: Path) -> list[FieldDeclaration]:
        """Annotated class attributes, then annotated self.x in __init__.

        First declaration of a name wins.
        """
        fields: dict[str, FieldDeclaration] = {}

        for item in node.body:
            match item:
                case ast.AnnAssign(target=ast.Name(id=name), annotation=annotation):
                    fields.setdefault(name, self._field(name, annotation, item, path))

        for item in node.body:
            if isinstance(item, ast.FunctionDef) and item.name == "__init__":
                receiver = _receiver_name(item)
                if receiver is None:
                    break
                for stmt in shallow_walk(item.body):
                    match stmt:
                        case ast.AnnAssign(
                            target=ast.Attribute(value=ast.Name(id=owner), attr=name),
                            annotation=annotation,
                        ) if owner == receiver:
                            fields.setdefault(name, self._field(name, annotation, stmt, path))
                break

        return list(fields.values())

    def _field(
        self,
        name: str,
        annotation: ast.expr,
        node: ast.stmt,
        path: Path,
    ) -> FieldDeclaration:
        return FieldDeclaration(
            name=name,
            type_name=unwrap_annotation(annotation),
            embedded=False,
            location=make_location(node, path),
        )

    def _methods(
        self,
        node: ast.ClassDef,
        path: Path,
        module_name: str,
    ) -> tuple[MethodDeclaration, ...]:
        """Methods defined directly in class body.

        Static methods and methods without parameters have no receiver
        binding and are skipped.
        """
        methods: list[MethodDeclaration] = []

        for item in node.body:
            if not isinstance(item, ast.FunctionDef | ast.AsyncFunctionDef):
                continue
            if has_decorator(item.decorator_list, "staticmethod"):
                continue
            receiver = _receiver_name(item)
            if receiver is None:
                continue

            methods.append(
                MethodDeclaration(
                    name=item.name,
                    qualified_name=f"{module_name}.{node.name}.{item.name}",
                    receiver_type=node.name,
                    receiver_name=receiver,
                    body=tuple(item.body),
                    location=make_location(item, path),
                    is_async=isinstance(item, ast.AsyncFunctionDef),
                )
            )

        return tuple(methods)


def _receiver_name(node: ast.FunctionDef | ast.AsyncFunctionDef) -> str | None:
    """First positional parameter, the receiver binding."""
    positional = [*node.args.posonlyargs, *node.args.args]
    if not positional:
        return None
    return positional[0].arg
