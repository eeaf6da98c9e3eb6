"""Base utilities for AST analyzers."""

from __future__ import annotations

import ast
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from forceloader.domain.exceptions import ParseError
from forceloader.domain.model.location import Location

if TYPE_CHECKING:
    from pathlib import Path


def make_location(node: ast.AST, path: Path) -> Location:
    """Create Location from AST node.

    Args:
        node: AST node with position info (statement or expression)
        path: Source file path

    Returns:
        Location pointing to node

    Raises:
        ParseError: If node has no line info (FAIL-FIRST)
    """
    lineno = getattr(node, "lineno", None)
    if lineno is None:
        raise ParseError(path=str(path), reason=f"{type(node).__name__} has no line info")

    return Location(
        file=path,
        line=lineno,
        column=getattr(node, "col_offset", 0),
        end_line=getattr(node, "end_lineno", None),
        end_column=getattr(node, "end_col_offset", None),
    )


def compute_module_name(file_path: Path, root_path: Path) -> str:
    """Compute fully qualified module name from file path.

    Examples:
        /src/app/utils.py, /src → app.utils
        /src/app/__init__.py, /src → app
        /src/app/services/user.py, /src → app.services.user

    Args:
        file_path: Path to .py file
        root_path: Project root path

    Returns:
        Fully qualified module name

    Raises:
        ParseError: If path is invalid (FAIL-FIRST)
    """
    try:
        relative = file_path.relative_to(root_path)
    except ValueError as e:
        raise ParseError(path=str(file_path), reason=f"not under {root_path}") from e

    parts = list(relative.with_suffix("").parts)

    if parts and parts[-1] == "__init__":
        parts = parts[:-1]

    for part in parts:
        if not part.isidentifier():
            raise ParseError(
                path=str(file_path), reason=f"'{part}' is not valid Python identifier"
            )

    if not parts:
        raise ParseError(path=str(file_path), reason="cannot determine module name (empty)")

    return ".".join(parts)


def find_package_root(directory: Path) -> Path:
    """Find the directory module names are computed from.

    Walks up past every regular package (directory with __init__.py),
    directory itself included.

    Examples:
        /src/app (package), /src (plain) → /src
        /project (plain) → /project

    Args:
        directory: Directory to start from

    Returns:
        First ancestor (or directory) that is not a package
    """
    root = directory
    while (root / "__init__.py").is_file() and root.parent != root:
        root = root.parent
    return root


def resolve_relative_import(
    node_module: str | None,
    node_level: int,
    current_module: str,
    *,
    is_package: bool = False,
) -> str:
    """Resolve relative import to absolute module path.

    Args:
        node_module: Module part of import (after dots)
        node_level: Number of dots (0=absolute, 1=., 2=..)
        current_module: Current module's fully qualified name
        is_package: Current module is a package (__init__.py)

    Returns:
        Absolute module path

    Raises:
        ValueError: If relative import escapes package (FAIL-FIRST)
    """
    if node_level == 0:
        if node_module is None:
            raise ValueError("absolute import must have module")
        return node_module

    parts = current_module.split(".")
    # A package's own name is its base for one-dot imports
    depth = node_level - 1 if is_package else node_level

    if depth >= len(parts):
        raise ValueError(
            f"relative import level {node_level} exceeds package depth of module '{current_module}'"
        )

    base_parts = parts[: len(parts) - depth] if depth > 0 else parts

    if node_module:
        return ".".join([*base_parts, node_module])

    if not base_parts:
        raise ValueError(f"relative import results in empty module from '{current_module}'")

    return ".".join(base_parts)


def line_offsets(source: str) -> tuple[int, ...]:
    """Byte offset of every line start (index 0 → line 1).

    ast reports UTF-8 byte columns, so offsets are in bytes too.
    """
    data = source.encode("utf-8")
    offsets = [0]
    newline = data.find(b"\n")
    while newline != -1:
        offsets.append(newline + 1)
        newline = data.find(b"\n", newline + 1)
    return tuple(offsets)


def unwrap_annotation(node: ast.expr) -> str:
    """Render a type reference, dropping one level of indirection.

    Indirection forms:
        Optional[T], typing.Optional[T]  → T
        T | None, None | T                → T
        "T" (forward reference)           → T (then unwrapped again)

    Args:
        node: Annotation or base class expression

    Returns:
        Rendered type reference
    """
    match node:
        case ast.Constant(value=str(text)):
            try:
                parsed = ast.parse(text.strip(), mode="eval").body
            except SyntaxError:
                return text.strip()
            return unwrap_annotation(parsed)
        case ast.Subscript(value=ast.Name(id="Optional") | ast.Attribute(attr="Optional")):
            return ast.unparse(node.slice)
        case ast.BinOp(op=ast.BitOr(), left=inner, right=ast.Constant(value=None)):
            return ast.unparse(inner)
        case ast.BinOp(op=ast.BitOr(), left=ast.Constant(value=None), right=inner):
            return ast.unparse(inner)
    return ast.unparse(node)


# =============================================================================
# PRE-ORDER WALK - ordered node sequences for position bracketing
# =============================================================================


def iter_preorder(nodes: Iterable[ast.AST]) -> Iterator[ast.AST]:
    """Walk AST nodes depth-first in declaration order.

    Unlike ast.walk (breadth-first), a parent is always followed by its
    whole subtree before its next sibling. Enters nested scopes.

    Args:
        nodes: Root nodes to traverse

    Yields:
        AST nodes in pre-order
    """
    stack: list[ast.AST] = list(reversed(list(nodes)))

    while stack:
        node = stack.pop()
        yield node
        # Add children in reverse order to maintain depth-first order
        stack.extend(reversed(list(ast.iter_child_nodes(node))))


def shallow_walk(body: Iterable[ast.stmt]) -> Iterator[ast.AST]:
    """Walk AST nodes in body without entering nested scopes.

    Nested def, async def, class and lambda nodes are yielded but their
    children are not.

    Args:
        body: Statements to traverse

    Yields:
        AST nodes in pre-order, excluding nested scope internals
    """
    stack: list[ast.AST] = list(reversed(list(body)))

    while stack:
        node = stack.pop()
        yield node

        match node:
            case ast.FunctionDef() | ast.AsyncFunctionDef() | ast.ClassDef() | ast.Lambda():
                pass
            case _:
                stack.extend(reversed(list(ast.iter_child_nodes(node))))


def iter_statements(tree: ast.Module) -> Iterator[ast.stmt]:
    """All statements of a module in pre-order, nested bodies included."""
    for node in iter_preorder(tree.body):
        if isinstance(node, ast.stmt):
            yield node


def node_start_lines(tree: ast.Module) -> Iterator[int]:
    """Start line of every positioned node in the tree."""
    for node in ast.walk(tree):
        lineno = getattr(node, "lineno", None)
        if lineno is not None:
            yield lineno


def has_decorator(decorators: list[ast.expr], name: str) -> bool:
    """Check if decorator list contains decorator with given name.

    Args:
        decorators: List of decorator expressions
        name: Decorator name to find

    Returns:
        True if decorator found
    """
    for dec in decorators:
        if isinstance(dec, ast.Name) and dec.id == name:
            return True
        if isinstance(dec, ast.Attribute) and dec.attr == name:
            return True
        if isinstance(dec, ast.Call):
            if isinstance(dec.func, ast.Name) and dec.func.id == name:
                return True
            if isinstance(dec.func, ast.Attribute) and dec.func.attr == name:
                return True
    return False
