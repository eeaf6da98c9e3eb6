"""Call-site extraction from resolver method bodies.

Recursive descent over statement shapes. Each recognized shape carries the
*effective position* of its outermost statement forward to the call sites it
yields; suppression comments are looked up against that position, not the
literal call token.

Coverage is deliberately incomplete: restricted members are always invoked
as direct, or nearly direct, member accesses. Unrecognized shapes are
skipped silently - they are not errors.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from forceloader.domain.model.call_site import CallSite
from forceloader.infrastructure.analyzers.base import make_location

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from forceloader.domain.model.declarations import MethodDeclaration
    from forceloader.domain.model.location import Location
    from forceloader.domain.model.program import CompilationUnit


class CallSiteExtractor:
    """Yields candidate call sites of a method in source order.

    Shapes:
        if (v := <call>) ...:          initializer, statement position
        if <call> == x / and ...:      left operand call, statement position
        if <call>:                     test call, statement position
        x = <call>, <call>             every RHS call, statement position
        return <call>                  same as assignment
        <call>                         bare expression statement
        (lambda: <expr>)()             inner expression, its own position
        <call>(...)(...)               callee recursed, position propagated
        await <call>                   transparent everywhere

    Compound statement bodies are nested scopes: each nested statement keeps
    its own position. Nested def/class are scope boundaries.

    Stateless - the returned iterator is lazy and not restartable.
    """

    def extract(self, method: MethodDeclaration, unit: CompilationUnit) -> Iterator[CallSite]:
        """Extract call sites from method body.

        Args:
            method: Method to scan
            unit: Unit the method belongs to

        Returns:
            Lazy iterator of CallSite in declaration order
        """
        return _Walker(method, unit).block(method.body)


class _Walker:
    """Recursive descent over one method body."""

    def __init__(self, method: MethodDeclaration, unit: CompilationUnit) -> None:
        self.method = method
        self.unit = unit

    def block(self, body: Iterable[ast.stmt]) -> Iterator[CallSite]:
        for stmt in body:
            yield from self.statement(stmt)

    def statement(self, stmt: ast.stmt) -> Iterator[CallSite]:
        position = make_location(stmt, self.unit.path)

        match stmt:
            case ast.If(test=test) | ast.While(test=test):
                yield from self.condition(test, position)
            case ast.Assign(value=value) | ast.AugAssign(value=value):
                yield from self.right_hand_side(value, position)
            case ast.AnnAssign(value=value) | ast.Return(value=value) if value is not None:
                yield from self.right_hand_side(value, position)
            case ast.Expr(value=value):
                yield from self.expression(value, position)

        yield from self.nested_blocks(stmt)

    def nested_blocks(self, stmt: ast.stmt) -> Iterator[CallSite]:
        """Nested statement blocks of compound statements."""
        match stmt:
            case ast.If(body=body, orelse=orelse) | ast.While(body=body, orelse=orelse):
                yield from self.block(body)
                yield from self.block(orelse)
            case ast.For(body=body, orelse=orelse) | ast.AsyncFor(body=body, orelse=orelse):
                yield from self.block(body)
                yield from self.block(orelse)
            case ast.With(body=body) | ast.AsyncWith(body=body):
                yield from self.block(body)
            case ast.Try() | ast.TryStar():
                yield from self.block(stmt.body)
                for handler in stmt.handlers:
                    yield from self.block(handler.body)
                yield from self.block(stmt.orelse)
                yield from self.block(stmt.finalbody)
            case ast.Match(cases=cases):
                for case in cases:
                    yield from self.block(case.body)

    def condition(self, test: ast.expr, position: Location) -> Iterator[CallSite]:
        """Conditional test: initializer or left operand of a binary test."""
        test = _unwrap(test)

        match test:
            case ast.NamedExpr(value=value):
                yield from self.right_hand_side(value, position)
            case ast.Compare(left=left):
                yield from self.operand(left, position)
            case ast.BoolOp(values=[left, *_]):
                yield from self.operand(left, position)
            case ast.Call():
                yield from self.call(test, position)

    def operand(self, operand: ast.expr, position: Location) -> Iterator[CallSite]:
        operand = _unwrap(operand)

        match operand:
            case ast.NamedExpr(value=value):
                yield from self.right_hand_side(value, position)
            case ast.Call():
                yield from self.call(operand, position)

    def right_hand_side(self, value: ast.expr, position: Location) -> Iterator[CallSite]:
        """Every call among the right-hand-side expressions."""
        value = _unwrap(value)

        match value:
            case ast.Tuple(elts=elts) | ast.List(elts=elts):
                for element in elts:
                    yield from self.expression(element, position)
            case _:
                yield from self.expression(value, position)

    def expression(self, expr: ast.expr, position: Location) -> Iterator[CallSite]:
        expr = _unwrap(expr)
        if isinstance(expr, ast.Call):
            yield from self.call(expr, position)

    def call(self, call: ast.Call, position: Location) -> Iterator[CallSite]:
        func = call.func

        match func:
            case ast.Lambda(body=body):
                # Immediately-invoked closure: nested scope, own position
                yield from self.expression(body, make_location(body, self.unit.path))
            case ast.Name() | ast.Attribute() if _is_simple_access(func):
                yield CallSite(node=call, position=position, method=self.method, unit=self.unit)
            case _:
                inner = _callee_base(func)
                if inner is not None:
                    yield from self.call(inner, position)


def _unwrap(expr: ast.expr) -> ast.expr:
    """Strip await and boolean negation wrappers."""
    while True:
        match expr:
            case ast.Await(value=value) | ast.UnaryOp(op=ast.Not(), operand=value):
                expr = value
            case _:
                return expr


def _is_simple_access(expr: ast.expr) -> bool:
    """Name, or attribute chain rooted at a name (self.use_case.get)."""
    while isinstance(expr, ast.Attribute):
        expr = expr.value
    return isinstance(expr, ast.Name)


def _callee_base(func: ast.expr) -> ast.Call | None:
    """Call underneath a non-simple callee.

    Examples:
        self.factory()(x)        → self.factory()
        self.repo().get(x)       → self.repo()
        self.handlers()[0](x)    → self.handlers()
    """
    current = _unwrap(func)
    while isinstance(current, ast.Attribute | ast.Subscript):
        current = _unwrap(current.value)
    return current if isinstance(current, ast.Call) else None
