"""Call sites extracted from resolver methods and their classification."""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from forceloader.domain.model.location import Location

if TYPE_CHECKING:
    from forceloader.domain.model.declarations import MethodDeclaration
    from forceloader.domain.model.program import CompilationUnit


def _dotted_parts(node: ast.expr) -> tuple[str, ...]:
    """Split a member-access chain rooted at a name.

    Examples:
        self.use_case.get   → ("self", "use_case", "get")
        get_user            → ("get_user",)
        self.repo().get     → ()  (not rooted at a name)
    """
    parts: list[str] = []
    current = node
    while isinstance(current, ast.Attribute):
        parts.append(current.attr)
        current = current.value
    if not isinstance(current, ast.Name):
        return ()
    parts.append(current.id)
    return tuple(reversed(parts))


@dataclass(frozen=True, slots=True)
class CallSite:
    """Candidate call found in a resolver method body.

    Ephemeral: produced and consumed within one method's analysis.

    Attributes:
        node: The call expression
        position: Effective position - the outermost statement containing
            the call, used for suppression lookup
        method: Enclosing method
        unit: Unit the method belongs to
    """

    node: ast.Call
    position: Location
    method: MethodDeclaration
    unit: CompilationUnit = field(repr=False, compare=False)

    @property
    def target_chain(self) -> tuple[str, ...]:
        """Callee as dotted parts, () when not a simple member access."""
        return _dotted_parts(self.node.func)

    @property
    def location(self) -> Location:
        """Literal location of the call expression."""
        return Location(
            file=self.unit.path,
            line=self.node.lineno,
            column=self.node.col_offset,
            end_line=self.node.end_lineno,
            end_column=self.node.end_col_offset,
        )

    @property
    def offset(self) -> int:
        """Byte offset of the call expression."""
        return self.unit.offset(self.node.lineno, self.node.col_offset)


@dataclass(frozen=True, slots=True)
class AccessMatch:
    """Call site that targets the restricted surface.

    Attributes:
        call_site: Offending call
        access_path: Access path named in the diagnostic (e.g. "use_case.get")
        context_name: Declared type of the field, or the resolver method FQN
    """

    call_site: CallSite
    access_path: str
    context_name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.access_path:
            raise ValueError("access_path must not be empty")
        if not self.context_name:
            raise ValueError("context_name must not be empty")

    @property
    def message(self) -> str:
        return f"{self.access_path} cannot be used in {self.context_name}"
