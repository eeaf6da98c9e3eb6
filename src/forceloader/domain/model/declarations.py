"""Declarations extracted from class definitions.

Python rendition of aggregate types:
    class QueryResolver(Resolver):     → embedded field (base class)
        user_use_case: UserUseCase     → named field (annotated attribute)

        def user(self, id): ...        → method, receiver binding "self"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import ast

    from forceloader.domain.model.location import Location


def type_basename(type_name: str) -> str:
    """Last dotted segment of a type reference, without subscripts.

    Examples:
        "UserUseCase"                  → "UserUseCase"
        "usecase.UserUseCase"          → "UserUseCase"
        "generic.Repo[models.User]"    → "Repo"
    """
    return type_name.split("[", 1)[0].rsplit(".", 1)[-1].strip()


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    """Field of an aggregate type.

    Embedded fields have no name of their own: they are base classes,
    identified by type only. Named fields are annotated attributes.

    Attributes:
        name: Field name ("" for embedded fields)
        type_name: Declared type reference, indirection already unwrapped
        embedded: True for base classes
        location: Where the field is declared
    """

    name: str
    type_name: str
    embedded: bool
    location: Location

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.type_name:
            raise ValueError("type_name must not be empty")
        if self.embedded and self.name:
            raise ValueError(f"embedded field must not be named, got '{self.name}'")
        if not self.embedded and not self.name:
            raise ValueError("named field requires a name")

    @property
    def type_basename(self) -> str:
        """Declared type without module qualification."""
        return type_basename(self.type_name)


@dataclass(frozen=True, slots=True)
class TypeDeclaration:
    """Class statement seen as an aggregate of fields.

    Attributes:
        name: Class name (unique within its module)
        qualified_name: module.ClassName
        module: Module the class is declared in
        fields: Embedded fields (bases) first, then named fields in order
        location: Class statement location
        is_aggregate: Always True for classes
    """

    name: str
    qualified_name: str
    module: str
    fields: tuple[FieldDeclaration, ...]
    location: Location
    is_aggregate: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if self.qualified_name != f"{self.module}.{self.name}":
            raise ValueError(
                f"qualified_name '{self.qualified_name}' does not match "
                f"'{self.module}.{self.name}'"
            )

    @property
    def embedded_fields(self) -> tuple[FieldDeclaration, ...]:
        return tuple(f for f in self.fields if f.embedded)

    @property
    def named_fields(self) -> tuple[FieldDeclaration, ...]:
        return tuple(f for f in self.fields if not f.embedded)

    def field(self, name: str) -> FieldDeclaration | None:
        """Find named field declared directly on this type."""
        for decl in self.fields:
            if not decl.embedded and decl.name == name:
                return decl
        return None


@dataclass(frozen=True, slots=True)
class MethodDeclaration:
    """Method defined directly in a class body.

    Read once per analysis pass; never mutated.

    Attributes:
        name: Method name
        qualified_name: module.ClassName.method
        receiver_type: Name of the class the method belongs to
        receiver_name: First positional parameter ("self" by convention)
        body: Statement sequence of the method
        location: def statement location
        is_async: True for async def
    """

    name: str
    qualified_name: str
    receiver_type: str
    receiver_name: str
    body: tuple[ast.stmt, ...]
    location: Location
    is_async: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not self.receiver_type:
            raise ValueError("receiver_type must not be empty")
        if not self.receiver_name:
            raise ValueError("receiver_name must not be empty")
        if not self.qualified_name.endswith(f"{self.receiver_type}.{self.name}"):
            raise ValueError(
                f"qualified_name '{self.qualified_name}' must end with "
                f"'{self.receiver_type}.{self.name}'"
            )
