"""Tests for domain/model/program.py."""

import ast
from pathlib import Path

import pytest

from forceloader.domain.model.program import CompilationUnit, Program
from tests.factories import make_program, make_unit


def bare_unit(module_name: str = "m", source: str = "x = 1\n") -> CompilationUnit:
    return CompilationUnit(
        module_name=module_name,
        path=Path(f"{module_name}.py"),
        source=source,
        tree=ast.parse(source),
        line_offsets=(0,),
        comments=None,
        imports=None,
    )


class TestCompilationUnit:
    """Tests for CompilationUnit."""

    def test_empty_module_name_raises(self) -> None:
        with pytest.raises(ValueError, match="module_name must not be empty"):
            bare_unit(module_name="")

    def test_offset_is_byte_based(self, tmp_path: Path) -> None:
        unit = make_unit(tmp_path, 's = "é"\nx = 1\n')

        # "é" is two bytes in UTF-8
        assert unit.line_offsets == (0, 9, 15)
        assert unit.offset(2, 4) == 13

    def test_offset_out_of_range(self) -> None:
        unit = bare_unit()
        with pytest.raises(ValueError, match="out of range"):
            unit.offset(5, 0)

    def test_node_span(self, tmp_path: Path) -> None:
        unit = make_unit(tmp_path, "x = foo.bar(1)\n")
        call = unit.tree.body[0].value  # type: ignore[attr-defined]

        assert unit.node_span(call) == (4, 14)
        assert unit.node_span(call.func) == (4, 11)

    def test_qualify(self, tmp_path: Path) -> None:
        source = """
        from app import usecase
        from app.usecase import UserUseCase as UC


        class Resolver:
            pass
        """
        unit = make_unit(tmp_path, source, module="app.graph")

        assert unit.qualify("Resolver") == "app.graph.Resolver"
        assert unit.qualify("usecase.UserUseCase") == "app.usecase.UserUseCase"
        assert unit.qualify("UC") == "app.usecase.UserUseCase"
        assert unit.qualify("UC[int]") == "app.usecase.UserUseCase"
        assert unit.qualify("int") == "int"

    def test_find_type(self, tmp_path: Path) -> None:
        unit = make_unit(tmp_path, "class A:\n    pass\n")
        assert unit.find_type("A") is not None
        assert unit.find_type("B") is None


class TestProgram:
    """Tests for Program lookups."""

    def test_empty(self) -> None:
        program = Program.empty()
        assert program.units == ()
        assert list(program.iter_types()) == []

    def test_duplicate_module_raises(self) -> None:
        with pytest.raises(ValueError, match="duplicate module"):
            Program(root_path=Path(), units=(bare_unit("m"), bare_unit("m")))

    def test_iter_types_in_unit_order(self, tmp_path: Path) -> None:
        program = make_program(
            tmp_path,
            {"pkg.a": "class A:\n    pass\n", "pkg.b": "class B:\n    pass\n"},
        )

        names = [decl.qualified_name for _, decl in program.iter_types()]

        assert names == ["pkg.a.A", "pkg.b.B"]
        assert program.type_by_qualified_name("pkg.b.B") is not None
        assert program.unit("pkg.a") is not None

    def test_resolve_type_across_modules(self, tmp_path: Path) -> None:
        program = make_program(
            tmp_path,
            {
                "pkg.usecase": "class UserUseCase:\n    pass\n",
                "pkg.graph": "from pkg import usecase\n",
            },
        )
        unit = program.unit("pkg.graph")
        assert unit is not None

        resolved = program.resolve_type(unit, "usecase.UserUseCase")

        assert resolved is not None
        assert resolved[1].qualified_name == "pkg.usecase.UserUseCase"
        assert program.resolve_type(unit, "Opaque") is None

    def test_lookup_field_through_embedded(self, tmp_path: Path) -> None:
        program = make_program(
            tmp_path,
            {
                "pkg.base": """
                class Resolver:
                    use_case: UserUseCase
                """,
                "pkg.query": """
                from pkg.base import Resolver


                class QueryResolver(Resolver):
                    loader: Loader
                """,
            },
        )
        unit = program.unit("pkg.query")
        assert unit is not None
        decl = unit.find_type("QueryResolver")
        assert decl is not None

        found = program.lookup_field(unit, decl, "use_case")

        assert found is not None
        field_unit, field = found
        assert field_unit.module_name == "pkg.base"
        assert field.type_name == "UserUseCase"
        assert program.lookup_field(unit, decl, "loader") is not None
        assert program.lookup_field(unit, decl, "missing") is None

    def test_lookup_field_cycle_safe(self, tmp_path: Path) -> None:
        program = make_program(
            tmp_path,
            {
                "pkg.cycle": """
                class A(B):
                    pass


                class B(A):
                    pass
                """,
            },
        )
        unit = program.unit("pkg.cycle")
        assert unit is not None
        decl = unit.find_type("A")
        assert decl is not None

        assert program.lookup_field(unit, decl, "x") is None
