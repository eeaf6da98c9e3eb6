"""Tests for application/analysis/call_sites.py."""

from pathlib import Path

from forceloader.application.analysis.call_sites import CallSiteExtractor
from forceloader.domain.model.call_site import CallSite
from tests.factories import column_of, get_method, line_of, make_unit


def extract(tmp_path: Path, source: str, method: str = "user") -> list[CallSite]:
    unit = make_unit(tmp_path, source)
    return list(CallSiteExtractor().extract(get_method(unit, method), unit))


def summary(sites: list[CallSite]) -> list[tuple[str, int, int]]:
    """(callee text, position line, position column) per site."""
    return [(".".join(s.target_chain), s.position.line, s.position.column) for s in sites]


class TestStatementShapes:
    """Each recognized statement shape yields its calls with statement position."""

    def test_expression_statement(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                self.use_case.get(id)
        """
        assert summary(extract(tmp_path, source)) == [("self.use_case.get", 3, 8)]

    def test_assignment_rhs(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                a, b = self.use_case.get(id), self.loader.load(id)
                c: int = self.use_case.count()
                c += self.use_case.count()
        """
        assert summary(extract(tmp_path, source)) == [
            ("self.use_case.get", 3, 8),
            ("self.loader.load", 3, 8),
            ("self.use_case.count", 4, 8),
            ("self.use_case.count", 5, 8),
        ]

    def test_return_and_await(self, tmp_path: Path) -> None:
        source = """
        class Q:
            async def user(self, id):
                return await self.use_case.get(id)
        """
        assert summary(extract(tmp_path, source)) == [("self.use_case.get", 3, 8)]

    def test_bare_return_ignored(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self):
                return
        """
        assert extract(tmp_path, source) == []


class TestConditionShapes:
    """if/while tests."""

    def test_walrus_initializer(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                if (user := self.use_case.get(id)) is not None:
                    return user
        """
        assert summary(extract(tmp_path, source)) == [("self.use_case.get", 3, 8)]

    def test_bare_walrus_test(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                while item := self.use_case.next():
                    pass
        """
        assert summary(extract(tmp_path, source)) == [("self.use_case.next", 3, 8)]

    def test_comparison_left_operand(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                if self.use_case.count() == 0:
                    pass
        """
        assert summary(extract(tmp_path, source)) == [("self.use_case.count", 3, 8)]

    def test_comparison_right_operand_ignored(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                if 0 == self.use_case.count():
                    pass
        """
        assert extract(tmp_path, source) == []

    def test_boolean_left_operand_and_negation(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                if not self.use_case.exists(id) and id:
                    pass
        """
        assert summary(extract(tmp_path, source)) == [("self.use_case.exists", 3, 8)]

    def test_call_as_test(self, tmp_path: Path) -> None:
        source = """
        class Q:
            async def user(self, id):
                if await self.use_case.exists(id):
                    pass
        """
        assert summary(extract(tmp_path, source)) == [("self.use_case.exists", 3, 8)]


class TestNestedScopes:
    """Compound statement bodies, closures and scope boundaries."""

    def test_compound_bodies_keep_own_position(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, ids):
                for id in ids:
                    self.use_case.get(id)
                try:
                    x = self.loader.load(1)
                except KeyError:
                    self.use_case.log()
                finally:
                    self.use_case.close()
                with self.lock:
                    self.use_case.touch()
        """
        assert summary(extract(tmp_path, source)) == [
            ("self.use_case.get", 4, 12),
            ("self.loader.load", 6, 12),
            ("self.use_case.log", 8, 12),
            ("self.use_case.close", 10, 12),
            ("self.use_case.touch", 12, 12),
        ]

    def test_match_cases(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, kind):
                match kind:
                    case "a":
                        self.use_case.a()
                    case _:
                        self.use_case.b()
        """
        assert [s.target_chain[-1] for s in extract(tmp_path, source)] == ["a", "b"]

    def test_nested_def_not_entered(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                def inner():
                    self.use_case.get(id)

                class Local:
                    x = self.use_case.get(id)
        """
        assert extract(tmp_path, source) == []

    def test_immediately_invoked_lambda_has_own_position(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                x = (lambda: self.use_case.get(1))()
        """
        sites = extract(tmp_path, source)

        assert len(sites) == 1
        site = sites[0]
        assert site.target_chain == ("self", "use_case", "get")
        assert site.position.line == line_of(source, "lambda")
        assert site.position.column == column_of(source, "self.use_case")

    def test_arguments_not_scanned(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                print(self.use_case.get(id))
        """
        assert summary(extract(tmp_path, source)) == [("print", 3, 8)]


class TestCalleeRecursion:
    """Calls whose callee is not a simple member access."""

    def test_call_on_call_result(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                self.use_case.factory()(id)
                self.repo().get(id)
                self.handlers()[0](id)
        """
        assert summary(extract(tmp_path, source)) == [
            ("self.use_case.factory", 3, 8),
            ("self.repo", 4, 8),
            ("self.handlers", 5, 8),
        ]

    def test_site_metadata(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                self.use_case.get(id)
        """
        (site,) = extract(tmp_path, source)

        assert site.method.name == "user"
        assert site.unit.module_name == "mod"
        assert site.location.line == 3

    def test_unrecognized_shapes_skipped(self, tmp_path: Path) -> None:
        source = """
        class Q:
            def user(self, id):
                del self.cache
                assert self.use_case.ok()
                raise self.use_case.error()
        """
        assert extract(tmp_path, source) == []
