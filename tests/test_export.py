import pytest  # type: ignore

from pegcomb.expressions import Arena
from pegcomb.rule import Rule, literal, choice_of, repeat, optional, placeholder
from pegcomb.export import format_tree, to_dot


@pytest.fixture
def recursive_list() -> Rule:
    # list = "a" list | "b"
    with Arena():
        p = placeholder(name="list")
        a = literal("a")
        p.bind(a + p | "b")
    return p


@pytest.fixture
def unbound() -> Rule:
    with Arena():
        p = placeholder()
        rule = literal("x") + p
    return rule


class TestFormatTree:
    def test_single(self) -> None:
        assert format_tree(literal("a", "z")) == "'a'..'z'"

    def test_nested(self) -> None:
        rule = repeat(literal("a") | ~literal("b"), 0, 3)
        assert format_tree(rule) == "\n".join(
            [
                "repeat {0,3}",
                " choice",
                "  'a'",
                "  not",
                "   'b'",
            ]
        )

    def test_names(self) -> None:
        sign = choice_of("+-").named("sign")
        rule = (optional(sign) + literal("1")).named("signed_one")
        assert format_tree(rule) == "\n".join(
            [
                "signed_one = sequence",
                " repeat {0,1}",
                "  sign = choice",
                "   '+'",
                "   '-'",
                " '1'",
            ]
        )

    def test_shared_unnamed(self) -> None:
        with Arena():
            a = literal("a")
            rule = a + a
        assert format_tree(rule) == "sequence\n 'a'\n -> #1"

    def test_recursive(self, recursive_list: Rule) -> None:
        assert format_tree(recursive_list) == "\n".join(
            [
                "list = placeholder",
                " choice",
                "  sequence",
                "   'a'",
                "   -> list",
                "  'b'",
            ]
        )

    def test_unbound(self, unbound: Rule) -> None:
        assert format_tree(unbound) == "\n".join(
            ["sequence", " 'x'", " placeholder", "  (unbound)"]
        )


class TestToDot:
    def test_single(self) -> None:
        with Arena():
            rule = literal("a")
        assert to_dot(rule) == "\n".join(
            [
                'digraph "grammar" {',
                '    n1 [label="\'a\'"];',
                "}",
            ]
        )

    def test_recursive(self, recursive_list: Rule) -> None:
        assert to_dot(recursive_list) == "\n".join(
            [
                'digraph "grammar" {',
                '    n1 [label="list = placeholder"];',
                '    n5 [label="choice"];',
                '    n3 [label="sequence"];',
                '    n2 [label="\'a\'"];',
                '    n4 [label="\'b\'"];',
                "    n1 -> n5;",
                "    n5 -> n3;",
                "    n3 -> n2;",
                "    n3 -> n1;",
                "    n5 -> n4;",
                "}",
            ]
        )

    def test_unbound(self, unbound: Rule) -> None:
        assert to_dot(unbound) == "\n".join(
            [
                'digraph "grammar" {',
                '    n3 [label="sequence"];',
                '    n2 [label="\'x\'"];',
                '    n1 [label="placeholder (unbound)"];',
                "    n3 -> n2;",
                "    n3 -> n1;",
                "}",
            ]
        )

    def test_shared_declared_once(self) -> None:
        with Arena():
            a = literal("a")
            rule = a + a
        dot = to_dot(rule)
        assert dot.count("n1 [") == 1
        assert dot.count("n2 -> n1;") == 2

    def test_escaping(self) -> None:
        with Arena():
            rule = literal('"')
        assert r"""    n1 [label="'\"'"];""" in to_dot(rule)

    def test_graph_name(self) -> None:
        assert to_dot(literal("a"), graph_name="my grammar").startswith(
            'digraph "my grammar" {'
        )
