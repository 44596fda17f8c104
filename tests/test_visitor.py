from typing import Any, List, Tuple

from pegcomb.expressions import (
    Expr,
    LiteralExpr,
    SequenceExpr,
    ChoiceExpr,
    NegationExpr,
    RepetitionExpr,
    PlaceholderExpr,
)
from pegcomb.visitor import VisitContext, ExprVisitor, walk
from pegcomb.rule import literal, placeholder, repeat


class RecordingVisitor(ExprVisitor):
    def __init__(self) -> None:
        self.visits: List[Tuple[str, Expr, VisitContext]] = []

    def visit_literal(self, expr: LiteralExpr, context: VisitContext) -> None:
        self.visits.append(("literal", expr, context))

    def visit_sequence(self, expr: SequenceExpr, context: VisitContext) -> None:
        self.visits.append(("sequence", expr, context))

    def visit_choice(self, expr: ChoiceExpr, context: VisitContext) -> None:
        self.visits.append(("choice", expr, context))

    def visit_negation(self, expr: NegationExpr, context: VisitContext) -> None:
        self.visits.append(("negation", expr, context))

    def visit_repetition(self, expr: RepetitionExpr, context: VisitContext) -> None:
        self.visits.append(("repetition", expr, context))

    def visit_placeholder(self, expr: PlaceholderExpr, context: VisitContext) -> None:
        self.visits.append(("placeholder", expr, context))


def record(expr: Expr) -> List[Tuple[str, Expr, VisitContext]]:
    visitor = RecordingVisitor()
    walk(expr, visitor)
    return visitor.visits


def test_single_expression() -> None:
    a = LiteralExpr("a", "a")
    assert record(a) == [("literal", a, VisitContext(None, 0, True))]


def test_each_kind_dispatched() -> None:
    a = LiteralExpr("a", "a")
    neg = NegationExpr(a)
    rep = RepetitionExpr(neg, 0)
    p = PlaceholderExpr(rep)
    choice = ChoiceExpr((p,))
    seq = SequenceExpr((choice,))

    assert record(seq) == [
        ("sequence", seq, VisitContext(None, 0, True)),
        ("choice", choice, VisitContext(seq, 1, True)),
        ("placeholder", p, VisitContext(choice, 2, True)),
        ("repetition", rep, VisitContext(p, 3, True)),
        ("negation", neg, VisitContext(rep, 4, True)),
        ("literal", a, VisitContext(neg, 5, True)),
    ]


def test_declaration_order() -> None:
    a = LiteralExpr("a", "a")
    b = LiteralExpr("b", "b")
    c = LiteralExpr("c", "c")
    inner = ChoiceExpr((b, c))
    seq = SequenceExpr((a, inner))
    assert [expr for _, expr, _ in record(seq)] == [seq, a, inner, b, c]


def test_shared_expression_reported_per_edge() -> None:
    digit = literal("0", "9")
    pair = digit + digit
    visits = record(pair.expr)
    assert visits == [
        ("sequence", pair.expr, VisitContext(None, 0, True)),
        ("literal", digit.expr, VisitContext(pair.expr, 1, True)),
        ("literal", digit.expr, VisitContext(pair.expr, 1, False)),
    ]


def test_shared_expression_expanded_once() -> None:
    a = LiteralExpr("a", "a")
    b = LiteralExpr("b", "b")
    shared = SequenceExpr((a, b))
    root = ChoiceExpr((shared, NegationExpr(shared)))
    exprs = [expr for _, expr, _ in record(root)]
    assert exprs.count(shared) == 2
    assert exprs.count(a) == 1
    assert exprs.count(b) == 1


def test_cycle_terminates() -> None:
    expression = placeholder(name="expression")
    nested = literal("(") + expression + literal(")")
    expression.bind(nested | literal("x"))

    visits = record(expression.expr)
    placeholder_visits = [
        context for kind, _, context in visits if kind == "placeholder"
    ]
    assert placeholder_visits == [
        VisitContext(None, 0, True),
        VisitContext(nested.expr, 3, False),
    ]
    # Every other expression is reached exactly once
    assert len(visits) == 7


def test_unbound_placeholder_is_leaf() -> None:
    p = placeholder()
    rule = repeat(p)
    assert record(rule.expr) == [
        ("repetition", rule.expr, VisitContext(None, 0, True)),
        ("placeholder", p.expr, VisitContext(rule.expr, 1, True)),
    ]


def test_default_visitor_does_nothing() -> None:
    p = placeholder()
    p.bind(literal("a") + ~p | repeat("bc"))
    walk(p.expr, ExprVisitor())


def test_rule_accept() -> None:
    visitor = RecordingVisitor()
    rule = literal("a") | literal("b")
    rule.accept(visitor)
    assert [kind for kind, _, _ in visitor.visits] == ["choice", "literal", "literal"]


def test_visit_context_fields() -> None:
    context: Any = VisitContext(parent=None, depth=2, first_visit=False)
    assert context.parent is None
    assert context.depth == 2
    assert context.first_visit is False
