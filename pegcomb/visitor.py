"""Cycle-safe traversal of expression graphs."""

from typing import NamedTuple, Optional, Set

from pegcomb.expressions import (
    Expr,
    LiteralExpr,
    SequenceExpr,
    ChoiceExpr,
    NegationExpr,
    RepetitionExpr,
    PlaceholderExpr,
)

__all__ = [
    "VisitContext",
    "ExprVisitor",
    "walk",
]


class VisitContext(NamedTuple):
    """Describes how an expression was reached during a :py:func:`walk`."""

    parent: Optional[Expr]
    """The expression this one was reached from (None for the root)."""

    depth: int
    """The number of edges between the root and this expression."""

    first_visit: bool
    """
    False if this expression was already reached earlier in the walk, in which
    case its children are not visited again.
    """


class ExprVisitor:
    """
    A base class for visitors passed to :py:func:`walk`.

    Subclasses override the ``visit_<kind>`` methods for the expression kinds
    they care about. Each is called with the expression and a
    :py:class:`VisitContext` once for every edge by which the expression is
    reached. The default implementations do nothing.
    """

    def visit_literal(self, expr: LiteralExpr, context: VisitContext) -> None:
        pass

    def visit_sequence(self, expr: SequenceExpr, context: VisitContext) -> None:
        pass

    def visit_choice(self, expr: ChoiceExpr, context: VisitContext) -> None:
        pass

    def visit_negation(self, expr: NegationExpr, context: VisitContext) -> None:
        pass

    def visit_repetition(self, expr: RepetitionExpr, context: VisitContext) -> None:
        pass

    def visit_placeholder(self, expr: PlaceholderExpr, context: VisitContext) -> None:
        pass


def _dispatch(expr: Expr, visitor: ExprVisitor, context: VisitContext) -> None:
    if isinstance(expr, LiteralExpr):
        visitor.visit_literal(expr, context)
    elif isinstance(expr, SequenceExpr):
        visitor.visit_sequence(expr, context)
    elif isinstance(expr, ChoiceExpr):
        visitor.visit_choice(expr, context)
    elif isinstance(expr, NegationExpr):
        visitor.visit_negation(expr, context)
    elif isinstance(expr, RepetitionExpr):
        visitor.visit_repetition(expr, context)
    elif isinstance(expr, PlaceholderExpr):
        visitor.visit_placeholder(expr, context)
    else:
        # Should be unreachable...
        raise TypeError(type(expr))


def walk(expr: Expr, visitor: ExprVisitor) -> None:
    """
    Visit every edge of the expression graph rooted at ``expr`` depth-first,
    in declaration order.

    Each expression's children are only descended into the first time it is
    reached, so shared sub-expressions are expanded once and cycles (through
    placeholders) terminate. Unbound placeholders are visited as leaves.
    """
    visited: Set[Expr] = set()

    def visit(expr: Expr, parent: Optional[Expr], depth: int) -> None:
        first_visit = expr not in visited
        visited.add(expr)

        _dispatch(expr, visitor, VisitContext(parent, depth, first_visit))

        if first_visit:
            for child in expr.iter_subexpressions():
                visit(child, expr, depth + 1)

    visit(expr, None, 0)
