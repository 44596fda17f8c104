"""
Renderings of expression graphs for people (:py:func:`format_tree`) and for
Graphviz (:py:func:`to_dot`).
"""

from typing import List, Set

from pegcomb.expressions import Expr, PlaceholderExpr
from pegcomb.rule import Rule
from pegcomb.visitor import ExprVisitor, VisitContext, walk


__all__ = [
    "format_tree",
    "to_dot",
]


def _describe(expr: Expr) -> str:
    if expr.name is not None:
        return "{} = {}".format(expr.name, expr.label)
    else:
        return expr.label


class _TreeFormatter(ExprVisitor):
    def __init__(self) -> None:
        self.lines: List[str] = []

    def _add(self, expr: Expr, context: VisitContext) -> None:
        indent = " " * context.depth
        if context.first_visit:
            self.lines.append(indent + _describe(expr))
        else:
            self.lines.append("{}-> {}".format(indent, expr.display_name))

    visit_literal = _add
    visit_sequence = _add
    visit_choice = _add
    visit_negation = _add
    visit_repetition = _add

    def visit_placeholder(self, expr: PlaceholderExpr, context: VisitContext) -> None:
        self._add(expr, context)
        if context.first_visit and not expr.is_bound:
            self.lines.append(" " * (context.depth + 1) + "(unbound)")


def format_tree(rule: Rule) -> str:
    """
    Render a rule as indented text, one expression per line, for example::

        >>> from pegcomb import literal, repeat
        >>> digit = literal("0", "9").named("digit")
        >>> print(format_tree(repeat(digit) + "." + repeat(digit)))
        sequence
         repeat {1,}
          digit = '0'..'9'
         '.'
         repeat {1,}
          -> digit

    Expressions reached more than once are expanded only the first time and
    afterwards shown as ``-> <name>``.
    """
    formatter = _TreeFormatter()
    rule.accept(formatter)
    return "\n".join(formatter.lines)


def _dot_id(expr: Expr) -> str:
    return "n{}".format(expr.ordinal)


def _dot_string(string: str) -> str:
    return '"{}"'.format(string.replace("\\", "\\\\").replace('"', '\\"'))


class _DotExporter(ExprVisitor):
    def __init__(self) -> None:
        self.declarations: List[str] = []
        self.edges: List[str] = []
        self._declared: Set[Expr] = set()

    def _add(self, expr: Expr, context: VisitContext) -> None:
        if expr not in self._declared:
            self._declared.add(expr)
            label = _describe(expr)
            if isinstance(expr, PlaceholderExpr) and not expr.is_bound:
                label += " (unbound)"
            self.declarations.append(
                "    {} [label={}];".format(_dot_id(expr), _dot_string(label))
            )
        if context.parent is not None:
            self.edges.append(
                "    {} -> {};".format(_dot_id(context.parent), _dot_id(expr))
            )

    visit_literal = _add
    visit_sequence = _add
    visit_choice = _add
    visit_negation = _add
    visit_repetition = _add
    visit_placeholder = _add


def to_dot(rule: Rule, graph_name: str = "grammar") -> str:
    """
    Render a rule's expression graph in the Graphviz DOT language.

    Each expression is declared once, identified by its ordinal, and every
    parent to child relationship becomes an edge. Ordinals are only unique
    within an :py:class:`.Arena` so the whole graph should be built within
    one.
    """
    exporter = _DotExporter()
    rule.accept(exporter)
    return "\n".join(
        ["digraph {} {{".format(_dot_string(graph_name))]
        + exporter.declarations
        + exporter.edges
        + ["}"]
    )
