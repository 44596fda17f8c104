"""
The rule algebra: constructors and operators which build expression graphs.
"""

import sys

from typing import Optional, Type, TypeVar, Union

from pegcomb.expressions import (
    Expr,
    LiteralExpr,
    SequenceExpr,
    ChoiceExpr,
    NegationExpr,
    RepetitionExpr,
    PlaceholderExpr,
    EmptyRuleError,
)
from pegcomb.parser import Parser
from pegcomb.source import Source
from pegcomb.visitor import ExprVisitor, walk


__all__ = [
    "Rule",
    "PlaceholderRule",
    "literal",
    "choice_of",
    "sequence",
    "repeat",
    "optional",
    "any_char",
    "end_of_input",
    "placeholder",
]


RuleLike = Union["Rule", str]
"""Operator operands: a :py:class:`Rule`, or a string to match literally."""


class Rule:
    """
    A handle on a grammar expression, exposing the combinator algebra.

    Operators always build a new expression (sharing, rather than copying,
    their operands' expressions) and return a new :py:class:`Rule`:

    * ``a | b`` (or ``a.or_(b)``): prioritised choice.
    * ``a + b`` (or ``a.then(b)``): sequence.
    * ``~a`` (or ``a.not_()``): negative lookahead.

    Chains of the same operator are flattened: ``a | b | c`` builds a single
    three-way choice. Either operand may also be a plain string which is
    matched literally.

    Parameters
    ----------
    expr : :py:class:`Expr`
        The root expression of this rule.
    """

    def __init__(self, expr: Expr) -> None:
        self._expr = expr

    @property
    def expr(self) -> Expr:
        """The root expression of this rule."""
        return self._expr

    def or_(self, other: RuleLike) -> "Rule":
        """Match this rule, or if it does not match, ``other``."""
        return Rule(_chain(ChoiceExpr, self._expr, _as_rule(other).expr))

    def then(self, other: RuleLike) -> "Rule":
        """Match this rule followed by ``other``."""
        return Rule(_chain(SequenceExpr, self._expr, _as_rule(other).expr))

    def not_(self) -> "Rule":
        """Match, without consuming input, only where this rule does not match."""
        return Rule(NegationExpr(self._expr))

    def named(self, name: str) -> "Rule":
        """
        Return a copy of this rule with a human-readable name, used when the
        grammar is printed or exported.
        """
        return Rule(self._expr.with_name(name))

    def __or__(self, other: RuleLike) -> "Rule":
        if not isinstance(other, (Rule, str)):
            return NotImplemented
        return self.or_(other)

    def __ror__(self, other: str) -> "Rule":
        if not isinstance(other, str):
            return NotImplemented
        return _as_rule(other).or_(self)

    def __add__(self, other: RuleLike) -> "Rule":
        if not isinstance(other, (Rule, str)):
            return NotImplemented
        return self.then(other)

    def __radd__(self, other: str) -> "Rule":
        if not isinstance(other, str):
            return NotImplemented
        return _as_rule(other).then(self)

    def __invert__(self) -> "Rule":
        return self.not_()

    def parse(self, source: Source) -> bool:
        """
        Attempt to match this rule against a prefix of ``source``. On success,
        returns True with the source advanced past the matched input. On
        failure, returns False (see :py:class:`.Parser` for where the source is
        left).
        """
        return Parser(self._expr).parse(source)

    def accept(self, visitor: ExprVisitor) -> None:
        """Walk this rule's expression graph with a visitor (see :py:func:`.walk`)."""
        walk(self._expr, visitor)

    def __repr__(self) -> str:
        return "<{} {}: {}>".format(
            type(self).__name__, self._expr.display_name, self._expr.label
        )


class PlaceholderRule(Rule):
    """
    A :py:class:`Rule` standing in for a rule which has not been built yet.
    Created by :py:func:`placeholder`.
    """

    _expr: PlaceholderExpr

    def bind(self, rule: RuleLike) -> None:
        """
        Wire this placeholder to the rule it stands in for. May only be called
        once. As with the operators, a string is matched literally.
        """
        self._expr.bind(_as_rule(rule).expr)


ExprT = TypeVar("ExprT", SequenceExpr, ChoiceExpr)


def _chain(cls: Type[ExprT], left: Expr, right: Expr) -> ExprT:
    # Extend, rather than nest, a left operand built by the same operator
    if isinstance(left, cls):
        return cls(left.exprs + (right,))
    else:
        return cls((left, right))


def _as_rule(value: RuleLike) -> Rule:
    if isinstance(value, Rule):
        return value
    elif isinstance(value, str):
        if len(value) == 1:
            return literal(value)
        else:
            return sequence(value)
    else:
        raise TypeError(
            "expected a Rule or str, got {}".format(type(value).__name__)
        )


def literal(first: str, last: str = "") -> Rule:
    """
    Match a single character. If ``last`` is given, match any character
    between ``first`` and ``last`` inclusive (e.g. ``literal("0", "9")``).
    """
    return Rule(LiteralExpr(first, last or first))


def choice_of(chars: str) -> Rule:
    """Match any one of the characters in ``chars``."""
    if not chars:
        raise EmptyRuleError("choice of no characters")
    return Rule(ChoiceExpr(tuple(LiteralExpr(char, char) for char in chars)))


def sequence(string: str) -> Rule:
    """Match the characters of ``string`` in order."""
    if not string:
        raise EmptyRuleError("sequence of no characters")
    return Rule(SequenceExpr(tuple(LiteralExpr(char, char) for char in string)))


def repeat(rule: RuleLike, min: int = 1, max: int = 0) -> Rule:
    """
    Greedily match ``rule`` between ``min`` and ``max`` times (inclusive). A
    ``max`` of 0 means no upper bound.

    Raises :py:exc:`.RepetitionBoundsError` if either bound is negative or if
    ``max`` is non-zero and less than ``min``.
    """
    return Rule(RepetitionExpr(_as_rule(rule).expr, min, max))


def optional(rule: RuleLike) -> Rule:
    """Match ``rule`` zero or one times."""
    return repeat(rule, 0, 1)


def any_char() -> Rule:
    """Match any single character."""
    return Rule(LiteralExpr("\0", chr(sys.maxunicode)))


def end_of_input() -> Rule:
    """Match (without consuming anything) only at the end of the input."""
    return ~any_char()


def placeholder(name: Optional[str] = None) -> PlaceholderRule:
    """
    Create a placeholder for a rule which will be defined later, allowing
    recursive grammars to be built. The placeholder must be bound to its rule
    using :py:meth:`PlaceholderRule.bind` before it is parsed::

        >>> from pegcomb import placeholder, StringSource
        >>> nested = placeholder()
        >>> nested.bind("(" + (nested | "x") + ")")
        >>> nested.parse(StringSource("((x))"))
        True
    """
    return PlaceholderRule(PlaceholderExpr(name=name))
