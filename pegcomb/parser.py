"""
A backtracking recursive-descent parser which executes an expression graph
against a :py:class:`Source`.
"""

import logging

from pegcomb.expressions import (
    Expr,
    LiteralExpr,
    SequenceExpr,
    ChoiceExpr,
    NegationExpr,
    RepetitionExpr,
    PlaceholderExpr,
    UnboundPlaceholderError,
)
from pegcomb.source import Source


__all__ = [
    "Parser",
]


logger = logging.getLogger(__name__)


class Parser:
    """
    A parser.

    Sources are parsed using the :py:meth:`parse` method. The parser never
    modifies the expression graph so one graph may be shared by any number of
    parsers.

    Parameters
    ----------
    expr : :py:class:`Expr`
        The root expression of the grammar.
    """

    _expr: Expr
    """The root :py:class:`Expr` to be matched."""

    _source: Source
    """The source currently being parsed."""

    def __init__(self, expr: Expr) -> None:
        self._expr = expr

    def _parse_literal(self, expr: LiteralExpr) -> bool:
        char = self._source.consume()
        if char is None:
            return False
        # NB: A mismatched character is left consumed; enclosing expressions
        # reset the source when they fail.
        return expr.matches(char)

    def _parse_sequence(self, expr: SequenceExpr) -> bool:
        start = self._source.mark()
        for sub_expr in expr.exprs:
            if not self._parse(sub_expr):
                self._source.reset(start)
                return False
        return True

    def _parse_choice(self, expr: ChoiceExpr) -> bool:
        start = self._source.mark()
        for candidate_expr in expr.exprs:
            if self._parse(candidate_expr):
                return True
            else:
                self._source.reset(start)
        return False

    def _parse_negation(self, expr: NegationExpr) -> bool:
        start = self._source.mark()
        matched = self._parse(expr.expr)
        self._source.reset(start)
        return not matched

    def _parse_repetition(self, expr: RepetitionExpr) -> bool:
        start = self._source.mark()
        count = 0
        while expr.max == 0 or count < expr.max:
            before = self._source.mark()
            if not self._parse(expr.expr):
                self._source.reset(before)
                break

            # An iteration which consumes nothing would repeat forever: treat it
            # as a failed attempt.
            if self._source.mark() == before:
                logger.debug(
                    "Repetition %s stopped after zero-width match of %s",
                    expr.display_name,
                    expr.expr.display_name,
                )
                self._source.reset(before)
                break

            count += 1

        if count < expr.min:
            self._source.reset(start)
            return False
        return True

    def _parse_placeholder(self, expr: PlaceholderExpr) -> bool:
        if expr.target is None:
            raise UnboundPlaceholderError(expr.display_name)
        return self._parse(expr.target)

    def _parse(self, expr: Expr) -> bool:
        if isinstance(expr, LiteralExpr):
            return self._parse_literal(expr)
        elif isinstance(expr, SequenceExpr):
            return self._parse_sequence(expr)
        elif isinstance(expr, ChoiceExpr):
            return self._parse_choice(expr)
        elif isinstance(expr, NegationExpr):
            return self._parse_negation(expr)
        elif isinstance(expr, RepetitionExpr):
            return self._parse_repetition(expr)
        elif isinstance(expr, PlaceholderExpr):
            return self._parse_placeholder(expr)
        else:
            # Should be unreachable...
            raise TypeError(type(expr))

    def parse(self, source: Source) -> bool:
        """
        Attempt to match the grammar against a prefix of the source, returning
        True (with the source advanced past the match) if successful and False
        otherwise.

        Raises :py:exc:`UnboundPlaceholderError` if an unbound placeholder is
        reached. Deeply nested input may exceed Python's recursion limit, in
        which case :py:exc:`RecursionError` is raised.
        """
        self._source = source
        # NB: Source positions may be expensive to compute
        debug = logger.isEnabledFor(logging.DEBUG)
        if debug:
            logger.debug(
                "Parsing %s from %s line %d column %d",
                self._expr.display_name,
                source.name,
                source.row,
                source.col,
            )

        matched = self._parse(self._expr)

        if debug:
            logger.debug(
                "Parse of %s %s, stopped at line %d column %d",
                self._expr.display_name,
                "matched" if matched else "failed",
                source.row,
                source.col,
            )
        return matched
