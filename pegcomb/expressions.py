"""
The expression graph built by the rule algebra and walked by the parser.
"""

import logging

from itertools import count

from dataclasses import dataclass, field, replace

from typing import (
    Any,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)


__all__ = [
    "Arena",
    "current_arena",
    "Expr",
    "LiteralExpr",
    "SequenceExpr",
    "ChoiceExpr",
    "NegationExpr",
    "RepetitionExpr",
    "PlaceholderExpr",
    "GrammarError",
    "InvalidLiteralError",
    "EmptyRuleError",
    "RepetitionBoundsError",
    "PlaceholderAlreadyBoundError",
    "UnboundPlaceholderError",
]


logger = logging.getLogger(__name__)


class GrammarError(Exception):
    """Thrown when a grammar is built or used incorrectly."""


class InvalidLiteralError(GrammarError):
    """
    Thrown when a literal is not given single characters, or is given a
    reversed character range.
    """


class EmptyRuleError(GrammarError):
    """Thrown when a choice or sequence is built from an empty string."""


class RepetitionBoundsError(GrammarError):
    """
    Thrown when a repetition has negative bounds or a (non-zero) maximum below
    its minimum.
    """


class PlaceholderAlreadyBoundError(GrammarError):
    """Thrown when binding a placeholder which has already been bound."""


class UnboundPlaceholderError(GrammarError):
    """Thrown when the parser reaches a placeholder which was never bound."""


class Arena:
    """
    Hands out the sequential ordinals which identify :py:class:`Expr` objects.

    A default, process-wide arena is used unless another is active. Using an
    arena as a context manager makes it the active arena for expressions built
    within the ``with`` block, which makes ordinals reproducible::

        >>> from pegcomb import Arena, literal
        >>> with Arena():
        ...     literal("x").expr.ordinal
        1

    Parameters
    ----------
    start : int
        The first ordinal handed out. Default = 1.
    """

    def __init__(self, start: int = 1) -> None:
        self._ordinals: Iterator[int] = count(start)

    def next_ordinal(self) -> int:
        """Allocate a new ordinal."""
        return next(self._ordinals)

    def __enter__(self) -> "Arena":
        _active_arenas.append(self)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        assert _active_arenas[-1] is self
        _active_arenas.pop()


_default_arena = Arena()

_active_arenas: List[Arena] = []


def current_arena() -> Arena:
    """Return the :py:class:`Arena` new expressions take their ordinals from."""
    if _active_arenas:
        return _active_arenas[-1]
    else:
        return _default_arena


def _next_ordinal() -> int:
    return current_arena().next_ordinal()


ExprT = TypeVar("ExprT", bound="Expr")


class Expr:
    """
    An expression in the grammar graph. Abstract base class.

    Expressions are immutable (except for :py:class:`PlaceholderExpr`, which
    is bound exactly once) and are freely shared between the expressions built
    on top of them. They compare and hash by identity.
    """

    name: Optional[str]
    """An optional human-readable name for this expression."""

    ordinal: int
    """A sequential number identifying this expression (see :py:class:`Arena`)."""

    @property
    def display_name(self) -> str:
        """The name of this expression, falling back on its ordinal."""
        if self.name is not None:
            return self.name
        else:
            return "#{}".format(self.ordinal)

    @property
    def label(self) -> str:
        """A short description of what this expression matches."""
        raise NotImplementedError()

    def iter_subexpressions(self) -> Iterable["Expr"]:
        """Iterate over the direct children of this expression, in order."""
        raise NotImplementedError()

    def with_name(self: ExprT, name: str) -> ExprT:
        """
        Create a copy of this expression with the specified name and a new
        ordinal. The copy shares its children with the original.
        """
        # NB: Relies on subclasses of this type being dataclasses
        return replace(self, name=name, ordinal=_next_ordinal())


@dataclass(frozen=True, eq=False)
class LiteralExpr(Expr):
    """Matches a single character in the inclusive range ``first`` to ``last``."""

    first: str
    last: str
    name: Optional[str] = None
    ordinal: int = field(default_factory=_next_ordinal)

    def __post_init__(self) -> None:
        for char in (self.first, self.last):
            if not isinstance(char, str) or len(char) != 1:
                raise InvalidLiteralError(
                    "expected a single character, got {!r}".format(char)
                )
        if self.first > self.last:
            raise InvalidLiteralError(
                "empty character range {!r}..{!r}".format(self.first, self.last)
            )

    def matches(self, char: str) -> bool:
        """Test whether a character lies within this literal's range."""
        return self.first <= char <= self.last

    @property
    def label(self) -> str:
        if self.first == self.last:
            return repr(self.first)
        else:
            return "{!r}..{!r}".format(self.first, self.last)

    def iter_subexpressions(self) -> Iterable[Expr]:
        return iter(())


@dataclass(frozen=True, eq=False)
class SequenceExpr(Expr):
    """Matches each expression in turn. All or nothing."""

    exprs: Tuple[Expr, ...]
    name: Optional[str] = None
    ordinal: int = field(default_factory=_next_ordinal)

    def __post_init__(self) -> None:
        object.__setattr__(self, "exprs", tuple(self.exprs))

    @property
    def label(self) -> str:
        return "sequence"

    def iter_subexpressions(self) -> Iterable[Expr]:
        return iter(self.exprs)


@dataclass(frozen=True, eq=False)
class ChoiceExpr(Expr):
    """Prioritised choice: matches the first matching expression."""

    exprs: Tuple[Expr, ...]
    name: Optional[str] = None
    ordinal: int = field(default_factory=_next_ordinal)

    def __post_init__(self) -> None:
        object.__setattr__(self, "exprs", tuple(self.exprs))

    @property
    def label(self) -> str:
        return "choice"

    def iter_subexpressions(self) -> Iterable[Expr]:
        return iter(self.exprs)


@dataclass(frozen=True, eq=False)
class NegationExpr(Expr):
    """Negative lookahead. Matches when expression does not, without consuming input."""

    expr: Expr
    name: Optional[str] = None
    ordinal: int = field(default_factory=_next_ordinal)

    @property
    def label(self) -> str:
        return "not"

    def iter_subexpressions(self) -> Iterable[Expr]:
        return iter((self.expr,))


@dataclass(frozen=True, eq=False)
class RepetitionExpr(Expr):
    """
    Greedily matches ``min`` or more repetitions of an expression, and no
    more than ``max`` (unless ``max`` is 0, meaning unbounded).
    """

    expr: Expr
    min: int = 1
    max: int = 0
    name: Optional[str] = None
    ordinal: int = field(default_factory=_next_ordinal)

    def __post_init__(self) -> None:
        if self.min < 0 or self.max < 0:
            raise RepetitionBoundsError(
                "negative repetition bounds {{{},{}}}".format(self.min, self.max)
            )
        if self.max != 0 and self.max < self.min:
            raise RepetitionBoundsError(
                "maximum repetitions {} is less than minimum {}".format(
                    self.max, self.min
                )
            )

    @property
    def label(self) -> str:
        return "repeat {{{},{}}}".format(self.min, self.max or "")

    def iter_subexpressions(self) -> Iterable[Expr]:
        return iter((self.expr,))


@dataclass(frozen=True, eq=False)
class PlaceholderExpr(Expr):
    """
    A forward reference to another expression, used to build recursive
    grammars. Initially unbound; bound exactly once using :py:meth:`bind`.
    """

    target: Optional[Expr] = field(default=None, repr=False)
    name: Optional[str] = None
    ordinal: int = field(default_factory=_next_ordinal)

    @property
    def is_bound(self) -> bool:
        return self.target is not None

    def bind(self, target: Expr) -> None:
        """Bind this placeholder to the expression it stands in for."""
        if self.target is not None:
            raise PlaceholderAlreadyBoundError(self.display_name)
        if target is self:
            raise GrammarError(
                "placeholder {} cannot be bound to itself".format(self.display_name)
            )
        # NB: The only mutation of an expression after construction
        object.__setattr__(self, "target", target)
        logger.debug(
            "Bound placeholder %s to %s", self.display_name, target.display_name
        )

    def with_name(self, name: str) -> "PlaceholderExpr":
        # A copy would be a separate, independently bound, cell
        raise GrammarError(
            "placeholders must be named when created, "
            "e.g. placeholder(name={!r})".format(name)
        )

    @property
    def label(self) -> str:
        return "placeholder"

    def iter_subexpressions(self) -> Iterable[Expr]:
        if self.target is not None:
            return iter((self.target,))
        else:
            return iter(())
