r"""
Pegcomb is a small, embeddable library for defining grammars in Python code
and matching them against text.

Grammars are built from single-character matchers combined with operators in
the style of Parsing Expression Grammars (PEG) [PEG]_: sequences, prioritised
choices, negative lookahead and bounded repetition. Recursive grammars are
built using placeholders. Matching is performed by a backtracking
recursive-descent parser implemented in pure Python.

Pegcomb answers one question: does a prefix of the input match the grammar?
It does not build parse trees or produce error messages.

Basic usage
===========

Rules are built from constructors such as :py:func:`.literal` and combined
using operators. For example, a comma separated list of numbers::

    >>> from pegcomb import literal, repeat
    >>> digit = literal("0", "9")
    >>> number = repeat(digit, 1)
    >>> number_list = number + repeat("," + number, 0)

Here ``+`` matches one rule followed by another and :py:func:`.repeat` matches
a rule a number of times (at least once by default, here at least zero times).
Plain strings are matched literally where a rule is expected.

A rule is matched against a :py:class:`.Source` of characters, typically a
:py:class:`.StringSource`::

    >>> from pegcomb import StringSource
    >>> source = StringSource("12,3,045")
    >>> number_list.parse(source)
    True
    >>> source.at_end
    True

When a rule matches, the source is left just past the matched input. Only a
prefix of the input needs to match::

    >>> source = StringSource("12,x")
    >>> number_list.parse(source)
    True
    >>> source.offset
    2

To require the whole input to match, finish the rule with
:py:func:`.end_of_input`::

    >>> from pegcomb import end_of_input
    >>> (number_list + end_of_input()).parse(StringSource("12,x"))
    False

Matching failure is not an error: :py:meth:`.Rule.parse` simply returns
False.


Rules
=====

The following constructors create new rules:

* ``literal("a")`` matches the character ``a``.
* ``literal("a", "z")`` matches any character from ``a`` to ``z``.
* ``choice_of("+-")`` matches any one of the characters given.
* ``sequence("input")`` matches the given characters in order.
* ``any_char()`` matches any single character.
* ``end_of_input()`` matches, without consuming anything, at the end of the
  input.

Rules are combined as follows:

* ``a + b`` (or ``a.then(b)``) matches ``a`` followed by ``b``. If either
  fails to match, nothing is consumed.
* ``a | b`` (or ``a.or_(b)``) matches ``a`` if ``a`` matches, or otherwise
  ``b``. There is no ambiguity when both match: the first wins.
* ``~a`` (or ``a.not_()``) matches, without consuming any input, only where
  ``a`` does not match.
* ``repeat(a, min=1, max=0)`` greedily matches ``a`` at least ``min`` and at
  most ``max`` times. A ``max`` of zero means there is no upper limit.
* ``optional(a)`` matches ``a`` zero or one times.

Combining rules never modifies them: every operator creates a new rule which
refers to (rather than copies) the rules it was built from. Chains of the same
operator, such as ``a | b | c``, produce a single flat choice (or sequence)
rather than nested ones.

.. note::

    Repeating a rule which can match the empty string (e.g. ``repeat(~a)``)
    would loop forever. Instead, an iteration which consumes no input is
    treated as a failed match and ends the repetition.


Recursive grammars
------------------

Since a rule must be built before it can be used, recursive rules are built
using a :py:func:`.placeholder` which is later bound to the finished rule. For
example, arithmetic expressions with parentheses::

    >>> from pegcomb import choice_of, placeholder

    >>> expression = placeholder(name="expression")
    >>> factor = number | "(" + expression + ")"
    >>> term = factor + repeat(choice_of("*/") + factor, 0)
    >>> expression.bind(
    ...     repeat(choice_of("+-"), 0, 1) + term + repeat(choice_of("+-") + term, 0)
    ... )

    >>> expression.parse(StringSource("-(1+2)*3"))
    True
    >>> expression.parse(StringSource("()"))
    False

A placeholder may only be bound once and must be bound before it is parsed.

.. warning::

    Parsing is plain recursion. Left-recursive grammars (where a rule can
    reach itself without consuming input) and very deeply nested input will
    exceed Python's recursion limit and raise :py:exc:`RecursionError`.


Inspecting grammars
===================

The expression graph behind a rule can be walked with an
:py:class:`.ExprVisitor` using :py:meth:`.Rule.accept`. Two renderings are
provided: :py:func:`.format_tree` produces indented text and
:py:func:`.to_dot` produces a `Graphviz <https://graphviz.org/>`_ graph.
Naming rules with :py:meth:`.Rule.named` makes these easier to read::

    >>> from pegcomb import format_tree, optional, Arena
    >>> with Arena():
    ...     sign = choice_of("+-").named("sign")
    ...     print(format_tree(optional(sign) + sign))
    sequence
     repeat {0,1}
      sign = choice
       '+'
       '-'
     -> sign


Logging
=======

Pegcomb logs via the :py:mod:`logging` module (loggers are named after the
module, e.g. ``pegcomb.parser``). All messages are at ``DEBUG`` level.


References
==========

.. [PEG] Ford, Bryan. "Parsing expression grammars: a recognition-based
   syntactic foundation." Proceedings of the 31st ACM SIGPLAN-SIGACT symposium
   on Principles of programming languages. 2004.


API Reference
=============

Rules
-----

.. autoclass:: Rule
    :members:

.. autoclass:: PlaceholderRule
    :members:
    :show-inheritance:

.. autofunction:: literal

.. autofunction:: choice_of

.. autofunction:: sequence

.. autofunction:: repeat

.. autofunction:: optional

.. autofunction:: any_char

.. autofunction:: end_of_input

.. autofunction:: placeholder


Sources
-------

.. autoclass:: Source
    :members:

.. autoclass:: StringSource
    :members:
    :show-inheritance:


Parser
------

.. autoclass:: Parser
    :members: parse


Expressions
-----------

.. autoclass:: Expr
    :members:

.. autoclass:: LiteralExpr

.. autoclass:: SequenceExpr

.. autoclass:: ChoiceExpr

.. autoclass:: NegationExpr

.. autoclass:: RepetitionExpr

.. autoclass:: PlaceholderExpr
    :members: bind, is_bound

.. autoclass:: Arena
    :members:

.. autofunction:: current_arena


Errors
------

Mistakes in building or wiring a grammar are reported with the following
exceptions:

.. autoexception:: GrammarError

.. autoexception:: InvalidLiteralError
    :show-inheritance:

.. autoexception:: EmptyRuleError
    :show-inheritance:

.. autoexception:: RepetitionBoundsError
    :show-inheritance:

.. autoexception:: PlaceholderAlreadyBoundError
    :show-inheritance:

.. autoexception:: UnboundPlaceholderError
    :show-inheritance:


Visitors
--------

.. autoclass:: ExprVisitor
    :members:

.. autoclass:: VisitContext
    :members:

.. autofunction:: walk

.. autofunction:: format_tree

.. autofunction:: to_dot

"""


from pegcomb.version import __version__

from pegcomb.expressions import *
from pegcomb.source import *
from pegcomb.parser import *
from pegcomb.visitor import *
from pegcomb.rule import *
from pegcomb.export import *

# NB: These names are explicitly re-exported here because mypy in strict mode
# does not allow implicit re-exports. The completeness of this list is tested
# by the test suite.
__all__ = [  # noqa: F405
    # expressions.*
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
    # source.*
    "Source",
    "StringSource",
    # parser.*
    "Parser",
    # visitor.*
    "VisitContext",
    "ExprVisitor",
    "walk",
    # rule.*
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
    # export.*
    "format_tree",
    "to_dot",
]
