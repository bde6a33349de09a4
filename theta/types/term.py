"""Term model helpers.

Terms are plain Python values:

    - symbols        -> Symbol
    - numbers        -> int / float
    - strings        -> str
    - empty marker   -> Nil (equal to [])
    - proper lists   -> Python list
    - dotted lists   -> DottedList(items, tail)

The engine never mutates a term in place; every helper here returns a new
value, and callers that build lists copy before extending them.
"""

from __future__ import annotations

from typing import NamedTuple

from theta import SExpression
from theta.types.errors import ThetaTypeError
from theta.types.nil import Nil, NilType
from theta.types.symbol import Symbol

T = Symbol("t")


class DottedList(NamedTuple):
    """An improper list: `items` followed by a non-list `tail`.

    Build these through `dotted()` so the tail invariant holds: a stored
    DottedList always has at least one item and an atom (non-Nil) tail.
    """

    items: list
    tail: SExpression

    def __repr__(self) -> str:
        inner = " ".join(repr(x) for x in self.items)
        return f"({inner} . {self.tail!r})"


def dotted(items, tail: SExpression) -> SExpression:
    """Build `(items... . tail)`, normalising to a proper list where possible."""
    items = list(items)
    if tail is Nil or (isinstance(tail, list) and not tail):
        return items
    if isinstance(tail, list):
        return items + tail
    if isinstance(tail, DottedList):
        return dotted(items + list(tail.items), tail.tail)
    if not items:
        return tail
    return DottedList(items, tail)


def is_empty(x: SExpression) -> bool:
    return x is Nil or isinstance(x, NilType) or (isinstance(x, list) and not x)


def is_truthy(x: SExpression) -> bool:
    """Only the empty marker (Nil or the empty list) is false."""
    return not is_empty(x)


def is_sequence(x: SExpression) -> bool:
    """True for non-empty lists and dotted lists."""
    return (isinstance(x, list) and bool(x)) or isinstance(x, DottedList)


def is_proper(x: SExpression) -> bool:
    return is_empty(x) or isinstance(x, list)


def is_atom(x: SExpression) -> bool:
    return not is_sequence(x)


def to_list(x: SExpression) -> tuple[list, SExpression]:
    """Return (items, tail) for any term; tail is Nil for proper lists."""
    if isinstance(x, DottedList):
        return list(x.items), x.tail
    if isinstance(x, list):
        return list(x), Nil
    if is_empty(x):
        return [], Nil
    raise ThetaTypeError(f"Expected a list, got {x!r}")


def cons(head: SExpression, tail: SExpression) -> SExpression:
    return dotted([head], tail)


def car(x: SExpression) -> SExpression:
    if is_empty(x):
        return Nil
    if isinstance(x, DottedList):
        return x.items[0]
    if isinstance(x, list):
        return x[0]
    raise ThetaTypeError(f"car: not a list: {x!r}")


def cdr(x: SExpression) -> SExpression:
    if is_empty(x):
        return Nil
    if isinstance(x, DottedList):
        return dotted(x.items[1:], x.tail)
    if isinstance(x, list):
        return x[1:]
    raise ThetaTypeError(f"cdr: not a list: {x!r}")


def head_symbol(form: SExpression) -> Symbol | None:
    """The head of a form if it is a Symbol, else None."""
    if isinstance(form, list) and form and isinstance(form[0], Symbol):
        return form[0]
    if isinstance(form, DottedList) and isinstance(form.items[0], Symbol):
        return form.items[0]
    return None


def form_args(form: SExpression) -> SExpression:
    """Everything after the head of a form, keeping any improper tail."""
    if isinstance(form, DottedList):
        return dotted(form.items[1:], form.tail)
    return list(form[1:])
