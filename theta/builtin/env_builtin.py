"""Built-in functions for the Theta runtime and expansion environments.

This module defines integer arithmetic, comparison, list processing,
predicates, and the registration helper that installs them into an
Environment. Every builtin takes (env, args) with args already evaluated.
"""
from __future__ import annotations

from numbers import Number

from theta import LispValue
from theta.types.environment import Environment
from theta.types.errors import ThetaTypeError, ArityError
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types import term
from theta.types.term import DottedList, T, is_empty


def _bool(flag: bool) -> LispValue:
    return T if flag else Nil


def _expect(name: str, expr: list[LispValue], n: int) -> None:
    if len(expr) != n:
        raise ArityError(f"{name} requires exactly {n} argument(s)")


def _numbers(name: str, expr: list[LispValue]) -> list:
    for x in expr:
        if isinstance(x, bool) or not isinstance(x, Number):
            raise ThetaTypeError(f"All arguments to {name} must be numbers")
    return expr


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments."""
    return sum(_numbers("+", expr))


def sub(env: Environment, expr: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not expr:
        raise ArityError("- requires at least 1 argument")
    _numbers("-", expr)
    if len(expr) == 1:
        return -expr[0]
    result = expr[0]
    for x in expr[1:]:
        result -= x
    return result


def mul(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the product of all arguments."""
    result = 1
    for x in _numbers("*", expr):
        result *= x
    return result


def mod(env: Environment, expr: list[LispValue]) -> LispValue:
    """(mod n d) => n % d."""
    _expect("mod", expr, 2)
    n, d = _numbers("mod", expr)
    if d == 0:
        raise ZeroDivisionError("Division by zero")
    return n % d


def _comparison(name: str, op):
    def compare(env: Environment, expr: list[LispValue]) -> LispValue:
        _numbers(name, expr)
        return _bool(all(op(a, b) for a, b in zip(expr, expr[1:])))
    compare.__name__ = f"compare_{name}"
    return compare


# -------------------------------
# Lists
# -------------------------------
def list_fn(env: Environment, expr: list[LispValue]) -> LispValue:
    return list(expr)


def cons(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("cons", expr, 2)
    return term.cons(expr[0], expr[1])


def car(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("car", expr, 1)
    return term.car(expr[0])


def cdr(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("cdr", expr, 1)
    return term.cdr(expr[0])


def append(env: Environment, expr: list[LispValue]) -> LispValue:
    """(append l1 l2 ... last): every list but the last must be proper."""
    if not expr:
        return Nil
    items: list = []
    for x in expr[:-1]:
        if not term.is_proper(x):
            raise ThetaTypeError(f"append: not a proper list: {x!r}")
        items.extend(x)
    return term.dotted(items, expr[-1])


def length(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("length", expr, 1)
    x = expr[0]
    if not term.is_proper(x):
        raise ThetaTypeError(f"length: not a proper list: {x!r}")
    return len(x)


def reverse(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("reverse", expr, 1)
    x = expr[0]
    if not term.is_proper(x):
        raise ThetaTypeError(f"reverse: not a proper list: {x!r}")
    return list(reversed(list(x)))


# -------------------------------
# Predicates
# -------------------------------
def null(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("null", expr, 1)
    return _bool(is_empty(expr[0]))


def atom(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("atom", expr, 1)
    return _bool(term.is_atom(expr[0]))


def consp(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("consp", expr, 1)
    return _bool(term.is_sequence(expr[0]))


def symbolp(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("symbolp", expr, 1)
    return _bool(isinstance(expr[0], Symbol) or is_empty(expr[0]))


def eq(env: Environment, expr: list[LispValue]) -> LispValue:
    """Identity for structures, value equality for symbols and numbers."""
    _expect("eq", expr, 2)
    a, b = expr
    if is_empty(a) and is_empty(b):
        return T
    if isinstance(a, (list, DottedList)) or isinstance(b, (list, DottedList)):
        return _bool(a is b)
    return _bool(type(a) == type(b) and a == b)


def equal(env: Environment, expr: list[LispValue]) -> LispValue:
    """Structural equality."""
    _expect("equal", expr, 2)
    return _bool(expr[0] == expr[1])


def not_fn(env: Environment, expr: list[LispValue]) -> LispValue:
    _expect("not", expr, 1)
    return _bool(is_empty(expr[0]))


BUILTINS = {
    "+": add,
    "-": sub,
    "*": mul,
    "mod": mod,
    "=": _comparison("=", lambda a, b: a == b),
    "<": _comparison("<", lambda a, b: a < b),
    ">": _comparison(">", lambda a, b: a > b),
    "<=": _comparison("<=", lambda a, b: a <= b),
    ">=": _comparison(">=", lambda a, b: a >= b),
    "list": list_fn,
    "cons": cons,
    "car": car,
    "first": car,
    "cdr": cdr,
    "rest": cdr,
    "append": append,
    "length": length,
    "reverse": reverse,
    "null": null,
    "atom": atom,
    "consp": consp,
    "symbolp": symbolp,
    "eq": eq,
    "equal": equal,
    "not": not_fn,
}


def register(env: Environment) -> None:
    """Install every builtin function into `env`."""
    env.update({Symbol(name): fn for name, fn in BUILTINS.items()})
