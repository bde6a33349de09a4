"""Builtin macro transformers for Theta (implemented in Python).

Each transformer receives the call's unevaluated argument terms and the
Expander, and returns the replacement term. The loops use the expander's
name generator for their temporaries and labels.
"""

from theta import SExpression
from theta.types.errors import ArityError, ThetaSyntaxError, ThetaTypeError
from theta.types.macro_registry import MacroRegistry
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.term import is_empty

LET = Symbol("let")
IF = Symbol("if")
PROGN = Symbol("progn")
TAGBODY = Symbol("tagbody")
GO = Symbol("go")
SETQ = Symbol("setq")


def _args(args: SExpression, name: str) -> list:
    if not isinstance(args, list) and not is_empty(args):
        raise ThetaSyntaxError(f"{name} does not accept an improper argument list")
    return list(args)


def _progn(body: list) -> SExpression:
    if not body:
        return Nil
    if len(body) == 1:
        return body[0]
    return [PROGN] + body


def let_star_macro(args: SExpression, expander) -> SExpression:
    """
    (let* ((v1 e1) (v2 e2) ...) body...)
    => (let ((v1 e1)) (let* ((v2 e2) ...) body...))
    Base case with no bindings => (let () body...)
    """
    args = _args(args, "let*")
    if not args:
        raise ArityError("let* requires at least a bindings list")
    bindings, body = args[0], args[1:]
    if not isinstance(bindings, list) and not is_empty(bindings):
        raise ThetaTypeError("Let* bindings must be a list")
    bindings = list(bindings)
    if len(bindings) <= 1:
        return [LET, bindings] + body
    return [LET, [bindings[0]], [Symbol("let*"), bindings[1:]] + body]


def when_macro(args: SExpression, expander) -> SExpression:
    """(when test body...) => (if test (progn body...))"""
    args = _args(args, "when")
    if not args:
        raise ArityError("when requires a test")
    return [IF, args[0], _progn(args[1:])]


def unless_macro(args: SExpression, expander) -> SExpression:
    """(unless test body...) => (if test nil (progn body...))"""
    args = _args(args, "unless")
    if not args:
        raise ArityError("unless requires a test")
    return [IF, args[0], Nil, _progn(args[1:])]


def cond_macro(args: SExpression, expander) -> SExpression:
    """
    (cond (test body...) ...) => (if test (progn body...) (cond ...))
    A clause with no body yields the test's value.
    """
    clauses = _args(args, "cond")
    if not clauses:
        return Nil
    clause, rest = clauses[0], clauses[1:]
    if not isinstance(clause, list) or not clause:
        raise ThetaSyntaxError(f"cond clause must be a non-empty list, got {clause}")
    test, body = clause[0], clause[1:]
    if not body:
        return [Symbol("or"), test, [Symbol("cond")] + rest]
    return [IF, test, _progn(body), [Symbol("cond")] + rest]


def dolist_macro(args: SExpression, expander) -> SExpression:
    """
    (dolist (var list [result]) body...)
    => (let ((#:lst list) (var nil))
         (tagbody
           #:start
           (if (null #:lst) (go #:end))
           (setq var (car #:lst))
           body...
           (setq #:lst (cdr #:lst))
           (go #:start)
           #:end)
         result)
    """
    args = _args(args, "dolist")
    if not args or not isinstance(args[0], list) or len(args[0]) not in (2, 3):
        raise ThetaSyntaxError("dolist requires (var list [result])")
    var, list_expr, *result = args[0]
    body = args[1:]
    lst, start, end = expander.gen_sym("lst"), expander.gen_sym("start"), expander.gen_sym("end")
    return [
        LET, [[lst, list_expr], [var, Nil]],
        [TAGBODY,
         start,
         [IF, [Symbol("null"), lst], [GO, end]],
         [SETQ, var, [Symbol("car"), lst]],
         *body,
         [SETQ, lst, [Symbol("cdr"), lst]],
         [GO, start],
         end],
        result[0] if result else Nil,
    ]


def dotimes_macro(args: SExpression, expander) -> SExpression:
    """
    (dotimes (var count [result]) body...)
    => (let ((#:limit count) (var 0))
         (tagbody
           #:start
           (if (>= var #:limit) (go #:end))
           body...
           (setq var (+ var 1))
           (go #:start)
           #:end)
         result)
    """
    args = _args(args, "dotimes")
    if not args or not isinstance(args[0], list) or len(args[0]) not in (2, 3):
        raise ThetaSyntaxError("dotimes requires (var count [result])")
    var, count_expr, *result = args[0]
    body = args[1:]
    limit, start, end = expander.gen_sym("limit"), expander.gen_sym("start"), expander.gen_sym("end")
    return [
        LET, [[limit, count_expr], [var, 0]],
        [TAGBODY,
         start,
         [IF, [Symbol(">="), var, limit], [GO, end]],
         *body,
         [SETQ, var, [Symbol("+"), var, 1]],
         [GO, start],
         end],
        result[0] if result else Nil,
    ]


def register(registry: MacroRegistry) -> None:
    """Register builtin macros in the registry."""
    registry.define_macro(Symbol("let*"), let_star_macro)
    registry.define_macro(Symbol("when"), when_macro)
    registry.define_macro(Symbol("unless"), unless_macro)
    registry.define_macro(Symbol("cond"), cond_macro)
    registry.define_macro(Symbol("dolist"), dolist_macro)
    registry.define_macro(Symbol("dotimes"), dotimes_macro)
