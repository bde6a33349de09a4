"""Special forms that expose the macro expander to Lisp code.

macroexpand-1: expand a single step at the head position if it is a macro.
macroexpand: fully expand a form, descending only into evaluated positions.

Both return the expansion as a term and do not evaluate it. Each call may
yield different generated names, since the name generator keeps advancing.
"""

from theta import SExpression, EvaluatorFn
from theta.types.errors import ArityError
from theta.types.symbol import Symbol


def _operand(tail: list[SExpression], name: str) -> SExpression:
    if len(tail) != 1:
        raise ArityError(f"{name} expects exactly 1 argument")
    form = tail[0]
    # Unwrap a single leading (quote <form>) to match CL usage: (macroexpand '(...))
    if isinstance(form, list) and len(form) == 2 and form[0] == Symbol("quote"):
        form = form[1]
    return form


def macroexpand1_form(tail: list[SExpression], env, expander, evaluate_fn: EvaluatorFn):
    """(macroexpand-1 form): expand the head macro once and return the result."""
    return expander.macroexpand_one(_operand(tail, "macroexpand-1"))


def macroexpand_form(tail: list[SExpression], env, expander, evaluate_fn: EvaluatorFn):
    """(macroexpand form): fully expand a form and return the expansion."""
    return expander.macroexpand_full(_operand(tail, "macroexpand"))
