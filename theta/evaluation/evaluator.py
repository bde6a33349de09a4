"""Core evaluator for the Theta interpreter.

Evaluates macro-free terms: self-evaluating atoms, symbol lookup,
special-form dispatch, and ordinary application. A macro-headed form that
reaches the evaluator unexpanded is expanded first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from theta import SExpression, LispValue
from theta.evaluation.apply import apply
from theta.evaluation.special_forms import SPECIAL_FORMS
from theta.types.environment import Environment
from theta.types.errors import ThetaSyntaxError
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.term import DottedList, T

if TYPE_CHECKING:
    from theta.expansion.expander import Expander

NIL_SYMBOL = Symbol("nil")


def evaluate(
    expr: SExpression, env: Environment, expander: Expander | None = None
) -> LispValue:
    """
    Evaluate `expr` in `env`. `expander` supplies the macro registry and name
    generator used by defmacro, gensym and macroexpand.
    """
    if expander is None:
        # Lazy import to avoid circular imports
        from theta.expansion.expander import Expander
        expander = Expander()

    match expr:
        case DottedList():
            raise ThetaSyntaxError(f"Cannot evaluate an improper list: {expr!r}")

        case [head, *tail_args]:
            if isinstance(head, Symbol):
                # --- Special forms handling ---
                if head in SPECIAL_FORMS:
                    return SPECIAL_FORMS[head](tail_args, env, expander, evaluate)
                if expander.registry.is_macro(head):
                    return evaluate(expander.expand_full(expr), env, expander)

            fn = evaluate(head, env, expander)
            args = [evaluate(arg, env, expander) for arg in tail_args]
            return apply(fn, args, env, expander, evaluate)

        case Symbol():
            # Keywords, t and nil are self-evaluating
            if expr.is_keyword() or expr == T:
                return expr
            if expr == NIL_SYMBOL:
                return Nil
            return env.lookup(expr)

    # --- Atoms return as-is ---
    return expr
