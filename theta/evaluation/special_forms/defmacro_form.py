"""Special form: defmacro.

Registers a macro in the expander's registry. The body runs at expansion
time in the registry's expansion environment, not in the runtime
environment the defmacro form itself is evaluated in. A macro body cannot
itself define macros: the registry is fixed while a form expands.
"""

from __future__ import annotations

from theta import EvaluatorFn, SExpression, LispValue
from theta.types.errors import ThetaInvalidSymbol, ThetaSyntaxError, ArityError
from theta.types.symbol import Symbol
from theta.types.environment import Environment


def defmacro_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Register a macro named by the first argument with params/body in tail."""
    if len(tail) < 3:
        raise ArityError("defmacro requires a name, a parameter list and a body")

    macro_name = tail[0]
    if not isinstance(macro_name, Symbol):
        raise ThetaInvalidSymbol(f"Macro name must be a Symbol, got {macro_name}")

    if expander.expanding:
        raise ThetaSyntaxError(f"defmacro {macro_name} cannot run while a macro is being expanded")

    expander.registry.register(macro_name, tail[1], tail[2:])
    return macro_name
