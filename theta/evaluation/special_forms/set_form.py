from theta import EvaluatorFn
from theta import SExpression, LispValue
from theta.types.errors import ThetaInvalidSymbol, ArityError
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.environment import Environment


def setq_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(setq var value [var value ...]): assign existing bindings in order."""
    if len(tail) % 2 != 0:
        raise ArityError("setq requires pairs of arguments: (setq var value ...)")
    value: LispValue = Nil
    for var_sym, val_expr in zip(tail[::2], tail[1::2]):
        if not isinstance(var_sym, Symbol):
            raise ThetaInvalidSymbol(f"setq target must be a Symbol, got {var_sym}")
        value = evaluate_fn(val_expr, env, expander)
        env.set(var_sym, value)
    return value
