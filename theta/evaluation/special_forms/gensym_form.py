from theta import EvaluatorFn, SExpression, LispValue
from theta.types.environment import Environment
from theta.types.symbol import Symbol
from theta.types.errors import ArityError, ThetaTypeError


def gensym_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    # (gensym) or (gensym prefix)
    if len(tail) > 1:
        raise ArityError("gensym takes at most 1 argument: (gensym [prefix])")
    prefix = None
    if len(tail) == 1:
        p = tail[0]
        # Accept a raw symbol, a string, or a quoted symbol: (gensym 't)
        if isinstance(p, Symbol):
            prefix = p.id
        elif isinstance(p, str):
            prefix = p
        elif isinstance(p, list) and len(p) == 2 and p[0] == Symbol("quote") and isinstance(p[1], Symbol):
            prefix = p[1].id
        else:
            raise ThetaTypeError("gensym prefix must be a Symbol or string")
    return expander.gen_sym(prefix)
