from theta import EvaluatorFn
from theta import SExpression, LispValue
from theta.types.environment import Environment
from theta.types.errors import ThetaSyntaxError, ThetaInvalidSymbol
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.term import is_empty


def _parse_binding(b: SExpression) -> tuple[Symbol, SExpression]:
    if isinstance(b, Symbol):
        return b, Nil
    if isinstance(b, list) and 1 <= len(b) <= 2:
        name = b[0]
        if not isinstance(name, Symbol):
            raise ThetaInvalidSymbol(f"Let binding name must be a Symbol, got {name}")
        return name, b[1] if len(b) == 2 else Nil
    raise ThetaSyntaxError(f"Let binding must be a symbol or (name init), got {b}")


def let_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(let ((var1 init1) (var2 init2) ...) body...)

    Every initializer is evaluated in the enclosing environment before any
    variable is bound, then all variables are bound together in one new
    frame and the body runs there.
    """
    if not tail:
        raise ThetaSyntaxError("let requires a binding list")
    bindings = tail[0]
    if not isinstance(bindings, list) and not is_empty(bindings):
        raise ThetaSyntaxError("Let bindings must be a list")

    parsed = [_parse_binding(b) for b in bindings]
    values = [evaluate_fn(init, env, expander) if init is not Nil else Nil for _, init in parsed]

    local_env = Environment(outer=env)
    for (name, _), value in zip(parsed, values):
        local_env.define(name, value)

    result: LispValue = Nil
    for e in tail[1:]:
        result = evaluate_fn(e, local_env, expander)
    return result
