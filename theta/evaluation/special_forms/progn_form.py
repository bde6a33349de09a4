from theta import EvaluatorFn
from theta import SExpression, LispValue
from theta.types.environment import Environment
from theta.types.nil import Nil


def progn_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    result: LispValue = Nil
    for e in tail:
        result = evaluate_fn(e, env, expander)
    return result
