from theta import EvaluatorFn
from theta import SExpression, LispValue
from theta.types.errors import ThetaSyntaxError
from theta.types.environment import Environment
from theta.types.lambda_fn import Lambda


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(lambda (params) body...): close over the current environment."""
    if not tail:
        raise ThetaSyntaxError("lambda requires a parameter list")
    return Lambda(tail[0], tail[1:], env)
