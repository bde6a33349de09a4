from theta import EvaluatorFn
from theta import SExpression, LispValue
from theta.types.errors import ArityError
from theta.types.nil import Nil
from theta.types.environment import Environment
from theta.types.term import is_truthy


def if_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise ArityError("if requires a condition, a then-expression and an optional else-expression")

    # Only the taken branch is evaluated
    if is_truthy(evaluate_fn(tail[0], env, expander)):
        return evaluate_fn(tail[1], env, expander)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env, expander)
    else:
        return Nil
