from theta import SExpression
from theta.types.environment import Environment
from theta.types.nil import Nil
from theta.types.term import T, is_truthy


def and_form(tail: list[SExpression], env: Environment, expander, evaluate_fn) -> SExpression:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right until a falsey value
    is found, which is returned immediately. If all operands are truthy,
    returns the value of the last operand. With zero operands, returns t.
    """
    result: SExpression = T
    for expr in tail:
        result = evaluate_fn(expr, env, expander)
        if not is_truthy(result):
            return result
    return result


def or_form(tail: list[SExpression], env: Environment, expander, evaluate_fn) -> SExpression:
    """Short-circuiting logical OR special form.

    (or a b c ...) evaluates each operand left-to-right and returns the first
    truthy value. If none are truthy, returns the last operand's value. With
    zero operands, returns nil.
    """
    result: SExpression = Nil
    for expr in tail:
        result = evaluate_fn(expr, env, expander)
        if is_truthy(result):
            return result
    return result
