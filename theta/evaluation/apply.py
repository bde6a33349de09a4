"""Application engine for Theta.

Centralizes function application semantics for the interpreter:
- Lambdas bind their evaluated arguments through the shared lambda-list
  binder and evaluate their body forms in order.
- Python callables registered in the environment receive (env, args).
"""

from typing import Callable

from theta import LispValue, EvaluatorFn
from theta.types.environment import Environment
from theta.types.errors import ThetaTypeError
from theta.types.lambda_fn import Lambda
from theta.types.nil import Nil


def apply_lambda(
    fn: Lambda,
    args: list[LispValue],
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply a Lisp Lambda value to already-evaluated arguments."""
    new_env = fn.extend_env(list(args), evaluate_fn, expander)
    result: LispValue = Nil
    for form in fn.body:
        result = evaluate_fn(form, new_env, expander)
    return result


def apply(
    head: Lambda | Callable[[Environment, list[LispValue]], LispValue] | object,
    args: list[LispValue],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Lambda or a Python callable.

    - For Lambda, defer to apply_lambda.
    - For Python callables (builtins), invoke with the runtime env and list of args.
    - Otherwise, raise a type error.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args, expander, evaluate_fn)
    elif callable(head):
        return head(env, args)
    else:
        raise ThetaTypeError(f"Cannot apply non-function {head!r}")
