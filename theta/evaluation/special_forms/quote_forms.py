from theta import SExpression, LispValue, EvaluatorFn
from theta.expansion.quasiquote import expand_template
from theta.types.errors import ArityError, ThetaSyntaxError


def quote_form(
    tail: list[SExpression], env, expander, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise ArityError("Quote expects exactly 1 argument")
    return tail[0]


def quasiquote_form(
    tail: list[SExpression], env, expander, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise ArityError("Quasiquote expects exactly 1 argument")
    # Quasiquote returns the constructed data structure; do not evaluate it here.
    return expand_template(tail[0], env, evaluate_fn, expander)


def unquote_form(
    tail: list[SExpression], env, expander, evaluate_fn: EvaluatorFn
) -> LispValue:
    raise ThetaSyntaxError("Unquote not valid outside of quasiquote")


def unquote_splice_form(
    tail: list[SExpression], env, expander, evaluate_fn: EvaluatorFn
) -> LispValue:
    raise ThetaSyntaxError("Unquote-splicing not valid outside of quasiquote")
