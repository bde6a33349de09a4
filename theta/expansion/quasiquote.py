"""Quasiquote template expansion.

A template is any term. Inside it:

    (unquote e)           -> the value of e
    (unquote-splicing e)  -> the elements of the value of e, inlined
    (a b unquote e)       -> the reader's form of `(a b . ,e)`

Only one quoting level is supported: a quasiquote inside a template is
rejected rather than tracked by depth.
"""

from __future__ import annotations

from theta import SExpression, EvaluatorFn
from theta.types.environment import Environment
from theta.types.errors import ArityError, ImproperSpliceError, NestedTemplateUnsupportedError
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.term import DottedList, dotted, is_proper

QUASIQUOTE = Symbol("quasiquote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICING = Symbol("unquote-splicing")
TEMPLATE_MARKERS = (QUASIQUOTE, UNQUOTE, UNQUOTE_SPLICING)


def is_marked(x: SExpression, marker: Symbol) -> bool:
    return isinstance(x, list) and len(x) > 0 and x[0] == marker


def expand_template(
    template: SExpression,
    env: Environment,
    evaluate_fn: EvaluatorFn | None = None,
    expander=None,
) -> SExpression:
    """Build the term described by `template`, resolving markers against `env`.

    A template with no markers comes back structurally equal to itself.
    """
    if evaluate_fn is None:
        from theta.evaluation.evaluator import evaluate as evaluate_fn
    return _TemplateWalker(env, evaluate_fn, expander).walk(template)


class _TemplateWalker:

    def __init__(self, env: Environment, evaluate_fn: EvaluatorFn, expander):
        self.env = env
        self.evaluate_fn = evaluate_fn
        self.expander = expander

    def resolve(self, form: list) -> SExpression:
        if len(form) != 2:
            raise ArityError(f"{form[0]} expects exactly 1 argument")
        return self.evaluate_fn(form[1], self.env, self.expander)

    def walk(self, x: SExpression) -> SExpression:
        if isinstance(x, list) and x:
            head = x[0]
            if head == UNQUOTE:
                return self.resolve(x)
            if head == UNQUOTE_SPLICING:
                raise ImproperSpliceError("unquote-splicing must appear inside a list")
            if head == QUASIQUOTE:
                raise NestedTemplateUnsupportedError("Nested quasiquote templates are not supported")
            return self.walk_items(x, Nil)
        if isinstance(x, DottedList):
            # The tail of a stored DottedList is always an atom
            return self.walk_items(x.items, x.tail)
        return x

    def walk_items(self, items: list, tail: SExpression) -> SExpression:
        items = list(items)
        # `(a . ,e)` arrives from the reader as `(a unquote e)`
        if tail is Nil and len(items) > 2 and items[-2] in TEMPLATE_MARKERS:
            marker_form = items[-2:]
            if marker_form[0] == UNQUOTE_SPLICING:
                raise ImproperSpliceError("unquote-splicing cannot appear after a dot")
            tail = marker_form
            items = items[:-2]
            new_tail = self.walk(tail)
        else:
            new_tail = tail

        out: list = []
        last = len(items) - 1
        for i, item in enumerate(items):
            if is_marked(item, UNQUOTE_SPLICING):
                value = self.resolve(item)
                if i == last and tail is Nil:
                    # Final position: the value becomes the tail, proper or not
                    return dotted(out, value)
                if not is_proper(value):
                    raise ImproperSpliceError(
                        f"unquote-splicing of {value!r} in non-final position must yield a proper list"
                    )
                out.extend(value)
            else:
                out.append(self.walk(item))
        return dotted(out, new_tail)
