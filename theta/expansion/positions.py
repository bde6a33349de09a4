"""Evaluation-position rules for special forms.

The expander only descends into argument positions a special form
evaluates. Anything absent from this table is an ordinary application and
every subterm is expanded. Review this table whenever a special form is
added to the evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass

from theta.types.symbol import Symbol


@dataclass(frozen=True)
class PositionRule:
    # Every argument is left untouched
    all_literal: bool = False
    # Argument indexes (0 = first argument after the head) left untouched
    literal: frozenset = frozenset()
    # Even-indexed arguments are assignment targets, odd ones are values
    alternating: bool = False
    # Index of a let-style binding list: names literal, initializers evaluated
    bindings: int | None = None
    # Atom arguments are jump labels
    labels: bool = False
    # Only unquote / unquote-splicing operands are evaluated
    template: bool = False


LITERAL = PositionRule(all_literal=True)
EVALUATED = PositionRule()

EVALUATION_POSITIONS: dict[Symbol, PositionRule] = {
    Symbol("quote"): LITERAL,
    Symbol("quasiquote"): PositionRule(template=True),
    Symbol("if"): EVALUATED,
    Symbol("and"): EVALUATED,
    Symbol("or"): EVALUATED,
    Symbol("progn"): EVALUATED,
    Symbol("let"): PositionRule(bindings=0),
    Symbol("setq"): PositionRule(alternating=True),
    Symbol("tagbody"): PositionRule(labels=True),
    Symbol("go"): LITERAL,
    Symbol("lambda"): PositionRule(literal=frozenset({0})),
    Symbol("defmacro"): LITERAL,
    Symbol("gensym"): LITERAL,
    Symbol("macroexpand-1"): LITERAL,
    Symbol("macroexpand"): LITERAL,
}


def rule_for(head) -> PositionRule | None:
    return EVALUATION_POSITIONS.get(head) if isinstance(head, Symbol) else None
