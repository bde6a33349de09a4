# Labeled blocks with jumps.
# Usage:
#   (tagbody
#     start
#     (setq n (+ n 1))
#     (if (< n 3) (go start))
#     end)                          ; => nil
#
# The body is split into labels and forms. Execution walks the forms with a
# program counter; each label names the position of the form after it.
# `go` may be evaluated anywhere inside the block's dynamic extent (e.g.
# within an `if` or `let`), so the jump travels as a GoSignal exception up
# to the tagbody that owns the label.

from __future__ import annotations

from theta import EvaluatorFn
from theta import SExpression, LispValue
from theta.types.environment import Environment
from theta.types.errors import ArityError, ThetaSyntaxError, UndefinedLabelError
from theta.types.nil import Nil
from theta.types.symbol import Symbol


class BlockLabels:
    """Label table of one tagbody activation."""

    __slots__ = ("positions", "active")

    def __init__(self, positions: dict):
        self.positions: dict = positions
        self.active: bool = True

    def __contains__(self, label) -> bool:
        return label in self.positions

    def __getitem__(self, label) -> int:
        return self.positions[label]


class GoSignal(Exception):
    """Non-local transfer to a label of an enclosing tagbody."""

    def __init__(self, block: Environment, label):
        super().__init__(f"GoSignal(label={label})")
        self.block: Environment = block
        self.label = label


def is_label(item: SExpression) -> bool:
    return isinstance(item, Symbol) or (isinstance(item, int) and not isinstance(item, bool))


def tagbody_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    forms: list[SExpression] = []
    positions: dict = {}
    for item in tail:
        if is_label(item):
            if item in positions:
                raise ThetaSyntaxError(f"Duplicate label {item} in tagbody")
            positions[item] = len(forms)
        else:
            forms.append(item)

    block_env = Environment(outer=env)
    block_env.labels = BlockLabels(positions)
    pc = 0
    try:
        while pc < len(forms):
            try:
                evaluate_fn(forms[pc], block_env, expander)
                pc += 1
            except GoSignal as signal:
                if signal.block is not block_env:
                    raise
                pc = block_env.labels[signal.label]
    finally:
        block_env.labels.active = False
    # Falling off the end
    return Nil


def go_form(
    tail: list[SExpression],
    env: Environment,
    expander,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) != 1:
        raise ArityError("go expects exactly 1 argument: (go label)")
    label = tail[0]
    block = env.find_label(label)
    if block is None:
        raise UndefinedLabelError(f"No enclosing tagbody defines label {label}")
    if not block.labels.active:
        raise UndefinedLabelError(f"Label {label} belongs to a tagbody that has already exited")
    raise GoSignal(block, label)
