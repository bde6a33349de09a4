import pytest
from theta.builtin.env_builtin import register
from theta.evaluation.evaluator import evaluate
from theta.expansion.quasiquote import expand_template
from theta.types.environment import Environment
from theta.types.errors import (
    ImproperSpliceError, NestedTemplateUnsupportedError, ThetaSyntaxError,
)
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.term import DottedList


@pytest.fixture
def env():
    """Return a fresh environment for each test."""
    e = Environment()
    register(e)
    e.define(Symbol("x"), 1)
    e.define(Symbol("y"), [2, 3])
    return e


@pytest.mark.parametrize("template", [
    ["A", "B", "C"],
    ["if", ["p"], [1, 2], "else"],
    [["nested", ["deeper", ["deepest"]]], 42, "s"],
    ["a", ".", "b"],
    [],
    "atom",
    7,
])
def test_template_without_markers_is_identity(template, sx, env):
    t = sx(template)
    assert expand_template(t, env) == t


def test_unquote_and_splice_mix(sx, env):
    # `(A ,x B ,y C ,@y D)
    template = sx(["A", ["unquote", "x"], "B", ["unquote", "y"], "C", ["unquote-splicing", "y"], "D"])
    assert expand_template(template, env) == sx(["A", 1, "B", [2, 3], "C", 2, 3, "D"])


def test_unquote_evaluates_operand(sx, env):
    assert expand_template(sx(["a", ["unquote", ["+", "x", 2]]]), env) == sx(["a", 3])


def test_unquote_at_root(sx, env):
    assert expand_template(sx(["unquote", "y"]), env) == [2, 3]


def test_order_preserved_and_no_deduplication(sx, env):
    template = sx([["unquote", "x"], ["unquote", "x"], ["unquote-splicing", "y"], ["unquote-splicing", "y"]])
    assert expand_template(template, env) == [1, 1, 2, 3, 2, 3]


def test_splice_of_nil_inserts_nothing(sx, env):
    env.define(Symbol("none"), Nil)
    template = sx(["a", ["unquote-splicing", "none"], "b"])
    assert expand_template(template, env) == sx(["a", "b"])


def test_splice_does_not_share_or_mutate_value(sx, env):
    result = expand_template(sx(["a", ["unquote-splicing", "y"]]), env)
    result.append(99)
    assert env.lookup(Symbol("y")) == [2, 3]


def test_final_splice_may_be_improper(sx, env):
    env.define(Symbol("d"), DottedList([1], 2))
    env.define(Symbol("n"), 5)
    assert expand_template(sx(["a", ["unquote-splicing", "d"]]), env) == DottedList([Symbol("a"), 1], 2)
    assert expand_template(sx(["a", ["unquote-splicing", "n"]]), env) == DottedList([Symbol("a")], 5)


def test_non_final_improper_splice_is_rejected(sx, env):
    env.define(Symbol("d"), DottedList([1], 2))
    env.define(Symbol("n"), 5)
    with pytest.raises(ImproperSpliceError):
        expand_template(sx(["a", ["unquote-splicing", "d"], "b"]), env)
    with pytest.raises(ImproperSpliceError):
        expand_template(sx(["a", ["unquote-splicing", "n"], "b"]), env)


def test_splice_outside_a_list_is_rejected(sx, env):
    with pytest.raises(ImproperSpliceError):
        expand_template(sx(["unquote-splicing", "y"]), env)


def test_splice_before_dotted_tail_must_be_proper(sx, env):
    env.define(Symbol("n"), 5)
    with pytest.raises(ImproperSpliceError):
        expand_template(sx([["unquote-splicing", "n"], ".", "tail"]), env)
    assert expand_template(sx([["unquote-splicing", "y"], ".", "tail"]), env) == DottedList([2, 3], Symbol("tail"))


def test_dotted_unquote_reader_form(sx, env):
    # `(a . ,x) is read as (a unquote x)
    env.define(Symbol("n"), 5)
    assert expand_template(sx(["a", "unquote", "n"]), env) == DottedList([Symbol("a")], 5)
    assert expand_template(sx(["a", "unquote", "y"]), env) == sx(["a", 2, 3])
    with pytest.raises(ImproperSpliceError):
        expand_template(sx(["a", "unquote-splicing", "y"]), env)


def test_nested_template_is_unsupported(sx, env):
    with pytest.raises(NestedTemplateUnsupportedError):
        expand_template(sx(["a", ["quasiquote", ["b", ["unquote", "x"]]]]), env)
    with pytest.raises(NestedTemplateUnsupportedError):
        expand_template(sx(["quasiquote", "b"]), env)


def test_quasiquote_special_form(sx, env):
    expr = sx(["quasiquote", [1, ["unquote", "x"], ["unquote-splicing", "y"], 4]])
    assert evaluate(expr, env) == [1, 1, 2, 3, 4]


def test_quote_special_form_returns_operand_untouched(sx, env):
    expr = sx(["quote", ["unquote", "x"]])
    assert evaluate(expr, env) == sx(["unquote", "x"])


def test_unquote_outside_template_is_error(sx, env):
    with pytest.raises(ThetaSyntaxError):
        evaluate(sx(["unquote", "x"]), env)
    with pytest.raises(ThetaSyntaxError):
        evaluate(sx(["unquote-splicing", "y"]), env)


def test_lambda_quasiquote_unquote(sx, env):
    lam = evaluate(sx(["lambda", ["v"], ["quasiquote", [1, ["unquote", "v"], 3]]]), env)
    assert evaluate([lam, 10], env) == [1, 10, 3]


def test_lambda_quasiquote_unquote_splicing(sx, env):
    lam = evaluate(sx(["lambda", ["v"], ["quasiquote", [1, ["unquote-splicing", "v"], 4]]]), env)
    assert evaluate([lam, [Symbol("quote"), [2, 3]]], env) == [1, 2, 3, 4]
