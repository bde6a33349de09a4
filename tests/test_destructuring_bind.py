import pytest
from theta.builtin.env_builtin import register
from theta.evaluation.evaluator import evaluate
from theta.types.bind import bind_arguments, parse_lambda_list
from theta.types.environment import Environment
from theta.types.errors import ArityError, ThetaSyntaxError
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.term import DottedList


@pytest.fixture
def env():
    e = Environment()
    register(e)
    return e


def lookup_all(env, *names):
    return [env.lookup(Symbol(n)) for n in names]


def test_required_parameters(sx):
    bound = bind_arguments(sx(["a", "b"]), [1, 2], None)
    assert lookup_all(bound, "a", "b") == [1, 2]


def test_missing_required_is_arity_error(sx):
    with pytest.raises(ArityError):
        bind_arguments(sx(["a", "b"]), [1], None)


def test_extra_arguments_without_rest_is_arity_error(sx):
    with pytest.raises(ArityError):
        bind_arguments(sx(["a"]), [1, 2], None)


def test_arguments_are_bound_unevaluated(sx):
    call = sx([["undefined-fn", 1], ["quote", "x"]])
    bound = bind_arguments(sx(["a", "b"]), call, None)
    assert bound.lookup(Symbol("a")) == sx(["undefined-fn", 1])
    assert bound.lookup(Symbol("b")) == sx(["quote", "x"])


def test_optional_defaults_to_nil(sx):
    bound = bind_arguments(sx(["a", "&optional", "b", "c"]), [1, 2], None)
    assert lookup_all(bound, "a", "b") == [1, 2]
    assert bound.lookup(Symbol("c")) is Nil


def test_optional_default_evaluated_with_earlier_parameters(sx, env):
    spec = sx(["a", "&optional", ["b", ["+", "a", 1]]])
    bound = bind_arguments(spec, [5], env, evaluate)
    assert bound.lookup(Symbol("b")) == 6
    bound = bind_arguments(spec, [5, 0], env, evaluate)
    assert bound.lookup(Symbol("b")) == 0


def test_rest_collects_remaining(sx):
    bound = bind_arguments(sx(["a", "&rest", "r"]), [1, 2, 3], None)
    assert bound.lookup(Symbol("r")) == [2, 3]
    bound = bind_arguments(sx(["a", "&rest", "r"]), [1], None)
    assert bound.lookup(Symbol("r")) == []


def test_body_marks_absorbs_remainder(sx):
    assert parse_lambda_list(sx(["a", "&body", "b"])).absorbs_remainder
    assert not parse_lambda_list(sx(["a", "&rest", "b"])).absorbs_remainder


def test_dotted_lambda_list_is_a_body_parameter(sx):
    spec = parse_lambda_list(sx(["a", "b", ".", "body"]))
    assert spec.required == [Symbol("a"), Symbol("b")]
    assert spec.rest == Symbol("body")
    assert spec.absorbs_remainder


def test_dotted_head_binds_body_verbatim(sx):
    """A two-parameter head followed by a multi-form body keeps the body as written."""
    spec = sx(["name", "value", ".", "body"])
    call = sx(["x", ["compute"], ["print", "x"], ["setq", "x", ["+", "x", 1]], "x"])
    bound = bind_arguments(spec, call, None)
    assert bound.lookup(Symbol("name")) == Symbol("x")
    assert bound.lookup(Symbol("value")) == sx(["compute"])
    assert bound.lookup(Symbol("body")) == sx([["print", "x"], ["setq", "x", ["+", "x", 1]], "x"])


def test_nested_destructuring(sx):
    spec = sx([["var", "lst", "&optional", "result"], "&body", "body"])
    call = sx([["x", ["quote", [1, 2]]], ["print", "x"]])
    bound = bind_arguments(spec, call, None)
    assert bound.lookup(Symbol("var")) == Symbol("x")
    assert bound.lookup(Symbol("lst")) == sx(["quote", [1, 2]])
    assert bound.lookup(Symbol("result")) is Nil
    assert bound.lookup(Symbol("body")) == sx([["print", "x"]])


def test_nested_pattern_needs_a_list(sx):
    with pytest.raises(ArityError):
        bind_arguments(sx([["a", "b"]]), [5], None)


def test_improper_call_feeds_rest(sx):
    bound = bind_arguments(sx(["a", "&rest", "r"]), DottedList([1, 2], 3), None)
    assert bound.lookup(Symbol("a")) == 1
    assert bound.lookup(Symbol("r")) == DottedList([2], 3)

    bound = bind_arguments(sx(["&rest", "r"]), 7, None)
    assert bound.lookup(Symbol("r")) == 7


def test_improper_call_without_rest_is_arity_error(sx):
    with pytest.raises(ArityError):
        bind_arguments(sx(["a", "b"]), DottedList([1], 2), None)
    with pytest.raises(ArityError):
        bind_arguments(sx(["a"]), DottedList([1], 2), None)


def test_keyword_parameters(sx):
    spec = sx(["&key", "x", ["y", 2]])
    bound = bind_arguments(spec, [Symbol(":x"), 1], None)
    assert lookup_all(bound, "x", "y") == [1, 2]
    with pytest.raises(ArityError):
        bind_arguments(spec, [Symbol(":z"), 1], None)
    with pytest.raises(ArityError):
        bind_arguments(spec, [Symbol(":x")], None)


def test_bare_symbol_lambda_list_takes_everything(sx):
    bound = bind_arguments(Symbol("args"), [1, 2], None)
    assert bound.lookup(Symbol("args")) == [1, 2]


def test_malformed_lambda_lists(sx):
    for bad in (
        ["&rest"],
        ["a", "&rest", "r", "extra"],
        ["&rest", "r", "&key", "k"],
        ["&optional", "a", "&optional", "b"],
        [1],
    ):
        with pytest.raises(ThetaSyntaxError):
            parse_lambda_list(sx(bad))


def test_spec_names_in_binding_order(sx):
    spec = parse_lambda_list(sx([["a", "b"], "c", "&optional", "d", "&rest", "e"]))
    assert spec.names() == [Symbol(n) for n in "abcde"]


def test_binding_frame_chains_to_closure(sx, env):
    bound = bind_arguments(sx(["a"]), [1], env)
    assert bound.outer is env
    assert Symbol("a") not in env.vars
