import pytest
from theta.interpreter import Interpreter
from theta.types.gensym import NameGenerator, is_generated
from theta.types.symbol import Symbol
from theta.types.errors import ThetaTypeError, ArityError


def _symbols(term):
    if isinstance(term, Symbol):
        yield term
    elif isinstance(term, (list, tuple)):
        for x in term:
            yield from _symbols(x)


def test_fresh_names_are_distinct():
    names = NameGenerator()
    s1 = names.fresh()
    s2 = names.fresh()
    assert s1 != s2
    assert s1 == Symbol("#:G1")
    assert s2 == Symbol("#:G2")
    assert is_generated(s1)
    assert not is_generated(Symbol("G1"))


def test_fresh_names_never_collide_with_source_symbols(sx):
    # Source text can contain G1, G2 ... but never the reserved #: prefix
    source = sx(["let", [["G1", 1], ["G2", 2]], ["list", "G1", "G2", "tmp1"]])
    names = NameGenerator()
    fresh = {names.fresh(), names.fresh(), names.fresh("tmp")}
    assert len(fresh) == 3
    assert fresh.isdisjoint(set(_symbols(source)))


def test_gensym_basic_sequential():
    itp = Interpreter()
    s1 = itp.eval([Symbol("gensym")])
    s2 = itp.eval([Symbol("gensym")])

    assert isinstance(s1, Symbol)
    assert isinstance(s2, Symbol)
    # In a fresh interpreter, the first two should be #:G1 and #:G2
    assert s1 == Symbol("#:G1")
    assert s2 == Symbol("#:G2")


def test_gensym_with_symbol_prefix(sx):
    itp = Interpreter()
    assert itp.eval(sx(["gensym", ["quote", "t"]])) == Symbol("#:t1")


def test_gensym_with_string_prefix():
    itp = Interpreter()
    assert itp.eval([Symbol("gensym"), "tmp"]) == Symbol("#:tmp1")


def test_gensym_errors():
    itp = Interpreter()
    # Too many args
    with pytest.raises(ArityError):
        itp.eval([Symbol("gensym"), "a", "b"])
    # Bad type for prefix
    with pytest.raises(ThetaTypeError):
        itp.eval([Symbol("gensym"), 42])


def test_sessions_have_independent_counters():
    a, b = Interpreter(), Interpreter()
    assert a.names.fresh() == b.names.fresh()


def test_gensym_in_macro_expansion(sx):
    itp = Interpreter()
    # (defmacro capture (x)
    #   (let ((g (gensym "tmp")))
    #     `(let ((,g ,x)) ,g)))
    itp.eval(sx(
        ["defmacro", "capture", ["x"],
         ["let", [["g", ["gensym", "tmp"]]],
          ["quasiquote", ["let", [[["unquote", "g"], ["unquote", "x"]]], ["unquote", "g"]]]]]
    ))
    assert itp.eval(sx(["capture", 42])) == 42
    # Distinct calls don't capture each other's temp vars
    assert itp.eval(sx(["list", ["capture", 1], ["capture", 2], ["capture", 3]])) == [1, 2, 3]


def test_raw_template_symbol_captures_caller_variable(sx):
    """Hygiene is manual: a raw temporary in a template shadows the caller's variable."""
    itp = Interpreter()
    # (defmacro bad-swap (a b) `(let ((tmp ,a)) (setq ,a ,b) (setq ,b tmp)))
    itp.eval(sx(
        ["defmacro", "bad-swap", ["a", "b"],
         ["quasiquote",
          ["let", [["tmp", ["unquote", "a"]]],
           ["setq", ["unquote", "a"], ["unquote", "b"]],
           ["setq", ["unquote", "b"], "tmp"]]]]
    ))
    # (defmacro good-swap (a b)
    #   (let ((tmp (gensym)))
    #     `(let ((,tmp ,a)) (setq ,a ,b) (setq ,b ,tmp))))
    itp.eval(sx(
        ["defmacro", "good-swap", ["a", "b"],
         ["let", [["tmp", ["gensym"]]],
          ["quasiquote",
           ["let", [[["unquote", "tmp"], ["unquote", "a"]]],
            ["setq", ["unquote", "a"], ["unquote", "b"]],
            ["setq", ["unquote", "b"], ["unquote", "tmp"]]]]]]
    ))
    program = ["let", [["tmp", 1], ["y", 2]], ["SWAP", "tmp", "y"], ["list", "tmp", "y"]]

    bad = sx(program)
    bad[2][0] = Symbol("bad-swap")
    assert itp.eval(bad) == [1, 2]  # captured: the swap never reaches the caller's tmp

    good = sx(program)
    good[2][0] = Symbol("good-swap")
    assert itp.eval(good) == [2, 1]


def test_fresh_names_stay_distinct_across_prefixes():
    names = NameGenerator()
    seen = [names.fresh("G1")] + [names.fresh() for _ in range(10)] + [names.fresh("x"), names.fresh("x1")]
    assert len(set(seen)) == len(seen)
    assert seen[0] == Symbol("#:G1#1")
    assert seen[10] == Symbol("#:G11")


def test_gensym_digit_prefix_does_not_capture_later_names(sx):
    itp = Interpreter()
    first = itp.eval(sx(["gensym", ["quote", "G1"]]))
    others = [itp.eval(sx(["gensym"])) for _ in range(10)]
    assert first not in others


def test_gensym_prefix_rejects_separator():
    itp = Interpreter()
    with pytest.raises(ThetaTypeError):
        itp.eval([Symbol("gensym"), "a#b"])
    with pytest.raises(ThetaTypeError):
        NameGenerator("g#")
