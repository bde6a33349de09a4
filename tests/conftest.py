import pytest

from theta.interpreter import Interpreter
from theta.types.symbol import Symbol
from theta.types.term import dotted


def to_term(x):
    """Build a term from nested Python lists, reading every str as a Symbol.

    A "." in the second-to-last position makes a dotted list:
    ["m", "a", ".", "b"] is (m a . b).
    """
    if isinstance(x, str):
        return Symbol(x)
    if isinstance(x, list):
        if len(x) >= 3 and isinstance(x[-2], str) and x[-2] == ".":
            return dotted([to_term(i) for i in x[:-2]], to_term(x[-1]))
        return [to_term(i) for i in x]
    return x


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    # Keep configuration defaults regardless of the caller's shell
    monkeypatch.delenv("THETA_MAX_EXPANSION_DEPTH", raising=False)
    monkeypatch.delenv("THETA_GENSYM_PREFIX", raising=False)


@pytest.fixture
def sx():
    return to_term


@pytest.fixture
def itp():
    return Interpreter()


@pytest.fixture
def record(itp):
    """Install (record x) into the interpreter; returns the list of recorded values."""
    seen = []

    def _record(env, args):
        seen.extend(args)
        return args[0] if args else Symbol("t")

    itp.env.define(Symbol("record"), _record)
    return seen
