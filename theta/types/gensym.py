"""Unique-name generation for manual macro hygiene.

Generated names carry the reserved `#:` prefix. Terms written by callers
never use a symbol starting with `#:`, so a fresh name cannot collide with
any symbol in the source trees. Hygiene is the macro author's job: nothing
renames the raw symbols a template introduces.
"""

from __future__ import annotations

from itertools import count

from theta.config import get_gensym_prefix
from theta.types.errors import ThetaTypeError
from theta.types.symbol import Symbol

RESERVED_PREFIX = "#:"
# Joins a prefix that ends in a digit to the counter; never allowed in a prefix
SEPARATOR = "#"


def check_prefix(prefix: str) -> str:
    if SEPARATOR in prefix:
        raise ThetaTypeError(f"gensym prefix cannot contain {SEPARATOR!r}: {prefix!r}")
    return prefix


class NameGenerator:
    """Per-session monotonic source of fresh symbols.

    The counter is never reset; one generator lives as long as its session.
    Sessions shared across threads must serialise calls to fresh().

    Names read `#:G1`, `#:tmp2`, ... A prefix ending in a digit gets a
    separator, `#:x1#3`, so `fresh("G1")` and a later `fresh("G")` can
    never both produce `#:G11`.
    """

    def __init__(self, prefix: str | None = None):
        self.prefix = check_prefix(prefix if prefix is not None else get_gensym_prefix())
        self._counter = count(1)

    def fresh(self, prefix: str | None = None) -> Symbol:
        p = self.prefix if prefix is None else check_prefix(prefix)
        sep = SEPARATOR if p[-1:].isdigit() else ""
        return Symbol(f"{RESERVED_PREFIX}{p}{sep}{next(self._counter)}")


def is_generated(sym: Symbol) -> bool:
    return isinstance(sym, Symbol) and sym.id.startswith(RESERVED_PREFIX)
