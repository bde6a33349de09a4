"""Environments for Theta.

An Environment stores bindings of Symbols to values and supports nested
scopes via an `outer` link. The same class serves both the runtime
environment and the expansion-time environment macro bodies run in; the
two are kept as separate chains by the Interpreter.

Frames created by `tagbody` also carry that block's label table so `go`
can find the lexically enclosing block that defines a label.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from theta import LispValue
from theta.types.errors import ThetaInvalidSymbol, UnboundVariableError
from theta.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer", "labels")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer
        # Set only on frames created by tagbody
        self.labels = None

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame.

        Raises ThetaInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise ThetaInvalidSymbol(f"Cannot define {name} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def set(self, name: Symbol, value: LispValue) -> None:
        """Update an existing binding for `name` in the environment chain.

        Raises UnboundVariableError if the symbol is not found.
        """
        env = self.find(name)
        if env is None:
            raise UnboundVariableError(f"Cannot set unbound symbol {name}")
        env.vars[name] = value

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, innermost frame first."""
        env = self.find(name)
        if env is None:
            raise UnboundVariableError(f"Cannot lookup unbound symbol {name}")
        return env.vars[name]

    def find_label(self, label) -> Optional[Environment]:
        """Find the nearest tagbody frame whose block defines `label`."""
        env: Optional[Environment] = self
        while env is not None:
            if env.labels is not None and label in env.labels:
                return env
            env = env.outer
        return None

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            if not isinstance(k, Symbol):
                raise ThetaInvalidSymbol(f"Cannot define {k} as a symbol")
            self.vars[k] = v

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return "<Environment chain: " + " -> ".join(chain) + ">"
