from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from theta import SExpression
from theta.types.bind import ParameterSpec, parse_lambda_list
from theta.types.environment import Environment
from theta.types.errors import ThetaInvalidSymbol, ThetaSyntaxError
from theta.types.symbol import Symbol

logger = logging.getLogger(__name__)


@dataclass
class MacroDefinition:
    """A macro written as Lisp terms.

    The body forms run at expansion time, with the call's unevaluated
    argument terms bound per `spec`, in a frame whose outer is `env`.
    The value of the last body form is the replacement term.
    """

    name: Symbol
    spec: ParameterSpec
    body: list[SExpression]
    env: Environment


# Builtin transformers are Python callables taking (args, expander)
Transformer = Callable[[SExpression, object], SExpression]


class MacroRegistry:
    """
    Mapping of macro names (Symbols) to MacroDefinitions or Python callable
    transformers.

    Re-registering a name replaces the previous definition. The registry
    also owns the expansion-time root environment that macro bodies are
    evaluated in, kept apart from any runtime environment.
    """

    def __init__(self, expansion_env: Environment | None = None):
        self.macros: dict[Symbol, MacroDefinition | Transformer] = {}
        self.expansion_env: Environment = expansion_env if expansion_env is not None else Environment()

    def register(
        self,
        name: Symbol,
        spec: ParameterSpec | SExpression,
        body: Iterable[SExpression],
        env: Environment | None = None,
    ) -> MacroDefinition:
        if not isinstance(name, Symbol):
            raise ThetaInvalidSymbol(f"Macro name must be a Symbol, got {name}")
        body = list(body)
        if not body:
            raise ThetaSyntaxError(f"Macro {name} body cannot be empty")
        definition = MacroDefinition(
            name, parse_lambda_list(spec), body, env if env is not None else self.expansion_env
        )
        self._store(name, definition)
        return definition

    def define_macro(self, name: Symbol, transformer: MacroDefinition | Transformer) -> None:
        if not isinstance(name, Symbol):
            raise ThetaInvalidSymbol(f"Macro name must be a Symbol, got {name}")
        self._store(name, transformer)

    def _store(self, name: Symbol, definition) -> None:
        if name in self.macros:
            logger.debug("Replacing macro %s", name)
        else:
            logger.debug("Registering macro %s", name)
        self.macros[name] = definition

    def lookup(self, name: Symbol) -> MacroDefinition | Transformer | None:
        return self.macros.get(name)

    def is_macro(self, sym: SExpression) -> bool:
        return isinstance(sym, Symbol) and sym in self.macros

    def names(self) -> list[Symbol]:
        return list(self.macros)

    def __contains__(self, sym: SExpression) -> bool:
        return self.is_macro(sym)

    def __len__(self) -> int:
        return len(self.macros)
