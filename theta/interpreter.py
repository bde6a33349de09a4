from __future__ import annotations

import logging
from typing import Iterable

from theta import SExpression, LispValue
from theta.builtin.env_builtin import register
from theta.builtin.macro_builtin import register as register_macros
from theta.evaluation.evaluator import evaluate
from theta.expansion.expander import Expander
from theta.types.bind import ParameterSpec
from theta.types.environment import Environment
from theta.types.gensym import NameGenerator
from theta.types.macro_registry import MacroDefinition, MacroRegistry
from theta.types.nil import Nil
from theta.types.symbol import Symbol

logger = logging.getLogger(__name__)

PROGN = Symbol("progn")


class Interpreter:
    """
    One expansion session: a runtime Environment, a MacroRegistry with its
    own expansion-time environment, a NameGenerator and the Expander that
    ties them together. Forms are terms built by the caller; no text is read.
    """

    def __init__(self, max_expansion_depth: int | None = None, prelude: bool = True):
        self.env: Environment = Environment()
        self.registry: MacroRegistry = MacroRegistry()
        if prelude:
            register(self.env)
            register(self.registry.expansion_env)
            register_macros(self.registry)

        self.names: NameGenerator = NameGenerator()
        self.expander: Expander = Expander(self.registry, self.names, max_expansion_depth)

    def register_macro(
        self, name: Symbol, spec: ParameterSpec | SExpression, body: Iterable[SExpression]
    ) -> MacroDefinition:
        return self.registry.register(name, spec, body)

    def expand_one(self, form: SExpression) -> SExpression:
        return self.expander.expand_one(form)

    def expand_full(self, form: SExpression) -> SExpression:
        return self.expander.expand_full(form)

    # Diagnostics: the expansion without evaluation
    def macroexpand_one(self, form: SExpression) -> SExpression:
        return self.expander.macroexpand_one(form)

    def macroexpand_full(self, form: SExpression) -> SExpression:
        return self.expander.macroexpand_full(form)

    def evaluate(self, form: SExpression, env: Environment | None = None) -> LispValue:
        """Evaluate an already-expanded form."""
        return evaluate(form, env if env is not None else self.env, self.expander)

    def eval(self, form: SExpression) -> LispValue:
        """Expand and evaluate one top-level form.

        A top-level progn, written directly or produced by a macro, is
        processed form by form, so a defmacro inside it is registered before
        its later siblings are expanded.
        """
        form = self.expander.expand_head(form)
        if isinstance(form, list) and form and form[0] == PROGN:
            result: LispValue = Nil
            for sub in form[1:]:
                result = self.eval(sub)
            return result
        expanded = self.expander.expand_full(form)
        logger.debug("Evaluating %r", expanded)
        return evaluate(expanded, self.env, self.expander)

    def eval_forms(self, forms: Iterable[SExpression]) -> LispValue:
        results: list[LispValue] = [self.eval(form) for form in forms]
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results
