from __future__ import annotations

import logging

from theta import SExpression
from theta.config import get_max_expansion_depth
from theta.evaluation.evaluator import evaluate
from theta.expansion.positions import PositionRule, rule_for
from theta.expansion.quasiquote import UNQUOTE, UNQUOTE_SPLICING, is_marked
from theta.types.bind import bind_arguments
from theta.types.errors import ExpansionDepthExceededError
from theta.types.gensym import NameGenerator
from theta.types.macro_registry import MacroDefinition, MacroRegistry
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.term import DottedList, dotted, form_args, head_symbol, is_atom

logger = logging.getLogger(__name__)


# Macro bodies run through the ordinary evaluator, in the expansion-time
# environment of their definition, with the call's raw argument terms bound.

class Expander:
    """
    Drives macro expansion over term trees.

    Features:
    - Head-position single-step expansion (expand_one)
    - Fixed-point head expansion (expand_head)
    - Full expansion that descends only into evaluated positions (expand_full)
    - Depth bound turning runaway recursive macros into an error
    - Fresh-name generation for macro authors (gen_sym)

    `depth` counts the expansion steps on the current chain. It lives on the
    instance, so an expansion started from inside a macro body (macroexpand,
    or a macro form reaching the evaluator) continues the same count.
    Descending into subterms does not add to it.
    """

    def __init__(
        self,
        registry: MacroRegistry | None = None,
        names: NameGenerator | None = None,
        max_depth: int | None = None,
    ):
        self.registry: MacroRegistry = registry if registry is not None else MacroRegistry()
        self.names: NameGenerator = names if names is not None else NameGenerator()
        self.max_depth: int = max_depth if max_depth is not None else get_max_expansion_depth()
        self.depth: int = 0

    def gen_sym(self, prefix: str | None = None) -> Symbol:
        return self.names.fresh(prefix)

    def is_macro_form(self, form: SExpression) -> bool:
        head = head_symbol(form)
        return head is not None and self.registry.is_macro(head)

    @property
    def expanding(self) -> bool:
        """True while any expansion is in progress, including macro bodies."""
        return self.depth > 0

    def _step(self, form: SExpression) -> SExpression:
        # Caller restores self.depth once the step's result is fully expanded
        self.depth += 1
        if self.depth > self.max_depth:
            logger.debug("Expansion depth %d exceeded while expanding %r", self.max_depth, form)
            raise ExpansionDepthExceededError(
                f"Macro expansion exceeded depth {self.max_depth} while expanding {head_symbol(form) or form!r}"
            )
        return self._transform(form)

    # Single-step head expansion
    def expand_one(self, form: SExpression) -> SExpression:
        """Expand only the head-position macro if present."""
        if not self.is_macro_form(form):
            return form  # Not a macro call, unchanged
        saved = self.depth
        try:
            return self._step(form)
        finally:
            self.depth = saved

    def _transform(self, form: SExpression) -> SExpression:
        head = head_symbol(form)
        definition = self.registry.lookup(head)
        logger.debug("Expanding macro %s at depth %d", head, self.depth)
        args = form_args(form)
        if isinstance(definition, MacroDefinition):
            return self._run_transformer(definition, args)
        # Builtin transformers are Python callables taking (args, expander)
        return definition(args, self)

    def _run_transformer(self, definition: MacroDefinition, args: SExpression) -> SExpression:
        """
        Canonical macro transformer invocation:
        - Bind raw, unevaluated args to the macro's parameter spec.
        - Evaluate each body form, fully expanded, in that binding frame.
        - Return the last body value as the replacement term, unevaluated.
        """
        call_env = bind_arguments(definition.spec, args, definition.env, evaluate, self)
        expansion: SExpression = Nil
        for body_form in definition.body:
            expansion = evaluate(self._expand(body_form), call_env, self)
        return expansion

    # Fixed-point head expansion
    def expand_head(self, form: SExpression) -> SExpression:
        saved = self.depth
        try:
            return self._expand_head(form)
        finally:
            self.depth = saved

    def _expand_head(self, form: SExpression) -> SExpression:
        while self.is_macro_form(form):
            form = self._step(form)
        return form

    # Full expansion
    def expand_full(self, form: SExpression) -> SExpression:
        """Expand until no macro-headed form remains in an evaluated position."""
        return self._expand(form)

    def _expand(self, form: SExpression) -> SExpression:
        saved = self.depth
        try:
            expanded = self._expand_head(form)
            if is_atom(expanded):
                return expanded

            rule = rule_for(head_symbol(expanded))
            if rule is not None and isinstance(expanded, list):
                return self._expand_special(expanded, rule)

            # Application: every subterm, including an improper tail
            if isinstance(expanded, DottedList):
                items = [self._expand(x) for x in expanded.items]
                return dotted(items, self._expand(expanded.tail))
            return [self._expand(x) for x in expanded]
        finally:
            self.depth = saved

    def _expand_special(self, form: list, rule: PositionRule) -> list:
        if rule.all_literal:
            return form
        head, args = form[0], form[1:]
        out = [head]
        for i, arg in enumerate(args):
            if i in rule.literal or (rule.alternating and i % 2 == 0):
                out.append(arg)
            elif rule.labels and is_atom(arg):
                out.append(arg)
            elif rule.bindings == i:
                out.append(self._expand_bindings(arg))
            elif rule.template:
                out.append(self._expand_template(arg))
            else:
                out.append(self._expand(arg))
        return out

    def _expand_bindings(self, bindings: SExpression) -> SExpression:
        if not isinstance(bindings, list):
            return bindings  # the evaluator reports the malformed form
        out = []
        for b in bindings:
            if isinstance(b, list) and len(b) == 2:
                out.append([b[0], self._expand(b[1])])
            else:
                out.append(b)
        return out

    def _expand_template(self, template: SExpression) -> SExpression:
        """Expand only the operands of unquote markers inside a template."""
        if is_marked(template, UNQUOTE) or is_marked(template, UNQUOTE_SPLICING):
            return [template[0]] + [self._expand(x) for x in template[1:]]
        if isinstance(template, list):
            if len(template) > 2 and template[-2] in (UNQUOTE, UNQUOTE_SPLICING):
                # `(a . ,e)` read as `(a unquote e)`
                return [self._expand_template(x) for x in template[:-1]] + [self._expand(template[-1])]
            return [self._expand_template(x) for x in template]
        if isinstance(template, DottedList):
            return DottedList([self._expand_template(x) for x in template.items], template.tail)
        return template

    # Diagnostic aliases: return the expansion without evaluating it.
    # Fresh names differ between calls since the generator advances.
    macroexpand_one = expand_one
    macroexpand_full = expand_full
