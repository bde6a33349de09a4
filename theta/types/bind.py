from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from theta import LispValue, SExpression
from theta.types.environment import Environment
from theta.types.errors import ArityError, ThetaSyntaxError
from theta.types.nil import Nil
from theta.types.symbol import Symbol
from theta.types.term import DottedList, dotted, is_atom, is_empty, to_list

OPTIONAL = Symbol("&optional")
REST = Symbol("&rest")
BODY = Symbol("&body")
KEY = Symbol("&key")
LAMBDA_LIST_KEYWORDS = (OPTIONAL, REST, BODY, KEY)


@dataclass
class ParameterSpec:
    """A parsed lambda list.

    required: positional names, or nested ParameterSpec patterns that
              destructure the corresponding argument
    optional: (name, default-term) pairs; the default term is Nil unless given
    rest: name bound to the remaining arguments, if any
    absorbs_remainder: True when the rest parameter came from &body or from a
              dotted lambda-list tail `(a b . body)`
    keys: (name, default-term) pairs for &key
    """

    required: list[Union[Symbol, "ParameterSpec"]] = field(default_factory=list)
    optional: list[tuple[Symbol, SExpression]] = field(default_factory=list)
    rest: Symbol | None = None
    absorbs_remainder: bool = False
    keys: list[tuple[Symbol, SExpression]] = field(default_factory=list)

    def names(self) -> list[Symbol]:
        """Every name this spec binds, in binding order."""
        out: list[Symbol] = []
        for r in self.required:
            out.extend(r.names() if isinstance(r, ParameterSpec) else [r])
        out.extend(name for name, _ in self.optional)
        if self.rest is not None:
            out.append(self.rest)
        out.extend(name for name, _ in self.keys)
        return out


def _name_and_default(spec: SExpression, marker: str) -> tuple[Symbol, SExpression]:
    if isinstance(spec, Symbol):
        return spec, Nil
    if isinstance(spec, list) and 1 <= len(spec) <= 2 and isinstance(spec[0], Symbol):
        return spec[0], spec[1] if len(spec) == 2 else Nil
    raise ThetaSyntaxError(f"Malformed {marker} parameter: {spec!r}")


def parse_lambda_list(formals: SExpression) -> ParameterSpec:
    """
    Parse a lambda list into a ParameterSpec.

    Supports:
    - Positional required parameters, each a Symbol or a nested lambda list
    - &optional (name) or (name default)
    - &rest / &body capturing remaining supplied args
    - a dotted tail `(a b . body)`, equivalent to `(a b &body body)`
    - a bare Symbol, equivalent to `(&rest sym)`
    - &key name or (name default), matched against :name value pairs
    """
    if isinstance(formals, ParameterSpec):
        return formals
    spec = ParameterSpec()
    if isinstance(formals, Symbol):
        spec.rest = formals
        return spec
    if is_empty(formals):
        return spec

    if isinstance(formals, DottedList):
        items, dotted_rest = list(formals.items), formals.tail
        if not isinstance(dotted_rest, Symbol):
            raise ThetaSyntaxError(f"Dotted parameter tail must be a Symbol, got {dotted_rest!r}")
    elif isinstance(formals, list):
        items, dotted_rest = list(formals), None
    else:
        raise ThetaSyntaxError(f"Parameter list must be a list, got {formals!r}")

    if (REST in items or BODY in items) and KEY in items:
        raise ThetaSyntaxError("Malformed parameter list: cannot mix &rest and &key")

    state = "required"
    seen: set[Symbol] = set()
    while items:
        item = items.pop(0)
        if item in LAMBDA_LIST_KEYWORDS:
            if item in seen:
                raise ThetaSyntaxError(f"Duplicate {item} in parameter list")
            seen.add(item)
            if item == OPTIONAL:
                if state != "required":
                    raise ThetaSyntaxError("&optional must precede &rest/&body/&key")
                state = "optional"
            elif item in (REST, BODY):
                if spec.rest is not None:
                    raise ThetaSyntaxError("Only one of &rest/&body is allowed")
                if not items or not isinstance(items[0], Symbol) or items[0] in LAMBDA_LIST_KEYWORDS:
                    raise ThetaSyntaxError("Malformed parameter list: &rest/&body must be followed by a name")
                spec.rest = items.pop(0)
                spec.absorbs_remainder = item == BODY
                state = "after-rest"
            else:
                state = "key"
            continue

        if state == "required":
            if isinstance(item, Symbol):
                spec.required.append(item)
            elif isinstance(item, (list, DottedList)):
                spec.required.append(parse_lambda_list(item))
            else:
                raise ThetaSyntaxError(f"Parameter must be a Symbol or a list, got {item!r}")
        elif state == "optional":
            spec.optional.append(_name_and_default(item, "&optional"))
        elif state == "key":
            spec.keys.append(_name_and_default(item, "&key"))
        else:
            raise ThetaSyntaxError(f"Unexpected {item!r} after &rest/&body parameter")

    if dotted_rest is not None:
        if spec.rest is not None or spec.keys:
            raise ThetaSyntaxError("Dotted parameter tail cannot follow &rest/&body/&key")
        spec.rest = dotted_rest
        spec.absorbs_remainder = True
    return spec


def _arguments(supplied: SExpression) -> tuple[list, SExpression]:
    """Split supplied arguments into (items, improper-tail-or-Nil)."""
    if is_atom(supplied) and not is_empty(supplied):
        # `(m . x)` leaves a bare atom after the head
        return [], supplied
    return to_list(supplied)


def bind_arguments(
    spec: ParameterSpec | SExpression,
    supplied_args: SExpression,
    closure_env: Environment | None,
    evaluate_fn=None,
    expander=None,
) -> Environment:
    """
    Single source of truth for lambda-list binding in Theta.

    Used for macro invocation (supplied_args are unevaluated terms) and for
    lambda application (supplied_args are evaluated values).

    Returns a new Environment whose outer is the closure_env, populated with
    the bindings for evaluating the callee body.
    """
    spec = parse_lambda_list(spec)
    local_env = Environment(outer=closure_env)
    _bind_into(spec, supplied_args, local_env, evaluate_fn, expander)
    return local_env


def _bind_into(
    spec: ParameterSpec,
    supplied_args: SExpression,
    local_env: Environment,
    evaluate_fn,
    expander,
) -> None:
    supplied, tail = _arguments(supplied_args)

    def _default(default_expr: SExpression) -> LispValue:
        # Without an evaluator the default term is bound as written
        if evaluate_fn is not None and default_expr is not Nil:
            return evaluate_fn(default_expr, local_env, expander)
        return default_expr

    # Required positional, destructuring nested patterns
    for i, formal in enumerate(spec.required):
        if not supplied:
            if not is_empty(tail):
                raise ArityError(f"Improper argument list: cannot bind {formal} from dotted tail {tail!r}")
            missing = spec.required[i:]
            raise ArityError(
                f"Too few arguments; missing {len(missing)} parameter(s): {[str(s) for s in missing]}"
            )
        value = supplied.pop(0)
        if isinstance(formal, ParameterSpec):
            if not isinstance(value, (list, DottedList)) and not is_empty(value):
                raise ArityError(f"Cannot destructure {value!r}: expected a list")
            _bind_into(formal, value, local_env, evaluate_fn, expander)
        else:
            local_env.define(formal, value)

    # Optionals
    for name, default_expr in spec.optional:
        if supplied:
            local_env.define(name, supplied.pop(0))
        else:
            local_env.define(name, _default(default_expr))

    # Rest / body: everything left, keeping an improper tail
    if spec.rest is not None:
        local_env.define(spec.rest, dotted(supplied, tail))
        return

    if not is_empty(tail):
        raise ArityError(f"Improper argument list with no rest parameter: {tail!r}")

    # Keywords
    if spec.keys:
        if len(supplied) % 2 != 0:
            raise ArityError("Keyword arguments must be in pairs")
        keyword_names = [name for name, _ in spec.keys]
        provided: dict[Symbol, LispValue] = {}
        while supplied:
            key = supplied.pop(0)
            val = supplied.pop(0)
            if not isinstance(key, Symbol) or not key.is_keyword():
                raise ArityError("Expected keyword symbol like :name in keyword arguments")
            target = Symbol(key.id[1:])
            if target not in keyword_names:
                raise ArityError(f"Unknown keyword argument {key}")
            provided[target] = val
        for name, default_expr in spec.keys:
            local_env.define(name, provided[name] if name in provided else _default(default_expr))
        return

    if supplied:
        raise ArityError(f"Too many arguments: {supplied}")
