# Core type aliases for Theta's data model.
# We use plain Python types (int, float, str, list, DottedList for improper lists)
# to represent both code (forms) and runtime values. No explicit Cons type is defined.
#
# Naming guidance:
# - SExpression: Use in expander/binder/template code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; expansion-time values are terms, so the two
# are interchangeable at the Python level.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (code-as-data)
SExpression = LispValue

# Evaluator function type: Python evaluator used inside special forms/macros
EvaluatorFn = Callable[..., LispValue]
