"""Lambda function representation for Theta."""

from __future__ import annotations

from io import StringIO

from theta import SExpression, LispValue
from theta.types.bind import ParameterSpec, bind_arguments, parse_lambda_list
from theta.types.environment import Environment


class Lambda:
    """A first-class lambda with formal parameters, body forms, and closure env."""

    __slots__ = ("formals", "spec", "body", "env")

    def __init__(
        self, formals: SExpression, body: list[SExpression], env: Environment | None = None
    ):
        self.formals: SExpression = formals
        self.spec: ParameterSpec = parse_lambda_list(formals)
        self.body: list[SExpression] = list(body)
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(λ (")
            buffer.write(" ".join(str(f) for f in self.spec.names()))
            buffer.write(") ")
            buffer.write(" ".join(str(b) for b in self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)

    def extend_env(
        self,
        args: list[LispValue],
        evaluate_fn=None,
        expander=None,
    ) -> Environment:
        """
        Bind the given argument values to this lambda's formal parameters and
        return a new Environment for evaluating the body.
        """
        return bind_arguments(self.spec, list(args), self.env, evaluate_fn, expander)
