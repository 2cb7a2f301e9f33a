"""
Expression System for qdefs

Display conditions, disabled states, validation rules, response ordering and
computed property values are all represented as Abstract Syntax Trees,
never as strings.

The AST is deliberately opaque:
    - an Expression is an operator name plus an ordered argument list
    - arguments are Literals (number or string) or nested Expressions

ARCHITECTURAL RULE:
    qdefs never evaluates an expression.
    Evaluation belongs to the external survey engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .errors import ConfigurationError


@dataclass(frozen=True)
class Literal:
    """
    Represents a literal constant argument.

    Examples:
        - 86400
        - 2.5
        - "weekly.Q1"

    Properties:
        value: The literal value (int, float or str)

    IMPORTANT:
        Booleans are not literals in the engine's argument schema.
        Use exp_with_args() or normalize_property() to build literals from
        raw values; both reject booleans.
    """

    value: Union[int, float, str]

    @property
    def is_numeric(self) -> bool:
        return not isinstance(self.value, str)


@dataclass(frozen=True)
class Expression:
    """
    Represents an operator applied to an ordered list of arguments.

    Example:
        responseHasKeysAny("weekly.Q1", "rg.lsg.row1", "1", "2")

    Becomes:
        Expression(
            name="responseHasKeysAny",
            data=(
                Literal("weekly.Q1"),
                Literal("rg.lsg.row1"),
                Literal("1"),
                Literal("2"),
            )
        )

    Properties:
        name: Operator name understood by the survey engine
        data: Ordered arguments (Literal or Expression)

    IMPORTANT:
        This object is immutable (frozen=True).
        It is passed through builders unchanged.
    """

    name: str
    data: Tuple[ExpressionArg, ...] = ()


ExpressionArg = Union[Literal, Expression]

SEQUENTIAL_ORDER = Expression(name="sequential")


def to_arg(value) -> ExpressionArg:
    """Wrap a raw Python value as an expression argument."""
    if isinstance(value, (Literal, Expression)):
        return value
    if isinstance(value, bool):
        raise ConfigurationError(f"Boolean values are not valid expression arguments: {value!r}")
    if isinstance(value, (int, float, str)):
        return Literal(value)
    raise ConfigurationError(f"Unsupported expression argument type: {type(value).__name__}")


def exp_with_args(name: str, *args) -> Expression:
    """
    Build an Expression from an operator name and raw arguments.

    Strings and numbers become Literals, Expressions are kept as they are
    and None arguments are dropped, so optional trailing arguments can be
    passed unconditionally.
    """
    return Expression(name=name, data=tuple(to_arg(a) for a in args if a is not None))
