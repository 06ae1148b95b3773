"""Built-in operations of the Psil runtime and their types.

Every built-in is curried: applying it to one argument yields either the result
or another Primitive waiting for the next argument.
"""
from __future__ import annotations

from typing import Callable

from psil import PsilValue
from psil.elaboration.elaborator import BUILTIN_TYPES
from psil.errors import PsilRuntimeError
from psil.types.environment import Environment
from psil.types.values import Primitive, force


def expect_int(op: str, value: PsilValue) -> int:
    """Force `value` and make sure it is an integer operand of `op`."""
    value = force(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise PsilRuntimeError(f"{op} expects an integer, got {value}")
    return value


def binary(op: str, fn: Callable[[int, int], int]) -> Primitive:
    """Curried primitive for a binary integer operation."""
    def first(x: PsilValue) -> Primitive:
        a = expect_int(op, x)
        return Primitive(lambda y: fn(a, expect_int(op, y)), f"({op} {a})")
    return Primitive(first, op)


# -------------------------------
# Arithmetic
# -------------------------------
def add(a: int, b: int) -> int:
    return a + b


def sub(a: int, b: int) -> int:
    return a - b


def mul(a: int, b: int) -> int:
    return a * b


def div(a: int, b: int) -> int:
    """Integer quotient truncated toward zero."""
    if b == 0:
        raise PsilRuntimeError("Division by zero")
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


# -------------------------------
# Conditional
# -------------------------------
def if0(c: PsilValue) -> Primitive:
    """(if0 c a b) is a when c is 0, else b. The branches arrive unevaluated."""
    is_zero = expect_int("if0", c) == 0

    def then_branch(a: PsilValue) -> Primitive:
        return Primitive(lambda b: a if is_zero else b, "(if0 _ _)", strict=False)

    return Primitive(then_branch, "(if0 _)", strict=False)


def register(env: Environment) -> None:
    """Register all builtin operations into the given value environment."""
    env.update(
        {
            "+": binary("+", add),
            "-": binary("-", sub),
            "*": binary("*", mul),
            "/": binary("/", div),
            "if0": Primitive(if0, "if0"),
        }
    )


def register_types(tenv: Environment) -> None:
    """Register the type of every builtin operation into a typing environment."""
    tenv.update(dict(BUILTIN_TYPES))


def initial_envs() -> tuple[Environment, Environment]:
    """Fresh (typing, value) environments holding only the builtins."""
    tenv, venv = Environment(), Environment()
    register_types(tenv)
    register(venv)
    return tenv, venv
