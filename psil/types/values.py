"""Runtime values produced by the evaluator.

Integers are plain Python ints. Functions are either Closures (user code) or
Primitives (built-ins, curried one argument at a time).
"""

from __future__ import annotations

from typing import Callable

from psil import PsilValue, PrimitiveFn
from psil.types.environment import Environment
from psil.types.lexp import Lexp


class Closure:
    """A one-parameter function value together with its defining environment."""

    __slots__ = ("env", "param", "body")

    def __init__(self, env: Environment, param: str, body: Lexp):
        self.env: Environment = env
        self.param: str = param
        self.body: Lexp = body

    def __str__(self) -> str:
        return "<closure>"

    def __repr__(self) -> str:
        return f"Closure({self.param!r}, {self.body!r})"


class Primitive:
    """Built-in unary operation.

    A non-strict primitive receives its argument as an unevaluated Thunk, so
    that an argument the operation ends up discarding is never computed.
    """

    __slots__ = ("fn", "name", "strict")

    def __init__(self, fn: PrimitiveFn, name: str = "", strict: bool = True):
        self.fn = fn
        self.name = name
        self.strict = strict

    def __call__(self, arg: PsilValue) -> PsilValue:
        return self.fn(arg)

    def __str__(self) -> str:
        return "<function>"

    def __repr__(self) -> str:
        return f"Primitive({self.name!r})"


class Thunk:
    """Delayed computation of a value; forced at most once."""

    __slots__ = ("_compute", "_value", "_forced")

    def __init__(self, compute: Callable[[], PsilValue]):
        self._compute = compute
        self._value: PsilValue = None
        self._forced = False

    def force(self) -> PsilValue:
        if not self._forced:
            self._value = force(self._compute())
            self._forced = True
            self._compute = None
        return self._value

    def __repr__(self) -> str:
        return f"Thunk({self._value!r})" if self._forced else "Thunk(<pending>)"


def force(value: PsilValue) -> PsilValue:
    """Evaluate `value` if it is a Thunk, otherwise return it unchanged."""
    while isinstance(value, Thunk):
        value = value.force()
    return value
