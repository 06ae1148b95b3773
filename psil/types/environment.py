"""Environments for Psil.

An Environment maps names to types (typing environment) or to runtime values
(value environment). Frames are chained through `outer`; lookup returns the
innermost binding, so newer bindings shadow older ones. `extend` never changes
the receiver: it returns a child frame visible only to whoever holds it.

The only in-place writes are `define`, used while populating a fresh root
frame, and `fill`, which completes a slot created by `extend_slot`.
"""

from __future__ import annotations

from typing import Any, Optional

from psil.errors import PsilRuntimeError, PsilUnknownVariable


class _Unfilled:
    def __repr__(self):
        return "<unfilled>"


UNFILLED = _Unfilled()


class Environment:
    """Persistent name -> value (or type) mapping with newest-wins lookup."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Any] = {}
        self.outer: Environment | None = outer

    def define(self, name: str, value: Any) -> None:
        """Bind `name` in this frame. Only meant for building root frames."""
        self.vars[name] = value

    def update(self, mapping: dict[str, Any]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def extend(self, name: str, value: Any) -> Environment:
        """Return a new environment with `name` bound to `value` on top of this one."""
        child = Environment(outer=self)
        child.vars[name] = value
        return child

    def extend_slot(self, name: str) -> Environment:
        """Like `extend`, but the binding is filled in later with `fill`.

        Closures built while evaluating the bound expression may capture the
        returned environment and see the value once it has been filled.
        """
        return self.extend(name, UNFILLED)

    def fill(self, name: str, value: Any) -> None:
        if self.vars.get(name, None) is not UNFILLED:
            raise PsilRuntimeError(f"No open slot for {name!r} in this frame")
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: str) -> Any:
        """Look up the value bound to `name`.

        Raises PsilUnknownVariable if the name is not bound anywhere in the chain.
        """
        env = self.find(name)
        if env is None:
            raise PsilUnknownVariable(name)
        value = env.vars[name]
        if value is UNFILLED:
            raise PsilRuntimeError(f"{name!r} used before its definition was complete")
        return value

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None
