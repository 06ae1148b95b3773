"""Psil type expressions: `Int` and arrows. Compared structurally."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IntType:
    def __str__(self) -> str:
        return "Int"


@dataclass(frozen=True, slots=True)
class Arrow:
    domain: Ltype
    codomain: Ltype

    def __str__(self) -> str:
        # Right-nested arrows print as one chain, arrow domains are parenthesised
        parts = [str(self.domain)]
        t = self.codomain
        while isinstance(t, Arrow):
            parts.append(str(t.domain))
            t = t.codomain
        parts.append(str(t))
        return "(" + " -> ".join(parts) + ")"


Ltype = IntType | Arrow

Int = IntType()


def arrows(*types: Ltype) -> Ltype:
    """arrows(a, b, c) == Arrow(a, Arrow(b, c))."""
    if not types:
        raise ValueError("arrows() needs at least one type")
    result = types[-1]
    for t in reversed(types[:-1]):
        result = Arrow(t, result)
    return result
