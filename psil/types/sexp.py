"""Symbolic expressions: the untyped tree produced by the reader.

A Sexp is one of
    - Nil          the empty list
    - Pair(l, r)   an ordered pair
    - Symbol       a name
    - int          an integer literal

Lists are built head-first: `(op a b)` is Pair(Pair(Pair(Nil, op), a), b), so
the outermost Pair holds the *last* element. This is the shape the elaborator
pattern-matches on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from psil import SExpression
from psil.types.nil import Nil


@dataclass(frozen=True, slots=True)
class Pair:
    left: SExpression
    right: SExpression


def make_list(items: Iterable[SExpression]) -> SExpression:
    """Build the head-first chain for a proper list of `items`."""
    result: SExpression = Nil
    for item in items:
        result = Pair(result, item)
    return result


def list_items(sexp: SExpression) -> Optional[list[SExpression]]:
    """Elements of a proper list, or None if `sexp` is not one.

    `()` is the empty proper list.
    """
    items: list[SExpression] = []
    while isinstance(sexp, Pair):
        items.append(sexp.right)
        sexp = sexp.left
    if sexp is not Nil:
        return None
    items.reverse()
    return items
