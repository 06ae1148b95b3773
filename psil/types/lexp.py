"""Intermediate language: expressions (Lexp) and toplevel declarations (Ldec)."""

from __future__ import annotations

from dataclasses import dataclass

from psil.types.ltype import Ltype


@dataclass(frozen=True, slots=True)
class Lnum:
    value: int


@dataclass(frozen=True, slots=True)
class Lvar:
    name: str


@dataclass(frozen=True, slots=True)
class Lhastype:
    expr: Lexp
    ltype: Ltype


@dataclass(frozen=True, slots=True)
class Lapp:
    fn: Lexp
    arg: Lexp


@dataclass(frozen=True, slots=True)
class Llet:
    name: str
    bound: Lexp
    body: Lexp


@dataclass(frozen=True, slots=True)
class Lfun:
    param: str
    body: Lexp


Lexp = Lnum | Lvar | Lhastype | Lapp | Llet | Lfun


@dataclass(frozen=True, slots=True)
class Ldec:
    """`(dec name Type)`: announces the type of the next definition."""
    name: str
    ltype: Ltype


@dataclass(frozen=True, slots=True)
class Ldef:
    """`(def name expr)`: a toplevel value definition."""
    name: str
    expr: Lexp


Decl = Ldec | Ldef
