"""Elaboration: symbolic expressions -> types, intermediate expressions, declarations.

Each function is one `match` over the head-first pair shapes produced by the
reader. Arms are tried top to bottom and the last arm always raises, so a form
is either fully elaborated or rejected with its rendered text.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from psil import SExpression
from psil.debug_utils.pprint import render_sexp
from psil.errors import PsilElaborationError
from psil.types.lexp import Decl, Lapp, Ldec, Ldef, Lexp, Lfun, Lhastype, Llet, Lnum, Lvar
from psil.types.ltype import Arrow, Int, Ltype, arrows
from psil.types.nil import NilType
from psil.types.sexp import Pair, list_items
from psil.types.symbol import Symbol

INFIX_OPERATORS = frozenset({"+", "-", "*", "/"})

BUILTIN_TYPES: dict[str, Ltype] = {
    "+": arrows(Int, Int, Int),
    "-": arrows(Int, Int, Int),
    "*": arrows(Int, Int, Int),
    "/": arrows(Int, Int, Int),
    "if0": arrows(Int, Int, Int, Int),
}

# `(Int -> Int -> Int)` reads left-nested; this one shape is re-curried.
_LEFT_NESTED_BINARY = Arrow(Arrow(Int, Int), Int)
_RIGHT_NESTED_BINARY = Arrow(Int, Arrow(Int, Int))


def _fun_form(sexp: SExpression) -> Optional[tuple[list[str], SExpression]]:
    """(params, body) for `(fun x ... body)`, else None."""
    items = list_items(sexp)
    if items is None or len(items) < 3 or items[0] != Symbol("fun"):
        return None
    params = items[1:-1]
    if not all(isinstance(p, Symbol) for p in params):
        return None
    return [p.id for p in params], items[-1]


def _let_bindings(sexp: SExpression) -> Optional[list[tuple[str, SExpression]]]:
    """[(name, expr), ...] for a let binding list `((x e) ...)`, else None."""
    items = list_items(sexp)
    if not items:
        return None
    bindings = []
    for item in items:
        pair = list_items(item)
        if pair is None or len(pair) != 2 or not isinstance(pair[0], Symbol):
            return None
        bindings.append((pair[0].id, pair[1]))
    return bindings


def elaborate_type(sexp: SExpression) -> Ltype:
    match sexp:
        case Symbol("Int"):
            return Int
        case int():
            return Int
        case Pair(t, NilType()) | Pair(NilType(), t):
            return elaborate_type(t)
        case Pair(Pair(domain, Symbol("->")), codomain):
            ltype = Arrow(elaborate_type(domain), elaborate_type(codomain))
            if ltype == _LEFT_NESTED_BINARY:
                return _RIGHT_NESTED_BINARY
            return ltype
        case Pair() if (fun := _fun_form(sexp)) is not None:
            params, body = fun
            return arrows(*([Int] * len(params)), elaborate_type(body))
        case Pair(Pair(Pair(NilType(), Symbol(":")), _), t):
            return elaborate_type(t)
        case Pair(Pair(Pair(NilType(), Symbol()), Symbol()), t):
            return elaborate_type(t)
        case Pair(left, right):
            return Arrow(elaborate_type(left), elaborate_type(right))
        case Symbol(name) if name in BUILTIN_TYPES:
            return BUILTIN_TYPES[name]
        case _:
            raise PsilElaborationError(f"Unknown Psil type: {render_sexp(sexp)}")


def elaborate_expr(sexp: SExpression) -> Lexp:
    match sexp:
        case int():
            return Lnum(sexp)
        case Symbol(name):
            return Lvar(name)
        case Pair(e, NilType()) | Pair(NilType(), e):
            return elaborate_expr(e)
        case Pair(Pair(e, Symbol("->")), t):
            return Lhastype(elaborate_expr(e), elaborate_type(t))
        case Pair(Pair(Pair(NilType(), Symbol("let")), binds), body) if (
            bindings := _let_bindings(binds)
        ) is not None:
            result = elaborate_expr(body)
            for name, bound in reversed(bindings):
                result = Llet(name, elaborate_expr(bound), result)
            return result
        case Pair(Pair(Pair(NilType(), Symbol("dec")), Symbol(name)), t):
            return Llet(name, Lhastype(Lvar(name), elaborate_type(t)), Lvar(name))
        case Pair(Pair(Pair(NilType(), Symbol("def")), Symbol(name)), value):
            # The body refers back to the name, which is what lets a
            # definition mention itself.
            return Llet(name, elaborate_expr(value), Lvar(name))
        case Pair() if (fun := _fun_form(sexp)) is not None:
            params, body = fun
            result = elaborate_expr(body)
            for param in reversed(params):
                result = Lfun(param, result)
            return result
        case Pair(Pair(Pair(NilType(), Symbol(":")), e), t):
            return Lhastype(elaborate_expr(e), elaborate_type(t))
        case Pair(Pair(Pair(NilType(), left), Symbol(op)), right) if (
            op in INFIX_OPERATORS and not _is_operator(left)
        ):
            # (A op B) -> ((op A) B)
            return Lapp(Lapp(Lvar(op), elaborate_expr(left)), elaborate_expr(right))
        case Pair(left, right):
            # Prefix forms (op A B) land here too and come out as ((op A) B).
            return Lapp(elaborate_expr(left), elaborate_expr(right))
        case _:
            raise PsilElaborationError(f"Unknown Psil expression: {render_sexp(sexp)}")


def _is_operator(sexp: SExpression) -> bool:
    return isinstance(sexp, Symbol) and sexp.id in INFIX_OPERATORS


def elaborate_decl(sexp: SExpression) -> Decl:
    match sexp:
        case Pair(Pair(Pair(NilType(), Symbol("def")), Symbol(name)), value):
            return Ldef(name, elaborate_expr(value))
        case Pair(Pair(Pair(NilType(), Symbol("dec")), Symbol(name)), t):
            return Ldec(name, elaborate_type(t))
        case _:
            raise PsilElaborationError(f"Unknown Psil declaration: {render_sexp(sexp)}")


def elaborate_program(sexps: Iterable[SExpression]) -> Iterator[Decl]:
    """Lazily elaborate toplevel forms, one declaration per form."""
    for sexp in sexps:
        yield elaborate_decl(sexp)
