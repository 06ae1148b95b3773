"""Bidirectional type checking for the Psil intermediate language.

`synthesize` computes a type and raises on failure; `check` compares against an
expected type and reports a mismatch as a message instead of raising.
"""

from __future__ import annotations

from typing import Optional

from psil.errors import PsilTypeError
from psil.types.environment import Environment
from psil.types.lexp import Lapp, Lexp, Lfun, Lhastype, Llet, Lnum, Lvar
from psil.types.ltype import Arrow, Int, Ltype

TypeEnv = Environment


def check(tenv: TypeEnv, expr: Lexp, expected: Ltype) -> Optional[str]:
    """Return None if `expr` has type `expected`, else a message naming both types."""
    if isinstance(expr, Lvar):
        # Checked under a binding of the variable to the expected type
        actual = synthesize(tenv.extend(expr.name, expected), expr)
        if actual != expected:
            return f"Variable {expr.name} already declared with type {actual}"
        return None
    actual = synthesize(tenv, expr)
    if actual != expected:
        return f"Type error: {expected} != {actual}"
    return None


def synthesize(tenv: TypeEnv, expr: Lexp) -> Ltype:
    """Type of `expr` under `tenv`.

    Raises PsilUnknownVariable for unbound names and PsilTypeError for
    everything else that does not type.
    """
    match expr:
        case Lnum():
            return Int
        case Lvar(name):
            return tenv.lookup(name)
        case Lhastype(inner, ltype):
            error = check(tenv, inner, ltype)
            if error is not None:
                raise PsilTypeError(error)
            return ltype
        case Llet(name, bound, body):
            return synthesize(tenv.extend(name, synthesize(tenv, bound)), body)
        case Lfun(param, body):
            # Parameters are always integers
            return Arrow(Int, synthesize(tenv.extend(param, Int), body))
        case Lapp(fn, arg):
            fn_type = synthesize(tenv, fn)
            if not (isinstance(fn_type, Arrow) and fn_type.domain == Int):
                raise PsilTypeError(f"Cannot apply {fn!r} of type {fn_type}")
            arg_type = synthesize(tenv, arg)
            if arg_type != Int:
                raise PsilTypeError(f"Argument {arg!r} has type {arg_type}, expected Int")
            return fn_type.codomain
        case _:
            raise PsilTypeError(f"Cannot find the type of: {expr!r}")
