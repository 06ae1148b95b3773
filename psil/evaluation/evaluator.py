"""Evaluator for the Psil intermediate language.

`evaluate(env, expr)` reduces an expression to a value: an int, a Closure or a
Primitive. Type annotations are erased. Arguments are evaluated before the call
except for non-strict primitives (the branches of if0), which receive Thunks.
"""

from __future__ import annotations

from psil import PsilValue
from psil.errors import PsilRuntimeError
from psil.evaluation.apply import apply
from psil.types.environment import Environment
from psil.types.lexp import Lapp, Lexp, Lfun, Lhastype, Llet, Lnum, Lvar
from psil.types.values import Closure, Primitive, Thunk, force


def evaluate(env: Environment, expr: Lexp) -> PsilValue:
    match expr:
        case Lnum(n):
            return n
        case Lvar(name):
            return env.lookup(name)
        case Llet(name, Lhastype(Lvar(), _) as placeholder, _):
            # Binding produced by `(dec x T)`: stands for a function still to come
            return Closure(env, name, placeholder)
        case Llet(_, Lapp(Lvar(fn_name), Lapp(Lvar(param), inner)), body):
            # Self-application `(f (g e))`: f becomes a closure over g, evaluated lazily
            return evaluate(env.extend(fn_name, Closure(env, param, inner)), body)
        case Llet(name, bound, body):
            return evaluate(env.extend(name, evaluate(env, bound)), body)
        case Lhastype(inner, _):
            return evaluate(env, inner)
        case Lapp(fn, arg):
            head = force(evaluate(env, fn))
            if isinstance(head, Primitive) and not head.strict:
                value = Thunk(lambda: evaluate(env, arg))
            else:
                value = evaluate(env, arg)
            return apply(head, value, evaluate)
        case Lfun(param, body):
            return Closure(env, param, body)
        case _:
            raise PsilRuntimeError(f"Cannot evaluate: {expr!r}")


def evaluate_definition(
    env: Environment, name: str, expr: Lexp, *, recursive: bool = True
) -> tuple[PsilValue, Environment]:
    """Evaluate `expr` as the definition of `name`.

    When `recursive`, `name` is bound first as an empty slot, so closures
    created by `expr` that mention `name` see the finished value when they are
    called later. Otherwise `expr` sees `env` as it is, and a mention of `name`
    refers to its earlier binding. Returns the value and the environment
    extended with it.
    """
    scope = env.extend_slot(name) if recursive else env
    try:
        value = force(evaluate(scope, expr))
    except RecursionError:
        raise PsilRuntimeError(f"Evaluation of {name} did not terminate") from None
    if not recursive:
        return value, env.extend(name, value)
    scope.fill(name, value)
    return value, scope
