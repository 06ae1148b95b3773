"""Application engine for Psil.

Function values come in two kinds:
- Closure: user functions; the body runs in the captured environment extended
  with the parameter.
- Primitive: built-ins; called directly with the argument value.

Keeping this in one place means the evaluator and anything else that calls
function values share one set of rules.
"""

from __future__ import annotations

from typing import Callable

from psil import PsilValue
from psil.errors import PsilRuntimeError
from psil.types.environment import Environment
from psil.types.lexp import Lexp
from psil.types.values import Closure, Primitive, force

EvaluatorFn = Callable[[Environment, Lexp], PsilValue]


def apply_closure(fn: Closure, arg: PsilValue, evaluate_fn: EvaluatorFn) -> PsilValue:
    """Run the closure body with its parameter bound to `arg`."""
    return evaluate_fn(fn.env.extend(fn.param, force(arg)), fn.body)


def apply(head: PsilValue, arg: PsilValue, evaluate_fn: EvaluatorFn) -> PsilValue:
    """Apply a Closure or Primitive to one argument and return a forced value.

    Raises PsilRuntimeError for anything else.
    """
    head = force(head)
    if isinstance(head, Primitive):
        return force(head(arg))
    if isinstance(head, Closure):
        return apply_closure(head, arg, evaluate_fn)
    raise PsilRuntimeError(f"Invalid operation: cannot apply {head}")
