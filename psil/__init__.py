# Core type aliases for Psil's data model.
# Symbolic expressions are built from Nil, Pair, Symbol and plain Python ints
# (see psil.types.sexp). Runtime values are plain ints, Closures, Primitives
# and, transiently, Thunks (see psil.types.values).
#
# Naming guidance:
# - SExpression: reader/elaborator code that handles surface syntax.
# - PsilValue:   evaluator/runtime code that handles evaluated values.

from typing import Any, Callable

# Runtime value alias
PsilValue = Any
# Surface syntax alias
SExpression = Any

# Curried body of a primitive operation: takes one value, returns one value
PrimitiveFn = Callable[[PsilValue], PsilValue]

__version__ = "0.1.0"
