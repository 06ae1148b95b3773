"""Text renderings of symbolic expressions, types, values and result lines."""

from psil import SExpression, PsilValue
from psil.types.ltype import Ltype
from psil.types.nil import Nil
from psil.types.sexp import Pair
from psil.types.values import Closure, Primitive, force

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_VALUE = "\033[92m"
COLOR_TYPE = "\033[94m"
COLOR_ERROR = "\033[91m"


def render_sexp(sexp: SExpression) -> str:
    """Surface syntax for `sexp`, readable back by psil.reader.parser.read.

    The left spine of a pair chain holds the list elements in reverse; it
    bottoms out in Nil for a proper list and in any other atom for a dotted one.
    """
    if sexp is Nil:
        return "()"
    if not isinstance(sexp, Pair):
        return str(sexp)
    items = []
    node = sexp
    while isinstance(node, Pair):
        items.append(node.right)
        node = node.left
    items.reverse()
    body = " ".join(render_sexp(item) for item in items)
    if node is Nil:
        return f"({body})"
    return f"({render_sexp(node)} . {body})"


def render_type(ltype: Ltype) -> str:
    return str(ltype)


def render_value(value: PsilValue) -> str:
    value = force(value)
    if isinstance(value, Closure):
        return "<closure>"
    if isinstance(value, Primitive):
        return "<function>"
    return str(value)


def render_result(value: PsilValue, ltype: Ltype, color: bool = False) -> str:
    """One output line, `  <value> : <type>`."""
    v, t = render_value(value), render_type(ltype)
    if color:
        v = f"{COLOR_VALUE}{v}{RESET}"
        t = f"{COLOR_TYPE}{t}{RESET}"
    return f"  {v} : {t}"


def render_error(message: str, color: bool = False) -> str:
    text = f"error: {message}"
    return f"{COLOR_ERROR}{text}{RESET}" if color else text
