"""Declaration processing: the toplevel state machine.

The state threads the typing and value environments from one declaration to
the next, remembers a `(dec x T)` until its definition arrives, and collects
the results produced since the last flush.

    no pending  --Ldec x T-->  pending (x, T)
    pending     --Ldec ...-->  no pending (+ missing-definition entry), then
                               the new Ldec is processed again
    no pending  --Ldef x e-->  no pending (+ (value, synthesized type)), e sees
                               only earlier bindings
    pending     --Ldef _ e-->  no pending (+ (value, T)), bound as x
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Optional, Union

from psil import PsilValue
from psil.builtin.env_builtin import initial_envs
from psil.checking.checker import synthesize
from psil.errors import PsilMissingDefinition, PsilTypeError
from psil.evaluation.evaluator import evaluate_definition
from psil.types.environment import Environment
from psil.types.lexp import Decl, Ldec, Ldef
from psil.types.ltype import Ltype

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """Value and type of one processed definition."""
    name: str
    value: PsilValue
    ltype: Ltype


@dataclass(frozen=True)
class MissingDefinition:
    """Deferred error: `name` was declared but the next form was another declaration."""
    name: str

    def error(self) -> PsilMissingDefinition:
        return PsilMissingDefinition(self.name)


LogEntry = Union[Result, MissingDefinition]


@dataclass(frozen=True)
class ProcessingState:
    tenv: Environment
    venv: Environment
    pending: Optional[tuple[str, Ltype]] = None
    results: tuple[LogEntry, ...] = field(default_factory=tuple)

    @classmethod
    def initial(cls) -> ProcessingState:
        tenv, venv = initial_envs()
        return cls(tenv, venv)

    def log(self, entry: LogEntry) -> ProcessingState:
        return replace(self, results=self.results + (entry,))

    def flush(self) -> tuple[ProcessingState, tuple[LogEntry, ...]]:
        """Hand out the collected entries, oldest first, and clear the log."""
        return replace(self, results=()), self.results


def process_decl(state: ProcessingState, decl: Decl) -> ProcessingState:
    """Run one declaration through the state machine."""
    match decl, state.pending:
        case Ldec(name, ltype), None:
            logger.debug("declared %s : %s", name, ltype)
            return replace(state, pending=(name, ltype))

        case Ldec(), (missing, _):
            logger.debug("no definition for %s before next declaration", missing)
            state = replace(state, pending=None).log(MissingDefinition(missing))
            return process_decl(state, decl)

        case Ldef(name, expr), None:
            ltype = synthesize(state.tenv, expr)
            # Typed without `name`, so evaluated without it too
            value, venv = evaluate_definition(state.venv, name, expr, recursive=False)
            logger.debug("defined %s : %s", name, ltype)
            return replace(
                state, tenv=state.tenv.extend(name, ltype), venv=venv
            ).log(Result(name, value, ltype))

        case Ldef(_, expr), (name, declared):
            # The declared name is visible to its own definition
            tenv = state.tenv.extend(name, declared)
            actual = synthesize(tenv, expr)
            if actual != declared:
                raise PsilTypeError(
                    f"Incorrect type for the definition of: {name} "
                    f"(declared {declared}, found {actual})"
                )
            value, venv = evaluate_definition(state.venv, name, expr)
            logger.debug("defined %s : %s (declared)", name, declared)
            return ProcessingState(tenv, venv, None, state.results).log(
                Result(name, value, declared)
            )

        case _:
            raise TypeError(f"Not a declaration: {decl!r}")


def process_decls(
    state: ProcessingState, decls: Iterable[Decl]
) -> Iterator[tuple[ProcessingState, tuple[LogEntry, ...]]]:
    """Fold `process_decl` over `decls`, flushing the log after each one.

    Yields the state after each declaration together with the entries it
    produced, so callers can print results as soon as they exist.
    """
    for decl in decls:
        state, entries = process_decl(state, decl).flush()
        yield state, entries
    if state.pending is not None:
        logger.warning("declaration of %s has no definition", state.pending[0])
