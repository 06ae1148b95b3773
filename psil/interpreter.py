from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Literal

from psil import config
from psil.debug_utils.pprint import render_result
from psil.elaboration.elaborator import elaborate_program
from psil.errors import PsilNestingError
from psil.evaluation.processor import MissingDefinition, ProcessingState, Result, process_decls
from psil.reader.parser import read_all

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Runs Psil programs declaration by declaration.
    Keeps the processing state (environments and any pending declaration)
    across calls, so later programs see earlier definitions.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        color: bool = False,
    ):
        self.state: ProcessingState = ProcessingState.initial()
        self.color = color

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            path = config.get_prelude_path()
            if path is not None:
                logger.debug("loading prelude from %s", path)
                self.eval_prelude(path.read_text(encoding="utf-8"))
        elif prelude:
            self.eval_prelude(prelude)

    def _entries(self, code: str) -> Iterator[Result]:
        decls = elaborate_program(read_all(code))
        try:
            for state, entries in process_decls(self.state, decls):
                self.state = state
                for entry in entries:
                    if isinstance(entry, MissingDefinition):
                        raise entry.error()
                    yield entry
        except RecursionError:
            raise PsilNestingError() from None

    def eval_prelude(self, code: str) -> None:
        """Process `code` for its definitions only; nothing is printed."""
        for _ in self._entries(code):
            pass

    def eval(self, code: str) -> list[Result]:
        """Process every declaration in `code` and return the results in order."""
        return list(self._entries(code))

    def run(self, code: str) -> Iterator[str]:
        """Yield one `  <value> : <type>` line per definition, as each completes.

        A fatal error is raised after the lines of earlier declarations have
        been yielded.
        """
        for result in self._entries(code):
            try:
                line = render_result(result.value, result.ltype, self.color)
            except RecursionError:
                raise PsilNestingError() from None
            yield line

    def run_file(self, path: str | Path) -> Iterator[str]:
        code = Path(path).read_text(encoding="utf-8", errors="replace")
        return self.run(code)
