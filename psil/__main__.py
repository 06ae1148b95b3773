"""Command-line driver: `psil FILE` runs a Psil program and prints its results."""

from __future__ import annotations

import argparse
import logging
import sys

from psil import __version__, config
from psil.debug_utils.pprint import render_error
from psil.errors import PsilError
from psil.interpreter import Interpreter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="psil", description="Type-check and evaluate a Psil program."
    )
    parser.add_argument("file", help="Psil source file to run")
    parser.add_argument("-v", "--verbose", action="store_true", help="log each declaration to stderr")
    parser.add_argument("--prelude", metavar="PATH", help="declarations to load before FILE")
    parser.add_argument("--no-prelude", action="store_true", help="ignore PSIL_PRELUDE_PATH")
    parser.add_argument("--color", action="store_true", help="colorize results and errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), config.get_recursion_limit()))

    try:
        if args.no_prelude:
            interp = Interpreter(prelude=None, color=args.color)
        elif args.prelude:
            with open(args.prelude, encoding="utf-8") as f:
                interp = Interpreter(prelude=f.read(), color=args.color)
        else:
            interp = Interpreter(color=args.color)

        for line in interp.run_file(args.file):
            print(line, flush=True)
    except (PsilError, OSError) as e:
        print(render_error(str(e), args.color), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
