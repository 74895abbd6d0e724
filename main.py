# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, TextIO

from config_reader import process, read_config
from debug import Debug
from errors import EnigmaError

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Settings:
    """Runtime switches for one run of the simulator."""

    block: int = 5                   # output group size
    debug: List[str] = field(default_factory=list)   # components to log
    log_file: str | None = None


# ────────────────────────────────────────────────────────────────────────
#  1. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt messages with a rotor machine")
    p.add_argument("config", metavar="CONFIG", help="Machine configuration file.")
    p.add_argument("input", metavar="INPUT", nargs="?", help="Message file. Default: standard input.")
    p.add_argument("output", metavar="OUTPUT", nargs="?", help="Output file. Default: standard output.")
    p.add_argument("--block", type=int, default=5, help="Symbols per output group. Default: 5")
    p.add_argument(
        "--debug", metavar="COMPONENT", action="append", default=[],
        help=f"Log a component ({', '.join(debug.status())} or all). Repeatable.",
    )
    p.add_argument("--log-file", metavar="FILE", help="Also write debug log to FILE.")
    return p.parse_args(argv)


def _read(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError:
        raise EnigmaError(f"could not open {path}") from None


def _apply_debug(settings: Settings) -> None:
    if settings.log_file:
        Debug.add_file(settings.log_file)
    for comp in settings.debug:
        if comp == "all":
            debug.enable_all()
        elif comp in debug.status():
            debug.enable(comp)
        else:
            raise EnigmaError(f"No such debug component: {comp!r}")


def run(config_text: str, messages: str, out: TextIO, settings: Settings) -> None:
    """Configure a machine from *config_text* and convert *messages*."""
    machine = read_config(config_text)
    for line in process(machine, messages.splitlines(), settings.block):
        print(line, file=out)


# ────────────────────────────────────────────────────────────────────────
#  2. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings(block=args.block, debug=args.debug, log_file=args.log_file)

    try:
        if settings.block < 1:
            raise EnigmaError("--block must be at least 1")
        _apply_debug(settings)
        config_text = _read(args.config)
        messages = _read(args.input) if args.input else sys.stdin.read()

        if args.output:
            try:
                out = open(args.output, "w", encoding="utf-8")
            except OSError:
                raise EnigmaError(f"could not open {args.output}") from None
            with out:
                run(config_text, messages, out, settings)
        else:
            run(config_text, messages, sys.stdout, settings)
    except EnigmaError as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
