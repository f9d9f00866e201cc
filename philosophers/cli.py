"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from philosophers.args import ArgumentError, parse_args
from philosophers.simulation import Simulation

ERR_THREAD_CREATION = "Error: Failed to create thread"


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the arguments, run the simulation and return an exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_args(args)
    except ArgumentError as error:
        print(error.message, file=sys.stderr)
        return 1
    try:
        Simulation(settings).run()
    except RuntimeError:
        print(ERR_THREAD_CREATION, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())