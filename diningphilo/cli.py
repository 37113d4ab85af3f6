"""Command-line entry point of the dining philosophers simulation."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .config import ConfigError, parse_config
from .simulation import Simulation


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation with arguments from the command line.

    Usage: number_of_philosophers time_to_die time_to_eat time_to_sleep
    [number_of_times_each_philosopher_must_eat]
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (4, 5):
        print("Wrong amount of arguments!")
        return 1
    try:
        config = parse_config(args)
    except ConfigError:
        print("Failure while initializing")
        return 1
    Simulation(config, sys.stdout).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())