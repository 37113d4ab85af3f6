"""Command-line parameters of the dining philosophers simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

INT_MAX = 2**31 - 1
MIN_TIME_MS = 60
MAX_PHILOSOPHERS = 200

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"


class ConfigError(ValueError):
    """Raised when the simulation parameters are missing or invalid."""


@dataclass(frozen=True)
class SimulationConfig:
    """Validated parameters of one simulation run; times are in milliseconds."""

    num_philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    must_eat: Optional[int] = None


def parse_number(text: str) -> int:
    """Parse an optionally signed decimal integer.

    Leading whitespace is skipped; anything after the digits is an error.
    An empty digit sequence yields 0.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("+", "-"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = ""
    for char in rest:
        if char not in _DIGITS:
            break
        digits += char
    if len(digits) != len(rest):
        raise ConfigError(f"not a number: {text!r}")
    return sign * int(digits or "0")


def parse_config(args: Sequence[str]) -> SimulationConfig:
    """Build a validated configuration from four or five argument strings.

    The arguments are the number of philosophers, the time to die, the time
    to eat, the time to sleep and, optionally, how many meals each
    philosopher must eat.
    """
    if len(args) not in (4, 5):
        raise ConfigError("Wrong amount of arguments!")

    num, die, eat, sleep = (parse_number(arg) for arg in args[:4])
    must_eat = parse_number(args[4]) if len(args) == 5 else None

    if must_eat is not None and must_eat <= 0:
        raise ConfigError("number of meals must be positive")
    if num <= 0:
        raise ConfigError("number of philosophers must be positive")
    if min(die, eat, sleep) < MIN_TIME_MS:
        raise ConfigError(f"times must be at least {MIN_TIME_MS} ms")
    if max(num, die, eat, sleep, must_eat or 0) > INT_MAX:
        raise ConfigError("value out of range")
    if num > MAX_PHILOSOPHERS:
        raise ConfigError(f"at most {MAX_PHILOSOPHERS} philosophers allowed")

    return SimulationConfig(
        num_philosophers=num,
        time_to_die=die,
        time_to_eat=eat,
        time_to_sleep=sleep,
        must_eat=must_eat,
    )