"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

INT_MAX = 2_147_483_647

_WHITESPACE = frozenset("\t\n\v\f\r ")
_DIGITS = frozenset("0123456789")

INVALID_ARGUMENTS = "Error: Invalid argumets"
USAGE = (
    "Usage: ./philo num_philos time_to_die time_to_eat "
    "time_to_sleep [meals_required]"
)


class ArgumentError(ValueError):
    """Raised when the simulation arguments are missing or malformed."""

    def __init__(self, message: str = INVALID_ARGUMENTS) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class Settings:
    """Validated simulation parameters; times are in milliseconds."""

    num_philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals_required: int | None = None


def parse_positive_int(text: str) -> int:
    """Parse a strictly positive integer no larger than ``INT_MAX``.

    Leading whitespace and a single ``+`` are accepted; a minus sign,
    trailing characters, zero and overflow are rejected.
    """
    rest = text.lstrip("".join(_WHITESPACE))
    if rest.startswith("-"):
        raise ArgumentError()
    if rest.startswith("+"):
        rest = rest[1:]
    if not rest:
        raise ArgumentError()

    value = 0
    for char in rest:
        if char not in _DIGITS:
            raise ArgumentError()
        value = value * 10 + int(char)
        if value > INT_MAX:
            raise ArgumentError()

    if value == 0:
        raise ArgumentError()
    return value


def parse_args(args: Sequence[str]) -> Settings:
    """Build :class:`Settings` from the four or five positional arguments."""
    if len(args) not in (4, 5):
        raise ArgumentError(USAGE)
    num_philosophers, time_to_die, time_to_eat, time_to_sleep = (
        parse_positive_int(arg) for arg in args[:4]
    )
    meals_required = parse_positive_int(args[4]) if len(args) == 5 else None
    return Settings(
        num_philosophers=num_philosophers,
        time_to_die=time_to_die,
        time_to_eat=time_to_eat,
        time_to_sleep=time_to_sleep,
        meals_required=meals_required,
    )