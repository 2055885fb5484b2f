from __future__ import annotations

"""Seasonal calendar: 4 turns make one year, turn 1 is Spring of year 1."""

from typing import Literal, Tuple

Season = Literal["SPRING", "SUMMER", "AUTUMN", "WINTER"]

SEASONS: Tuple[Season, ...] = ("SPRING", "SUMMER", "AUTUMN", "WINTER")
TURNS_PER_YEAR = len(SEASONS)


def _require_turn(turn: int) -> int:
    t = int(turn)
    if t < 1:
        raise ValueError(f"turn must be >= 1 (got {turn!r})")
    return t


def turn_in_year(turn: int) -> int:
    """1..4 within the current year."""
    return ((_require_turn(turn) - 1) % TURNS_PER_YEAR) + 1


def year_of(turn: int) -> int:
    return ((_require_turn(turn) - 1) // TURNS_PER_YEAR) + 1


def season_of(turn: int) -> Season:
    return SEASONS[turn_in_year(turn) - 1]


def is_annual_refresh(turn: int) -> bool:
    """True on the first turn of every year after the first."""
    return _require_turn(turn) > 1 and turn_in_year(turn) == 1


def display(turn: int) -> str:
    return f"{season_of(turn).title()}, Year {year_of(turn)}"
