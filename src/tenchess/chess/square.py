"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cache
from typing import Optional

from tenchess.core.exceptions import InvalidNotationError, InvalidSquareError

# The variant is played on a 10x10 board: files A-J, ranks 1-10
BOARD_SIZE = 10

# ASCII only: a letter followed by one or two digits
ALGEBRAIC_PATTERN = re.compile(r"([A-Z])([0-9]{1,2})")


@dataclass(frozen=True)
class Square:
    """Files are the columns (A = 1), ranks are the rows (1 = White's home rank)."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not is_within_bounds(self.file, self.rank):
            raise InvalidSquareError(
                f"Position out of bounds: file {self.file}, rank {self.rank}"
            )

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'A1' - 'J10' get converted to (1,1) - (10,10). Lower case is accepted as well."""
        notation = sq.strip().upper()
        match = ALGEBRAIC_PATTERN.fullmatch(notation)
        if match is None:
            raise InvalidNotationError(f"Invalid notation: {sq!r}")

        file_char, rank_str = match.groups()

        file = ord(file_char) - ord("A") + 1
        return cls(file, int(rank_str))

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('A') - 1)}{self.rank}"

    def offset(self, df: int, dr: int) -> Optional[Square]:
        """The square reached by stepping (df, dr) away, or None when that falls off the board."""
        file = self.file + df
        rank = self.rank + dr
        if not is_within_bounds(file, rank):
            return None
        return Square(file, rank)

    def __str__(self) -> str:
        return self.to_algebraic()


def is_within_bounds(file: int, rank: int) -> bool:
    return (1 <= file <= BOARD_SIZE) and (1 <= rank <= BOARD_SIZE)


@cache
def all_squares() -> tuple[Square, ...]:
    """Every square on the board, rank by rank starting at A1."""
    return tuple(
        Square(file, rank)
        for rank in range(1, BOARD_SIZE + 1)
        for file in range(1, BOARD_SIZE + 1)
    )
