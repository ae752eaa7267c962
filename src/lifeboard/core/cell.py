"""Cell states and border policies."""

from enum import Enum
from typing import Optional

FILE_LIVE_CHAR = "#"
FILE_DEAD_CHAR = "_"


class Cell(Enum):
    """State of a single cell."""

    ALIVE = 1
    DEAD = 0

    @classmethod
    def from_bool(cls, alive: bool) -> "Cell":
        return cls.ALIVE if alive else cls.DEAD

    @classmethod
    def from_char(cls, char: str) -> "Cell":
        """Map a board file character to a cell.

        Anything other than the live character is treated as dead.
        """
        return cls.ALIVE if char == FILE_LIVE_CHAR else cls.DEAD

    def to_char(self) -> str:
        return FILE_LIVE_CHAR if self is Cell.ALIVE else FILE_DEAD_CHAR

    def __bool__(self) -> bool:
        return self is Cell.ALIVE

    def __str__(self) -> str:
        return "▓▓" if self is Cell.ALIVE else "░░"


class BorderOpt(Enum):
    """How positions outside the board are treated when counting neighbors.

    - SOLID: the border counts as alive
    - EMPTY: the border counts as dead
    - LOOP: the board wraps around to the opposite side
    """

    SOLID = "solid"
    EMPTY = "empty"
    LOOP = "loop"

    @classmethod
    def parse(cls, text: str) -> Optional["BorderOpt"]:
        """Parse a border keyword.

        Args:
            text: Keyword such as "solid", "empty" or "loop"

        Returns:
            Matching BorderOpt or None if the keyword is unknown
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value
