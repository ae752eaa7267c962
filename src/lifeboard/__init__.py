"""Conway's Game of Life on a bordered board."""

__version__ = "0.1.0"

from .core.cell import BorderOpt, Cell
from .core.board import Board
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary

__all__ = ["BorderOpt", "Cell", "Board", "GameOfLife", "Pattern", "PatternLibrary"]
