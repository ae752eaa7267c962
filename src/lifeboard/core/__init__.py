"""Core board and simulation logic."""

from .cell import BorderOpt, Cell
from .board import Board
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary

__all__ = ["BorderOpt", "Cell", "Board", "GameOfLife", "Pattern", "PatternLibrary"]
