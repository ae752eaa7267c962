"""Named patterns, written in the same '#'/'_' rows as board files."""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .board import Board
from .cell import FILE_LIVE_CHAR, BorderOpt

Coord = Tuple[int, int]

# name -> (category, description, rows)
BUILTIN_PATTERNS: Dict[str, Tuple[str, str, Tuple[str, ...]]] = {
    "Block": ("Still Life", "2x2 still life", ("##", "##")),
    "Beehive": ("Still Life", "Six-cell still life", ("_##_", "#__#", "_##_")),
    "Loaf": ("Still Life", "Seven-cell still life", ("_##_", "#__#", "_#_#", "__#_")),
    "Blinker": ("Oscillators", "Period-2 oscillator", ("###",)),
    "Toad": ("Oscillators", "Period-2 oscillator", ("_###", "###_")),
    "Beacon": ("Oscillators", "Period-2 oscillator", ("##__", "#___", "___#", "__##")),
    "Pulsar": (
        "Oscillators",
        "Period-3 oscillator",
        (
            "__###___###__",
            "_____________",
            "#____#_#____#",
            "#____#_#____#",
            "#____#_#____#",
            "__###___###__",
            "_____________",
            "__###___###__",
            "#____#_#____#",
            "#____#_#____#",
            "#____#_#____#",
            "_____________",
            "__###___###__",
        ),
    ),
    "Glider": ("Spaceships", "Smallest spaceship, period-4", ("_#_", "__#", "###")),
    "Lightweight Spaceship": ("Spaceships", "LWSS, period-4", ("#__#_", "____#", "#___#", "_####")),
    "R-pentomino": ("Methuselahs", "Stabilizes after 1103 generations", ("_##", "##_", "_#_")),
    "Diehard": ("Methuselahs", "Dies after exactly 130 generations", ("______#_", "##______", "_#___###")),
    "Acorn": ("Methuselahs", "Takes 5206 generations to stabilize", ("_#_____", "___#___", "##__###")),
}


def cells_from_rows(rows: Iterable[str]) -> List[Coord]:
    """Coordinates of the live characters in board-file rows."""
    return [(x, y) for y, row in enumerate(rows) for x, char in enumerate(row) if char == FILE_LIVE_CHAR]


class Pattern:
    """A named set of live cells, positioned relative to an origin."""

    def __init__(
        self,
        name: str,
        cells: List[Coord],
        description: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.name = name
        self.cells = cells
        self.description = description
        self.metadata = metadata or {}

    @property
    def category(self) -> str:
        return self.metadata.get("category", "Custom")

    def apply_to_board(self, board: Board, offset_x: int = 0, offset_y: int = 0, clear: bool = True) -> int:
        """Stamp the pattern onto a board.

        Cells that land outside the board are dropped.

        Returns:
            Number of cells that landed on the board
        """
        if clear:
            board.clear()

        on_board = [
            (x + offset_x, y + offset_y)
            for x, y in self.cells
            if 0 <= x + offset_x < board.width and 0 <= y + offset_y < board.height
        ]
        for x, y in on_board:
            board.set(x, y, True)
        return len(on_board)

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """(min_x, min_y, max_x, max_y); all zeros for an empty pattern."""
        if not self.cells:
            return (0, 0, 0, 0)
        xs = [x for x, _ in self.cells]
        ys = [y for _, y in self.cells]
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def normalize(self) -> "Pattern":
        """Copy of the pattern shifted so its bounding box starts at (0, 0)."""
        min_x, min_y, _, _ = self.get_bounding_box()
        shifted = [(x - min_x, y - min_y) for x, y in self.cells]
        return Pattern(self.name, shifted, self.description, dict(self.metadata))

    def to_board(self, border: BorderOpt = BorderOpt.EMPTY, margin: int = 0) -> Board:
        """Smallest board holding the pattern, plus `margin` dead cells per side."""
        width, height = self.get_size()
        board = Board(width + 2 * margin, height + 2 * margin, border)
        min_x, min_y, _, _ = self.get_bounding_box()
        self.apply_to_board(board, margin - min_x, margin - min_y)
        return board

    @classmethod
    def from_board(cls, board: Board, name: str, description: str = "") -> "Pattern":
        """Collect the live cells of a board into a pattern."""
        cells = [(x, y) for y in range(board.height) for x in range(board.width) if board.is_alive(x, y)]
        metadata = {
            "source_board_size": board.shape,
            "border": str(board.border),
            "population": len(cells),
        }
        return cls(name, cells, description, metadata)


class PatternLibrary:
    """Built-in patterns plus any read from board files."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        for name, (category, description, rows) in BUILTIN_PATTERNS.items():
            self.add_pattern(Pattern(name, cells_from_rows(rows), description, {"category": category}))

    def add_pattern(self, pattern: Pattern) -> None:
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        return list(self._patterns)

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Pattern names grouped by category, in insertion order."""
        categories: Dict[str, List[str]] = {}
        for name, pattern in self._patterns.items():
            categories.setdefault(pattern.category, []).append(name)
        return categories

    def load_board_file(self, path: Union[str, Path], name: Optional[str] = None) -> Pattern:
        """Read a board file into a normalized pattern and register it.

        Args:
            path: Board file to read
            name: Pattern name (defaults to the file stem)

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not a valid board
        """
        path = Path(path)
        board = Board.from_file(path)
        pattern = Pattern.from_board(board, name or path.stem, f"Loaded from {path.name}").normalize()
        self.add_pattern(pattern)
        return pattern
