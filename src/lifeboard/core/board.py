"""Board data structure for Conway's Game of Life."""

from pathlib import Path
from typing import Optional, Tuple, Union
import numpy as np
import torch
import torch.nn.functional as F

from .cell import BorderOpt, Cell

DEFAULT_BOARD_SIZE = 10
DEFAULT_BORDER = BorderOpt.EMPTY


class Board:
    """A 2D board of cells plus the policy used at its border.

    Cells are stored in a numpy array indexed ``[x, y]`` where x is the
    column and y the row. Neighbor counts for the whole board are computed
    with a PyTorch convolution, with the border policy expressed as padding.
    """

    def __init__(
        self,
        width: int = DEFAULT_BOARD_SIZE,
        height: int = DEFAULT_BOARD_SIZE,
        border: BorderOpt = DEFAULT_BORDER,
    ) -> None:
        """Initialize a new board with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows
            border: Border behavior used when counting neighbors

        Raises:
            ValueError: If width or height is not a positive integer
        """
        for size in (width, height):
            if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size <= 0:
                raise ValueError(f"Board dimensions must be positive integers, got {width!r}x{height!r}")

        width, height = int(width), int(height)

        self.width = width
        self.height = height
        self.border = border
        self._cells = np.zeros((width, height), dtype=np.int8)

        # Reused for every convolution; PyTorch expects (height, width)
        self._torch_input = torch.zeros(1, 1, height, width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @classmethod
    def square(cls, size: int = DEFAULT_BOARD_SIZE, border: BorderOpt = BorderOpt.SOLID) -> "Board":
        """Create a fixed-size square board (solid border by default)."""
        return cls(size, size, border)

    @property
    def cells(self) -> np.ndarray:
        """Get the current cell array."""
        return self._cells

    @property
    def shape(self) -> Tuple[int, int]:
        """Get board dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.sum(self._cells > 0))

    def _check_bounds(self, x: int, y: int) -> None:
        if not 0 <= x < self.width:
            raise IndexError(f"out of bounds: width is {self.width} but x is {x}")
        if not 0 <= y < self.height:
            raise IndexError(f"out of bounds: height is {self.height} but y is {y}")

    def get(self, x: int, y: int) -> Cell:
        """Get the cell at column x, row y.

        Raises:
            IndexError: If x or y is out of range
        """
        self._check_bounds(x, y)
        return Cell.from_bool(bool(self._cells[x, y]))

    def set(self, x: int, y: int, cell: Union[Cell, bool]) -> None:
        """Set the cell at column x, row y.

        Args:
            x: Column coordinate
            y: Row coordinate
            cell: New state, either a Cell or a bool

        Raises:
            IndexError: If x or y is out of range
        """
        self._check_bounds(x, y)
        self._cells[x, y] = 1 if cell else 0

    def is_alive(self, x: int, y: int) -> bool:
        return bool(self.get(x, y))

    def toggle(self, x: int, y: int) -> Cell:
        """Flip a cell's state and return the new state."""
        new_state = Cell.DEAD if self.get(x, y) else Cell.ALIVE
        self.set(x, y, new_state)
        return new_state

    def clear(self) -> None:
        """Set every cell dead."""
        self._cells.fill(0)

    def randomize(self, probability: float = 0.1, seed: Optional[int] = None) -> None:
        """Randomly populate the board.

        Args:
            probability: Chance each cell will be alive (0.0 to 1.0)
            seed: Optional seed for a reproducible layout
        """
        rng = np.random.default_rng(seed)
        mask = rng.random((self.width, self.height)) < probability
        self._cells[mask] = 1
        self._cells[~mask] = 0

    def copy(self) -> "Board":
        """Return an independent copy of this board."""
        other = Board(self.width, self.height, self.border)
        other._cells[:] = self._cells
        return other

    def live_neighbor_count(self, x: int, y: int) -> int:
        """Count living neighbors of a single cell.

        Positions past the edge are resolved by the border policy.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8)
        """
        self._check_bounds(x, y)

        count = 0
        for dx in [-1, 0, 1]:
            for dy in [-1, 0, 1]:
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy

                if self.border is BorderOpt.LOOP:
                    count += int(self._cells[nx % self.width, ny % self.height])
                elif 0 <= nx < self.width and 0 <= ny < self.height:
                    count += int(self._cells[nx, ny])
                elif self.border is BorderOpt.SOLID:
                    count += 1

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count living neighbors for every cell in one convolution.

        Returns:
            Array of neighbor counts indexed [x, y]
        """
        self._torch_input[0, 0] = torch.from_numpy((self._cells.T > 0).astype(np.float32))

        if self.border is BorderOpt.LOOP:
            padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="circular")
        else:
            fill = 1.0 if self.border is BorderOpt.SOLID else 0.0
            padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="constant", value=fill)

        neighbors = F.conv2d(padded, self._torch_kernel)

        # Back to numpy, transposed to (width, height)
        return neighbors[0, 0].round().numpy().astype(np.int8).T

    def should_live(self, x: int, y: int) -> bool:
        """Whether the cell at (x, y) is alive in the next generation."""
        count = self.live_neighbor_count(x, y)
        if count == 3:
            return True
        if count == 2:
            return self.is_alive(x, y)
        return False

    def advance(self) -> int:
        """Advance the board by one generation.

        Returns:
            Number of cells that changed state
        """
        neighbor_counts = self.count_all_neighbors()
        alive = self._cells > 0

        next_alive = (neighbor_counts == 3) | (alive & (neighbor_counts == 2))
        changed = int(np.count_nonzero(next_alive != alive))

        self._cells[:] = next_alive.astype(np.int8)
        return changed

    def advance_n(self, n: int) -> None:
        """Advance the board by n generations.

        Raises:
            ValueError: If n is negative
        """
        if n < 0:
            raise ValueError(f"Number of cycles must be non-negative, got {n}")
        for _ in range(n):
            self.advance()

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        living_coords = np.where(self._cells > 0)
        if len(living_coords[0]) == 0:
            return None

        min_x, max_x = int(living_coords[0].min()), int(living_coords[0].max())
        min_y, max_y = int(living_coords[1].min()), int(living_coords[1].max())

        return (min_x, min_y, max_x, max_y)

    def to_text(self) -> str:
        """Serialize the board in the board file format."""
        lines = [str(self.border)]
        for y in range(self.height):
            lines.append("".join(self.get(x, y).to_char() for x in range(self.width)))
        return "\n".join(lines) + "\n"

    def save(self, path: Union[str, Path]) -> None:
        """Write the board to a text file."""
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_text())

    @classmethod
    def from_text(cls, text: str) -> "Board":
        """Build a board from the board file format.

        The first line names the border option (``solid``, ``empty`` or
        ``loop``). Each following line is a row of ``#`` (alive) and any
        other character (dead). Blank lines are ignored.

        Args:
            text: Board file contents

        Returns:
            New Board instance

        Raises:
            ValueError: If there are no rows or the rows differ in length
        """
        lines = text.splitlines()
        if not lines:
            raise ValueError("Board text is empty")

        header = lines[0]
        border = BorderOpt.parse(header)
        if border is None:
            print(f"Warning: Unknown border option '{header.strip()}', using '{DEFAULT_BORDER}'")
            border = DEFAULT_BORDER

        rows = []
        width = 0
        for line in lines[1:]:
            line = line.strip()
            if not line:
                continue
            if not rows:
                width = len(line)
            elif len(line) != width:
                raise ValueError(f"row {len(rows)} is length {len(line)}, expected {width}")
            rows.append(line)

        if not rows:
            raise ValueError("Board text has no rows")

        board = cls(width, len(rows), border)
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                board.set(x, y, Cell.from_char(char))

        return board

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Board":
        """Load a board from a text file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file contents are malformed
        """
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_text(f.read())

    def __eq__(self, other: object) -> bool:
        """Check if two boards are equal."""
        if not isinstance(other, Board):
            return False
        return (
            self.shape == other.shape
            and self.border == other.border
            and np.array_equal(self._cells, other._cells)
        )

    def __repr__(self) -> str:
        return (
            f"Board(width={self.width}, height={self.height}, "
            f"border={self.border}, population={self.population})"
        )

    def __str__(self) -> str:
        """Render each row on its own line, two characters per cell."""
        result = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                row.append(str(self.get(x, y)))
            result.append("".join(row) + "\n")
        return "".join(result)
