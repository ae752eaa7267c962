"""Simulation driver: steps a board and watches for repeated states."""

from collections import OrderedDict, deque
from typing import Deque, Dict, Optional, Tuple

from .board import Board
from .cell import BorderOpt

MAX_REMEMBERED_STATES = 1000
HISTORY_LENGTH = 100

StateKey = Tuple[BorderOpt, bytes]


class GameOfLife:
    """Runs a board through generations.

    Every state the board passes through is remembered together with the
    generation it first appeared in. As soon as an advance lands on a
    remembered state the board is known to be periodic from then on, and
    the cycle start and length are recorded. Only the most recent
    ``max_states`` states are kept, so cycles longer than that go unnoticed.
    """

    def __init__(self, board: Board, max_states: int = MAX_REMEMBERED_STATES) -> None:
        """Initialize the game with a board.

        Args:
            board: The board to simulate
            max_states: How many distinct states to remember for cycle detection
        """
        self.board = board
        self.max_states = max_states
        self._generation = 0
        self._populations: Deque[int] = deque([board.population], maxlen=HISTORY_LENGTH)
        self._seen: "OrderedDict[StateKey, int]" = OrderedDict()
        self._cycle: Optional[Tuple[int, int]] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> int:
        return self.board.population

    @property
    def population_history(self) -> list:
        """Populations of the most recent generations, oldest first."""
        return list(self._populations)

    @property
    def cycle_detected(self) -> bool:
        return self._cycle is not None

    @property
    def cycle_start_generation(self) -> int:
        """First generation of the repeating stretch (0 if no cycle)."""
        return self._cycle[0] if self._cycle else 0

    @property
    def cycle_length(self) -> int:
        """Period of the repeating stretch (0 if no cycle)."""
        return self._cycle[1] if self._cycle else 0

    def _state_key(self) -> StateKey:
        return (self.board.border, self.board.cells.tobytes())

    def _remember(self, key: StateKey) -> None:
        if key in self._seen:
            return
        self._seen[key] = self._generation
        if len(self._seen) > self.max_states:
            self._seen.popitem(last=False)

    def step(self) -> None:
        """Advance the board one generation and check for a repeat."""
        if self._cycle is None:
            # Covers the starting state and any hand edits since the last step
            self._remember(self._state_key())

        self.board.advance()
        self._generation += 1
        self._populations.append(self.population)

        if self._cycle is None:
            key = self._state_key()
            first_seen = self._seen.get(key)
            if first_seen is None:
                self._remember(key)
            else:
                self._cycle = (first_seen, self._generation - first_seen)

    def advance(self, n: int) -> None:
        """Step n generations.

        Raises:
            ValueError: If n is negative
        """
        if n < 0:
            raise ValueError(f"Number of cycles must be non-negative, got {n}")
        for _ in range(n):
            self.step()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Step until the board dies out or repeats, or the limit is hit.

        Returns:
            Tuple of (generation, reason) with reason one of
            'extinction', 'cycle' or 'max_generations'
        """
        for _ in range(max_generations):
            self.step()
            if self.population == 0:
                return self._generation, "extinction"
            if self._cycle is not None:
                return self._generation, "cycle"

        return self._generation, "max_generations"

    def clear_cycle_detection(self) -> None:
        """Forget remembered states; call after editing the board by hand."""
        self._seen.clear()
        self._cycle = None

    def reset(self, clear_board: bool = True) -> None:
        """Start counting generations again from the board's current state.

        Args:
            clear_board: Whether to kill every cell first
        """
        if clear_board:
            self.board.clear()

        self._generation = 0
        self._populations.clear()
        self._populations.append(self.population)
        self.clear_cycle_detection()

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over the last window."""
        window = list(self._populations)[-window_size:]
        if len(window) < 2:
            return 0.0
        return (window[-1] - window[0]) / (len(window) - 1)

    def get_statistics(self) -> Dict:
        """Summarize the run so far."""
        board = self.board
        bbox = board.get_bounding_box()
        if bbox is None:
            box_size = (0, 0)
        else:
            box_size = (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1)

        return {
            "generation": self._generation,
            "population": self.population,
            "population_density": self.population / (board.width * board.height),
            "population_change_rate": self.get_population_change_rate(),
            "population_history": self.population_history,
            "cycle_detected": self.cycle_detected,
            "cycle_start_generation": self.cycle_start_generation,
            "cycle_length": self.cycle_length,
            "board_size": board.shape,
            "border": str(board.border),
            "bounding_box": bbox,
            "bounding_box_size": box_size,
            "bounding_box_area": box_size[0] * box_size[1],
        }
