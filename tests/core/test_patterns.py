"""Tests for the Pattern and PatternLibrary classes."""

from pathlib import Path

import pytest
from lifeboard.core.board import Board
from lifeboard.core.cell import BorderOpt
from lifeboard.core.game import GameOfLife
from lifeboard.core.patterns import Pattern, PatternLibrary, cells_from_rows

BOARDS_DIR = Path(__file__).parent.parent / "boards"


class TestPattern:
    """Test cases for the Pattern class."""

    def test_initialization(self):
        cells = [(0, 0), (1, 0), (2, 0)]
        pattern = Pattern("Blinker", cells, "Period-2 oscillator")

        assert pattern.name == "Blinker"
        assert pattern.cells == cells
        assert pattern.description == "Period-2 oscillator"
        assert pattern.metadata == {}

    def test_apply_to_board(self):
        board = Board(10, 10)
        pattern = Pattern("Blinker", [(0, 0), (1, 0), (2, 0)])

        assert pattern.apply_to_board(board) == 3
        assert board.is_alive(0, 0)
        assert board.is_alive(2, 0)
        assert board.population == 3

    def test_apply_with_offset(self):
        board = Board(10, 10)
        pattern = Pattern("Blinker", [(0, 0), (1, 0), (2, 0)])

        pattern.apply_to_board(board, offset_x=5, offset_y=3)

        assert board.is_alive(5, 3)
        assert board.is_alive(7, 3)
        assert not board.is_alive(0, 0)

    def test_apply_out_of_bounds(self):
        """Cells that fall off the board are skipped."""
        board = Board(5, 5)
        pattern = Pattern("Blinker", [(0, 0), (1, 0), (2, 0)])

        assert pattern.apply_to_board(board, offset_x=3, offset_y=0) == 2
        assert board.population == 2

    def test_apply_without_clear(self):
        board = Board(5, 5)
        board.set(4, 4, True)

        Pattern("Dot", [(0, 0)]).apply_to_board(board, clear=False)
        assert board.population == 2

        Pattern("Dot", [(0, 0)]).apply_to_board(board)
        assert board.population == 1

    def test_bounding_box_and_size(self):
        pattern = Pattern("Test", [(1, 2), (4, 3), (2, 5)])
        assert pattern.get_bounding_box() == (1, 2, 4, 5)
        assert pattern.get_size() == (4, 4)

        assert Pattern("Empty", []).get_bounding_box() == (0, 0, 0, 0)

    def test_normalize(self):
        pattern = Pattern("Test", [(3, 4), (5, 4), (4, 6)], metadata={"period": 1})
        normalized = pattern.normalize()

        assert normalized.cells == [(0, 0), (2, 0), (1, 2)]
        assert normalized.metadata == {"period": 1}
        assert normalized.metadata is not pattern.metadata
        assert pattern.cells == [(3, 4), (5, 4), (4, 6)]

    def test_cells_from_rows(self):
        assert cells_from_rows(["_#_", "__#", "###"]) == [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]
        assert cells_from_rows(["___"]) == []

    def test_category(self):
        assert Pattern("Dot", [(0, 0)]).category == "Custom"
        assert Pattern("Dot", [(0, 0)], metadata={"category": "Tiny"}).category == "Tiny"

    def test_to_board(self):
        pattern = Pattern("Offset Blinker", [(3, 5), (4, 5), (5, 5)])
        board = pattern.to_board(BorderOpt.LOOP, margin=2)

        assert board.shape == (7, 5)
        assert board.border is BorderOpt.LOOP
        assert board.get_bounding_box() == (2, 2, 4, 2)

    def test_to_board_matches_file(self):
        """A pattern board written out reads back as the same board."""
        board = PatternLibrary().get_pattern("Glider").to_board()
        assert board.to_text() == "empty\n_#_\n__#\n###\n"
        assert Board.from_text(board.to_text()) == board

    def test_from_board(self):
        board = Board(6, 4, BorderOpt.LOOP)
        board.set(1, 1, True)
        board.set(3, 2, True)

        pattern = Pattern.from_board(board, "Pair", "Two cells")

        assert pattern.name == "Pair"
        assert sorted(pattern.cells) == [(1, 1), (3, 2)]
        assert pattern.metadata["population"] == 2
        assert pattern.metadata["border"] == "loop"
        assert pattern.metadata["source_board_size"] == (6, 4)


class TestPatternLibrary:
    """Test cases for the PatternLibrary class."""

    def test_builtin_patterns(self):
        library = PatternLibrary()
        names = library.list_patterns()

        for name in ["Block", "Blinker", "Glider", "Pulsar", "R-pentomino", "Acorn"]:
            assert name in names

    def test_get_pattern(self):
        library = PatternLibrary()
        glider = library.get_pattern("Glider")

        assert glider is not None
        assert len(glider.cells) == 5
        assert library.get_pattern("Nothing") is None

    def test_categories(self):
        library = PatternLibrary()
        categories = library.get_patterns_by_category()

        assert "Block" in categories["Still Life"]
        assert "Pulsar" in categories["Oscillators"]
        assert "Custom" not in categories

        library.add_pattern(Pattern("Mine", [(0, 0)]))
        assert library.get_patterns_by_category()["Custom"] == ["Mine"]

    def test_pulsar(self):
        """Pulsar is a 13x13 period-3 oscillator."""
        pulsar = PatternLibrary().get_pattern("Pulsar")
        assert len(pulsar.cells) == 48
        assert pulsar.get_size() == (13, 13)

        board = Board(17, 17)
        pulsar.apply_to_board(board, 2, 2)
        game = GameOfLife(board)

        assert game.run_until_stable(20)[1] == "cycle"
        assert game.cycle_length == 3

    @pytest.mark.parametrize("name", ["Block", "Beehive", "Loaf"])
    def test_still_lifes_are_still(self, name):
        board = Board(8, 8)
        PatternLibrary().get_pattern(name).apply_to_board(board, 2, 2)
        before = board.copy()

        board.advance()
        assert board == before

    def test_load_board_file(self):
        library = PatternLibrary()
        pattern = library.load_board_file(BOARDS_DIR / "glider.txt")

        assert pattern.name == "glider"
        assert sorted(pattern.cells) == sorted([(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)])
        assert library.get_pattern("glider") is pattern

    def test_load_board_file_named(self):
        library = PatternLibrary()
        pattern = library.load_board_file(str(BOARDS_DIR / "blinker-loop.txt"), name="Edge Blinker")

        # Normalized to the origin
        assert sorted(pattern.cells) == [(0, 0), (0, 1), (0, 2)]
        assert "Edge Blinker" in library.list_patterns()

    def test_load_bad_board_file(self):
        with pytest.raises(ValueError):
            PatternLibrary().load_board_file(BOARDS_DIR / "bad-row.txt")
