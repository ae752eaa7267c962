"""Tests for Cell and BorderOpt."""

from lifeboard.core.cell import BorderOpt, Cell


class TestCell:
    """Test cases for the Cell enum."""

    def test_truthiness(self):
        assert Cell.ALIVE
        assert not Cell.DEAD

    def test_from_bool(self):
        assert Cell.from_bool(True) is Cell.ALIVE
        assert Cell.from_bool(False) is Cell.DEAD

    def test_display(self):
        """Each cell renders two characters wide."""
        assert str(Cell.ALIVE) == "▓▓"
        assert str(Cell.DEAD) == "░░"

    def test_file_characters(self):
        """'#' is alive and every other character is dead."""
        assert Cell.from_char("#") is Cell.ALIVE
        assert Cell.from_char("_") is Cell.DEAD
        assert Cell.from_char("x") is Cell.DEAD
        assert Cell.ALIVE.to_char() == "#"
        assert Cell.DEAD.to_char() == "_"


class TestBorderOpt:
    """Test cases for the BorderOpt enum."""

    def test_parse_known(self):
        assert BorderOpt.parse("solid") is BorderOpt.SOLID
        assert BorderOpt.parse("empty") is BorderOpt.EMPTY
        assert BorderOpt.parse("loop") is BorderOpt.LOOP

    def test_parse_ignores_case_and_whitespace(self):
        assert BorderOpt.parse("  Solid\n") is BorderOpt.SOLID

    def test_parse_unknown(self):
        assert BorderOpt.parse("wavy") is None
        assert BorderOpt.parse("") is None

    def test_str(self):
        assert str(BorderOpt.LOOP) == "loop"
