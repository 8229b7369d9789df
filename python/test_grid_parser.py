"""Tests for grid_parser module."""

import pytest

from grid_parser import format_grid, parse_grid, parse_grids_concise
from grid_types import EMPTY, Grid, SymbolSpec


class TestParseGridsConcise:
    """Tests for the concise grid parser."""

    def test_simple_grid(self) -> None:
        """Parse a simple grid of symbol codes."""
        definition = """
        main: LC|7B
        """
        store = parse_grids_concise(definition)

        assert "main" in store
        grid = store["main"]
        assert grid.rows == 2
        assert grid.cols == 2
        assert grid.cells[0] == ("lemon", "cherry")
        assert grid.cells[1] == ("seven", "bell")

    def test_with_empty_cells(self) -> None:
        """Parse grid with empty cells using underscores."""
        store = parse_grids_concise("main: D_|_T")

        grid = store["main"]
        assert grid[(0, 0)] == "diamond"
        assert grid[(0, 1)] == EMPTY
        assert grid[(1, 0)] == EMPTY
        assert grid[(1, 1)] == "treasure"

    def test_multiple_grids(self) -> None:
        """Parse several named grids, keeping definition order."""
        definition = """
        first: LLL|LLL|LLL
        second: VVV|BBB|DDD
        """
        store = parse_grids_concise(definition)

        assert list(store) == ["first", "second"]
        assert store["second"].cells[0] == ("clover",) * 3

    def test_custom_symbols(self) -> None:
        symbols = (SymbolSpec("apple", 5, 1.0, code="A"), SymbolSpec("pear", 5, 1.0, code="P"))
        store = parse_grids_concise("fruit: AP|PA", symbols)
        assert store["fruit"].cells == (("apple", "pear"), ("pear", "apple"))

    def test_error_duplicate_name(self) -> None:
        """Two grids with the same name are rejected."""
        definition = """
        main: LL|LL
        main: CC|CC
        """
        with pytest.raises(ValueError, match="Duplicate grid name"):
            parse_grids_concise(definition)

    def test_error_invalid_character(self) -> None:
        """Characters that are not symbol codes are rejected."""
        with pytest.raises(ValueError, match="Invalid character 'x'"):
            parse_grids_concise("main: LxL")

    def test_error_missing_colon(self) -> None:
        with pytest.raises(ValueError, match="Expected format"):
            parse_grids_concise("main LLL")

    def test_error_empty_grid_name(self) -> None:
        with pytest.raises(ValueError, match="Empty grid name"):
            parse_grids_concise(": LLL")

    def test_error_empty_definition(self) -> None:
        with pytest.raises(ValueError, match="Empty grid definition"):
            parse_grids_concise("main:")

    def test_error_inconsistent_rows(self) -> None:
        """Ragged rows are an error rather than being padded."""
        with pytest.raises(ValueError, match="Inconsistent row lengths"):
            parse_grids_concise("main: LLL|LL")

    def test_blank_lines_ignored(self) -> None:
        definition = """

        main: 77

        """
        store = parse_grids_concise(definition)
        assert list(store) == ["main"]


class TestParseGrid:
    """Tests for the space-separated format."""

    def test_identifiers_and_codes(self) -> None:
        """Full identifiers and one-character codes can be mixed."""
        grid = parse_grid("lemon L seven|C cherry 7")
        assert grid.cells == (("lemon", "lemon", "seven"), ("cherry", "cherry", "seven"))

    def test_empty_cell(self) -> None:
        grid = parse_grid("L _|_ L")
        assert grid[(0, 1)] == EMPTY

    def test_single_row(self) -> None:
        grid = parse_grid("7 7 7 7 7")
        assert grid == Grid.from_rows([["seven"] * 5])

    def test_error_unknown_cell(self) -> None:
        with pytest.raises(ValueError, match="Invalid cell string: 'banana'"):
            parse_grid("L banana L")

    def test_error_inconsistent_rows(self) -> None:
        with pytest.raises(ValueError, match="Row 1: 2 columns"):
            parse_grid("L L L|L L")


class TestFormatGrid:
    """Tests for writing grids back to the concise format."""

    def test_format(self) -> None:
        grid = parse_grid("lemon seven _|V B D")
        assert format_grid(grid) == "L7_|VBD"

    def test_parses_back(self) -> None:
        definition = "LCV|BDT|7L_"
        grid = parse_grids_concise(f"main: {definition}")["main"]
        assert format_grid(grid) == definition
