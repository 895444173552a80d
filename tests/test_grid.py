"""
tests/test_grid.py
Unit tests for schemaddl.grid (column alignment).
"""

from __future__ import annotations

from schemaddl.grid import TableGrid, measure_cell, measure_cells, pad


class TestMeasure:
    def test_counts_code_points_not_bytes(self) -> None:
        assert measure_cell("café") == 4
        assert measure_cell("日本") == 2
        assert measure_cell("") == 0

    def test_widths_grow_to_max(self) -> None:
        widths = []
        measure_cells(["a", "bbb"], widths)
        measure_cells(["cccc", "d"], widths)
        assert widths == [4, 3]

    def test_longer_rows_extend_width_table(self) -> None:
        widths = [2]
        measure_cells(["a", "bb", "ccc"], widths)
        assert widths == [2, 2, 3]


class TestPad:
    def test_small(self) -> None:
        assert pad(0) == ""
        assert pad(3) == "   "

    def test_spans_tab_stops(self) -> None:
        assert pad(8) == " " * 8
        assert pad(19) == " " * 19


class TestTableGrid:
    def test_alignment(self) -> None:
        grid = TableGrid([["uid", "uuid", "not null"], ["created_at", "timestamp"]])
        assert grid.render() == [
            "uid         uuid       not null",
            "created_at  timestamp",
        ]

    def test_last_cell_never_padded(self) -> None:
        grid = TableGrid([["a"], ["longer", "x"]])
        assert grid.render() == ["a", "longer  x"]

    def test_placeholder_cell_is_padded(self) -> None:
        grid = TableGrid([["a", "text", "x"], ["b", "", "y"]])
        assert grid.render()[1] == "b  " + " " * 4 + "  y"

    def test_unicode_alignment(self) -> None:
        grid = TableGrid([["café", "x"], ["ab", "y"]])
        assert grid.render() == ["café  x", "ab    y"]

    def test_rows_are_copied(self) -> None:
        row = ["a", "b"]
        grid = TableGrid()
        grid.add_row(row)
        row.append("c")
        assert grid.rows == [["a", "b"]]
        assert len(grid) == 1

    def test_deterministic(self) -> None:
        rows = [["x", "int"], ["yy", "text", "not null"]]
        assert TableGrid(rows).render() == TableGrid(rows).render()
