# File: schemaddl/grid.py
"""
schemaddl - Column-Aligned Text Grid
=====================================
Accumulates rows of text cells and pads them into aligned columns.

Widths are measured in code points, not bytes, so ``café`` is four wide.
Padding is emitted in 8-space tab-stop blocks, and the last cell of a row is
never padded (no trailing whitespace).
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

_SEPARATOR: str = "  "
_TAB_STOP: str = " " * 8


def measure_cell(cell: str) -> int:
    """Display width of *cell*: its number of code points."""
    return len(cell)


def measure_cells(row: Sequence[str], widths: List[int]) -> None:
    """Grow *widths* in place so each column fits the cells of *row*."""
    for i, cell in enumerate(row):
        w: int = measure_cell(cell)
        if i < len(widths):
            if w > widths[i]:
                widths[i] = w
        else:
            widths.append(w)


def pad(n: int) -> str:
    """Return *n* spaces, built from whole tab-stop blocks plus a remainder."""
    blocks: List[str] = []
    while n >= len(_TAB_STOP):
        blocks.append(_TAB_STOP)
        n -= len(_TAB_STOP)
    blocks.append(_TAB_STOP[:n])
    return "".join(blocks)


class TableGrid:
    """
    Rows of cells plus the running per-column width table.

    Usage::

        grid = TableGrid()
        grid.add_row(["uid", "uuid", "not null"])
        grid.add_row(["deleted_at", "timestamp"])
        lines = grid.render()
    """

    __slots__ = ("rows", "widths")

    def __init__(self, rows: Iterable[Sequence[str]] = ()) -> None:
        self.rows: List[List[str]] = []
        self.widths: List[int] = []
        for row in rows:
            self.add_row(row)

    def add_row(self, row: Sequence[str]) -> None:
        cells: List[str] = list(row)
        measure_cells(cells, self.widths)
        self.rows.append(cells)

    def render_row(self, row: Sequence[str]) -> str:
        parts: List[str] = []
        last: int = len(row) - 1
        for i, cell in enumerate(row):
            if i > 0:
                parts.append(_SEPARATOR)
            parts.append(cell)
            width: int = self.widths[i] if i < len(self.widths) else 0
            adv: int = measure_cell(cell)
            if width > adv and i < last:
                parts.append(pad(width - adv))
        return "".join(parts)

    def render(self) -> List[str]:
        """Render every row, in insertion order."""
        return [self.render_row(row) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"<TableGrid {len(self.rows)} rows, widths={self.widths}>"


__all__: List[str] = [
    "measure_cell",
    "measure_cells",
    "pad",
    "TableGrid",
]
