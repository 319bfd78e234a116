# qrsheet/collator.py

"""
Cut-and-stack numbering for printed QR sheets.

Ordinary page-major numbering (1..9 on page 1, 10..18 on page 2) scatters
neighbouring numbers across the grid, so a cut stack has to be sorted by
hand. Here consecutive numbers go to the *same slot on successive pages*:
slot 0 holds 1, P+1, 2P+1, ...; slot 1 holds 2, P+2, ...

Cut every page along the grid, stack the pieces of each slot in page
order, then put the stacks together slot by slot: the result is 1..N.

Everything here is pure arithmetic of (page, row, col, rows, cols, total).
Page count depends on `total`, so results must not be reused across
different totals.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

Grid = List[List[Optional[int]]]


def _check_grid(rows: int, cols: int, total: int) -> None:
    if rows < 1 or cols < 1:
        raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
    if total < 0:
        raise ValueError(f"total must be >= 0, got {total}")


def page_count(total: int, rows: int, cols: int) -> int:
    _check_grid(rows, cols, total)
    return math.ceil(total / (rows * cols))


def number_for_cell(
    page: int,
    row: int,
    col: int,
    rows: int,
    cols: int,
    total: int,
) -> Optional[int]:
    """
    Sequence number (1-based) printed at (page, row, col), or None for an
    empty cell.

    When `total` is not a multiple of rows*cols the trailing slots run dry
    first, so empty cells sit at the end of the grid.
    """
    pages = page_count(total, rows, cols)
    if not 0 <= row < rows or not 0 <= col < cols:
        raise ValueError(f"cell ({row}, {col}) outside a {rows}x{cols} grid")
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    if page >= pages:
        return None

    slot = row * cols + col
    n = slot * pages + page + 1
    return n if n <= total else None


def page_layout(page: int, rows: int, cols: int, total: int) -> Grid:
    """Row-major grid of sequence numbers for one page."""
    return [
        [number_for_cell(page, r, c, rows, cols, total) for c in range(cols)]
        for r in range(rows)
    ]


def collate(total: int, rows: int, cols: int) -> List[Grid]:
    """Layouts for every page; empty list when there is nothing to print."""
    return [page_layout(p, rows, cols, total) for p in range(page_count(total, rows, cols))]


@dataclass(frozen=True)
class GridGeometry:
    rows: int
    cols: int
    total: int

    def __post_init__(self):
        _check_grid(self.rows, self.cols, self.total)

    @property
    def cells_per_page(self) -> int:
        return self.rows * self.cols

    @property
    def pages(self) -> int:
        return page_count(self.total, self.rows, self.cols)

    def number_for_cell(self, page: int, row: int, col: int) -> Optional[int]:
        return number_for_cell(page, row, col, self.rows, self.cols, self.total)

    def layout(self) -> List[Grid]:
        return collate(self.total, self.rows, self.cols)
