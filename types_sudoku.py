# types_sudoku.py
from __future__ import annotations

from typing import Optional, TypedDict

CellValue = Optional[int]
"""A single cell: digit 1..9, or None when blank."""

Grid = list[list[CellValue]]
"""A 9x9 Sudoku grid as rows of cell values (None = blank)."""

Frequencies = dict[int, int]
"""Map from digit (1..9) to how many grids hold it at one position."""


class CellPayload(TypedDict):
    """JSON shape of one analysed cell, as served by the API & CLI."""

    frequencies: dict[str, int]  # digit (as string key) -> count
    dominant: Optional[int]  # most frequent digit, None if never filled
    confidence: float  # filled grids / total grids, 0..1


class AnalysisPayload(TypedDict):
    """JSON shape of a whole analysis run."""

    puzzle_count: int
    cells: list[list[CellPayload]]  # 9x9, row-major


class Issue(TypedDict, total=False):
    """A duplicate found in one row/column/box."""

    type: str  # always 'duplicate'
    unit: str  # e.g. 'r1', 'c4', 'b9'
    digits: list[int]
    cells: list[str]  # e.g. ['r1c1', 'r1c5']
