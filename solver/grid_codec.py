"""Textual grid encoding: whitespace normalisation, 81-char decode/encode, and index math shared by the validator and the analyzer."""

# grid_codec.py
# Encoding is row-major, 81 characters:
#   position i -> row i // 9, col i % 9
#   '1'..'9' -> digit, BLANK_MARKER -> None
# Indices are 0-based here; human-facing labels ('r1c1', 'b5') are 1-based
# like the rest of the toolkit.
from __future__ import annotations

import re

from types_sudoku import Grid

SIZE = 9
BOX = 3
CELL_COUNT = SIZE * SIZE
BLANK_MARKER = "."
DIGITS = "123456789"

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Drop every whitespace character (leading, trailing and internal)."""
    return _WHITESPACE.sub("", text)


def index_to_rc(i: int) -> tuple[int, int]:
    return i // SIZE, i % SIZE


def rc_to_index(r: int, c: int) -> int:
    return r * SIZE + c


def rc_to_key(r: int, c: int) -> str:
    return f"r{r + 1}c{c + 1}"


def unit_cells_row(r: int) -> list[tuple[int, int]]:
    return [(r, c) for c in range(SIZE)]


def unit_cells_col(c: int) -> list[tuple[int, int]]:
    return [(r, c) for r in range(SIZE)]


def unit_cells_box(b: int) -> list[tuple[int, int]]:
    r0 = BOX * (b // BOX)
    c0 = BOX * (b % BOX)
    return [(r0 + i, c0 + j) for i in range(BOX) for j in range(BOX)]


def iter_units():
    """Yield (label, cells) for the 27 houses: rows, then columns, then boxes."""
    for r in range(SIZE):
        yield f"r{r + 1}", unit_cells_row(r)
    for c in range(SIZE):
        yield f"c{c + 1}", unit_cells_col(c)
    for b in range(SIZE):
        yield f"b{b + 1}", unit_cells_box(b)


def empty_grid() -> Grid:
    return [[None] * SIZE for _ in range(SIZE)]


def clone_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def decode_grid(cleaned: str, blank: str = BLANK_MARKER) -> Grid:
    """Decode an already-normalised 81-char string into a Grid.

    The caller is expected to have checked length and alphabet first;
    anything that is not the blank marker is read as a digit.
    """
    if len(cleaned) != CELL_COUNT:
        raise ValueError(f"expected {CELL_COUNT} characters, got {len(cleaned)}")
    grid = empty_grid()
    for i, ch in enumerate(cleaned):
        r, c = index_to_rc(i)
        grid[r][c] = None if ch == blank else int(ch)
    return grid


def encode_grid(grid: Grid, blank: str = BLANK_MARKER) -> str:
    """Inverse of decode_grid: row-major, blank marker for empty cells."""
    return "".join(blank if v is None else str(v) for row in grid for v in row)


def format_grid(grid: Grid, blank: str = BLANK_MARKER) -> str:
    """Multi-line, box-separated rendering for terminals and logs."""
    lines = []
    for r, row in enumerate(grid):
        if r and r % BOX == 0:
            lines.append("------+-------+------")
        chunks = []
        for b in range(BOX):
            cells = row[BOX * b : BOX * b + BOX]
            chunks.append(" ".join(blank if v is None else str(v) for v in cells))
        lines.append(" | ".join(chunks))
    return "\n".join(lines)
