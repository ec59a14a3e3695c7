"""Cross-grid frequency analysis: per position, which digits appear, which one dominates, and how often the cell is filled at all."""

# frequency.py
# For each of the 81 positions, independently:
#   frequencies  digit -> count over all grids (only digits seen)
#   dominant     digit whose count first became the strict maximum
#                during the scan (ties keep the earlier leader)
#   confidence   filled grids / total grids, 0.0 for an empty set
# Grids are scanned in the order given; that order decides ties.
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

import numpy as np

from types_sudoku import AnalysisPayload, CellPayload, Frequencies, Grid

from .grid_codec import CELL_COUNT, SIZE, index_to_rc, rc_to_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellAnalysis:
    frequencies: Mapping[int, int]
    dominant: Optional[int]
    confidence: float

    @property
    def filled(self) -> int:
        return sum(self.frequencies.values())

    def to_payload(self) -> CellPayload:
        return {
            "frequencies": {str(d): n for d, n in self.frequencies.items()},
            "dominant": self.dominant,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """81 cell analyses, flat and row-major (index = row * 9 + col)."""

    cells: tuple[CellAnalysis, ...]
    puzzle_count: int

    def cell(self, row: int, col: int) -> CellAnalysis:
        return self.cells[rc_to_index(row, col)]

    def iter_cells(self) -> Iterator[tuple[int, int, CellAnalysis]]:
        for i, cell in enumerate(self.cells):
            r, c = index_to_rc(i)
            yield r, c, cell

    def rows(self) -> list[list[CellAnalysis]]:
        return [list(self.cells[r * SIZE : (r + 1) * SIZE]) for r in range(SIZE)]

    def dominant_grid(self) -> Grid:
        return [[cell.dominant for cell in row] for row in self.rows()]

    def confidence_array(self) -> np.ndarray:
        return np.array([cell.confidence for cell in self.cells], dtype=np.float64).reshape(SIZE, SIZE)

    def to_payload(self) -> AnalysisPayload:
        return {
            "puzzle_count": self.puzzle_count,
            "cells": [[cell.to_payload() for cell in row] for row in self.rows()],
        }


def _analyze_position(grids: Sequence[Grid], row: int, col: int, total: int) -> CellAnalysis:
    counts: Frequencies = {}
    dominant: Optional[int] = None
    best = 0
    for grid in grids:
        v = grid[row][col]
        if v is None:
            continue
        counts[v] = counts.get(v, 0) + 1
        if counts[v] > best:
            best = counts[v]
            dominant = v
    filled = sum(counts.values())
    confidence = filled / total if total > 0 else 0.0
    return CellAnalysis(frequencies=MappingProxyType(counts), dominant=dominant, confidence=confidence)


def analyze(grids: Sequence[Grid]) -> AnalysisResult:
    """Aggregate validated grids into a per-cell summary.

    Any number of grids is accepted, including none. Inputs are only read.
    """
    grids = list(grids)
    total = len(grids)
    cells = tuple(_analyze_position(grids, *index_to_rc(i), total) for i in range(CELL_COUNT))
    logger.debug("analyzed %d grid(s)", total)
    return AnalysisResult(cells=cells, puzzle_count=total)
