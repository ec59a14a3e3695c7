"""In-memory puzzle session: accumulates validated grids, runs the frequency analysis on demand, and hands the grid set to an external summarizer."""

# session.py
# Owns the ordered grid set (append / replace with examples / clear) and the
# latest AnalysisResult. Everything handed out is a copy.
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from types_sudoku import Grid

from .config import DotDict, load_settings
from .examples import EXAMPLE_PUZZLE_STRINGS
from .frequency import AnalysisResult, analyze
from .grid_codec import clone_grid, encode_grid
from .validator import ParseResult, parse_and_validate

logger = logging.getLogger(__name__)


class NotEnoughPuzzles(RuntimeError):
    def __init__(self, have: int, need: int):
        super().__init__(f"At least {need} puzzles are needed for analysis, have {have}.")
        self.have = have
        self.need = need


class PuzzleSession:
    def __init__(self, settings: Optional[DotDict] = None):
        self.settings = settings if settings is not None else load_settings()
        self._grids: list[Grid] = []
        self._analysis: Optional[AnalysisResult] = None

    @property
    def blank(self) -> str:
        return self.settings.blank_marker

    @property
    def min_puzzles(self) -> int:
        return int(self.settings.min_puzzles)

    @property
    def grids(self) -> list[Grid]:
        return [clone_grid(g) for g in self._grids]

    @property
    def analysis(self) -> Optional[AnalysisResult]:
        return self._analysis

    def __len__(self) -> int:
        return len(self._grids)

    @property
    def can_analyze(self) -> bool:
        return len(self._grids) >= self.min_puzzles

    def add_puzzle(self, text: str) -> ParseResult:
        """Validate ``text`` and append the grid when it is accepted."""
        result = parse_and_validate(text, self.blank)
        if result.ok:
            self._grids.append(clone_grid(result.grid))
            logger.info("puzzle added, total %d", len(self._grids))
        else:
            logger.info("puzzle rejected: %s", result.error.message)
        return result

    def load_examples(self, strings: Iterable[str] = EXAMPLE_PUZZLE_STRINGS) -> int:
        """Replace the grid set with every valid entry of ``strings``; invalid ones are skipped."""
        loaded = []
        for s in strings:
            result = parse_and_validate(s, self.blank)
            if result.ok:
                loaded.append(result.grid)
        self._grids = loaded
        self._analysis = None
        logger.info("loaded %d example puzzle(s)", len(loaded))
        return len(loaded)

    def clear(self) -> None:
        self._grids = []
        self._analysis = None
        logger.info("session cleared")

    def analyze(self) -> AnalysisResult:
        if not self.can_analyze:
            raise NotEnoughPuzzles(len(self._grids), self.min_puzzles)
        self._analysis = analyze(self._grids)
        logger.info("analysis done over %d puzzle(s)", len(self._grids))
        return self._analysis

    def summary_input(self) -> list[str]:
        """The whole grid set, encoded, for an external text summarizer."""
        return [encode_grid(g, self.blank) for g in self._grids]
