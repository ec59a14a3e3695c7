"""Parse 81-char puzzle strings into grids and reject structurally invalid ones (row/column/box duplicates). Not a solver: solvability and uniqueness are never checked."""

# validator.py
# parse_and_validate() returns a ParseResult instead of raising: all three
# rejection kinds are user-correctable input problems.
#   1) length   (after whitespace removal)  -> InvalidLength
#   2) alphabet ('1'..'9' + blank marker)   -> InvalidCharacter
#   3) placement (row/col/box duplicates)   -> RuleViolation
# Checks run in that order; the first failure wins.
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from types_sudoku import Grid, Issue

from .grid_codec import (
    BLANK_MARKER,
    CELL_COUNT,
    DIGITS,
    decode_grid,
    iter_units,
    normalize_text,
    rc_to_key,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationError:
    """Base for every rejection reason."""

    code: ClassVar[str] = "invalid"

    @property
    def message(self) -> str:
        return "The puzzle is invalid."

    def to_dict(self) -> dict:
        out = {"code": self.code, "message": self.message}
        out.update(self.__dict__)
        return out


@dataclass(frozen=True)
class InvalidLength(ValidationError):
    length: int
    code: ClassVar[str] = "invalid_length"

    @property
    def message(self) -> str:
        return f"Invalid length: {CELL_COUNT} characters required, got {self.length}."


@dataclass(frozen=True)
class InvalidCharacter(ValidationError):
    character: str
    position: int  # 0-based, in the whitespace-stripped string
    code: ClassVar[str] = "invalid_character"

    @property
    def message(self) -> str:
        return (
            f"Invalid character {self.character!r} at position {self.position}; "
            f"only digits 1-9 and the blank marker are allowed."
        )


@dataclass(frozen=True)
class RuleViolation(ValidationError):
    unit: Optional[str] = None  # first offending house, e.g. 'r1', 'c4', 'b9'
    code: ClassVar[str] = "rule_violation"

    @property
    def message(self) -> str:
        where = f" (duplicate in {self.unit})" if self.unit else ""
        return f"The given placement breaks the Sudoku rules{where}."


class GridRejected(ValueError):
    """Raised by ParseResult.unwrap() for callers that prefer exceptions."""

    def __init__(self, error: ValidationError):
        super().__init__(error.message)
        self.error = error


@dataclass(frozen=True)
class ParseResult:
    """Either a grid or an error, never both."""

    grid: Optional[Grid] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Grid:
        if self.error is not None:
            raise GridRejected(self.error)
        return self.grid


@dataclass(frozen=True)
class GridCheck:
    is_valid: bool
    issues: list[Issue] = field(default_factory=list)

    @property
    def first_unit(self) -> Optional[str]:
        return self.issues[0]["unit"] if self.issues else None


def _duplicates_in_unit(vals) -> set[int]:
    seen = set()
    dups = set()
    for v in vals:
        if v is None:
            continue
        if v in seen:
            dups.add(v)
        seen.add(v)
    return dups


def find_duplicates(grid: Grid) -> list[Issue]:
    """Every row/column/box holding the same digit twice, rows first."""
    issues: list[Issue] = []
    for unit, cells in iter_units():
        vals = [grid[r][c] for r, c in cells]
        dups = _duplicates_in_unit(vals)
        if dups:
            bad = [rc_to_key(r, c) for r, c in cells if grid[r][c] in dups]
            issues.append({"type": "duplicate", "unit": unit, "digits": sorted(dups), "cells": bad})
    return issues


def validate_grid(grid: Grid) -> GridCheck:
    """Placement-consistency check over the whole grid; blanks never conflict."""
    issues = find_duplicates(grid)
    return GridCheck(is_valid=not issues, issues=issues)


def check_alphabet(cleaned: str, blank: str = BLANK_MARKER) -> Optional[InvalidCharacter]:
    allowed = set(DIGITS) | {blank}
    for pos, ch in enumerate(cleaned):
        if ch not in allowed:
            return InvalidCharacter(character=ch, position=pos)
    return None


def parse_and_validate(text: str, blank: str = BLANK_MARKER) -> ParseResult:
    """Turn a textual puzzle into a validated Grid.

    Whitespace anywhere in ``text`` is ignored. Returns a ParseResult whose
    ``error`` is one of InvalidLength / InvalidCharacter / RuleViolation when
    the input is rejected.
    """
    cleaned = normalize_text(text)
    if len(cleaned) != CELL_COUNT:
        logger.debug("rejected puzzle: length %d", len(cleaned))
        return ParseResult(error=InvalidLength(length=len(cleaned)))

    bad_char = check_alphabet(cleaned, blank)
    if bad_char is not None:
        logger.debug("rejected puzzle: character %r at %d", bad_char.character, bad_char.position)
        return ParseResult(error=bad_char)

    grid = decode_grid(cleaned, blank)
    check = validate_grid(grid)
    if not check.is_valid:
        logger.debug("rejected puzzle: %d duplicate unit(s), first %s", len(check.issues), check.first_unit)
        return ParseResult(error=RuleViolation(unit=check.first_unit))

    return ParseResult(grid=grid)


def explain_rejection(text: str, blank: str = BLANK_MARKER) -> tuple[Optional[Grid], list[Issue]]:
    """Decoded board plus every duplicate, for diagnostics.

    Returns (None, []) when the text cannot be decoded at all (bad length or
    alphabet); a valid puzzle gives (grid, []).
    """
    cleaned = normalize_text(text)
    if len(cleaned) != CELL_COUNT or check_alphabet(cleaned, blank) is not None:
        return None, []
    grid = decode_grid(cleaned, blank)
    return grid, find_duplicates(grid)
