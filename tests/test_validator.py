# tests/test_validator.py
import pytest

from solver.grid_codec import encode_grid
from solver.validator import (
    GridRejected, InvalidCharacter, InvalidLength, RuleViolation,
    explain_rejection, find_duplicates, parse_and_validate, validate_grid,
)

EMPTY = "." * 81


def with_digits(placements):
    """Blank board with {(r, c): digit} filled in."""
    chars = ["."] * 81
    for (r, c), d in placements.items():
        chars[r * 9 + c] = str(d)
    return "".join(chars)


def test_valid_puzzle_parses(classic):
    result = parse_and_validate(classic)
    assert result.ok
    assert result.error is None
    assert result.grid[0][0] == 5
    assert encode_grid(result.grid) == classic


def test_whitespace_is_ignored(classic):
    spaced = "\n".join(" ".join(classic[i:i + 9]) for i in range(0, 81, 9))
    result = parse_and_validate("  " + spaced + "\n")
    assert result.ok
    assert encode_grid(result.grid) == classic


def test_all_blank_grid_is_valid():
    result = parse_and_validate(EMPTY)
    assert result.ok
    assert all(v is None for row in result.grid for v in row)


@pytest.mark.parametrize("text, length", [("", 0), ("1" * 80, 80), ("." * 82, 82), ("12 3", 3)])
def test_invalid_length_carries_observed_length(text, length):
    result = parse_and_validate(text)
    assert not result.ok
    assert result.grid is None
    assert result.error == InvalidLength(length=length)
    assert result.error.code == "invalid_length"
    assert str(length) in result.error.message


def test_length_checked_before_characters():
    result = parse_and_validate("x" * 10)
    assert isinstance(result.error, InvalidLength)


def test_characters_checked_before_rules():
    # duplicate 5s in row 1 and a bad character further along
    text = "55" + "." * 40 + "x" + "." * 38
    result = parse_and_validate(text)
    assert isinstance(result.error, InvalidCharacter)
    assert result.error.position == 42


@pytest.mark.parametrize("bad", ["0", "x", "-", "*"])
def test_invalid_character(bad):
    text = bad + EMPTY[1:]
    result = parse_and_validate(text)
    assert result.grid is None
    assert isinstance(result.error, InvalidCharacter)
    assert result.error.character == bad
    assert result.error.position == 0


def test_zero_allowed_when_it_is_the_blank_marker():
    result = parse_and_validate("0" * 81, blank="0")
    assert result.ok


@pytest.mark.parametrize(
    "placements, unit",
    [
        ({(0, 0): 5, (0, 8): 5}, "r1"),
        ({(2, 4): 3, (7, 4): 3}, "c5"),
        ({(3, 3): 9, (5, 5): 9}, "b5"),
    ],
)
def test_rule_violation(placements, unit):
    result = parse_and_validate(with_digits(placements))
    assert result.grid is None
    assert isinstance(result.error, RuleViolation)
    assert result.error.unit == unit
    assert result.error.code == "rule_violation"


def test_same_digit_in_different_units_is_fine():
    result = parse_and_validate(with_digits({(0, 0): 5, (1, 3): 5, (3, 1): 5}))
    assert result.ok


def test_find_duplicates_reports_every_unit():
    grid = parse_and_validate(EMPTY).grid
    grid[0][0] = 7
    grid[0][1] = 7
    issues = find_duplicates(grid)
    units = [i["unit"] for i in issues]
    assert units == ["r1", "b1"]
    assert issues[0]["digits"] == [7]
    assert issues[0]["cells"] == ["r1c1", "r1c2"]
    check = validate_grid(grid)
    assert not check.is_valid
    assert check.first_unit == "r1"


def test_unwrap(classic):
    assert parse_and_validate(classic).unwrap()[0][1] == 3
    with pytest.raises(GridRejected) as exc:
        parse_and_validate("123").unwrap()
    assert exc.value.error == InvalidLength(length=3)


def test_error_to_dict():
    d = InvalidLength(length=12).to_dict()
    assert d["code"] == "invalid_length"
    assert d["length"] == 12
    assert "message" in d


def test_explain_rejection_lists_every_duplicate():
    grid, issues = explain_rejection(with_digits({(0, 0): 4, (0, 4): 4, (5, 0): 4}))
    assert grid[0][0] == 4
    assert [i["unit"] for i in issues] == ["r1", "c1"]
    assert issues[1]["cells"] == ["r1c1", "r6c1"]


def test_explain_rejection_undecodable_or_valid(classic):
    assert explain_rejection("123") == (None, [])
    assert explain_rejection("x" + EMPTY[1:]) == (None, [])
    grid, issues = explain_rejection(classic)
    assert grid is not None and issues == []
