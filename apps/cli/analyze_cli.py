"""Command-line front end: load puzzle strings from files and/or the bundled examples, validate them, and print the per-cell frequency analysis."""

# analyze_cli.py
# - Reads puzzles (one per line, '#' comments and blank lines ignored)
# - Rejects invalid ones with a reason on stderr
# - Runs the frequency analysis over the rest
# - Prints a JSON payload or a confidence table; optional per-cell CSV
#
# Usage:
#   python -m apps.cli.analyze_cli puzzles.txt --table
#   python -m apps.cli.analyze_cli --examples --csv cells.csv

import argparse
import csv
import json
import logging
import sys
from pathlib import Path

from solver.config import load_settings
from solver.examples import EXAMPLE_PUZZLE_STRINGS
from solver.frequency import AnalysisResult
from solver.grid_codec import format_grid
from solver.session import NotEnoughPuzzles, PuzzleSession
from solver.validator import explain_rejection

logger = logging.getLogger("analyze_cli")


def read_puzzle_file(path: Path) -> list[str]:
    puzzles = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            puzzles.append(line)
    return puzzles


def write_csv(result: AnalysisResult, out_csv: Path):
    rows = []
    for r, c, cell in result.iter_cells():
        rows.append({
            "r": r + 1, "c": c + 1,
            "dominant": "" if cell.dominant is None else cell.dominant,
            "confidence": f"{cell.confidence:.4f}",
            "filled": cell.filled,
            "frequencies": json.dumps({str(d): n for d, n in cell.frequencies.items()}),
        })
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)
    print("Wrote:", out_csv, file=sys.stderr)


def render_table(result: AnalysisResult, blank: str = ".") -> str:
    """Dominant digit + confidence percentage per cell, 9 lines."""
    conf = result.confidence_array()
    lines = [f"puzzles: {result.puzzle_count}"]
    for r, row in enumerate(result.rows()):
        cells = []
        for c, cell in enumerate(row):
            d = blank if cell.dominant is None else str(cell.dominant)
            cells.append(f"{d}:{conf[r, c] * 100:3.0f}%")
        lines.append(" ".join(cells))
    return "\n".join(lines)


def explain_text(text: str, blank: str = ".") -> str:
    """Board plus one line per duplicate; empty when the text does not decode."""
    grid, issues = explain_rejection(text, blank)
    if grid is None:
        return ""
    lines = [format_grid(grid, blank)]
    for issue in issues:
        digits = ", ".join(str(d) for d in issue["digits"])
        lines.append(f"  {issue['unit']}: digit {digits} repeated at {' '.join(issue['cells'])}")
    return "\n".join(lines)


def main(args) -> int:
    try:
        settings = load_settings(args.config, blank_marker=args.blank, min_puzzles=args.min_puzzles,
                                 log_level=args.log_level)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    logging.basicConfig(level=str(settings.log_level).upper(),
                        format="[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s",
                        datefmt="%Y-%m-%d %H:%M:%S")

    session = PuzzleSession(settings)
    if args.examples:
        session.load_examples(EXAMPLE_PUZZLE_STRINGS)

    for path in args.files:
        for n, text in enumerate(read_puzzle_file(Path(path)), 1):
            result = session.add_puzzle(text)
            if not result.ok:
                print(f"{path}: puzzle {n} rejected: {result.error.message}", file=sys.stderr)
                if args.explain:
                    detail = explain_text(text, session.blank)
                    if detail:
                        print(detail, file=sys.stderr)

    try:
        result = session.analyze()
    except NotEnoughPuzzles as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.csv:
        write_csv(result, Path(args.csv))
    if args.table:
        print(render_table(result, session.blank))
    else:
        print(json.dumps(result.to_payload(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Per-cell frequency analysis over a set of Sudoku puzzles.")
    ap.add_argument("files", nargs="*", help="text files with one 81-char puzzle per line")
    ap.add_argument("--examples", action="store_true", help="start from the bundled sample puzzles")
    ap.add_argument("--config", type=str, default=None, help="YAML settings file")
    ap.add_argument("--blank", type=str, default=None, help="blank marker character (default '.')")
    ap.add_argument("--min-puzzles", type=int, default=None)
    ap.add_argument("--log-level", type=str, default=None)
    ap.add_argument("--table", action="store_true", help="print a text table instead of JSON")
    ap.add_argument("--csv", type=str, default=None, help="also write the 81 per-cell rows here")
    ap.add_argument("--explain", action="store_true", help="print the board and every duplicate for rejected puzzles")
    return ap


if __name__ == "__main__":
    sys.exit(main(build_parser().parse_args()))
