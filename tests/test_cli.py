# tests/test_cli.py
import csv
import json

from apps.cli.analyze_cli import build_parser, main, read_puzzle_file


def run(argv):
    return main(build_parser().parse_args(argv))


def test_read_puzzle_file_skips_comments(tmp_path, classic):
    p = tmp_path / "p.txt"
    p.write_text(f"# header\n\n{classic}\n  {classic}  \n", encoding="utf-8")
    assert read_puzzle_file(p) == [classic, classic]


def test_json_output(tmp_path, classic, capsys):
    p = tmp_path / "p.txt"
    p.write_text(f"{classic}\n{classic}\nnot-a-puzzle\n", encoding="utf-8")
    assert run([str(p)]) == 0
    out, err = capsys.readouterr()
    payload = json.loads(out)
    assert payload["puzzle_count"] == 2
    assert payload["cells"][0][0]["dominant"] == 5
    assert "puzzle 3 rejected" in err


def test_table_and_csv(tmp_path, capsys):
    out_csv = tmp_path / "cells.csv"
    assert run(["--examples", "--table", "--csv", str(out_csv)]) == 0
    out, _ = capsys.readouterr()
    lines = out.splitlines()
    assert lines[0].startswith("puzzles: ")
    assert len(lines) == 10
    with open(out_csv, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 81
    assert rows[0]["r"] == "1" and rows[0]["c"] == "1"


def test_not_enough_puzzles(capsys):
    assert run([]) == 1
    assert "At least 2" in capsys.readouterr().err


def test_bad_config_value(capsys):
    assert run(["--blank", "7"]) == 2


def test_explain_prints_board_and_duplicates(tmp_path, classic, capsys):
    p = tmp_path / "p.txt"
    p.write_text(f"{classic}\n{classic}\n77{'.' * 79}\nshort\n", encoding="utf-8")
    assert run([str(p), "--explain"]) == 0
    err = capsys.readouterr().err
    assert "puzzle 3 rejected" in err
    assert "7 7 . | . . . | . . ." in err
    assert "r1: digit 7 repeated at r1c1 r1c2" in err
    assert "b1: digit 7 repeated at r1c1 r1c2" in err
    assert "puzzle 4 rejected" in err


def test_explain_flag_parses():
    args = build_parser().parse_args(["--examples", "--explain"])
    assert args.explain and args.examples


def test_unknown_log_level(capsys):
    assert run(["--examples", "--log-level", "LOUD"]) == 2
    assert "log_level" in capsys.readouterr().err
