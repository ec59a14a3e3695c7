# pattern_api.py
# FastAPI wrapper for the validator and the frequency analyzer.
# Run with: uvicorn apps.api.pattern_api:app --reload
import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from solver.config import load_settings
from solver.frequency import analyze
from solver.grid_codec import encode_grid
from solver.validator import explain_rejection, parse_and_validate

settings = load_settings(os.environ.get("SUDOKU_PATTERN_CONFIG"))

app = FastAPI(title="Sudoku Pattern Analysis API")


def rejection_detail(text: str, error) -> dict:
    detail = error.to_dict()
    if error.code == "rule_violation":
        _, detail["issues"] = explain_rejection(text, settings.blank_marker)
    return detail


class PuzzleModel(BaseModel):
    puzzle: str


class PuzzleSetModel(BaseModel):
    puzzles: list[str]


@app.post("/validate")
def api_validate(payload: PuzzleModel):
    result = parse_and_validate(payload.puzzle, settings.blank_marker)
    if not result.ok:
        raise HTTPException(status_code=422, detail=rejection_detail(payload.puzzle, result.error))
    return {"ok": True, "grid": result.grid, "encoded": encode_grid(result.grid, settings.blank_marker)}


@app.post("/analyze")
def api_analyze(payload: PuzzleSetModel):
    grids = []
    rejected = []
    for i, text in enumerate(payload.puzzles):
        result = parse_and_validate(text, settings.blank_marker)
        if result.ok:
            grids.append(result.grid)
        else:
            rejected.append({"index": i, **rejection_detail(text, result.error)})
    need = int(settings.min_puzzles)
    if len(grids) < need:
        raise HTTPException(
            status_code=422,
            detail={
                "code": "not_enough_puzzles",
                "message": f"At least {need} valid puzzles are needed for analysis, have {len(grids)}.",
                "rejected": rejected,
            },
        )
    return {"rejected": rejected, "analysis": analyze(grids).to_payload()}
