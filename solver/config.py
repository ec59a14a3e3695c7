from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict
import yaml

from .grid_codec import BLANK_MARKER, DIGITS

DEFAULTS: Dict[str, Any] = {
    "blank_marker": BLANK_MARKER,
    "min_puzzles": 2,
    "log_level": "INFO",
}

class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return DotDict(data)

def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg

def check_settings(cfg: Dict[str, Any]) -> None:
    blank = cfg.get("blank_marker")
    if not isinstance(blank, str) or len(blank) != 1 or blank in DIGITS or blank.isspace():
        raise ValueError(f"blank_marker must be one non-digit, non-space character, got {blank!r}")
    if int(cfg.get("min_puzzles", 0)) < 0:
        raise ValueError("min_puzzles must be >= 0")
    level = str(cfg.get("log_level", "")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"log_level must be a logging level name, got {cfg.get('log_level')!r}")

def load_settings(path: str | Path | None = None, **overrides) -> DotDict:
    """Defaults, then the YAML file (if any), then non-None overrides."""
    cfg = DotDict(DEFAULTS)
    if path is not None:
        cfg.update(load_yaml(path))
    merge_overrides(cfg, **overrides)
    check_settings(cfg)
    return cfg
