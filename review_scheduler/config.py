"""Configuration loading for the review scheduler (JSON or YAML)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass
class WorkloadWeights:
    dar: int = 3
    cpoe: int = 2
    new_incoming: int = 2
    cross_training: int = 1
    special_projects: int = 1


@dataclass
class ImbalanceThresholds:
    overloaded_ratio: float = 1.5
    underloaded_ratio: float = 0.5


@dataclass
class SchedulerConfig:
    weights: WorkloadWeights = field(default_factory=WorkloadWeights)
    thresholds: ImbalanceThresholds = field(default_factory=ImbalanceThresholds)
    undo_limit: int = 50
    dar_count: int = 5
    min_dar_count: int = 3
    max_dar_count: int = 8
    db_url: str = "sqlite:///review_scheduler.db"


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    return data or {}


def _section(raw: Dict[str, Any], key: str, cls):
    values = raw.get(key) or {}
    known = {name for name in cls.__dataclass_fields__}
    return cls(**{k: v for k, v in values.items() if k in known})


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """
    Load scheduler configuration.

    Args:
        path: YAML (.yaml/.yml) or JSON file; None returns the defaults

    Returns:
        SchedulerConfig with missing keys filled from defaults

    Raises:
        ValueError: If a count is not an integer, or dar_count or undo_limit is out of range
    """
    if path is None:
        return SchedulerConfig()

    raw = _read_raw(Path(path))
    cfg = SchedulerConfig(
        weights=_section(raw, "weights", WorkloadWeights),
        thresholds=_section(raw, "thresholds", ImbalanceThresholds),
    )
    for key in ("undo_limit", "dar_count", "min_dar_count", "max_dar_count"):
        if key in raw:
            try:
                setattr(cfg, key, int(raw[key]))
            except (TypeError, ValueError) as e:
                raise ValueError(f"{key} must be an integer, got {raw[key]!r}") from e
    if "db_url" in raw:
        cfg.db_url = str(raw["db_url"])

    if not cfg.min_dar_count <= cfg.dar_count <= cfg.max_dar_count:
        raise ValueError(
            f"dar_count must be between {cfg.min_dar_count} and {cfg.max_dar_count}, got {cfg.dar_count}"
        )
    if cfg.undo_limit <= 0:
        raise ValueError(f"undo_limit must be positive, got {cfg.undo_limit}")

    return cfg
