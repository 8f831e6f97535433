"""Scent Work rulebook harvester package."""
from __future__ import annotations

from pathlib import Path

from . import (
    accuracy,
    classifier,
    config,
    measurements,
    overrides,
    pages,
    pipeline,
    renderer,
    requirements,
    segmenter,
    store,
    tagger,
)
from .models import Rule

__all__ = [
    "accuracy",
    "classifier",
    "config",
    "measurements",
    "overrides",
    "pages",
    "pipeline",
    "renderer",
    "requirements",
    "segmenter",
    "store",
    "tagger",
    "Rule",
    "load_rules",
]


def load_rules(base_path: Path) -> list[Rule]:
    """Convenience wrapper to load the parsed rules under ``base_path``."""
    from .store import load_rules

    index_dir = base_path / "scent_rules" / "_index"
    return load_rules(index_dir / "parsed-rules.json")
