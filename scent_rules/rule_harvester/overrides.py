"""Authoritative measurement overrides."""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .models import SOURCE_AUTHORITATIVE, Rule

logger = logging.getLogger(__name__)

Overrides = dict[str, dict[str, dict[str, Any]]]


def load_overrides(path: Path | None) -> Overrides | None:
    """Load ``{element: {level: {field: value}}}`` from ``path``.

    A missing or unreadable file is not fatal: a warning is logged and
    ``None`` is returned so the run keeps the parsed measurements.
    """
    if path is None:
        return None
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except FileNotFoundError:
        logger.warning("Authoritative measurements not found: %s", path)
        return None
    except (OSError, ValueError) as exc:
        logger.warning("Could not read authoritative measurements %s: %s", path, exc)
        return None
    if not isinstance(raw, Mapping):
        logger.warning("Authoritative measurements in %s are not a JSON object", path)
        return None
    return normalize_overrides(raw)


def normalize_overrides(raw: Mapping[str, Any]) -> Overrides:
    overrides: Overrides = {}
    for element, levels in raw.items():
        if not isinstance(levels, Mapping):
            logger.warning("Skipping override entry for %s: expected an object", element)
            continue
        for level, fields in levels.items():
            if not isinstance(fields, Mapping):
                logger.warning(
                    "Skipping override entry for %s %s: expected an object", element, level
                )
                continue
            overrides.setdefault(str(element), {})[str(level)] = dict(fields)
    return overrides


def apply_overrides(rules: Iterable[Rule], overrides: Mapping[str, Any] | None) -> int:
    """Overlay authoritative fields onto matching rules; return how many changed."""
    if not overrides:
        return 0
    table = normalize_overrides(overrides)
    applied = 0
    for rule in rules:
        if not rule.element or not rule.level:
            continue
        fields = table.get(rule.element, {}).get(rule.level)
        if not fields:
            continue
        rule.measurements.update(fields)
        rule.measurements_source = SOURCE_AUTHORITATIVE
        applied += 1
    logger.info("Applied authoritative measurements to %d rules", applied)
    return applied
