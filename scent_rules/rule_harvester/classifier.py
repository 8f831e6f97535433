"""Level and element labelling of text blocks."""
from __future__ import annotations

import re
from collections.abc import Iterable

from .config import ExtractionConfig, default_config


def _first_match(text: str, patterns: Iterable[tuple[str, re.Pattern[str]]]) -> str | None:
    for label, pattern in patterns:
        if pattern.search(text):
            return label
    return None


def classify_level(text: str, config: ExtractionConfig | None = None) -> str | None:
    config = config or default_config()
    return _first_match(text, config.levels)


def classify_element(text: str, config: ExtractionConfig | None = None) -> str | None:
    config = config or default_config()
    return _first_match(text, config.elements)


def classify(
    title: str, content: str, config: ExtractionConfig | None = None
) -> tuple[str | None, str | None]:
    """Return ``(level, element)`` for a block; either may be ``None``."""
    text = f"{title} {content}"
    return classify_level(text, config), classify_element(text, config)
