"""Extraction tables and run settings for the rulebook harvester."""
from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, NamedTuple

from .models import ELEMENTS, LEVELS

logger = logging.getLogger(__name__)

DEFAULT_PDF_BACKENDS = [
    "pypdf",
    "pdfminer",
    "pikepdf+pypdf",
    "pikepdf+pdfminer",
]

DEFAULT_MIN_PDF_CHARS = 200

KEYWORD_TERMS = (
    "area",
    "size",
    "time",
    "limit",
    "hide",
    "hides",
    "search",
    "handler",
    "dog",
    "leash",
    "judge",
    "warning",
    "terrain",
    "container",
    "interior",
    "exterior",
    "buried",
    "elimination",
    "fault",
    "requirement",
    "minimum",
    "maximum",
    "distraction",
    "inaccessible",
    "accessible",
    "qualification",
    "qualifying",
    "score",
    "points",
)

CATEGORY_RULES = (
    ("Search Area", ("area", "size")),
    ("Time Limit", ("time", "limit")),
    ("Hides", ("hide",)),
    ("Equipment", ("leash", "equipment")),
    ("Handler Requirements", ("handler", "conduct")),
    ("Judging", ("judge", "score")),
    ("Faults and Eliminations", ("fault", "elimination")),
)

DEFAULT_CATEGORY = "General"

# A class header starts the chapter text or follows two or more whitespace characters.
CLASS_HEADER_RE = re.compile(
    rf"(?:^|(?<=\s\s))({'|'.join(ELEMENTS)})\s+({'|'.join(LEVELS)})\s+Class\s*:"
)


class Extractor(NamedTuple):
    name: str
    handler: Callable[[str, str | None, ExtractionConfig], dict[str, Any]]


def _word_patterns(labels: Iterable[str]) -> tuple[tuple[str, re.Pattern[str]], ...]:
    return tuple(
        (label, re.compile(rf"\b{re.escape(label)}\b", re.IGNORECASE)) for label in labels
    )


@dataclass(frozen=True)
class ExtractionConfig:
    """Ordered, immutable pattern tables passed through every stage."""

    levels: tuple[tuple[str, re.Pattern[str]], ...]
    elements: tuple[tuple[str, re.Pattern[str]], ...]
    extractors: tuple[Extractor, ...]
    hide_level_index: tuple[tuple[str, int], ...]
    keyword_terms: tuple[str, ...] = KEYWORD_TERMS
    category_rules: tuple[tuple[str, tuple[str, ...]], ...] = CATEGORY_RULES
    default_category: str = DEFAULT_CATEGORY
    class_header: re.Pattern[str] = CLASS_HEADER_RE
    min_content_chars: int = 10
    min_class_block_chars: int = 50
    requirements_chapter: int = 7
    general_chapters: tuple[int, ...] | None = None

    def level_index(self, level: str | None) -> int | None:
        for label, index in self.hide_level_index:
            if label == level:
                return index
        return None


def build_config(**overrides: Any) -> ExtractionConfig:
    """Build the default configuration, replacing any named fields."""
    from .measurements import DEFAULT_EXTRACTORS

    values: dict[str, Any] = {
        "levels": _word_patterns(LEVELS),
        # Element tests run Interior, Exterior, Container, Buried.
        "elements": _word_patterns(("Interior", "Exterior", "Container", "Buried")),
        "extractors": DEFAULT_EXTRACTORS,
        "hide_level_index": tuple((level, index) for index, level in enumerate(LEVELS)),
    }
    values.update(overrides)
    return ExtractionConfig(**values)


@lru_cache(maxsize=1)
def default_config() -> ExtractionConfig:
    return build_config()


def class_pairs() -> tuple[tuple[str, str], ...]:
    return tuple((element, level) for element in ELEMENTS for level in LEVELS)


def _split_names(values: Iterable[str]) -> list[str]:
    names = (value.strip() for value in values if value)
    return list(dict.fromkeys(name for name in names if name))


def resolve_backend_order(prefer_backends: Iterable[str] | None) -> list[str]:
    """Explicit backends, else ``RULES_PDF_BACKENDS``, else the defaults."""
    order = _split_names(prefer_backends or ())
    if not order:
        order = _split_names(os.environ.get("RULES_PDF_BACKENDS", "").split(","))
    return order or list(DEFAULT_PDF_BACKENDS)


def resolve_min_pdf_chars(value: int | None) -> int:
    if value is None:
        raw = os.environ.get("RULES_MIN_PDF_CHARS", "")
        try:
            value = int(raw) if raw else DEFAULT_MIN_PDF_CHARS
        except ValueError:
            logger.warning("Ignoring RULES_MIN_PDF_CHARS=%r: not an integer", raw)
            value = DEFAULT_MIN_PDF_CHARS
    return max(value, 0)
