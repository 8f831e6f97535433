"""Typed measurement extraction from rule text.

Every extractor takes ``(text, level, config)`` and returns a dict of the keys
it recognised, or an empty dict. :func:`extract_measurements` runs them in the
order held by the configuration and merges the results.
"""
from __future__ import annotations

import logging
import re
from typing import Any

from .config import ExtractionConfig, Extractor, default_config

logger = logging.getLogger(__name__)

WORD_TO_NUMBER = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}

_NUMBER_WORDS = "|".join(WORD_TO_NUMBER)
NUM = r"\d{1,3}(?:,\d{3})+|\d+"
DASH = r"[-–]"

SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n{2,}")

AREA_RANGE_RE = re.compile(
    rf"({NUM})\s*(?:square\s*feet\s*)?"
    rf"(?:to|{DASH}|and\s+no\s+more\s+than|and\s+not\s+more\s+than)\s*"
    rf"({NUM})\s*square\s*feet",
    re.IGNORECASE,
)
AREA_SINGLE_RE = re.compile(rf"(?:at\s+least\s*)?({NUM})\s*square\s*feet", re.IGNORECASE)
TIME_RE = re.compile(rf"\b(\d+|{_NUMBER_WORDS})\s*-?\s*minutes?\b", re.IGNORECASE)
WARNING_RE = re.compile(r"(\d+)\s*-?\s*second\s+warning", re.IGNORECASE)

NARRATIVE_HIDES_RE = re.compile(
    r"\bone,?\s+two,?\s+three,?\s+or\s+four\b(?:\s+of\s+the\s+(?:boxes|hides))?",
    re.IGNORECASE,
)
UNKNOWN_WORD_RE = re.compile(r"\bunknown\b", re.IGNORECASE)
HIDE_TABLE_ROW_RE = re.compile(
    rf"(\d+)(?:\s*{DASH}\s*(\d+))?\s*\(\s*(known|unknown)\s*\)", re.IGNORECASE
)
HIDE_EXPLICIT_RE = re.compile(
    rf"\bhides?\s*:\s*(\d+)(?:\s*{DASH}\s*(\d+))?\s*\(?\s*(known|unknown)\b", re.IGNORECASE
)
HIDE_RANGE_RE = re.compile(rf"\b(\d+)\s*(?:{DASH}|to)\s*(\d+)\s+hides?\b", re.IGNORECASE)
HIDE_COUNT_RE = re.compile(
    r"\b(\d+)(?!\s*(?:inch|inches|apart)\b)\s+(?:(?:known|unknown|total|possible)\s+)?hides?\b",
    re.IGNORECASE,
)
UNKNOWN_NUMBER_RE = re.compile(
    r"unknown\s+number|\bnumber\b[^.]{0,40}?\bunknown\b|\(\s*unknown\s*\)", re.IGNORECASE
)
KNOWN_FLAG_RE = re.compile(r"\(\s*known\s*\)", re.IGNORECASE)

INCH_RE = re.compile(
    rf"(at\s+least\s+)?({NUM})\s*(?:(?:to|{DASH})\s*({NUM})\s*)?(?:inch(?:es)?\b|\")",
    re.IGNORECASE,
)
HEIGHT_CUE_RE = re.compile(r"\b(?:height|tall|high)\b", re.IGNORECASE)
SPACING_CUE_RE = re.compile(r"\b(?:distance|spacing|apart)\b", re.IGNORECASE)
APART_RE = re.compile(rf"(at\s+least\s+)?({NUM})\s*(?:inch(?:es)?|\")\s*apart\b", re.IGNORECASE)

LEASH_RE = re.compile(r"(\d+)\s*-?\s*(?:foot|feet|ft\.?)\s+leash", re.IGNORECASE)
CONTAINERS_RE = re.compile(
    r"(\d+)\s*(?:identical\s*)?(?:cardboard\s*)?(?:box\s*)?containers\b", re.IGNORECASE
)

TARGET_ODORS = ("Birch", "Anise", "Clove", "Cypress")
_ODOR_RES = tuple(
    (odor, re.compile(rf"\b{odor}\b", re.IGNORECASE)) for odor in TARGET_ODORS
)

DISTRACTION_COUNT_RE = re.compile(
    rf"\b(\d+|{_NUMBER_WORDS})\s+(?:non-food\s+)?distractions?\b", re.IGNORECASE
)
NO_DISTRACTION_RE = re.compile(r"\bno\s+distractions?\b", re.IGNORECASE)
DISTRACTION_TYPES = (
    ("non-food", re.compile(r"\bnon-food\b", re.IGNORECASE)),
    ("food", re.compile(r"(?<!non-)\bfood\b", re.IGNORECASE)),
    ("auditory", re.compile(r"\bauditory\b", re.IGNORECASE)),
    ("visual", re.compile(r"\bvisual\b", re.IGNORECASE)),
    ("human", re.compile(r"\bhuman\b", re.IGNORECASE)),
    ("mimic", re.compile(r"\bmimic\b", re.IGNORECASE)),
)

REQUIRED_CALLS = (
    ("Alert", re.compile(r"\bmust\s+call\b[^.]*?\balert\b", re.IGNORECASE)),
    ("Finish", re.compile(r"\bmust\s+call\b[^.]*?\bfinish\b", re.IGNORECASE)),
)

ROWS_RE = re.compile(r"\b(\d+)\s+rows?\s+of\s+(\d+)\b", re.IGNORECASE)
CIRCLE_RE = re.compile(r"\bcircle\b", re.IGNORECASE)
FORMATION_RE = re.compile(r"\bformation\b", re.IGNORECASE)
U_FORMATION_RE = re.compile(r"[\"'“”]U[\"'“”]\s*-?\s*formation")

IDENTICAL_BOX_RE = re.compile(r"\bidentical\s+cardboard\s+box", re.IGNORECASE)
VARIOUS_TYPE_RE = re.compile(r"\bvarious\s+sizes?\s+and\s+types?\b", re.IGNORECASE)


def to_int(value: str) -> int:
    lowered = value.strip().lower()
    if lowered in WORD_TO_NUMBER:
        return WORD_TO_NUMBER[lowered]
    return int(lowered.replace(",", ""))


def split_sentences(text: str) -> list[str]:
    return [sentence for sentence in SENTENCE_SPLIT_RE.split(text) if sentence.strip()]


def _bounds(prefix: str, suffix: str, low: str, high: str | None) -> dict[str, Any]:
    minimum = to_int(low)
    if high is None:
        return {f"min_{prefix}_{suffix}": minimum}
    maximum = to_int(high)
    if maximum < minimum:
        minimum, maximum = maximum, minimum
    return {f"min_{prefix}_{suffix}": minimum, f"max_{prefix}_{suffix}": maximum}


def extract_area(text: str, level: str | None, config: ExtractionConfig) -> dict[str, Any]:
    match = AREA_RANGE_RE.search(text)
    if match:
        return _bounds("area", "sq_ft", match.group(1), match.group(2))
    match = AREA_SINGLE_RE.search(text)
    if match:
        return _bounds("area", "sq_ft", match.group(1), None)
    return {}


def extract_time_limit(text: str, level: str | None, config: ExtractionConfig) -> dict[str, Any]:
    match = TIME_RE.search(text)
    if not match:
        return {}
    return {"time_limit_minutes": to_int(match.group(1))}


def extract_warning(text: str, level: str | None, config: ExtractionConfig) -> dict[str, Any]:
    match = WARNING_RE.search(text)
    if not match:
        return {}
    return {"warning_seconds": int(match.group(1))}


def _hide_values(low: str, high: str | None, flag: str | None) -> dict[str, Any]:
    minimum = int(low)
    maximum = int(high) if high else minimum
    if maximum < minimum:
        minimum, maximum = maximum, minimum
    values: dict[str, Any] = {"min_hides": minimum, "max_hides": maximum}
    if flag is not None:
        values["hides_known"] = flag.lower() == "known"
    return values


def extract_hides(text: str, level: str | None, config: ExtractionConfig) -> dict[str, Any]:
    """Resolve the hide count, first matching rule wins.

    Master prose describes hides as "one, two, three, or four" without a
    numeric range, so the narrative form is tested before the table rows.
    """
    if NARRATIVE_HIDES_RE.search(text) and UNKNOWN_WORD_RE.search(text):
        return {"min_hides": 1, "max_hides": 4, "hides_known": False}

    values: dict[str, Any] = {}
    rows = HIDE_TABLE_ROW_RE.findall(text)
    if rows:
        index = config.level_index(level)
        if index is None or index >= len(rows):
            index = len(rows) - 1
        low, high, flag = rows[index]
        values = _hide_values(low, high or None, flag)
    else:
        match = HIDE_EXPLICIT_RE.search(text)
        if match:
            values = _hide_values(match.group(1), match.group(2), match.group(3))
        else:
            match = HIDE_RANGE_RE.search(text)
            if match:
                values = _hide_values(match.group(1), match.group(2), None)
            else:
                match = HIDE_COUNT_RE.search(text)
                if match:
                    values = _hide_values(match.group(1), None, None)

    if values and "hides_known" not in values:
        if UNKNOWN_NUMBER_RE.search(text):
            values["hides_known"] = False
        elif KNOWN_FLAG_RE.search(text):
            values["hides_known"] = True
        elif "hide" in text.lower():
            values["hides_known"] = True
    return values


def extract_height(text: str, level: str | None, config: ExtractionConfig) -> dict[str, Any]:
    for sentence in split_sentences(text):
        cue = HEIGHT_CUE_RE.search(sentence)
        if not cue:
            continue
        match = INCH_RE.search(sentence, cue.end())
        if match:
            return _bounds("height", "inches", match.group(2), match.group(3))
    return {}


def extract_spacing(text: str, level: str | None, config: ExtractionConfig) -> dict[str, Any]:
    for sentence in split_sentences(text):
        match = APART_RE.search(sentence)
        if match is None:
            cue = SPACING_CUE_RE.search(sentence)
            if not cue:
                continue
            match = INCH_RE.search(sentence, cue.end())
            if match is None:
                continue
        key = "min_spacing_inches" if match.group(1) else "container_spacing_inches"
        return {key: to_int(match.group(2))}
    return {}


def extract_leash(text: str, level: str | None, config: ExtractionConfig) -> dict[str, Any]:
    match = LEASH_RE.search(text)
    if not match:
        return {}
    return {"max_leash_length_feet": int(match.group(1))}


def extract_containers(text: str, level: str | None, config: ExtractionConfig) -> dict[str, Any]:
    match = CONTAINERS_RE.search(text)
    if not match:
        return {}
    return {"num_containers": int(match.group(1))}


def extract_target_odors(
    text: str, level: str | None, config: ExtractionConfig
) -> dict[str, Any]:
    odors = [odor for odor, pattern in _ODOR_RES if pattern.search(text)]
    if not odors:
        return {}
    return {"target_odors": odors}


def extract_distractions(
    text: str, level: str | None, config: ExtractionConfig
) -> dict[str, Any]:
    match = DISTRACTION_COUNT_RE.search(text)
    if match:
        values: dict[str, Any] = {"num_distractions": to_int(match.group(1))}
    elif NO_DISTRACTION_RE.search(text):
        return {"num_distractions": 0}
    else:
        return {}
    relevant = " ".join(
        sentence for sentence in split_sentences(text) if "distraction" in sentence.lower()
    )
    types = [label for label, pattern in DISTRACTION_TYPES if pattern.search(relevant)]
    if types:
        values["distraction_types"] = types
    return values


def extract_required_calls(
    text: str, level: str | None, config: ExtractionConfig
) -> dict[str, Any]:
    calls = [call for call, pattern in REQUIRED_CALLS if pattern.search(text)]
    if not calls:
        return {}
    return {"required_calls": calls}


def extract_arrangement(
    text: str, level: str | None, config: ExtractionConfig
) -> dict[str, Any]:
    parts: list[str] = []
    match = ROWS_RE.search(text)
    if match:
        parts.append(f"{match.group(1)} rows of {match.group(2)}")
    if CIRCLE_RE.search(text) and FORMATION_RE.search(text):
        parts.append("circle formation")
    if U_FORMATION_RE.search(text):
        parts.append("U formation")
    if not parts:
        return {}
    return {"container_arrangement": ", ".join(parts)}


def extract_container_type(
    text: str, level: str | None, config: ExtractionConfig
) -> dict[str, Any]:
    if IDENTICAL_BOX_RE.search(text):
        return {"container_type": "identical cardboard boxes"}
    if VARIOUS_TYPE_RE.search(text):
        return {"container_type": "various sizes and types"}
    return {}


DEFAULT_EXTRACTORS = (
    Extractor("area", extract_area),
    Extractor("time_limit", extract_time_limit),
    Extractor("warning", extract_warning),
    Extractor("hides", extract_hides),
    Extractor("height", extract_height),
    Extractor("spacing", extract_spacing),
    Extractor("leash", extract_leash),
    Extractor("containers", extract_containers),
    Extractor("target_odors", extract_target_odors),
    Extractor("distractions", extract_distractions),
    Extractor("required_calls", extract_required_calls),
    Extractor("arrangement", extract_arrangement),
    Extractor("container_type", extract_container_type),
)


def extract_measurements(
    text: str,
    level: str | None = None,
    config: ExtractionConfig | None = None,
) -> dict[str, Any]:
    """Run every configured extractor over ``text`` and merge the results."""
    config = config or default_config()
    measurements: dict[str, Any] = {}
    for extractor in config.extractors:
        found = extractor.handler(text, level, config)
        if found:
            logger.debug("Extractor %s found %s", extractor.name, sorted(found))
            measurements.update(found)
    return measurements
