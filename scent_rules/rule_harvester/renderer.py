"""Rendering utilities for the parsed rules summary."""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .models import ELEMENTS, LEVELS, SOURCE_AUTHORITATIVE, Rule


def render_summary(rules: Iterable[Rule], output_path: Path) -> str:
    rules = list(rules)
    category_counts: Counter[str] = Counter(rule.category for rule in rules)
    overridden = sum(1 for rule in rules if rule.measurements_source == SOURCE_AUTHORITATIVE)
    lines = ["# Scent Work Rules", ""]
    lines.append(f"**Total rules:** {len(rules)} ({overridden} with authoritative measurements)")
    lines.append("")
    if category_counts:
        category_summary = ", ".join(
            f"{category} ({count})" for category, count in sorted(category_counts.items())
        )
        lines.append(f"**By category:** {category_summary}")
        lines.append("")
    lines.append("## Class Requirements")
    lines.append("")
    lines.append("| Element | Level | Hides | Area (sq ft) | Time (min) | Source |")
    lines.append("| --- | --- | --- | --- | --- | --- |")
    class_rules = [rule for rule in rules if rule.element and rule.level]
    for rule in sorted(class_rules, key=_class_order):
        lines.append(format_class_row(rule))
    lines.append("")
    lines.append("## General Rules")
    lines.append("")
    general = [rule for rule in rules if not (rule.element and rule.level)]
    if not general:
        lines.append("_No general rules parsed._")
    for rule in general:
        lines.append(f"- **{escape_cell(rule.section)}** {escape_cell(rule.title)} ({rule.category})")
    lines.append("")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    content = "\n".join(lines)
    output_path.write_text(content, encoding="utf-8")
    return content


def _class_order(rule: Rule) -> tuple[int, int]:
    element = ELEMENTS.index(rule.element) if rule.element in ELEMENTS else len(ELEMENTS)
    level = LEVELS.index(rule.level) if rule.level in LEVELS else len(LEVELS)
    return element, level


def format_class_row(rule: Rule) -> str:
    measurements = rule.measurements
    return (
        f"| {rule.element} | {rule.level} | {format_hides(measurements)} | "
        f"{format_range(measurements, 'min_area_sq_ft', 'max_area_sq_ft')} | "
        f"{measurements.get('time_limit_minutes', '')} | {rule.measurements_source} |"
    )


def format_range(measurements: Mapping[str, Any], low_key: str, high_key: str) -> str:
    low = measurements.get(low_key)
    high = measurements.get(high_key)
    if low is None:
        return ""
    if high is None or high == low:
        return str(low)
    return f"{low}-{high}"


def format_hides(measurements: Mapping[str, Any]) -> str:
    hides = format_range(measurements, "min_hides", "max_hides")
    if not hides or "hides_known" not in measurements:
        return hides
    return f"{hides} ({'known' if measurements['hides_known'] else 'unknown'})"


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|")
