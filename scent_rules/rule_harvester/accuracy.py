"""Check parsed measurements against hand-written expectations."""
from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from .models import Rule


@dataclass
class CaseResult:
    case_id: str
    element: str
    level: str
    errors: list[str] = field(default_factory=list)
    notes: str | None = None

    @property
    def passed(self) -> bool:
        return not self.errors


def load_cases(path: Path) -> list[dict[str, Any]]:
    with path.open("r", encoding="utf-8") as fh:
        return cast(list[dict[str, Any]], json.load(fh))


def index_rules(rules: Iterable[Rule]) -> dict[tuple[str, str], Rule]:
    indexed: dict[tuple[str, str], Rule] = {}
    for rule in rules:
        if rule.element and rule.level:
            indexed.setdefault((rule.element, rule.level), rule)
    return indexed


def check_case(case: Mapping[str, Any], rules: Mapping[tuple[str, str], Rule]) -> CaseResult:
    element = str(case.get("element", ""))
    level = str(case.get("level", ""))
    result = CaseResult(
        case_id=str(case.get("id", f"{element}-{level}")),
        element=element,
        level=level,
        notes=case.get("notes"),
    )
    rule = rules.get((element, level))
    if rule is None:
        result.errors.append(f"No rule parsed for {element} {level}")
        return result
    expected = cast(Mapping[str, Any], case.get("expected", {}) or {})
    for key, value in expected.items():
        if key not in rule.measurements:
            result.errors.append(f"{key} missing: expected {value!r}")
        elif rule.measurements[key] != value:
            result.errors.append(
                f"{key} mismatch: expected {value!r}, got {rule.measurements[key]!r}"
            )
    return result


def check_cases(rules: Iterable[Rule], cases: Iterable[Mapping[str, Any]]) -> list[CaseResult]:
    indexed = index_rules(rules)
    return [check_case(case, indexed) for case in cases]
