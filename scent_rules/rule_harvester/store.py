"""Rule list persistence."""
from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from .models import Rule


def dumps_rules(rules: Iterable[Rule]) -> str:
    return json.dumps([rule.to_dict() for rule in rules], indent=2, ensure_ascii=False)


def save_rules(path: Path, rules: Iterable[Rule]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = dumps_rules(rules)
    with path.open("w", encoding="utf-8") as fh:
        fh.write(payload)
        fh.write("\n")


def load_rules(path: Path) -> list[Rule]:
    with path.open("r", encoding="utf-8") as fh:
        return [Rule.from_dict(entry) for entry in json.load(fh)]
