"""Data model shared by the rulebook harvester stages."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

LEVELS = ("Novice", "Advanced", "Excellent", "Master")
ELEMENTS = ("Container", "Interior", "Exterior", "Buried")

SOURCE_PARSED = "parsed"
SOURCE_AUTHORITATIVE = "authoritative"


@dataclass
class Chapter:
    """A ``CHAPTER <n>`` span of the joined rulebook text."""

    number: int
    start: int
    end: int
    text: str


@dataclass
class Section:
    """A ``Section <n>. <title>`` span inside a chapter."""

    chapter: int
    number: int
    title: str
    content: str

    @property
    def label(self) -> str:
        return f"Chapter {self.chapter}, Section {self.number}"


@dataclass
class Rule:
    """One normalized rule record."""

    section: str
    title: str
    content: str
    level: str | None = None
    element: str | None = None
    category: str = "General"
    keywords: list[str] = field(default_factory=list)
    measurements: dict[str, Any] = field(default_factory=dict)
    measurements_source: str = SOURCE_PARSED

    def to_dict(self) -> dict[str, object]:
        return {
            "section": self.section,
            "title": self.title,
            "content": self.content,
            "level": self.level,
            "element": self.element,
            "category": self.category,
            "keywords": list(self.keywords),
            "measurements": dict(self.measurements),
            "measurementsSource": self.measurements_source,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Rule:
        return cls(
            section=str(data.get("section", "")),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            level=data.get("level"),
            element=data.get("element"),
            category=str(data.get("category", "General")),
            keywords=list(data.get("keywords", []) or []),
            measurements=dict(data.get("measurements", {}) or {}),
            measurements_source=str(data.get("measurementsSource", SOURCE_PARSED)),
        )
