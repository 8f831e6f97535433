"""Keyword and category tagging."""
from __future__ import annotations

from .config import ExtractionConfig, default_config


def generate_keywords(
    content: str,
    level: str | None,
    element: str | None,
    config: ExtractionConfig | None = None,
) -> list[str]:
    config = config or default_config()
    keywords = set()
    if level:
        keywords.add(level.lower())
    if element:
        keywords.add(element.lower())
    lowered = content.lower()
    for term in config.keyword_terms:
        if term in lowered:
            keywords.add(term)
    return sorted(keywords)


def determine_category(content: str, config: ExtractionConfig | None = None) -> str:
    config = config or default_config()
    lowered = content.lower()
    for category, terms in config.category_rules:
        if any(term in lowered for term in terms):
            return category
    return config.default_category
