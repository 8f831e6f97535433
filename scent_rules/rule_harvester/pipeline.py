"""Single forward pass from rulebook text to rule records."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .classifier import classify
from .config import ExtractionConfig, default_config, resolve_min_pdf_chars
from .measurements import extract_measurements
from .models import Chapter, Rule
from .overrides import apply_overrides, load_overrides
from .pages import join_pages, load_pages
from .requirements import locate_class_blocks
from .segmenter import find_chapter, split_chapters, split_sections
from .tagger import determine_category, generate_keywords

logger = logging.getLogger(__name__)


def build_rule(
    section: str,
    title: str,
    content: str,
    level: str | None,
    element: str | None,
    config: ExtractionConfig,
) -> Rule | None:
    content = content.strip()
    if len(content) < config.min_content_chars:
        logger.debug("Skipping %s (%s): content too short", title, section)
        return None
    return Rule(
        section=section,
        title=title,
        content=content,
        level=level,
        element=element,
        category=determine_category(content, config),
        keywords=generate_keywords(content, level, element, config),
        measurements=extract_measurements(content, level, config),
    )


def _ordered_chapters(chapters: list[Chapter]) -> list[Chapter]:
    chosen: dict[int, Chapter] = {}
    for chapter in chapters:
        if chapter.number not in chosen:
            best = find_chapter(chapters, chapter.number)
            if best is not None:
                chosen[chapter.number] = best
    return sorted(chosen.values(), key=lambda chapter: chapter.start)


def _chapter_rules(chapter: Chapter, config: ExtractionConfig) -> list[Rule | None]:
    if chapter.number == config.requirements_chapter:
        return [
            build_rule(block.section, block.title, block.content, block.level, block.element, config)
            for block in locate_class_blocks(chapter, config)
        ]
    if config.general_chapters is not None and chapter.number not in config.general_chapters:
        return []
    results: list[Rule | None] = []
    for section in split_sections(chapter, min_chars=config.min_content_chars):
        level, element = classify(section.title, section.content, config)
        results.append(
            build_rule(section.label, section.title, section.content, level, element, config)
        )
    return results


def parse_text(text: str, config: ExtractionConfig | None = None) -> list[Rule]:
    config = config or default_config()
    chapters = split_chapters(text)
    if not chapters:
        logger.warning("No chapter headers found in %d characters of text", len(text))
        return []
    rules: list[Rule] = []
    for chapter in _ordered_chapters(chapters):
        chapter_rules = [rule for rule in _chapter_rules(chapter, config) if rule is not None]
        logger.debug("Chapter %d produced %d rules", chapter.number, len(chapter_rules))
        rules.extend(chapter_rules)
    logger.info("Extracted %d rules from %d chapters", len(rules), len(chapters))
    return rules


def parse_pages(pages: Iterable[str], config: ExtractionConfig | None = None) -> list[Rule]:
    return parse_text(join_pages(pages), config)


def harvest(
    source: Path,
    overrides_path: Path | None = None,
    *,
    config: ExtractionConfig | None = None,
    min_pdf_chars: int | None = None,
    pdf_backends: Iterable[str] | None = None,
) -> tuple[list[Rule], dict[str, Any]]:
    """Read ``source``, parse it and overlay any authoritative measurements.

    Raises :class:`~.pages.InputNotFoundError` when ``source`` is missing.
    """
    pages, meta = load_pages(
        source,
        min_chars=resolve_min_pdf_chars(min_pdf_chars),
        prefer_backends=pdf_backends,
    )
    rules = parse_pages(pages, config)
    overrides = load_overrides(overrides_path)
    meta["overridden"] = apply_overrides(rules, overrides)
    return rules, meta
