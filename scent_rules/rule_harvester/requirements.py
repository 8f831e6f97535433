"""Locate the per-class requirement blocks of the odor search chapter.

A ``<Element> <Level> Class :`` header counts only at the start of the chapter
text or after a run of at least two whitespace characters; the same words
quoted mid-sentence are body text. Headers and ``Section <n>.`` markers are
found in a single scan and each class block runs from the end of its header to
the next of those boundaries.
"""
from __future__ import annotations

import logging
import re
from bisect import bisect_right
from dataclasses import dataclass

from .config import ExtractionConfig, class_pairs, default_config
from .models import Chapter
from .segmenter import SECTION_RE

logger = logging.getLogger(__name__)


@dataclass
class ClassBlock:
    element: str
    level: str
    section: str
    content: str

    @property
    def title(self) -> str:
        return f"{self.element} {self.level} Requirements"


def _section_label(chapter: Chapter, markers: list[re.Match[str]], position: int) -> str:
    label = f"Chapter {chapter.number}"
    for marker in markers:
        if marker.start() >= position:
            break
        label = f"Chapter {chapter.number}, Section {marker.group(1)}"
    return label


def locate_class_blocks(
    chapter: Chapter, config: ExtractionConfig | None = None
) -> list[ClassBlock]:
    config = config or default_config()
    text = chapter.text
    headers = list(config.class_header.finditer(text))
    markers = list(SECTION_RE.finditer(text))
    boundaries = sorted({match.start() for match in headers} | {match.start() for match in markers})

    first_headers: dict[tuple[str, str], re.Match[str]] = {}
    for match in headers:
        first_headers.setdefault((match.group(1), match.group(2)), match)

    blocks: list[ClassBlock] = []
    for element, level in class_pairs():
        header = first_headers.get((element, level))
        if header is None:
            logger.debug("No %s %s Class header in chapter %d", element, level, chapter.number)
            continue
        index = bisect_right(boundaries, header.start())
        end = boundaries[index] if index < len(boundaries) else len(text)
        content = text[header.end():end].strip()
        if len(content) < config.min_class_block_chars:
            logger.debug(
                "Rejecting %s %s block: %d characters", element, level, len(content)
            )
            continue
        blocks.append(
            ClassBlock(
                element=element,
                level=level,
                section=_section_label(chapter, markers, header.start()),
                content=content,
            )
        )
    logger.info("Located %d class requirement blocks", len(blocks))
    return blocks
