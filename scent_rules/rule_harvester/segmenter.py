"""Chapter and section segmentation of the joined rulebook text."""
from __future__ import annotations

import logging
import re

from .models import Chapter, Section

logger = logging.getLogger(__name__)

CHAPTER_RE = re.compile(r"CHAPTER\s+(\d+)")
SECTION_RE = re.compile(r"Section\s+(\d+)\.")
TITLE_BREAK_RE = re.compile(r"\n|\s{2,}|(?<=[a-z0-9)])\.\s")

MAX_TITLE_LENGTH = 80


def split_chapters(text: str) -> list[Chapter]:
    """Split ``text`` into chapter spans.

    A repeated header carrying the same chapter number is a running page
    header and stays inside the current span.
    """
    starts: list[tuple[int, int]] = []
    for match in CHAPTER_RE.finditer(text):
        number = int(match.group(1))
        if starts and starts[-1][0] == number:
            continue
        starts.append((number, match.start()))
    chapters: list[Chapter] = []
    for index, (number, start) in enumerate(starts):
        end = starts[index + 1][1] if index + 1 < len(starts) else len(text)
        body = strip_page_headers(text[start:end], number)
        chapters.append(Chapter(number=number, start=start, end=end, text=body))
    logger.debug("Found %d chapter spans", len(chapters))
    return chapters


def strip_page_headers(text: str, number: int) -> str:
    """Remove ``CHAPTER <n> <page>`` running headers left by the page join."""
    pattern = re.compile(rf"CHAPTER\s+{number}\s+\d+\b")
    return pattern.sub("", text)


def find_chapter(chapters: list[Chapter], number: int) -> Chapter | None:
    candidates = [chapter for chapter in chapters if chapter.number == number]
    if not candidates:
        return None
    # Table of contents entries produce short spans for the same number.
    return max(candidates, key=lambda chapter: len(chapter.text))


def section_title(header_tail: str) -> str:
    title = header_tail.lstrip()
    match = TITLE_BREAK_RE.search(title)
    if match:
        title = title[: match.start()]
    title = title.strip()
    if len(title) > MAX_TITLE_LENGTH:
        title = title[:MAX_TITLE_LENGTH].rstrip()
    return title


def split_sections(chapter: Chapter, *, min_chars: int = 10) -> list[Section]:
    headers = list(SECTION_RE.finditer(chapter.text))
    sections: list[Section] = []
    for index, match in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(chapter.text)
        span = chapter.text[match.end():end]
        title = section_title(span)
        body = span.lstrip()
        content = body[len(title):].strip() if body.startswith(title) else body.strip()
        if len(content) < min_chars:
            logger.debug(
                "Skipping Chapter %d, Section %s: %d characters of content",
                chapter.number,
                match.group(1),
                len(content),
            )
            continue
        sections.append(
            Section(
                chapter=chapter.number,
                number=int(match.group(1)),
                title=title,
                content=content,
            )
        )
    return sections
