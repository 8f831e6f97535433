"""Page sources: turn a rulebook file into ordered page strings."""
from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from .config import resolve_backend_order

logger = logging.getLogger(__name__)

PAGE_BREAK = "\f"


class InputNotFoundError(FileNotFoundError):
    """The required rulebook source does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Rulebook source not found: {path}")
        self.path = path


def join_pages(pages: Iterable[str]) -> str:
    """Concatenate pages in order, each followed by a newline."""
    return "".join(f"{page}\n" for page in pages)


def load_pages(
    path: Path,
    *,
    min_chars: int = 200,
    prefer_backends: Iterable[str] | None = None,
) -> tuple[list[str], dict[str, Any]]:
    if not path.is_file():
        raise InputNotFoundError(path)
    if path.suffix.lower() == ".pdf":
        return extract_pdf_pages(path, min_chars=min_chars, prefer_backends=prefer_backends)
    with path.open("r", encoding="utf-8", errors="ignore") as fh:
        text = fh.read()
    pages = text.split(PAGE_BREAK)
    meta = _empty_meta(len(text.encode("utf-8")))
    meta.update(backend="text", chars=len(text), pages=len(pages))
    return pages, meta


def _empty_meta(byte_size: int) -> dict[str, Any]:
    return {
        "backend": "none",
        "bytes": byte_size,
        "chars": 0,
        "pages": 0,
        "warnings": [],
        "repaired": False,
        "error": None,
    }


def extract_pdf_pages(
    path: Path,
    *,
    min_chars: int = 200,
    prefer_backends: Iterable[str] | None = None,
) -> tuple[list[str], dict[str, Any]]:
    """Read per-page text from a PDF, trying backends in order.

    A backend name is ``pypdf`` or ``pdfminer``, optionally prefixed with
    ``pikepdf+`` to read a pikepdf-rewritten copy (repairs broken xref
    tables). The first backend yielding ``min_chars`` characters wins;
    otherwise no pages are returned and ``meta`` records why.
    """
    meta = _empty_meta(path.stat().st_size)
    best_pages: list[str] = []
    with tempfile.TemporaryDirectory(prefix="rules_pdf_") as tmp_dir:
        repaired_copy: Path | None = None
        for name in resolve_backend_order(prefer_backends):
            repair, _, reader_name = name.rpartition("+")
            reader = PAGE_READERS.get(reader_name)
            try:
                if reader is None or repair not in ("", "pikepdf"):
                    raise RuntimeError(f"unknown backend: {name}")
                source = path
                if repair:
                    if repaired_copy is None:
                        repaired_copy = _repair_with_pikepdf(path, Path(tmp_dir))
                    source = repaired_copy
                pages = reader(source)
            except Exception as exc:
                logger.debug("PDF backend %s failed for %s: %s", name, path, exc)
                meta["error"] = str(exc)
                meta["warnings"].append(f"{name}: {exc}")
                continue

            chars = sum(len(page) for page in pages)
            if chars > meta["chars"]:
                best_pages = pages
                meta.update(backend=name, chars=chars, pages=len(pages), repaired=bool(repair))
            if chars >= min_chars:
                break
            meta["warnings"].append(f"{name}: {chars} characters, fewer than {min_chars}")

    if meta["chars"] < min_chars:
        logger.warning("No usable text layer in %s (%d characters)", path, meta["chars"])
        meta.update(backend="none", pages=0)
        return [], meta
    meta["error"] = None
    logger.info("Read %d pages from %s with %s", meta["pages"], path, meta["backend"])
    return best_pages, meta


def _pypdf_pages(path: Path) -> list[str]:
    from pypdf import PdfReader

    return [page.extract_text() or "" for page in PdfReader(str(path)).pages]


def _pdfminer_pages(path: Path) -> list[str]:
    from pdfminer.high_level import extract_text

    pages = (extract_text(str(path)) or "").split(PAGE_BREAK)
    # pdfminer ends the last page with a form feed as well.
    if pages and not pages[-1].strip():
        pages.pop()
    return pages


PAGE_READERS: dict[str, Callable[[Path], list[str]]] = {
    "pypdf": _pypdf_pages,
    "pdfminer": _pdfminer_pages,
}


def _repair_with_pikepdf(source: Path, temp_dir: Path) -> Path:
    from pikepdf import Pdf

    repaired = temp_dir / "repaired.pdf"
    with Pdf.open(str(source)) as pdf:
        pdf.save(str(repaired))
    return repaired
