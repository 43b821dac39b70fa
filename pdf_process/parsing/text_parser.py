"""Decoding and page splitting for pdftotext output."""

import logging

from pdf_process.config import PDFTOTEXT
from pdf_process.errors import MalformedOutput, PageOutOfRange
from pdf_process.models import ExtractedText, TextBlock

logger = logging.getLogger(__name__)

# pdftotext ends every page with a form feed
PAGE_END_CHARACTER = "\f"


def decode_text(raw: bytes) -> str:
    """Decode tool output as UTF-8, replacing invalid sequences.

    Isolated bad bytes become U+FFFD instead of failing the whole
    extraction. Windows line endings are normalized to ``\\n``.
    """
    text = raw.decode("utf-8", errors="replace")
    if "\ufffd" in text:
        logger.debug("Replaced invalid UTF-8 sequences in extracted text")
    return text.replace("\r\n", "\n")


def split_pages(text: str) -> list[str]:
    """Split text on page end characters.

    The final form feed terminates the last page rather than starting a new
    one, so the trailing empty segment is dropped.
    """
    pages = text.split(PAGE_END_CHARACTER)
    if len(pages) > 1 and pages[-1] == "":
        pages.pop()
    return pages


def check_page_count(tool: str, found: int, first_page: int, last_page: int | None) -> None:
    """Compare the pages a tool produced with an explicit range.

    poppler stops quietly at the last page of the document, so a range
    running past the end shows up as fewer pages than requested.

    Raises:
        PageOutOfRange: If fewer pages came back than the range asks for.
        MalformedOutput: If more pages came back than the range asks for.
    """
    if last_page is None:
        return
    expected = last_page - first_page + 1
    if found < expected:
        raise PageOutOfRange(
            tool,
            f"requested pages {first_page}-{last_page}, "
            f"document ends at page {first_page + found - 1}",
        )
    if found > expected:
        raise MalformedOutput(tool, f"expected {expected} pages, found {found}")


def parse_text(
    raw: bytes,
    *,
    split: bool = False,
    first_page: int | None = None,
    last_page: int | None = None,
) -> ExtractedText:
    """Turn raw pdftotext stdout into ExtractedText.

    Args:
        raw: pdftotext stdout bytes.
        split: Return one block per page.
        first_page: First requested page, used to number the blocks.
        last_page: Last requested page. When given, the number of pages
            found must match the range.

    Returns:
        ExtractedText with numbered per-page blocks, or a single block with
        page breaks turned into newlines.

    Raises:
        PageOutOfRange: If the range runs past the end of the document.
        MalformedOutput: If more pages came back than requested.
    """
    text = decode_text(raw)
    start = first_page or 1
    pages = split_pages(text)
    check_page_count(PDFTOTEXT, len(pages), start, last_page)

    if not split:
        return ExtractedText(
            blocks=[TextBlock(text="\n".join(pages))],
            split=False,
        )

    return ExtractedText(
        blocks=[TextBlock(page=start + offset, text=page) for offset, page in enumerate(pages)],
        split=True,
    )
