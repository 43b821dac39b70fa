"""Collect the page images pdftocairo wrote into a workspace directory."""

import logging
import re
from pathlib import Path

from pdf_process.config import PDFTOCAIRO
from pdf_process.errors import MalformedOutput
from pdf_process.models import OutputFormat, RenderedImage
from pdf_process.parsing.text_parser import check_page_count

logger = logging.getLogger(__name__)


def page_file_pattern(prefix: str, fmt: OutputFormat) -> re.Pattern[str]:
    """Regex for ``<prefix>-<zero padded page>.<ext>`` file names."""
    return re.compile(rf"^{re.escape(prefix)}-(\d+)\.{re.escape(fmt.extension)}$")


def find_page_files(directory: Path, prefix: str, fmt: OutputFormat) -> dict[int, Path]:
    """Map page numbers to the rendered files found in directory."""
    pattern = page_file_pattern(prefix, fmt)
    found: dict[int, Path] = {}
    for entry in directory.iterdir():
        match = pattern.match(entry.name)
        if match and entry.is_file():
            found[int(match.group(1))] = entry
    return found


def collect_rendered_images(
    directory: Path,
    prefix: str,
    fmt: OutputFormat,
    first_page: int | None = None,
    last_page: int | None = None,
) -> list[RenderedImage]:
    """Load every expected page image from the workspace.

    The expected pages are the requested range; when the last page was not
    given, the range runs to the highest page found on disk.

    Args:
        directory: Workspace directory pdftocairo wrote into.
        prefix: File name prefix passed to pdftocairo.
        fmt: Output format the pages were rendered in.
        first_page: First requested page (defaults to 1).
        last_page: Last requested page, if given.

    Returns:
        Rendered images ordered by page number.

    Raises:
        PageOutOfRange: If the range runs past the last page of the document.
        MalformedOutput: If no image was written, a page inside the range is
            missing, or a file does not carry the format's magic number.
    """
    found = find_page_files(directory, prefix, fmt)
    if not found:
        raise MalformedOutput(PDFTOCAIRO, f"no {fmt.extension} files written to workspace")

    start = first_page or 1
    end = last_page if last_page is not None else max(found)
    expected = range(start, end + 1)

    missing = [page for page in expected if page not in found]
    if missing:
        if min(missing) > max(found):
            check_page_count(PDFTOCAIRO, min(missing) - start, start, end)
        raise MalformedOutput(PDFTOCAIRO, f"missing rendered pages {missing}")

    images: list[RenderedImage] = []
    for page in expected:
        data = found[page].read_bytes()
        if not fmt.matches(data):
            raise MalformedOutput(
                PDFTOCAIRO, f"page {page} is not a valid {fmt.value} image"
            )
        images.append(RenderedImage(data=data, format=fmt, page=page))

    logger.debug(f"Collected {len(images)} {fmt.value} pages from {directory}")
    return images
