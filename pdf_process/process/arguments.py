"""Argument vectors for pdfinfo, pdftotext and pdftocairo.

Builders are pure: typed options in, ordered argument list out. Values are
always separate list items; nothing is ever joined into a shell string.
Validation runs first so bad options fail before a process is spawned.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from pdf_process.config import PDFINFO, PDFTOCAIRO, PDFTOTEXT, PdfProcessSettings
from pdf_process.errors import InvalidArguments
from pdf_process.models import (
    InfoOptions,
    PageRangeOptions,
    RenderColor,
    RenderOptions,
    TextOptions,
)

# pdftotext writes to stdout when the output file is "-"
STDOUT = "-"


class ToolInvocation(BaseModel):
    """Executable and argument vector for one process."""

    model_config = ConfigDict(frozen=True)

    tool: str
    executable: str
    args: tuple[str, ...]


def validate_page_range(options: PageRangeOptions) -> None:
    """Reject page ranges outside 1-indexed inclusive bounds.

    Raises:
        InvalidArguments: If a page is below 1 or last_page < first_page.
    """
    first, last = options.first_page, options.last_page
    if first is not None and first < 1:
        raise InvalidArguments(f"first_page must be >= 1, got {first}")
    if last is not None and last < 1:
        raise InvalidArguments(f"last_page must be >= 1, got {last}")
    if first is not None and last is not None and last < first:
        raise InvalidArguments(f"last_page ({last}) is before first_page ({first})")


def validate_timeout(timeout: float | None) -> None:
    """Reject per-call deadlines that are not positive."""
    if timeout is not None and timeout <= 0:
        raise InvalidArguments(f"timeout must be positive, got {timeout}")


def validate_text_options(options: TextOptions) -> None:
    validate_page_range(options)
    if options.layout and options.raw:
        raise InvalidArguments("layout and raw text modes are mutually exclusive")


def validate_render_options(options: RenderOptions) -> None:
    """Check range, resolution and render controls.

    Raises:
        InvalidArguments: On any invalid combination.
    """
    validate_page_range(options)
    if options.dpi <= 0:
        raise InvalidArguments(f"dpi must be positive, got {options.dpi}")
    if options.scale_to is not None:
        for axis, size in (("x", options.scale_to.x), ("y", options.scale_to.y)):
            if size == 0 or size < -1:
                raise InvalidArguments(f"scale_to.{axis} must be positive or -1, got {size}")
    if options.crop is not None:
        crop = options.crop
        if crop.x < 0 or crop.y < 0:
            raise InvalidArguments("crop origin must not be negative")
        if crop.width <= 0 or crop.height <= 0:
            raise InvalidArguments("crop width and height must be positive")
    if options.transparent and not options.format.supports_transparency:
        raise InvalidArguments(f"{options.format.value} output cannot be transparent")


def _page_range_args(options: PageRangeOptions) -> list[str]:
    args: list[str] = []
    if options.first_page is not None:
        args.extend(["-f", str(options.first_page)])
    if options.last_page is not None:
        args.extend(["-l", str(options.last_page)])
    return args


def _path_arg(path: Path) -> str:
    """Absolute form of a path so poppler never reads it as an option."""
    return str(path.absolute())


def _password_args(options: PageRangeOptions) -> list[str]:
    return options.password.to_args() if options.password is not None else []


def build_info_args(
    options: InfoOptions, source_path: Path, settings: PdfProcessSettings
) -> ToolInvocation:
    """Build the pdfinfo invocation."""
    validate_page_range(options)

    args = _page_range_args(options)
    if options.iso_dates:
        args.append("-isodates")
    args.extend(_password_args(options))
    args.append(_path_arg(source_path))

    return ToolInvocation(
        tool=PDFINFO, executable=settings.executable(PDFINFO), args=tuple(args)
    )


def build_text_args(
    options: TextOptions, source_path: Path, settings: PdfProcessSettings
) -> ToolInvocation:
    """Build the pdftotext invocation, writing UTF-8 text to stdout."""
    validate_text_options(options)

    args = ["-enc", "UTF-8"]
    args.extend(_page_range_args(options))
    if options.layout:
        args.append("-layout")
    if options.raw:
        args.append("-raw")
    args.extend(_password_args(options))
    args.extend([_path_arg(source_path), STDOUT])

    return ToolInvocation(
        tool=PDFTOTEXT, executable=settings.executable(PDFTOTEXT), args=tuple(args)
    )


def build_render_args(
    options: RenderOptions,
    source_path: Path,
    output_prefix: Path,
    settings: PdfProcessSettings,
) -> ToolInvocation:
    """Build the pdftocairo invocation.

    pdftocairo writes one file per page named
    ``<output_prefix>-<page>.<ext>``, zero padding the page number to the
    width of the document's page count.

    Args:
        options: Render options.
        source_path: PDF path to read.
        output_prefix: Output path prefix inside the private workspace.
        settings: Settings providing the executable override.

    Returns:
        The invocation to run.
    """
    validate_render_options(options)

    args = [options.format.flag, "-r", str(options.dpi)]
    args.extend(_page_range_args(options))

    if options.scale_to is not None:
        args.extend(
            [
                "-scale-to-x",
                str(options.scale_to.x),
                "-scale-to-y",
                str(options.scale_to.y),
            ]
        )
    if options.crop is not None:
        crop = options.crop
        args.extend(
            ["-x", str(crop.x), "-y", str(crop.y), "-W", str(crop.width), "-H", str(crop.height)]
        )
    if options.color is RenderColor.GRAY:
        args.append("-gray")
    elif options.color is RenderColor.MONO:
        args.append("-mono")
    if options.transparent:
        args.append("-transp")
    if options.crop_box:
        args.append("-cropbox")
    if options.antialias is not None:
        args.extend(["-antialias", options.antialias.value])

    args.extend(_password_args(options))
    args.extend([_path_arg(source_path), _path_arg(output_prefix)])

    return ToolInvocation(
        tool=PDFTOCAIRO, executable=settings.executable(PDFTOCAIRO), args=tuple(args)
    )
