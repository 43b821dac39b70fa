"""Public async operations: read info, extract text, render pages.

Each operation follows the same pipeline:

    validate options -> stage temp resources -> build argv -> run process
    -> classify a non-zero exit -> parse output

Temporary files and directories are scoped to the call and released on
every exit path. Results are all-or-nothing: either a fully parsed model
is returned or a PdfProcessError is raised.
"""

import asyncio
import logging
from pathlib import Path

from pdf_process.config import PdfProcessSettings
from pdf_process.errors import InvalidArguments
from pdf_process.models import (
    DocumentInfo,
    ExtractedText,
    InfoOptions,
    PdfSource,
    RenderedImage,
    RenderOptions,
    TextOptions,
)
from pdf_process.parsing import collect_rendered_images, decode_text, parse_info, parse_text
from pdf_process.process import (
    ProcessOutcome,
    ToolInvocation,
    build_info_args,
    build_render_args,
    build_text_args,
    classify_failure,
    render_workspace,
    run_process,
    staged_source,
)
from pdf_process.process.arguments import (
    validate_page_range,
    validate_render_options,
    validate_text_options,
    validate_timeout,
)

logger = logging.getLogger(__name__)

SourceLike = PdfSource | str | Path | bytes

# File name prefix for pages written into a render workspace
OUTPUT_PREFIX = "page"


async def _execute(
    invocation: ToolInvocation,
    *,
    password_supplied: bool,
    settings: PdfProcessSettings,
    timeout: float | None,
    cancel: asyncio.Event | None,
) -> ProcessOutcome:
    """Run an invocation and raise the classified error on a non-zero exit."""
    outcome = await run_process(
        invocation.executable,
        invocation.args,
        timeout=timeout if timeout is not None else settings.timeout,
        cancel=cancel,
    )

    if not outcome.succeeded:
        raise classify_failure(
            invocation.tool,
            outcome,
            password_supplied=password_supplied,
            patterns=settings.patterns,
        )

    if settings.log_stderr and outcome.stderr:
        logger.debug(f"{invocation.tool} stderr: {outcome.stderr_text.strip()}")

    return outcome


async def read_info(
    source: SourceLike,
    options: InfoOptions | None = None,
    *,
    settings: PdfProcessSettings | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> DocumentInfo:
    """Read document metadata with pdfinfo.

    Args:
        source: PDF path, bytes, or PdfSource.
        options: pdfinfo options (defaults when None).
        settings: Executable overrides, timeout and patterns.
        timeout: Deadline in seconds, overriding settings.timeout.
        cancel: Event that kills the process when set.

    Returns:
        Parsed DocumentInfo.

    Raises:
        PdfProcessError: Any subclass from the error taxonomy.
    """
    settings = settings or PdfProcessSettings()
    options = options or InfoOptions()
    pdf = PdfSource.coerce(source)
    validate_page_range(options)
    validate_timeout(timeout)

    with staged_source(pdf, settings.temp_dir) as path:
        invocation = build_info_args(options, path, settings)
        outcome = await _execute(
            invocation,
            password_supplied=options.password is not None,
            settings=settings,
            timeout=timeout,
            cancel=cancel,
        )

    info = parse_info(decode_text(outcome.stdout))
    logger.info(f"Read info for {pdf.path or 'in-memory PDF'} ({info.page_count} pages)")
    return info


async def extract_text(
    source: SourceLike,
    options: TextOptions | None = None,
    *,
    settings: PdfProcessSettings | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> ExtractedText:
    """Extract text with pdftotext.

    Args:
        source: PDF path, bytes, or PdfSource.
        options: pdftotext options; ``split_pages`` selects per-page blocks.
        settings: Executable overrides, timeout and patterns.
        timeout: Deadline in seconds, overriding settings.timeout.
        cancel: Event that kills the process when set.

    Returns:
        ExtractedText with one block per page, or a single block.

    Raises:
        PdfProcessError: Any subclass from the error taxonomy.
    """
    settings = settings or PdfProcessSettings()
    options = options or TextOptions()
    pdf = PdfSource.coerce(source)
    validate_text_options(options)
    validate_timeout(timeout)

    with staged_source(pdf, settings.temp_dir) as path:
        invocation = build_text_args(options, path, settings)
        outcome = await _execute(
            invocation,
            password_supplied=options.password is not None,
            settings=settings,
            timeout=timeout,
            cancel=cancel,
        )

    return parse_text(
        outcome.stdout,
        split=options.split_pages,
        first_page=options.first_page,
        last_page=options.last_page,
    )


async def render(
    source: SourceLike,
    options: RenderOptions | None = None,
    *,
    settings: PdfProcessSettings | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> list[RenderedImage]:
    """Render a page range with a single pdftocairo process.

    Pages are written into a private temporary directory, loaded, and the
    directory is removed before returning.

    Args:
        source: PDF path, bytes, or PdfSource.
        options: Render options; no page range renders every page.
        settings: Executable overrides, timeout and patterns.
        timeout: Deadline in seconds, overriding settings.timeout.
        cancel: Event that kills the process when set.

    Returns:
        One RenderedImage per page, ordered by page number.

    Raises:
        PdfProcessError: Any subclass from the error taxonomy.
    """
    settings = settings or PdfProcessSettings()
    options = options or RenderOptions()
    pdf = PdfSource.coerce(source)
    validate_render_options(options)
    validate_timeout(timeout)

    with (
        staged_source(pdf, settings.temp_dir) as path,
        render_workspace(settings.temp_dir) as workspace,
    ):
        invocation = build_render_args(options, path, workspace / OUTPUT_PREFIX, settings)
        await _execute(
            invocation,
            password_supplied=options.password is not None,
            settings=settings,
            timeout=timeout,
            cancel=cancel,
        )
        images = collect_rendered_images(
            workspace,
            OUTPUT_PREFIX,
            options.format,
            first_page=options.first_page,
            last_page=options.last_page,
        )

    logger.info(f"Rendered {len(images)} {options.format.value} pages")
    return images


async def render_page(
    source: SourceLike,
    page: int,
    options: RenderOptions | None = None,
    *,
    settings: PdfProcessSettings | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> RenderedImage:
    """Render a single page. Any page range in options is replaced."""
    options = (options or RenderOptions()).model_copy(
        update={"first_page": page, "last_page": page}
    )
    images = await render(source, options, settings=settings, timeout=timeout, cancel=cancel)
    return images[0]


async def render_pages(
    source: SourceLike,
    pages: list[int],
    options: RenderOptions | None = None,
    *,
    settings: PdfProcessSettings | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> list[RenderedImage]:
    """Render the listed pages concurrently, one process per page.

    The source is staged once and shared read-only by every page render.
    If any page fails, the remaining renders are cancelled and the first
    error is raised.

    Args:
        source: PDF path, bytes, or PdfSource.
        pages: 1-indexed page numbers, rendered in this order.
        options: Render options; any page range is replaced per page.
        settings: Executable overrides, timeout and patterns.
        timeout: Per-process deadline in seconds.
        cancel: Event that kills every process when set.

    Returns:
        Rendered images in the order of ``pages``.

    Raises:
        PdfProcessError: Any subclass from the error taxonomy.
    """
    settings = settings or PdfProcessSettings()
    options = options or RenderOptions()
    pdf = PdfSource.coerce(source)

    if not pages:
        raise InvalidArguments("pages must not be empty")
    validate_timeout(timeout)
    for page in pages:
        validate_render_options(options.model_copy(update={"first_page": page, "last_page": page}))

    with staged_source(pdf, settings.temp_dir) as path:
        shared = PdfSource.from_path(path)
        tasks = [
            asyncio.ensure_future(
                render_page(
                    shared, page, options, settings=settings, timeout=timeout, cancel=cancel
                )
            )
            for page in pages
        ]
        try:
            return list(await asyncio.gather(*tasks))
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
