"""Scoped temporary resources for a single tool invocation.

Each operation gets its own temp file (for in-memory sources) and its own
temp directory (for rendered pages). Both are released on every exit path,
including timeouts and task cancellation.
"""

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pdf_process.errors import InvalidArguments
from pdf_process.models import PdfSource

logger = logging.getLogger(__name__)

TEMP_PREFIX = "pdf-process-"


@contextmanager
def staged_source(source: PdfSource, temp_dir: Path | None = None) -> Iterator[Path]:
    """Yield a filesystem path holding the PDF.

    Path sources pass through untouched. Buffers are written to a private
    temporary file which is deleted when the context exits.

    Args:
        source: The PDF to stage.
        temp_dir: Parent directory for the temporary file.

    Yields:
        Path the external tool can read.

    Raises:
        InvalidArguments: If a path source does not point to a file.
    """
    if source.path is not None:
        if not source.path.is_file():
            raise InvalidArguments(f"PDF file not found: {source.path}")
        yield source.path
        return

    fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=".pdf", dir=temp_dir)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(source.data or b"")
        logger.debug(f"Staged {len(source.data or b'')} byte buffer at {path}")
        yield path
    finally:
        path.unlink(missing_ok=True)


@contextmanager
def render_workspace(temp_dir: Path | None = None) -> Iterator[Path]:
    """Yield a private temporary directory for rendered pages."""
    with tempfile.TemporaryDirectory(prefix=TEMP_PREFIX, dir=temp_dir) as directory:
        yield Path(directory)
