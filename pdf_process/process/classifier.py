"""Map a failed process outcome to a structured error.

Stderr matching is substring based and best-effort: poppler's wording is
not a stable interface. Anything unmatched becomes ProcessFailed with the
raw stderr attached.
"""

import logging

from pdf_process.config import StderrPatterns
from pdf_process.errors import (
    IncorrectPassword,
    NotPdfFile,
    PageOutOfRange,
    PasswordRequired,
    PdfProcessError,
    PermissionDenied,
    ProcessFailed,
)
from pdf_process.process.runner import ProcessOutcome

logger = logging.getLogger(__name__)

# poppler utilities exit with 3 on PDF permission errors
PERMISSION_EXIT_CODE = 3


def _contains_any(text: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase in text for phrase in phrases)


def classify_failure(
    tool: str,
    outcome: ProcessOutcome,
    *,
    password_supplied: bool,
    patterns: StderrPatterns | None = None,
) -> PdfProcessError:
    """Build the error for a non-zero exit.

    Checked in order: not-a-PDF phrase, password phrase, page range phrase,
    permission exit code, then the ProcessFailed catch-all.

    Args:
        tool: Tool name used in error messages.
        outcome: The failed process outcome.
        password_supplied: Whether the caller gave a password, which decides
            between PasswordRequired and IncorrectPassword.
        patterns: Stderr phrases to match (defaults when None).

    Returns:
        The exception to raise. It is returned rather than raised so callers
        keep control of the traceback.
    """
    patterns = patterns or StderrPatterns()
    stderr = outcome.stderr_text
    exit_code = outcome.exit_code

    if _contains_any(stderr, patterns.not_pdf):
        error: PdfProcessError = NotPdfFile(tool, exit_code, stderr)
    elif _contains_any(stderr, patterns.password):
        error = IncorrectPassword(tool) if password_supplied else PasswordRequired(tool)
    elif _contains_any(stderr, patterns.page_range):
        error = PageOutOfRange(tool, stderr)
    elif exit_code == PERMISSION_EXIT_CODE:
        error = PermissionDenied(tool, exit_code, stderr)
    else:
        error = ProcessFailed(tool, exit_code, stderr)

    logger.info(f"{tool} failed with exit code {exit_code}: {type(error).__name__}")
    return error
