"""Runtime settings for poppler tool invocations.

Pydantic-based configuration. Operations use plain defaults unless a
settings object is passed in; ``get_settings()`` is the opt-in way to build
one from the environment (and a ``.env`` file).
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

PDFINFO = "pdfinfo"
PDFTOTEXT = "pdftotext"
PDFTOCAIRO = "pdftocairo"


class StderrPatterns(BaseModel):
    """Substrings matched against tool stderr to classify failures.

    Phrasing differs between poppler releases, so these are data rather than
    constants. Matching is best-effort: anything unmatched falls through to
    ProcessFailed.

    Attributes:
        not_pdf: Phrases meaning the input is not a PDF.
        password: Phrases meaning the password is missing or wrong.
        page_range: Phrases meaning the requested pages do not exist.
    """

    model_config = ConfigDict(frozen=True)

    not_pdf: tuple[str, ...] = ("May not be a PDF file",)
    password: tuple[str, ...] = ("Incorrect password",)
    page_range: tuple[str, ...] = ("Wrong page range given",)


class PdfProcessSettings(BaseModel):
    """Settings shared by every operation.

    Attributes:
        pdfinfo_path: Explicit pdfinfo executable (None resolves via PATH).
        pdftotext_path: Explicit pdftotext executable (None resolves via PATH).
        pdftocairo_path: Explicit pdftocairo executable (None resolves via PATH).
        timeout: Default deadline in seconds for each process (None waits forever).
        temp_dir: Parent directory for temporary files (None uses the system default).
        log_stderr: Log stderr of successful runs at debug level.
        patterns: Stderr phrases used for error classification.
    """

    model_config = ConfigDict(frozen=True)

    pdfinfo_path: str | None = Field(default=None, description="pdfinfo executable override")
    pdftotext_path: str | None = Field(default=None, description="pdftotext executable override")
    pdftocairo_path: str | None = Field(
        default=None, description="pdftocairo executable override"
    )
    timeout: float | None = Field(default=None, gt=0, description="Per-process deadline")
    temp_dir: Path | None = Field(default=None, description="Temporary file area")
    log_stderr: bool = Field(default=False, description="Log stderr of successful runs")
    patterns: StderrPatterns = Field(default_factory=StderrPatterns)

    @field_validator("pdfinfo_path", "pdftotext_path", "pdftocairo_path", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        """Treat empty or whitespace-only overrides as unset."""
        if isinstance(v, Path):
            return str(v)
        if isinstance(v, str):
            return v.strip() or None
        return v

    def executable(self, tool: str) -> str:
        """Resolve the executable to spawn for a tool.

        Args:
            tool: One of the bare tool names (pdfinfo, pdftotext, pdftocairo).

        Returns:
            The explicit override when set, otherwise the bare tool name.
        """
        overrides = {
            PDFINFO: self.pdfinfo_path,
            PDFTOTEXT: self.pdftotext_path,
            PDFTOCAIRO: self.pdftocairo_path,
        }
        if tool not in overrides:
            raise ValueError(f"Unknown tool: {tool}")
        return overrides[tool] or tool


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def get_settings() -> PdfProcessSettings:
    """Create settings from the environment.

    Loads a ``.env`` file first, then reads:
    PDF_PROCESS_PDFINFO, PDF_PROCESS_PDFTOTEXT, PDF_PROCESS_PDFTOCAIRO,
    PDF_PROCESS_TIMEOUT, PDF_PROCESS_TEMP_DIR and PDF_PROCESS_LOG_STDERR.

    Returns:
        Configured PdfProcessSettings instance.

    Raises:
        ValueError: If a value is invalid (e.g. a non-positive timeout).
    """
    load_dotenv()

    return PdfProcessSettings(
        pdfinfo_path=os.getenv("PDF_PROCESS_PDFINFO"),
        pdftotext_path=os.getenv("PDF_PROCESS_PDFTOTEXT"),
        pdftocairo_path=os.getenv("PDF_PROCESS_PDFTOCAIRO"),
        timeout=os.getenv("PDF_PROCESS_TIMEOUT") or None,
        temp_dir=os.getenv("PDF_PROCESS_TEMP_DIR") or None,
        log_stderr=_env_flag("PDF_PROCESS_LOG_STDERR"),
    )
