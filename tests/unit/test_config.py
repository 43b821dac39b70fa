"""Unit tests for settings."""

from pathlib import Path

import pytest
import pytest_check as check
from pydantic import ValidationError

from pdf_process.config import PdfProcessSettings, get_settings

ENV_VARS = [
    "PDF_PROCESS_PDFINFO",
    "PDF_PROCESS_PDFTOTEXT",
    "PDF_PROCESS_PDFTOCAIRO",
    "PDF_PROCESS_TIMEOUT",
    "PDF_PROCESS_TEMP_DIR",
    "PDF_PROCESS_LOG_STDERR",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """Clear settings variables and run from a directory without a .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestPdfProcessSettings:
    """Tests for the settings model."""

    def test_defaults_resolve_bare_names(self) -> None:
        """Without overrides tools are looked up on PATH by name."""
        settings = PdfProcessSettings()

        check.equal(settings.executable("pdfinfo"), "pdfinfo")
        check.equal(settings.executable("pdftotext"), "pdftotext")
        check.equal(settings.executable("pdftocairo"), "pdftocairo")
        check.is_none(settings.timeout)

    def test_overrides(self) -> None:
        """Explicit paths win; blank overrides count as unset."""
        settings = PdfProcessSettings(
            pdftocairo_path=Path("/opt/bin/pdftocairo"), pdftotext_path="  "
        )

        check.equal(settings.executable("pdftocairo"), "/opt/bin/pdftocairo")
        check.equal(settings.executable("pdftotext"), "pdftotext")

    def test_unknown_tool(self) -> None:
        """Only the three poppler tools resolve."""
        with pytest.raises(ValueError, match="Unknown tool"):
            PdfProcessSettings().executable("pdfimages")

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        """Non-positive deadlines are rejected."""
        with pytest.raises(ValidationError):
            PdfProcessSettings(timeout=timeout)


class TestGetSettings:
    """Tests for environment-driven settings."""

    def test_reads_environment(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Every variable maps onto its field."""
        clean_env.setenv("PDF_PROCESS_PDFINFO", "/usr/local/bin/pdfinfo")
        clean_env.setenv("PDF_PROCESS_TIMEOUT", "12.5")
        clean_env.setenv("PDF_PROCESS_TEMP_DIR", str(tmp_path))
        clean_env.setenv("PDF_PROCESS_LOG_STDERR", "true")

        settings = get_settings()

        check.equal(settings.executable("pdfinfo"), "/usr/local/bin/pdfinfo")
        check.equal(settings.timeout, 12.5)
        check.equal(settings.temp_dir, tmp_path)
        check.is_true(settings.log_stderr)

    def test_empty_environment_gives_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        """Unset variables leave defaults in place."""
        assert get_settings() == PdfProcessSettings()

    def test_invalid_timeout(self, clean_env: pytest.MonkeyPatch) -> None:
        """A bad timeout value raises ValueError."""
        clean_env.setenv("PDF_PROCESS_TIMEOUT", "-3")

        with pytest.raises(ValueError):
            get_settings()
