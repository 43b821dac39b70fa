"""Unit tests for scoped temporary resources."""

from pathlib import Path

import pytest
import pytest_check as check

from pdf_process.errors import InvalidArguments
from pdf_process.models import PdfSource
from pdf_process.process.resources import render_workspace, staged_source


class TestStagedSource:
    """Tests for staging PDFs on disk."""

    def test_path_source_passes_through(self, sample_pdf_path: Path, scratch_dir: Path) -> None:
        """Existing files are used in place without copying."""
        with staged_source(PdfSource.from_path(sample_pdf_path), scratch_dir) as path:
            check.equal(path, sample_pdf_path)
            check.equal(list(scratch_dir.iterdir()), [])

    def test_missing_path_is_invalid(self, tmp_path: Path) -> None:
        """A path that is not a file is rejected."""
        with pytest.raises(InvalidArguments, match="not found"):
            with staged_source(PdfSource.from_path(tmp_path / "missing.pdf")):
                pass

    def test_buffer_is_written_and_removed(self, sample_pdf: bytes, scratch_dir: Path) -> None:
        """Buffers get a private temp file deleted on exit."""
        with staged_source(PdfSource.from_bytes(sample_pdf), scratch_dir) as path:
            check.equal(path.parent, scratch_dir)
            check.equal(path.suffix, ".pdf")
            check.equal(path.read_bytes(), sample_pdf)

        assert not path.exists()

    def test_buffer_removed_on_error(self, sample_pdf: bytes, scratch_dir: Path) -> None:
        """The temp file is removed when the body raises."""
        with pytest.raises(RuntimeError):
            with staged_source(PdfSource.from_bytes(sample_pdf), scratch_dir):
                raise RuntimeError("boom")

        assert list(scratch_dir.iterdir()) == []

    def test_concurrent_stagings_are_distinct(self, sample_pdf: bytes, scratch_dir: Path) -> None:
        """Two stagings of the same bytes never share a file."""
        source = PdfSource.from_bytes(sample_pdf)

        with staged_source(source, scratch_dir) as first, staged_source(source, scratch_dir) as second:
            assert first != second


class TestRenderWorkspace:
    """Tests for the render output directory."""

    def test_directory_removed_with_contents(self, scratch_dir: Path) -> None:
        """The workspace and everything in it is deleted on exit."""
        with render_workspace(scratch_dir) as workspace:
            (workspace / "page-1.png").write_bytes(b"x")
            check.is_true(workspace.is_dir())

        check.is_false(workspace.exists())
        check.equal(list(scratch_dir.iterdir()), [])

    def test_directory_removed_on_error(self, scratch_dir: Path) -> None:
        """Errors inside the block still clean up."""
        with pytest.raises(RuntimeError):
            with render_workspace(scratch_dir) as workspace:
                (workspace / "partial.png").write_bytes(b"x")
                raise RuntimeError("boom")

        assert list(scratch_dir.iterdir()) == []
