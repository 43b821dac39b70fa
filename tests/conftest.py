"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_tool: Writes an executable stub script and returns its path
    - scratch_dir: Private temp area, checked for leftovers by tests
    - stub_settings: Settings pointing every tool at well-behaved stubs
    - sample_pdf: Two page PDF bytes
    - sample_pdf_path: The same PDF written to disk

Stub tools mimic the poppler command lines closely enough for the
operations to run end to end without poppler installed.
"""

import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from pdf_process import PdfProcessSettings
from tests.samples import STUB_PAGE_COUNT, build_pdf

FAKE_PDFINFO = r"""
import sys
from pathlib import Path

args = sys.argv[1:]
data = Path(args[-1]).read_bytes()
if not data.startswith(b"%PDF"):
    sys.stderr.write("Syntax Warning: May not be a PDF file (continuing anyway)\n")
    sys.exit(1)
if b"/Encrypt" in data:
    if "-upw" not in args and "-opw" not in args:
        sys.stderr.write("Command Line Error: Incorrect password\n")
        sys.exit(1)
print("Title:           Stub Document")
print("Author:          Test Suite")
print("Producer:        stub")
print("Custom Metadata: no")
print("Pages:           2")
print("Encrypted:       no")
print("Page size:       612 x 792 pts (letter)")
print("PDF version:     1.4")
"""

FAKE_PDFTOTEXT = r"""
import sys
from pathlib import Path

args = sys.argv[1:]
source = args[-2]
data = Path(source).read_bytes()
if not data.startswith(b"%PDF"):
    sys.stderr.write("Syntax Warning: May not be a PDF file (continuing anyway)\n")
    sys.exit(1)
first = int(args[args.index("-f") + 1]) if "-f" in args else 1
last = int(args[args.index("-l") + 1]) if "-l" in args else 2
if first > 2:
    sys.stderr.write(
        f"Wrong page range given: the first page ({first}) can not be after the last page (2).\n"
    )
    sys.exit(99)
for page in range(first, min(last, 2) + 1):
    sys.stdout.write(f"Text of page {page}\n\f")
"""

FAKE_PDFTOCAIRO = r"""
import sys
from pathlib import Path

PAGES = {pages}
MAGIC = {{
    "-png": ("png", b"\x89PNG\r\n\x1a\n"),
    "-jpeg": ("jpg", b"\xff\xd8\xff\xe0"),
    "-tiff": ("tif", b"II*\x00"),
}}

args = sys.argv[1:]
ext, magic = next(MAGIC[arg] for arg in args if arg in MAGIC)
source, prefix = args[-2], args[-1]
if not Path(source).read_bytes().startswith(b"%PDF"):
    sys.stderr.write("Syntax Warning: May not be a PDF file (continuing anyway)\n")
    sys.exit(1)
first = int(args[args.index("-f") + 1]) if "-f" in args else 1
last = min(int(args[args.index("-l") + 1]) if "-l" in args else PAGES, PAGES)
if first > PAGES:
    sys.stderr.write(
        f"Wrong page range given: the first page ({{first}}) can not be after the last page ({{PAGES}}).\n"
    )
    sys.exit(99)
width = len(str(PAGES))
for page in range(first, last + 1):
    Path(f"{{prefix}}-{{page:0{{width}}d}}.{{ext}}").write_bytes(
        magic + f"page={{page}} source={{source}}".encode()
    )
""".format(pages=STUB_PAGE_COUNT)


@pytest.fixture
def make_tool(tmp_path: Path) -> Callable[[str, str], str]:
    """Return a factory writing executable Python stubs.

    Returns:
        Callable taking a file name and a script body, returning the stub path.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def _make(name: str, body: str) -> str:
        path = bin_dir / name
        path.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
        path.chmod(0o755)
        return str(path)

    return _make


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Return an empty directory used as the temporary file area."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def stub_settings(make_tool: Callable[[str, str], str], scratch_dir: Path) -> PdfProcessSettings:
    """Settings pointing every tool at its stub."""
    return PdfProcessSettings(
        pdfinfo_path=make_tool("pdfinfo", FAKE_PDFINFO),
        pdftotext_path=make_tool("pdftotext", FAKE_PDFTOTEXT),
        pdftocairo_path=make_tool("pdftocairo", FAKE_PDFTOCAIRO),
        temp_dir=scratch_dir,
        timeout=30,
    )


@pytest.fixture
def sample_pdf() -> bytes:
    """Return a two page PDF."""
    return build_pdf(["Hello from page one", "Hello from page two"])


@pytest.fixture
def sample_pdf_path(tmp_path: Path, sample_pdf: bytes) -> Path:
    """Write the sample PDF to disk and return its path."""
    path = tmp_path / "sample.pdf"
    path.write_bytes(sample_pdf)
    return path
