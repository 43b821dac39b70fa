"""Integration tests against the real poppler command-line tools.

No stubs - runs pdfinfo, pdftotext and pdftocairo on generated PDFs,
including an RC4 encrypted copy produced with pypdf.

Skipped when the tools are not on PATH.
"""
