"""Unit tests for individual components in isolation.

Ensures fast execution with no poppler installation.

Coverage:
    - models/: Pydantic validation of sources, passwords and options
    - process/: Argument vectors, process runner, classifier, temp resources
    - parsing/: pdfinfo, pdftotext and pdftocairo output parsing
    - operations: Full pipeline against stub executables

Stub tools are small Python scripts written to tmp_path and passed through
the executable overrides in PdfProcessSettings.
"""
