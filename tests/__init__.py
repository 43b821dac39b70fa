"""Test package for pdf-process.

Structure:
    - unit/: Runner, argument builder, parsers and operations against stub tools
    - integration/: Operations against the real poppler binaries
    - samples.py: In-memory sample PDF builders

Unit tests never need poppler installed. Integration tests are skipped when
the tools are missing. Leverages pytest with pytest-check for soft assertions.
"""
