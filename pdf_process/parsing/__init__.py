"""Parsers turning poppler tool output into typed results.

Responsibilities:
    - pdfinfo key/value text into DocumentInfo
    - pdftotext bytes into ExtractedText (lossy UTF-8, optional page split)
    - pdftocairo output files into RenderedImage lists
"""

from pdf_process.parsing.image_parser import collect_rendered_images
from pdf_process.parsing.info_parser import parse_encryption, parse_info
from pdf_process.parsing.text_parser import PAGE_END_CHARACTER, decode_text, parse_text

__all__ = [
    "PAGE_END_CHARACTER",
    "collect_rendered_images",
    "decode_text",
    "parse_encryption",
    "parse_info",
    "parse_text",
]
