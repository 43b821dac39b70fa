"""Pydantic models for tool inputs and parsed results.

Models:
    - PdfSource: Path or in-memory buffer holding the PDF
    - Password: User or owner password, kept as a secret
    - InfoOptions / TextOptions / RenderOptions: Per-tool options
    - DocumentInfo / EncryptionInfo: pdfinfo metadata
    - ExtractedText / TextBlock: pdftotext output
    - RenderedImage: One encoded page from pdftocairo
"""

from pdf_process.models.results import (
    DocumentInfo,
    EncryptionInfo,
    ExtractedText,
    RenderedImage,
    TextBlock,
)
from pdf_process.models.schemas import (
    Antialias,
    Crop,
    InfoOptions,
    OutputFormat,
    PageRangeOptions,
    Password,
    PasswordKind,
    PdfSource,
    RenderColor,
    RenderOptions,
    ScaleTo,
    TextOptions,
)

__all__ = [
    "Antialias",
    "Crop",
    "DocumentInfo",
    "EncryptionInfo",
    "ExtractedText",
    "InfoOptions",
    "OutputFormat",
    "PageRangeOptions",
    "Password",
    "PasswordKind",
    "PdfSource",
    "RenderColor",
    "RenderOptions",
    "RenderedImage",
    "ScaleTo",
    "TextBlock",
    "TextOptions",
]
