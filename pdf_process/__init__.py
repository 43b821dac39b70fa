"""pdf-process - async orchestration of the poppler command-line tools.

Reads document metadata (pdfinfo), extracts text (pdftotext) and renders
page images (pdftocairo) by spawning the tools as child processes. PDF
parsing itself is left entirely to poppler.

Components:
    - process: Argument builder, process runner, temp resources, error classifier
    - parsing: pdfinfo, pdftotext and pdftocairo output parsers
    - models: Source, options and result models
    - operations: read_info, extract_text, render, render_page, render_pages
    - config: Executable overrides, timeouts and stderr patterns
"""

from pdf_process.config import PdfProcessSettings, StderrPatterns, get_settings
from pdf_process.errors import (
    ExecutableNotFound,
    IncorrectPassword,
    InvalidArguments,
    MalformedOutput,
    NotPdfFile,
    OutputReadError,
    PageOutOfRange,
    PasswordRequired,
    PdfProcessError,
    PermissionDenied,
    ProcessCancelled,
    ProcessFailed,
    ProcessIOError,
    ProcessTimeout,
    StdinWriteError,
)
from pdf_process.models import (
    Antialias,
    Crop,
    DocumentInfo,
    EncryptionInfo,
    ExtractedText,
    InfoOptions,
    OutputFormat,
    Password,
    PdfSource,
    RenderColor,
    RenderedImage,
    RenderOptions,
    ScaleTo,
    TextBlock,
    TextOptions,
)
from pdf_process.operations import extract_text, read_info, render, render_page, render_pages

__version__ = "0.2.0"

__all__ = [
    "Antialias",
    "Crop",
    "DocumentInfo",
    "EncryptionInfo",
    "ExecutableNotFound",
    "ExtractedText",
    "IncorrectPassword",
    "InfoOptions",
    "InvalidArguments",
    "MalformedOutput",
    "NotPdfFile",
    "OutputFormat",
    "OutputReadError",
    "PageOutOfRange",
    "Password",
    "PasswordRequired",
    "PdfProcessError",
    "PdfProcessSettings",
    "PdfSource",
    "PermissionDenied",
    "ProcessCancelled",
    "ProcessFailed",
    "ProcessIOError",
    "ProcessTimeout",
    "RenderColor",
    "RenderOptions",
    "RenderedImage",
    "ScaleTo",
    "StderrPatterns",
    "StdinWriteError",
    "TextBlock",
    "TextOptions",
    "extract_text",
    "get_settings",
    "read_info",
    "render",
    "render_page",
    "render_pages",
]
