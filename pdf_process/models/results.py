"""Typed results produced by the output parsers."""

import io

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from pdf_process.models.schemas import OutputFormat


class EncryptionInfo(BaseModel):
    """Encryption state parsed from pdfinfo's ``Encrypted:`` line.

    Example source line:
        yes (print:yes copy:no change:no addNotes:no algorithm:AES-256)

    Options missing from the line are treated as allowed.
    """

    model_config = ConfigDict(frozen=True)

    encrypted: bool
    options: dict[str, str] = Field(default_factory=dict)

    def _allowed(self, key: str) -> bool:
        value = self.options.get(key)
        return value is None or value == "yes"

    @property
    def print_allowed(self) -> bool:
        return self._allowed("print")

    @property
    def copy_allowed(self) -> bool:
        return self._allowed("copy")

    @property
    def change_allowed(self) -> bool:
        return self._allowed("change")

    @property
    def add_notes_allowed(self) -> bool:
        return self._allowed("addNotes")

    @property
    def algorithm(self) -> str | None:
        return self.options.get("algorithm")


class DocumentInfo(BaseModel):
    """Document metadata reported by pdfinfo.

    Every field is optional because pdfinfo omits lines the document does not
    define. Keys this model does not know about are kept verbatim in
    ``extras``.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    author: str | None = None
    subject: str | None = None
    keywords: str | None = None
    creator: str | None = None
    producer: str | None = None
    creation_date: str | None = None
    mod_date: str | None = None
    page_count: int | None = Field(default=None, ge=0)
    encrypted: bool | None = None
    encryption: EncryptionInfo | None = None
    page_size: str | None = None
    page_rotation: str | None = None
    file_size: str | None = None
    pdf_version: str | None = None
    form: str | None = None
    tagged: bool | None = None
    optimized: bool | None = None
    javascript: bool | None = None
    custom_metadata: bool | None = None
    metadata_stream: bool | None = None
    user_properties: bool | None = None
    suspects: bool | None = None
    extras: dict[str, str] = Field(default_factory=dict)


class TextBlock(BaseModel):
    """Text of one page, or of the whole range when ``page`` is None."""

    model_config = ConfigDict(frozen=True)

    page: int | None = Field(default=None, ge=1)
    text: str


class ExtractedText(BaseModel):
    """Ordered text blocks extracted by pdftotext.

    Attributes:
        blocks: One block per page when split, otherwise a single block.
        split: Whether the text was split per page.
    """

    model_config = ConfigDict(frozen=True)

    blocks: list[TextBlock] = Field(default_factory=list)
    split: bool = False

    @property
    def text(self) -> str:
        """All blocks joined into a single string."""
        return "\n".join(block.text for block in self.blocks)

    @property
    def pages(self) -> list[int]:
        return [block.page for block in self.blocks if block.page is not None]


class RenderedImage(BaseModel):
    """Encoded image bytes of one rendered page."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    format: OutputFormat
    page: int = Field(ge=1)

    def has_valid_signature(self) -> bool:
        return self.format.matches(self.data)

    def to_pil(self) -> Image.Image:
        """Decode the bytes with Pillow for pixel-level post-processing."""
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image
