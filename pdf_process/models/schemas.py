"""Input models: PDF sources, passwords and per-tool options.

Options are plain value objects. Range and size checks live in the argument
builder so that invalid options surface as InvalidArguments from the
operation itself, before any process is spawned.
"""

from enum import Enum
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator

from pdf_process.errors import InvalidArguments


class PdfSource(BaseModel):
    """Handle to PDF bytes: either a filesystem path or an in-memory buffer.

    Attributes:
        path: Location of the PDF on disk.
        data: Raw PDF bytes held in memory.
    """

    model_config = ConfigDict(frozen=True)

    path: Path | None = None
    data: bytes | None = Field(default=None, repr=False)

    @model_validator(mode="after")
    def check_exactly_one(self) -> "PdfSource":
        """Ensure exactly one of path or data is set."""
        if (self.path is None) == (self.data is None):
            raise ValueError("PdfSource needs exactly one of 'path' or 'data'")
        return self

    @classmethod
    def from_path(cls, path: str | Path) -> "PdfSource":
        return cls(path=Path(path))

    @classmethod
    def from_bytes(cls, data: bytes) -> "PdfSource":
        if not data:
            raise InvalidArguments("Empty PDF buffer provided")
        return cls(data=bytes(data))

    @classmethod
    def coerce(cls, value: "PdfSource | str | Path | bytes") -> "PdfSource":
        """Build a source from any accepted input type.

        Args:
            value: An existing source, a path (str or Path) or raw bytes.

        Returns:
            The corresponding PdfSource.

        Raises:
            InvalidArguments: If the value type is unsupported or the buffer is empty.
        """
        if isinstance(value, PdfSource):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_bytes(bytes(value))
        if isinstance(value, (str, Path)):
            return cls.from_path(value)
        raise InvalidArguments(f"Unsupported PDF source type: {type(value).__name__}")

    @property
    def in_memory(self) -> bool:
        return self.data is not None


class PasswordKind(str, Enum):
    """Which of the two PDF passwords is being supplied."""

    USER = "user"
    OWNER = "owner"


class Password(BaseModel):
    """Password for an encrypted PDF.

    The owner password bypasses all security restrictions; the user password
    only opens the document. The value is a SecretStr so it never shows up
    in reprs or log lines.
    """

    model_config = ConfigDict(frozen=True)

    kind: PasswordKind = PasswordKind.USER
    value: SecretStr

    @classmethod
    def user(cls, value: str) -> "Password":
        return cls(kind=PasswordKind.USER, value=SecretStr(value))

    @classmethod
    def owner(cls, value: str) -> "Password":
        return cls(kind=PasswordKind.OWNER, value=SecretStr(value))

    @property
    def flag(self) -> str:
        return "-opw" if self.kind is PasswordKind.OWNER else "-upw"

    def to_args(self) -> list[str]:
        """Return the flag and the value as two discrete arguments."""
        return [self.flag, self.value.get_secret_value()]


class OutputFormat(str, Enum):
    """Image encoders supported by pdftocairo that this package uses."""

    PNG = "png"
    JPEG = "jpeg"
    TIFF = "tiff"

    @property
    def flag(self) -> str:
        return f"-{self.value}"

    @property
    def extension(self) -> str:
        """File extension pdftocairo appends to rendered pages."""
        return _EXTENSIONS[self]

    @property
    def signatures(self) -> tuple[bytes, ...]:
        return _SIGNATURES[self]

    @property
    def supports_transparency(self) -> bool:
        return self is not OutputFormat.JPEG

    def matches(self, data: bytes) -> bool:
        """Check whether data starts with one of this format's magic numbers."""
        return any(data.startswith(signature) for signature in self.signatures)


_EXTENSIONS = {
    OutputFormat.PNG: "png",
    OutputFormat.JPEG: "jpg",
    OutputFormat.TIFF: "tif",
}

_SIGNATURES = {
    OutputFormat.PNG: (b"\x89PNG\r\n\x1a\n",),
    OutputFormat.JPEG: (b"\xff\xd8\xff",),
    OutputFormat.TIFF: (b"II*\x00", b"MM\x00*"),
}


class RenderColor(str, Enum):
    """Color mode of rendered page content."""

    COLOR = "color"
    GRAY = "gray"
    MONO = "mono"


class Antialias(str, Enum):
    """Antialiasing hint passed to cairo."""

    DEFAULT = "default"
    NONE = "none"
    GRAY = "gray"
    SUBPIXEL = "subpixel"
    FAST = "fast"
    GOOD = "good"
    BEST = "best"


class ScaleTo(BaseModel):
    """Scale the output to fit inside a box; -1 keeps the aspect ratio."""

    model_config = ConfigDict(frozen=True)

    MAINTAIN_ASPECT_RATIO: ClassVar[int] = -1

    x: int = -1
    y: int = -1

    @classmethod
    def uniform(cls, size: int) -> "ScaleTo":
        return cls(x=size, y=size)


class Crop(BaseModel):
    """Crop area in pixels, relative to the rendered page."""

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0
    width: int
    height: int


class PageRangeOptions(BaseModel):
    """Options shared by every tool: page range and password."""

    model_config = ConfigDict(frozen=True)

    first_page: int | None = Field(default=None, description="First page, 1-indexed")
    last_page: int | None = Field(default=None, description="Last page, inclusive")
    password: Password | None = None

    @field_validator("password", mode="before")
    @classmethod
    def wrap_plain_password(cls, v: object) -> object:
        """Treat a bare string as a user password."""
        if isinstance(v, str):
            return Password.user(v)
        return v


class InfoOptions(PageRangeOptions):
    """Options for pdfinfo.

    Attributes:
        iso_dates: Print dates in ISO-8601 format.
    """

    iso_dates: bool = False


class TextOptions(PageRangeOptions):
    """Options for pdftotext.

    Attributes:
        split_pages: Return one block per page instead of a single block.
        layout: Maintain the original physical layout.
        raw: Keep text in content stream order.
    """

    split_pages: bool = False
    layout: bool = False
    raw: bool = False


class RenderOptions(PageRangeOptions):
    """Options for pdftocairo.

    Attributes:
        format: Image encoder to use.
        dpi: Resolution in pixels per inch.
        scale_to: Optional box to scale the page into.
        crop: Optional crop area.
        color: Color, grayscale or monochrome output.
        transparent: Transparent page background (PNG and TIFF only).
        crop_box: Render the crop box instead of the media box.
        antialias: Optional antialiasing hint.
    """

    format: OutputFormat = OutputFormat.JPEG
    dpi: int = 150
    scale_to: ScaleTo | None = None
    crop: Crop | None = None
    color: RenderColor = RenderColor.COLOR
    transparent: bool = False
    crop_box: bool = False
    antialias: Antialias | None = None
