"""Parser for pdfinfo's ``Key: value`` output.

Example input:
    Title:           Ropes: an Alternative to Strings
    Pages:           16
    Encrypted:       no
    Page size:       540 x 738 pts

Known labels become typed DocumentInfo fields; everything else is kept in
``extras``. Lines without a colon are skipped.
"""

import logging

from pdf_process.config import PDFINFO
from pdf_process.errors import MalformedOutput
from pdf_process.models import DocumentInfo, EncryptionInfo

logger = logging.getLogger(__name__)

_TEXT_FIELDS = {
    "Title": "title",
    "Author": "author",
    "Subject": "subject",
    "Keywords": "keywords",
    "Creator": "creator",
    "Producer": "producer",
    "CreationDate": "creation_date",
    "ModDate": "mod_date",
    "Page size": "page_size",
    "Page rot": "page_rotation",
    "File size": "file_size",
    "PDF version": "pdf_version",
    "Form": "form",
}

_BOOL_FIELDS = {
    "Tagged": "tagged",
    "Optimized": "optimized",
    "JavaScript": "javascript",
    "Custom Metadata": "custom_metadata",
    "Metadata Stream": "metadata_stream",
    "UserProperties": "user_properties",
    "Suspects": "suspects",
}

PAGES_LABEL = "Pages"
ENCRYPTED_LABEL = "Encrypted"


def _parse_bool(value: str) -> bool:
    return value == "yes"


def split_key_values(output: str) -> list[tuple[str, str]]:
    """Split output into (key, value) pairs on the first colon of each line."""
    pairs: list[tuple[str, str]] = []
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        pairs.append((key, value.strip()))
    return pairs


def parse_encryption(value: str) -> EncryptionInfo:
    """Parse the value of the ``Encrypted:`` line.

    ``yes (print:yes copy:no algorithm:AES-256)`` yields encrypted=True with
    the parenthesised options; a bare ``no`` yields no options. Option
    tokens without a colon are ignored.
    """
    state, _, rest = value.partition(" ")
    options: dict[str, str] = {}

    rest = rest.strip()
    if rest.startswith("(") and rest.endswith(")"):
        for token in rest[1:-1].split():
            key, sep, option = token.partition(":")
            if sep and key:
                options[key] = option
    elif rest:
        logger.debug(f"Ignoring unrecognized encryption details: {rest!r}")

    return EncryptionInfo(encrypted=state.startswith("yes"), options=options)


def _parse_page_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError as e:
        raise MalformedOutput(PDFINFO, f"invalid page count {value!r}") from e
    if count < 0:
        raise MalformedOutput(PDFINFO, f"negative page count {count}")
    return count


def parse_info(output: str) -> DocumentInfo:
    """Parse pdfinfo stdout into DocumentInfo.

    Args:
        output: Decoded pdfinfo stdout.

    Returns:
        DocumentInfo with known fields typed and unknown keys in extras.
        Fields missing from the output are None.

    Raises:
        MalformedOutput: If no key/value line is present or the page count
            is not a non-negative integer.
    """
    pairs = split_key_values(output)
    if not pairs:
        raise MalformedOutput(PDFINFO, "no 'Key: value' lines in output")

    fields: dict[str, object] = {}
    extras: dict[str, str] = {}

    for key, value in pairs:
        if key in _TEXT_FIELDS:
            fields[_TEXT_FIELDS[key]] = value
        elif key in _BOOL_FIELDS:
            fields[_BOOL_FIELDS[key]] = _parse_bool(value)
        elif key == PAGES_LABEL:
            fields["page_count"] = _parse_page_count(value)
        elif key == ENCRYPTED_LABEL:
            encryption = parse_encryption(value)
            fields["encrypted"] = encryption.encrypted
            fields["encryption"] = encryption
        else:
            extras[key] = value

    return DocumentInfo(**fields, extras=extras)
