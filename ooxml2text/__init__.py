"""
ooxml2text: Plain text extraction for Office Open XML packages.

Extracts human-readable text from .docx, .xlsx and .pptx files (and their
macro-enabled variants) by scanning the package's XML parts directly, without
a DOM parser and without an office suite.

The extractors work on already decompressed package entries and are pure
functions of their input. read_file and read_bytes add the archive step:
they open the ZIP container, reject probable ZIP bombs and decompress only
the entries the routed extractor reads.
"""

import io
from pathlib import Path

from ooxml2text.extractors import (
    extract_docx_text,
    extract_pptx_text,
    extract_xlsx_text,
)
from ooxml2text.extractors.util.zip_bomb import (
    DEFAULT_ZIP_BOMB_LIMITS,
    ZipBombLimits,
    read_zip_entries,
)
from ooxml2text.router import get_entry_filter, get_extractor, is_supported_file

__version__ = "0.1.0"


def read_bytes(
    data: bytes,
    path: str | Path,
    max_chars: int | None = None,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
) -> str:
    """
    Extract text from the raw bytes of an Office Open XML package.

    Args:
        data: The complete package (a ZIP archive).
        path: File name or path, used to pick the extractor by extension.
        max_chars: Optional character budget passed to the extractor.
        limits: ZIP-bomb limits checked before decompression.

    Raises:
        ExtractionFileFormatNotSupportedError: The path has no supported
            extension or the data is not a ZIP archive.
        ExtractionZipBombError: The archive exceeds ``limits``.
        MissingRequiredEntryError: A .docx package lacks word/document.xml.
    """
    path = str(path)
    extractor = get_extractor(path)
    entries = read_zip_entries(
        io.BytesIO(data), get_entry_filter(path), limits=limits, source=path
    )
    return extractor(entries, max_chars)


def read_file(
    path: str | Path,
    max_chars: int | None = None,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
) -> str:
    """
    Read and extract the text of an Office Open XML file.

    Automatically detects the file type based on extension and uses
    the appropriate extractor:
        - .docx, .docm -> paragraphs, one per line
        - .xlsx, .xlsm -> "--- Sheet: <name> ---" blocks of tab-separated rows
        - .pptx, .pptm -> "--- Slide <n> ---" blocks of paragraph lines

    Raises:
        FileNotFoundError: If the file does not exist.
        Everything read_bytes raises.

    Example:
        >>> import ooxml2text
        >>> print(ooxml2text.read_file("report.docx", max_chars=10_000))
    """
    path = Path(path)
    get_extractor(str(path))
    with open(path, "rb") as f:
        return read_bytes(f.read(), path, max_chars, limits=limits)


__all__ = [
    # Version
    "__version__",
    # Main functions
    "read_file",
    "read_bytes",
    "is_supported_file",
    "get_extractor",
    # Format-specific extractors
    "extract_docx_text",
    "extract_xlsx_text",
    "extract_pptx_text",
    # Archive limits
    "ZipBombLimits",
    "DEFAULT_ZIP_BOMB_LIMITS",
]
