from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass
from typing import Callable

from ooxml2text.exceptions import (
    ExtractionFileFormatNotSupportedError,
    ExtractionZipBombError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZipBombLimits:
    """
    Heuristics for rejecting probable ZIP bombs before any entry is inflated.

    Office packages are small containers of XML parts, so the defaults leave
    ample room for large real-world workbooks while still catching extreme
    amplification.
    """

    max_entries: int = 10_000
    max_total_uncompressed_bytes: int = 1 * 1024 * 1024 * 1024  # 1 GiB
    max_single_uncompressed_bytes: int = 256 * 1024 * 1024  # 256 MiB
    max_total_compression_ratio: float = 200.0
    max_entry_compression_ratio: float = 500.0


DEFAULT_ZIP_BOMB_LIMITS = ZipBombLimits()


def _with_source(message: str, source: str | None) -> str:
    return message + (f" [{source}]" if source else "")


def validate_zipfile(
    zf: zipfile.ZipFile,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """
    Validate a ZIP container against high-confidence ZIP-bomb indicators.

    Only the central directory is inspected; declared sizes are trusted.
    This is a best-effort DoS mitigation, not a complete sandbox.
    """
    infos = zf.infolist()
    if len(infos) > limits.max_entries:
        raise ExtractionZipBombError(
            _with_source(
                f"ZIP container has too many entries ({len(infos)} > {limits.max_entries})",
                source,
            )
        )

    total_uncompressed = 0
    total_compressed = 0
    for info in infos:
        if info.is_dir():
            continue

        if info.file_size > limits.max_single_uncompressed_bytes:
            raise ExtractionZipBombError(
                _with_source(
                    f"ZIP entry {info.filename} too large "
                    f"({info.file_size} bytes > {limits.max_single_uncompressed_bytes})",
                    source,
                )
            )

        if info.file_size > 0:
            if info.compress_size <= 0:
                raise ExtractionZipBombError(
                    _with_source(
                        f"ZIP entry {info.filename} has zero compressed size "
                        "but non-zero uncompressed size",
                        source,
                    )
                )
            ratio = info.file_size / info.compress_size
            if ratio > limits.max_entry_compression_ratio:
                raise ExtractionZipBombError(
                    _with_source(
                        f"ZIP entry {info.filename} compression ratio too high "
                        f"({ratio:.1f} > {limits.max_entry_compression_ratio})",
                        source,
                    )
                )

        total_uncompressed += info.file_size
        total_compressed += info.compress_size
        if total_uncompressed > limits.max_total_uncompressed_bytes:
            raise ExtractionZipBombError(
                _with_source(
                    f"ZIP total uncompressed size too large "
                    f"({total_uncompressed} bytes > {limits.max_total_uncompressed_bytes})",
                    source,
                )
            )

    if total_uncompressed > 0:
        if total_compressed <= 0:
            raise ExtractionZipBombError(
                _with_source(
                    "ZIP container has non-zero uncompressed content "
                    "but zero total compressed size",
                    source,
                )
            )
        total_ratio = total_uncompressed / total_compressed
        if total_ratio > limits.max_total_compression_ratio:
            raise ExtractionZipBombError(
                _with_source(
                    f"ZIP total compression ratio too high "
                    f"({total_ratio:.1f} > {limits.max_total_compression_ratio})",
                    source,
                )
            )


def open_zipfile(
    file_like: io.BytesIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> zipfile.ZipFile:
    """
    Open a ZIP file and validate it for ZIP-bomb indicators.

    Caller owns the returned ZipFile and must close it.

    :raises ExtractionFileFormatNotSupportedError: the data is not a ZIP archive
    :raises ExtractionZipBombError: the archive exceeds ``limits``
    """
    file_like.seek(0)
    try:
        zf = zipfile.ZipFile(file_like, "r")
    except zipfile.BadZipFile as exc:
        raise ExtractionFileFormatNotSupportedError(
            source or "<bytes>",
            f"Not an Office Open XML package (no ZIP container): {source or '<bytes>'}",
            cause=exc,
        ) from exc
    try:
        validate_zipfile(zf, limits=limits, source=source)
    except Exception:
        zf.close()
        raise
    return zf


def read_zip_entries(
    file_like: io.BytesIO,
    entry_filter: Callable[[str], bool] | None = None,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> dict[str, bytes]:
    """
    Decompress the entries of a validated ZIP package into a name -> bytes map.

    Args:
        file_like: The complete package.
        entry_filter: Optional predicate on entry names; only accepted
            entries are decompressed. All file entries are read when omitted.
        limits: ZIP-bomb limits checked before anything is decompressed.
        source: Label for error messages, usually the file path.
    """
    entries = {}
    with open_zipfile(file_like, limits=limits, source=source) as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            if entry_filter is not None and not entry_filter(info.filename):
                continue
            entries[info.filename] = zf.read(info)
    logger.debug("Read %d entries from [%s]", len(entries), source)
    return entries
