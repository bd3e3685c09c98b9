import logging
import mimetypes
import os
from typing import Callable, Mapping

from ooxml2text.exceptions import ExtractionFileFormatNotSupportedError
from ooxml2text.mime_types import (
    FILE_TYPE_FAMILY,
    MIME_TYPE_MAPPING,
    is_supported_mime_type,
)

logger = logging.getLogger(__name__)

Extractor = Callable[[Mapping[str, bytes], int | None], str]
EntryFilter = Callable[[str], bool]


def _get_file_type(path: str) -> str:
    """Resolve the OOXML family (docx, xlsx, pptx) of a path by MIME type or extension."""
    path = path.lower()
    mime_type, _ = mimetypes.guess_type(path)

    if is_supported_mime_type(mime_type):
        file_type = MIME_TYPE_MAPPING[mime_type]
        logger.debug(f"Detected file type: {file_type} (MIME: {mime_type}) for file: {path}")
    else:
        # mimetypes does not know the macro-enabled variants on every platform
        file_type = os.path.splitext(path)[1][1:]
        if file_type not in FILE_TYPE_FAMILY:
            logger.debug(f"File [{path}] with mime type [{mime_type}] is not supported")
            raise ExtractionFileFormatNotSupportedError(path)
        logger.debug(f"Detected file type: {file_type} for file: {path}")
    return FILE_TYPE_FAMILY[file_type]


def is_supported_file(path: str) -> bool:
    """Checks if the path names a supported Office Open XML package"""
    try:
        _get_file_type(path)
    except ExtractionFileFormatNotSupportedError:
        return False
    return True


def get_extractor(path: str) -> Extractor:
    """Analyses the path of a file and returns a suited extractor.
       The file does not need to exist. The path or filename alone suffices.

    :returns an extractor taking the package entries and an optional character budget
    :raises ExtractionFileFormatNotSupportedError: File is not covered by any extractor
    """
    file_type = _get_file_type(path)
    if file_type == "docx":
        from ooxml2text.extractors.docx_extractor import extract_docx_text

        return extract_docx_text
    elif file_type == "xlsx":
        from ooxml2text.extractors.xlsx_extractor import extract_xlsx_text

        return extract_xlsx_text
    else:
        from ooxml2text.extractors.pptx_extractor import extract_pptx_text

        return extract_pptx_text


def get_entry_filter(path: str) -> EntryFilter:
    """Returns the predicate selecting the package entries the path's extractor reads.

    :raises ExtractionFileFormatNotSupportedError: File is not covered by any extractor
    """
    file_type = _get_file_type(path)
    if file_type == "docx":
        from ooxml2text.extractors.docx_extractor import is_relevant_entry

        return is_relevant_entry
    elif file_type == "xlsx":
        from ooxml2text.extractors.xlsx_extractor import is_relevant_entry

        return is_relevant_entry
    else:
        from ooxml2text.extractors.pptx_extractor import is_relevant_entry

        return is_relevant_entry
