"""
Office Open XML Text Extractors
===============================

One extractor per OOXML document family. Each takes a mapping of package
entry name to decompressed bytes plus an optional character budget and
returns a single newline-delimited string:

    extract_docx_text: word/document.xml paragraphs
    extract_xlsx_text: worksheet rows as tab-separated lines, per sheet
    extract_pptx_text: slide paragraphs, per slide

Only extract_docx_text has a mandatory entry. Missing optional parts and
markup that does not have the expected shape contribute no text instead of
raising.

Each module also exposes ``is_relevant_entry(name)``, the predicate the
archive layer uses to decompress only the parts an extractor reads.
"""

from ooxml2text.extractors.docx_extractor import extract_docx_text
from ooxml2text.extractors.pptx_extractor import extract_pptx_text
from ooxml2text.extractors.xlsx_extractor import extract_xlsx_text

__all__ = [
    "extract_docx_text",
    "extract_pptx_text",
    "extract_xlsx_text",
]
