"""
DOCX Text Extractor
===================

Extracts plain paragraph text from Microsoft Word .docx packages (Office
Open XML WordprocessingML).

The main document part ``word/document.xml`` holds the body as a sequence of
paragraphs (``<w:p>``), each made of runs (``<w:r>``) whose character data
lives in ``<w:t>`` elements::

    <w:body>
      <w:p>
        <w:r><w:t xml:space="preserve">Hello </w:t></w:r>
        <w:r><w:t>World</w:t></w:r>
      </w:p>
    </w:body>

Runs split a paragraph wherever formatting changes, so their text is joined
without a separator. Paragraphs without any ``<w:t>`` run (empty lines, page
breaks, drawings) produce no output line at all.

Known Limitations
-----------------
- Formatting, numbering and table structure are not reproduced
- Headers, footers, footnotes and comments live in other parts and are ignored
- Paragraphs nested in text boxes end the enclosing paragraph early
"""

import logging
from typing import Mapping

from ooxml2text.exceptions import MissingRequiredEntryError
from ooxml2text.extractors.util.entities import decode_xml_entities
from ooxml2text.extractors.util.markup import (
    ElementScanner,
    TextRunScanner,
    decode_entry,
)

logger = logging.getLogger(__name__)

DOCUMENT_ENTRY = "word/document.xml"

_PARAGRAPH = ElementScanner("w:p")
_TEXT_RUN = TextRunScanner("w:t")


def is_relevant_entry(name: str) -> bool:
    """Return True for the package entries read by extract_docx_text."""
    return name == DOCUMENT_ENTRY


def extract_docx_text(entries: Mapping[str, bytes], max_chars: int | None = None) -> str:
    """
    Extract the paragraph text of a Word document.

    Args:
        entries: Package entry name -> decompressed bytes.
        max_chars: Optional character budget. Each emitted line counts its
            length plus one for the separator. Once the running total reaches
            the budget no further paragraphs are scanned; the paragraph that
            crossed the budget is still part of the output.

    Returns:
        One line per paragraph that contains text, joined by newlines.

    Raises:
        MissingRequiredEntryError: ``word/document.xml`` is not in ``entries``.
    """
    data = entries.get(DOCUMENT_ENTRY)
    if data is None:
        raise MissingRequiredEntryError(DOCUMENT_ENTRY)

    xml = decode_entry(data)
    paragraphs = []
    emitted = 0
    for paragraph in _PARAGRAPH.iter(xml):
        runs = _TEXT_RUN.findall(paragraph.inner)
        if not runs:
            continue
        line = "".join(decode_xml_entities(run) for run in runs)
        paragraphs.append(line)
        emitted += len(line) + 1
        if max_chars is not None and emitted >= max_chars:
            logger.debug("Character budget of %d reached, stopping", max_chars)
            break

    logger.info("Extracted DOCX: %d paragraphs", len(paragraphs))
    return "\n".join(paragraphs)
