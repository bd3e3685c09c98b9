"""
PPTX Text Extractor
===================

Extracts slide text from Microsoft PowerPoint .pptx packages (Office Open XML
PresentationML).

Every slide is stored in its own part, ``ppt/slides/slideN.xml``. Text in
shapes, placeholders and tables is DrawingML: paragraphs (``<a:p>``) made of
runs whose character data lives in ``<a:t>`` elements.

Slides are processed in ascending order of the number in their file name and
numbered by their 1-based position in that order. The slide list in
``ppt/presentation.xml`` is not consulted, so a deck whose parts were
renumbered is reported in file name order.

Output per slide is a ``--- Slide K ---`` header followed by one line per
paragraph with text. Speaker notes, comments and charts are not extracted.
"""

import logging
import re
from typing import List, Mapping

from ooxml2text.extractors.util.entities import decode_xml_entities
from ooxml2text.extractors.util.markup import (
    ElementScanner,
    TextRunScanner,
    decode_entry,
)

logger = logging.getLogger(__name__)

_SLIDE_ENTRY_RE = re.compile(r"^ppt/slides/slide(\d+)\.xml$")

_PARAGRAPH = ElementScanner("a:p")
_TEXT_RUN = TextRunScanner("a:t")


def is_relevant_entry(name: str) -> bool:
    """Return True for the package entries read by extract_pptx_text."""
    return _SLIDE_ENTRY_RE.match(name) is not None


def _slide_entries(entries: Mapping[str, bytes]) -> List[str]:
    return sorted(
        (name for name in entries if _SLIDE_ENTRY_RE.match(name)),
        key=lambda name: (int(_SLIDE_ENTRY_RE.match(name).group(1)), name),
    )


def _iter_paragraph_lines(xml: str):
    for paragraph in _PARAGRAPH.iter(xml):
        line = "".join(
            decode_xml_entities(run) for run in _TEXT_RUN.findall(paragraph.inner)
        )
        if line:
            yield line


def extract_pptx_text(entries: Mapping[str, bytes], max_chars: int | None = None) -> str:
    """
    Extract the text of all slides in a presentation.

    Args:
        entries: Package entry name -> decompressed bytes.
        max_chars: Optional character budget, applied like in
            extract_xlsx_text: once the running total of emitted line lengths
            (plus one per line) reaches it, no further paragraph or slide is
            visited.

    Returns:
        Slide headers and paragraph lines joined by newlines. An empty string
        when the package holds no slides.
    """
    slide_names = _slide_entries(entries)

    output = []
    emitted = 0

    def emit(line: str) -> bool:
        nonlocal emitted
        output.append(line)
        emitted += len(line) + 1
        return max_chars is not None and emitted >= max_chars

    budget_reached = False
    for slide_number, entry_name in enumerate(slide_names, start=1):
        logger.debug("Reading slide %d from [%s]", slide_number, entry_name)
        if emit(f"--- Slide {slide_number} ---"):
            budget_reached = True
            break
        for line in _iter_paragraph_lines(decode_entry(entries[entry_name])):
            if emit(line):
                budget_reached = True
                break
        if budget_reached:
            break

    if budget_reached:
        logger.debug("Character budget of %d reached, stopping", max_chars)
    logger.info("Extracted PPTX: %d slides", len(slide_names))
    return "\n".join(output)
