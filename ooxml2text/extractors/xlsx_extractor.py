"""
XLSX Text Extractor
===================

Extracts cell text from Microsoft Excel .xlsx packages (Office Open XML
SpreadsheetML) as tab-separated rows, one block per worksheet.

File Format Background
----------------------
The parts read by this module are:

    xl/sharedStrings.xml: Shared string table (deduplicated cell text)
    xl/workbook.xml: Sheet list with display names
    xl/worksheets/sheet1.xml, sheet2.xml, ...: Individual sheet data

All three are optional. A package without them extracts to an empty string.

Cells carry their position in an ``r`` attribute ("C5") and their type in a
``t`` attribute:

    t="s"          <v> holds an index into the shared string table
    t="inlineStr"  the text is stored in the cell itself, in <is><t>...</t></is>
    anything else  <v> holds the literal value (numbers, booleans, errors,
                   cached formula results)

Output Layout
-------------
Each worksheet starts with a ``--- Sheet: <name> ---`` header followed by
one line per row that has at least one cell. Cells are written at their
column position: gaps between cells become empty fields and the line ends
at the row's own last cell, so rows of one sheet may differ in width.

Sheet Ordering
--------------
Worksheet parts are processed in ascending order of the number in their
file name (sheet1.xml, sheet2.xml, sheet10.xml). The n-th part in that order
is labelled with the n-th name declared in workbook.xml, or "Sheet<n>" when
fewer names are declared. The workbook's relationship targets are not
consulted.

Known Limitations
-----------------
- Number formats are not applied; numbers and dates appear as stored
- Formulas are not extracted, only their cached results
- Columns beyond MAX_COLUMN_INDEX are dropped
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Mapping, NamedTuple

from ooxml2text.extractors.util.cell_reference import column_index
from ooxml2text.extractors.util.entities import decode_xml_entities
from ooxml2text.extractors.util.markup import (
    ElementScanner,
    MarkupElement,
    TextRunScanner,
    decode_entry,
    get_attribute,
)

logger = logging.getLogger(__name__)

SHARED_STRINGS_ENTRY = "xl/sharedStrings.xml"
WORKBOOK_ENTRY = "xl/workbook.xml"

# Upper bound on decoded column indexes, bounds row width on sparse sheets
MAX_COLUMN_INDEX = 20000

_WORKSHEET_ENTRY_RE = re.compile(r"^xl/worksheets/sheet(\d+)\.xml$")

_STRING_ITEM = ElementScanner("si")
_PHONETIC_RUN = ElementScanner("rPh")
_TEXT_RUN = TextRunScanner("t")
_SHEET = ElementScanner("sheet")
_ROW = ElementScanner("row")
_CELL = ElementScanner("c")
_INLINE_STRING = ElementScanner("is")
_VALUE = TextRunScanner("v")


class CellType(Enum):
    SHARED_STRING = "s"
    INLINE_STRING = "inlineStr"
    LITERAL = "literal"

    @classmethod
    def from_attribute(cls, value: str | None) -> "CellType":
        """Map a cell's ``t`` attribute; absent and unknown types are literals."""
        if value == cls.SHARED_STRING.value:
            return cls.SHARED_STRING
        if value == cls.INLINE_STRING.value:
            return cls.INLINE_STRING
        return cls.LITERAL


@dataclass(frozen=True)
class SheetDescriptor:
    display_name: str
    entry_name: str


class _Cell(NamedTuple):
    column: int
    value: str


def is_relevant_entry(name: str) -> bool:
    """Return True for the package entries read by extract_xlsx_text."""
    return (
        name == SHARED_STRINGS_ENTRY
        or name == WORKBOOK_ENTRY
        or _WORKSHEET_ENTRY_RE.match(name) is not None
    )


def _join_text_runs(xml: str) -> str:
    """Concatenate the decoded <t> runs of a string item, skipping phonetic hints."""
    runs = _TEXT_RUN.findall(_PHONETIC_RUN.strip(xml))
    return "".join(decode_xml_entities(run) for run in runs)


def _read_shared_strings(entries: Mapping[str, bytes]) -> List[str]:
    """
    Build the shared string table.

    Cells address the table by position, so every <si> item gets a slot,
    including items without any text.
    """
    data = entries.get(SHARED_STRINGS_ENTRY)
    if data is None:
        return []
    return [_join_text_runs(item.inner) for item in _STRING_ITEM.iter(decode_entry(data))]


def _read_sheet_names(entries: Mapping[str, bytes]) -> List[str]:
    data = entries.get(WORKBOOK_ENTRY)
    if data is None:
        return []

    names = []
    for sheet in _SHEET.iter(decode_entry(data)):
        name = get_attribute(sheet.attributes, "name")
        if name is not None:
            names.append(decode_xml_entities(name))
    return names


def _worksheet_number(entry_name: str) -> int:
    return int(_WORKSHEET_ENTRY_RE.match(entry_name).group(1))


def _list_sheets(
    entries: Mapping[str, bytes], sheet_names: List[str]
) -> List[SheetDescriptor]:
    """Pair worksheet parts, sorted by file name number, with display names."""
    entry_names = sorted(
        (name for name in entries if _WORKSHEET_ENTRY_RE.match(name)),
        key=lambda name: (_worksheet_number(name), name),
    )

    sheets = []
    for idx, entry_name in enumerate(entry_names):
        if idx < len(sheet_names) and sheet_names[idx]:
            display_name = sheet_names[idx]
        else:
            display_name = f"Sheet{idx + 1}"
        sheets.append(SheetDescriptor(display_name=display_name, entry_name=entry_name))
    return sheets


def _resolve_shared_string(cell: MarkupElement, shared_strings: List[str]) -> str:
    values = _VALUE.findall(cell.inner)
    if not values:
        return ""
    try:
        idx = int(values[0].strip())
    except ValueError:
        return ""
    if 0 <= idx < len(shared_strings):
        return shared_strings[idx]
    return ""


def _resolve_inline_string(cell: MarkupElement) -> str:
    for inline in _INLINE_STRING.iter(cell.inner):
        return _join_text_runs(inline.inner)
    return ""


def _resolve_literal(cell: MarkupElement) -> str:
    values = _VALUE.findall(cell.inner)
    if not values:
        return ""
    return decode_xml_entities(values[0])


def _read_cell(cell: MarkupElement, shared_strings: List[str]) -> _Cell | None:
    ref = get_attribute(cell.attributes, "r")
    if ref is None:
        return None

    column = column_index(ref.strip())
    if not 0 <= column <= MAX_COLUMN_INDEX:
        logger.debug("Dropping cell [%s]: column out of range", ref)
        return None

    cell_type = CellType.from_attribute(get_attribute(cell.attributes, "t"))
    if cell_type is CellType.SHARED_STRING:
        value = _resolve_shared_string(cell, shared_strings)
    elif cell_type is CellType.INLINE_STRING:
        value = _resolve_inline_string(cell)
    else:
        value = _resolve_literal(cell)
    return _Cell(column=column, value=value)


def _format_row(cells: List[_Cell]) -> str:
    fields = [""] * (max(cell.column for cell in cells) + 1)
    for cell in cells:
        fields[cell.column] = cell.value
    return "\t".join(fields)


def _iter_row_lines(xml: str, shared_strings: List[str]) -> Iterator[str]:
    for row in _ROW.iter(xml):
        cells = []
        for element in _CELL.iter(row.inner):
            cell = _read_cell(element, shared_strings)
            if cell is not None:
                cells.append(cell)
        if cells:
            yield _format_row(cells)


def extract_xlsx_text(entries: Mapping[str, bytes], max_chars: int | None = None) -> str:
    """
    Extract the cell text of all worksheets in an Excel workbook.

    Args:
        entries: Package entry name -> decompressed bytes.
        max_chars: Optional character budget. Each emitted line, sheet headers
            included, counts its length plus one for the separator. Extraction
            stops as soon as the running total reaches the budget, without
            visiting any further row or sheet.

    Returns:
        Sheet headers and tab-separated rows joined by newlines. An empty
        string when the package holds no worksheets.
    """
    shared_strings = _read_shared_strings(entries)
    sheet_names = _read_sheet_names(entries)
    sheets = _list_sheets(entries, sheet_names)
    logger.debug(
        "Found %d shared strings, %d sheet names, %d worksheets",
        len(shared_strings),
        len(sheet_names),
        len(sheets),
    )

    output = []
    emitted = 0

    def emit(line: str) -> bool:
        nonlocal emitted
        output.append(line)
        emitted += len(line) + 1
        return max_chars is not None and emitted >= max_chars

    row_count = 0
    budget_reached = False
    for sheet in sheets:
        logger.debug("Reading sheet: [%s] from [%s]", sheet.display_name, sheet.entry_name)
        if emit(f"--- Sheet: {sheet.display_name} ---"):
            budget_reached = True
            break
        xml = decode_entry(entries[sheet.entry_name])
        for line in _iter_row_lines(xml, shared_strings):
            row_count += 1
            if emit(line):
                budget_reached = True
                break
        if budget_reached:
            break

    if budget_reached:
        logger.debug("Character budget of %d reached, stopping", max_chars)
    logger.info("Extracted XLSX: %d sheets, %d rows", len(sheets), row_count)
    return "\n".join(output)
