import io
import logging
import zipfile
from unittest import TestCase

import pytest
from openpyxl import Workbook

import ooxml2text
from ooxml2text.exceptions import (
    ExtractionFileFormatNotSupportedError,
    MissingRequiredEntryError,
)

logger = logging.getLogger(__name__)

tc = TestCase()

_W_NS = 'xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main"'
_P_NS = (
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main"'
)


def _make_zip(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return buffer.getvalue()


def _docx(*paragraphs: str) -> bytes:
    body = "".join(f"<w:p><w:r><w:t>{text}</w:t></w:r></w:p>" for text in paragraphs)
    return _make_zip(
        {
            "[Content_Types].xml": "<Types/>",
            "word/document.xml": f"<w:document {_W_NS}><w:body>{body}</w:body></w:document>",
            "word/styles.xml": "<w:styles/>",
        }
    )


def test_read_bytes_docx() -> None:
    tc.assertEqual("Hello World", ooxml2text.read_bytes(_docx("Hello World"), "hello.docx"))
    tc.assertEqual(
        "Line 1\nLine 2\nLine 3",
        ooxml2text.read_bytes(_docx("Line 1", "Line 2", "Line 3"), "lines.docm"),
    )


def test_read_bytes_docx_with_budget() -> None:
    data = _docx("Line 1", "Line 2", "Line 3")

    tc.assertEqual("Line 1\nLine 2", ooxml2text.read_bytes(data, "lines.docx", max_chars=8))


def test_read_bytes_docx_missing_document() -> None:
    data = _make_zip({"word/other.xml": "<root/>"})

    with pytest.raises(MissingRequiredEntryError):
        ooxml2text.read_bytes(data, "broken.docx")


def test_read_bytes_pptx() -> None:
    slide = (
        f"<p:sld {_P_NS}><p:cSld><p:spTree><p:sp><p:txBody>"
        "<a:p><a:r><a:t>Hello Slide</a:t></a:r></a:p>"
        "</p:txBody></p:sp></p:spTree></p:cSld></p:sld>"
    )
    data = _make_zip(
        {
            "ppt/presentation.xml": "<p:presentation/>",
            "ppt/slides/slide1.xml": slide,
        }
    )

    result = ooxml2text.read_bytes(data, "deck.pptx")

    tc.assertEqual("--- Slide 1 ---\nHello Slide", result)


def test_read_bytes_rejects_unsupported_data() -> None:
    with pytest.raises(ExtractionFileFormatNotSupportedError):
        ooxml2text.read_bytes(b"not a zip", "fake.docx")

    with pytest.raises(ExtractionFileFormatNotSupportedError):
        ooxml2text.read_bytes(_docx("Hello"), "hello.pdf")


def test_read_file_openpyxl_workbook(tmp_path) -> None:
    wb = Workbook()
    people = wb.active
    people.title = "People"
    people.append(["Name", "Age"])
    people.append(["Alice", 30])
    people["D3"] = "Sparse"
    scores = wb.create_sheet("R&D")
    scores.append(["Score", 7])
    path = tmp_path / "people.xlsx"
    wb.save(path)

    result = ooxml2text.read_file(path)

    tc.assertEqual(
        "--- Sheet: People ---\n"
        "Name\tAge\n"
        "Alice\t30\n"
        "\t\t\tSparse\n"
        "--- Sheet: R&D ---\n"
        "Score\t7",
        result,
    )


def test_read_file_is_idempotent(tmp_path) -> None:
    path = tmp_path / "doc.docx"
    path.write_bytes(_docx("A &amp; B", "C"))

    first = ooxml2text.read_file(path)
    second = ooxml2text.read_file(str(path))

    tc.assertEqual("A & B\nC", first)
    tc.assertEqual(first, second)


def test_read_file_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        ooxml2text.read_file(tmp_path / "missing.docx")
