"""
Permissive Markup Scanning
==========================

Small helpers for pulling elements, text runs and attributes out of OOXML
parts without building a DOM.

The scanners are deliberately lenient: there is no namespace resolution, no
well-formedness check and no error path. A fragment that does not have the
expected shape simply produces no match.

Scanning is linear in the size of the input. Opening tags are located with a
regular expression that has no nested quantifiers, and the matching closing
tag is located with ``str.find``. Elements are not nesting-aware: the first
closing tag after an opening tag ends the element, and an element whose
closing tag is missing ends the scan.
"""

import re
from typing import Iterator, List, NamedTuple


class MarkupElement(NamedTuple):
    attributes: str
    inner: str


class ElementScanner:
    """
    Iterates over ``<tag ...>inner</tag>`` and ``<tag .../>`` occurrences.

    The opening tag must be followed by whitespace, ``/`` or ``>`` so that
    scanning for ``w:p`` never matches ``w:pPr``, and ``sheet`` never matches
    ``sheets``. Self-closing elements yield an empty ``inner``.
    """

    def __init__(self, tag: str):
        self.tag = tag
        self._open_re = re.compile(rf"<{re.escape(tag)}(?=[\s/>])([^>]*)>")
        self._close_tag = f"</{tag}>"

    def iter(self, xml: str) -> Iterator[MarkupElement]:
        pos = 0
        while True:
            match = self._open_re.search(xml, pos)
            if match is None:
                return
            attributes = match.group(1)
            if attributes.endswith("/"):
                yield MarkupElement(attributes[:-1], "")
                pos = match.end()
                continue
            close = xml.find(self._close_tag, match.end())
            if close == -1:
                return
            yield MarkupElement(attributes, xml[match.end() : close])
            pos = close + len(self._close_tag)

    def strip(self, xml: str) -> str:
        """Return ``xml`` with every complete occurrence of the element removed."""
        parts = []
        pos = 0
        while True:
            match = self._open_re.search(xml, pos)
            if match is None:
                break
            if match.group(1).endswith("/"):
                end = match.end()
            else:
                close = xml.find(self._close_tag, match.end())
                if close == -1:
                    break
                end = close + len(self._close_tag)
            parts.append(xml[pos : match.start()])
            pos = end
        parts.append(xml[pos:])
        return "".join(parts)


class TextRunScanner:
    """
    Collects the character data of ``<tag ...>text</tag>`` runs in order.

    Run content is returned exactly as written (still entity-encoded), which
    keeps whitespace of runs marked ``xml:space="preserve"``. Self-closing
    runs are not runs.
    """

    def __init__(self, tag: str):
        self.tag = tag
        escaped = re.escape(tag)
        self._run_re = re.compile(rf"<{escaped}(?:\s[^>]*)?>([^<]*)</{escaped}>")

    def findall(self, xml: str) -> List[str]:
        return self._run_re.findall(xml)


_ATTRIBUTE_RE_TEMPLATE = r"""(?:^|\s){name}\s*=\s*(?:"([^"]*)"|'([^']*)')"""


def get_attribute(attributes: str, name: str) -> str | None:
    """
    Return the raw value of attribute ``name`` from an opening tag's attributes.

    Only exact attribute names match (``r`` does not match ``spr``). The value
    is returned still entity-encoded, or None when the attribute is absent.
    """
    match = re.search(_ATTRIBUTE_RE_TEMPLATE.format(name=re.escape(name)), attributes)
    if match is None:
        return None
    double_quoted, single_quoted = match.groups()
    return double_quoted if double_quoted is not None else single_quoted


def decode_entry(data: bytes) -> str:
    """Decode an XML part to text; undecodable bytes are replaced."""
    return data.decode("utf-8", errors="replace")
