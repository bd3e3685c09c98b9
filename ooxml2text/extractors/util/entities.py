import re

_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "quot": '"',
}

# Longer digit runs cannot name a code point and are left as written
_ENTITY_RE = re.compile(
    r"&(?:(amp|lt|gt|apos|quot)|#([0-9]{1,10})|#[xX]([0-9a-fA-F]{1,8}));"
)

_MAX_CODE_POINT = 0x10FFFF


def _code_point_to_str(code_point: int) -> str | None:
    if code_point > _MAX_CODE_POINT:
        return None
    # Surrogates are not Unicode scalar values and cannot be encoded as UTF-8
    if 0xD800 <= code_point <= 0xDFFF:
        return None
    return chr(code_point)


def _replace(match: re.Match) -> str:
    name, decimal, hexadecimal = match.groups()
    if name is not None:
        return _NAMED_ENTITIES[name]
    if decimal is not None:
        decoded = _code_point_to_str(int(decimal))
    else:
        decoded = _code_point_to_str(int(hexadecimal, 16))
    return match.group(0) if decoded is None else decoded


def decode_xml_entities(text: str) -> str:
    """
    Decode the five predefined XML entities and numeric character references.

    The input is scanned once from left to right, so a decoded ampersand never
    starts a second entity (``&amp;lt;`` becomes ``&lt;``). Unknown entities,
    malformed references and references outside the Unicode scalar range are
    returned unchanged.

    Args:
        text: Character data taken from between markup tags or from an
            attribute value.

    Returns:
        The decoded text.
    """
    if "&" not in text:
        return text
    return _ENTITY_RE.sub(_replace, text)
