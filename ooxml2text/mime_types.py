MIME_TYPE_MAPPING = {
    # WordprocessingML
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-word.document.macroEnabled.12": "docm",
    # SpreadsheetML
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "application/vnd.ms-excel.sheet.macroEnabled.12": "xlsm",
    # PresentationML
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "application/vnd.ms-powerpoint.presentation.macroEnabled.12": "pptm",
}

# Macro-enabled packages share the part layout of their plain counterparts
FILE_TYPE_FAMILY = {
    "docx": "docx",
    "docm": "docx",
    "xlsx": "xlsx",
    "xlsm": "xlsx",
    "pptx": "pptx",
    "pptm": "pptx",
}


def is_supported_mime_type(mime_type: str | None) -> bool:
    if not mime_type:
        return False
    return mime_type in MIME_TYPE_MAPPING
