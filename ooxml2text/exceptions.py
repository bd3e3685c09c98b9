class MissingRequiredEntryError(Exception):
    """Raised when a package lacks an entry its extractor cannot work without."""

    def __init__(self, entry_name: str, message: str = None, *, cause: Exception = None):
        self.entry_name = entry_name
        if message is None:
            message = f"Invalid package: missing {entry_name}"
        super().__init__(message)
        self.__cause__ = cause


class ExtractionFileFormatNotSupportedError(Exception):
    """Raised when the file format for extraction is not supported."""

    def __init__(self, file_path: str, message: str = None, *, cause: Exception = None):
        self.file_path = file_path
        if message is None:
            message = f"Extraction file format not supported: {file_path}"
        super().__init__(message)
        self.__cause__ = cause


class ExtractionZipBombError(Exception):
    """Raised when a ZIP container exceeds the configured safety limits."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(message)
        self.__cause__ = cause
