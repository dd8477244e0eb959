"""Errors raised by the function extractors."""


class ParserError(RuntimeError):
    """Base class for extractor failures."""


class NotCompatibleError(ParserError):
    """Raised when a file is handed to an extractor for another language."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File is not compatible with this parser: {path}")
        self.path = path


class NoFilesAddedError(ParserError):
    """Raised when extraction is requested before any file was added."""

    def __init__(self) -> None:
        super().__init__("No files have been added")


class ParseFileError(ParserError):
    """Raised when the grammar cannot be attached to a parser."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Can't parse file: {message}")
        self.message = message


__all__ = ["NoFilesAddedError", "NotCompatibleError", "ParseFileError", "ParserError"]
