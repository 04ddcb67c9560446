"""Custom exceptions for document classifier."""


class DocumentClassifierError(Exception):
    """Base exception for document classifier errors.

    Every error carries a numeric ``code`` from the classifier's error
    taxonomy together with a human readable ``msg``.
    """

    code: int = 1
    default_msg: str = "Found errors."

    def __init__(self, msg: str | None = None):
        self.msg = msg or self.default_msg
        super().__init__(self.msg)


class UnsupportedFileTypeError(DocumentClassifierError):
    """Raised when the file extension is missing or not registered."""

    code = 66
    default_msg = "Unsupported file type."


class MissingFormatError(DocumentClassifierError):
    """Raised when a registered extension has no format."""

    code = 67
    default_msg = "Missing data format."


class ParserUnavailableError(DocumentClassifierError):
    """Raised when a recognized format has no parser implementation."""

    code = 68
    default_msg = "Parser unavailable."


class ParseDataError(DocumentClassifierError):
    """Raised when a format decoder cannot read the source document."""

    code = 69
    default_msg = "Parser data error."


class ClassificationTimeoutError(DocumentClassifierError):
    """Raised when classification exceeds the configured deadline."""

    code = 70
    default_msg = "Classification timed out."


class InvalidDefinitionError(DocumentClassifierError, ValueError):
    """Raised when a document type definition cannot be matched reliably."""

    pass


class SnippetCursorExhaustedError(DocumentClassifierError):
    """Raised when a snippet cursor is advanced past its last snippet."""

    default_msg = "Snippet cursor advanced past the last snippet."
