"""Keyword-based document type and source classification."""

from document_classifier.api import classify_document, submit_classification
from document_classifier.classifier import Classifier
from document_classifier.config import ClassifierConfig, OCRConfig
from document_classifier.cursor import SnippetCursor
from document_classifier.exceptions import (
    ClassificationTimeoutError,
    DocumentClassifierError,
    InvalidDefinitionError,
    MissingFormatError,
    ParseDataError,
    ParserUnavailableError,
    SnippetCursorExhaustedError,
    UnsupportedFileTypeError,
)
from document_classifier.logger import setup_logging
from document_classifier.matcher import KeySetMatcher, MatchCode, MatchResponse
from document_classifier.models import (
    ClassificationError,
    ClassificationOutcome,
    ClassificationResult,
    DocumentIdentity,
    DocumentTypeDefinition,
    Snippet,
)
from document_classifier.parsers import CSVParser, FormatParser, OCRParser, PDFParser
from document_classifier.registry import ExtensionInfo, FileTypeRegistry

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "classify_document",
    "submit_classification",
    "setup_logging",
    # Core classes
    "Classifier",
    "FileTypeRegistry",
    "KeySetMatcher",
    "SnippetCursor",
    "FormatParser",
    "PDFParser",
    "CSVParser",
    "OCRParser",
    # Data models
    "ClassificationOutcome",
    "ClassificationResult",
    "ClassificationError",
    "DocumentIdentity",
    "DocumentTypeDefinition",
    "ExtensionInfo",
    "MatchCode",
    "MatchResponse",
    "Snippet",
    # Configuration
    "ClassifierConfig",
    "OCRConfig",
    # Exceptions
    "DocumentClassifierError",
    "UnsupportedFileTypeError",
    "MissingFormatError",
    "ParserUnavailableError",
    "ParseDataError",
    "ClassificationTimeoutError",
    "InvalidDefinitionError",
    "SnippetCursorExhaustedError",
]
