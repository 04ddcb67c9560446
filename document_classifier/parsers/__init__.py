"""Format parsers that turn files into positioned snippets."""

from document_classifier.parsers.base import FormatParser, identify_content
from document_classifier.parsers.ocr import OCRParser
from document_classifier.parsers.pdf import PDFParser
from document_classifier.parsers.tabular import CSVParser

__all__ = [
    "FormatParser",
    "identify_content",
    "CSVParser",
    "OCRParser",
    "PDFParser",
]
