"""Delimited text (CSV) snippet extraction."""

import csv

from document_classifier.exceptions import ParseDataError
from document_classifier.logger import get_logger
from document_classifier.models import Snippet
from document_classifier.parsers.base import FormatParser, Pages

logger = get_logger(__name__)


class CSVParser(FormatParser):
    """Identify CSV exports such as downloaded bank transactions.

    The file is treated as a single page. Every non-blank cell is a
    snippet whose ``x`` is the column index and ``y`` the row index.
    """

    format_name = "csv"

    def extract_snippets(self, file_path: str) -> Pages:
        snippets = []
        try:
            with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
                reader = csv.reader(f, delimiter=self.config.csv_delimiter)
                for row_index, row in enumerate(reader):
                    for column_index, cell in enumerate(row):
                        if cell.strip():
                            snippets.append(
                                Snippet(text=cell, x=float(column_index), y=float(row_index))
                            )
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            logger.error(
                "Failed to read CSV",
                extra_data={
                    "file_path": file_path,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise ParseDataError(f"CSV data error: {exc}") from exc

        return [snippets]
