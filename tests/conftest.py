"""Shared fixtures for document classifier tests."""

import fitz
import pytest

from document_classifier.models import DocumentTypeDefinition

BANK_STATEMENT_LINES = [
    "Monthly Statement",
    "Account Number: 123",
    "Opening Balance: $500",
    "Closing Balance: $600",
    "Date: 2024-01-01",
]


@pytest.fixture
def bank_statement_lines():
    return list(BANK_STATEMENT_LINES)


@pytest.fixture
def bank_statement_definitions():
    return [
        DocumentTypeDefinition(
            type="bankStatement",
            keys=("statement", "accountnumber", "openingbalance", "closingbalance", "date"),
        )
    ]


@pytest.fixture
def make_pdf(tmp_path):
    """Write a PDF with one text line per entry on each page."""

    def _make(name: str, pages: list[list[str]]) -> str:
        doc = fitz.open()
        for lines in pages:
            page = doc.new_page()
            for i, line in enumerate(lines):
                page.insert_text((72, 72 + 24 * i), line)
        path = tmp_path / name
        doc.save(str(path))
        doc.close()
        return str(path)

    return _make
