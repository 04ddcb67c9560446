"""
Tests for the format parsers.

Covers:
- PDF line snippets from PyMuPDF
- CSV cell snippets
- OCR line grouping (Tesseract mocked)
- Type then source identification
- Decoder failures surfaced as ParseDataError
"""

import json
from unittest.mock import patch

import pytest
from PIL import Image

from document_classifier.config import ClassifierConfig, OCRConfig
from document_classifier.exceptions import ParseDataError
from document_classifier.models import DocumentIdentity, Snippet, build_definitions
from document_classifier.parsers import (
    CSVParser,
    FormatParser,
    OCRParser,
    PDFParser,
    identify_content,
)


def tesseract_data(lines):
    """Build image_to_data output with one entry per word."""
    data = {key: [] for key in ("text", "block_num", "par_num", "line_num", "left", "top")}
    for line_num, (left, top, text) in enumerate(lines, start=1):
        # Tesseract reports an empty entry for each line before its words.
        data["text"].append("")
        data["block_num"].append(1)
        data["par_num"].append(1)
        data["line_num"].append(line_num)
        data["left"].append(left)
        data["top"].append(top)
        for i, word in enumerate(text.split()):
            data["text"].append(word)
            data["block_num"].append(1)
            data["par_num"].append(1)
            data["line_num"].append(line_num)
            data["left"].append(left + 50 * i)
            data["top"].append(top)
    return data


# identify_content


def test_identify_content_uses_first_snippet_of_each_page():
    definitions = build_definitions([{"type": "pair", "keys": ["first", "second"]}])
    pages = [[Snippet("first")], [Snippet("second")]]

    assert identify_content(definitions, pages) == "pair"


def test_identify_content_unknown_without_snippets():
    definitions = build_definitions([{"type": "pair", "keys": ["first"]}])

    assert identify_content(definitions, []) == "unknown"
    assert identify_content(definitions, [[], []]) == "unknown"


def test_identify_content_rejects_invalid_definitions():
    assert identify_content([{"type": "bad", "keys": []}], [[Snippet("x")]]) == "unknown"


def test_identify_skips_source_when_type_unknown():
    parser = FormatParser()

    identity = parser.identify([[Snippet("www.rbcroyalbank.com")]])

    assert identity == DocumentIdentity(type="unknown", source="unknown")


def test_identify_without_sources_for_type(bank_statement_lines):
    parser = FormatParser(ClassifierConfig(sources={}))

    identity = parser.identify([[Snippet(line) for line in bank_statement_lines]])

    assert identity == DocumentIdentity(type="bankStatement", source="unknown")


def test_identify_source(bank_statement_lines):
    pages = [[Snippet(line) for line in bank_statement_lines], [Snippet("Visit www.BMO.com")]]

    identity = FormatParser().identify(pages)

    assert identity == DocumentIdentity(type="bankStatement", source="bmo")


# PDF


@pytest.mark.asyncio
async def test_pdf_parser_bank_statement(make_pdf, bank_statement_lines):
    path = make_pdf("statement.pdf", [bank_statement_lines])

    identity = await PDFParser().parse(path)

    assert identity == DocumentIdentity(type="bankStatement", source="unknown")


@pytest.mark.asyncio
async def test_pdf_parser_source_on_later_page(make_pdf, bank_statement_lines):
    path = make_pdf(
        "statement.pdf",
        [bank_statement_lines, ["Questions? www.rbcroyalbank.com"]],
    )

    identity = await PDFParser().parse(path)

    assert identity == DocumentIdentity(type="bankStatement", source="rbc")


def test_pdf_snippets_are_positioned_lines(make_pdf):
    path = make_pdf("lines.pdf", [["Account Number: 123", "Date: 2024-01-01"], ["Page two"]])

    pages = PDFParser().extract_snippets(path)

    assert [[s.text for s in page] for page in pages] == [
        ["Account Number: 123", "Date: 2024-01-01"],
        ["Page two"],
    ]
    first, second = pages[0]
    assert first.x == pytest.approx(72, abs=1)
    assert first.y < second.y


@pytest.mark.asyncio
async def test_pdf_parser_malformed_file(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf")

    with pytest.raises(ParseDataError):
        await PDFParser().parse(str(path))


@pytest.mark.asyncio
async def test_pdf_parser_missing_file(tmp_path):
    with pytest.raises(ParseDataError):
        await PDFParser().parse(str(tmp_path / "missing.pdf"))


@pytest.mark.asyncio
async def test_snippet_dump(make_pdf, tmp_path, bank_statement_lines):
    path = make_pdf("statement.pdf", [bank_statement_lines])
    dump_dir = tmp_path / "analyze"

    await PDFParser(ClassifierConfig(snippet_dump_dir=str(dump_dir))).parse(path)

    dumped = json.loads((dump_dir / "statement.pdf.snippets.json").read_text())
    assert [s["text"] for s in dumped[0]] == bank_statement_lines
    assert set(dumped[0][0]) == {"text", "x", "y"}


# CSV


@pytest.mark.asyncio
async def test_csv_parser_bank_statement(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(
        "Statement,Account Number,Date\n"
        "Opening Balance,,2024-01-01\n"
        "Closing Balance,,2024-01-31\n"
        "www.rbcroyalbank.com,,\n",
        encoding="utf-8",
    )

    identity = await CSVParser().parse(str(path))

    assert identity == DocumentIdentity(type="bankStatement", source="rbc")


def test_csv_snippet_positions(tmp_path):
    path = tmp_path / "cells.csv"
    path.write_text("\ufeffa;;b\n;c;\n", encoding="utf-8")

    pages = CSVParser(ClassifierConfig(csv_delimiter=";")).extract_snippets(str(path))

    assert pages == [[Snippet("a", 0.0, 0.0), Snippet("b", 2.0, 0.0), Snippet("c", 1.0, 1.0)]]


@pytest.mark.asyncio
async def test_csv_parser_invalid_encoding(tmp_path):
    path = tmp_path / "binary.csv"
    path.write_bytes(b"\xff\xfe\x00\x81bad")

    with pytest.raises(ParseDataError):
        await CSVParser().parse(str(path))


# OCR


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "scan.png"
    Image.new("RGB", (200, 100), "white").save(path)
    return str(path)


@pytest.mark.asyncio
async def test_ocr_parser_groups_words_into_lines(png_path, bank_statement_lines):
    lines = [(10, 20 * i, text) for i, text in enumerate(bank_statement_lines)]

    with patch(
        "document_classifier.parsers.ocr.pytesseract.image_to_data",
        return_value=tesseract_data(lines),
    ) as mock_ocr:
        identity = await OCRParser().parse(png_path)

    assert identity == DocumentIdentity(type="bankStatement", source="unknown")
    _, kwargs = mock_ocr.call_args
    assert kwargs["lang"] == "eng"
    assert kwargs["config"] == "--psm 6 --oem 1"


def test_ocr_snippets(png_path):
    data = tesseract_data([(10, 5, "Account Number: 123"), (10, 40, "Date")])

    with patch("document_classifier.parsers.ocr.pytesseract.image_to_data", return_value=data):
        pages = OCRParser().extract_snippets(png_path)

    assert pages == [[Snippet("Account Number: 123", 10.0, 5.0), Snippet("Date", 10.0, 40.0)]]


def test_ocr_preprocessing_converts_to_grayscale(png_path):
    with patch(
        "document_classifier.parsers.ocr.pytesseract.image_to_data",
        return_value=tesseract_data([]),
    ) as mock_ocr:
        OCRParser().extract_snippets(png_path)

    image = mock_ocr.call_args[0][0]
    assert image.mode == "L"


def test_ocr_preprocessing_disabled(png_path):
    config = ClassifierConfig(ocr_config=OCRConfig(enable_image_preprocessing=False, use_oem_1=False))

    with patch(
        "document_classifier.parsers.ocr.pytesseract.image_to_data",
        return_value=tesseract_data([]),
    ) as mock_ocr:
        OCRParser(config).extract_snippets(png_path)

    assert mock_ocr.call_args[0][0].mode == "RGB"
    assert mock_ocr.call_args[1]["config"] == "--psm 6"


@pytest.mark.asyncio
async def test_ocr_parser_unreadable_image(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")

    with pytest.raises(ParseDataError):
        await OCRParser().parse(str(path))


@pytest.mark.asyncio
async def test_ocr_parser_tesseract_missing(png_path):
    import pytesseract

    with patch(
        "document_classifier.parsers.ocr.pytesseract.image_to_data",
        side_effect=pytesseract.TesseractNotFoundError(),
    ):
        with pytest.raises(ParseDataError):
            await OCRParser().parse(png_path)
