"""PDF snippet extraction with PyMuPDF."""

import fitz  # PyMuPDF

from document_classifier.exceptions import ParseDataError
from document_classifier.logger import get_logger
from document_classifier.models import Snippet
from document_classifier.parsers.base import FormatParser, Pages

logger = get_logger(__name__)


class PDFParser(FormatParser):
    """Identify PDF documents from their native text layer.

    Each text line becomes one snippet positioned at the top-left corner
    of the line's bounding box. Scanned PDFs without a text layer yield no
    snippets and classify as unknown.
    """

    format_name = "pdf"

    def extract_snippets(self, file_path: str) -> Pages:
        try:
            pdf_document = fitz.open(file_path, filetype="pdf")
        except (RuntimeError, OSError, ValueError) as exc:
            logger.error(
                "Failed to open PDF",
                extra_data={
                    "file_path": file_path,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise ParseDataError(f"PDF data error: {exc}") from exc

        try:
            if pdf_document.page_count == 0:
                raise ParseDataError("PDF data error: document has no pages")
            return [self._page_snippets(page) for page in pdf_document]
        except (RuntimeError, ValueError) as exc:
            logger.error(
                "Failed to read PDF text",
                extra_data={
                    "file_path": file_path,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise ParseDataError(f"PDF data error: {exc}") from exc
        finally:
            pdf_document.close()

    @staticmethod
    def _page_snippets(page) -> list[Snippet]:
        snippets = []
        page_dict = page.get_text("dict")
        for block in page_dict.get("blocks", []):
            # Image blocks (type 1) carry no lines.
            for line in block.get("lines", []):
                text = "".join(span.get("text", "") for span in line.get("spans", []))
                if not text.strip():
                    continue
                x0, y0, _, _ = line["bbox"]
                snippets.append(Snippet(text=text, x=float(x0), y=float(y0)))
        return snippets
