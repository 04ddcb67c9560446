"""Image snippet extraction with Tesseract OCR."""

import os
from typing import Optional

import pytesseract
from PIL import Image, ImageEnhance

from document_classifier.config import ClassifierConfig
from document_classifier.exceptions import ParseDataError
from document_classifier.logger import Timer, get_logger
from document_classifier.models import Snippet
from document_classifier.parsers.base import FormatParser, Pages

logger = get_logger(__name__)


class OCRParser(FormatParser):
    """Identify scanned or photographed documents.

    Tesseract word boxes are grouped into text lines; each line becomes a
    snippet positioned at its first word.
    """

    format_name = "image"

    def __init__(self, config: Optional[ClassifierConfig] = None):
        super().__init__(config)
        self.ocr_config = self.config.ocr_config

        if self.ocr_config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.ocr_config.tesseract_cmd
        if self.ocr_config.tessdata_prefix:
            os.environ["TESSDATA_PREFIX"] = self.ocr_config.tessdata_prefix

    def extract_snippets(self, file_path: str) -> Pages:
        try:
            with Image.open(file_path) as image:
                image.load()
                prepared = self._preprocess(image)
        except OSError as exc:
            # PIL.UnidentifiedImageError is an OSError
            logger.error(
                "Failed to load image",
                extra_data={
                    "file_path": file_path,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise ParseDataError(f"Image data error: {exc}") from exc

        try:
            with Timer("ocr") as timer:
                data = pytesseract.image_to_data(
                    prepared,
                    lang=self.ocr_config.languages,
                    config=self.ocr_config.tesseract_config(),
                    output_type=pytesseract.Output.DICT,
                )
        except (pytesseract.TesseractError, OSError, RuntimeError) as exc:
            # TesseractNotFoundError is an OSError
            logger.error(
                "OCR failed",
                extra_data={
                    "file_path": file_path,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise ParseDataError(f"OCR error: {exc}") from exc

        snippets = self._group_lines(data)
        logger.debug(
            "OCR completed",
            extra_data={
                "file_path": file_path,
                "line_count": len(snippets),
                "ocr_time_ms": timer.get_elapsed_ms(),
            },
        )
        return [snippets]

    def _preprocess(self, image: Image.Image) -> Image.Image:
        if not self.ocr_config.enable_image_preprocessing:
            return image.copy()
        gray = image.convert("L")
        if self.ocr_config.contrast_enhancement != 1.0:
            gray = ImageEnhance.Contrast(gray).enhance(self.ocr_config.contrast_enhancement)
        return gray

    @staticmethod
    def _group_lines(data: dict) -> list[Snippet]:
        """Join Tesseract words sharing a block, paragraph and line."""
        lines: dict[tuple[int, int, int], list] = {}
        for i, word in enumerate(data.get("text", [])):
            if not word or not word.strip():
                continue
            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            if key not in lines:
                lines[key] = [data["left"][i], data["top"][i], []]
            lines[key][2].append(word.strip())

        return [
            Snippet(text=" ".join(words), x=float(left), y=float(top))
            for left, top, words in lines.values()
        ]
