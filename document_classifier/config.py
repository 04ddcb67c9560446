"""Configuration classes for document classifier."""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from document_classifier.definitions import SUPPORTED_DOC_TYPES, SUPPORTED_SOURCES
from document_classifier.models import DocumentTypeDefinition


@dataclass
class OCRConfig:
    """Configuration for OCR of image uploads.

    Examples:
        >>> # Default configuration
        >>> config = OCRConfig()

        >>> # Poor quality phone scans
        >>> config = OCRConfig(contrast_enhancement=1.5, psm_mode=11)
    """

    tesseract_cmd: str = "tesseract"
    """Path to tesseract binary. Default: "tesseract" (assumes in PATH)."""

    tessdata_prefix: Optional[str] = None
    """Optional path to tessdata directory. If None, uses system default."""

    languages: str = "eng"
    """OCR languages in Tesseract format (e.g., "eng", "eng+fra")."""

    psm_mode: int = 6
    """Page segmentation mode (0-13). Default: 6 (uniform block of text).

    Common modes:
    - 3: Fully automatic page segmentation
    - 6: Uniform block of text (good for statements)
    - 11: Sparse text (for documents with few words)
    """

    enable_image_preprocessing: bool = True
    """Convert images to grayscale and enhance contrast before OCR."""

    contrast_enhancement: float = 1.2
    """Contrast enhancement factor for image preprocessing.

    - 1.0: No enhancement
    - 1.2: Default, 20% contrast boost (good for scanned documents)
    - 1.5: Strong enhancement (for poor quality scans)
    """

    use_oem_1: bool = True
    """Use Tesseract OEM 1 (LSTM engine only)."""

    def tesseract_config(self) -> str:
        options = [f"--psm {self.psm_mode}"]
        if self.use_oem_1:
            options.append("--oem 1")
        return " ".join(options)


@dataclass
class ClassifierConfig:
    """Configuration for a classification run.

    The definition tables are read-only and shared between runs; every
    run builds its own parser and matcher state from them.
    """

    document_types: tuple[DocumentTypeDefinition, ...] = SUPPORTED_DOC_TYPES
    sources: Mapping[str, tuple[DocumentTypeDefinition, ...]] = field(
        default_factory=lambda: SUPPORTED_SOURCES
    )
    ocr_config: OCRConfig = field(default_factory=OCRConfig)
    csv_delimiter: str = ","
    timeout_seconds: Optional[float] = None
    """Deadline for parsing and matching one file. None waits indefinitely."""

    snippet_dump_dir: Optional[str] = None
    """When set, extracted snippets are written here as JSON for tuning keys."""
