"""Supported file types and the parsers that handle them."""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from document_classifier.logger import get_logger
from document_classifier.parsers import CSVParser, FormatParser, OCRParser, PDFParser

logger = get_logger(__name__)

EXTENSION_PATTERN = re.compile(r".+\.([a-zA-Z]+)", re.DOTALL)


@dataclass(frozen=True)
class ExtensionInfo:
    """How files with one extension are classified.

    ``parser`` is a parser class, instantiated once per classification
    run. It is ``None`` for formats that are recognized but not parsed.
    """

    extension: str
    format: str
    parser: Optional[type[FormatParser]] = None


DEFAULT_FILE_TYPES = (
    ExtensionInfo("csv", "csv", CSVParser),
    ExtensionInfo("doc", "doc"),
    ExtensionInfo("docx", "doc"),
    ExtensionInfo("xls", "excel"),
    ExtensionInfo("xlsx", "excel"),
    ExtensionInfo("pdf", "pdf", PDFParser),
    ExtensionInfo("png", "image", OCRParser),
    ExtensionInfo("jpeg", "image", OCRParser),
    ExtensionInfo("jpg", "image", OCRParser),
)


def parse_extension(file_path: str) -> Optional[str]:
    """Return the alphabetic extension after the final dot, if any."""
    match = EXTENSION_PATTERN.fullmatch(file_path)
    return match.group(1) if match else None


class FileTypeRegistry:
    """Read-only lookup from file extension to :class:`ExtensionInfo`.

    Extensions are matched case-sensitively.
    """

    def __init__(self, file_types: Iterable[ExtensionInfo] = DEFAULT_FILE_TYPES):
        table = {}
        for info in file_types:
            if info.extension in table:
                raise ValueError(f"Duplicate extension in registry: {info.extension}")
            table[info.extension] = info
        self._table: Mapping[str, ExtensionInfo] = MappingProxyType(table)

    @property
    def extensions(self) -> tuple[str, ...]:
        return tuple(self._table)

    def lookup(self, extension: Optional[str]) -> Optional[ExtensionInfo]:
        if extension is None:
            return None
        return self._table.get(extension)

    def lookup_path(self, file_path: str) -> Optional[ExtensionInfo]:
        extension = parse_extension(file_path)
        info = self.lookup(extension)
        logger.debug(
            "Looked up file type",
            extra_data={
                "file_path": file_path,
                "extension": extension,
                "format": info.format if info else None,
            },
        )
        return info

    def __contains__(self, extension: str) -> bool:
        return extension in self._table

    def __len__(self) -> int:
        return len(self._table)


default_registry = FileTypeRegistry()
