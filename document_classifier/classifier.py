"""Classification orchestration."""

import asyncio
from typing import Optional

from document_classifier.config import ClassifierConfig
from document_classifier.exceptions import (
    ClassificationTimeoutError,
    DocumentClassifierError,
    MissingFormatError,
    ParseDataError,
    ParserUnavailableError,
    UnsupportedFileTypeError,
)
from document_classifier.logger import (
    Timer,
    classification_id_var,
    get_logger,
    new_classification_id,
)
from document_classifier.models import (
    ClassificationError,
    ClassificationOutcome,
    ClassificationResult,
)
from document_classifier.parsers import FormatParser
from document_classifier.registry import (
    ExtensionInfo,
    FileTypeRegistry,
    default_registry,
    parse_extension,
)

logger = get_logger(__name__)


class Classifier:
    def __init__(
        self,
        registry: Optional[FileTypeRegistry] = None,
        config: Optional[ClassifierConfig] = None,
    ) -> None:
        """Initialize classifier.

        Args:
            registry: Supported file types. If None, uses the default table.
            config: Definitions and parser settings shared by every run.
        """
        self.registry = registry if registry is not None else default_registry
        self.config = config or ClassifierConfig()

    async def classify(
        self, file_path: str, classification_id: Optional[str] = None
    ) -> ClassificationOutcome:
        """Determine the format, type and source of an uploaded file.

        Failures are reported on the returned outcome rather than raised.

        Args:
            file_path: Path of the uploaded file
            classification_id: Identifier attached to log records of this run

        Returns:
            ClassificationOutcome holding either the result or the error
        """
        token = classification_id_var.set(classification_id or new_classification_id())
        try:
            with Timer("classify") as timer:
                logger.info("Classifying file", extra_data={"file_path": file_path})
                try:
                    result = await self._classify(file_path)
                except DocumentClassifierError as exc:
                    logger.warning(
                        "Classification failed",
                        extra_data={
                            "file_path": file_path,
                            "code": exc.code,
                            "error": exc.msg,
                        },
                    )
                    return ClassificationOutcome(
                        file_path=file_path,
                        error=ClassificationError(code=exc.code, msg=exc.msg),
                        elapsed_ms=timer.get_elapsed_ms(),
                    )

            logger.info(
                "Classification completed",
                extra_data={
                    "file_path": file_path,
                    "format": result.format,
                    "type": result.type,
                    "source": result.source,
                    "elapsed_ms": timer.get_elapsed_ms(),
                },
            )
            return ClassificationOutcome(
                file_path=file_path, result=result, elapsed_ms=timer.get_elapsed_ms()
            )
        finally:
            classification_id_var.reset(token)

    def determine_file_type(self, file_path: str) -> ExtensionInfo:
        """Resolve the registry entry for the file's extension.

        Raises:
            UnsupportedFileTypeError: If the extension is missing or unknown
        """
        info = self.registry.lookup_path(file_path)
        if info is None:
            raise UnsupportedFileTypeError(
                f"Unsupported file type: {parse_extension(file_path) or 'none'}."
            )
        return info

    def create_parser(self, info: ExtensionInfo) -> FormatParser:
        """Build a fresh parser for one run.

        Raises:
            MissingFormatError: If the entry has no format
            ParserUnavailableError: If the format has no parser
        """
        if not info.format:
            raise MissingFormatError(
                f"Missing data format for file with extension {info.extension}."
            )
        if info.parser is None:
            raise ParserUnavailableError(
                f"Parser unavailable for {info.format} files with extension {info.extension}."
            )
        return info.parser(config=self.config)

    async def _classify(self, file_path: str) -> ClassificationResult:
        info = self.determine_file_type(file_path)
        parser = self.create_parser(info)

        logger.debug(
            "Identifying document",
            extra_data={
                "file_path": file_path,
                "format": info.format,
                "parser": type(parser).__name__,
            },
        )

        try:
            identity = await asyncio.wait_for(
                parser.parse(file_path), timeout=self.config.timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            raise ClassificationTimeoutError(
                f"Classification of {file_path} exceeded {self.config.timeout_seconds}s."
            ) from exc
        except DocumentClassifierError:
            raise
        except Exception as exc:
            logger.error(
                "Parser failed unexpectedly",
                extra_data={
                    "file_path": file_path,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise ParseDataError(f"{info.format} parser error: {exc}") from exc

        return ClassificationResult(
            format=info.format, source=identity.source, type=identity.type
        )
