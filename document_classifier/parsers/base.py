"""Common behaviour of the format parsers.

A format parser turns a file into pages of positioned snippets and then
runs two rounds of keyword matching over them: one to find the document
type and, when the type is known and has sources configured, one to find
the document source.
"""

import asyncio
import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Sequence

from document_classifier.config import ClassifierConfig
from document_classifier.cursor import SnippetCursor
from document_classifier.logger import Timer, get_logger
from document_classifier.matcher import KeySetMatcher, MatchCode
from document_classifier.models import (
    UNKNOWN,
    DocumentIdentity,
    DocumentTypeDefinition,
    Snippet,
)

logger = get_logger(__name__)

Pages = list[list[Snippet]]


def identify_content(
    definitions: Sequence[DocumentTypeDefinition], pages: Sequence[Sequence[Snippet]]
) -> str:
    """Return the label of the definition matched by the snippets.

    Every snippet of every page is fed to a fresh matcher, page order then
    snippet order. Returns ``"unknown"`` when nothing matched completely.
    """
    matcher = KeySetMatcher()
    response = matcher.set_content_types(definitions)
    if not response.ok:
        logger.error(
            "Unable to set content types",
            extra_data={"code": int(response.code), "message": response.message},
        )
        return UNKNOWN

    for page in pages:
        for snippet in SnippetCursor(page):
            response = matcher.find_matches_in_text(snippet.text)
            if not response.ok:
                logger.error(
                    "Matching aborted",
                    extra_data={"code": int(response.code), "message": response.message},
                )
                return UNKNOWN

    response = matcher.get_content_type()
    if response.ok:
        return matcher.types[response.result.content_type]

    if response.code != MatchCode.NO_MATCH:
        logger.debug(
            "No content to match",
            extra_data={"code": int(response.code), "message": response.message},
        )
    return UNKNOWN


class FormatParser:
    """Base class for parsers of one file format.

    Subclasses implement :meth:`extract_snippets`, which runs in a worker
    thread and must raise :class:`ParseDataError` when the file cannot be
    decoded.
    """

    format_name = "generic"

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or ClassifierConfig()

    def extract_snippets(self, file_path: str) -> Pages:
        raise NotImplementedError

    async def parse(self, file_path: str) -> DocumentIdentity:
        """Identify the type and source of the document at ``file_path``.

        Raises:
            ParseDataError: If the file cannot be decoded
        """
        logger.info(
            f"Running {self.format_name} parser",
            extra_data={"file_path": file_path},
        )

        with Timer("extraction") as extract_timer:
            pages = await asyncio.to_thread(self.extract_snippets, file_path)

        logger.debug(
            "Snippets extracted",
            extra_data={
                "file_path": file_path,
                "page_count": len(pages),
                "snippet_count": sum(len(page) for page in pages),
                "extraction_time_ms": extract_timer.get_elapsed_ms(),
            },
        )

        if self.config.snippet_dump_dir:
            self._dump_snippets(file_path, pages)

        return self.identify(pages)

    def identify(self, pages: Pages) -> DocumentIdentity:
        identity = DocumentIdentity()

        with Timer("classification") as timer:
            identity.type = identify_content(self.config.document_types, pages)

            # Sources are only defined per type; a type without any is fine.
            sources = self.config.sources.get(identity.type) if identity.type != UNKNOWN else None
            if sources:
                identity.source = identify_content(sources, pages)

        logger.info(
            "Identified document",
            extra_data={
                "type": identity.type,
                "source": identity.source,
                "classification_time_ms": timer.get_elapsed_ms(),
            },
        )
        return identity

    def _dump_snippets(self, file_path: str, pages: Pages) -> None:
        dump_path = Path(self.config.snippet_dump_dir) / f"{Path(file_path).name}.snippets.json"
        try:
            dump_path.parent.mkdir(parents=True, exist_ok=True)
            with open(dump_path, "w", encoding="utf-8") as f:
                json.dump([[asdict(s) for s in page] for page in pages], f, indent=2)
            logger.debug("Saved snippets", extra_data={"dump_path": str(dump_path)})
        except OSError as exc:
            logger.error(
                "Failed to write snippets",
                extra_data={"dump_path": str(dump_path), "error": str(exc)},
            )
