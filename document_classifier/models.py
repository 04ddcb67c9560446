"""Data models for document classifier."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from document_classifier.exceptions import InvalidDefinitionError

UNKNOWN = "unknown"

# Width of the per-definition match bitmask.
MAX_KEYS = 32


@dataclass(frozen=True)
class DocumentTypeDefinition:
    """A labelled set of keywords that must all appear in a document.

    Key order defines the bit assigned to each key in the match bitmask.
    """

    type: str
    keys: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", tuple(self.keys))
        if not isinstance(self.type, str):
            raise InvalidDefinitionError(f"Definition type must be a string, got {self.type!r}")
        if not all(isinstance(key, str) for key in self.keys):
            raise InvalidDefinitionError(
                f"Definition '{self.type}' keys must all be strings"
            )
        if not self.keys:
            raise InvalidDefinitionError(
                f"Definition '{self.type}' must have at least one key"
            )
        if len(self.keys) > MAX_KEYS:
            raise InvalidDefinitionError(
                f"Definition '{self.type}' has {len(self.keys)} keys, "
                f"at most {MAX_KEYS} are supported"
            )
        if any(not key.strip() for key in self.keys):
            raise InvalidDefinitionError(
                f"Definition '{self.type}' contains a blank key"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "DocumentTypeDefinition":
        return cls(type=data["type"], keys=tuple(data["keys"]))


def build_definitions(entries: Iterable[dict]) -> tuple[DocumentTypeDefinition, ...]:
    """Build an immutable definition table from plain dictionaries."""
    return tuple(DocumentTypeDefinition.from_dict(entry) for entry in entries)


@dataclass(frozen=True)
class Snippet:
    """A fragment of extracted text with its page-relative position."""

    text: str
    x: float = 0.0
    y: float = 0.0


@dataclass
class DocumentIdentity:
    """What a format parser determined about a document."""

    type: str = UNKNOWN
    source: str = UNKNOWN


@dataclass
class ClassificationResult:
    """Result of document classification."""

    format: str
    source: str = UNKNOWN
    type: str = UNKNOWN


@dataclass
class ClassificationError:
    """Structured failure reported to callers instead of an exception."""

    code: int
    msg: str


@dataclass
class ClassificationOutcome:
    """Either a classification result or the error that prevented one."""

    file_path: str
    result: Optional[ClassificationResult] = None
    error: Optional[ClassificationError] = None
    elapsed_ms: int = field(default=0, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None
