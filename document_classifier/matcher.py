"""Keyword-set content identification.

A :class:`KeySetMatcher` is given a list of document type definitions,
fed the text of a document one fragment at a time, and finally asked
which definition the document represents. A definition only wins when
every one of its keys was seen at least once.

The matcher holds per-run state. Build a new instance for every
document; definitions themselves are immutable and may be shared.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Sequence, Union

from document_classifier.exceptions import InvalidDefinitionError
from document_classifier.logger import get_logger
from document_classifier.models import MAX_KEYS, DocumentTypeDefinition

logger = get_logger(__name__)


class MatchCode(IntEnum):
    OK = 0
    ERROR = 1
    MATCHES_MISSING = 2
    TYPES_NOT_SET = 3
    NO_MATCH = 4
    INVALID_DEFINITIONS = 5


MATCH_MESSAGES = {
    MatchCode.OK: "No errors.",
    MatchCode.ERROR: "Found errors.",
    MatchCode.MATCHES_MISSING: "Find matches has not been executed.",
    MatchCode.TYPES_NOT_SET: "The document types have not been set.",
    MatchCode.NO_MATCH: "Not able to identify document.",
    MatchCode.INVALID_DEFINITIONS: "The document type definitions are invalid.",
}


@dataclass
class ContentMatch:
    content_type: int
    probability: float


@dataclass
class MatchResponse:
    """Envelope returned by every matcher operation."""

    code: MatchCode
    message: str
    result: Optional[ContentMatch] = None

    @property
    def ok(self) -> bool:
        return self.code == MatchCode.OK


@dataclass
class MatchState:
    """Match statistics for one definition during one run."""

    num_keys: int
    total_match_count: int = 0
    matched_bitmask: int = 0
    per_key_count: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.per_key_count:
            self.per_key_count = [0] * self.num_keys

    @property
    def keys_matched(self) -> int:
        return count_set_bits(self.matched_bitmask)

    @property
    def percentage(self) -> float:
        return self.keys_matched / self.num_keys


def count_set_bits(bitmask: int) -> int:
    """Return the number of set bits in a 32-bit unsigned integer."""
    if not 0 <= bitmask < 1 << MAX_KEYS:
        raise ValueError(f"Bitmask out of 32-bit range: {bitmask}")

    bitmask = bitmask - ((bitmask >> 1) & 0x55555555)
    bitmask = (bitmask & 0x33333333) + ((bitmask >> 2) & 0x33333333)
    bitmask = (bitmask + (bitmask >> 4)) & 0x0F0F0F0F
    return ((bitmask * 0x01010101) & 0xFFFFFFFF) >> 24


def normalize_text(text: str) -> str:
    """Lower-case and drop all whitespace before comparing."""
    return "".join(text.lower().split())


DefinitionInput = Union[DocumentTypeDefinition, dict]


class KeySetMatcher:
    """Identify a document type from keyword matches."""

    def __init__(self) -> None:
        self._types: list[str] = []
        self._keys: list[tuple[str, ...]] = []
        self._states: list[MatchState] = []
        self._have_types = False
        self._have_matches = False

    @property
    def states(self) -> tuple[MatchState, ...]:
        return tuple(self._states)

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(self._types)

    def set_content_types(self, definitions: Sequence[DefinitionInput]) -> MatchResponse:
        """Register the definitions to match against and reset all state.

        Must be called before :meth:`find_matches_in_text`. The
        definitions are copied, so the caller may reuse or mutate its
        own objects afterwards.
        """
        try:
            copied = [
                d if isinstance(d, DocumentTypeDefinition)
                else DocumentTypeDefinition.from_dict(d)
                for d in definitions
            ]
        except (InvalidDefinitionError, KeyError, TypeError) as exc:
            logger.error(
                "Rejected document type definitions",
                extra_data={"error_type": type(exc).__name__, "error": str(exc)},
            )
            self._types, self._keys, self._states = [], [], []
            self._have_types = False
            self._have_matches = False
            return self._response(MatchCode.INVALID_DEFINITIONS)

        self._types = [d.type for d in copied]
        self._keys = [tuple(normalize_text(k) for k in d.keys) for d in copied]
        self._states = [MatchState(num_keys=len(keys)) for keys in self._keys]
        self._have_types = True
        self._have_matches = False

        logger.debug(
            "Content types set",
            extra_data={"type_count": len(self._types), "types": self._types},
        )
        return self._response(MatchCode.OK)

    def find_matches_in_text(self, text: str) -> MatchResponse:
        """Record every key of every definition found in ``text``.

        May be called any number of times. Repeat hits add to the counters
        but leave the bitmask unchanged once a key's bit is set.
        """
        if not self._have_types:
            return self._response(MatchCode.TYPES_NOT_SET)

        haystack = normalize_text(text)
        for keys, state in zip(self._keys, self._states):
            for j, key in enumerate(keys):
                if key in haystack:
                    state.total_match_count += 1
                    state.matched_bitmask |= 1 << j
                    state.per_key_count[j] += 1

        self._have_matches = True
        return self._response(MatchCode.OK)

    def get_content_type(self) -> MatchResponse:
        """Pick the definition with the highest share of keys matched.

        Ties keep the earliest definition. The winner is only accepted
        when all of its keys matched.
        """
        if not self._have_matches:
            return self._response(MatchCode.MATCHES_MISSING)

        percent_matched = 0.0
        type_matched: Optional[int] = None
        for i, state in enumerate(self._states):
            percentage = state.percentage
            if percentage > percent_matched:
                percent_matched = percentage
                type_matched = i

        logger.debug(
            "Best content type candidate",
            extra_data={
                "type": self._types[type_matched] if type_matched is not None else None,
                "probability": percent_matched,
            },
        )

        if type_matched is None or percent_matched != 1:
            return self._response(MatchCode.NO_MATCH)

        return self._response(
            MatchCode.OK,
            ContentMatch(content_type=type_matched, probability=percent_matched),
        )

    @staticmethod
    def _response(code: MatchCode, result: Optional[ContentMatch] = None) -> MatchResponse:
        return MatchResponse(code=code, message=MATCH_MESSAGES[code], result=result)
