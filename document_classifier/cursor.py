"""Forward-only traversal over the snippets of one page."""

from typing import Iterator, Optional, Sequence

from document_classifier.exceptions import SnippetCursorExhaustedError
from document_classifier.models import Snippet


class SnippetCursor:
    """Track a position within a page's ordered snippets.

    The cursor starts before the first snippet, so the first call to
    :meth:`next` returns snippet 0.

    Examples:
        >>> cursor = SnippetCursor(page)
        >>> cursor.value_after("account number")
        Snippet(text='123-456', x=310.0, y=88.5)
    """

    def __init__(self, snippets: Sequence[Snippet]):
        self._snippets = snippets
        self._position = -1
        self.snippet: Optional[Snippet] = None
        self.last_snippet: Optional[Snippet] = None

    @property
    def position(self) -> int:
        return self._position

    def has_next(self) -> bool:
        return self._position < len(self._snippets) - 1

    def next(self) -> Snippet:
        if not self.has_next():
            raise SnippetCursorExhaustedError(
                f"No snippet after position {self._position} "
                f"of {len(self._snippets)}"
            )
        self.last_snippet = self.snippet
        self._position += 1
        self.snippet = self._snippets[self._position]
        return self.snippet

    def advance_until(self, substring: str) -> Optional[Snippet]:
        """Advance to the next snippet containing ``substring``.

        Returns ``None`` once the snippets run out without a match; the
        cursor is then left on the last snippet.
        """
        needle = substring.lower()
        while self.has_next():
            if needle in self.next().text.lower():
                return self.snippet
        return None

    def value_after(self, label: str) -> Optional[Snippet]:
        """Return the snippet that immediately follows a label snippet."""
        if self.advance_until(label) is None or not self.has_next():
            return None
        return self.next()

    def __iter__(self) -> Iterator[Snippet]:
        while self.has_next():
            yield self.next()
