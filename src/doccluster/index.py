"""Word-ordered view over a list of document rows.

Rows are stored per document, sorted by word. :class:`CorpusIndex` keeps one
cursor per document and walks all of them together, so each step yields one
column of the document-term matrix: every document that contains the next
word, with its weight. Cursors sharing a word form a group; the group with the
smallest word is the current one.

The current word can be deleted from, or rescaled in, every document while the
scan is running. Deletion shifts the following entry of that row into the
cursor's offset, so the cursor remembers the deletion and the next advance
only clears the flag.

Instances are not synchronized. Running two indexes over the same rows while
one of them deletes corrupts the other's offsets.
"""

from __future__ import annotations

import heapq
from collections.abc import Iterator, Sequence
from typing import NamedTuple

from .errors import ExhaustedError, InvalidInputError
from .vectors import DocumentVector


class WordPosting(NamedTuple):
    """Weight of the current word in one document."""

    document: int
    weight: float


class _Cursor:
    """Position inside one document row."""

    __slots__ = ("document", "vector", "offset", "deleted_since_advance")

    def __init__(self, document: int, vector: DocumentVector) -> None:
        self.document = document
        self.vector = vector
        self.offset = 0
        # After a deletion the offset already holds the next entry.
        self.deleted_since_advance = False

    @property
    def has_data(self) -> bool:
        return self.offset < len(self.vector)

    @property
    def word(self) -> str:
        return self.vector.at(self.offset).word

    def posting(self) -> WordPosting:
        if self.deleted_since_advance or not self.has_data:
            return WordPosting(self.document, 0.0)
        return WordPosting(self.document, self.vector.at(self.offset).weight)

    def is_last_word(self) -> bool:
        if self.deleted_since_advance:
            return not self.has_data
        return self.offset + 1 == len(self.vector)

    def remove(self) -> None:
        if self.deleted_since_advance:
            return
        if self.has_data:
            self.vector.remove_at(self.offset)
        self.deleted_since_advance = True

    def scale(self, factor: float) -> None:
        if self.has_data and not self.deleted_since_advance:
            self.vector.scale(self.offset, factor)

    def advance(self) -> None:
        if self.deleted_since_advance:
            self.deleted_since_advance = False
        elif self.has_data:
            self.offset += 1

    def __repr__(self) -> str:
        if self.deleted_since_advance:
            return f"<cursor doc={self.document} offset={self.offset} DELETED>"
        return f"<cursor doc={self.document} offset={self.offset}>"


class CorpusIndex:
    """Merge-scan over ``vectors`` grouped by word.

    Document numbers in the returned postings are positions in ``vectors``.
    Empty vectors are skipped.

    Raises:
        InvalidInputError: If every vector is empty.
    """

    def __init__(self, vectors: Sequence[DocumentVector]) -> None:
        self._groups: dict[str, list[_Cursor]] = {}
        self._heap: list[str] = []
        self._started = False

        for document, vector in enumerate(vectors):
            self._insert(_Cursor(document, vector))

        if not self._groups:
            raise InvalidInputError(
                f"Corpus of {len(vectors)} documents has no words to index"
            )

    def __iter__(self) -> Iterator[list[WordPosting]]:
        while self.has_more():
            yield self.next_word()

    def __repr__(self) -> str:
        return f"CorpusIndex({dict(sorted(self._groups.items()))!r})"

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def has_more(self) -> bool:
        """Return True if :meth:`next_word` would yield another group."""
        if not self._groups:
            return False
        if len(self._groups) > 1 or not self._started:
            return True
        return not all(
            not cursor.has_data or cursor.is_last_word()
            for cursor in self._current_group()
        )

    def next_word(self) -> list[WordPosting]:
        """Advance to the next word and return its postings.

        The first call returns the smallest word without moving any cursor,
        since every cursor starts there.

        Raises:
            ExhaustedError: If no words are left.
        """
        if not self._started:
            self._started = True
        else:
            if not self._heap:
                raise ExhaustedError("No words left in the corpus index")
            word = heapq.heappop(self._heap)
            for cursor in self._groups.pop(word):
                cursor.advance()
                self._insert(cursor)
            if not self._groups:
                raise ExhaustedError("No words left in the corpus index")

        return [cursor.posting() for cursor in self._current_group()]

    @property
    def current_word(self) -> str | None:
        """Word of the last group returned, or None if there is none."""
        if not self._started or not self._heap:
            return None
        return self._heap[0]

    # ------------------------------------------------------------------
    # Mutation of the current word
    # ------------------------------------------------------------------

    def delete_current(self) -> None:
        """Remove the current word from every document that contains it."""
        if not self._started or not self._groups:
            return
        for cursor in self._current_group():
            cursor.remove()

    def scale_current(self, factor: float) -> None:
        """Multiply the current word's weight in every document by ``factor``."""
        if not self._started or not self._groups:
            return
        for cursor in self._current_group():
            cursor.scale(factor)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _current_group(self) -> list[_Cursor]:
        return self._groups[self._heap[0]]

    def _insert(self, cursor: _Cursor) -> None:
        if not cursor.has_data:
            return
        word = cursor.word
        group = self._groups.get(word)
        if group is None:
            group = self._groups[word] = []
            heapq.heappush(self._heap, word)
        group.append(cursor)
