"""Sparse document rows.

A :class:`DocumentVector` is one row of the document-term matrix. Entries are
kept sorted by word so two rows can be combined with a single simultaneous
scan, and so :class:`~doccluster.index.CorpusIndex` can walk many rows in
word order at once.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from collections.abc import Iterator
from dataclasses import dataclass
from functools import total_ordering

from .errors import InvalidInputError, OutOfRangeError


@total_ordering
@dataclass(frozen=True, eq=False)
class WordFrequencyEntry:
    """A word and its weight in one document.

    Entries compare and hash on the word only; the weight never takes part.
    """

    word: str
    weight: float

    def __post_init__(self) -> None:
        if not self.word:
            raise InvalidInputError("WordFrequencyEntry requires a non-empty word")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordFrequencyEntry):
            return NotImplemented
        return self.word == other.word

    def __lt__(self, other: WordFrequencyEntry) -> bool:
        if not isinstance(other, WordFrequencyEntry):
            return NotImplemented
        return self.word < other.word

    def __hash__(self) -> int:
        return hash(self.word)

    def __repr__(self) -> str:
        return f"{self.word}={self.weight}"


class DocumentVector:
    """Word-sorted, duplicate-free sparse vector for a single document.

    Words that are not stored have an implicit weight of zero.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: dict[str, float] | None = None) -> None:
        self._entries: list[WordFrequencyEntry] = []
        if entries:
            for word in sorted(entries):
                self.insert(word, entries[word])

    # ------------------------------------------------------------------
    # Basic views
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WordFrequencyEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"DocumentVector({self._entries!r})"

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def words(self) -> list[str]:
        return [entry.word for entry in self._entries]

    def as_dict(self) -> dict[str, float]:
        return {entry.word: entry.weight for entry in self._entries}

    # ------------------------------------------------------------------
    # Lookup and mutation
    # ------------------------------------------------------------------

    def insert(self, word: str, weight: float) -> None:
        """Store ``weight`` for ``word``, overwriting an existing weight.

        Appending past the current last word is the common case when a
        vector is built from already-sorted data, so it skips the search.
        """
        entry = WordFrequencyEntry(word, weight)
        if not self._entries or self._entries[-1].word < word:
            self._entries.append(entry)
            return

        pos = bisect_left(self._entries, entry)
        if self._entries[pos].word == word:
            self._entries[pos] = entry
        else:
            self._entries.insert(pos, entry)

    def value_of(self, word: str) -> float:
        """Return the weight for ``word``, or 0.0 when it is absent."""
        pos = self._find(word)
        if pos is None:
            return 0.0
        return self._entries[pos].weight

    def at(self, index: int) -> WordFrequencyEntry:
        self._check_index(index)
        return self._entries[index]

    def scale(self, index: int, factor: float) -> None:
        self._check_index(index)
        old = self._entries[index]
        self._entries[index] = WordFrequencyEntry(old.word, old.weight * factor)

    def remove_at(self, index: int) -> None:
        self._check_index(index)
        del self._entries[index]

    def remove_word(self, word: str) -> None:
        pos = self._find(word)
        if pos is not None:
            del self._entries[pos]

    # ------------------------------------------------------------------
    # Numeric helpers
    # ------------------------------------------------------------------

    def dot(self, other: DocumentVector) -> float:
        """Dot product over the union of both word sets.

        For normalized vectors this is the cosine similarity.
        """
        mine, theirs = self._entries, other._entries
        i = j = 0
        total = 0.0
        while i < len(mine) and j < len(theirs):
            left, right = mine[i].word, theirs[j].word
            if left < right:
                i += 1
            elif left > right:
                j += 1
            else:
                total += mine[i].weight * theirs[j].weight
                i += 1
                j += 1
        return total

    def normalize(self) -> None:
        """Scale the vector in place so its dot product with itself is 1.

        Raises:
            ZeroDivisionError: If the vector is empty or all weights are zero.
        """
        norm = math.sqrt(self.dot(self))
        if norm == 0.0:
            raise ZeroDivisionError("Cannot normalize a vector with zero length")

        factor = 1.0 / norm
        for index in range(len(self._entries)):
            self.scale(index, factor)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _find(self, word: str) -> int | None:
        if not word:
            return None
        pos = bisect_left(self._entries, WordFrequencyEntry(word, 0.0))
        if pos < len(self._entries) and self._entries[pos].word == word:
            return pos
        return None

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._entries):
            raise OutOfRangeError(
                f"Index {index} is out of range for {len(self._entries)} entries"
            )
