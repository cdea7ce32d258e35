"""Turning documents into word counts.

The clustering engine only needs a ``document id -> {word: count}`` mapping;
:class:`Tokenizer` is that seam. :class:`FileTokenizer` is the stock
implementation: it reads plain text files from a directory, treats each file
as a bag of words and counts stems.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from .errors import DocumentReadError
from .morphology import PorterStemmer

logger = logging.getLogger(__name__)

_NON_LETTERS = re.compile(r"[^A-Za-z ]")
_SPACES = re.compile(r" +")
# A dash directly after a letter at the very end of a line is hyphenation.
_HYPHENATED = re.compile(r"[A-Za-z]-$")


@runtime_checkable
class Tokenizer(Protocol):
    """Produces raw word counts for a document."""

    def tokenize(self, document_id: str) -> Mapping[str, int]:
        """Return word counts for ``document_id``.

        Raises:
            DocumentReadError: If the document cannot be read.
        """
        ...


def load_stopwords(path: str | Path) -> frozenset[str]:
    """Read a comma-separated stopword list from the first line of ``path``.

    A missing file is most likely a misconfiguration, but clustering still
    works without stopwords, so it is logged and treated as an empty list.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as handle:
            first_line = handle.readline()
    except FileNotFoundError:
        logger.warning("No stopwords file %s found, assuming none defined", path)
        return frozenset()

    words = frozenset(w.strip().lower() for w in first_line.split(",") if w.strip())
    if not words:
        logger.warning("Stopwords file %s has no data", path)
    return words


class FileTokenizer(BaseModel):
    """Counts stemmed words in text files under ``data_dir``.

    Punctuation and digits carry no meaning and are dropped, text is
    lower-cased, words hyphenated across a line break are rejoined, and
    stopwords are skipped before stemming.
    """

    data_dir: Path = Field(default=Path("data"), description="Directory the document ids are resolved against")
    stopwords: frozenset[str] = Field(default_factory=frozenset, description="Words excluded before stemming")
    stemmer: Any = Field(default_factory=PorterStemmer, description="Stemmer applied to every kept word")
    encoding: str = Field(default="utf-8", description="Text encoding of the documents")

    model_config = {"arbitrary_types_allowed": True}

    def tokenize(self, document_id: str) -> dict[str, int]:
        path = self.data_dir / document_id
        try:
            with path.open(encoding=self.encoding) as handle:
                return self._count_words(handle, path)
        except OSError as exc:
            raise DocumentReadError(document_id, str(exc)) from exc
        except UnicodeDecodeError as exc:
            raise DocumentReadError(document_id, f"not valid {self.encoding} text") from exc

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _count_words(self, lines: Iterable[str], path: Path) -> dict[str, int]:
        counts: Counter[str] = Counter()
        carried: str | None = None

        for raw_line in lines:
            line = raw_line.rstrip("\r\n")
            hyphenated = _HYPHENATED.search(line) is not None

            text = _SPACES.sub(" ", _NON_LETTERS.sub(" ", line).strip()).lower()
            if not text:
                continue

            words = text.split(" ")
            if carried is not None:
                words[0] = carried + words[0]
                carried = None

            if hyphenated:
                carried = words.pop()

            for word in words:
                # A lone "s" is what is left of a possessive.
                if word in self.stopwords or word == "s":
                    continue
                counts[self.stemmer.stem(word)] += 1

        if carried is not None:
            logger.warning(
                "Badly formed file %s, hyphenated word on last line ignored: %s",
                path,
                carried,
            )
        return dict(counts)
