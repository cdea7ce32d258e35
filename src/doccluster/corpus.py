"""TF-IDF corpus construction.

Term frequencies use the augmented form ``0.5 + 0.5 * count / max_count`` so
long documents do not dominate. One pass of :class:`~doccluster.index.CorpusIndex`
then computes each word's inverse document frequency, drops words whose
average TF-IDF falls below the significance threshold, and rescales the rest
to TF-IDF in place.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from .errors import InvalidInputError
from .index import CorpusIndex
from .vectors import DocumentVector

logger = logging.getLogger(__name__)


class DocumentCounts(BaseModel):
    """Outcome of reading one document: its word counts or why it failed."""

    document_id: str
    counts: dict[str, int] = Field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DroppedDocument(BaseModel):
    """A document left out of the corpus."""

    document_id: str
    reason: str


class Corpus(BaseModel):
    """Owning store of document rows, keyed by document id.

    Every later stage works on these vectors in place through their ids;
    nothing copies them.
    """

    documents: dict[str, DocumentVector] = Field(default_factory=dict)
    dropped: list[DroppedDocument] = Field(
        default_factory=list,
        description="Documents that could not be read or had no words",
    )

    model_config = {"arbitrary_types_allowed": True}

    @property
    def document_ids(self) -> list[str]:
        return list(self.documents)

    def vectors(self, document_ids: Sequence[str] | None = None) -> list[DocumentVector]:
        """Return the vectors for ``document_ids`` (all documents by default)."""
        if document_ids is None:
            return list(self.documents.values())
        return [self.documents[doc_id] for doc_id in document_ids]

    def __len__(self) -> int:
        return len(self.documents)

    def __getitem__(self, document_id: str) -> DocumentVector:
        return self.documents[document_id]

    def __contains__(self, document_id: object) -> bool:
        return document_id in self.documents


def augmented_term_frequencies(counts: Mapping[str, int]) -> DocumentVector:
    """Build a row of augmented term frequencies from raw counts."""
    max_count = max(counts.values())
    vector = DocumentVector()
    for word in sorted(counts):
        vector.insert(word, 0.5 + 0.5 * counts[word] / max_count)
    return vector


class CorpusBuilder(BaseModel):
    """Builds a TF-IDF weighted :class:`Corpus` from a tokenizer."""

    tokenizer: Any = Field(..., description="Object with a tokenize(document_id) -> {word: count} method")
    min_significance: float = Field(
        default=0.4,
        description=(
            "Words whose average TF-IDF across the documents containing them "
            "is below this value are removed from the corpus."
        ),
    )

    model_config = {"arbitrary_types_allowed": True}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, document_ids: Sequence[str]) -> Corpus:
        """Read, weight and prune ``document_ids``.

        Raises:
            InvalidInputError: If fewer than two documents are given, an id
                is repeated, or no document could be read.
        """
        duplicates = sorted({doc_id for doc_id in document_ids if document_ids.count(doc_id) > 1})
        if duplicates:
            raise InvalidInputError(f"Document ids must be unique, repeated: {duplicates}")
        if len(document_ids) < 2:
            raise InvalidInputError(
                f"At least two documents are needed to build a corpus, got {list(document_ids)}"
            )

        corpus = Corpus()
        for doc_id in document_ids:
            result = self.read_counts(doc_id)
            if not result.ok:
                logger.warning("Document %s ignored due to error: %s", result.document_id, result.error)
                corpus.dropped.append(DroppedDocument(document_id=result.document_id, reason=result.error))
            elif not result.counts:
                logger.warning("Document %s ignored, no words found", result.document_id)
                corpus.dropped.append(DroppedDocument(document_id=result.document_id, reason="no words found"))
            else:
                corpus.documents[result.document_id] = augmented_term_frequencies(result.counts)

        self.apply_idf(corpus)
        return corpus

    def read_counts(self, document_id: str) -> DocumentCounts:
        """Tokenize one document.

        A :class:`~doccluster.errors.DocumentReadError` (or any other
        ``OSError``) becomes an error result instead of propagating.
        """
        try:
            counts = self.tokenizer.tokenize(document_id)
        except OSError as exc:
            return DocumentCounts(document_id=document_id, error=str(exc))
        return DocumentCounts(
            document_id=document_id,
            counts={word: count for word, count in counts.items() if count > 0},
        )

    def apply_idf(self, corpus: Corpus) -> None:
        """Convert term frequencies to TF-IDF and drop insignificant words."""
        n_documents = len(corpus)
        index = CorpusIndex(corpus.vectors())
        kept = pruned = 0

        for postings in index:
            idf = math.log(n_documents / len(postings))
            avg_tfidf = sum(p.weight for p in postings) / len(postings) * idf
            if avg_tfidf < self.min_significance:
                index.delete_current()
                pruned += 1
            else:
                index.scale_current(idf)
                kept += 1

        logger.info(
            "TF-IDF pass over %d documents kept %d words, pruned %d below %.3f",
            n_documents,
            kept,
            pruned,
            self.min_significance,
        )
