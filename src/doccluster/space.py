from __future__ import annotations

import logging

import numpy as np
from pydantic import BaseModel, Field

from .corpus import Corpus
from .index import CorpusIndex
from .vectors import DocumentVector

logger = logging.getLogger(__name__)


class DocumentSpace(BaseModel):
    """Normalized document vectors ready for clustering.

    The vectors live in ``corpus``; this type only records which of its
    documents take part, in input order. Build one with :meth:`from_corpus`,
    which prunes and normalizes the corpus rows in place.
    """

    corpus: Corpus = Field(..., description="Arena owning the document vectors")
    document_ids: list[str] = Field(
        default_factory=list,
        description="Clusterable documents, in input order",
    )
    unclusterable: list[str] = Field(
        default_factory=list,
        description="Documents with no words left after pruning",
    )

    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def from_corpus(cls, corpus: Corpus, rare_word_divisor: int = 4) -> DocumentSpace:
        """Prepare ``corpus`` for clustering.

        Words found in at most ``max(1, len(corpus) // rare_word_divisor)``
        documents are deleted; they add work without moving centroids much.
        Documents left with no (or only zero-weight) words are reported as
        unclusterable, and every other vector is normalized.

        Raises:
            InvalidInputError: If the corpus has no words at all.
        """
        min_doc_count = max(1, len(corpus) // rare_word_divisor)
        index = CorpusIndex(corpus.vectors())
        removed = 0
        for postings in index:
            if len(postings) <= min_doc_count:
                index.delete_current()
                removed += 1
        logger.info("Removed %d words found in %d or fewer documents", removed, min_doc_count)

        document_ids: list[str] = []
        unclusterable: list[str] = []
        for doc_id, vector in corpus.documents.items():
            if vector.dot(vector) == 0.0:
                logger.info("Document %s has no words left to cluster on", doc_id)
                unclusterable.append(doc_id)
                continue
            vector.normalize()
            document_ids.append(doc_id)

        return cls(corpus=corpus, document_ids=document_ids, unclusterable=unclusterable)

    # ------------------------------------------------------------------
    # Basic views
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.document_ids)

    @property
    def vectors(self) -> list[DocumentVector]:
        return self.corpus.vectors(self.document_ids)

    # ------------------------------------------------------------------
    # Numeric helpers
    # ------------------------------------------------------------------

    def similarity_matrix(self) -> np.ndarray:
        """Compute the pairwise cosine similarity matrix."""
        vectors = self.vectors
        n = len(vectors)
        sims = np.zeros((n, n), dtype=float)
        for i in range(n):
            sims[i, i] = vectors[i].dot(vectors[i])
            for j in range(i + 1, n):
                sims[i, j] = sims[j, i] = vectors[i].dot(vectors[j])
        return sims
