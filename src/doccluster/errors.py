"""Exception hierarchy for the clustering engine."""

from __future__ import annotations


class ClusteringError(Exception):
    """Base class for every error raised by :mod:`doccluster`."""


class InvalidInputError(ClusteringError, ValueError):
    """Too few documents, an empty corpus, or otherwise unusable arguments."""


class OutOfRangeError(ClusteringError, IndexError):
    """A positional index into a :class:`~doccluster.vectors.DocumentVector` is invalid."""


class ExhaustedError(ClusteringError, LookupError):
    """:meth:`CorpusIndex.next_word` was called with no word groups left."""


class DocumentReadError(ClusteringError, OSError):
    """A tokenizer could not read a document."""

    def __init__(self, document_id: str, reason: str):
        super().__init__(f"Could not read document {document_id!r}: {reason}")
        self.document_id = document_id
        self.reason = reason
