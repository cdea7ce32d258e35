from __future__ import annotations

import pytest

from doccluster import DocumentReadError


class DummyTokenizer:
    """Serves fixed word counts; unknown ids fail like a missing file."""

    def __init__(self, documents: dict[str, dict[str, int]]):
        self._documents = documents
        self.calls: list[str] = []

    def tokenize(self, document_id: str) -> dict[str, int]:
        self.calls.append(document_id)
        if document_id not in self._documents:
            raise DocumentReadError(document_id, "no such document")
        return dict(self._documents[document_id])


@pytest.fixture
def example_counts() -> dict[str, dict[str, int]]:
    return {
        "doc1": {"a": 1, "c": 1, "d": 2, "f": 1},
        "doc2": {"b": 1, "d": 1, "e": 1},
        "doc3": {"a": 1, "b": 1, "d": 1, "f": 1, "g": 1},
    }


@pytest.fixture
def make_tokenizer():
    return DummyTokenizer
