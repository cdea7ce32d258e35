from __future__ import annotations

import pytest
from pydantic import ValidationError

from doccluster.morphology import NullStemmer, PorterStemmer, SpacyStemmer, Stemmer, build_stemmer


class DummyStemmer:
    def __init__(self, mapping: dict[str, str]):
        self._mapping = mapping

    def stem(self, word: str) -> str:
        return self._mapping.get(word, word)


def test_stemmers_satisfy_protocol():
    assert isinstance(DummyStemmer({}), Stemmer)
    assert isinstance(NullStemmer(), Stemmer)
    assert isinstance(PorterStemmer(), Stemmer)
    assert isinstance(SpacyStemmer(), Stemmer)


@pytest.mark.parametrize(
    ("word", "expected"),
    [("caresses", "caress"), ("ponies", "poni"), ("running", "run"), ("cats", "cat")],
)
def test_porter_stemmer(word, expected):
    assert PorterStemmer().stem(word) == expected


def test_porter_stemmer_merges_word_forms():
    stemmer = PorterStemmer()
    assert stemmer.stem("connected") == stemmer.stem("connecting") == stemmer.stem("connection")


def test_null_stemmer_is_identity():
    assert NullStemmer().stem("running") == "running"


def test_spacy_stemmer_can_be_constructed_without_loading_model():
    stemmer = SpacyStemmer()
    # Merely constructing it should not require spaCy to be loaded yet.
    assert stemmer.model_name == "en_core_web_sm"


def test_build_stemmer():
    assert isinstance(build_stemmer("porter"), PorterStemmer)
    assert isinstance(build_stemmer("spacy"), SpacyStemmer)
    assert isinstance(build_stemmer("none"), NullStemmer)
    with pytest.raises(ValueError):
        build_stemmer("snowball")


def test_porter_stemmer_mode_is_validated():
    assert PorterStemmer(mode="NLTK_EXTENSIONS").mode == "NLTK_EXTENSIONS"
    with pytest.raises(ValidationError):
        PorterStemmer(mode="ORIGINAL")
