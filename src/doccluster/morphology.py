from __future__ import annotations

from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, Field, PrivateAttr


@runtime_checkable
class Stemmer(Protocol):
    """Maps a surface word to the canonical form it is counted under."""

    def stem(self, word: str) -> str:  #  structural only
        ...


class NullStemmer(BaseModel):
    """Counts every surface form separately."""

    def stem(self, word: str) -> str:
        return word


class PorterStemmer(BaseModel):
    """NLTK-based Porter stemmer.

    Uses the original published algorithm rather than NLTK's extended
    variant so stems match other Porter implementations.
    """

    mode: Literal["ORIGINAL_ALGORITHM", "MARTIN_EXTENSIONS", "NLTK_EXTENSIONS"] = Field(
        default="ORIGINAL_ALGORITHM",
        description="NLTK PorterStemmer mode",
    )
    _stemmer: Any | None = PrivateAttr(default=None)

    def _ensure_loaded(self) -> Any:
        if self._stemmer is None:
            from nltk.stem.porter import PorterStemmer as NltkPorterStemmer

            self._stemmer = NltkPorterStemmer(mode=getattr(NltkPorterStemmer, self.mode))
        return self._stemmer

    def stem(self, word: str) -> str:
        return self._ensure_loaded().stem(word)


class SpacyStemmer(BaseModel):
    """spaCy-based stemmer that counts words under their lemma.

    The spaCy model is loaded lazily on first use to keep startup
    overhead small.
    """

    model_name: str = Field(default="en_core_web_sm", description="Name of the spaCy language model to load")
    _nlp: Any | None = PrivateAttr(default=None)

    model_config = {"protected_namespaces": ()}

    def _ensure_loaded(self) -> Any:
        if self._nlp is None:
            import spacy

            self._nlp = spacy.load(self.model_name, disable=["parser", "ner"])
        return self._nlp

    def stem(self, word: str) -> str:
        nlp = self._ensure_loaded()
        doc = nlp(word)
        if not doc:
            return word
        return doc[0].lemma_.lower()


def build_stemmer(name: str) -> Stemmer:
    """Return the stemmer registered under ``name``."""
    if name == "porter":
        return PorterStemmer()
    if name == "spacy":
        return SpacyStemmer()
    if name == "none":
        return NullStemmer()
    raise ValueError(f"Unsupported stemmer: {name!r}")
