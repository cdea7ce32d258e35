"""End-to-end driver: document ids in, clusters out."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .clustering import ClusterConfig, Clusterer
from .corpus import CorpusBuilder
from .models import ClusteringResult
from .space import DocumentSpace
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def cluster_documents(
    document_ids: Sequence[str],
    tokenizer: Tokenizer,
    config: ClusterConfig | None = None,
) -> ClusteringResult:
    """Build a TF-IDF corpus for ``document_ids`` and cluster it.

    Documents that cannot be read are dropped and logged; every other
    error propagates.
    """
    config = config or ClusterConfig()

    builder = CorpusBuilder(tokenizer=tokenizer, min_significance=config.min_significance)
    corpus = builder.build(document_ids)
    logger.info("Corpus has %d documents, %d dropped", len(corpus), len(corpus.dropped))

    space = DocumentSpace.from_corpus(corpus, rare_word_divisor=config.rare_word_divisor)
    return Clusterer(config=config).cluster(space)
