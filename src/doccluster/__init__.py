"""Document clustering over TF-IDF word vectors.

Documents are tokenized into word counts, weighted with TF-IDF in a sparse
document-term matrix, and grouped with k-means over cosine similarity.
"""

# src/doccluster/__init__.py
from doccluster.clustering import ClusterConfig, Clusterer
from doccluster.corpus import Corpus, CorpusBuilder, DocumentCounts
from doccluster.errors import (
    ClusteringError,
    DocumentReadError,
    ExhaustedError,
    InvalidInputError,
    OutOfRangeError,
)
from doccluster.index import CorpusIndex, WordPosting
from doccluster.models import ClusteringResult, ClusterMetrics, DocumentCluster
from doccluster.morphology import NullStemmer, PorterStemmer, SpacyStemmer, Stemmer
from doccluster.pipeline import cluster_documents
from doccluster.space import DocumentSpace
from doccluster.tokenizer import FileTokenizer, Tokenizer, load_stopwords
from doccluster.vectors import DocumentVector, WordFrequencyEntry

__all__ = [
    "WordFrequencyEntry",
    "DocumentVector",
    "CorpusIndex",
    "WordPosting",
    "Corpus",
    "CorpusBuilder",
    "DocumentCounts",
    "DocumentSpace",
    "ClusterConfig",
    "Clusterer",
    "ClusteringResult",
    "DocumentCluster",
    "ClusterMetrics",
    "Tokenizer",
    "FileTokenizer",
    "load_stopwords",
    "Stemmer",
    "PorterStemmer",
    "SpacyStemmer",
    "NullStemmer",
    "cluster_documents",
    "ClusteringError",
    "InvalidInputError",
    "OutOfRangeError",
    "ExhaustedError",
    "DocumentReadError",
]
