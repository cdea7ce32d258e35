"""Command-line entry point.

Usage::

    doccluster 3 a.txt b.txt c.txt d.txt --data-dir data --stopwords data/stopwords.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .clustering import ClusterConfig
from .errors import ClusteringError
from .logging_config import setup_logging
from .models import ClusteringResult
from .morphology import build_stemmer
from .pipeline import cluster_documents
from .tokenizer import FileTokenizer, load_stopwords

logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="doccluster",
        description="Group text documents into clusters of similar content.",
    )
    parser.add_argument("n_clusters", type=int, help="Number of clusters wanted (at most half the documents)")
    parser.add_argument("documents", nargs="+", help="Document file names, relative to --data-dir")
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="Directory holding the documents (default: data)")
    parser.add_argument(
        "--stopwords",
        type=Path,
        default=None,
        help="Comma-separated stopword file (default: <data-dir>/stopwords.txt)",
    )
    parser.add_argument(
        "--min-significance",
        type=float,
        default=0.4,
        help="Minimum average TF-IDF for a word to be kept (default: 0.4)",
    )
    parser.add_argument("--max-iterations", type=int, default=10, help="k-means round limit (default: 10)")
    parser.add_argument(
        "--stemmer",
        choices=["porter", "spacy", "none"],
        default="porter",
        help="Stemmer used to merge word forms (default: porter)",
    )
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or WARNING)")
    return parser.parse_args(argv)


def format_result(result: ClusteringResult) -> str:
    lines = []
    for cluster in result.clusters:
        lines.append(f"Cluster {cluster.id}: {{{', '.join(cluster.documents)}}}")
    lines.append(f"Not clusterable: {{{', '.join(result.unclusterable)}}}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.log_level)

    stopwords_path = args.stopwords or args.data_dir / "stopwords.txt"

    try:
        config = ClusterConfig(
            n_clusters=args.n_clusters,
            min_significance=args.min_significance,
            max_iterations=args.max_iterations,
        )
        tokenizer = FileTokenizer(
            data_dir=args.data_dir,
            stopwords=load_stopwords(stopwords_path),
            stemmer=build_stemmer(args.stemmer),
        )
        result = cluster_documents(args.documents, tokenizer, config)
    except (ClusteringError, OSError, ValueError) as exc:
        logger.debug("Clustering failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
