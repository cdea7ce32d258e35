from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel, Field

from .index import CorpusIndex
from .models import ClusteringResult, ClusterMetrics, DocumentCluster
from .space import DocumentSpace
from .vectors import DocumentVector

logger = logging.getLogger(__name__)


class ClusterConfig(BaseModel):
    """Configuration for clustering operations."""

    n_clusters: int = Field(
        default=2,
        description=(
            "Desired number of clusters. Capped to half the clusterable documents; "
            "anything below 2 puts every document in one cluster."
        ),
    )
    min_significance: float = Field(
        default=0.4,
        description="Minimum average TF-IDF for a word to stay in the corpus.",
    )
    rare_word_divisor: int = Field(
        default=4,
        ge=1,
        description=(
            "Words found in at most len(corpus) // rare_word_divisor documents "
            "(and at least 1) are removed before clustering."
        ),
    )
    max_iterations: int = Field(
        default=10,
        ge=1,
        description="Upper bound on k-means assignment rounds.",
    )


class Clusterer(BaseModel):
    """k-means over cosine similarity for a :class:`DocumentSpace`.

    Seeds are the first ``k`` documents in input order, so results depend on
    document order; there are no random restarts.
    """

    config: ClusterConfig = Field(default_factory=ClusterConfig)

    model_config = {"arbitrary_types_allowed": True}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def cluster(self, space: DocumentSpace, n_clusters: int | None = None) -> ClusteringResult:
        """Cluster the documents of ``space``.

        Args:
            space: Prepared documents; see :meth:`DocumentSpace.from_corpus`.
            n_clusters: Overrides ``config.n_clusters`` when given.
        """
        doc_ids = space.document_ids
        vectors = space.vectors
        n_docs = len(doc_ids)

        requested = self.config.n_clusters if n_clusters is None else n_clusters
        effective = min(requested, n_docs // 2)
        logger.debug("Clustering %d documents, %d clusters wanted, %d used", n_docs, requested, effective)

        if n_docs == 0:
            return ClusteringResult(
                n_clusters=0,
                unclusterable=list(space.unclusterable),
                metrics=ClusterMetrics(n_unclusterable=len(space.unclusterable)),
            )

        if effective < 2:
            labels = [0] * n_docs
            centroids = [self._find_centroid(vectors)]
            iterations, converged = 0, True
        else:
            labels, centroids, iterations, converged = self._cluster_kmeans(vectors, effective)

        return self._build_result(space, labels, centroids, iterations, converged)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _cluster_kmeans(
        self,
        vectors: list[DocumentVector],
        n_clusters: int,
    ) -> tuple[list[int], list[DocumentVector], int, bool]:
        centroids = list(vectors[:n_clusters])
        labels = [0] * len(vectors)

        iterations = 0
        moved = True
        while moved and iterations < self.config.max_iterations:
            moved = False
            for i, vector in enumerate(vectors):
                best = self._find_closest(vector, centroids)
                if best != labels[i]:
                    labels[i] = best
                    moved = True

            if moved:
                for cid in range(n_clusters):
                    members = [vectors[i] for i, label in enumerate(labels) if label == cid]
                    # an empty cluster keeps its centroid; documents may move back later
                    if members:
                        centroids[cid] = self._find_centroid(members)

            iterations += 1
            logger.debug("Round %d assignments: %s", iterations, labels)

        if moved:
            logger.info("k-means stopped after %d rounds without converging", iterations)
        return labels, centroids, iterations, not moved

    @staticmethod
    def _find_closest(vector: DocumentVector, centroids: Sequence[DocumentVector]) -> int:
        best = 0
        best_similarity = vector.dot(centroids[0])
        for cid in range(1, len(centroids)):
            similarity = vector.dot(centroids[cid])
            if similarity > best_similarity:
                best, best_similarity = cid, similarity
        return best

    @staticmethod
    def _find_centroid(members: Sequence[DocumentVector]) -> DocumentVector:
        """Average ``members`` word by word; missing words count as zero."""
        index = CorpusIndex(members)
        centroid = DocumentVector()
        for postings in index:
            centroid.insert(index.current_word, sum(p.weight for p in postings) / len(members))
        return centroid

    def _build_result(
        self,
        space: DocumentSpace,
        labels: list[int],
        centroids: list[DocumentVector],
        iterations: int,
        converged: bool,
    ) -> ClusteringResult:
        doc_ids = space.document_ids
        vectors = space.vectors

        # clusters appear in order of their first member; empty ones are skipped
        by_label: dict[int, DocumentCluster] = {}
        for doc_id, label in zip(doc_ids, labels):
            cluster = by_label.get(label)
            if cluster is None:
                cluster = by_label[label] = DocumentCluster(id=label)
            cluster.documents.append(doc_id)

        for label, cluster in by_label.items():
            member_idx = [i for i, lab in enumerate(labels) if lab == label]
            cluster.representative = doc_ids[
                max(member_idx, key=lambda i: (vectors[i].dot(centroids[label]), -i))
            ]

        metrics = self._compute_metrics(space, labels)
        return ClusteringResult(
            clusters=list(by_label.values()),
            assignments=dict(zip(doc_ids, labels)),
            unclusterable=list(space.unclusterable),
            n_clusters=len(by_label),
            iterations=iterations,
            converged=converged,
            metrics=metrics,
        )

    def _compute_metrics(self, space: DocumentSpace, labels: list[int]) -> ClusterMetrics:
        metrics = ClusterMetrics(n_unclusterable=len(space.unclusterable))

        labels_arr = np.asarray(labels, dtype=int)
        sim_matrix = space.similarity_matrix()

        sims: list[float] = []
        for label in np.unique(labels_arr):
            idx = np.where(labels_arr == label)[0]
            if idx.size <= 1:
                continue
            sub = sim_matrix[np.ix_(idx, idx)]
            tri = sub[np.triu_indices(idx.size, k=1)]
            sims.extend(tri.tolist())

        if sims:
            metrics.mean_internal_similarity = float(np.mean(sims))

        n_labels = np.unique(labels_arr).size
        if 2 <= n_labels < labels_arr.size:
            from sklearn.metrics import silhouette_score

            distances = np.clip(1.0 - sim_matrix, 0.0, None)
            np.fill_diagonal(distances, 0.0)
            metrics.silhouette_score = float(
                silhouette_score(distances, labels_arr, metric="precomputed")
            )

        return metrics
