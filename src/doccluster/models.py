from __future__ import annotations

from pydantic import BaseModel, Field


class DocumentCluster(BaseModel):
    """A group of documents assigned to the same centroid."""

    id: int = Field(description="Index of the centroid the documents were assigned to")
    documents: list[str] = Field(
        default_factory=list,
        description="Member document ids, in input order",
    )
    representative: str | None = Field(
        default=None,
        description="Member document closest to the cluster centroid",
    )

    @property
    def size(self) -> int:
        """Number of members."""
        return len(self.documents)

    def as_set(self) -> set[str]:
        return set(self.documents)


class ClusterMetrics(BaseModel):
    """Quality metrics for a clustering run."""

    silhouette_score: float | None = Field(
        default=None,
        description="Silhouette coefficient over cosine distances",
    )
    mean_internal_similarity: float | None = Field(
        default=None,
        description="Average pairwise cosine similarity within clusters",
    )
    n_unclusterable: int = Field(
        default=0,
        description="Number of documents left out of clustering",
    )


class ClusteringResult(BaseModel):
    """Result of a clustering operation."""

    clusters: list[DocumentCluster] = Field(
        default_factory=list,
        description="Non-empty clusters, in order of first member",
    )
    assignments: dict[str, int] = Field(
        default_factory=dict,
        description="Map from document id to cluster id",
    )
    unclusterable: list[str] = Field(
        default_factory=list,
        description="Documents with no words left to cluster on",
    )
    n_clusters: int = Field(description="Number of clusters produced")
    iterations: int = Field(default=0, description="Assignment rounds that were run")
    converged: bool = Field(default=True, description="False if the round limit stopped the run")
    metrics: ClusterMetrics = Field(default_factory=ClusterMetrics, description="Quality metrics")

    def get_cluster(self, document_id: str) -> int | None:
        """Get the cluster id for a document.

        Returns:
            Cluster id, or None if the document was not clustered
        """
        return self.assignments.get(document_id)

    def is_unclusterable(self, document_id: str) -> bool:
        """Check if a document was left out of clustering."""
        return document_id in self.unclusterable

    def as_sets(self) -> list[set[str]]:
        """Cluster memberships as plain sets of document ids."""
        return [cluster.as_set() for cluster in self.clusters]
