"""
Hobby Clustering Agent.

Groups respondents by the embedding of their hobby keywords using
spherical (cosine) k-means with deterministic initialization.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import config.settings as settings
from hobbytags.models.cluster import ClusterMember, ClusterSummary
from hobbytags.utils.embeddings import EmbeddingGenerator

logger = logging.getLogger(__name__)


def _dot(a: List[float], b: List[float]) -> float:
    return sum(x * y for x, y in zip(a, b))


def normalize_vector(vec: List[float]) -> List[float]:
    """Scale to unit length; a zero vector is returned unchanged."""
    norm = _dot(vec, vec) ** 0.5 or 1.0
    return [v / norm for v in vec]


def _mean(vectors: List[List[float]]) -> List[float]:
    dim = len(vectors[0])
    out = [0.0] * dim
    for vec in vectors:
        for i in range(dim):
            out[i] += vec[i]
    return [v / len(vectors) for v in out]


def spherical_kmeans(
    vectors: List[List[float]],
    k: int,
    max_iter: int = settings.CLUSTER_MAX_ITER,
    epsilon: float = settings.CLUSTER_EPSILON
) -> Tuple[List[int], List[List[float]]]:
    """
    Cluster unit vectors by cosine similarity.

    Centroids start at evenly strided input vectors. Each iteration
    assigns every point to the most similar centroid (first wins on
    ties), then replaces each non-empty cluster's centroid with its
    re-normalized mean. Stops when no assignment changed and no centroid
    drifted by more than epsilon (1 - cosine), or after max_iter.

    Args:
        vectors: Unit-length embeddings
        k: Requested cluster count; clamped to [2, len(vectors)]
        max_iter: Iteration cap
        epsilon: Centroid drift tolerance

    Returns:
        (assignments, centroids)
    """
    n = len(vectors)
    if n == 0:
        return [], []

    real_k = max(2, min(k, n))
    step = max(1, n // real_k)
    centroids = [list(vectors[min(i * step, n - 1)]) for i in range(real_k)]

    assignments = [0] * n
    for iteration in range(max_iter):
        changed = False

        for i, vec in enumerate(vectors):
            best_idx = 0
            best_score = float("-inf")
            for c, centroid in enumerate(centroids):
                score = _dot(vec, centroid)
                if score > best_score:
                    best_score = score
                    best_idx = c
            if assignments[i] != best_idx:
                assignments[i] = best_idx
                changed = True

        members: List[List[List[float]]] = [[] for _ in range(real_k)]
        for i, c in enumerate(assignments):
            members[c].append(vectors[i])

        for c in range(real_k):
            if not members[c]:
                continue
            updated = normalize_vector(_mean(members[c]))
            drift = abs(1 - _dot(updated, centroids[c]))
            centroids[c] = updated
            if drift > epsilon:
                changed = True

        if not changed:
            logger.debug(f"k-means converged after {iteration + 1} iterations")
            break

    return assignments, centroids


def top_terms(tags: List[str], n: int = settings.CLUSTER_TOP_TERMS) -> List[Dict]:
    """
    Most frequent tags, count descending, ties in first-seen order.
    """
    counts = Counter(tags)
    ordered = sorted(counts.items(), key=lambda item: -item[1])
    return [{"term": term, "count": count} for term, count in ordered[:n]]


def _clean_tags(hobby) -> List[str]:
    tags = [h.strip().lower() for h in hobby if isinstance(h, str)]
    return [t for t in tags if t]


class HobbyClusterAnalyzer:
    """
    Embeds each respondent's joined hobby keywords and clusters them.
    """

    def __init__(
        self,
        embedding_generator: EmbeddingGenerator,
        k: int = settings.CLUSTER_K,
        max_iter: int = settings.CLUSTER_MAX_ITER,
        epsilon: float = settings.CLUSTER_EPSILON,
        top_n: int = settings.CLUSTER_TOP_TERMS
    ):
        """
        Initialize analyzer.

        Args:
            embedding_generator: Embedding provider
            k: Requested cluster count (values < 2 fall back to CLUSTER_K)
            max_iter: k-means iteration cap
            epsilon: k-means drift tolerance
            top_n: Number of top terms reported per cluster
        """
        self.embedding_generator = embedding_generator
        self.k = k if k >= 2 else settings.CLUSTER_K
        self.max_iter = max_iter
        self.epsilon = epsilon
        self.top_n = top_n

    def select_members(self, records: List[Dict]) -> List[ClusterMember]:
        """Records with a non-empty hobby list, tags trimmed and lowercased."""
        members = []
        for record in records:
            hobby = record.get("hobby")
            if not isinstance(hobby, list) or not hobby:
                continue
            members.append(ClusterMember(
                id=record.get("id"),
                alias=record.get("alias", ""),
                hobby=_clean_tags(hobby),
            ))
        return members

    def analyze(self, records: List[Dict]) -> Optional[Dict]:
        """
        Cluster respondents.

        Args:
            records: AreaRecord dicts

        Returns:
            Report dict ("clusters" holds ClusterSummary objects, largest
            first), or None when no record has hobby keywords
        """
        members = self.select_members(records)
        if not members:
            logger.warning("No hobby rows found, nothing to cluster")
            return None

        texts = [", ".join(m.hobby) for m in members]
        vectors = [normalize_vector(v) for v in self.embedding_generator.generate_batch(texts)]
        dims = len(vectors[0]) if vectors else self.embedding_generator.embedding_dimensions

        assignments, _ = spherical_kmeans(vectors, self.k, self.max_iter, self.epsilon)

        clusters = []
        for c in range(max(assignments) + 1):
            cluster_members = [m for m, a in zip(members, assignments) if a == c]
            tags = [t for m in cluster_members for t in m.hobby]
            clusters.append(ClusterSummary(
                cluster_id=c,
                members=cluster_members,
                top_terms=top_terms(tags, self.top_n),
            ))

        clusters.sort(key=lambda cluster: cluster.size, reverse=True)
        logger.info(f"Clustered {len(members)} respondents into {len(clusters)} clusters")

        return {
            "model": self.embedding_generator.model_name,
            "source_field": "hobby",
            "input_rows": len(members),
            "embedding_dims": dims,
            "k": self.k,
            "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "clusters": clusters,
        }
