"""
Cluster data model.

Output of the embedding clustering utility.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ClusterMember:
    id: int
    alias: str
    hobby: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"id": self.id, "alias": self.alias, "hobby": list(self.hobby)}


@dataclass
class ClusterSummary:
    """
    One spherical k-means cluster with its most frequent hobby tags.
    """
    cluster_id: int
    members: List[ClusterMember] = field(default_factory=list)
    top_terms: List[dict] = field(default_factory=list)  # [{"term", "count"}]

    @property
    def size(self) -> int:
        return len(self.members)

    def to_dict(self) -> dict:
        return {
            "cluster_id": self.cluster_id,
            "size": self.size,
            "top_terms": list(self.top_terms),
            "members": [m.to_dict() for m in self.members],
        }

    def to_simple_dict(self) -> dict:
        return {
            "cluster": self.cluster_id,
            "members": [{"id": m.id, "alias": m.alias} for m in self.members],
        }
