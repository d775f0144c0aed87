from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence

from draft_dedupe.errors import IncompleteScoreMatrix
from draft_dedupe.models import Cluster, ScoreMatrix, SimilarityScore

logger = logging.getLogger(__name__)


class ThresholdClusterBuilder:
    """Single-link clustering: connected components of the ``score >= threshold`` graph.

    Near-duplicate drafts form chains (A~B, B~C while A and C drift apart), so a
    cluster only requires every member to reach one other member. Every input
    document lands in exactly one cluster; unmatched documents are singletons.
    """

    def __init__(self, similarity_threshold: float = 0.8) -> None:
        if not 0.0 < similarity_threshold <= 1.0:
            raise ValueError(f"similarity_threshold must be in (0, 1], got {similarity_threshold}")
        self._similarity_threshold = similarity_threshold

    @property
    def similarity_threshold(self) -> float:
        return self._similarity_threshold

    def build(self, matrix: ScoreMatrix) -> list[Cluster]:
        if not matrix.is_complete:
            raise IncompleteScoreMatrix(matrix.missing())

        uf = _UnionFind(matrix.doc_ids)
        edges = [score for score in matrix.scores() if score.score >= self._similarity_threshold]
        for edge in edges:
            uf.union(edge.left_id, edge.right_id)

        edge_map: dict[str, list[SimilarityScore]] = defaultdict(list)
        for edge in edges:
            edge_map[uf.find(edge.left_id)].append(edge)

        clusters: list[Cluster] = []
        for number, (root, members) in enumerate(uf.groups(), start=1):
            clusters.append(
                Cluster(
                    cluster_id=f"cluster_{number:04d}",
                    member_ids=tuple(members),
                    scores=tuple(edge_map.get(root, ())),
                )
            )

        logger.debug(
            "built %d clusters from %d documents (%d edges at threshold %.3f)",
            len(clusters),
            len(matrix.doc_ids),
            len(edges),
            self._similarity_threshold,
        )
        return clusters


class _UnionFind:
    """Disjoint sets over ordered ids; a set's root is its earliest id in that order."""

    def __init__(self, items: Sequence[str]) -> None:
        self._rank = {item: i for i, item in enumerate(items)}
        self._parent = {item: item for item in items}

    def find(self, item: str) -> str:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, left: str, right: str) -> None:
        root_left = self.find(left)
        root_right = self.find(right)
        if root_left == root_right:
            return
        if self._rank[root_right] < self._rank[root_left]:
            root_left, root_right = root_right, root_left
        self._parent[root_right] = root_left

    def groups(self) -> list[tuple[str, list[str]]]:
        """Components ordered by root, members in input order."""
        grouped: dict[str, list[str]] = {}
        for item in self._rank:
            grouped.setdefault(self.find(item), []).append(item)
        return sorted(grouped.items(), key=lambda group: self._rank[group[0]])
