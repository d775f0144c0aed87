from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Iterator, Sequence

from draft_dedupe.schema import BlockKind


@dataclass(frozen=True, slots=True)
class Block:
    """A heading, paragraph or code unit in source order."""

    kind: BlockKind
    raw_text: str
    normalized_text: str
    position: int

    @property
    def key(self) -> tuple[BlockKind, str]:
        return (self.kind, self.normalized_text)


@dataclass(frozen=True, slots=True)
class Document:
    """An immutable, segmented draft."""

    doc_id: str
    blocks: tuple[Block, ...] = ()

    def __len__(self) -> int:
        return len(self.blocks)

    @property
    def keys(self) -> list[tuple[BlockKind, str]]:
        return [block.key for block in self.blocks]


@dataclass(frozen=True, slots=True)
class SimilarityScore:
    """Block-level similarity between two documents and the alignment behind it."""

    left_id: str
    right_id: str
    score: float
    alignment: tuple[tuple[int, int], ...] = ()

    @property
    def matched_blocks(self) -> int:
        return len(self.alignment)

    def swapped(self) -> "SimilarityScore":
        return SimilarityScore(
            left_id=self.right_id,
            right_id=self.left_id,
            score=self.score,
            alignment=tuple((right, left) for left, right in self.alignment),
        )


class ScoreMatrix:
    """Write-once pairwise score store over an ordered set of document ids."""

    def __init__(self, doc_ids: Sequence[str]) -> None:
        if len(set(doc_ids)) != len(doc_ids):
            raise ValueError("document ids must be unique")
        self._doc_ids = tuple(doc_ids)
        self._index = {doc_id: i for i, doc_id in enumerate(self._doc_ids)}
        self._cells: dict[tuple[str, str], SimilarityScore] = {}

    @property
    def doc_ids(self) -> tuple[str, ...]:
        return self._doc_ids

    def pairs(self) -> Iterator[tuple[str, str]]:
        return combinations(self._doc_ids, 2)

    def set(self, score: SimilarityScore) -> None:
        key = self._key(score.left_id, score.right_id)
        if key in self._cells:
            raise ValueError(f"score for {key} already recorded")
        if key != (score.left_id, score.right_id):
            score = score.swapped()
        self._cells[key] = score

    def get(self, left_id: str, right_id: str) -> SimilarityScore | None:
        key = self._key(left_id, right_id)
        score = self._cells.get(key)
        if score is None or key == (left_id, right_id):
            return score
        return score.swapped()

    def missing(self) -> list[tuple[str, str]]:
        return [pair for pair in self.pairs() if pair not in self._cells]

    @property
    def is_complete(self) -> bool:
        return len(self._cells) == len(self._doc_ids) * (len(self._doc_ids) - 1) // 2

    def scores(self) -> list[SimilarityScore]:
        return [self._cells[pair] for pair in self.pairs() if pair in self._cells]

    def _key(self, left_id: str, right_id: str) -> tuple[str, str]:
        if left_id == right_id:
            raise ValueError(f"self-pair {left_id!r} has no matrix cell")
        left, right = self._index[left_id], self._index[right_id]
        return (left_id, right_id) if left < right else (right_id, left_id)


@dataclass(frozen=True, slots=True)
class Cluster:
    """Document ids judged near-duplicate, plus the edges that connect them."""

    cluster_id: str
    member_ids: tuple[str, ...]
    scores: tuple[SimilarityScore, ...] = ()

    @property
    def confidence(self) -> float:
        if not self.scores:
            return 1.0
        return sum(score.score for score in self.scores) / len(self.scores)


@dataclass(frozen=True, slots=True)
class Variant:
    text: str
    member_ids: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class MergedPosition:
    """One canonical block position and everything cluster members put there."""

    position: int
    kind: BlockKind
    canonical_text: str
    variants: tuple[Variant, ...]
    gap_variants: tuple[Variant, ...] = ()
    missing_from: tuple[str, ...] = ()

    @property
    def diverges(self) -> bool:
        return len(self.variants) > 1 or bool(self.gap_variants) or bool(self.missing_from)


@dataclass(frozen=True, slots=True)
class CanonicalResult:
    """The canonical draft for a cluster with per-position variants."""

    cluster_id: str
    canonical: Document
    member_ids: tuple[str, ...]
    positions: tuple[MergedPosition, ...]
    leading_variants: tuple[Variant, ...] = ()

    @property
    def canonical_id(self) -> str:
        return self.canonical.doc_id

    @property
    def divergent_positions(self) -> list[MergedPosition]:
        return [position for position in self.positions if position.diverges]


@dataclass(frozen=True, slots=True)
class DocumentFailure:
    doc_id: str
    error: str
    message: str


@dataclass(slots=True)
class PipelineResult:
    documents: list[Document]
    failures: list[DocumentFailure]
    matrix: ScoreMatrix
    clusters: list[Cluster]
    canonical_results: list[CanonicalResult] = field(default_factory=list)
