from __future__ import annotations

from typing import Protocol, Sequence

from draft_dedupe.models import (
    Block,
    CanonicalResult,
    Cluster,
    Document,
    PipelineResult,
    ScoreMatrix,
    SimilarityScore,
)
from draft_dedupe.schema import BlockKind


class DocumentSource(Protocol):
    """External collaborator: enumerate and read raw documents."""

    def list(self) -> list[str]:
        ...

    def read(self, doc_id: str) -> bytes:
        ...


class Normalizer(Protocol):
    """Step 2: map block text into its comparison form."""

    def normalize(self, kind: BlockKind, raw_text: str) -> str:
        ...


class Segmenter(Protocol):
    """Step 1: split one document into ordered blocks."""

    def segment(self, doc_id: str, text: str) -> tuple[Block, ...]:
        ...

    def load(self, doc_id: str, data: bytes) -> Document:
        ...


class SimilarityEngine(Protocol):
    """Step 3: block-level alignment and pairwise scoring."""

    def score(self, left: Document, right: Document) -> SimilarityScore:
        ...

    def score_all(self, documents: Sequence[Document]) -> ScoreMatrix:
        ...


class ClusterBuilder(Protocol):
    """Step 4: group documents into near-duplicate clusters."""

    def build(self, matrix: ScoreMatrix) -> list[Cluster]:
        ...


class CanonicalMerger(Protocol):
    """Step 5: pick a canonical draft per cluster and record variants."""

    def merge(self, cluster: Cluster, documents: Sequence[Document]) -> CanonicalResult:
        ...


class DedupePipeline(Protocol):
    """Unified pipeline interface for local execution engines."""

    def run(self, source: DocumentSource) -> PipelineResult:
        ...
