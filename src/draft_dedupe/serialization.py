"""JSON-compatible encoding of pipeline records.

``canonical_result_from_dict`` inverts ``canonical_result_to_dict`` exactly, so a
merged cluster can be written to disk and read back without losing variants or
the canonical document's blocks.
"""

from __future__ import annotations

from typing import Any

from draft_dedupe.models import (
    Block,
    CanonicalResult,
    Cluster,
    Document,
    DocumentFailure,
    MergedPosition,
    SimilarityScore,
    Variant,
)
from draft_dedupe.schema import BlockKind


def block_to_dict(block: Block) -> dict[str, Any]:
    return {
        "position": block.position,
        "kind": block.kind.value,
        "raw_text": block.raw_text,
        "normalized_text": block.normalized_text,
    }


def block_from_dict(payload: dict[str, Any]) -> Block:
    return Block(
        kind=BlockKind(payload["kind"]),
        raw_text=payload["raw_text"],
        normalized_text=payload["normalized_text"],
        position=int(payload["position"]),
    )


def document_to_dict(document: Document) -> dict[str, Any]:
    return {"doc_id": document.doc_id, "blocks": [block_to_dict(block) for block in document.blocks]}


def document_from_dict(payload: dict[str, Any]) -> Document:
    return Document(
        doc_id=payload["doc_id"],
        blocks=tuple(block_from_dict(block) for block in payload["blocks"]),
    )


def score_to_dict(score: SimilarityScore) -> dict[str, Any]:
    return {
        "left_id": score.left_id,
        "right_id": score.right_id,
        "score": score.score,
        "alignment": [list(pair) for pair in score.alignment],
    }


def score_from_dict(payload: dict[str, Any]) -> SimilarityScore:
    return SimilarityScore(
        left_id=payload["left_id"],
        right_id=payload["right_id"],
        score=float(payload["score"]),
        alignment=tuple((int(left), int(right)) for left, right in payload["alignment"]),
    )


def cluster_to_dict(cluster: Cluster) -> dict[str, Any]:
    return {
        "cluster_id": cluster.cluster_id,
        "member_ids": list(cluster.member_ids),
        "confidence": cluster.confidence,
        "scores": [score_to_dict(score) for score in cluster.scores],
    }


def cluster_from_dict(payload: dict[str, Any]) -> Cluster:
    return Cluster(
        cluster_id=payload["cluster_id"],
        member_ids=tuple(payload["member_ids"]),
        scores=tuple(score_from_dict(score) for score in payload["scores"]),
    )


def failure_to_dict(failure: DocumentFailure) -> dict[str, Any]:
    return {"doc_id": failure.doc_id, "error": failure.error, "message": failure.message}


def _variants_to_list(variants: tuple[Variant, ...]) -> list[dict[str, Any]]:
    return [{"text": variant.text, "member_ids": list(variant.member_ids)} for variant in variants]


def _variants_from_list(payload: list[dict[str, Any]]) -> tuple[Variant, ...]:
    return tuple(Variant(text=item["text"], member_ids=tuple(item["member_ids"])) for item in payload)


def canonical_result_to_dict(result: CanonicalResult) -> dict[str, Any]:
    return {
        "cluster_id": result.cluster_id,
        "canonical_id": result.canonical_id,
        "member_ids": list(result.member_ids),
        "canonical": document_to_dict(result.canonical),
        "leading_variants": _variants_to_list(result.leading_variants),
        "positions": [
            {
                "position": position.position,
                "kind": position.kind.value,
                "canonical_text": position.canonical_text,
                "variants": _variants_to_list(position.variants),
                "gap_variants": _variants_to_list(position.gap_variants),
                "missing_from": list(position.missing_from),
            }
            for position in result.positions
        ],
    }


def canonical_result_from_dict(payload: dict[str, Any]) -> CanonicalResult:
    canonical = document_from_dict(payload["canonical"])
    if canonical.doc_id != payload["canonical_id"]:
        raise ValueError(
            f"canonical_id {payload['canonical_id']!r} does not match document {canonical.doc_id!r}"
        )
    return CanonicalResult(
        cluster_id=payload["cluster_id"],
        canonical=canonical,
        member_ids=tuple(payload["member_ids"]),
        leading_variants=_variants_from_list(payload["leading_variants"]),
        positions=tuple(
            MergedPosition(
                position=int(item["position"]),
                kind=BlockKind(item["kind"]),
                canonical_text=item["canonical_text"],
                variants=_variants_from_list(item["variants"]),
                gap_variants=_variants_from_list(item["gap_variants"]),
                missing_from=tuple(item["missing_from"]),
            )
            for item in payload["positions"]
        ),
    )
