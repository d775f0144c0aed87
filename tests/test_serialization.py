import json

import pytest

from draft_dedupe.datasets import ReferenceDraftGenerator
from draft_dedupe.runners import LocalDedupePipeline
from draft_dedupe.serialization import (
    canonical_result_from_dict,
    canonical_result_to_dict,
    cluster_from_dict,
    cluster_to_dict,
)
from draft_dedupe.steps import AlignmentMerger, LcsSimilarityEngine, MarkdownSegmenter, ThresholdClusterBuilder


def _result():
    pipeline = LocalDedupePipeline(
        segmenter=MarkdownSegmenter(),
        similarity_engine=LcsSimilarityEngine(),
        cluster_builder=ThresholdClusterBuilder(),
        merger=AlignmentMerger(),
    )
    return pipeline.run_texts(ReferenceDraftGenerator(seed=9).generate(size=6))


def test_canonical_results_survive_a_json_round_trip() -> None:
    result = _result()

    for canonical in result.canonical_results:
        payload = json.loads(json.dumps(canonical_result_to_dict(canonical)))
        assert canonical_result_from_dict(payload) == canonical


def test_clusters_survive_a_json_round_trip() -> None:
    for cluster in _result().clusters:
        payload = json.loads(json.dumps(cluster_to_dict(cluster)))
        assert cluster_from_dict(payload) == cluster


def test_mismatched_canonical_id_is_rejected() -> None:
    payload = canonical_result_to_dict(_result().canonical_results[0])
    payload["canonical_id"] = "someone-else.md"

    with pytest.raises(ValueError):
        canonical_result_from_dict(payload)
