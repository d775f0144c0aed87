from draft_dedupe.steps.clustering import ThresholdClusterBuilder
from draft_dedupe.steps.merge import AlignmentMerger
from draft_dedupe.steps.normalize import WhitespaceNormalizer
from draft_dedupe.steps.segment import MarkdownSegmenter
from draft_dedupe.steps.similarity import LcsSimilarityEngine, lcs_alignment

__all__ = [
    "AlignmentMerger",
    "LcsSimilarityEngine",
    "MarkdownSegmenter",
    "ThresholdClusterBuilder",
    "WhitespaceNormalizer",
    "lcs_alignment",
]
