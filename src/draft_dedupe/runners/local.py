from __future__ import annotations

import logging
from collections.abc import Mapping

from draft_dedupe.errors import DocumentError
from draft_dedupe.interfaces import CanonicalMerger, ClusterBuilder, DocumentSource, Segmenter, SimilarityEngine
from draft_dedupe.models import Document, DocumentFailure, PipelineResult
from draft_dedupe.sources import InMemoryDocumentSource

logger = logging.getLogger(__name__)


class LocalDedupePipeline:
    """Local runner: segment, score, cluster and merge a batch of drafts.

    Per-document failures (missing, unreadable or malformed drafts) are
    collected next to the successful documents instead of aborting the batch.
    ``EmptyCluster`` and ``IncompleteScoreMatrix`` are internal errors and
    propagate.
    """

    def __init__(
        self,
        segmenter: Segmenter,
        similarity_engine: SimilarityEngine,
        cluster_builder: ClusterBuilder,
        merger: CanonicalMerger,
    ) -> None:
        self._segmenter = segmenter
        self._similarity_engine = similarity_engine
        self._cluster_builder = cluster_builder
        self._merger = merger

    def run(self, source: DocumentSource) -> PipelineResult:
        documents, failures = self.load(source)
        matrix = self._similarity_engine.score_all(documents)
        clusters = self._cluster_builder.build(matrix)
        canonical_results = [self._merger.merge(cluster, documents) for cluster in clusters]

        logger.info(
            "processed %d documents (%d failed) into %d clusters",
            len(documents),
            len(failures),
            len(clusters),
        )
        return PipelineResult(
            documents=documents,
            failures=failures,
            matrix=matrix,
            clusters=clusters,
            canonical_results=canonical_results,
        )

    def run_texts(self, texts: Mapping[str, str | bytes]) -> PipelineResult:
        return self.run(InMemoryDocumentSource(texts))

    def load(self, source: DocumentSource) -> tuple[list[Document], list[DocumentFailure]]:
        documents: list[Document] = []
        failures: list[DocumentFailure] = []
        for doc_id in source.list():
            try:
                documents.append(self._segmenter.load(doc_id, source.read(doc_id)))
            except DocumentError as exc:
                logger.warning("skipping %s: %s", doc_id, exc.message)
                failures.append(
                    DocumentFailure(doc_id=doc_id, error=type(exc).__name__, message=exc.message)
                )
        return documents, failures
