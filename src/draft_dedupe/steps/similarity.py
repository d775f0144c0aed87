from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor

from draft_dedupe.models import Document, ScoreMatrix, SimilarityScore

logger = logging.getLogger(__name__)


class LcsSimilarityEngine:
    """Dice-style block similarity over a longest-common-subsequence alignment.

    Two blocks match only when their kinds and normalized texts are equal. The
    score is ``2 * matched / (len(a) + len(b))``; two empty documents are
    vacuously identical and score 1.0.

    Pair scoring is independent per pair, so ``score_all`` can fan out across a
    thread or process pool. Every future is collected before the matrix is
    returned.
    """

    def __init__(self, workers: int = 1, executor: str = "thread") -> None:
        if executor not in {"thread", "process"}:
            raise ValueError(f"unknown executor {executor!r}; expected 'thread' or 'process'")
        self._workers = max(1, workers)
        self._executor = executor

    def score(self, left: Document, right: Document) -> SimilarityScore:
        total = len(left) + len(right)
        if total == 0:
            return SimilarityScore(left_id=left.doc_id, right_id=right.doc_id, score=1.0)

        alignment = lcs_alignment(left.keys, right.keys)
        return SimilarityScore(
            left_id=left.doc_id,
            right_id=right.doc_id,
            score=2 * len(alignment) / total,
            alignment=alignment,
        )

    def score_all(self, documents: Sequence[Document]) -> ScoreMatrix:
        matrix = ScoreMatrix([document.doc_id for document in documents])
        pairs = [
            (documents[i], documents[j])
            for i in range(len(documents))
            for j in range(i + 1, len(documents))
        ]

        if self._workers == 1 or len(pairs) < 2:
            for left, right in pairs:
                matrix.set(self.score(left, right))
        else:
            with self._make_executor() as pool:
                futures = [pool.submit(_score_pair, self, left, right) for left, right in pairs]
                for future in futures:
                    matrix.set(future.result())

        logger.debug("scored %d pairs across %d documents", len(pairs), len(documents))
        return matrix

    def _make_executor(self) -> Executor:
        if self._executor == "process":
            return ProcessPoolExecutor(max_workers=self._workers)
        return ThreadPoolExecutor(max_workers=self._workers)


def lcs_alignment(left: Sequence[Hashable], right: Sequence[Hashable]) -> tuple[tuple[int, int], ...]:
    """Return matched ``(left_index, right_index)`` pairs of one longest common subsequence."""
    if not left or not right:
        return ()

    # suffix[i][j] = LCS length of left[i:] and right[j:]
    suffix = [[0] * (len(right) + 1) for _ in range(len(left) + 1)]
    for i in range(len(left) - 1, -1, -1):
        row, below = suffix[i], suffix[i + 1]
        for j in range(len(right) - 1, -1, -1):
            if left[i] == right[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    pairs: list[tuple[int, int]] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] == right[j]:
            pairs.append((i, j))
            i += 1
            j += 1
        elif suffix[i + 1][j] >= suffix[i][j + 1]:
            i += 1
        else:
            j += 1
    return tuple(pairs)


def _score_pair(engine: LcsSimilarityEngine, left: Document, right: Document) -> SimilarityScore:
    return engine.score(left, right)
