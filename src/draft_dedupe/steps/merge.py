from __future__ import annotations

import logging
from collections.abc import Sequence

from draft_dedupe.errors import EmptyCluster
from draft_dedupe.models import CanonicalResult, Cluster, Document, MergedPosition, Variant
from draft_dedupe.steps.similarity import lcs_alignment

logger = logging.getLogger(__name__)


class AlignmentMerger:
    """Pick a canonical draft for a cluster and record what every member says at each block.

    The canonical base is the member with the most blocks; ties go to the member
    that comes first in the caller's document order. Members are aligned to the
    base on exact block matches. Unmatched runs between two matches are paired
    position by position, and member blocks left over in a run are insertions,
    attached to the nearest preceding base position. Insertions are sequences:
    a member that inserts the same block twice in one gap is listed twice on
    that gap variant.
    """

    def merge(self, cluster: Cluster, documents: Sequence[Document]) -> CanonicalResult:
        wanted = set(cluster.member_ids)
        members = [document for document in documents if document.doc_id in wanted]
        if not members:
            raise EmptyCluster(f"{cluster.cluster_id} has no member documents")

        base = members[0]
        for member in members[1:]:
            if len(member) > len(base):
                base = member

        collector = _VariantCollector(len(base))
        for member in members:
            self._collect(base, member, collector)

        positions = tuple(
            MergedPosition(
                position=block.position,
                kind=block.kind,
                canonical_text=block.normalized_text,
                variants=collector.variants(block.position),
                gap_variants=collector.gaps(block.position),
                missing_from=tuple(collector.missing[block.position]),
            )
            for block in base.blocks
        )
        result = CanonicalResult(
            cluster_id=cluster.cluster_id,
            canonical=base,
            member_ids=tuple(member.doc_id for member in members),
            positions=positions,
            leading_variants=collector.gaps(-1),
        )
        logger.debug(
            "merged %s: canonical=%s members=%d divergent_positions=%d",
            cluster.cluster_id,
            base.doc_id,
            len(members),
            len(result.divergent_positions),
        )
        return result

    def _collect(self, base: Document, member: Document, collector: "_VariantCollector") -> None:
        doc_id = member.doc_id
        if member is base:
            for block in base.blocks:
                collector.add(block.position, block.normalized_text, doc_id)
            return

        anchors = list(lcs_alignment(base.keys, member.keys))
        anchors.append((len(base), len(member)))

        base_cursor = member_cursor = 0
        for base_pos, member_pos in anchors:
            base_gap = range(base_cursor, base_pos)
            member_gap = range(member_cursor, member_pos)
            paired = min(len(base_gap), len(member_gap))

            for offset in range(paired):
                collector.add(base_gap[offset], member.blocks[member_gap[offset]].normalized_text, doc_id)
            for position in base_gap[paired:]:
                collector.missing[position].append(doc_id)

            # attach to the last base block at or before the insertion point
            attach_to = base_gap[paired - 1] if paired else base_cursor - 1
            for member_index in member_gap[paired:]:
                collector.add_gap(attach_to, member.blocks[member_index].normalized_text, doc_id)

            if base_pos < len(base):
                collector.add(base_pos, member.blocks[member_pos].normalized_text, doc_id)
            base_cursor, member_cursor = base_pos + 1, member_pos + 1


class _VariantCollector:
    def __init__(self, size: int) -> None:
        self._variants: list[dict[str, list[str]]] = [{} for _ in range(size)]
        # index 0 holds insertions before the first base block
        self._gaps: list[dict[str, list[str]]] = [{} for _ in range(size + 1)]
        self.missing: list[list[str]] = [[] for _ in range(size)]

    def add(self, position: int, text: str, doc_id: str) -> None:
        _record(self._variants[position], text, doc_id)

    def add_gap(self, position: int, text: str, doc_id: str) -> None:
        _record(self._gaps[position + 1], text, doc_id, repeat=True)

    def variants(self, position: int) -> tuple[Variant, ...]:
        return _freeze(self._variants[position])

    def gaps(self, position: int) -> tuple[Variant, ...]:
        return _freeze(self._gaps[position + 1])


def _record(bucket: dict[str, list[str]], text: str, doc_id: str, repeat: bool = False) -> None:
    contributors = bucket.setdefault(text, [])
    if repeat or doc_id not in contributors:
        contributors.append(doc_id)


def _freeze(bucket: dict[str, list[str]]) -> tuple[Variant, ...]:
    return tuple(Variant(text=text, member_ids=tuple(ids)) for text, ids in bucket.items())
