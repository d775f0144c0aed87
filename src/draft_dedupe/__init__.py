"""Near-duplicate draft detection, clustering and canonical merging."""

from draft_dedupe.errors import EmptyCluster, MalformedDocument, NotFound, ReadError
from draft_dedupe.models import Block, CanonicalResult, Cluster, Document, SimilarityScore
from draft_dedupe.schema import BlockKind, MarkupSchema

__all__ = [
    "Block",
    "BlockKind",
    "CanonicalResult",
    "Cluster",
    "Document",
    "EmptyCluster",
    "MalformedDocument",
    "MarkupSchema",
    "NotFound",
    "ReadError",
    "SimilarityScore",
]
