import pytest

from draft_dedupe.errors import EmptyCluster
from draft_dedupe.models import Cluster, Document, Variant
from draft_dedupe.steps import AlignmentMerger, MarkdownSegmenter

TITLE = "# Optional values"
P1 = "Most bugs start with a value that was assumed to be present."
P1_EDITED = "Most bugs start with a value that someone assumed was present."
P2 = "An optional type makes absence explicit."
P3 = "Values declared with let cannot be reassigned."
P4 = "Prefer constants by default."
EXTRA = "This paragraph only exists in one draft."


def _doc(doc_id: str, blocks: list[str]) -> Document:
    return MarkdownSegmenter().load(doc_id, "\n\n".join(blocks).encode("utf-8"))


def _cluster(*member_ids: str) -> Cluster:
    return Cluster(cluster_id="cluster_0001", member_ids=member_ids)


def test_merge_records_substitutions_insertions_and_missing_blocks() -> None:
    a = _doc("a.md", [TITLE, P1, P2, P3, P4])
    b = _doc("b.md", [TITLE, P1_EDITED, P2, P3, P4])
    c = _doc("c.md", [TITLE, P1, EXTRA, P2, P3])

    result = AlignmentMerger().merge(_cluster("a.md", "b.md", "c.md"), [a, b, c])

    assert result.canonical_id == "a.md"
    assert result.member_ids == ("a.md", "b.md", "c.md")
    assert [position.position for position in result.positions] == [0, 1, 2, 3, 4]

    first, second, third, _, last = result.positions
    assert first.variants == (Variant(TITLE, ("a.md", "b.md", "c.md")),)
    assert not first.diverges
    assert second.variants == (Variant(P1, ("a.md", "c.md")), Variant(P1_EDITED, ("b.md",)))
    assert second.gap_variants == (Variant(EXTRA, ("c.md",)),)
    assert not third.diverges
    assert last.variants == (Variant(P4, ("a.md", "b.md")),)
    assert last.missing_from == ("c.md",)
    assert [position.position for position in result.divergent_positions] == [1, 4]


def test_insertion_before_first_block_is_leading() -> None:
    a = _doc("a.md", [P1, P2, P3])
    d = _doc("d.md", [EXTRA, P1, P2])

    result = AlignmentMerger().merge(_cluster("a.md", "d.md"), [a, d])

    assert result.canonical_id == "a.md"
    assert result.leading_variants == (Variant(EXTRA, ("d.md",)),)
    assert result.positions[2].missing_from == ("d.md",)


def test_canonical_is_longest_member_with_caller_order_tie_break() -> None:
    short = _doc("short.md", [TITLE, P1])
    long_one = _doc("long-1.md", [TITLE, P1, P2])
    long_two = _doc("long-2.md", [TITLE, P1, P3])
    cluster = _cluster("short.md", "long-1.md", "long-2.md")

    assert AlignmentMerger().merge(cluster, [short, long_one, long_two]).canonical_id == "long-1.md"
    assert AlignmentMerger().merge(cluster, [long_two, short, long_one]).canonical_id == "long-2.md"


def test_documents_outside_the_cluster_are_ignored() -> None:
    a = _doc("a.md", [TITLE, P1])
    outsider = _doc("z.md", [TITLE, P1, P2, P3])

    result = AlignmentMerger().merge(_cluster("a.md"), [outsider, a])

    assert result.canonical_id == "a.md"
    assert result.member_ids == ("a.md",)
    assert result.divergent_positions == []


def test_empty_cluster_raises() -> None:
    with pytest.raises(EmptyCluster):
        AlignmentMerger().merge(_cluster("missing.md"), [_doc("a.md", [P1])])


def test_repeated_insertion_is_listed_once_per_occurrence() -> None:
    a = _doc("a.md", [TITLE, P1, P2, P3, P4])
    b = _doc("b.md", [TITLE, P1, EXTRA, EXTRA, P2])

    result = AlignmentMerger().merge(_cluster("a.md", "b.md"), [a, b])

    assert result.positions[1].gap_variants == (Variant(EXTRA, ("b.md", "b.md")),)
    assert result.positions[3].missing_from == ("b.md",)
    assert result.positions[4].missing_from == ("b.md",)
