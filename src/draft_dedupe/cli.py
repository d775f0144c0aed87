from __future__ import annotations

import argparse
import json
import logging
import shutil
from pathlib import Path
from typing import Any

from draft_dedupe.datasets import ReferenceDraftGenerator
from draft_dedupe.interfaces import DedupePipeline
from draft_dedupe.models import CanonicalResult, PipelineResult
from draft_dedupe.runners import LocalDedupePipeline
from draft_dedupe.schema import MarkupSchema
from draft_dedupe.serialization import canonical_result_to_dict, cluster_to_dict, failure_to_dict
from draft_dedupe.sources import DirectoryDocumentSource
from draft_dedupe.steps import (
    AlignmentMerger,
    LcsSimilarityEngine,
    MarkdownSegmenter,
    ThresholdClusterBuilder,
)

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run-test":
        input_dir = args.output_dir / "drafts"
        _write_drafts(input_dir, ReferenceDraftGenerator(seed=args.seed).generate(size=args.size))
        pattern = "*.md"
    else:
        input_dir = args.input_dir
        pattern = args.pattern

    run(
        input_dir=input_dir,
        pattern=pattern,
        output_dir=args.output_dir,
        similarity_threshold=args.similarity_threshold,
        fence_marker=args.fence_marker,
        heading_marker=args.heading_marker,
        workers=args.workers,
        executor=args.executor,
        show_clusters=args.show_clusters,
    )


def run(
    *,
    input_dir: Path,
    pattern: str,
    output_dir: Path,
    similarity_threshold: float,
    fence_marker: str,
    heading_marker: str,
    workers: int,
    executor: str,
    show_clusters: int,
) -> PipelineResult:
    output_dir.mkdir(parents=True, exist_ok=True)

    pipeline: DedupePipeline = LocalDedupePipeline(
        segmenter=MarkdownSegmenter(schema=MarkupSchema(fence_marker=fence_marker, heading_marker=heading_marker)),
        similarity_engine=LcsSimilarityEngine(workers=workers, executor=executor),
        cluster_builder=ThresholdClusterBuilder(similarity_threshold=similarity_threshold),
        merger=AlignmentMerger(),
    )
    result = pipeline.run(DirectoryDocumentSource(input_dir, pattern=pattern))

    clusters_path = output_dir / "clusters.json"
    canonical_path = output_dir / "canonical.json"
    failures_path = output_dir / "failures.json"
    summary_path = output_dir / "summary.json"

    _write_json(clusters_path, [cluster_to_dict(cluster) for cluster in result.clusters])
    _write_json(canonical_path, [canonical_result_to_dict(item) for item in result.canonical_results])
    _write_json(failures_path, [failure_to_dict(failure) for failure in result.failures])
    summary = _build_summary(
        result=result,
        similarity_threshold=similarity_threshold,
        input_dir=input_dir,
        clusters_path=clusters_path,
        canonical_path=canonical_path,
    )
    _write_json(summary_path, summary)

    print(f"Drafts: {input_dir}")
    print(f"Clusters: {clusters_path}")
    print(f"Canonical: {canonical_path}")
    print(f"Summary: {summary_path}")
    print("---")
    print(f"documents={summary['document_count']}")
    print(f"failed_documents={summary['failed_document_count']}")
    print(f"pairs_scored={summary['pair_count']}")
    print(f"pairs_at_threshold={summary['edge_count']}")
    print(f"clusters={summary['cluster_count']}")
    print(f"duplicate_clusters={summary['duplicate_cluster_count']}")
    print(f"avg_cluster_size={summary['avg_cluster_size']}")
    for failure in result.failures:
        print(f"FAILED {failure.doc_id}: {failure.error}: {failure.message}")
    if show_clusters > 0:
        print("---")
        print("sample_clusters=")
        print(json.dumps(_cluster_sample_payload(result.canonical_results, limit=show_clusters), indent=2))
    return result


def _build_summary(
    *,
    result: PipelineResult,
    similarity_threshold: float,
    input_dir: Path,
    clusters_path: Path,
    canonical_path: Path,
) -> dict[str, object]:
    cluster_sizes = [len(cluster.member_ids) for cluster in result.clusters]
    scores = result.matrix.scores()

    return {
        "document_count": len(result.documents),
        "failed_document_count": len(result.failures),
        "similarity_threshold": similarity_threshold,
        "pair_count": len(scores),
        "edge_count": sum(1 for score in scores if score.score >= similarity_threshold),
        "cluster_count": len(result.clusters),
        "duplicate_cluster_count": sum(1 for size in cluster_sizes if size > 1),
        "avg_cluster_size": round(sum(cluster_sizes) / len(cluster_sizes), 3) if cluster_sizes else 0.0,
        "max_cluster_size": max(cluster_sizes) if cluster_sizes else 0,
        "input_dir": str(input_dir),
        "clusters_path": str(clusters_path),
        "canonical_path": str(canonical_path),
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="draft-dedupe", description="Near-duplicate draft dedupe CLI")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser(
        "run",
        help="Cluster the drafts in a directory and write clusters + canonical merges + summary",
    )
    run_parser.add_argument("--input-dir", type=Path, required=True)
    run_parser.add_argument("--pattern", type=str, default="*.md")
    _add_pipeline_arguments(run_parser)

    run_test_parser = subparsers.add_parser(
        "run-test",
        help="Generate reference drafts, run dedupe, and output clusters + summary",
    )
    run_test_parser.add_argument("--size", type=int, default=8)
    run_test_parser.add_argument("--seed", type=int, default=42)
    _add_pipeline_arguments(run_test_parser)

    return parser


def _add_pipeline_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output-dir", type=Path, default=Path("data/cli_output"))
    parser.add_argument("--similarity-threshold", type=float, default=0.8)
    parser.add_argument("--fence-marker", type=str, default="```")
    parser.add_argument("--heading-marker", type=str, default="#")
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--executor", choices=["thread", "process"], default="thread")
    parser.add_argument("--show-clusters", type=int, default=5)
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"], default="warning")


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


def _write_drafts(directory: Path, drafts: dict[str, str]) -> None:
    # previous runs may have left drafts a smaller --size does not overwrite
    shutil.rmtree(directory, ignore_errors=True)
    directory.mkdir(parents=True, exist_ok=True)
    for name, text in drafts.items():
        (directory / name).write_text(text, encoding="utf-8")
    logger.info("wrote %d reference drafts to %s", len(drafts), directory)


def _cluster_sample_payload(results: list[CanonicalResult], limit: int = 5) -> list[dict[str, Any]]:
    ranked = sorted(results, key=lambda result: (-len(result.member_ids), result.cluster_id))
    payload: list[dict[str, Any]] = []

    for result in ranked[:limit]:
        divergent = [
            {
                "position": position.position,
                "canonical_text": _preview(position.canonical_text),
                "variants": [
                    {"text": _preview(variant.text), "member_ids": list(variant.member_ids)}
                    for variant in position.variants
                    if variant.text != position.canonical_text
                ],
                "inserted_after": [_preview(variant.text) for variant in position.gap_variants],
                "missing_from": list(position.missing_from),
            }
            for position in result.divergent_positions
        ]
        payload.append(
            {
                "cluster_id": result.cluster_id,
                "size": len(result.member_ids),
                "canonical_id": result.canonical_id,
                "member_ids": list(result.member_ids),
                "leading_insertions": [_preview(variant.text) for variant in result.leading_variants],
                "divergent_positions": divergent,
            }
        )
    return payload


def _preview(text: str, width: int = 60) -> str:
    text = " ".join(text.split())
    return text if len(text) <= width else text[: width - 3] + "..."


if __name__ == "__main__":
    main()
