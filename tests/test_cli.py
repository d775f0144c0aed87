import json

from draft_dedupe.cli import main


def test_run_test_writes_outputs(tmp_path, capsys) -> None:
    main(["run-test", "--size", "4", "--seed", "2", "--output-dir", str(tmp_path), "--show-clusters", "1"])

    summary = json.loads((tmp_path / "summary.json").read_text(encoding="utf-8"))
    canonical = json.loads((tmp_path / "canonical.json").read_text(encoding="utf-8"))

    assert summary["document_count"] == 4
    assert summary["failed_document_count"] == 0
    assert summary["cluster_count"] == 2
    assert summary["duplicate_cluster_count"] == 1
    assert summary["pair_count"] == 6
    assert [item["canonical_id"] for item in canonical] == ["draft_000.md", "draft_003.md"]
    assert (tmp_path / "drafts" / "draft_000.md").exists()
    assert "clusters=2" in capsys.readouterr().out


def test_run_reports_failed_documents(tmp_path, capsys) -> None:
    drafts = tmp_path / "drafts"
    drafts.mkdir()
    (drafts / "a.md").write_text("# Title\n\nSame body.\n", encoding="utf-8")
    (drafts / "b.md").write_text("# Title\n\nSame body.\n", encoding="utf-8")
    (drafts / "c.md").write_text("```\nunterminated\n", encoding="utf-8")
    output_dir = tmp_path / "out"

    main(["run", "--input-dir", str(drafts), "--output-dir", str(output_dir), "--workers", "2"])

    failures = json.loads((output_dir / "failures.json").read_text(encoding="utf-8"))
    clusters = json.loads((output_dir / "clusters.json").read_text(encoding="utf-8"))

    assert failures == [{"doc_id": "c.md", "error": "MalformedDocument", "message": failures[0]["message"]}]
    assert [cluster["member_ids"] for cluster in clusters] == [["a.md", "b.md"]]
    assert clusters[0]["confidence"] == 1.0
    assert "FAILED c.md: MalformedDocument" in capsys.readouterr().out


def test_run_test_rerun_with_smaller_size_drops_stale_drafts(tmp_path) -> None:
    main(["run-test", "--size", "8", "--output-dir", str(tmp_path), "--show-clusters", "0"])
    main(["run-test", "--size", "4", "--output-dir", str(tmp_path), "--show-clusters", "0"])

    summary = json.loads((tmp_path / "summary.json").read_text(encoding="utf-8"))

    assert summary["document_count"] == 4
    assert sorted(path.name for path in (tmp_path / "drafts").iterdir()) == [
        f"draft_{i:03d}.md" for i in range(4)
    ]
