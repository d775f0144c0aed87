from __future__ import annotations

import argparse
from pathlib import Path

from draft_dedupe.datasets import ReferenceDraftGenerator


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic near-duplicate article drafts")
    parser.add_argument("--size", type=int, default=8)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--outlier-rate", type=float, default=0.25)
    parser.add_argument("--output", type=Path, default=Path("data/reference_drafts"))
    args = parser.parse_args()

    drafts = ReferenceDraftGenerator(seed=args.seed).generate(size=args.size, outlier_rate=args.outlier_rate)

    args.output.mkdir(parents=True, exist_ok=True)
    for name, text in drafts.items():
        (args.output / name).write_text(text, encoding="utf-8")


if __name__ == "__main__":
    main()
