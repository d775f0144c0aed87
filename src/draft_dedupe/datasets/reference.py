from __future__ import annotations

import random
from collections.abc import Sequence

from draft_dedupe.datasets.articles import (
    INTRO_PARAGRAPH,
    OPTIONALS_ARTICLE,
    RESTRUCTURED_HEADINGS,
    REWORDINGS,
)


class ReferenceDraftGenerator:
    """Generate synthetic article drafts (with intentional near-duplicates) for tests and benchmarks.

    Draft 0 is the reference article. Near-duplicates apply one light edit each;
    outliers rename every heading and gain an introduction section.
    """

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate(
        self,
        size: int,
        outlier_rate: float = 0.25,
        article: Sequence[tuple[str, list[str]]] = OPTIONALS_ARTICLE,
    ) -> dict[str, str]:
        if size <= 0:
            return {}

        outlier_count = min(int(size * outlier_rate), size - 1)
        base = _flatten(article)
        drafts: dict[str, str] = {}

        for i in range(size):
            if i == 0:
                blocks = list(base)
            elif i >= size - outlier_count:
                blocks = self._restructure(base)
            else:
                blocks = self._perturb(base)
            drafts[f"draft_{i:03d}.md"] = _render(blocks)
        return drafts

    def _perturb(self, base: list[str]) -> list[str]:
        blocks = list(base)
        paragraphs = [i for i, text in enumerate(blocks) if not _is_heading(text) and not _is_code(text)]
        mutation = self._rng.choice(["reword", "swap", "drop_code", "reflow"])

        if mutation == "reword" and paragraphs:
            idx = self._rng.choice(paragraphs)
            blocks[idx] = blocks[idx] + self._rng.choice(REWORDINGS)
        elif mutation == "swap":
            adjacent = [i for i in paragraphs if i + 1 in paragraphs]
            if adjacent:
                idx = self._rng.choice(adjacent)
                blocks[idx], blocks[idx + 1] = blocks[idx + 1], blocks[idx]
        elif mutation == "drop_code":
            blocks = [text for text in blocks if not _is_code(text)]
        elif paragraphs:
            # whitespace-only edit, invisible after normalization
            idx = self._rng.choice(paragraphs)
            words = blocks[idx].split(" ")
            split_at = max(1, len(words) // 2)
            blocks[idx] = " ".join(words[:split_at]) + "\n  " + "  ".join(words[split_at:])
        return blocks

    def _restructure(self, base: list[str]) -> list[str]:
        headings = iter(RESTRUCTURED_HEADINGS[1:])
        blocks = [RESTRUCTURED_HEADINGS[0], INTRO_PARAGRAPH]
        for text in base:
            if _is_heading(text):
                blocks.append(next(headings, text))
            else:
                blocks.append(text)
        return blocks


def _flatten(article: Sequence[tuple[str, list[str]]]) -> list[str]:
    blocks: list[str] = []
    for heading, paragraphs in article:
        blocks.append(heading)
        blocks.extend(paragraphs)
    return blocks


def _render(blocks: list[str]) -> str:
    return "\n\n".join(blocks) + "\n"


def _is_heading(text: str) -> bool:
    return text.startswith("#")


def _is_code(text: str) -> bool:
    return text.startswith("```")
