from __future__ import annotations

from collections.abc import Callable

from draft_dedupe.schema import BlockKind


class WhitespaceNormalizer:
    """Composable normalizer supporting per-kind transforms.

    Prose blocks have whitespace runs collapsed and are trimmed; code blocks only
    lose their leading and trailing blank lines. Case and punctuation are kept.
    """

    def __init__(self, kind_transforms: dict[BlockKind, Callable[[str], str]] | None = None) -> None:
        self._kind_transforms = {
            BlockKind.HEADING: collapse_whitespace,
            BlockKind.PARAGRAPH: collapse_whitespace,
            BlockKind.CODE: trim_blank_lines,
        }
        self._kind_transforms.update(kind_transforms or {})

    def normalize(self, kind: BlockKind, raw_text: str) -> str:
        transform = self._kind_transforms.get(kind, collapse_whitespace)
        return transform(raw_text)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def trim_blank_lines(text: str) -> str:
    lines = text.split("\n")
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])
