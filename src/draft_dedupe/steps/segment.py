from __future__ import annotations

import logging

from draft_dedupe.errors import MalformedDocument, ReadError
from draft_dedupe.interfaces import Normalizer
from draft_dedupe.models import Block, Document
from draft_dedupe.schema import DEFAULT_SCHEMA, BlockKind, MarkupSchema
from draft_dedupe.steps.normalize import WhitespaceNormalizer

logger = logging.getLogger(__name__)


class MarkdownSegmenter:
    """Split a Markdown draft into heading, paragraph and fenced code blocks.

    A blank line ends the current block. A heading is always a block of its own
    line. A fenced region is kept verbatim, fences included, as one code block
    even when it contains blank lines.
    """

    def __init__(self, schema: MarkupSchema = DEFAULT_SCHEMA, normalizer: Normalizer | None = None) -> None:
        self._schema = schema
        self._normalizer = normalizer or WhitespaceNormalizer()

    def load(self, doc_id: str, data: bytes) -> Document:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ReadError(doc_id, f"not valid UTF-8: {exc}") from exc
        return Document(doc_id=doc_id, blocks=self.segment(doc_id, text))

    def segment(self, doc_id: str, text: str) -> tuple[Block, ...]:
        lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        blocks: list[Block] = []
        current: list[str] = []

        def flush(kind: BlockKind) -> None:
            if current:
                self._append(blocks, kind, "\n".join(current))
                current.clear()

        index = 0
        while index < len(lines):
            line = lines[index]

            if self._schema.is_fence(line):
                flush(BlockKind.PARAGRAPH)
                opened_at = index
                fenced = [line]
                index += 1
                while index < len(lines) and not self._schema.is_fence(lines[index]):
                    fenced.append(lines[index])
                    index += 1
                if index >= len(lines):
                    raise MalformedDocument(
                        doc_id,
                        f"code fence opened on line {opened_at + 1} is never closed",
                        line_number=opened_at + 1,
                    )
                fenced.append(lines[index])
                self._append(blocks, BlockKind.CODE, "\n".join(fenced))
            elif not line.strip():
                flush(BlockKind.PARAGRAPH)
            elif self._schema.is_heading(line):
                flush(BlockKind.PARAGRAPH)
                self._append(blocks, BlockKind.HEADING, line)
            else:
                current.append(line)
            index += 1

        flush(BlockKind.PARAGRAPH)
        logger.debug("segmented %s into %d blocks", doc_id, len(blocks))
        return tuple(blocks)

    def _append(self, blocks: list[Block], kind: BlockKind, raw_text: str) -> None:
        blocks.append(
            Block(
                kind=kind,
                raw_text=raw_text,
                normalized_text=self._normalizer.normalize(kind, raw_text),
                position=len(blocks),
            )
        )
