from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class BlockKind(StrEnum):
    CODE = "CODE"
    HEADING = "HEADING"
    PARAGRAPH = "PARAGRAPH"


@dataclass(frozen=True)
class MarkupSchema:
    """Maps source markup markers to block boundaries."""

    fence_marker: str = "```"
    heading_marker: str = "#"

    def __post_init__(self) -> None:
        if not self.fence_marker:
            raise ValueError("fence_marker must be a non-empty string")
        if not self.heading_marker:
            raise ValueError("heading_marker must be a non-empty string")

    def is_fence(self, line: str) -> bool:
        return line.lstrip().startswith(self.fence_marker)

    def is_heading(self, line: str) -> bool:
        return line.startswith(self.heading_marker)


DEFAULT_SCHEMA = MarkupSchema()
