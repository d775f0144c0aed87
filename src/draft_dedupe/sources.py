from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from draft_dedupe.errors import NotFound, ReadError

logger = logging.getLogger(__name__)


class DirectoryDocumentSource:
    """Drafts stored as files under a directory; ids are POSIX paths relative to the root."""

    def __init__(self, root: Path, pattern: str = "*.md") -> None:
        self._root = Path(root)
        self._pattern = pattern

    def list(self) -> list[str]:
        if not self._root.is_dir():
            raise NotFound(str(self._root), "document directory does not exist")
        ids = sorted(
            path.relative_to(self._root).as_posix()
            for path in self._root.rglob(self._pattern)
            if path.is_file()
        )
        logger.debug("found %d documents under %s", len(ids), self._root)
        return ids

    def read(self, doc_id: str) -> bytes:
        path = (self._root / doc_id).resolve()
        if not path.is_relative_to(self._root.resolve()) or not path.is_file():
            raise NotFound(doc_id)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ReadError(doc_id, str(exc)) from exc


class InMemoryDocumentSource:
    """Drafts held in a mapping; ids keep the mapping's insertion order."""

    def __init__(self, documents: Mapping[str, str | bytes]) -> None:
        self._documents = dict(documents)

    def list(self) -> list[str]:
        return list(self._documents)

    def read(self, doc_id: str) -> bytes:
        try:
            value = self._documents[doc_id]
        except KeyError:
            raise NotFound(doc_id) from None
        if isinstance(value, str):
            return value.encode("utf-8")
        return value
