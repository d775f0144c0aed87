from __future__ import annotations


class DraftDedupeError(Exception):
    """Base class for all draft dedupe errors."""


class DocumentError(DraftDedupeError):
    """A failure scoped to a single document; the rest of the batch continues."""

    def __init__(self, doc_id: str, message: str) -> None:
        super().__init__(f"{doc_id}: {message}")
        self.doc_id = doc_id
        self.message = message


class MalformedDocument(DocumentError):
    """Raised when a document cannot be segmented, e.g. an unterminated code fence."""

    def __init__(self, doc_id: str, message: str, line_number: int | None = None) -> None:
        super().__init__(doc_id, message)
        self.line_number = line_number


class NotFound(DocumentError):
    """Raised by a document source when an identifier does not exist."""

    def __init__(self, doc_id: str, message: str = "document not found") -> None:
        super().__init__(doc_id, message)


class ReadError(DocumentError):
    """Raised by a document source when a document exists but cannot be read or decoded."""


class EmptyCluster(DraftDedupeError):
    """Raised when merging a cluster that has no member documents."""


class IncompleteScoreMatrix(DraftDedupeError):
    """Raised when clustering is attempted before every pair has been scored."""

    def __init__(self, missing: list[tuple[str, str]]) -> None:
        preview = ", ".join(f"({left}, {right})" for left, right in missing[:5])
        super().__init__(f"{len(missing)} pair score(s) missing: {preview}")
        self.missing = missing
