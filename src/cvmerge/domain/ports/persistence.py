"""Ports for persisting CV snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from cvmerge.domain.model import Document


class StaleDocumentError(RuntimeError):
    """Raised when the stored snapshot changed since it was loaded."""

    def __init__(self, *, expected: datetime | None, actual: datetime | None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Stored document changed since it was loaded: expected={expected}, actual={actual}"
        )


@runtime_checkable
class DocumentRepository(Protocol):
    """Persistence contract for the single CV document owned by the caller."""

    def load(self) -> Document | None: ...

    def save(self, document: Document, *, expected_updated_at: datetime | None) -> None:
        """Store ``document`` if the stored version still has ``expected_updated_at``.

        Implementations raise ``StaleDocumentError`` when it does not.
        """
        ...
