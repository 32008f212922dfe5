from __future__ import annotations

from .persistence import DocumentRepository, StaleDocumentError

__all__ = ["DocumentRepository", "StaleDocumentError"]
