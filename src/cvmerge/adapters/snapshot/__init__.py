from __future__ import annotations

from .schema import DocumentSchema
from .translator import document_to_payload, parse_document, translate_document

__all__ = [
    "DocumentSchema",
    "document_to_payload",
    "parse_document",
    "translate_document",
]
