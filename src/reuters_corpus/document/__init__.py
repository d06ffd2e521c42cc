"""Document layer: the Document record and its event-driven builder."""

from .builder import (
    CATEGORY_SECTIONS,
    DocumentBuilder,
    build_document,
    parse_document_id,
)
from .dates import parse_date
from .model import (
    CATEGORY_FIELDS,
    INVALID_DOCUMENT_ID,
    Document,
    DocumentSplit,
)

__all__ = [
    "CATEGORY_SECTIONS",
    "DocumentBuilder",
    "build_document",
    "parse_document_id",
    "parse_date",
    "CATEGORY_FIELDS",
    "INVALID_DOCUMENT_ID",
    "Document",
    "DocumentSplit",
]
