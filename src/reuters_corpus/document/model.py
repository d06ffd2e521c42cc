"""Document record produced for each Reuters fragment."""

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

INVALID_DOCUMENT_ID = -1

CATEGORY_FIELDS = ("topics", "places", "people", "orgs", "exchanges", "companies")


class DocumentSplit(Enum):
    """Train/test split a document belongs to."""

    TRAIN = "TRAIN"
    TEST = "TEST"


@dataclass(frozen=True)
class Document:
    """One news article, immutable once built.

    ``id`` is :data:`INVALID_DOCUMENT_ID` when the fragment carried no usable
    identifier; callers that need a key must check :attr:`is_valid`.
    """

    id: int = INVALID_DOCUMENT_ID
    title: str = ""
    body: Optional[str] = None
    date: Optional[datetime] = None
    topics: Tuple[str, ...] = ()
    places: Tuple[str, ...] = ()
    people: Tuple[str, ...] = ()
    orgs: Tuple[str, ...] = ()
    exchanges: Tuple[str, ...] = ()
    companies: Tuple[str, ...] = ()
    split: Optional[DocumentSplit] = None

    @property
    def is_valid(self) -> bool:
        """Check whether the document has a usable identifier."""
        return self.id != INVALID_DOCUMENT_ID

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to a JSON-friendly dictionary."""
        result: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "date": self.date.isoformat() if self.date is not None else None,
        }
        for name in CATEGORY_FIELDS:
            result[name] = list(getattr(self, name))
        result["split"] = self.split.value if self.split is not None else None
        return result

    def to_json(self, indent: Optional[int] = None) -> str:
        """Convert document to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
