"""Conversion of document sequences to downstream formats.

The reader itself persists nothing. These helpers turn a document sequence
into JSON Lines for indexing pipelines or into a pandas DataFrame for
analysis.
"""

import json
from typing import Any, Dict, Iterable, Iterator, List, Optional, TextIO

from reuters_corpus.document.model import CATEGORY_FIELDS, Document, DocumentSplit
from reuters_corpus.shared.logging import get_logger

logger = get_logger(__name__, component="adapters")

DATAFRAME_COLUMNS = [
    "id", "title", "body", "date", *CATEGORY_FIELDS, "split",
]


def filter_documents(
    documents: Iterable[Document],
    split: Optional[DocumentSplit] = None,
    limit: Optional[int] = None,
    valid_only: bool = False,
) -> Iterator[Document]:
    """Lazily filter a document sequence.

    Args:
        documents: Source documents
        split: Keep only documents of this split
        limit: Stop after this many documents have been yielded
        valid_only: Drop documents without a usable identifier
    """
    if limit is not None and limit <= 0:
        return
    yielded = 0
    for document in documents:
        if split is not None and document.split is not split:
            continue
        if valid_only and not document.is_valid:
            continue
        yield document
        yielded += 1
        if limit is not None and yielded >= limit:
            return


def to_records(documents: Iterable[Document]) -> Iterator[Dict[str, Any]]:
    """Yield one JSON-friendly dictionary per document."""
    for document in documents:
        yield document.to_dict()


def write_jsonl(documents: Iterable[Document], output: TextIO) -> int:
    """Write documents as JSON Lines.

    Returns:
        Number of documents written
    """
    count = 0
    for record in to_records(documents):
        output.write(json.dumps(record, ensure_ascii=False))
        output.write("\n")
        count += 1
    logger.debug("Wrote JSON Lines output", extra={"documents": count})
    return count


def write_json(documents: Iterable[Document], output: TextIO, indent: int = 2) -> int:
    """Write documents as a single JSON array.

    Returns:
        Number of documents written
    """
    records = list(to_records(documents))
    json.dump(records, output, indent=indent, ensure_ascii=False)
    output.write("\n")
    return len(records)


def to_dataframe(documents: Iterable[Document]) -> Any:
    """Collect documents into a pandas DataFrame.

    Category columns hold Python lists; ``date`` is a datetime column with
    ``NaT`` for documents without a parsable date.

    Raises:
        ImportError: If pandas is not installed
    """
    import pandas as pd

    rows: List[Dict[str, Any]] = []
    for document in documents:
        row = document.to_dict()
        row["date"] = document.date
        rows.append(row)

    frame = pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)
    frame["date"] = pd.to_datetime(frame["date"])
    logger.debug(
        "Built DataFrame",
        extra={"row_count": len(frame), "column_count": len(frame.columns)},
    )
    return frame
