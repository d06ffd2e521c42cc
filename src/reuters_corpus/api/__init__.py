"""Public API: module-level reading functions and export adapters."""

from .adapters import (
    filter_documents,
    to_dataframe,
    to_records,
    write_json,
    write_jsonl,
)
from .reader import read_corpus, read_fragments, read_segment

__all__ = [
    "read_corpus",
    "read_fragments",
    "read_segment",
    "filter_documents",
    "to_dataframe",
    "to_records",
    "write_json",
    "write_jsonl",
]
