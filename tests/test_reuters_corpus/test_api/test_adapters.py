"""Tests for document output adapters."""

import io
import json
from datetime import datetime

import pandas as pd

from reuters_corpus.api.adapters import (
    DATAFRAME_COLUMNS,
    filter_documents,
    to_dataframe,
    to_records,
    write_json,
    write_jsonl,
)
from reuters_corpus.document.model import INVALID_DOCUMENT_ID, Document, DocumentSplit

DOCUMENTS = [
    Document(
        id=1,
        title="COCOA",
        body="Showers continued.",
        date=datetime(1987, 2, 26, 15, 1, 1),
        topics=("cocoa",),
        places=("el-salvador", "usa"),
        split=DocumentSplit.TRAIN,
    ),
    Document(id=2, title="CAFÉ", split=DocumentSplit.TEST),
    Document(id=INVALID_DOCUMENT_ID, title="No id", split=DocumentSplit.TRAIN),
]


class TestFilterDocuments:
    """Test lazy document filtering."""

    def test_no_filters(self) -> None:
        assert list(filter_documents(DOCUMENTS)) == DOCUMENTS

    def test_split(self) -> None:
        result = list(filter_documents(DOCUMENTS, split=DocumentSplit.TEST))

        assert [document.id for document in result] == [2]

    def test_valid_only(self) -> None:
        result = list(filter_documents(DOCUMENTS, valid_only=True))

        assert [document.id for document in result] == [1, 2]

    def test_limit_stops_consuming(self) -> None:
        """Test that the source is not consumed beyond the limit."""
        consumed = []

        def source():
            for document in DOCUMENTS:
                consumed.append(document.id)
                yield document

        result = list(filter_documents(source(), limit=1))

        assert [document.id for document in result] == [1]
        assert consumed == [1]

    def test_zero_limit(self) -> None:
        assert list(filter_documents(DOCUMENTS, limit=0)) == []


class TestWriters:
    """Test JSON and JSON Lines output."""

    def test_write_jsonl(self) -> None:
        output = io.StringIO()

        count = write_jsonl(DOCUMENTS, output)

        lines = output.getvalue().splitlines()
        assert count == 3
        assert len(lines) == 3
        first = json.loads(lines[0])
        assert first["id"] == 1
        assert first["date"] == "1987-02-26T15:01:01"
        assert first["places"] == ["el-salvador", "usa"]
        assert "CAFÉ" in lines[1]

    def test_write_json(self) -> None:
        output = io.StringIO()

        count = write_json(DOCUMENTS[:2], output)

        records = json.loads(output.getvalue())
        assert count == 2
        assert [record["split"] for record in records] == ["TRAIN", "TEST"]

    def test_to_records(self) -> None:
        records = list(to_records(DOCUMENTS))

        assert records[2]["id"] == INVALID_DOCUMENT_ID
        assert records[1]["body"] is None


class TestToDataFrame:
    def test_columns_and_dates(self) -> None:
        frame = to_dataframe(DOCUMENTS)

        assert list(frame.columns) == DATAFRAME_COLUMNS
        assert len(frame) == 3
        assert frame.loc[0, "date"] == pd.Timestamp("1987-02-26 15:01:01")
        assert pd.isna(frame.loc[1, "date"])
        assert frame.loc[0, "topics"] == ["cocoa"]

    def test_empty_sequence(self) -> None:
        frame = to_dataframe([])

        assert frame.empty
        assert list(frame.columns) == DATAFRAME_COLUMNS
