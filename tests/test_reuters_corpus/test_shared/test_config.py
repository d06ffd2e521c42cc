"""Tests for reader configuration."""

import json

import pytest

from reuters_corpus.shared.config import (
    CorpusConfig,
    DocumentConfig,
    FragmentConfig,
    ReaderConfig,
    StreamingConfig,
)
from reuters_corpus.shared.errors import ConfigError, ConfigValidationError, CorpusError


class TestComponentConfigs:
    """Test validation of the individual configuration components."""

    def test_defaults(self) -> None:
        config = ReaderConfig()

        assert config.streaming.chunk_size == 65536
        assert config.streaming.encoding == "utf-8"
        assert config.fragments.root_tag == "REUTERS"
        assert config.document.id_attribute == "NEWID"
        assert config.document.split_attribute == "LEWISSPLIT"
        assert config.corpus.segment_count == 22
        assert config.corpus.on_segment_error == "raise"

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_invalid_chunk_size(self, chunk_size: int) -> None:
        with pytest.raises(ValueError, match="chunk_size"):
            StreamingConfig(chunk_size=chunk_size)

    def test_invalid_error_handler(self) -> None:
        with pytest.raises(ValueError, match="errors"):
            StreamingConfig(errors="explode")

    @pytest.mark.parametrize("root_tag", ["", "<REUTERS>", "A B"])
    def test_invalid_root_tag(self, root_tag: str) -> None:
        with pytest.raises(ValueError, match="root_tag"):
            FragmentConfig(root_tag=root_tag)

    def test_empty_document_attribute(self) -> None:
        with pytest.raises(ValueError, match="id_attribute"):
            DocumentConfig(id_attribute="")

    def test_invalid_segment_policy(self) -> None:
        with pytest.raises(ValueError, match="on_segment_error"):
            CorpusConfig(on_segment_error="ignore")

    def test_segment_pattern_requires_index(self) -> None:
        with pytest.raises(ValueError, match="segment_pattern"):
            CorpusConfig(segment_pattern="reut2.sgm")


class TestReaderConfig:
    """Test the aggregate ReaderConfig."""

    def test_override_nested_field(self) -> None:
        """Test that override returns a new instance."""
        config = ReaderConfig()

        updated = config.override(streaming__chunk_size=1024, correlation_id="abc")

        assert updated.streaming.chunk_size == 1024
        assert updated.correlation_id == "abc"
        assert config.streaming.chunk_size == 65536
        assert config.correlation_id is None

    def test_override_unknown_component(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            ReaderConfig().override(parser__chunk_size=1)

        assert exc_info.value.field_name == "parser__chunk_size"
        assert exc_info.value.suggestions

    def test_override_unknown_field(self) -> None:
        with pytest.raises(ConfigValidationError):
            ReaderConfig().override(streaming__block_size=1)

    def test_override_invalid_value(self) -> None:
        with pytest.raises(ConfigValidationError, match="on_segment_error"):
            ReaderConfig().override(corpus__on_segment_error="retry")

    def test_for_directory(self) -> None:
        config = ReaderConfig.for_directory("/data/reuters", corpus__segment_count=3)

        assert config.corpus.directory == "/data/reuters"
        assert config.corpus.segment_count == 3

    def test_json_round_trip(self) -> None:
        config = ReaderConfig().override(
            corpus__directory="/tmp/corpus", streaming__errors="strict"
        )

        restored = ReaderConfig.from_json(config.to_json())

        assert restored == config

    def test_to_dict_shape(self) -> None:
        data = ReaderConfig().to_dict()

        assert set(data) == {"streaming", "fragments", "document", "corpus", "correlation_id"}
        assert data["corpus"]["segment_pattern"] == "reut2-{index:03d}.sgm"

    def test_from_dict_partial(self) -> None:
        """Test that missing components fall back to defaults."""
        config = ReaderConfig.from_dict({"corpus": {"segment_count": 2}})

        assert config.corpus.segment_count == 2
        assert config.streaming == StreamingConfig()

    def test_from_dict_unknown_key(self) -> None:
        with pytest.raises(ConfigValidationError, match="Unknown configuration key"):
            ReaderConfig.from_dict({"parsers": {}})

    def test_from_dict_unknown_field(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            ReaderConfig.from_dict({"streaming": {"chunk": 1}})

        assert exc_info.value.field_name == "streaming"

    def test_from_dict_invalid_value(self) -> None:
        with pytest.raises(ConfigValidationError):
            ReaderConfig.from_dict({"streaming": {"chunk_size": 0}})

    def test_from_json_invalid_json(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            ReaderConfig.from_json("{not json")

    def test_mutated_component_rejected_on_construction(self) -> None:
        """Test that components are revalidated by the aggregate."""
        streaming = StreamingConfig()
        streaming.chunk_size = -5

        with pytest.raises(ConfigValidationError):
            ReaderConfig(streaming=streaming)

    def test_error_hierarchy(self) -> None:
        assert issubclass(ConfigValidationError, ConfigError)
        assert issubclass(ConfigError, CorpusError)
