"""Lazy, segment-by-segment reading of the Reuters-21578 corpus.

The reader walks the fixed, ordered list of segment files. For each segment
it opens the file, decodes it chunk by chunk, extracts complete fragments and
turns every fragment into a :class:`Document` with a fresh event source and a
fresh builder. Nothing is read ahead: the next chunk is only read when the
consumer asks for a document that is not yet available.
"""

import logging
import time
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, List, Optional

from reuters_corpus.character.stream import ChunkingProgress, iter_text_chunks
from reuters_corpus.document.builder import DocumentBuilder
from reuters_corpus.document.model import Document
from reuters_corpus.events.source import EventSource, LxmlEventSource
from reuters_corpus.fragments.extractor import FragmentExtractor
from reuters_corpus.shared.config import ReaderConfig
from reuters_corpus.shared.errors import SegmentReadError
from reuters_corpus.shared.logging import get_logger
from reuters_corpus.shared.result import DiagnosticSeverity, ReadStatistics

MS_PER_SECOND = 1000

StreamOpener = Callable[[Path], BinaryIO]
EventSourceFactory = Callable[[], EventSource]


def _open_binary(path: Path) -> BinaryIO:
    return path.open("rb")


class CorpusReader:
    """Produces the corpus as a lazy sequence of documents.

    Every call to :meth:`read` starts a new, independent pass over the
    segments. Each segment file is held open only while its documents are
    being produced and is closed exactly once, whether the segment is read to
    the end, the consumer stops early, or reading fails.

    Example:
        >>> reader = CorpusReader(ReaderConfig.for_directory("data/reuters21578"))
        >>> for document in reader.read():  # doctest: +SKIP
        ...     print(document.id, document.title)
    """

    def __init__(
        self,
        config: Optional[ReaderConfig] = None,
        event_source_factory: Optional[EventSourceFactory] = None,
        opener: Optional[StreamOpener] = None,
    ) -> None:
        """Initialize corpus reader.

        Args:
            config: Reader configuration; defaults read from the current directory
            event_source_factory: Creates the event source used for one fragment
            opener: Opens a segment path as a binary stream
        """
        self.config = config or ReaderConfig()
        self.correlation_id = self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "corpus_reader")
        self._event_source_factory = event_source_factory or (
            lambda: LxmlEventSource(self.correlation_id)
        )
        self._opener = opener or _open_binary
        self.statistics = ReadStatistics()

    def segment_paths(self) -> List[Path]:
        """Return the ordered list of segment files."""
        corpus = self.config.corpus
        directory = Path(corpus.directory)
        return [
            directory / corpus.segment_pattern.format(index=index)
            for index in range(corpus.segment_count)
        ]

    def read(self) -> Iterator[Document]:
        """Yield every document of every segment, in segment and stream order.

        Raises:
            SegmentReadError: If a segment cannot be read and the configured
                policy is ``"raise"``
        """
        self.statistics = ReadStatistics()
        start_time = time.time()
        policy = self.config.corpus.on_segment_error

        self.logger.info(
            "Starting corpus read",
            extra={
                "directory": self.config.corpus.directory,
                "segment_count": self.config.corpus.segment_count,
                "on_segment_error": policy,
            },
        )

        try:
            for path in self.segment_paths():
                try:
                    yield from self.read_segment(path)
                except SegmentReadError as e:
                    self.statistics.segments_failed += 1
                    if policy == "raise":
                        raise
                    self.logger.error(
                        "Skipping unreadable segment",
                        extra={"segment": str(path)},
                    )
                    self.statistics.add_diagnostic(
                        DiagnosticSeverity.ERROR,
                        str(e),
                        "corpus_reader",
                        segment=str(path),
                        details={"exception_type": type(e.cause or e).__name__},
                        correlation_id=self.correlation_id,
                    )
        finally:
            self.statistics.processing_time_ms = (
                (time.time() - start_time) * MS_PER_SECOND
            )

        self.logger.info(
            "Corpus read completed",
            extra={
                "documents_built": self.statistics.documents_built,
                "segments_read": self.statistics.segments_read,
                "segments_failed": self.statistics.segments_failed,
            },
        )

    def read_segment(self, path: Path) -> Iterator[Document]:
        """Yield the documents of one segment in stream order.

        Raises:
            SegmentReadError: If the segment cannot be opened or read
        """
        path = Path(path)
        self.logger.info("Reading segment", extra={"segment": str(path)})
        documents = 0
        for fragment in self.read_fragments(path):
            document = self.build_document(fragment)
            documents += 1
            yield document

        self.statistics.segments_read += 1
        self.logger.info(
            "Segment completed",
            extra={"segment": str(path), "documents": documents},
        )

    def read_fragments(self, path: Path) -> Iterator[str]:
        """Yield the raw fragment strings of one segment.

        Raises:
            SegmentReadError: If the segment cannot be opened or read
        """
        path = Path(path)
        try:
            stream = self._opener(path)
        except OSError as e:
            raise SegmentReadError(path, e) from e

        extractor = FragmentExtractor(self.config.fragments, self.correlation_id)
        progress = ChunkingProgress()
        with stream:
            try:
                for chunk in iter_text_chunks(stream, self.config.streaming, progress):
                    for fragment in extractor.feed(chunk):
                        self.statistics.fragments_extracted += 1
                        yield fragment
            except (OSError, UnicodeDecodeError) as e:
                raise SegmentReadError(path, e) from e
            finally:
                self.statistics.bytes_read += progress.bytes_read

        self.statistics.dropped_characters += extractor.finish()

    def build_document(self, fragment: str) -> Document:
        """Turn one fragment into a document with a fresh source and builder."""
        event_source = self._event_source_factory()
        builder = DocumentBuilder(self.config.document, self.correlation_id)
        builder.consume_all(event_source.events(fragment))
        document = builder.build()

        self.statistics.documents_built += 1
        if not document.is_valid:
            self.statistics.invalid_documents += 1
        if self.logger.is_enabled_for(logging.DEBUG):
            self.logger.debug(
                "Built document",
                extra={"document_id": document.id, "fragment_length": len(fragment)},
            )
        return document

    def __iter__(self) -> Iterator[Document]:
        return self.read()
