"""Chunk-boundary-safe extraction of top-level document fragments.

A segment file is a run of concatenated ``<REUTERS ...> ... </REUTERS>``
fragments separated by noise (a DOCTYPE line, newlines). Chunks arrive in
stream order with arbitrary sizes, so a fragment may start in one chunk and
end several chunks later. The extractor keeps the unmatched tail of the
stream between calls and emits each fragment as soon as its close marker has
been seen.
"""

import re
from typing import Iterable, Iterator, List, Optional, Pattern

from reuters_corpus.shared.config import FragmentConfig
from reuters_corpus.shared.logging import get_logger


def compile_fragment_pattern(root_tag: str) -> Pattern[str]:
    """Compile the pattern matching one whole fragment.

    The match is lazy, so the nearest close marker ends the fragment.
    Fragments never nest in this corpus.
    """
    tag = re.escape(root_tag)
    return re.compile(rf"<{tag}(?=[\s>/])[\s\S]*?</{tag}\s*>")


def compile_open_pattern(root_tag: str) -> Pattern[str]:
    """Compile the pattern matching an open marker of a fragment."""
    return re.compile(rf"<{re.escape(root_tag)}(?=[\s>/])")


class FragmentExtractor:
    """Rebuilds complete fragments from an arbitrary chunking of a stream.

    One instance serves one stream; the buffer is instance state so that
    several extractors can run side by side.

    Example:
        >>> extractor = FragmentExtractor()
        >>> extractor.feed('<REUTERS NEWID="1"><TITLE>A')
        []
        >>> extractor.feed('</TITLE></REUTERS>\\n')
        ['<REUTERS NEWID="1"><TITLE>A</TITLE></REUTERS>']
    """

    def __init__(
        self,
        config: Optional[FragmentConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize fragment extractor.

        Args:
            config: Fragment configuration naming the root tag
            correlation_id: Optional correlation ID for logging
        """
        self.config = config or FragmentConfig()
        self.logger = get_logger(__name__, correlation_id, "fragment_extractor")

        self._fragment_pattern = compile_fragment_pattern(self.config.root_tag)
        self._open_pattern = compile_open_pattern(self.config.root_tag)
        # Longest suffix that may be the start of an open marker still missing
        # its lookahead character
        self._partial_marker_length = len(self.config.root_tag) + 1

        self._buffer = ""
        self._fragments_emitted = 0

    @property
    def pending(self) -> str:
        """Text retained for continuation with the next chunk."""
        return self._buffer

    @property
    def fragments_emitted(self) -> int:
        """Number of fragments emitted so far."""
        return self._fragments_emitted

    def feed(self, chunk: str) -> List[str]:
        """Append a chunk and return every fragment completed by it.

        Args:
            chunk: Next piece of decoded text, in stream order

        Returns:
            Complete fragments in stream order, possibly empty
        """
        if not chunk:
            return []

        content = self._buffer + chunk
        fragments: List[str] = []
        last_end = 0
        for match in self._fragment_pattern.finditer(content):
            fragments.append(match.group(0))
            last_end = match.end()

        self._buffer = self._retain(content, last_end)
        self._fragments_emitted += len(fragments)
        return fragments

    def _retain(self, content: str, start: int) -> str:
        """Keep the part of ``content[start:]`` that can still form a fragment."""
        open_match = self._open_pattern.search(content, start)
        if open_match is not None:
            return content[open_match.start():]
        # No open marker: only a marker cut by the chunk boundary can matter
        tail_start = max(start, len(content) - self._partial_marker_length)
        return content[tail_start:]

    def finish(self) -> int:
        """Signal end of stream and drop any incomplete trailing fragment.

        Returns:
            Length of the unterminated fragment dropped, 0 if the tail held
            no open marker
        """
        dropped = 0
        if self._open_pattern.search(self._buffer):
            dropped = len(self._buffer)
            self.logger.warning(
                "Dropping unterminated fragment at end of stream",
                extra={"dropped_characters": dropped},
            )
        self._buffer = ""
        return dropped

    def extract(self, chunks: Iterable[str]) -> Iterator[str]:
        """Lazily yield complete fragments from a sequence of chunks.

        Args:
            chunks: Decoded text chunks in stream order

        Yields:
            Complete fragment strings, one per top-level document
        """
        for chunk in chunks:
            yield from self.feed(chunk)
        self.finish()


def extract_fragments(
    chunks: Iterable[str], config: Optional[FragmentConfig] = None
) -> Iterator[str]:
    """Yield complete fragments from ``chunks`` using a fresh extractor."""
    return FragmentExtractor(config).extract(chunks)
