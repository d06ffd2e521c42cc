"""Chunked reading and incremental decoding of segment streams.

Segment files are read in fixed-size byte blocks. Block boundaries fall
anywhere, including inside a multi-byte UTF-8 sequence, so each stream gets
its own stateful ``codecs`` incremental decoder instead of decoding every block
independently.
"""

import codecs
import io
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional, TextIO, Union

from reuters_corpus.shared.config import StreamingConfig

InputStream = Union[BinaryIO, TextIO]


@dataclass
class ChunkingProgress:
    """Progress information for a chunked read.

    Attributes:
        bytes_read: Raw bytes (or characters, for text streams) read so far
        chunks_read: Number of blocks read from the stream
        characters_decoded: Number of characters produced by the decoder
    """

    bytes_read: int = 0
    chunks_read: int = 0
    characters_decoded: int = 0


def _is_text_stream(stream: InputStream) -> bool:
    if isinstance(stream, io.TextIOBase):
        return True
    mode = getattr(stream, "mode", None)
    return isinstance(mode, str) and "b" not in mode


def iter_text_chunks(
    stream: InputStream,
    config: Optional[StreamingConfig] = None,
    progress: Optional[ChunkingProgress] = None,
) -> Iterator[str]:
    """Yield decoded text chunks from a binary or text stream.

    Args:
        stream: Open file-like object; binary streams are decoded, text
            streams are passed through
        config: Chunk size and codec settings
        progress: Optional progress record updated in place

    Yields:
        Non-empty text chunks in stream order
    """
    config = config or StreamingConfig()
    progress = progress if progress is not None else ChunkingProgress()

    if _is_text_stream(stream):
        while True:
            text = stream.read(config.chunk_size)
            if not text:
                return
            progress.bytes_read += len(text)
            progress.chunks_read += 1
            progress.characters_decoded += len(text)
            yield text

    decoder = codecs.getincrementaldecoder(config.encoding)(errors=config.errors)
    while True:
        block = stream.read(config.chunk_size)
        if not block:
            break
        progress.bytes_read += len(block)
        progress.chunks_read += 1
        text = decoder.decode(block)
        if text:
            progress.characters_decoded += len(text)
            yield text

    # Flush bytes of an incomplete trailing sequence
    tail = decoder.decode(b"", final=True)
    if tail:
        progress.characters_decoded += len(tail)
        yield tail


def iter_decoded_blocks(
    blocks: Iterator[bytes],
    encoding: str = "utf-8",
    errors: str = "replace",
) -> Iterator[str]:
    """Decode an iterator of byte blocks as one continuous character stream."""
    decoder = codecs.getincrementaldecoder(encoding)(errors=errors)
    for block in blocks:
        text = decoder.decode(block)
        if text:
            yield text
    tail = decoder.decode(b"", final=True)
    if tail:
        yield tail
