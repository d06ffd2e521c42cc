"""Character layer: chunked reading and incremental decoding of segment streams."""

from .stream import (
    ChunkingProgress,
    InputStream,
    iter_decoded_blocks,
    iter_text_chunks,
)

__all__ = [
    "ChunkingProgress",
    "InputStream",
    "iter_decoded_blocks",
    "iter_text_chunks",
]
