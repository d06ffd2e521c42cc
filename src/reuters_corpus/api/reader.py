"""Module-level entry points for reading the corpus.

Progressive API disclosure:
- Level 1: ``read_corpus()``, ``read_segment()``, ``read_fragments()``
- Level 2: :class:`~reuters_corpus.corpus.CorpusReader` with a
  :class:`~reuters_corpus.shared.ReaderConfig`
"""

from pathlib import Path
from typing import Any, Iterator, Optional, Union

from reuters_corpus.corpus.reader import CorpusReader
from reuters_corpus.document.model import Document
from reuters_corpus.shared.config import ReaderConfig

PathLike = Union[str, Path]


def read_corpus(
    directory: PathLike,
    config: Optional[ReaderConfig] = None,
    **overrides: Any,
) -> Iterator[Document]:
    """Lazily read every document of the corpus stored in ``directory``.

    Args:
        directory: Directory holding the segment files
        config: Base configuration; ``corpus.directory`` is replaced
        **overrides: Extra ``component__field`` overrides

    Returns:
        Lazy iterator of documents in segment and stream order

    Examples:
        >>> for document in read_corpus("data/reuters21578"):  # doctest: +SKIP
        ...     print(document.id, document.topics)

        Skip unreadable segments instead of stopping:
        >>> docs = read_corpus("data", corpus__on_segment_error="skip")  # doctest: +SKIP
    """
    base = config or ReaderConfig()
    reader = CorpusReader(base.override(corpus__directory=str(directory), **overrides))
    return reader.read()


def read_segment(
    path: PathLike, config: Optional[ReaderConfig] = None
) -> Iterator[Document]:
    """Lazily read the documents of a single segment file."""
    return CorpusReader(config).read_segment(Path(path))


def read_fragments(
    path: PathLike, config: Optional[ReaderConfig] = None
) -> Iterator[str]:
    """Lazily read the raw fragment strings of a single segment file."""
    return CorpusReader(config).read_fragments(Path(path))
