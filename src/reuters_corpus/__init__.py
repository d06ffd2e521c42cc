"""Reuters-21578 corpus reader.

Streams the corpus segment files and turns every ``<REUTERS>`` fragment into
a typed, immutable :class:`Document`, one at a time.

Progressive API Disclosure:
- Level 1: Simple functions - read_corpus(), read_segment(), read_fragments()
- Level 2: Configured reader - CorpusReader with ReaderConfig
- Level 3: Pipeline stages - FragmentExtractor, LxmlEventSource, DocumentBuilder
"""

__version__ = "0.1.0"
__author__ = "Reuters Corpus Reader Team"

from .api import read_corpus, read_fragments, read_segment
from .corpus import CorpusReader
from .document import Document, DocumentBuilder, DocumentSplit, INVALID_DOCUMENT_ID
from .events import LxmlEventSource
from .fragments import FragmentExtractor
from .shared.config import ReaderConfig
from .shared.errors import BuilderStateError, CorpusError, SegmentReadError

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple reading functions
    "read_corpus",
    "read_segment",
    "read_fragments",

    # Level 2: Configured reader
    "CorpusReader",
    "ReaderConfig",

    # Level 3: Pipeline stages
    "FragmentExtractor",
    "LxmlEventSource",
    "DocumentBuilder",

    # Result objects
    "Document",
    "DocumentSplit",
    "INVALID_DOCUMENT_ID",

    # Errors
    "CorpusError",
    "SegmentReadError",
    "BuilderStateError",
]
