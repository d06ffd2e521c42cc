"""Fragment layer: rebuilds whole top-level fragments from chunked text."""

from .extractor import (
    FragmentExtractor,
    compile_fragment_pattern,
    compile_open_pattern,
    extract_fragments,
)

__all__ = [
    "FragmentExtractor",
    "compile_fragment_pattern",
    "compile_open_pattern",
    "extract_fragments",
]
