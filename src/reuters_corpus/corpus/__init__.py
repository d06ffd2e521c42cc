"""Corpus layer: ordered, lazy reading of all segment files."""

from .reader import CorpusReader, EventSourceFactory, StreamOpener

__all__ = [
    "CorpusReader",
    "EventSourceFactory",
    "StreamOpener",
]
