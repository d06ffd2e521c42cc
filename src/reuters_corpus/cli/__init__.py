"""Command-line interface module for the Reuters corpus reader.

This module provides the ``reuters-corpus`` tool for dumping the corpus as
JSON / JSON Lines and for printing read statistics.
"""

from .main import main

__all__ = ["main"]
