"""Best-effort parsing of the free-text DATE field.

Corpus dates look like ``26-FEB-1987 15:01:01.79``. A handful are damaged
(``31-MAR-1987 605:12:19.12``) or carry trailing control characters. Parsing
never raises: anything that cannot be read yields None.
"""

import re
from datetime import datetime
from typing import Optional

from dateutil import parser as dateutil_parser

DATE_FORMATS = (
    "%d-%b-%Y %H:%M:%S.%f",
    "%d-%b-%Y %H:%M:%S",
    "%d-%b-%Y %H:%M",
    "%d-%b-%Y",
)

_NOISE = re.compile(r"[\x00-\x1f\x7f]+")

# Two defaults that differ in year, month and day; a fallback parse that
# depends on which one is used was missing one of those parts
_FALLBACK_DEFAULTS = (datetime(1900, 1, 1), datetime(2000, 12, 28))


def clean_date_text(text: str) -> str:
    """Remove control characters and surrounding whitespace."""
    return _NOISE.sub(" ", text).strip()


def parse_date(text: Optional[str]) -> Optional[datetime]:
    """Parse a corpus timestamp.

    The corpus format is tried first with ``strptime``; anything else goes
    through ``dateutil``. Text lacking a year, month or day yields None
    instead of borrowing the missing parts from today.

    Args:
        text: Raw DATE element text

    Returns:
        Naive datetime, or None when the text cannot be parsed
    """
    if not text:
        return None
    value = clean_date_text(text)
    if not value:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    return _parse_complete_date(value)


def _parse_complete_date(value: str) -> Optional[datetime]:
    """Parse with dateutil, rejecting text without a year, month and day."""
    results = []
    for default in _FALLBACK_DEFAULTS:
        try:
            results.append(dateutil_parser.parse(value, default=default))
        except (ValueError, OverflowError):
            return None
    first, second = results
    if first.date() != second.date():
        return None
    return first
