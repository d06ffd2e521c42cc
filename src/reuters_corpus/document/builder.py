"""Context-sensitive assembly of Document records from markup events.

The meaning of a text event depends on where it occurs: ``<D>grain</D>`` is a
topic inside ``<TOPICS>`` and a place inside ``<PLACES>``. The builder keeps a
stack of open element contexts and routes each text event by the name of the
top element and, for ``D`` items, the name of its parent.
"""

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from reuters_corpus.events.source import (
    ElementContext,
    EndElement,
    MarkupEvent,
    StartElement,
    Text,
)
from reuters_corpus.shared.config import DocumentConfig
from reuters_corpus.shared.errors import BuilderStateError
from reuters_corpus.shared.logging import get_logger

from .dates import parse_date
from .model import CATEGORY_FIELDS, INVALID_DOCUMENT_ID, Document, DocumentSplit

TITLE_ELEMENT = "TITLE"
BODY_ELEMENT = "BODY"
TEXT_ELEMENT = "TEXT"
DATE_ELEMENT = "DATE"
ITEM_ELEMENT = "D"

# Whitespace and the C0 controls the corpus wraps around TEXT and BODY content
LAYOUT_CHARACTERS = "".join(chr(code_point) for code_point in range(0x21)) + "\x7f"

# Parent section name -> Document field receiving its D items
CATEGORY_SECTIONS: Dict[str, str] = {
    "TOPICS": "topics",
    "PLACES": "places",
    "PEOPLE": "people",
    "ORGS": "orgs",
    "EXCHANGES": "exchanges",
    "COMPANIES": "companies",
}


def is_layout_text(content: str) -> bool:
    """Check whether text holds nothing but whitespace and control characters."""
    return not content.strip(LAYOUT_CHARACTERS).strip()


def parse_document_id(value: Optional[str]) -> int:
    """Parse an identifier attribute, returning the invalid sentinel on failure."""
    if value is None:
        return INVALID_DOCUMENT_ID
    try:
        return int(value.strip())
    except ValueError:
        return INVALID_DOCUMENT_ID


class DocumentBuilder:
    """Single-use consumer of one fragment's event sequence.

    Feed every event of a fragment to :meth:`consume` in order, then call
    :meth:`build` exactly once. The builder cannot be reused for another
    fragment.

    Example:
        >>> from reuters_corpus.events import iter_events
        >>> builder = DocumentBuilder()
        >>> builder.consume_all(iter_events('<REUTERS NEWID="7"><TITLE>Hi</TITLE></REUTERS>'))
        >>> builder.build().title
        'Hi'
    """

    def __init__(
        self,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize document builder.

        Args:
            config: Attribute names read from the root element
            correlation_id: Optional correlation ID for logging
        """
        self.config = config or DocumentConfig()
        self.logger = get_logger(__name__, correlation_id, "document_builder")

        self._elements: List[ElementContext] = []
        self._built = False

        self._id = INVALID_DOCUMENT_ID
        self._title = ""
        self._body: Optional[str] = None
        self._date: Optional[datetime] = None
        self._split: Optional[DocumentSplit] = None
        self._categories: Dict[str, List[str]] = {name: [] for name in CATEGORY_FIELDS}

        self._text_handlers: Dict[str, Callable[[ElementContext, str], None]] = {
            TITLE_ELEMENT: self._handle_title,
            BODY_ELEMENT: self._handle_body,
            TEXT_ELEMENT: self._handle_text_element,
            DATE_ELEMENT: self._handle_date,
            ITEM_ELEMENT: self._handle_item,
        }

    @property
    def current_element(self) -> Optional[ElementContext]:
        """Innermost open element, or None outside the root."""
        return self._elements[-1] if self._elements else None

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._elements)

    @property
    def is_built(self) -> bool:
        return self._built

    def consume(self, event: MarkupEvent) -> None:
        """Apply one markup event to the builder state.

        Raises:
            BuilderStateError: If the document has already been built
        """
        if self._built:
            raise BuilderStateError("DocumentBuilder cannot consume events after build()")

        if isinstance(event, StartElement):
            self._handle_start_element(event)
        elif isinstance(event, EndElement):
            self._handle_end_element(event)
        elif isinstance(event, Text):
            self._handle_text(event)

    def consume_all(self, events: Iterable[MarkupEvent]) -> None:
        """Consume every event of an event sequence in order."""
        for event in events:
            self.consume(event)

    def build(self) -> Document:
        """Return the finished document.

        No validation is applied: a missing identifier surfaces as
        ``INVALID_DOCUMENT_ID``.

        Raises:
            BuilderStateError: If called more than once
        """
        if self._built:
            raise BuilderStateError("DocumentBuilder.build() may only be called once")
        self._built = True
        self._elements.clear()

        categories = {name: tuple(values) for name, values in self._categories.items()}
        return Document(
            id=self._id,
            title=self._title,
            body=self._body,
            date=self._date,
            split=self._split,
            **categories,
        )

    def _handle_start_element(self, event: StartElement) -> None:
        self._elements.append(event.element)

        if event.name == self.config.root_element:
            attributes = event.attributes
            self._id = parse_document_id(attributes.get(self.config.id_attribute))
            if attributes.get(self.config.split_attribute) == self.config.test_marker:
                self._split = DocumentSplit.TEST
            else:
                self._split = DocumentSplit.TRAIN

    def _handle_end_element(self, event: EndElement) -> None:
        if not self._elements:
            self.logger.debug(
                "Ignoring end element with no open element",
                extra={"element": event.name},
            )
            return
        self._elements.pop()

    def _handle_text(self, event: Text) -> None:
        element = self.current_element
        content = event.content
        if element is None or not content or is_layout_text(content):
            return

        handler = self._text_handlers.get(element.name)
        if handler is not None:
            handler(element, content)

    def _handle_title(self, element: ElementContext, content: str) -> None:
        self._title = content

    def _handle_body(self, element: ElementContext, content: str) -> None:
        self._body = content

    def _handle_text_element(self, element: ElementContext, content: str) -> None:
        # BODY wins: TEXT only fills a body nobody has written yet
        if not self._body:
            self._body = content

    def _handle_date(self, element: ElementContext, content: str) -> None:
        parsed = parse_date(content)
        if parsed is not None:
            self._date = parsed

    def _handle_item(self, element: ElementContext, content: str) -> None:
        field_name = CATEGORY_SECTIONS.get(element.parent_name or "")
        if field_name is not None:
            self._categories[field_name].append(content)


def build_document(
    events: Iterable[MarkupEvent], config: Optional[DocumentConfig] = None
) -> Document:
    """Build a document from a complete event sequence with a fresh builder."""
    builder = DocumentBuilder(config)
    builder.consume_all(events)
    return builder.build()
