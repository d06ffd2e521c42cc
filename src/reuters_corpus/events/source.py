"""Markup event source backed by lxml.

Turns one fragment string into an ordered, finite sequence of
:class:`StartElement`, :class:`EndElement` and :class:`Text` events. Each
start event carries an :class:`ElementContext` with the element's attributes
and a reference to the enclosing element's context.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Protocol, Union

from lxml import etree

from reuters_corpus.shared.logging import get_logger

_CHARACTER_REFERENCE = re.compile(r"&#(?:[xX]([0-9a-fA-F]+)|([0-9]+));")

# C0 controls are parked in the private use area while lxml parses the fragment
_PLACEHOLDER_BASE = 0xE000
_CONTROL_LIMIT = 0x20
_RESTORE_TABLE = {
    _PLACEHOLDER_BASE + code_point: code_point
    for code_point in range(_CONTROL_LIMIT)
    if code_point not in (0x9, 0xA, 0xD)
}


def is_xml_char(code_point: int) -> bool:
    """Check whether XML 1.0 allows ``code_point`` in character data."""
    return (
        code_point in (0x9, 0xA, 0xD)
        or 0x20 <= code_point <= 0xD7FF
        or 0xE000 <= code_point <= 0xFFFD
        or 0x10000 <= code_point <= 0x10FFFF
    )


def mask_control_references(fragment: str) -> str:
    """Rewrite the character references XML 1.0 forbids.

    The corpus opens every TEXT with ``&#2;`` and ends every BODY with
    ``&#3;``. libxml2 in recover mode stops expanding ``&lt;`` and ``&amp;``
    once it has rejected such a reference, so they are removed before
    parsing. C0 controls become placeholders that
    :func:`restore_control_characters` turns back into the control
    character; other forbidden references are dropped.
    """

    def replace(match: "re.Match[str]") -> str:
        hex_digits, decimal_digits = match.groups()
        code_point = int(hex_digits, 16) if hex_digits else int(decimal_digits)
        if is_xml_char(code_point):
            return match.group(0)
        if code_point < _CONTROL_LIMIT:
            return chr(_PLACEHOLDER_BASE + code_point)
        return ""

    return _CHARACTER_REFERENCE.sub(replace, fragment)


def restore_control_characters(text: str) -> str:
    """Turn placeholders left by :func:`mask_control_references` back into controls."""
    return text.translate(_RESTORE_TABLE)


@dataclass(frozen=True, eq=False)
class ElementContext:
    """One open element: name, attributes and its enclosing element.

    ``parent`` is a lookup-only reference; a context never modifies its
    parent and a parent does not know its children.
    """

    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    parent: Optional["ElementContext"] = None

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    @property
    def parent_name(self) -> Optional[str]:
        """Name of the enclosing element, or None at the root."""
        return self.parent.name if self.parent is not None else None

    def ancestor(self, levels: int = 1) -> Optional["ElementContext"]:
        """Walk ``levels`` steps up the parent chain."""
        context: Optional[ElementContext] = self
        for _ in range(levels):
            if context is None:
                return None
            context = context.parent
        return context

    def __repr__(self) -> str:
        return f"ElementContext(name={self.name!r}, parent={self.parent_name!r})"


@dataclass(frozen=True)
class StartElement:
    """An element was opened."""

    element: ElementContext

    @property
    def name(self) -> str:
        return self.element.name

    @property
    def attributes(self) -> Dict[str, str]:
        return self.element.attributes

    @property
    def parent(self) -> Optional[ElementContext]:
        return self.element.parent


@dataclass(frozen=True)
class EndElement:
    """The most recently opened element was closed."""

    name: str


@dataclass(frozen=True)
class Text:
    """Character content inside the currently open element."""

    content: Optional[str]


MarkupEvent = Union[StartElement, EndElement, Text]


class EventSource(Protocol):
    """Anything that turns one fragment string into markup events."""

    def events(self, fragment: str) -> Iterator[MarkupEvent]:
        ...


class LxmlEventSource:
    """Event source that parses fragments with lxml in recover mode.

    The corpus is SGML-flavoured: it carries character references that are
    invalid in XML (``&#2;``, ``&#3;``) and occasional stray markup. Forbidden
    references are masked before parsing and restored in the emitted text;
    lxml's recovering parser handles the remaining stray markup.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "event_source")

    def _new_parser(self) -> Any:
        return etree.XMLParser(
            recover=True,
            resolve_entities=False,
            no_network=True,
            huge_tree=True,
        )

    def events(self, fragment: str) -> Iterator[MarkupEvent]:
        """Yield the markup events of one fragment in document order.

        Args:
            fragment: One complete top-level fragment

        Yields:
            StartElement, Text and EndElement events; nothing if the fragment
            cannot be parsed at all
        """
        try:
            root = etree.fromstring(mask_control_references(fragment), self._new_parser())
        except etree.XMLSyntaxError as e:
            self.logger.warning(
                "Fragment could not be parsed",
                extra={"error": str(e), "fragment_length": len(fragment)},
            )
            return
        if root is None:
            self.logger.warning(
                "Fragment produced no elements",
                extra={"fragment_length": len(fragment)},
            )
            return

        yield from self._walk(root, None)

    def _walk(
        self, node: Any, parent: Optional[ElementContext]
    ) -> Iterator[MarkupEvent]:
        # Comments, processing instructions and unresolved entities have a
        # non-string tag; only their tail text belongs to the event stream
        if not isinstance(node.tag, str):
            if node.tail:
                yield Text(restore_control_characters(node.tail))
            return

        context = ElementContext(
            name=node.tag,
            attributes={
                key: restore_control_characters(value)
                for key, value in node.attrib.items()
            },
            parent=parent,
        )
        yield StartElement(context)
        if node.text:
            yield Text(restore_control_characters(node.text))
        for child in node:
            yield from self._walk(child, context)
        yield EndElement(context.name)
        if node.tail and parent is not None:
            yield Text(restore_control_characters(node.tail))


def iter_events(fragment: str) -> Iterator[MarkupEvent]:
    """Yield markup events for ``fragment`` with a default event source."""
    return LxmlEventSource().events(fragment)
