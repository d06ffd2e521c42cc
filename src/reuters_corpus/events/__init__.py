"""Event layer: markup events for one fragment and their element contexts."""

from .source import (
    ElementContext,
    EndElement,
    EventSource,
    LxmlEventSource,
    MarkupEvent,
    StartElement,
    Text,
    is_xml_char,
    iter_events,
    mask_control_references,
    restore_control_characters,
)

__all__ = [
    "ElementContext",
    "EndElement",
    "EventSource",
    "LxmlEventSource",
    "MarkupEvent",
    "StartElement",
    "Text",
    "is_xml_char",
    "iter_events",
    "mask_control_references",
    "restore_control_characters",
]
