"""Translate the tokenizer callbacks into events for the consumers."""

from __future__ import annotations

import logging

from stackmonster.consumers import Consumer
from stackmonster.events import Attribute, Characters, EndElement, Event, StartElement

logger = logging.getLogger(__name__)

__all__ = ("StreamAdapter",)


class StreamAdapter:
    """The parser target that passes all events to the root consumer.

    The attributes of an element are delivered as separate events,
    directly after the start of the element. CDATA sections are reported as text.
    When the consumer refuses an event, its :class:`~stackmonster.exceptions.ParseError`
    is raised here. This aborts the tokenizer, and reaches the caller of ``feed()``.
    """

    def __init__(self, consumer: Consumer):
        self.consumer = consumer

    def start(self, tag: str, attrib: dict[str, str], nsmap=None):
        # The 'nsmap' is only passed by lxml.
        self.emit(StartElement(tag))
        for key, value in attrib.items():
            self.emit(Attribute(key, value))

    def end(self, tag: str):
        self.emit(EndElement(tag))

    def data(self, data: str):
        if data:
            self.emit(Characters(data))

    def cdata(self, data: str):
        self.data(data)

    def close(self):
        # The value is read from the consumer, after the tokenizer is finished.
        return None

    def emit(self, event: Event):
        """Deliver a single event to the root consumer."""
        if error := self.consumer.handle(event):
            logger.debug("Parsing stopped at %r: %s", event, error)
            raise error
