"""Consumers that read a value directly from the events."""

from __future__ import annotations

from stackmonster.events import Attribute as AttributeEvent
from stackmonster.events import Characters, Event
from stackmonster.exceptions import ParseError

from .base import Consumer, Continuation, as_factory

__all__ = (
    "Text",
    "Attribute",
    "Attributes",
    "Anything",
)


class Text(Consumer):
    """Collect all text content.

    This never completes by itself; the enclosing element decides where the text ends.
    """

    def __init__(self):
        super().__init__()
        self._parts = []

    def handle(self, event: Event) -> ParseError | None:
        if isinstance(event, Characters):
            self._parts.append(event.text)
        return None

    def is_complete(self) -> bool:
        return False

    @property
    def value(self) -> str:
        return "".join(self._parts)


class Attribute(Consumer):
    """Read a single attribute of the element.

    The attributes are only delivered directly after the element is opened,
    hence this should be the first consumer inside an ``element()``.
    When another kind of event arrives, the attribute is considered missing.
    """

    def __init__(self, name: str):
        super().__init__()
        self.name = name
        self._looking = True
        self._value = None

    def handle(self, event: Event) -> ParseError | None:
        if not self._looking:
            return None

        if isinstance(event, AttributeEvent):
            if event.key == self.name:
                self._value = event.value
                self._looking = False
        else:
            # No more attributes
            self._looking = False
        return None

    def is_complete(self) -> bool:
        return not self._looking

    @property
    def value(self) -> str | None:
        return self._value

    def __repr__(self):
        return f"<{self.__class__.__name__}: {self.name!r} {self.status.value}>"


class Attributes(Consumer):
    """Read all attributes of the element as dictionary."""

    def __init__(self):
        super().__init__()
        self._looking = True
        self._values = {}

    def handle(self, event: Event) -> ParseError | None:
        if self._looking:
            if isinstance(event, AttributeEvent):
                self._values[event.key] = event.value
            else:
                self._looking = False
        return None

    def is_complete(self) -> bool:
        return not self._looking

    @property
    def value(self) -> dict[str, str]:
        return self._values


class Anything(Consumer):
    """Skip a single event, and pass the remaining events to the continuation.

    For example, skipping ``<img src="..."/>`` takes three steps:
    the start of the element, its attribute and the end of the element.
    """

    def __init__(self, continuation: Continuation | None = None):
        super().__init__()
        self.continuation = as_factory(continuation)
        self._consumed = False

    def handle(self, event: Event) -> ParseError | None:
        if self._consumed:
            return super().handle(event)

        self._consumed = True
        if self.continuation is not None:
            self.child = self.continuation.create()
        return None

    def is_complete(self) -> bool:
        return self._consumed and (self.continuation is None or self.child.is_complete())
