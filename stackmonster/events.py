"""The events that are delivered to the consumers.

Each tokenizer callback is translated into one or more of these events.
For every element, the :class:`StartElement` is directly followed by its
:class:`Attribute` events, then the events of its content,
and finally one :class:`EndElement`.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = (
    "Event",
    "StartElement",
    "Attribute",
    "Characters",
    "EndElement",
)


@dataclass(frozen=True)
class StartElement:
    """An element is opened."""

    name: str


@dataclass(frozen=True)
class Attribute:
    """An attribute of the element that was opened last."""

    key: str
    value: str


@dataclass(frozen=True)
class Characters:
    """A run of text content. CDATA sections are delivered the same way."""

    text: str


@dataclass(frozen=True)
class EndElement:
    """An element is closed."""

    name: str


Event = StartElement | Attribute | Characters | EndElement
