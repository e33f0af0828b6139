from __future__ import annotations

from collections.abc import Iterable

from stackmonster.consumers import Consumer
from stackmonster.events import Event


def feed_events(consumer: Consumer, events: Iterable[Event]):
    """Deliver the events directly, and return the first error."""
    for event in events:
        if error := consumer.handle(event):
            return error
    return None


def in_chunks(text: str, size: int) -> list[str]:
    """Split the text in pieces, to simulate a slow stream."""
    return [text[i : i + size] for i in range(0, len(text), size)]


class CountingFactory:
    """A continuation that tells how often it was called."""

    def __init__(self, func):
        self.func = func
        self.calls = 0

    def create(self):
        self.calls += 1
        return self.func()
