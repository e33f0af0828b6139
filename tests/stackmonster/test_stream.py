import pytest

from stackmonster.combinators import element
from stackmonster.consumers import Consumer
from stackmonster.events import Attribute, Characters, EndElement, StartElement
from stackmonster.exceptions import UnexpectedElement
from stackmonster.stream import StreamAdapter


class RecordingConsumer(Consumer):
    """Keep all events, to inspect what the adapter delivers."""

    def __init__(self):
        super().__init__()
        self.events = []

    def handle(self, event):
        self.events.append(event)
        return None

    @property
    def value(self):
        return self.events


class TestStreamAdapter:
    """Prove that the tokenizer callbacks are translated into events."""

    def test_start(self):
        consumer = RecordingConsumer()
        target = StreamAdapter(consumer)
        target.start("p", {"id": "toto", "class": "head"})
        assert consumer.events == [
            StartElement("p"),
            Attribute("id", "toto"),
            Attribute("class", "head"),
        ]

    def test_text(self):
        consumer = RecordingConsumer()
        target = StreamAdapter(consumer)
        target.data("Foo")
        target.cdata("<bar>")
        target.data("")
        target.end("p")
        assert consumer.events == [Characters("Foo"), Characters("<bar>"), EndElement("p")]

    def test_close(self):
        consumer = RecordingConsumer()
        target = StreamAdapter(consumer)
        target.start("p", {})
        assert target.close() is None
        assert consumer.events == [StartElement("p")]

    def test_raise_error(self):
        target = StreamAdapter(element("p"))
        with pytest.raises(UnexpectedElement):
            target.start("x", {})
