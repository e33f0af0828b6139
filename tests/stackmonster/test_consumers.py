import pytest

from stackmonster.combinators import (
    anything,
    attribute,
    attributes,
    constraint,
    element,
    lift,
    many,
    one_of,
    text,
)
from stackmonster.consumers import ConsumerFactory, Literal, Predicate, Status
from stackmonster.events import Attribute, Characters, EndElement, StartElement
from stackmonster.exceptions import (
    ConstraintNotMatched,
    MismatchedEndElement,
    NoAlternativesLeft,
    UnexpectedElement,
    UnexpectedEndElement,
    UnexpectedTrailingElement,
)
from tests.stackmonster.utils import CountingFactory, feed_events


class TestElement:
    """Prove that the element tracks its own boundaries."""

    def test_complete_at_close(self):
        consumer = element("tag")
        assert feed_events(consumer, [StartElement("tag")]) is None
        assert consumer.status is Status.OPEN
        assert feed_events(consumer, [EndElement("tag")]) is None
        assert consumer.status is Status.COMPLETE
        assert consumer.value is None

    def test_ignore_before_start(self):
        consumer = element("p", text)
        events = [Characters(" "), StartElement("p"), Characters("x"), EndElement("p")]
        assert feed_events(consumer, events) is None
        assert consumer.value == "x"

    def test_end_before_start(self):
        consumer = element("p")
        error = feed_events(consumer, [EndElement("p")])
        assert isinstance(error, UnexpectedEndElement)
        assert consumer.status is Status.FAILED

    def test_wrong_name(self):
        consumer = element("p")
        error = feed_events(consumer, [StartElement("x")])
        assert isinstance(error, UnexpectedElement)
        assert error.expected == "p"
        assert error.found == "x"

    def test_mismatched_end(self):
        consumer = element("body", text)
        error = feed_events(consumer, [StartElement("body"), StartElement("a"), EndElement("b")])
        assert isinstance(error, MismatchedEndElement)
        assert str(error) == "Expected end of <a>, got </b>"

    def test_trailing_element(self):
        consumer = element("p")
        error = feed_events(
            consumer, [StartElement("p"), EndElement("p"), Characters("x"), StartElement("p")]
        )
        assert isinstance(error, UnexpectedTrailingElement)

    def test_own_end_not_forwarded(self):
        """Prove that the child never sees the end tag of the element."""
        consumer = element("p", anything)
        feed_events(consumer, [StartElement("p"), EndElement("p")])
        assert consumer.is_complete()
        assert not consumer.child.is_complete()

    def test_lazy_continuation(self):
        factory = CountingFactory(text)
        consumer = element("p", factory)
        assert factory.calls == 0
        feed_events(consumer, [StartElement("p"), StartElement("b"), EndElement("b")])
        assert factory.calls == 1

    def test_consumer_as_continuation(self):
        with pytest.raises(TypeError):
            element("p", text())


class TestLeaves:
    """Prove that the leaf consumers read the right events."""

    def test_text(self):
        consumer = text()
        feed_events(consumer, [Characters("Foo"), Attribute("a", "b"), Characters("bar")])
        assert consumer.value == "Foobar"
        assert consumer.status is Status.OPEN

    def test_attribute(self):
        consumer = attribute("class")
        feed_events(consumer, [Attribute("id", "1")])
        assert consumer.status is Status.OPEN
        feed_events(consumer, [Attribute("class", "head"), Attribute("class", "foot")])
        assert consumer.status is Status.COMPLETE
        assert consumer.value == "head"

    def test_attribute_missing(self):
        consumer = attribute("class")
        feed_events(consumer, [Attribute("id", "1"), Characters("x"), Attribute("class", "late")])
        assert consumer.is_complete()
        assert consumer.value is None

    def test_attributes(self):
        consumer = attributes()
        feed_events(
            consumer,
            [Attribute("id", "1"), Attribute("id", "2"), Attribute("class", "head")],
        )
        assert not consumer.is_complete()
        feed_events(consumer, [StartElement("b"), Attribute("src", "x")])
        assert consumer.is_complete()
        assert consumer.value == {"id": "2", "class": "head"}

    def test_anything(self):
        consumer = anything()
        assert not consumer.is_complete()
        feed_events(consumer, [StartElement("img")])
        assert consumer.is_complete()
        assert consumer.value is None

    def test_anything_continuation(self):
        factory = CountingFactory(lambda: attribute("src"))
        consumer = anything(factory)
        assert factory.calls == 0
        feed_events(consumer, [StartElement("img")])
        assert factory.calls == 1
        assert not consumer.is_complete()
        feed_events(consumer, [Attribute("src", "foo.jpg")])
        assert consumer.is_complete()
        assert consumer.value == "foo.jpg"


class TestMany:
    """Prove that repetitions create a fresh consumer each time."""

    def test_values(self):
        factory = CountingFactory(anything)
        consumer = many(factory)
        feed_events(consumer, [StartElement("a"), Characters("b"), EndElement("a")])
        assert factory.calls == 3
        assert consumer.value == [None, None, None]
        assert consumer.status is Status.OPEN

    def test_failing_child(self):
        consumer = many(lambda: element("p"))
        error = feed_events(consumer, [StartElement("p"), EndElement("p"), StartElement("x")])
        assert isinstance(error, UnexpectedElement)
        assert consumer.status is Status.FAILED
        assert consumer.value == [None]

    def test_continuation_required(self):
        with pytest.raises(TypeError):
            many(None)


class TestOneOf:
    """Prove that failing alternatives are dropped."""

    def test_prune(self):
        first = element("p", text)
        second = element("img", lambda: attribute("src"))
        consumer = one_of([first, second])
        assert feed_events(consumer, [StartElement("img")]) is None
        assert consumer.children == [second]
        assert first.status is Status.FAILED

    def test_exhausted(self):
        consumer = one_of([element("p"), element("img")])
        error = feed_events(consumer, [StartElement("span")])
        assert isinstance(error, NoAlternativesLeft)
        assert len(error.errors) == 2
        assert consumer.status is Status.FAILED

    def test_value_before_complete(self):
        consumer = one_of([element("p", text), element("p", lambda: lift(text(), str.upper))])
        feed_events(consumer, [StartElement("p"), Characters("foo")])
        assert not consumer.is_complete()
        assert consumer.value == "foo"

    def test_first_alternative_wins(self):
        """Prove that the first alternative gives the value, even when a later one completed."""
        consumer = one_of(
            [constraint(lambda: attribute("class"), "head", text), attribute("class")]
        )
        feed_events(consumer, [Attribute("class", "head")])
        assert consumer.is_complete()
        assert consumer.value == ""

    def test_empty(self):
        with pytest.raises(TypeError):
            one_of([])


class TestConstraint:
    """Prove that constraints check the value of their getter."""

    def test_literal(self):
        consumer = constraint(lambda: attribute("class"), "head")
        assert isinstance(consumer.expectation, Literal)
        assert feed_events(consumer, [Attribute("class", "head")]) is None
        assert consumer.is_complete()

    def test_getter_created_directly(self):
        factory = CountingFactory(lambda: attribute("class"))
        continuation = CountingFactory(text)
        constraint(factory, "head", continuation)
        assert factory.calls == 1
        assert continuation.calls == 0

    def test_not_matched(self):
        consumer = constraint(lambda: attribute("class"), "head")
        error = feed_events(consumer, [Attribute("class", "foot")])
        assert isinstance(error, ConstraintNotMatched)
        assert error.value == "foot"
        assert str(error) == "Constraint not matched: 'foot' does not satisfy Literal('head')"

    def test_predicate(self):
        consumer = constraint(lambda: attribute("id"), Predicate(lambda v: int(v) > 10))
        assert feed_events(consumer, [Attribute("id", "12")]) is None
        assert consumer.is_complete()

    def test_literal_callable(self):
        """Prove that functions are compared as value, unless wrapped in a Predicate."""
        consumer = constraint(lambda: lift(attributes(), lambda _: str), str)
        assert feed_events(consumer, [Attribute("id", "1"), Characters("x")]) is None
        assert consumer.is_complete()

    def test_continuation(self):
        factory = CountingFactory(text)
        consumer = constraint(lambda: attribute("class"), "head", factory)
        feed_events(consumer, [Attribute("class", "head")])
        assert factory.calls == 1
        assert consumer.value == ""
        feed_events(consumer, [Characters("Hello")])
        assert consumer.value == "Hello"
        assert not consumer.is_complete()

    def test_probe_value_hidden(self):
        consumer = constraint(lambda: attributes(), Predicate(bool))
        feed_events(consumer, [Attribute("id", "1")])
        assert consumer.value is None


class TestLift:
    def test_lazy_transform(self):
        calls = []

        def transform(value):
            calls.append(value)
            return value.upper()

        consumer = lift(text(), transform)
        feed_events(consumer, [Characters("foo"), Characters("bar")])
        assert calls == []
        assert consumer.value == "FOOBAR"
        assert calls == ["foobar"]

    def test_complete(self):
        consumer = lift(element("p"), lambda v: "done")
        feed_events(consumer, [StartElement("p")])
        assert not consumer.is_complete()
        feed_events(consumer, [EndElement("p")])
        assert consumer.is_complete()
        assert consumer.value == "done"


class TestConsumerFactory:
    def test_create(self):
        factory = ConsumerFactory(text)
        assert factory.create() is not factory.create()

    def test_bad_return(self):
        factory = ConsumerFactory(lambda: "text")
        with pytest.raises(TypeError):
            factory.create()
