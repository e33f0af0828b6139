"""Consumers that delegate the events to other consumers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from stackmonster.events import EndElement, Event, StartElement
from stackmonster.exceptions import (
    ConstraintNotMatched,
    MismatchedEndElement,
    NoAlternativesLeft,
    ParseError,
    UnexpectedElement,
    UnexpectedEndElement,
    UnexpectedTrailingElement,
)

from .base import Consumer, Continuation, as_factory

logger = logging.getLogger(__name__)

__all__ = (
    "Element",
    "Many",
    "OneOf",
    "Expectation",
    "Literal",
    "Predicate",
    "Constraint",
    "Lift",
)


class ElementState(Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    DONE = "done"


class Element(Consumer):
    """Expect an element, and pass its content to the continuation.

    The element tracks the nesting of its child elements by itself.
    This way, it knows which end tag closes the element, and consumers
    such as ``text()`` and ``many()`` don't need to know where they end.
    Once closed, another element at the same level is refused.
    """

    def __init__(self, name: str, continuation: Continuation | None = None):
        super().__init__()
        self.name = name
        self.continuation = as_factory(continuation)
        self.state = ElementState.WAITING
        self._stack = []

    def handle(self, event: Event) -> ParseError | None:
        if self.state is ElementState.WAITING:
            return self._handle_waiting(event)
        elif self.state is ElementState.ACTIVE:
            return self._handle_active(event)
        elif isinstance(event, StartElement):
            return self.fail(UnexpectedTrailingElement(self.name, event.name))
        else:
            return None

    def _handle_waiting(self, event: Event) -> ParseError | None:
        if isinstance(event, StartElement):
            if event.name != self.name:
                return self.fail(UnexpectedElement(self.name, event.name))

            self.state = ElementState.ACTIVE
            if self.continuation is not None:
                self.child = self.continuation.create()
        elif isinstance(event, EndElement):
            return self.fail(UnexpectedEndElement(self.name, event.name))

        # Text and attributes before the element can be ignored.
        return None

    def _handle_active(self, event: Event) -> ParseError | None:
        if isinstance(event, StartElement):
            self._stack.append(event.name)
        elif isinstance(event, EndElement):
            if not self._stack:
                # Our own end tag, this is not passed to the child.
                self.state = ElementState.DONE
                return None

            opened = self._stack.pop()
            if opened != event.name:
                return self.fail(MismatchedEndElement(opened, event.name))

        return super().handle(event)

    def is_complete(self) -> bool:
        return self.state is ElementState.DONE

    def __repr__(self):
        return f"<{self.__class__.__name__}: <{self.name}> {self.state.value}>"


class Many(Consumer):
    """Repeat the continuation, and collect all values in a list.

    This never completes by itself, as it takes all content of the enclosing element.
    """

    def __init__(self, continuation: Continuation):
        super().__init__()
        self.continuation = as_factory(continuation)
        if self.continuation is None:
            raise TypeError("many() requires a continuation")
        self._values = []

    def handle(self, event: Event) -> ParseError | None:
        if self.child is None:
            self.child = self.continuation.create()

        if error := super().handle(event):
            return error

        if self.child.is_complete():
            self._values.append(self.child.value)
            self.child = None
        return None

    def is_complete(self) -> bool:
        return False

    @property
    def value(self) -> list:
        return self._values


class OneOf(Consumer):
    """Try all alternatives at once, and drop the ones that fail.

    The value is taken from the first alternative that is still left,
    so when multiple alternatives match, the first one in the list wins.
    """

    def __init__(self, children: Iterable[Consumer]):
        super().__init__()
        self.children = list(children)
        if not self.children:
            raise TypeError("one_of() requires at least one alternative")
        for child in self.children:
            if not isinstance(child, Consumer):
                raise TypeError(f"Expected a Consumer, got {child!r}")
        self._errors = []

    def handle(self, event: Event) -> ParseError | None:
        live = []
        for child in self.children:
            if error := child.handle(event):
                logger.debug("Dropping alternative %r: %s", child, error)
                self._errors.append(error)
            else:
                live.append(child)

        self.children = live
        if not live:
            return self.fail(NoAlternativesLeft(self._errors))
        return None

    def is_complete(self) -> bool:
        return any(child.is_complete() for child in self.children)

    @property
    def value(self) -> Any:
        # The first alternative wins, even when a later one is complete as well.
        return self.children[0].value if self.children else None


class Expectation:
    """The check that a :class:`Constraint` performs on the value it reads."""

    def matches(self, value) -> bool:
        raise NotImplementedError()


class Literal(Expectation):
    """Expect the value to be equal to a fixed value."""

    def __init__(self, expected):
        self.expected = expected

    def matches(self, value) -> bool:
        return value == self.expected

    def __repr__(self):
        return f"Literal({self.expected!r})"


class Predicate(Expectation):
    """Expect a function to approve the value."""

    def __init__(self, func: Callable[[Any], bool]):
        self.func = func

    def matches(self, value) -> bool:
        return bool(self.func(value))

    def __repr__(self):
        return f"Predicate({getattr(self.func, '__qualname__', self.func)})"


class Constraint(Consumer):
    """Read a value with the getter, and only continue when it matches the expectation.

    Plain values are compared for equality; use :class:`Predicate` to
    perform a check with a function.
    The getter is called directly, the continuation only after the check succeeded.
    """

    def __init__(
        self,
        getter: Continuation,
        expected: Expectation | Any,
        continuation: Continuation | None = None,
    ):
        getter = as_factory(getter)
        if getter is None:
            raise TypeError("constraint() requires a getter")

        super().__init__(getter.create())
        self.expectation = expected if isinstance(expected, Expectation) else Literal(expected)
        self.continuation = as_factory(continuation)
        self._checked = False

    def handle(self, event: Event) -> ParseError | None:
        if error := super().handle(event):
            return error

        if not self._checked and self.child.is_complete():
            self._checked = True
            value = self.child.value
            if not self.expectation.matches(value):
                logger.debug("Constraint %r failed for %r", self.expectation, value)
                return self.fail(ConstraintNotMatched(self.expectation, value))

            # Switch to the next part of the grammar, the probe is no longer needed.
            self.child = self.continuation.create() if self.continuation is not None else None
        return None

    def is_complete(self) -> bool:
        return self._checked and (self.child is None or self.child.is_complete())

    @property
    def value(self) -> Any:
        # The value of the probe is not exposed.
        return super().value if self._checked else None


class Lift(Consumer):
    """Transform the value of the child consumer."""

    def __init__(self, child: Consumer, transform: Callable[[Any], Any]):
        if not isinstance(child, Consumer):
            raise TypeError(f"Expected a Consumer, got {child!r}")
        super().__init__(child)
        self.transform = transform

    @property
    def value(self) -> Any:
        return self.transform(self.child.value)
