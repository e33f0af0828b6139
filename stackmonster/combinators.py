"""The functions to build a grammar with.

For example, to read all paragraphs of a document:

.. code-block:: python

    from stackmonster import element, many, parse, text

    grammar = lambda: element("body", lambda: many(lambda: element("p", text)))
    parse(grammar, "<body><p>One</p><p>Two</p></body>")  # ["One", "Two"]

Each continuation is a function that creates the consumer when it's needed.
Functions without arguments (such as :func:`text`) can be passed directly.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from .consumers import (
    Anything,
    Attribute,
    Attributes,
    Constraint,
    Consumer,
    Continuation,
    Element,
    Expectation,
    Lift,
    Many,
    OneOf,
    Text,
)

__all__ = (
    "element",
    "text",
    "attribute",
    "attributes",
    "anything",
    "many",
    "one_of",
    "constraint",
    "lift",
)


def element(name: str, continuation: Continuation | None = None) -> Element:
    """Expect the element, and parse its content with the continuation."""
    return Element(name, continuation)


def text() -> Text:
    """Collect all text of the enclosing element."""
    return Text()


def attribute(name: str) -> Attribute:
    """Read one attribute of the enclosing element."""
    return Attribute(name)


def attributes() -> Attributes:
    """Read all attributes of the enclosing element."""
    return Attributes()


def anything(continuation: Continuation | None = None) -> Anything:
    """Skip one event, and continue with the next consumer."""
    return Anything(continuation)


def many(continuation: Continuation) -> Many:
    """Repeat the continuation until the enclosing element ends."""
    return Many(continuation)


def one_of(children: Iterable[Consumer]) -> OneOf:
    """Take the first of the alternatives that matches."""
    return OneOf(children)


def constraint(
    getter: Continuation, expected: Expectation | Any, continuation: Continuation | None = None
) -> Constraint:
    """Only continue when the value of the getter matches the expected value or predicate."""
    return Constraint(getter, expected, continuation)


def lift(child: Consumer, transform: Callable[[Any], Any]) -> Lift:
    """Transform the value of a consumer."""
    return Lift(child, transform)
