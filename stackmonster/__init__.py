"""Streaming XML combinators.

Build a grammar from small consumers, feed XML into a :class:`StreamParser`
and read the typed result once the grammar matched enough input.
No document tree is built along the way.
"""

from .combinators import (
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
from .consumers import Literal, Predicate
from .exceptions import ParseError
from .parser import StreamParser, parse

__version__ = "1.0"

__all__ = (
    "StreamParser",
    "parse",
    "ParseError",
    "Literal",
    "Predicate",
    "anything",
    "attribute",
    "attributes",
    "constraint",
    "element",
    "lift",
    "many",
    "one_of",
    "text",
)
