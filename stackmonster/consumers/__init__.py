"""The consumers that a grammar is built from.

These are normally created through the functions in :mod:`stackmonster.combinators`.
"""

from .base import Consumer, ConsumerFactory, Continuation, Status, as_factory
from .leaves import Anything, Attribute, Attributes, Text
from .structural import Constraint, Element, Expectation, Lift, Literal, Many, OneOf, Predicate

__all__ = (
    "Status",
    "Consumer",
    "ConsumerFactory",
    "Continuation",
    "as_factory",
    "Text",
    "Attribute",
    "Attributes",
    "Anything",
    "Element",
    "Many",
    "OneOf",
    "Expectation",
    "Literal",
    "Predicate",
    "Constraint",
    "Lift",
)
