"""Exceptions raised while matching a grammar against an XML stream.

All errors derive from :class:`ParseError`, so callers only need to catch
that single type. The subclasses tell which rule of the grammar was violated.
"""

from __future__ import annotations

__all__ = (
    "ParseError",
    "UnexpectedElement",
    "UnexpectedEndElement",
    "MismatchedEndElement",
    "UnexpectedTrailingElement",
    "ConstraintNotMatched",
    "NoAlternativesLeft",
    "MalformedDocument",
)


class ParseError(ValueError):
    """Raise a ValueError when the input doesn't match the grammar."""


class UnexpectedElement(ParseError):
    """Raise a ValueError when a particular XML tag wasn't expected."""

    def __init__(self, expected: str, found: str):
        super().__init__(f"Expected element <{expected}>, got <{found}>")
        self.expected = expected
        self.found = found


class UnexpectedEndElement(ParseError):
    """An end tag arrived before the expected element was opened."""

    def __init__(self, expected: str, found: str):
        super().__init__(f"Expected element <{expected}>, got </{found}>")
        self.expected = expected
        self.found = found


class MismatchedEndElement(ParseError):
    """The end tag doesn't close the element that was opened last."""

    def __init__(self, expected: str, found: str):
        super().__init__(f"Expected end of <{expected}>, got </{found}>")
        self.expected = expected
        self.found = found


class UnexpectedTrailingElement(ParseError):
    """A new element was found after the expected element was already closed."""

    def __init__(self, closed: str, found: str):
        super().__init__(f"Did not expect a new element <{found}> after </{closed}>")
        self.closed = closed
        self.found = found


class ConstraintNotMatched(ParseError):
    """The value read by a constraint didn't match its expectation."""

    def __init__(self, expectation, value):
        super().__init__(f"Constraint not matched: {value!r} does not satisfy {expectation!r}")
        self.expectation = expectation
        self.value = value


class NoAlternativesLeft(ParseError):
    """All choices of a ``one_of()`` failed."""

    def __init__(self, errors: list[ParseError]):
        reasons = "; ".join(str(e) for e in errors)
        super().__init__(f"No alternatives left: {reasons}" if reasons else "No alternatives left")
        self.errors = errors


class MalformedDocument(ParseError):
    """The XML tokenizer rejected the input, e.g. ``mismatched tag: line 3, column 10``."""
