"""The base classes for all consumers.

A consumer receives the events of the XML stream one by one, and eventually
provides a value. Consumers are composed into a grammar, where the outer
consumers decide which events are passed to their children.

Instead of raising an exception, :meth:`Consumer.handle` returns the
:class:`~stackmonster.exceptions.ParseError` when the event can't be accepted.
This allows :class:`~stackmonster.consumers.OneOf` to drop the alternatives
that failed, without using exceptions for control flow.
Only the stream adapter raises the error, which aborts the parse.

Child consumers can be created lazily, through a "continuation".
This is a :class:`ConsumerFactory` (or any object with a ``create()`` method)
that builds a fresh consumer the moment it's needed.
That allows recursive grammars, and gives each repetition its own state.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from stackmonster.events import Event
from stackmonster.exceptions import ParseError

__all__ = (
    "Status",
    "Consumer",
    "ConsumerFactory",
    "Continuation",
    "as_factory",
)


class Status(Enum):
    """The state of a consumer.

    Note that a consumer may be ``OPEN`` forever, such as ``text()`` or ``many()``.
    Those are completed by the element that encloses them.
    """

    OPEN = "open"
    COMPLETE = "complete"
    FAILED = "failed"


class Consumer:
    """The base class of all consumers.

    By default, the events are forwarded to the single child consumer,
    and its state and value are reported as our own. Without a child,
    all events are ignored and the consumer never completes.
    """

    #: The consumer that receives the forwarded events.
    child: Consumer | None = None

    #: The error that was returned by :meth:`handle`.
    error: ParseError | None = None

    def __init__(self, child: Consumer | None = None):
        self.child = child

    def handle(self, event: Event) -> ParseError | None:
        """Process an event. Returns the error when the event isn't accepted."""
        if self.child is not None:
            return self.fail(self.child.handle(event))
        return None

    def is_complete(self) -> bool:
        """Tell whether no further events are needed."""
        return self.child is not None and self.child.is_complete()

    @property
    def value(self) -> Any:
        """The parsed value. This is only final once :meth:`is_complete` returns true."""
        return self.child.value if self.child is not None else None

    @property
    def status(self) -> Status:
        """Tell the state of this consumer."""
        if self.error is not None:
            return Status.FAILED
        elif self.is_complete():
            return Status.COMPLETE
        else:
            return Status.OPEN

    def fail(self, error: ParseError | None) -> ParseError | None:
        """Remember the error (if any), and return it for the caller to pass on."""
        if error is not None:
            self.error = error
        return error

    def __repr__(self):
        return f"<{self.__class__.__name__}: {self.status.value}>"


class ConsumerFactory:
    """Wrap a function without arguments, so it can be used as continuation.

    The function is called every time a new consumer is needed.
    """

    def __init__(self, func: Callable[[], Consumer]):
        self.func = func

    def create(self) -> Consumer:
        """Build a fresh consumer."""
        consumer = self.func()
        if not isinstance(consumer, Consumer):
            raise TypeError(
                f"{getattr(self.func, '__name__', self.func)!s} returned {consumer!r}, "
                f"expected a Consumer."
            )
        return consumer

    def __repr__(self):
        return f"<{self.__class__.__name__}: {getattr(self.func, '__qualname__', self.func)}>"


#: Anything that can be passed as continuation:
#: a function without arguments, or an object with a ``create()`` method.
Continuation = Callable[[], Consumer] | ConsumerFactory


def as_factory(continuation: Continuation | None) -> ConsumerFactory | None:
    """Translate the continuation argument of a combinator into a factory object."""
    if continuation is None:
        return None
    elif isinstance(continuation, Consumer):
        # A single instance would be shared between all places that create a child.
        raise TypeError(
            f"Expected a function that creates a consumer, got the consumer {continuation!r}."
            " Use 'lambda: ...' to create the consumer on demand."
        )
    elif not isinstance(continuation, type) and callable(getattr(continuation, "create", None)):
        # Custom factory objects
        return continuation
    elif callable(continuation):
        return ConsumerFactory(continuation)
    else:
        raise TypeError(f"Unexpected continuation {continuation!r}")
