"""Drive a grammar with an XML stream.

The data can be pushed into the :class:`StreamParser` in chunks of any size,
for example while it's being downloaded. The grammar processes the data
while it arrives, so the full document never has to be kept in memory.

Note the asymmetry in error handling: while feeding data, all errors are raised.
When finishing the stream, errors are ignored by default. This way, a truncated
document still gives the value that the grammar collected so far.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from stackmonster import conf
from stackmonster.consumers import Consumer, ConsumerFactory, as_factory
from stackmonster.exceptions import MalformedDocument, ParseError
from stackmonster.stream import StreamAdapter
from stackmonster.xml import TOKENIZER_ERRORS, create_tokenizer

logger = logging.getLogger(__name__)

__all__ = (
    "StreamParser",
    "parse",
)


class StreamParser:
    """Push XML data through a grammar.

    Usage:

    .. code-block:: python

        parser = StreamParser(lambda: element("p", text))
        parser.feed("<p>Foo")
        parser.feed("bar</p>")
        parser.finish()
        parser.result  # "Foobar"
    """

    def __init__(
        self,
        grammar: Callable[[], Consumer] | ConsumerFactory,
        tokenizer: str | None = None,
        strict: bool | None = None,
    ):
        """
        :param grammar: A function that creates the root consumer.
        :param tokenizer: Which tokenizer to use, defaults to the ``STACKMONSTER_TOKENIZER``.
        :param strict: Whether errors at the end of the stream should be raised,
            defaults to the ``STACKMONSTER_STRICT_FINISH`` setting.
        """
        factory = as_factory(grammar)
        if factory is None:
            raise TypeError("StreamParser requires a grammar")

        self.consumer = factory.create()
        self.strict = conf.STACKMONSTER_STRICT_FINISH if strict is None else strict
        self._target = StreamAdapter(self.consumer)
        self._tokenizer = create_tokenizer(self._target, name=tokenizer)
        self._finished = False
        self._failed = False

    def feed(self, data: str | bytes):
        """Parse the next chunk of data.

        :raises ParseError: When the data doesn't match the grammar, or isn't valid XML.
        """
        if self._finished:
            raise RuntimeError("Can't feed data after finish() is called.")
        if self._failed:
            raise RuntimeError("Can't feed data after a parse error.")

        try:
            self._tokenizer.feed(data)
        except ParseError:
            self._failed = True
            raise
        except TOKENIZER_ERRORS as e:
            self._failed = True
            logger.debug("Parsing XML error: %s", e)
            raise MalformedDocument(str(e)) from e

    def finish(self):
        """Tell the tokenizer that the stream has ended.

        Errors are only raised in strict mode. Otherwise, the result
        is whatever the grammar collected until the stream ended.
        """
        if self._finished:
            return

        # The value is only computed by the result property.
        self._finished = True
        self._close_tokenizer()

        if not self.consumer.is_complete():
            logger.debug("Stream ended before the grammar completed: %r", self.consumer)

    def _close_tokenizer(self):
        if self._failed:
            # The tokenizer already stopped halfway.
            return

        try:
            self._tokenizer.close()
        except ParseError as e:
            if self.strict:
                raise
            logger.debug("Ignoring parse error at end of stream: %s", e)
        except TOKENIZER_ERRORS as e:
            if self.strict:
                raise MalformedDocument(str(e)) from e
            # Truncated documents are fine, as long as the grammar found its data.
            logger.debug("Ignoring XML error at end of stream: %s", e)

    @property
    def is_complete(self) -> bool:
        """Tell whether the grammar has seen all the data it needs."""
        return self.consumer.is_complete()

    @property
    def result(self) -> Any:
        """The value that the grammar produced."""
        if not self._finished:
            raise RuntimeError("Can't read the result before finish() is called.")
        return self.consumer.value


def parse(
    grammar: Callable[[], Consumer] | ConsumerFactory,
    source: str | bytes | Iterable[str | bytes],
    **options,
) -> Any:
    """Parse a document, or an iterable of chunks, and return the result of the grammar.

    The keyword arguments are passed to :class:`StreamParser`.
    """
    parser = StreamParser(grammar, **options)
    if isinstance(source, (str, bytes)):
        source = [source]

    for chunk in source:
        parser.feed(chunk)

    parser.finish()
    return parser.result
