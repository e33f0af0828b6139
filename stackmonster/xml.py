"""The XML tokenizers that can drive a grammar.

Both tokenizers follow the "parser target" protocol of :mod:`xml.etree.ElementTree`:
data is pushed in using ``feed()``, and each tag/text is reported
to the ``start()``, ``end()`` and ``data()`` methods of the target object.
The ``close()`` call finishes the document.

By default, the expat parser from the standard library is used through defusedxml.
This way, DOS attacks (such as entity expansion) in incoming data are prevented.
Optionally, lxml can be used instead.
"""

from __future__ import annotations

import logging

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import DefusedXMLParser

from stackmonster import conf

logger = logging.getLogger(__name__)

__all__ = (
    "TOKENIZERS",
    "TOKENIZER_ERRORS",
    "create_tokenizer",
)

#: The exceptions that the tokenizers raise for bad input.
#: Both the ParseError of expat and the XMLSyntaxError of lxml are a SyntaxError.
TOKENIZER_ERRORS = (SyntaxError, DefusedXmlException)


def _create_defusedxml_tokenizer(target, forbid_dtd: bool):
    # Passing a custom target potentially circumvents defusedxml,
    # so note the parser is again configured in the same way:
    return DefusedXMLParser(
        target=target,
        forbid_dtd=forbid_dtd,
        forbid_entities=True,
        forbid_external=True,
    )


def _create_lxml_tokenizer(target, forbid_dtd: bool):
    from lxml import etree

    return etree.XMLParser(
        target=target,
        resolve_entities=False,
        no_network=True,
        load_dtd=not forbid_dtd,
    )


TOKENIZERS = {
    "defusedxml": _create_defusedxml_tokenizer,
    "lxml": _create_lxml_tokenizer,
}


def create_tokenizer(target, name: str | None = None, forbid_dtd: bool | None = None):
    """Create a push-parser that reports all tags to the target.

    :param target: The object that receives the ``start()``, ``end()`` and ``data()`` calls.
    :param name: The tokenizer to use, defaults to the ``STACKMONSTER_TOKENIZER`` setting.
    :param forbid_dtd: Whether to refuse a ``<!DOCTYPE>``,
        defaults to the ``STACKMONSTER_FORBID_DTD`` setting.
    """
    name = name or conf.STACKMONSTER_TOKENIZER
    if forbid_dtd is None:
        forbid_dtd = conf.STACKMONSTER_FORBID_DTD

    try:
        factory = TOKENIZERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown tokenizer '{name}', choose one of: {', '.join(TOKENIZERS)}."
        ) from None

    logger.debug("Using the %s tokenizer", name)
    return factory(target, forbid_dtd=forbid_dtd)
