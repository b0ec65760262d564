# Copyright © 2024–2026 The Ixdom Authors
#
# This file is part of Ixdom.
#
# Ixdom is free software: you can redistribute it and/or modify it under the
# terms of the GNU Lesser General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# Ixdom is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR
# A PARTICULAR PURPOSE.  See the GNU Lesser General Public License for more
# details.
#
# You should have received a copy of the GNU Lesser General Public License along
# with Ixdom.  If not, see <http://www.gnu.org/licenses/>.

"""Parsing XML text into documents.

This module implements the following class:

* DocumentParser: Parser driving :mod:`pyexpat` and a
  :class:`~.builder.TreeBuilder`.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union
from xml.parsers import expat
from xml.sax.xmlreader import AttributesNSImpl, Locator
from .builder import TreeBuilder
from .exceptions import InvalidEventStream
from .nodes import Document
from .typealiases import URI

__all__ = ["DocumentParser"]

logger = logging.getLogger(__name__)

_SEPARATOR = " "
"""Separator of namespace URI, local name and prefix in expat names."""


class _ExpatLocator(Locator):
    """Locator reporting the current position of an expat parser."""

    def __init__(self, parser, uri: Optional[URI]):
        self.parser = parser
        self.uri = uri

    def getColumnNumber(self) -> int:
        return self.parser.CurrentColumnNumber

    def getLineNumber(self) -> int:
        return self.parser.CurrentLineNumber

    def getSystemId(self) -> Optional[URI]:
        return self.uri


def _split_name(name: str) -> tuple[tuple[Optional[str], str], str]:
    """Split an expat name triplet into a SAX name and a lexical name."""
    parts = name.split(_SEPARATOR)
    if len(parts) == 1:
        return ((None, name), name)
    if len(parts) == 2:
        return ((parts[0], parts[1]), parts[1])
    return ((parts[0], parts[1]), f"{parts[2]}:{parts[1]}")


class DocumentParser:
    """Parser of XML documents.

    DTDs are not processed and external entities are never fetched.
    """

    def __init__(self: "DocumentParser",
                 remove_inter_element_whitespace: bool = False):
        """Initialize the class instance.

        Args:
            remove_inter_element_whitespace: Flag requesting removal of
                whitespace between elements from parsed documents.
        """
        self.remove_inter_element_whitespace = remove_inter_element_whitespace

    def parse_string(self: "DocumentParser", text: str,
                     uri: Optional[URI] = None) -> Document:
        """Parse a document from a string.

        An encoding in the XML declaration is ignored.

        Raises:
            InvalidEventStream: If `text` is not well-formed.
            NamespaceWellFormedness: If the document isn't
                namespace-well-formed.
        """
        return self._parse(lambda p: p.Parse(text.encode("utf-8"), True),
                           uri, "utf-8")

    def parse_bytes(self: "DocumentParser", data: bytes,
                    uri: Optional[URI] = None) -> Document:
        """Parse a document from bytes, taking the encoding from the XML
        declaration."""
        return self._parse(lambda p: p.Parse(data, True), uri)

    def parse_file(self: "DocumentParser",
                   path: Union[str, Path]) -> Document:
        """Parse a document from a file. The document URI is the ``file``
        URI of `path`."""
        path = Path(path)
        with open(path, "rb") as infile:
            return self._parse(lambda p: p.ParseFile(infile),
                               path.resolve().as_uri())

    def _parse(self: "DocumentParser", feed: Callable,
               uri: Optional[URI], encoding: str = None) -> Document:
        builder = TreeBuilder(uri)
        parser = expat.ParserCreate(encoding, _SEPARATOR)
        parser.namespace_prefixes = True
        parser.ordered_attributes = True
        parser.buffer_text = True
        parser.SetParamEntityParsing(expat.XML_PARAM_ENTITY_PARSING_NEVER)
        self._connect(parser, builder)
        logger.debug("parsing %s (encoding %s)", uri or "<input>",
                     encoding or "declared")
        builder.setDocumentLocator(_ExpatLocator(parser, uri))
        builder.startDocument()
        try:
            feed(parser)
        except expat.ExpatError as err:
            raise InvalidEventStream(expat.ErrorString(err.code),
                                     err.lineno, err.offset) from err
        builder.endDocument()
        doc = builder.document
        if self.remove_inter_element_whitespace:
            doc = doc.remove_inter_element_whitespace()
        return doc

    @staticmethod
    def _connect(parser, builder: TreeBuilder) -> None:
        def start_element(name, attrs):
            sname, qname = _split_name(name)
            values = {}
            qnames = {}
            for i in range(0, len(attrs), 2):
                akey, aqname = _split_name(attrs[i])
                values[akey] = attrs[i + 1]
                qnames[akey] = aqname
            builder.startElementNS(sname, qname,
                                   AttributesNSImpl(values, qnames))

        def end_element(name):
            sname, qname = _split_name(name)
            builder.endElementNS(sname, qname)

        parser.StartElementHandler = start_element
        parser.EndElementHandler = end_element
        parser.StartNamespaceDeclHandler = builder.startPrefixMapping
        parser.EndNamespaceDeclHandler = builder.endPrefixMapping
        parser.CharacterDataHandler = builder.characters
        parser.CommentHandler = builder.comment
        parser.ProcessingInstructionHandler = builder.processingInstruction
        parser.StartCdataSectionHandler = builder.startCDATA
        parser.EndCdataSectionHandler = builder.endCDATA
