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

"""Producing SAX events from documents and elements.

This module implements the following class:

* EventEmitter: Walks a tree and reports it to a SAX content handler.

Namespace declarations are reported as prefix mappings derived from the
differences between the scopes of parent and child elements. Prefix
un-declarations, which XML 1.0 cannot express, are left out.
"""

from typing import Optional
from xml.sax.handler import ContentHandler, LexicalHandler
from xml.sax.xmlreader import AttributesNSImpl, Locator
from .leaves import Comment, Node, ProcessingInstruction, Text
from .nodes import Document, Element
from .scope import EMPTY_SCOPE, NamespaceScope
from .typealiases import URI

__all__ = ["EventEmitter"]


class _DocumentLocator(Locator):
    """Locator reporting just the document URI."""

    def __init__(self, uri: Optional[URI]):
        self.uri = uri

    def getSystemId(self) -> Optional[URI]:
        return self.uri


class EventEmitter:
    """Reporter of SAX events for a document or element.

    Lexical events (comments and CDATA boundaries) are reported only if the
    handler is also a :class:`~xml.sax.handler.LexicalHandler`.
    """

    def __init__(self: "EventEmitter", handler: ContentHandler):
        """Initialize the class instance.

        Args:
            handler: Receiver of the events.
        """
        self.handler = handler
        self.lexical = isinstance(handler, LexicalHandler)

    def emit_document(self: "EventEmitter", doc: Document) -> None:
        """Report a complete document, including the start and end of the
        document."""
        self.handler.setDocumentLocator(_DocumentLocator(doc.uri))
        self.handler.startDocument()
        for ch in doc.children:
            self._emit_node(ch, EMPTY_SCOPE)
        self.handler.endDocument()

    def emit_element(self: "EventEmitter", elem: Element,
                     parent_scope: NamespaceScope = EMPTY_SCOPE) -> None:
        """Report an element and its descendants.

        Args:
            elem: Element to report.
            parent_scope: Scope already in effect at the handler.
        """
        decls = NamespaceScope.without_prefixed_undeclarations(
            parent_scope.relativize(elem.scope))
        for pref, ns in decls.items():
            self.handler.startPrefixMapping(pref or None, ns)
        name = (elem.name.namespace or None, elem.name.local)
        qname = elem.name.syntactic
        values = {}
        qnames = {}
        for an, val in elem.attributes.items():
            key = (an.namespace or None, an.local)
            values[key] = val
            qnames[key] = an.syntactic
        self.handler.startElementNS(name, qname,
                                    AttributesNSImpl(values, qnames))
        for ch in elem.children:
            self._emit_node(ch, elem.scope)
        self.handler.endElementNS(name, qname)
        for pref in reversed(list(decls)):
            self.handler.endPrefixMapping(pref or None)

    def _emit_node(self: "EventEmitter", node: Node,
                   scope: NamespaceScope) -> None:
        if isinstance(node, Element):
            self.emit_element(node, scope)
        elif isinstance(node, Text):
            if node.is_cdata and self.lexical:
                self.handler.startCDATA()
                self.handler.characters(node.value)
                self.handler.endCDATA()
            else:
                self.handler.characters(node.value)
        elif isinstance(node, Comment):
            if self.lexical:
                self.handler.comment(node.value)
        elif isinstance(node, ProcessingInstruction):
            self.handler.processingInstruction(node.target, node.data)
        else:
            raise TypeError(f"cannot emit {node!r}")
