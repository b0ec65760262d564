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

"""Building documents from SAX events.

This module implements the following class:

* TreeBuilder: SAX content and lexical handler producing a
  :class:`~.nodes.Document`.

The builder accepts the SAX conventions for namespaces: ``None`` stands for
the default prefix and for "no namespace". If a source reports no lexical
qualified names, prefixes are inferred from the namespace scope.
"""

import logging
from typing import Optional
from xml.sax.handler import ContentHandler, LexicalHandler
from xml.sax.xmlreader import Locator
from .constants import XML_NAMESPACE, XML_PREFIX, XMLNS_ATTRIBUTE, XMLNS_NAMESPACE
from .enumerations import BuilderState, WellFormednessReason
from .exceptions import DocumentShape, InvalidEventStream, NamespaceWellFormedness
from .leaves import Comment, ProcessingInstruction, Text
from .name import Name
from .nodes import Document, Element, check_names
from .scope import EMPTY_SCOPE, NamespaceScope
from .typealiases import URI, NamespaceURI, Prefix

__all__ = ["TreeBuilder"]

logger = logging.getLogger(__name__)


class _Frame:
    """Element under construction."""

    __slots__ = ("name", "attributes", "scope", "children")

    def __init__(self, name: Name, attributes: dict[Name, str],
                 scope: NamespaceScope):
        self.name = name
        self.attributes = attributes
        self.scope = scope
        self.children = []


class TreeBuilder(ContentHandler, LexicalHandler):
    """SAX handler building a document.

    An instance builds one document. The result is available from
    :attr:`document` once the end of the document has been reported.
    """

    def __init__(self: "TreeBuilder", uri: Optional[URI] = None):
        """Initialize the class instance.

        Args:
            uri: Document URI, a system identifier reported by the document
                locator is used if it is ``None``.
        """
        ContentHandler.__init__(self)
        self.uri = uri
        self.state = BuilderState.before_document
        self._locator = None
        self._doc_children = []
        self._stack: list[_Frame] = []
        self._contexts: list[dict[Prefix, NamespaceURI]] = []
        self._pushed = False
        self._in_cdata = False
        self._text = []
        self._text_cdata = False
        self._element_count = 0
        self._document = None

    @property
    def document(self: "TreeBuilder") -> Document:
        """The document built.

        Raises:
            InvalidEventStream: If the end of the document hasn't been
                reported yet.
        """
        if self._document is None:
            raise InvalidEventStream("document not finished")
        return self._document

    def _error(self: "TreeBuilder", message: str) -> InvalidEventStream:
        if self._locator is None:
            return InvalidEventStream(message)
        return InvalidEventStream(message, self._locator.getLineNumber(),
                                  self._locator.getColumnNumber())

    def _require(self: "TreeBuilder", *states: BuilderState) -> None:
        if self.state not in states:
            raise self._error(f"unexpected event in state {self.state.name}")

    def _append(self: "TreeBuilder", node) -> None:
        if self._stack:
            self._stack[-1].children.append(node)
        else:
            self._doc_children.append(node)

    def _flush_text(self: "TreeBuilder") -> None:
        if self._text:
            self._stack[-1].children.append(
                Text("".join(self._text), self._text_cdata))
            self._text = []

    # ContentHandler methods

    def setDocumentLocator(self: "TreeBuilder", locator: Locator) -> None:
        self._locator = locator
        if self.uri is None:
            self.uri = locator.getSystemId()

    def startDocument(self: "TreeBuilder") -> None:
        self._require(BuilderState.before_document)
        self.state = BuilderState.outside_root

    def endDocument(self: "TreeBuilder") -> None:
        if self.state == BuilderState.outside_root:
            raise DocumentShape("no document element")
        self._require(BuilderState.after_root)
        self._document = Document(self.uri, self._doc_children)
        self.state = BuilderState.finished
        logger.debug("built document %s with %d elements", self.uri,
                     self._element_count)

    def startPrefixMapping(self: "TreeBuilder", prefix: Optional[Prefix],
                           uri: Optional[NamespaceURI]) -> None:
        if not self._pushed:
            self._contexts.append({})
            self._pushed = True
        self._contexts[-1][prefix or ""] = uri or ""

    def endPrefixMapping(self: "TreeBuilder", prefix: Optional[Prefix]) -> None:
        pass

    def startElementNS(self: "TreeBuilder",
                       name: tuple[Optional[NamespaceURI], str],
                       qname: Optional[str], attrs) -> None:
        if self.state == BuilderState.after_root:
            raise DocumentShape("multiple document elements")
        self._require(BuilderState.outside_root, BuilderState.in_element)
        if self._stack:
            self._flush_text()
        if not self._pushed:
            self._contexts.append({})
        self._pushed = False
        decls = self._contexts[-1]
        for p, ns in decls.items():
            if p and not ns:
                raise NamespaceWellFormedness(
                    WellFormednessReason.prefix_undeclaration,
                    p, "prefixed namespace un-declaration")
        parent_scope = self._stack[-1].scope if self._stack else EMPTY_SCOPE
        scope = parent_scope.resolve(decls)
        ename = self._element_name(name, qname, scope)
        extra = {}
        if ename.prefix != XML_PREFIX:
            extra[ename.prefix] = ename.namespace
        attributes = self._attributes(attrs, scope)
        for aname in attributes:
            if aname.prefix and aname.prefix != XML_PREFIX:
                extra.setdefault(aname.prefix, aname.namespace)
        scope = scope.resolve(extra)
        check_names(scope, ename, attributes)
        self._stack.append(_Frame(ename, attributes, scope))
        self.state = BuilderState.in_element

    def _element_name(self: "TreeBuilder",
                      name: tuple[Optional[NamespaceURI], str],
                      qname: Optional[str], scope: NamespaceScope) -> Name:
        ns, local = name[0] or "", name[1]
        if qname is not None:
            return Name(ns, local, _lexical_prefix(qname))
        if not ns or scope.default_namespace == ns:
            return Name(ns, local)
        prefs = scope.prefixes_for(ns)
        return Name(ns, local, prefs[0] if prefs else "")

    def _attributes(self: "TreeBuilder", attrs,
                    scope: NamespaceScope) -> dict[Name, str]:
        """Return the attributes that are not namespace declarations."""
        res = {}
        for key in attrs.getNames():
            ns, local = key[0] or "", key[1]
            try:
                qname = attrs.getQNameByName(key)
            except KeyError:
                qname = None
            if ns == XMLNS_NAMESPACE or qname is not None and (
                    _lexical_prefix(qname) == XMLNS_ATTRIBUTE or
                    qname == XMLNS_ATTRIBUTE):
                continue
            if qname is not None:
                aname = Name(ns, local, _lexical_prefix(qname) if ns else "")
            elif not ns:
                aname = Name("", local)
            elif ns == XML_NAMESPACE:
                aname = Name.xml(local)
            else:
                prefs = [p for p in scope.prefixes_for(ns) if p]
                aname = Name(ns, local, prefs[0] if prefs
                             else self._fresh_prefix(scope))
            res[aname] = attrs.getValue(key)
        return res

    @staticmethod
    def _fresh_prefix(scope: NamespaceScope) -> Prefix:
        i = 0
        while f"ns{i}" in scope:
            i += 1
        return f"ns{i}"

    def endElementNS(self: "TreeBuilder",
                     name: tuple[Optional[NamespaceURI], str],
                     qname: Optional[str]) -> None:
        self._require(BuilderState.in_element)
        self._flush_text()
        frame = self._stack.pop()
        if not frame.name.matches(name[0], name[1]):
            raise self._error(f"end of {name[1]} doesn't match start of "
                              f"{frame.name.local}")
        self._contexts.pop()
        elem = Element(frame.name, frame.attributes, frame.scope,
                       frame.children)
        self._element_count += 1
        self._append(elem)
        if not self._stack:
            self.state = BuilderState.after_root

    def startElement(self: "TreeBuilder", name: str, attrs) -> None:
        raise self._error("namespace processing must be enabled")

    def characters(self: "TreeBuilder", content: str) -> None:
        if self.state == BuilderState.in_element:
            if self._text and self._text_cdata != self._in_cdata:
                self._flush_text()
            self._text_cdata = self._in_cdata
            self._text.append(content)
        elif self.state in (BuilderState.outside_root,
                            BuilderState.after_root):
            if content.strip():
                raise DocumentShape("text at document level")
        else:
            raise self._error(f"text in state {self.state.name}")

    def ignorableWhitespace(self: "TreeBuilder", whitespace: str) -> None:
        pass

    def processingInstruction(self: "TreeBuilder", target: str,
                              data: str) -> None:
        self._require(BuilderState.outside_root, BuilderState.in_element,
                      BuilderState.after_root)
        if self._stack:
            self._flush_text()
        self._append(ProcessingInstruction(target, data or ""))

    def skippedEntity(self: "TreeBuilder", name: str) -> None:
        pass

    # LexicalHandler methods

    def comment(self: "TreeBuilder", content: str) -> None:
        self._require(BuilderState.outside_root, BuilderState.in_element,
                      BuilderState.after_root)
        if self._stack:
            self._flush_text()
        self._append(Comment(content))

    def startCDATA(self: "TreeBuilder") -> None:
        if self._stack:
            self._flush_text()
        self._in_cdata = True

    def endCDATA(self: "TreeBuilder") -> None:
        if self._stack:
            self._flush_text()
        self._in_cdata = False

    def startDTD(self: "TreeBuilder", name: str, public_id: Optional[str],
                 system_id: Optional[str]) -> None:
        pass

    def endDTD(self: "TreeBuilder") -> None:
        pass

    def startEntity(self: "TreeBuilder", name: str) -> None:
        pass

    def endEntity(self: "TreeBuilder", name: str) -> None:
        pass


def _lexical_prefix(qname: str) -> Prefix:
    """Return the prefix of a lexical name, or the empty string.

    Names without exactly one colon between non-empty parts (such as ``:``)
    are treated as unprefixed.
    """
    parts = qname.split(":")
    if len(parts) == 2 and all(parts):
        return parts[0]
    return ""
