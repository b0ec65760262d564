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

"""Ancestry-aware view of element trees.

This module implements the following classes:

* ElementTree: Index of the elements of a tree by navigation path.
* AncestryAwareElement: Element that knows its tree and position.
* AncestryAwareDocument: Document whose element is ancestry-aware.

The underlying tree contains no back-references. Parents are found by
shortening the navigation path and looking it up in the index.
"""

from typing import Iterator, Mapping, Optional
from urllib.parse import urljoin
from .exceptions import LookupMissing
from .leaves import Node
from .name import Name
from .navpath import NavigationPath
from .nodes import Document, Element
from .query import AncestryAwareElementApi
from .scope import NamespaceScope
from .typealiases import URI

__all__ = ["ElementTree", "AncestryAwareElement", "AncestryAwareDocument",
           "XML_BASE"]

XML_BASE = Name.xml("base")
"""Name of the ``xml:base`` attribute."""


class ElementTree:
    """Immutable index of the elements of a tree by navigation path."""

    __slots__ = ("doc_uri", "_elements")

    def __init__(self: "ElementTree",
                 elements: Mapping[NavigationPath, Element],
                 doc_uri: Optional[URI] = None):
        """Initialize the class instance.

        Use :meth:`build` rather than calling the constructor directly.
        """
        self.doc_uri = doc_uri
        self._elements = dict(elements)

    @classmethod
    def build(cls, root: Element, uri: Optional[URI] = None) -> "ElementTree":
        """Index all elements of the tree rooted at `root` in a single
        pre-order traversal.

        Args:
            root: Root element.
            uri: Document URI.
        """
        elements = {}
        stack = [(NavigationPath(), root)]
        while stack:
            path, elem = stack.pop()
            elements[path] = elem
            kids = list(elem.child_elements())
            for i in range(len(kids) - 1, -1, -1):
                stack.append((path.append(i), kids[i]))
        return cls(elements, uri)

    def __len__(self: "ElementTree") -> int:
        return len(self._elements)

    def __repr__(self: "ElementTree") -> str:
        return f"ElementTree({self.doc_uri!r}, {len(self)} elements)"

    def paths(self: "ElementTree") -> Iterator[NavigationPath]:
        """Return an iterator over the navigation paths in document order."""
        return iter(self._elements)

    def root_element(self: "ElementTree") -> "AncestryAwareElement":
        """Return the root element."""
        return AncestryAwareElement(self, NavigationPath())

    def element_at_option(
            self: "ElementTree",
            path: NavigationPath) -> Optional["AncestryAwareElement"]:
        """Return the element at `path`, or ``None`` if there is none."""
        path = NavigationPath(path)
        if path not in self._elements:
            return None
        return AncestryAwareElement(self, path)

    def element_at(self: "ElementTree",
                   path: NavigationPath) -> "AncestryAwareElement":
        """Return the element at `path`.

        Raises:
            LookupMissing: If no element is at `path`.
        """
        res = self.element_at_option(path)
        if res is None:
            raise LookupMissing(f"element at {NavigationPath(path)}", self)
        return res

    def _underlying(self: "ElementTree", path: NavigationPath) -> Element:
        return self._elements[path]


class AncestryAwareElement(AncestryAwareElementApi):
    """Element of an :class:`ElementTree`, identified by its navigation path.

    Two instances are equal if they belong to the same tree and have equal
    paths.
    """

    __slots__ = ("tree", "path", "underlying_element")

    def __init__(self: "AncestryAwareElement", tree: ElementTree,
                 path: NavigationPath):
        self.tree = tree
        """Containing element tree."""
        self.path = path
        """Navigation path from the root element."""
        self.underlying_element = tree._underlying(path)
        """Full element at the receiver's position."""

    def __eq__(self: "AncestryAwareElement", other: object) -> bool:
        if not isinstance(other, AncestryAwareElement):
            return NotImplemented
        return self.tree is other.tree and self.path == other.path

    def __hash__(self: "AncestryAwareElement") -> int:
        return hash((id(self.tree), self.path))

    def __repr__(self: "AncestryAwareElement") -> str:
        return f"AncestryAwareElement({self.name!r}, {self.path})"

    @property
    def name(self: "AncestryAwareElement") -> Name:
        return self.underlying_element.name

    @property
    def attributes(self: "AncestryAwareElement") -> Mapping[Name, str]:
        return self.underlying_element.attributes

    @property
    def scope(self: "AncestryAwareElement") -> NamespaceScope:
        return self.underlying_element.scope

    @property
    def children(self: "AncestryAwareElement") -> tuple[Node, ...]:
        """Child nodes, element children being ancestry-aware."""
        res = []
        idx = 0
        for ch in self.underlying_element.children:
            if isinstance(ch, Element):
                res.append(AncestryAwareElement(self.tree,
                                                self.path.append(idx)))
                idx += 1
            else:
                res.append(ch)
        return tuple(res)

    @property
    def child_index(self: "AncestryAwareElement") -> Optional[int]:
        """Index of the receiver among its parent's child elements, or
        ``None`` for the root."""
        return self.path.last_entry if self.path else None

    @property
    def doc_uri(self: "AncestryAwareElement") -> Optional[URI]:
        """URI of the containing document."""
        return self.tree.doc_uri

    def _child_elements(
            self: "AncestryAwareElement") -> Iterator["AncestryAwareElement"]:
        for i in range(self.underlying_element.child_element_count):
            yield AncestryAwareElement(self.tree, self.path.append(i))

    def namespace_scope_option(
            self: "AncestryAwareElement") -> NamespaceScope:
        return self.underlying_element.scope

    def parent_element_option(
            self: "AncestryAwareElement") -> Optional["AncestryAwareElement"]:
        if not self.path:
            return None
        return AncestryAwareElement(self.tree, self.path.without_last())

    def base_uri_option(self: "AncestryAwareElement") -> Optional[URI]:
        """Return the base URI of the receiver, or ``None``.

        The ``xml:base`` values of the receiver and its ancestors are
        resolved from the outermost one inwards, starting from the document
        URI.
        """
        bases = [e.attribute_option(XML_BASE)
                 for e in self.ancestor_elements_or_self()]
        res = self.tree.doc_uri
        for b in reversed(bases):
            if b is not None:
                res = b if res is None else urljoin(res, b)
        return res

    def base_uri(self: "AncestryAwareElement") -> URI:
        """Return the base URI of the receiver.

        Raises:
            LookupMissing: If neither the document URI nor ``xml:base`` is
                known.
        """
        res = self.base_uri_option()
        if res is None:
            raise LookupMissing("base URI", self.name)
        return res


class AncestryAwareDocument:
    """Document whose document element is ancestry-aware."""

    __slots__ = ("underlying_document", "tree")

    def __init__(self: "AncestryAwareDocument", doc: Document):
        self.underlying_document = doc
        self.tree = ElementTree.build(doc.document_element, doc.uri)

    @classmethod
    def from_document(cls, doc: Document) -> "AncestryAwareDocument":
        """Return the ancestry-aware view of `doc`."""
        return cls(doc)

    def __repr__(self: "AncestryAwareDocument") -> str:
        return f"AncestryAwareDocument({self.underlying_document!r})"

    @property
    def uri(self: "AncestryAwareDocument") -> Optional[URI]:
        return self.underlying_document.uri

    @property
    def document_element(self: "AncestryAwareDocument") -> AncestryAwareElement:
        return self.tree.root_element()

    @property
    def children(self: "AncestryAwareDocument") -> tuple[Node, ...]:
        """Document children, the document element being ancestry-aware."""
        return tuple(self.document_element if isinstance(ch, Element) else ch
                     for ch in self.underlying_document.children)

    def with_uri(self: "AncestryAwareDocument",
                 uri: Optional[URI]) -> "AncestryAwareDocument":
        return AncestryAwareDocument(self.underlying_document.with_uri(uri))
