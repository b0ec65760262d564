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

"""Minimal (scope-free) nodes and XML equality.

This module implements the following classes:

* MinimalElement: Element without namespace scope.
* MinimalDocument: Document whose document element is minimal.
* NodeComparison: Structural comparison of minimal nodes.

Full nodes are projected to minimal ones by :func:`to_minimal`, and
:func:`xml_equal` compares documents or elements modulo prefix choice and
placement of namespace declarations.
"""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Union
from .enumerations import WellFormednessReason
from .exceptions import DocumentShape, NamespaceWellFormedness
from .leaves import Comment, Node, ProcessingInstruction, Text
from .name import Name
from .nodes import Document, Element
from .query import AttributeName, ElementApi, as_name
from .transform import TransformableElement
from .typealiases import URI

__all__ = ["MinimalElement", "MinimalDocument", "NodeComparison",
           "to_minimal", "xml_equal"]


class MinimalElement(ElementApi, TransformableElement):
    """Element consisting of name, attributes and children only.

    Equality ignores the prefixes of names as well as the CDATA flag of
    text nodes.
    """

    __slots__ = ("name", "_attributes", "_children")

    def __init__(self: "MinimalElement", name: Name,
                 attributes: Mapping[AttributeName, str] = None,
                 children: Iterable[Node] = ()):
        """Initialize the class instance.

        Raises:
            NamespaceWellFormedness: If an attribute name has a namespace but
                no prefix.
        """
        attrs = {as_name(n): v for n, v in (attributes or {}).items()}
        for an in attrs:
            if an.namespace and not an.prefix:
                raise NamespaceWellFormedness(
                    WellFormednessReason.attribute_default_namespace_misuse,
                    an, "namespaced attribute needs a prefix")
        children = tuple(children)
        for ch in children:
            if not isinstance(ch, (MinimalElement, Text, Comment,
                                   ProcessingInstruction)):
                raise TypeError(f"invalid child node {ch!r}")
        self.name = name
        self._attributes = attrs
        self._children = children

    def __eq__(self: "MinimalElement", other: object) -> bool:
        if not isinstance(other, MinimalElement):
            return NotImplemented
        return _default_comparison.equal(self, other)

    def __hash__(self: "MinimalElement") -> int:
        return hash((self.name, frozenset(self._attributes.items()),
                     len(self._children)))

    def __repr__(self: "MinimalElement") -> str:
        return (f"MinimalElement({self.name!r}, {self._attributes!r}, "
                f"{list(self._children)!r})")

    @property
    def attributes(self: "MinimalElement") -> Mapping[Name, str]:
        return MappingProxyType(self._attributes)

    @property
    def children(self: "MinimalElement") -> tuple[Node, ...]:
        return self._children

    def _child_elements(self: "MinimalElement") -> Iterator["MinimalElement"]:
        for ch in self._children:
            if isinstance(ch, MinimalElement):
                yield ch

    def with_name(self: "MinimalElement", name: Name) -> "MinimalElement":
        return MinimalElement(name, self._attributes, self._children)

    def with_attributes(
            self: "MinimalElement",
            attributes: Mapping[AttributeName, str]) -> "MinimalElement":
        return MinimalElement(self.name, attributes, self._children)

    def with_children(self: "MinimalElement",
                      children: Iterable[Node]) -> "MinimalElement":
        return MinimalElement(self.name, self._attributes, children)

    def to_minimal(self: "MinimalElement") -> "MinimalElement":
        return self


class MinimalDocument:
    """Document with an optional URI and exactly one minimal document
    element."""

    __slots__ = ("uri", "children")

    def __init__(self: "MinimalDocument", uri: Optional[URI] = None,
                 children: Iterable[Node] = ()):
        children = tuple(children)
        for ch in children:
            if isinstance(ch, Text):
                raise DocumentShape("text at document level")
            if not isinstance(ch, (MinimalElement, Comment,
                                   ProcessingInstruction)):
                raise TypeError(f"invalid document child {ch!r}")
        count = sum(1 for ch in children if isinstance(ch, MinimalElement))
        if count != 1:
            raise DocumentShape(f"{count} document elements")
        self.uri = uri
        self.children = children

    def __eq__(self: "MinimalDocument", other: object) -> bool:
        if not isinstance(other, MinimalDocument):
            return NotImplemented
        return _default_comparison.equal(self, other)

    def __hash__(self: "MinimalDocument") -> int:
        return hash(self.document_element)

    def __repr__(self: "MinimalDocument") -> str:
        return f"MinimalDocument({self.uri!r}, {list(self.children)!r})"

    @property
    def document_element(self: "MinimalDocument") -> MinimalElement:
        """The document element."""
        return next(ch for ch in self.children
                    if isinstance(ch, MinimalElement))

    def with_uri(self: "MinimalDocument",
                 uri: Optional[URI]) -> "MinimalDocument":
        return MinimalDocument(uri, self.children)

    def to_minimal(self: "MinimalDocument") -> "MinimalDocument":
        return self


MinimalNode = Union[MinimalElement, Text, Comment, ProcessingInstruction]


class NodeComparison:
    """Structural comparison of minimal nodes.

    Documents are equal if their document elements are equal. Elements are
    equal if they have equal names and attribute sets, and pairwise equal
    children. Document URIs, name prefixes and (by default) the CDATA flag
    of text nodes are ignored.
    """

    def __init__(self: "NodeComparison", cdata_sensitive: bool = False):
        """Initialize the class instance.

        Args:
            cdata_sensitive: Flag requiring equal text nodes to agree on
                the CDATA flag, too.
        """
        self.cdata_sensitive = cdata_sensitive

    def __call__(self: "NodeComparison", left, right) -> bool:
        return self.equal(left, right)

    def equal(self: "NodeComparison", left, right) -> bool:
        """Return ``True`` if `left` and `right` are structurally equal."""
        if isinstance(left, MinimalDocument):
            return (isinstance(right, MinimalDocument) and
                    self.equal(left.document_element,
                               right.document_element))
        if isinstance(left, MinimalElement):
            if not isinstance(right, MinimalElement):
                return False
            if left is right:
                return True
            return (left.name == right.name and
                    left._attributes == right._attributes and
                    len(left.children) == len(right.children) and
                    all(self.equal(a, b) for a, b in
                        zip(left.children, right.children)))
        if isinstance(left, Text):
            return (isinstance(right, Text) and left.value == right.value and
                    (not self.cdata_sensitive or
                     left.is_cdata == right.is_cdata))
        return left == right


_default_comparison = NodeComparison()


def to_minimal(node):
    """Return the minimal projection of a document or node.

    Scopes are dropped, everything else is kept. Leaf nodes and minimal
    nodes are returned unchanged.

    Args:
        node: Full or minimal document, element or leaf node.
    """
    if isinstance(node, Element):
        return MinimalElement(node.name, node.attributes,
                              [to_minimal(ch) for ch in node.children])
    if isinstance(node, Document):
        return MinimalDocument(node.uri,
                               [to_minimal(ch) for ch in node.children])
    return node


def xml_equal(left, right, cdata_sensitive: bool = False) -> bool:
    """Return ``True`` if two documents or elements (full or minimal) are
    XML-equal.

    Args:
        left: First document or element.
        right: Second document or element.
        cdata_sensitive: Flag requiring equal text nodes to agree on the
            CDATA flag.
    """
    return NodeComparison(cdata_sensitive).equal(to_minimal(left),
                                                 to_minimal(right))
