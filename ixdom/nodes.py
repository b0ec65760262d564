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

"""Immutable, namespace-aware XML nodes.

This module implements the following classes:

* Element: Element carrying its in-scope namespaces.
* Document: Document with exactly one document element.
* NodeBuilder: Factory of nodes sharing a namespace scope.

Text, comment and processing instruction nodes are defined in
:mod:`.leaves` and re-exported here.
"""

from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping, Optional, Union
from .enumerations import WellFormednessReason
from .exceptions import DocumentShape, InvalidScope, NamespaceWellFormedness
from .leaves import Comment, Node, ProcessingInstruction, Text
from .name import Name
from .query import AttributeName, ElementApi, as_name
from .scope import EMPTY_SCOPE, NamespaceScope
from .transform import TransformableElement
from .typealiases import URI, PrefixMap, SyntacticQName

__all__ = ["Element", "Document", "NodeBuilder", "Node", "Text", "Comment",
           "ProcessingInstruction", "DocumentChild", "check_names"]


def check_names(scope: NamespaceScope, name: Name,
                attributes: Iterable[Name]) -> None:
    """Check that element and attribute names are allowed by a scope.

    Args:
        scope: Namespace scope of the element.
        name: Element name.
        attributes: Attribute names.

    Raises:
        NamespaceWellFormedness: If some name is not allowed.
    """
    if not scope.allows_element_name(name):
        raise NamespaceWellFormedness(
            WellFormednessReason.undefined_prefix, name,
            f"not allowed by {scope!r}")
    for an in attributes:
        if an.namespace and not an.prefix:
            raise NamespaceWellFormedness(
                WellFormednessReason.attribute_default_namespace_misuse,
                an, "unprefixed attribute in a namespace")
        if not scope.allows_attribute_name(an):
            raise NamespaceWellFormedness(
                WellFormednessReason.undefined_prefix, an,
                f"attribute not allowed by {scope!r}")


class Element(ElementApi, TransformableElement):
    """Element node with name, attributes, namespace scope and children.

    Instances are immutable. Construction checks that the name and all
    attribute names are allowed by the scope.
    """

    __slots__ = ("name", "_attributes", "scope", "_children", "_hash")

    def __init__(self: "Element", name: Name,
                 attributes: Mapping[AttributeName, str] = None,
                 scope: NamespaceScope = EMPTY_SCOPE,
                 children: Iterable[Node] = ()):
        """Initialize the class instance.

        Args:
            name: Element name.
            attributes: Attribute values keyed by names (plain strings stand
                for names without namespace), in document order.
            scope: Namespaces in scope at the element.
            children: Child nodes.

        Raises:
            NamespaceWellFormedness: If the element name or an attribute name
                is not allowed by `scope`.
            TypeError: If a child is not an element, text, comment or
                processing instruction.
        """
        attrs = {as_name(n): v for n, v in (attributes or {}).items()}
        check_names(scope, name, attrs)
        children = tuple(children)
        for ch in children:
            if not isinstance(ch, (Element, Text, Comment,
                                   ProcessingInstruction)):
                raise TypeError(f"invalid child node {ch!r}")
        self.name = name
        self._attributes = attrs
        self.scope = scope
        self._children = children
        self._hash = None

    def __eq__(self: "Element", other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return (self is other or
                self.name == other.name and
                self._attributes == other._attributes and
                self.scope == other.scope and
                self._children == other._children)

    def __hash__(self: "Element") -> int:
        if self._hash is None:
            self._hash = hash((self.name, frozenset(self._attributes.items()),
                               self.scope, self._children))
        return self._hash

    def __repr__(self: "Element") -> str:
        return (f"Element({self.name!r}, {self._attributes!r}, "
                f"{self.scope!r}, {list(self._children)!r})")

    @property
    def attributes(self: "Element") -> Mapping[Name, str]:
        return MappingProxyType(self._attributes)

    @property
    def children(self: "Element") -> tuple[Node, ...]:
        return self._children

    @property
    def child_element_count(self: "Element") -> int:
        """Number of child elements."""
        return sum(1 for ch in self._children if isinstance(ch, Element))

    def _child_elements(self: "Element") -> Iterator["Element"]:
        for ch in self._children:
            if isinstance(ch, Element):
                yield ch

    def namespace_scope_option(self: "Element") -> NamespaceScope:
        return self.scope

    def to_minimal(self: "Element") -> "MinimalElement":
        """Return the receiver projected to a minimal element."""
        from .minimal import to_minimal
        return to_minimal(self)

    # Functional updates

    def with_name(self: "Element", name: Name) -> "Element":
        return Element(name, self._attributes, self.scope, self._children)

    def with_attributes(self: "Element",
                        attributes: Mapping[AttributeName, str]) -> "Element":
        return Element(self.name, attributes, self.scope, self._children)

    def with_children(self: "Element",
                      children: Iterable[Node]) -> "Element":
        return Element(self.name, self._attributes, self.scope, children)

    def with_scope(self: "Element", scope: NamespaceScope) -> "Element":
        """Return the receiver with a new namespace scope (children are left
        untouched)."""
        return Element(self.name, self._attributes, scope, self._children)

    def with_parent_attribute_scope(
            self: "Element", parent_scope: NamespaceScope) -> "Element":
        """Return the receiver (recursively) with the prefixed namespaces of
        `parent_scope` added where they are missing.

        The result has no prefixed namespace un-declarations relative to
        `parent_scope`, so it can be serialized as XML 1.0.

        Raises:
            InvalidScope: If the receiver's scope would not be preserved.
        """
        new_scope = parent_scope.without_default().resolve(
            self.scope.in_scope)
        if not self.scope.sub_scope_of(new_scope):
            raise InvalidScope(None, f"{self.scope!r} not kept in "
                               f"{new_scope!r}")
        if self.scope.default_namespace != new_scope.default_namespace:
            raise InvalidScope("", "default namespace changed")
        return self.with_scope(new_scope).transform_child_elements(
            lambda ch: ch.with_parent_attribute_scope(new_scope))

    not_undeclaring_prefixes = with_parent_attribute_scope


DocumentChild = Union[Element, Comment, ProcessingInstruction]
"""Node allowed as a document child."""


class Document:
    """Document with an optional URI and exactly one document element."""

    __slots__ = ("uri", "children")

    def __init__(self: "Document", uri: Optional[URI] = None,
                 children: Iterable[DocumentChild] = ()):
        """Initialize the class instance.

        Args:
            uri: Document URI.
            children: Document element, comments and processing instructions.

        Raises:
            DocumentShape: If there isn't exactly one element child or if
                there is a text child.
        """
        children = tuple(children)
        for ch in children:
            if isinstance(ch, Text):
                raise DocumentShape("text at document level")
            if not isinstance(ch, (Element, Comment, ProcessingInstruction)):
                raise TypeError(f"invalid document child {ch!r}")
        count = sum(1 for ch in children if isinstance(ch, Element))
        if count != 1:
            raise DocumentShape(f"{count} document elements")
        self.uri = uri
        """Document URI, or ``None``."""
        self.children = children
        """Document children."""

    def __eq__(self: "Document", other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.uri == other.uri and self.children == other.children

    def __hash__(self: "Document") -> int:
        return hash((self.uri, self.children))

    def __repr__(self: "Document") -> str:
        return f"Document({self.uri!r}, {list(self.children)!r})"

    @property
    def document_element(self: "Document") -> Element:
        """The document element."""
        return next(ch for ch in self.children if isinstance(ch, Element))

    def with_uri(self: "Document", uri: Optional[URI]) -> "Document":
        """Return the receiver with a new URI."""
        return Document(uri, self.children)

    def with_document_element(self: "Document", elem: Element) -> "Document":
        """Return the receiver with the document element replaced."""
        return Document(self.uri, [elem if isinstance(ch, Element) else ch
                                   for ch in self.children])

    def transform_document_element(
            self: "Document",
            func: Callable[[Element], Element]) -> "Document":
        """Return the receiver with `func` applied to the document element."""
        return self.with_document_element(func(self.document_element))

    def remove_inter_element_whitespace(self: "Document") -> "Document":
        """Return the receiver with inter-element whitespace removed from the
        document element."""
        return self.transform_document_element(
            Element.remove_inter_element_whitespace)

    def to_minimal(self: "Document") -> "MinimalDocument":
        """Return the receiver projected to a minimal document."""
        from .minimal import to_minimal
        return to_minimal(self)


class NodeBuilder:
    """Factory of nodes whose elements share a namespace scope."""

    def __init__(self: "NodeBuilder", scope: NamespaceScope = EMPTY_SCOPE):
        self.scope = scope

    def resolve(self: "NodeBuilder", extra: PrefixMap) -> "NodeBuilder":
        """Return a builder whose scope is extended with `extra`."""
        return NodeBuilder(self.scope.resolve(extra))

    def element(self: "NodeBuilder", name: Name,
                attributes: Mapping[AttributeName, str] = None,
                children: Iterable[Node] = ()) -> Element:
        """Return an element in the receiver's scope."""
        return Element(name, attributes, self.scope, children)

    def text_element(self: "NodeBuilder", name: Name, text: str,
                     attributes: Mapping[AttributeName, str] = None
                     ) -> Element:
        """Return an element with a single text child."""
        return self.element(name, attributes, (Text(text),))

    def element_from_syntactic(self: "NodeBuilder", qname: SyntacticQName,
                          attributes: Mapping[SyntacticQName, str] = None,
                          children: Iterable[Node] = ()) -> Element:
        """Return an element whose name and attribute names are given in
        lexical form and resolved against the receiver's scope.

        Raises:
            UnknownPrefix: If a prefix is not bound.
            InvalidQName: If a name is malformed.
        """
        attrs = {self.scope.resolve_syntactic_attribute_qname(n): v
                 for n, v in (attributes or {}).items()}
        return Element(self.scope.resolve_syntactic_element_qname(qname),
                       attrs, self.scope, children)

    def text_element_from_syntactic(
            self: "NodeBuilder", qname: SyntacticQName, text: str,
            attributes: Mapping[SyntacticQName, str] = None) -> Element:
        """Return an element with lexical name and a single text child."""
        return self.element_from_syntactic(qname, attributes, (Text(text),))

    @staticmethod
    def text(value: str, is_cdata: bool = False) -> Text:
        return Text(value, is_cdata)

    @staticmethod
    def comment(value: str) -> Comment:
        return Comment(value)

    @staticmethod
    def processing_instruction(target: str,
                               data: str = "") -> ProcessingInstruction:
        return ProcessingInstruction(target, data)
