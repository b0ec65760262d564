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


"""Conversion between Ixdom trees and :mod:`xml.dom.minidom` trees.

This module implements the following functions:

* from_dom_document: Convert a DOM document to a :class:`~.nodes.Document`.
* from_dom_element: Convert a DOM element to an :class:`~.nodes.Element`.
* to_dom_document: Convert a :class:`~.nodes.Document` to a DOM document.
* to_dom_element: Convert an :class:`~.nodes.Element` to a DOM element.

A DOM keeps namespace declarations as ``xmlns`` attributes, whereas Ixdom
elements carry complete namespace scopes. On the way in, the scope of each
element is its parent's scope extended with the declarations and with the
bindings implied by the element and attribute names. On the way out, each
element gets the declarations that differ from its parent's scope.
"""

from typing import Optional
from xml.dom import minidom
from .constants import XML_PREFIX, XMLNS_ATTRIBUTE, XMLNS_NAMESPACE
from .enumerations import WellFormednessReason
from .exceptions import NamespaceWellFormedness
from .leaves import Comment, Node, ProcessingInstruction, Text
from .name import Name
from .nodes import Document, Element
from .scope import EMPTY_SCOPE, NamespaceScope
from .typealiases import URI, Prefix

__all__ = ["from_dom_document", "from_dom_element", "to_dom_document",
           "to_dom_element"]


def from_dom_document(dom_doc: minidom.Document,
                      uri: Optional[URI] = None) -> Document:
    """Convert a DOM document.

    Document type declarations and document-level text are left out.

    Args:
        dom_doc: DOM document.
        uri: Document URI, the DOM's ``documentURI`` is used if it is
            ``None``.
    """
    children = []
    for n in dom_doc.childNodes:
        if n.nodeType == n.ELEMENT_NODE:
            children.append(from_dom_element(n))
        elif n.nodeType in (n.COMMENT_NODE, n.PROCESSING_INSTRUCTION_NODE):
            children.append(_from_dom_node(n, EMPTY_SCOPE))
    return Document(uri if uri is not None else dom_doc.documentURI,
                    children)


def from_dom_element(dom_elem: minidom.Element,
                     parent_scope: NamespaceScope = EMPTY_SCOPE) -> Element:
    """Convert a DOM element and its descendants.

    Args:
        dom_elem: DOM element, preferably created by a namespace-aware
            parser or by the ``*NS`` DOM methods.
        parent_scope: Scope in effect at the parent of `dom_elem`.

    Raises:
        NamespaceWellFormedness: If a prefixed namespace is un-declared or a
            name is not allowed by the resulting scope.
        TypeError: If the element contains an unsupported node, such as an
            entity reference.
    """
    decls = {}
    attributes = {}
    for i in range(dom_elem.attributes.length):
        attr = dom_elem.attributes.item(i)
        if attr.name == XMLNS_ATTRIBUTE:
            decls[""] = attr.value
        elif attr.name.startswith(XMLNS_ATTRIBUTE + ":"):
            pref = attr.name[len(XMLNS_ATTRIBUTE) + 1:]
            if not attr.value:
                raise NamespaceWellFormedness(
                    WellFormednessReason.prefix_undeclaration,
                    pref, "prefixed namespace un-declaration")
            decls[pref] = attr.value
        else:
            attributes[_dom_name(attr)] = attr.value
    name = _dom_name(dom_elem)
    extra = {}
    if name.prefix != XML_PREFIX:
        extra[name.prefix] = name.namespace
    for an in attributes:
        if an.prefix and an.prefix != XML_PREFIX:
            extra.setdefault(an.prefix, an.namespace)
    scope = parent_scope.resolve(decls).resolve(extra)
    return Element(name, attributes, scope,
                   [_from_dom_node(n, scope) for n in dom_elem.childNodes])


def _dom_name(node) -> Name:
    ns = node.namespaceURI or ""
    local = node.localName or node.nodeName
    return Name(ns, local, (node.prefix or "") if ns else "")


def _from_dom_node(node, scope: NamespaceScope) -> Node:
    if node.nodeType == node.ELEMENT_NODE:
        return from_dom_element(node, scope)
    if node.nodeType == node.TEXT_NODE:
        return Text(node.data)
    if node.nodeType == node.CDATA_SECTION_NODE:
        return Text(node.data, True)
    if node.nodeType == node.COMMENT_NODE:
        return Comment(node.data)
    if node.nodeType == node.PROCESSING_INSTRUCTION_NODE:
        return ProcessingInstruction(node.target, node.data)
    raise TypeError(f"unsupported DOM node {node!r}")


def to_dom_document(doc: Document) -> minidom.Document:
    """Convert a document to a new DOM document.

    The document URI becomes the DOM's ``documentURI``.
    """
    dom_doc = minidom.getDOMImplementation().createDocument(None, None, None)
    dom_doc.documentURI = doc.uri
    for ch in doc.children:
        dom_doc.appendChild(_to_dom_node(ch, dom_doc, EMPTY_SCOPE))
    return dom_doc


def to_dom_element(elem: Element, dom_doc: minidom.Document,
                   parent_scope: NamespaceScope = EMPTY_SCOPE
                   ) -> minidom.Element:
    """Convert an element and its descendants to DOM nodes owned by
    `dom_doc`.

    Every element gets ``xmlns`` attributes for the bindings that differ
    from the scope of its parent. Prefix un-declarations are left out.

    Args:
        elem: Element to convert.
        dom_doc: Owner document of the new nodes.
        parent_scope: Scope assumed to be in effect at the parent of the
            new DOM element.
    """
    res = dom_doc.createElementNS(elem.name.namespace or None,
                                  elem.name.syntactic)
    decls = NamespaceScope.without_prefixed_undeclarations(
        parent_scope.relativize(elem.scope))
    for pref, ns in decls.items():
        res.setAttributeNS(XMLNS_NAMESPACE, _declaration_name(pref), ns)
    for an, val in elem.attributes.items():
        res.setAttributeNS(an.namespace or None, an.syntactic, val)
    for ch in elem.children:
        res.appendChild(_to_dom_node(ch, dom_doc, elem.scope))
    return res


def _declaration_name(prefix: Prefix) -> str:
    return f"{XMLNS_ATTRIBUTE}:{prefix}" if prefix else XMLNS_ATTRIBUTE


def _to_dom_node(node: Node, dom_doc: minidom.Document,
                 scope: NamespaceScope):
    if isinstance(node, Element):
        return to_dom_element(node, dom_doc, scope)
    if isinstance(node, Text):
        if node.is_cdata:
            return dom_doc.createCDATASection(node.value)
        return dom_doc.createTextNode(node.value)
    if isinstance(node, Comment):
        return dom_doc.createComment(node.value)
    if isinstance(node, ProcessingInstruction):
        return dom_doc.createProcessingInstruction(node.target, node.data)
    raise TypeError(f"cannot convert {node!r}")
