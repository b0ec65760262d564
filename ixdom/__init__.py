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

"""Immutable namespace-aware XML object model with a query and
transformation algebra."""

from .ancestry import AncestryAwareDocument, AncestryAwareElement, ElementTree
from .builder import TreeBuilder
from .domconvert import (from_dom_document, from_dom_element, to_dom_document,
                         to_dom_element)
from .emitter import EventEmitter
from .minimal import (MinimalDocument, MinimalElement, NodeComparison,
                      to_minimal, xml_equal)
from .name import Name
from .navpath import NavigationPath
from .nodes import (Comment, Document, Element, NodeBuilder,
                    ProcessingInstruction, Text)
from .parsing import DocumentParser
from .scope import EMPTY_SCOPE, NamespaceScope

__all__ = ["AncestryAwareDocument", "AncestryAwareElement", "Comment",
           "Document", "DocumentParser", "EMPTY_SCOPE", "Element",
           "ElementTree", "EventEmitter", "MinimalDocument", "MinimalElement",
           "Name", "NamespaceScope", "NavigationPath", "NodeBuilder",
           "NodeComparison", "ProcessingInstruction", "Text", "TreeBuilder",
           "from_dom_document", "from_dom_element", "to_dom_document",
           "to_dom_element", "to_minimal", "xml_equal"]
