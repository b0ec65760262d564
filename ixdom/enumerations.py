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

"""Enumeration classes."""

from enum import Enum


class WellFormednessReason(Enum):
    """Enumeration of namespace well-formedness violations."""

    undefined_prefix = 1
    """Name prefix (or default namespace) is not bound to the name's
    namespace in the element's scope."""
    attribute_default_namespace_misuse = 2
    """Unprefixed attribute name in a non-empty namespace."""
    prefix_undeclaration = 3
    """Attempt to un-declare a non-empty namespace prefix."""


class BuilderState(Enum):
    """Enumeration of tree builder states."""

    before_document = 1
    """No event received yet."""
    outside_root = 2
    """Inside the document, before the document element."""
    in_element = 3
    """Inside the document element."""
    after_root = 4
    """The document element has been closed."""
    finished = 5
    """The end of the document has been reported."""


class Axis(Enum):
    """Enumeration of implemented element axes."""

    self = 1
    """Just the context element."""
    child = 2
    """Child elements of the context element."""
    descendant_or_self = 3
    """Context element and its descendant elements."""
    descendant = 4
    """Descendant elements of the context element."""
    topmost_descendant_or_self = 5
    """Topmost matching elements among the context element and its
    descendants."""
    topmost_descendant = 6
    """Topmost matching descendant elements."""
    parent = 7
    """Parent element of the context element."""
    ancestor_or_self = 8
    """Context element and its ancestor elements."""
    ancestor = 9
    """Ancestor elements of the context element."""
