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

"""Node base class and leaf nodes shared by all element kinds.

This module implements the following classes:

* Node: Abstract class for nodes.
* Text: Text node, possibly coming from a CDATA section.
* Comment: Comment node.
* ProcessingInstruction: Processing instruction node.
"""

__all__ = ["Node", "Text", "Comment", "ProcessingInstruction"]


class Node:
    """Abstract class for nodes of all element kinds."""

    __slots__ = ()

    def is_element(self: "Node") -> bool:
        """Return ``True`` if the receiver is an element."""
        return False


class Text(Node):
    """Text node.

    Equality takes the CDATA flag into account, see
    :class:`~.minimal.NodeComparison` for a comparison ignoring it.
    """

    __slots__ = ("value", "is_cdata")

    def __init__(self: "Text", value: str, is_cdata: bool = False):
        self.value = value
        """Character data."""
        self.is_cdata = is_cdata
        """Flag indicating that the text comes from a CDATA section."""

    def __eq__(self: "Text", other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self.value == other.value and self.is_cdata == other.is_cdata

    def __hash__(self: "Text") -> int:
        return hash((Text, self.value, self.is_cdata))

    def __repr__(self: "Text") -> str:
        cd = ", is_cdata=True" if self.is_cdata else ""
        return f"Text({self.value!r}{cd})"

    def is_blank(self: "Text") -> bool:
        """Return ``True`` if the receiver contains only whitespace."""
        return not self.value.strip()


class Comment(Node):
    """Comment node."""

    __slots__ = ("value",)

    def __init__(self: "Comment", value: str):
        self.value = value

    def __eq__(self: "Comment", other: object) -> bool:
        if not isinstance(other, Comment):
            return NotImplemented
        return self.value == other.value

    def __hash__(self: "Comment") -> int:
        return hash((Comment, self.value))

    def __repr__(self: "Comment") -> str:
        return f"Comment({self.value!r})"


class ProcessingInstruction(Node):
    """Processing instruction node."""

    __slots__ = ("target", "data")

    def __init__(self: "ProcessingInstruction", target: str, data: str = ""):
        self.target = target
        self.data = data

    def __eq__(self: "ProcessingInstruction", other: object) -> bool:
        if not isinstance(other, ProcessingInstruction):
            return NotImplemented
        return self.target == other.target and self.data == other.data

    def __hash__(self: "ProcessingInstruction") -> int:
        return hash((ProcessingInstruction, self.target, self.data))

    def __repr__(self: "ProcessingInstruction") -> str:
        return f"ProcessingInstruction({self.target!r}, {self.data!r})"
