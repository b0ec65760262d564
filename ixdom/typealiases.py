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

"""Type aliases for use with type hints [PEP484]_."""

from typing import Callable, Mapping

NamespaceURI = str
"""Namespace name (URI); the empty string means "no namespace"."""

Prefix = str
"""Namespace prefix; the empty string stands for the default namespace."""

LocalName = str
"""Local part of a qualified name."""

SyntacticQName = str
"""Lexical qualified name – [Prefix ":"] LocalName."""

URI = str
"""Absolute or relative URI reference."""

ClarkName = str
"""Name in James Clark notation – ["{" NamespaceURI "}"] LocalName."""

PrefixMap = Mapping[Prefix, NamespaceURI]
"""Mapping of namespace prefixes to namespace URIs."""

TextPredicate = Callable[[str], bool]
"""Predicate on a string value (attribute value or text)."""
