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

"""Qualified names.

This module implements the following class:

* Name: Qualified name with namespace URI, local part and prefix.
"""

from .constants import XML_NAMESPACE, XML_PREFIX
from .exceptions import InvalidName
from .typealiases import ClarkName, LocalName, NamespaceURI, Prefix, SyntacticQName

__all__ = ["Name"]


class Name:
    """Qualified name of an element or attribute.

    Equality and hashing take only the namespace URI and the local part into
    account, the prefix is a mere lexical hint.
    """

    __slots__ = ("namespace", "local", "prefix")

    def __init__(self: "Name", namespace: NamespaceURI, local: LocalName,
                 prefix: Prefix = ""):
        """Initialize the class instance.

        Args:
            namespace: Namespace URI, empty string for no namespace.
            local: Local part, must be non-empty.
            prefix: Namespace prefix, empty string if unprefixed.

        Raises:
            InvalidName: If the local part is empty, a prefixed name has no
                namespace, or the ``xml`` prefix is used with a foreign
                namespace.
        """
        namespace = namespace or ""
        prefix = prefix or ""
        if not local:
            raise InvalidName(namespace, local, prefix, "empty local name")
        if prefix and not namespace:
            raise InvalidName(namespace, local, prefix,
                              "prefixed name without namespace")
        if prefix == XML_PREFIX and namespace != XML_NAMESPACE:
            raise InvalidName(namespace, local, prefix,
                              "xml prefix bound to a foreign namespace")
        object.__setattr__(self, "namespace", namespace)
        object.__setattr__(self, "local", local)
        object.__setattr__(self, "prefix", prefix)

    @classmethod
    def no_namespace(cls, local: LocalName) -> "Name":
        """Return a name without namespace."""
        return cls("", local)

    @classmethod
    def xml(cls, local: LocalName) -> "Name":
        """Return a name in the XML namespace with the ``xml`` prefix."""
        return cls(XML_NAMESPACE, local, XML_PREFIX)

    def __setattr__(self: "Name", key, value):
        raise AttributeError("Name instances are immutable")

    def __eq__(self: "Name", other: object) -> bool:
        if not isinstance(other, Name):
            return NotImplemented
        return self.namespace == other.namespace and self.local == other.local

    def __hash__(self: "Name") -> int:
        return hash((self.namespace, self.local))

    def __repr__(self: "Name") -> str:
        if self.prefix:
            return f"Name({self.namespace!r}, {self.local!r}, {self.prefix!r})"
        return f"Name({self.namespace!r}, {self.local!r})"

    def __str__(self: "Name") -> str:
        return self.clark

    def __reduce__(self):
        return (self.__class__, (self.namespace, self.local, self.prefix))

    @property
    def clark(self: "Name") -> ClarkName:
        """Receiver in James Clark notation."""
        if self.namespace:
            return f"{{{self.namespace}}}{self.local}"
        return self.local

    @property
    def syntactic(self: "Name") -> SyntacticQName:
        """Lexical form of the receiver (``prefix:local`` or ``local``)."""
        return f"{self.prefix}:{self.local}" if self.prefix else self.local

    def with_prefix(self: "Name", prefix: Prefix) -> "Name":
        """Return a copy of the receiver with a different prefix."""
        return Name(self.namespace, self.local, prefix)

    def matches(self: "Name", namespace: NamespaceURI,
                local: LocalName) -> bool:
        """Return ``True`` if the receiver has the given namespace and
        local part."""
        return self.namespace == (namespace or "") and self.local == local
