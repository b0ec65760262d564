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

"""Namespace scopes.

This module implements the following class:

* NamespaceScope: Immutable mapping of prefixes to namespace URIs in scope
  at an element.
"""

from types import MappingProxyType
from typing import Iterator, Mapping, Optional
from .constants import XML_NAMESPACE, XML_PREFIX
from .exceptions import InvalidQName, InvalidScope, UnknownPrefix
from .name import Name
from .typealiases import NamespaceURI, Prefix, PrefixMap, SyntacticQName

__all__ = ["NamespaceScope", "EMPTY_SCOPE"]


class NamespaceScope:
    """Namespaces in scope at an element.

    The empty prefix represents the default namespace. The receiver is kept
    in canonical form: it never contains the ``xml`` prefix (which is
    implicitly bound) nor an empty namespace URI.
    """

    __slots__ = ("_map", "_hash")

    def __init__(self: "NamespaceScope", in_scope: PrefixMap = None):
        """Initialize the class instance.

        Args:
            in_scope: Prefix-namespace pairs. An ``xml`` entry is accepted only
                if it maps to the XML namespace, and is then dropped.

        Raises:
            InvalidScope: If a namespace URI is empty or the ``xml`` prefix
                is bound to a foreign namespace.
        """
        res = {}
        for pref, ns in (in_scope or {}).items():
            pref = pref or ""
            if pref == XML_PREFIX:
                if ns != XML_NAMESPACE:
                    raise InvalidScope(pref, f"cannot be bound to '{ns}'")
                continue
            if not ns:
                raise InvalidScope(pref, "empty namespace in scope")
            res[pref] = ns
        self._map = res
        self._hash = None

    @classmethod
    def empty(cls) -> "NamespaceScope":
        """Return the empty scope."""
        return EMPTY_SCOPE

    @staticmethod
    def without_prefixed_undeclarations(
            mapping: PrefixMap) -> dict[Prefix, NamespaceURI]:
        """Return a copy of `mapping` without prefix un-declarations.

        Un-declarations of the default namespace are kept, because XML 1.0
        can express them (``xmlns=""``).
        """
        return {(p or ""): (ns or "") for p, ns in mapping.items()
                if not p or ns}

    def __eq__(self: "NamespaceScope", other: object) -> bool:
        if not isinstance(other, NamespaceScope):
            return NotImplemented
        return self._map == other._map

    def __hash__(self: "NamespaceScope") -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._map.items()))
        return self._hash

    def __repr__(self: "NamespaceScope") -> str:
        return f"NamespaceScope({self._map!r})"

    def __contains__(self: "NamespaceScope", prefix: Prefix) -> bool:
        return prefix in self._map

    def __iter__(self: "NamespaceScope") -> Iterator[Prefix]:
        return iter(self._map)

    def __len__(self: "NamespaceScope") -> int:
        return len(self._map)

    def __bool__(self: "NamespaceScope") -> bool:
        return bool(self._map)

    @property
    def in_scope(self: "NamespaceScope") -> Mapping[Prefix, NamespaceURI]:
        """Read-only view of the prefix-namespace bindings."""
        return MappingProxyType(self._map)

    @property
    def default_namespace(self: "NamespaceScope") -> Optional[NamespaceURI]:
        """Default namespace, or ``None`` if there is none."""
        return self._map.get("")

    def namespace_for(self: "NamespaceScope",
                      prefix: Prefix) -> Optional[NamespaceURI]:
        """Return the namespace bound to `prefix`, or ``None``.

        The ``xml`` prefix is always bound.
        """
        if prefix == XML_PREFIX:
            return XML_NAMESPACE
        return self._map.get(prefix or "")

    def prefixes_for(self: "NamespaceScope",
                     namespace: NamespaceURI) -> list[Prefix]:
        """Return all prefixes bound to `namespace`, in insertion order."""
        res = [p for p, ns in self._map.items() if ns == namespace]
        if namespace == XML_NAMESPACE:
            res.append(XML_PREFIX)
        return res

    def resolve(self: "NamespaceScope",
                extra: PrefixMap) -> "NamespaceScope":
        """Return the receiver updated with additional bindings.

        Later bindings win. An empty namespace for the empty prefix removes
        the default namespace.

        Args:
            extra: Bindings to add.

        Raises:
            InvalidScope: If `extra` tries to un-declare a non-empty prefix,
                or binds the ``xml`` prefix to a foreign namespace.
        """
        if not extra:
            return self
        res = dict(self._map)
        for pref, ns in extra.items():
            pref = pref or ""
            ns = ns or ""
            if pref == XML_PREFIX:
                if ns != XML_NAMESPACE:
                    raise InvalidScope(pref, f"cannot be bound to '{ns}'")
            elif not pref:
                if ns:
                    res[""] = ns
                else:
                    res.pop("", None)
            elif not ns:
                raise InvalidScope(pref, "prefix un-declaration")
            else:
                res[pref] = ns
        if res == self._map:
            return self
        return NamespaceScope(res)

    def resolve_prefix(self: "NamespaceScope", prefix: Prefix,
                       namespace: NamespaceURI) -> "NamespaceScope":
        """Return the receiver with one additional binding."""
        return self.resolve({prefix: namespace})

    def without_default(self: "NamespaceScope") -> "NamespaceScope":
        """Return the receiver without the default namespace."""
        if "" not in self._map:
            return self
        return NamespaceScope(
            {p: ns for p, ns in self._map.items() if p})

    def sub_scope_of(self: "NamespaceScope",
                     other: "NamespaceScope") -> bool:
        """Return ``True`` if every binding of the receiver is in `other`."""
        return self._map.items() <= other._map.items()

    def super_scope_of(self: "NamespaceScope",
                       other: "NamespaceScope") -> bool:
        """Return ``True`` if every binding of `other` is in the receiver."""
        return other.sub_scope_of(self)

    def relativize(self: "NamespaceScope",
                   child: "NamespaceScope") -> dict[Prefix, NamespaceURI]:
        """Return the namespace declarations leading from the receiver to
        `child`.

        New and changed bindings map to their namespace, prefixes missing in
        `child` map to the empty string. If `child` has no prefixed
        un-declarations, ``self.resolve(self.relativize(child)) == child``.
        """
        res = {p: ns for p, ns in child._map.items()
               if self._map.get(p) != ns}
        for p in self._map:
            if p not in child._map:
                res[p] = ""
        return res

    def allows_element_name(self: "NamespaceScope", name: Name) -> bool:
        """Return ``True`` if `name` is a consistent element name in the
        receiver."""
        if name.prefix == XML_PREFIX:
            return True
        if not name.prefix:
            return self._map.get("", "") == name.namespace
        return self._map.get(name.prefix) == name.namespace

    def allows_attribute_name(self: "NamespaceScope", name: Name) -> bool:
        """Return ``True`` if `name` is a consistent attribute name in the
        receiver.

        The default namespace doesn't apply to unprefixed attributes.
        """
        if name.prefix == XML_PREFIX:
            return True
        if not name.prefix:
            return not name.namespace
        return self._map.get(name.prefix) == name.namespace

    def resolve_syntactic_element_qname(
            self: "NamespaceScope", qname: SyntacticQName) -> Name:
        """Resolve a lexical element name (or QName in content).

        Unprefixed names are in the default namespace, if any.

        Raises:
            InvalidQName: If `qname` is malformed.
            UnknownPrefix: If the prefix is not bound in the receiver.
        """
        return self._resolve(qname, True)

    resolve_syntactic_qname = resolve_syntactic_element_qname

    def resolve_syntactic_attribute_qname(
            self: "NamespaceScope", qname: SyntacticQName) -> Name:
        """Resolve a lexical attribute name.

        Unprefixed names are never in a namespace.

        Raises:
            InvalidQName: If `qname` is malformed.
            UnknownPrefix: If the prefix is not bound in the receiver.
        """
        return self._resolve(qname, False)

    def _resolve(self: "NamespaceScope", qname: SyntacticQName,
                 use_default: bool) -> Name:
        parts = qname.strip().split(":")
        if len(parts) > 2 or not all(parts):
            raise InvalidQName(qname)
        if len(parts) == 1:
            ns = self._map.get("", "") if use_default else ""
            return Name(ns, parts[0])
        pref, loc = parts
        ns = self.namespace_for(pref)
        if ns is None:
            raise UnknownPrefix(pref, qname)
        return Name(ns, loc, pref)


EMPTY_SCOPE = NamespaceScope()
"""Scope without any namespace binding."""
