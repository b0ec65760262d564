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

"""Exceptions used by the Ixdom library.

This module defines the following exceptions:

* :exc:`DocumentShape`: A document doesn't have exactly one document element,
  or has text at the document level.
* :exc:`InvalidEventStream`: Parse events arrive in an illegal order, or the
  input cannot be parsed.
* :exc:`InvalidName`: A qualified name violates its invariants.
* :exc:`InvalidQName`: A lexical qualified name is malformed.
* :exc:`InvalidScope`: A namespace scope cannot be built or updated as
  requested.
* :exc:`IxdomException`: Base class for all Ixdom exceptions.
* :exc:`LookupMissing`: A strict accessor found nothing.
* :exc:`NamespaceWellFormedness`: An element or attribute name is not allowed
  by the namespace scope.
* :exc:`UnknownPrefix`: Unknown namespace prefix in a lexical qualified name.
"""

from typing import Optional
from .enumerations import WellFormednessReason
from .typealiases import NamespaceURI, Prefix, SyntacticQName


class IxdomException(Exception):
    """Base class for all Ixdom exceptions."""
    pass


class InvalidName(IxdomException):
    """A qualified name violates its invariants."""

    def __init__(self, namespace: NamespaceURI, local: str, prefix: Prefix,
                 message: str):
        self.namespace = namespace
        self.local = local
        self.prefix = prefix
        self.message = message

    def __str__(self) -> str:
        pref = self.prefix + ":" if self.prefix else ""
        return f"{{{self.namespace}}}{pref}{self.local}: {self.message}"


class InvalidScope(IxdomException):
    """A namespace scope cannot be built or updated as requested."""

    def __init__(self, prefix: Optional[Prefix], message: str):
        self.prefix = prefix
        self.message = message

    def __str__(self) -> str:
        if self.prefix is None:
            return self.message
        return f"prefix '{self.prefix}': {self.message}"


class NamespaceWellFormedness(IxdomException):
    """A name is not allowed by the namespace scope it occurs in."""

    def __init__(self, reason: WellFormednessReason, name: object,
                 detail: str = None):
        self.reason = reason
        self.name = name
        self.detail = detail

    def __str__(self) -> str:
        det = ": " + self.detail if self.detail else ""
        return f"{self.reason.name} for {self.name!r}{det}"


class DocumentShape(IxdomException):
    """A document doesn't have the required shape."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self) -> str:
        return self.message


class LookupMissing(IxdomException):
    """A strict accessor found nothing."""

    def __init__(self, what: str, where: object = None):
        self.what = what
        self.where = where

    def __str__(self) -> str:
        if self.where is None:
            return f"missing {self.what}"
        return f"missing {self.what} in {self.where!r}"


class InvalidEventStream(IxdomException):
    """Parse events are out of order, or the input is not well-formed."""

    def __init__(self, message: str, line: int = None, column: int = None):
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}, column {self.column}: {self.message}"


class InvalidQName(IxdomException):
    """A lexical qualified name is malformed."""

    def __init__(self, qname: SyntacticQName):
        self.qname = qname

    def __str__(self) -> str:
        return f"invalid qualified name '{self.qname}'"


class UnknownPrefix(IxdomException):
    """A namespace prefix has no binding in the scope used for resolution."""

    def __init__(self, prefix: Prefix, qname: SyntacticQName):
        self.prefix = prefix
        self.qname = qname

    def __str__(self) -> str:
        return f"prefix {self.prefix} of '{self.qname}' is not bound"
