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

"""Namespace-related constants."""

from elementpath.namespaces import XML_NAMESPACE, XMLNS_NAMESPACE

XML_PREFIX = "xml"
"""Reserved prefix bound to :data:`XML_NAMESPACE`."""

XMLNS_ATTRIBUTE = "xmlns"
"""Reserved name of namespace declaration attributes."""

__all__ = ["XML_NAMESPACE", "XMLNS_NAMESPACE", "XML_PREFIX",
           "XMLNS_ATTRIBUTE"]
