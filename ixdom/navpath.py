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

"""Navigation paths.

This module implements the following class:

* NavigationPath: Route from an element to one of its descendants-or-self.
"""

from typing import Iterable, Optional

__all__ = ["NavigationPath"]


class NavigationPath(tuple):
    """Sequence of child element indices leading from an element to one of
    its descendants (or to the element itself if empty).

    Only element children are counted, in document order, starting at 0.
    """

    def __new__(cls, entries: Iterable[int] = ()):
        entries = tuple(entries)
        for e in entries:
            if not isinstance(e, int) or isinstance(e, bool) or e < 0:
                raise ValueError(f"invalid navigation path entry {e!r}")
        return super().__new__(cls, entries)

    def __str__(self: "NavigationPath") -> str:
        """Return the receiver as a slash-separated string."""
        return "/" + "/".join([str(e) for e in self])

    def __repr__(self: "NavigationPath") -> str:
        return f"NavigationPath({list(self)!r})"

    def is_empty(self: "NavigationPath") -> bool:
        """Return ``True`` if the receiver addresses the element itself."""
        return len(self) == 0

    def entry(self: "NavigationPath", index: int) -> int:
        """Return entry at `index`."""
        return self[index]

    @property
    def last_entry(self: "NavigationPath") -> int:
        """Last entry of the receiver.

        Raises:
            IndexError: If the receiver is empty.
        """
        return self[-1]

    def append(self: "NavigationPath", index: int) -> "NavigationPath":
        """Return the receiver extended with a child element index."""
        return NavigationPath(tuple(self) + (index,))

    def prepend(self: "NavigationPath", index: int) -> "NavigationPath":
        """Return the receiver with a child element index put in front."""
        return NavigationPath((index,) + tuple(self))

    def without_first_option(self: "NavigationPath") -> Optional["NavigationPath"]:
        """Return the receiver without its first entry, or ``None`` if it is
        empty."""
        return NavigationPath(self[1:]) if self else None

    def without_first(self: "NavigationPath") -> "NavigationPath":
        """Return the receiver without its first entry.

        Raises:
            IndexError: If the receiver is empty.
        """
        if not self:
            raise IndexError("empty navigation path")
        return NavigationPath(self[1:])

    def without_last_option(self: "NavigationPath") -> Optional["NavigationPath"]:
        """Return the receiver without its last entry, or ``None`` if it is
        empty."""
        return NavigationPath(self[:-1]) if self else None

    def without_last(self: "NavigationPath") -> "NavigationPath":
        """Return the receiver without its last entry.

        Raises:
            IndexError: If the receiver is empty.
        """
        if not self:
            raise IndexError("empty navigation path")
        return NavigationPath(self[:-1])
