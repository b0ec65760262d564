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

"""Functional updates of element trees.

This module implements the following class:

* TransformableElement: Mixin class providing functional updates for full
  and minimal elements.

No method mutates the receiver, results share unchanged subtrees with it.
"""

from typing import Callable, Iterable, Mapping, Optional
from .leaves import Node, Text
from .name import Name
from .navpath import NavigationPath
from .query import AttributeName, as_name

__all__ = ["TransformableElement"]


class TransformableElement:
    """Mixin class for elements supporting functional updates.

    Subclasses provide :attr:`name`, :attr:`attributes`, :attr:`children`,
    :meth:`with_name`, :meth:`with_attributes` and :meth:`with_children`.
    """

    __slots__ = ()

    def with_name(self, name: Name) -> "TransformableElement":
        """Return the receiver with a new name."""
        raise NotImplementedError

    def with_attributes(
            self, attributes: Mapping[Name, str]) -> "TransformableElement":
        """Return the receiver with new attributes."""
        raise NotImplementedError

    def with_children(self,
                      children: Iterable[Node]) -> "TransformableElement":
        """Return the receiver with new children."""
        raise NotImplementedError

    def plus_child(self, child: Node) -> "TransformableElement":
        """Return the receiver with `child` appended."""
        return self.with_children(self.children + (child,))

    def plus_child_option(
            self, child: Optional[Node]) -> "TransformableElement":
        """Return the receiver with `child` appended if it is not ``None``."""
        return self if child is None else self.plus_child(child)

    def plus_children(self,
                      children: Iterable[Node]) -> "TransformableElement":
        """Return the receiver with `children` appended."""
        return self.with_children(self.children + tuple(children))

    def with_text(self, value: str) -> "TransformableElement":
        """Return the receiver with a single text child."""
        return self.with_children((Text(value),))

    def plus_text(self, value: str) -> "TransformableElement":
        """Return the receiver with a text child appended."""
        return self.plus_child(Text(value))

    def plus_attribute(self, name: AttributeName,
                       value: str) -> "TransformableElement":
        """Return the receiver with an attribute added or replaced."""
        attrs = dict(self.attributes)
        attrs[as_name(name)] = value
        return self.with_attributes(attrs)

    def plus_attribute_option(
            self, name: AttributeName,
            value: Optional[str]) -> "TransformableElement":
        """Return the receiver with an attribute added or replaced if `value`
        is not ``None``."""
        return self if value is None else self.plus_attribute(name, value)

    def minus_attribute(self, name: AttributeName) -> "TransformableElement":
        """Return the receiver without attribute `name`."""
        aname = as_name(name)
        if aname not in self.attributes:
            return self
        return self.with_attributes(
            {n: v for n, v in self.attributes.items() if n != aname})

    def transform_self(
            self, func: Callable[["TransformableElement"],
                                 "TransformableElement"]
            ) -> "TransformableElement":
        """Return the result of applying `func` to the receiver."""
        return func(self)

    def transform_child_nodes(
            self, func: Callable[[Node], Iterable[Node]]
            ) -> "TransformableElement":
        """Replace every child node with the nodes returned by `func`."""
        return self.with_children(
            [n for ch in self.children for n in func(ch)])

    def transform_child_elements_to_lists(
            self, func: Callable[["TransformableElement"], Iterable[Node]]
            ) -> "TransformableElement":
        """Replace every child element with the nodes returned by `func`,
        keeping other children."""
        return self.transform_child_nodes(
            lambda ch: func(ch) if ch.is_element() else (ch,))

    def transform_child_elements(
            self, func: Callable[["TransformableElement"],
                                 "TransformableElement"]
            ) -> "TransformableElement":
        """Replace every child element with the result of `func`."""
        return self.with_children(
            [func(ch) if ch.is_element() else ch for ch in self.children])

    def transform_descendants_or_self(
            self, func: Callable[["TransformableElement"],
                                 "TransformableElement"]
            ) -> "TransformableElement":
        """Apply `func` bottom-up to all descendant elements and then to the
        receiver."""
        return func(self.transform_descendants(func))

    def transform_descendants(
            self, func: Callable[["TransformableElement"],
                                 "TransformableElement"]
            ) -> "TransformableElement":
        """Apply `func` bottom-up to all descendant elements."""
        return self.transform_child_elements(
            lambda ch: ch.transform_descendants_or_self(func))

    def update_at_paths(
            self, paths: Iterable[NavigationPath],
            func: Callable[[NavigationPath, "TransformableElement"],
                           "TransformableElement"]
            ) -> "TransformableElement":
        """Rewrite the elements at the given navigation paths.

        Deeper elements are updated first, so `func` sees the already
        updated descendants. Paths that don't address an element are
        ignored.

        Args:
            paths: Navigation paths relative to the receiver.
            func: Function receiving the path and the element found there.
        """
        paths = set(paths)
        by_first = {}
        for p in paths:
            if p:
                by_first.setdefault(p[0], set()).add(NavigationPath(p[1:]))
        res = self
        if by_first:
            idx = 0
            newch = []
            for ch in self.children:
                if ch.is_element():
                    subpaths = by_first.get(idx)
                    if subpaths is not None:
                        ch = ch.update_at_paths(
                            subpaths,
                            lambda p, e, i=idx: func(p.prepend(i), e))
                    idx += 1
                newch.append(ch)
            res = self.with_children(newch)
        if () in paths:
            return func(NavigationPath(), res)
        return res

    def update_at_path(
            self, path: NavigationPath,
            func: Callable[["TransformableElement"], "TransformableElement"]
            ) -> "TransformableElement":
        """Rewrite the element at a single navigation path."""
        return self.update_at_paths([path], lambda p, e: func(e))

    def remove_inter_element_whitespace(self) -> "TransformableElement":
        """Recursively drop whitespace-only text children of elements that
        have element children and no other text.

        ``xml:space`` is not taken into account.
        """
        children = self.children
        if (any(ch.is_element() for ch in children) and
                all(ch.is_blank() for ch in children
                    if isinstance(ch, Text))):
            children = [ch for ch in children if not isinstance(ch, Text)]
        return self.with_children(
            [ch.remove_inter_element_whitespace() if ch.is_element() else ch
             for ch in children])
