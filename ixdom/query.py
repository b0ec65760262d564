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

"""Element query API, element steps and element predicates.

The query API is shared by full, minimal and ancestry-aware elements, so
that steps and predicates work with any of them.

This module implements the following classes:

* ElementApi: Abstract class defining the query API of all element kinds.
* AncestryAwareElementApi: Abstract class adding the ancestry axes.
* ElementStep: Function from an element to an iterator of elements.

Step factories: :func:`self_elements`, :func:`child_elements`,
:func:`descendant_elements_or_self`, :func:`descendant_elements`,
:func:`topmost_descendant_elements_or_self`,
:func:`topmost_descendant_elements`, :func:`parent_element`,
:func:`ancestor_elements_or_self` and :func:`ancestor_elements`.

Predicate factories: :func:`has_name`, :func:`has_local_name`,
:func:`has_namespace`, :func:`has_attribute`,
:func:`has_attribute_with_name`, :func:`has_attribute_value`,
:func:`has_only_text` and :func:`has_only_stripped_text`.
"""

from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union
from .enumerations import Axis
from .exceptions import LookupMissing
from .leaves import Node, Text
from .name import Name
from .scope import NamespaceScope
from .typealiases import LocalName, NamespaceURI, TextPredicate

__all__ = ["ElementApi", "AncestryAwareElementApi", "ElementStep",
           "ElementPredicate", "self_elements", "child_elements",
           "descendant_elements_or_self", "descendant_elements",
           "topmost_descendant_elements_or_self",
           "topmost_descendant_elements", "parent_element",
           "ancestor_elements_or_self", "ancestor_elements", "has_name",
           "has_local_name", "has_namespace", "has_attribute",
           "has_attribute_with_name", "has_attribute_value",
           "has_only_text", "has_only_stripped_text"]

ElementPredicate = Callable[[Any], bool]
"""Predicate on elements of any kind."""

AttributeName = Union[Name, LocalName]
"""Attribute name, a plain string stands for a name without namespace."""


def as_name(name: AttributeName) -> Name:
    """Return `name` as a :class:`Name` instance."""
    return name if isinstance(name, Name) else Name("", name)


class ElementApi(Node):
    """Abstract class for elements of all kinds.

    Subclasses provide :attr:`name`, :attr:`attributes`, :attr:`children`
    and :meth:`_child_elements`.
    """

    __slots__ = ()

    name: Name

    @property
    def attributes(self) -> Mapping[Name, str]:
        """Read-only mapping of attribute names to values."""
        raise NotImplementedError

    @property
    def children(self) -> tuple[Node, ...]:
        """Child nodes in document order."""
        raise NotImplementedError

    def _child_elements(self) -> Iterator["ElementApi"]:
        raise NotImplementedError

    def is_element(self) -> bool:
        return True

    @property
    def text(self) -> str:
        """Concatenated values of the receiver's text children."""
        return "".join([c.value for c in self.children
                        if isinstance(c, Text)])

    def attribute_option(self, name: AttributeName) -> Optional[str]:
        """Return value of attribute `name`, or ``None`` if absent."""
        return self.attributes.get(as_name(name))

    def attribute(self, name: AttributeName) -> str:
        """Return value of attribute `name`.

        Raises:
            LookupMissing: If the receiver has no such attribute.
        """
        res = self.attribute_option(name)
        if res is None:
            raise LookupMissing(f"attribute {as_name(name)}", self.name)
        return res

    def namespace_scope_option(self) -> Optional[NamespaceScope]:
        """Return the receiver's namespace scope, or ``None`` if the element
        kind doesn't carry one."""
        return None

    def namespace_scope(self) -> NamespaceScope:
        """Return the receiver's namespace scope.

        Raises:
            LookupMissing: If the element kind doesn't carry a scope.
        """
        res = self.namespace_scope_option()
        if res is None:
            raise LookupMissing("namespace scope", self.name)
        return res

    def select(self, step: "ElementStep") -> Iterator["ElementApi"]:
        """Apply `step` to the receiver."""
        return step(self)

    # Axes

    def self_elements(
            self, predicate: ElementPredicate = None) -> Iterator["ElementApi"]:
        """Return an iterator over the receiver, if it satisfies
        `predicate`."""
        return _filter(predicate, iter((self,)))

    def child_elements(
            self, predicate: ElementPredicate = None) -> Iterator["ElementApi"]:
        """Return an iterator over the receiver's child elements."""
        return _filter(predicate, self._child_elements())

    def descendant_elements_or_self(
            self, predicate: ElementPredicate = None) -> Iterator["ElementApi"]:
        """Return an iterator over the receiver and its descendant elements
        in document order."""
        return _filter(predicate, self._descendants_or_self())

    elements = descendant_elements_or_self

    def descendant_elements(
            self, predicate: ElementPredicate = None) -> Iterator["ElementApi"]:
        """Return an iterator over the receiver's descendant elements in
        document order."""
        return _filter(predicate, self._descendants())

    def topmost_descendant_elements_or_self(
            self, predicate: ElementPredicate) -> Iterator["ElementApi"]:
        """Return an iterator over the topmost elements satisfying
        `predicate` among the receiver and its descendants.

        Elements below a matching element are never visited.
        """
        if predicate(self):
            yield self
        else:
            yield from self.topmost_descendant_elements(predicate)

    topmost_elements = topmost_descendant_elements_or_self

    def topmost_descendant_elements(
            self, predicate: ElementPredicate) -> Iterator["ElementApi"]:
        """Return an iterator over the topmost descendant elements
        satisfying `predicate`."""
        stack = [self._child_elements()]
        while stack:
            elem = next(stack[-1], None)
            if elem is None:
                stack.pop()
            elif predicate(elem):
                yield elem
            else:
                stack.append(elem._child_elements())

    def _descendants_or_self(self) -> Iterator["ElementApi"]:
        yield self
        yield from self._descendants()

    def _descendants(self) -> Iterator["ElementApi"]:
        # explicit stack, deep documents must not hit the recursion limit
        stack = [self._child_elements()]
        while stack:
            elem = next(stack[-1], None)
            if elem is None:
                stack.pop()
            else:
                yield elem
                stack.append(elem._child_elements())


class AncestryAwareElementApi(ElementApi):
    """Abstract class for elements that know their ancestors.

    Subclasses provide :meth:`parent_element_option`.
    """

    __slots__ = ()

    def parent_element_option(self) -> Optional["AncestryAwareElementApi"]:
        """Return the receiver's parent element, or ``None`` for the root."""
        raise NotImplementedError

    def parent_element(self) -> "AncestryAwareElementApi":
        """Return the receiver's parent element.

        Raises:
            LookupMissing: If the receiver is the root element.
        """
        res = self.parent_element_option()
        if res is None:
            raise LookupMissing("parent element", self.name)
        return res

    def parent_elements(
            self, predicate: ElementPredicate = None
            ) -> Iterator["AncestryAwareElementApi"]:
        """Return an iterator over zero or one parent element."""
        par = self.parent_element_option()
        return _filter(predicate, iter(() if par is None else (par,)))

    def ancestor_elements_or_self(
            self, predicate: ElementPredicate = None
            ) -> Iterator["AncestryAwareElementApi"]:
        """Return an iterator over the receiver and its ancestors, walking
        upwards."""
        return _filter(predicate, self._ancestors_or_self())

    def ancestor_elements(
            self, predicate: ElementPredicate = None
            ) -> Iterator["AncestryAwareElementApi"]:
        """Return an iterator over the receiver's ancestors, walking
        upwards."""
        res = self._ancestors_or_self()
        next(res)
        return _filter(predicate, res)

    def _ancestors_or_self(self) -> Iterator["AncestryAwareElementApi"]:
        elem = self
        while elem is not None:
            yield elem
            elem = elem.parent_element_option()


def _filter(predicate: Optional[ElementPredicate],
            elems: Iterator[ElementApi]) -> Iterator[ElementApi]:
    return elems if predicate is None else filter(predicate, elems)


class ElementStep:
    """Element step – a function from an element to a lazy iterator of
    elements."""

    def __init__(self: "ElementStep",
                 func: Callable[[ElementApi], Iterable[ElementApi]],
                 axis: Axis = None):
        """Initialize the class instance.

        Args:
            func: Function returning the elements selected from an element.
            axis: Axis of the step, ``None`` for composite steps.
        """
        self.func = func
        self.axis = axis

    def __call__(self: "ElementStep", elem: ElementApi) -> Iterator[ElementApi]:
        return iter(self.func(elem))

    def __repr__(self: "ElementStep") -> str:
        ax = self.axis.name if self.axis else "composite"
        return f"ElementStep({ax})"

    def then(self: "ElementStep", other: "ElementStep") -> "ElementStep":
        """Return the step applying `other` to every element produced by
        the receiver."""
        def composed(elem):
            for x in self(elem):
                yield from other(x)
        return ElementStep(composed)

    def where(self: "ElementStep",
              predicate: ElementPredicate) -> "ElementStep":
        """Return the receiver restricted to elements satisfying
        `predicate`."""
        return ElementStep(lambda elem: filter(predicate, self(elem)),
                           self.axis)


def self_elements(predicate: ElementPredicate = None) -> ElementStep:
    """Step selecting the element itself."""
    return ElementStep(lambda e: e.self_elements(predicate), Axis.self)


def child_elements(predicate: ElementPredicate = None) -> ElementStep:
    """Step selecting child elements."""
    return ElementStep(lambda e: e.child_elements(predicate), Axis.child)


def descendant_elements_or_self(
        predicate: ElementPredicate = None) -> ElementStep:
    """Step selecting the element and its descendants."""
    return ElementStep(lambda e: e.descendant_elements_or_self(predicate),
                       Axis.descendant_or_self)


def descendant_elements(predicate: ElementPredicate = None) -> ElementStep:
    """Step selecting descendant elements."""
    return ElementStep(lambda e: e.descendant_elements(predicate),
                       Axis.descendant)


def topmost_descendant_elements_or_self(
        predicate: ElementPredicate) -> ElementStep:
    """Step selecting topmost matching elements, including the element
    itself."""
    return ElementStep(
        lambda e: e.topmost_descendant_elements_or_self(predicate),
        Axis.topmost_descendant_or_self)


def topmost_descendant_elements(predicate: ElementPredicate) -> ElementStep:
    """Step selecting topmost matching descendant elements."""
    return ElementStep(lambda e: e.topmost_descendant_elements(predicate),
                       Axis.topmost_descendant)


def _ancestry_aware(elem: ElementApi) -> AncestryAwareElementApi:
    if not isinstance(elem, AncestryAwareElementApi):
        raise TypeError(
            f"{type(elem).__name__} doesn't support ancestry axes")
    return elem


def parent_element(predicate: ElementPredicate = None) -> ElementStep:
    """Step selecting the parent element (ancestry-aware elements only)."""
    return ElementStep(
        lambda e: _ancestry_aware(e).parent_elements(predicate), Axis.parent)


def ancestor_elements_or_self(
        predicate: ElementPredicate = None) -> ElementStep:
    """Step selecting the element and its ancestors (ancestry-aware
    elements only)."""
    return ElementStep(
        lambda e: _ancestry_aware(e).ancestor_elements_or_self(predicate),
        Axis.ancestor_or_self)


def ancestor_elements(predicate: ElementPredicate = None) -> ElementStep:
    """Step selecting ancestor elements (ancestry-aware elements only)."""
    return ElementStep(
        lambda e: _ancestry_aware(e).ancestor_elements(predicate),
        Axis.ancestor)


# Element predicates

def has_name(name: Union[Name, NamespaceURI, LocalName, Callable[[Name], bool]],
             local: LocalName = None) -> ElementPredicate:
    """Return predicate testing the element name.

    Args:
        name: :class:`Name` instance, namespace URI (if `local` is given),
            local name without namespace, or a predicate on names.
        local: Local name.
    """
    if local is not None:
        return lambda e: e.name.matches(name, local)
    if isinstance(name, Name):
        return lambda e: e.name == name
    if callable(name):
        return lambda e: name(e.name)
    return lambda e: e.name.matches("", name)


def has_local_name(local: LocalName) -> ElementPredicate:
    """Return predicate testing the local part of the element name."""
    return lambda e: e.name.local == local


def has_namespace(namespace: NamespaceURI) -> ElementPredicate:
    """Return predicate testing the namespace of the element name."""
    return lambda e: e.name.namespace == (namespace or "")


def has_attribute(
        predicate: Callable[[Name, str], bool]) -> ElementPredicate:
    """Return predicate testing whether some attribute (name and value)
    satisfies `predicate`."""
    return lambda e: any(predicate(n, v) for n, v in e.attributes.items())


def has_attribute_with_name(name: AttributeName) -> ElementPredicate:
    """Return predicate testing the presence of an attribute."""
    aname = as_name(name)
    return lambda e: aname in e.attributes


def has_attribute_value(name: AttributeName,
                        value: Union[str, TextPredicate]) -> ElementPredicate:
    """Return predicate testing the value of an attribute.

    Args:
        name: Attribute name.
        value: Expected value, or predicate on the value.
    """
    aname = as_name(name)
    test = value if callable(value) else value.__eq__

    def pred(e):
        val = e.attributes.get(aname)
        return val is not None and bool(test(val))
    return pred


def has_only_text(value: Union[str, TextPredicate]) -> ElementPredicate:
    """Return predicate testing that all children are text nodes, and their
    concatenated value satisfies `value`.

    Args:
        value: Expected text, or predicate on the text.
    """
    test = value if callable(value) else value.__eq__

    def pred(e):
        return (all(isinstance(c, Text) for c in e.children) and
                bool(test(e.text)))
    return pred


def has_only_stripped_text(value: str) -> ElementPredicate:
    """Like :func:`has_only_text`, but compare the text with surrounding
    whitespace removed."""
    return has_only_text(lambda s: s.strip() == value)
