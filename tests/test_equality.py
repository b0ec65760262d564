import pytest
from ixdom.ancestry import ElementTree
from ixdom.exceptions import DocumentShape, NamespaceWellFormedness
from ixdom.minimal import (MinimalDocument, MinimalElement, NodeComparison,
                           to_minimal, xml_equal)
from ixdom.name import Name
from ixdom.nodes import Comment, Element, NodeBuilder, Text
from ixdom.parsing import DocumentParser
from ixdom.scope import EMPTY_SCOPE, NamespaceScope

ATOM = "http://www.w3.org/2005/Atom"
XHTML = "http://www.w3.org/1999/xhtml"
EX = "http://example.com/ns"

default_ns_xml = """<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example</title>
  <entry xmlns:ex="http://example.com/ns">
    <ex:rating ex:scale="10">5</ex:rating>
  </entry>
</feed>"""

prefixed_xml = """<atom:feed xmlns:atom="http://www.w3.org/2005/Atom"
    xmlns:e="http://example.com/ns">
  <atom:title>Example</atom:title>
  <atom:entry>
    <e:rating e:scale="10">5</e:rating>
  </atom:entry>
</atom:feed>"""


@pytest.fixture
def parser():
    return DocumentParser()


def test_default_namespace_equivalence(parser):
    doc1 = parser.parse_string(default_ns_xml)
    doc2 = parser.parse_string(prefixed_xml)
    assert doc1 != doc2
    assert to_minimal(doc1) == to_minimal(doc2)
    assert xml_equal(doc1, doc2)
    assert xml_equal(doc1.document_element, doc2.document_element)
    assert doc1.document_element.name.prefix == ""
    assert doc2.document_element.name.prefix == "atom"
    rating1 = list(doc1.document_element.descendant_elements())[-1]
    rating2 = list(doc2.document_element.descendant_elements())[-1]
    assert rating1.name.prefix == "ex"
    assert rating2.name.prefix == "e"
    assert hash(to_minimal(rating1)) == hash(to_minimal(rating2))
    other = parser.parse_string(prefixed_xml.replace(">5<", ">4<"))
    assert not xml_equal(doc1, other)


def test_namespace_undeclaration_normalization():
    nb = NodeBuilder(NamespaceScope({"": ATOM, "ex": EX}))
    xhtml = NamespaceScope({"": XHTML})
    div = Element(Name(XHTML, "div"), {}, xhtml, [
        Element(Name(XHTML, "p"), {}, xhtml, [Text("Hi")])])
    feed = nb.element(Name(ATOM, "feed"), {}, [
        nb.element(Name(ATOM, "content"), {"type": "xhtml"}, [div])])
    fixed = feed.with_parent_attribute_scope(EMPTY_SCOPE)
    assert xml_equal(fixed, feed)
    assert fixed.with_parent_attribute_scope(EMPTY_SCOPE) == fixed
    tree = ElementTree.build(fixed)
    for elem in tree.root_element().descendant_elements():
        parent = elem.parent_element()
        assert parent.scope.without_default().sub_scope_of(elem.scope)
    assert tree.element_at([0, 0]).scope == NamespaceScope(
        {"": XHTML, "ex": EX})


def test_whitespace_idempotence(parser):
    elem = parser.parse_string(default_ns_xml).document_element
    once = elem.remove_inter_element_whitespace()
    assert once != elem
    assert once.remove_inter_element_whitespace() == once
    assert once.to_minimal() == to_minimal(once)
    assert to_minimal(once).remove_inter_element_whitespace() == (
        to_minimal(once))


def test_node_comparison():
    plain = MinimalElement(Name("", "a"), {}, [Text("x")])
    cdata = MinimalElement(Name("", "a"), {}, [Text("x", True)])
    assert plain == cdata
    assert NodeComparison()(plain, cdata)
    assert not NodeComparison(cdata_sensitive=True).equal(plain, cdata)
    assert not xml_equal(plain, cdata, cdata_sensitive=True)
    assert plain != MinimalElement(Name("", "a"), {}, [Text("y")])
    assert plain != MinimalElement(Name("", "a"), {"b": "1"}, [Text("x")])
    assert plain != MinimalElement(Name("", "a"), {}, [Text("x"),
                                                       Comment("c")])
    assert MinimalElement(Name("", "a"), {"b": "1", "c": "2"}) == (
        MinimalElement(Name("", "a"), {"c": "2", "b": "1"}))
    assert not NodeComparison().equal(plain, Text("x"))


def test_minimal_nodes():
    with pytest.raises(NamespaceWellFormedness):
        MinimalElement(Name("", "a"), {Name(EX, "b"): "1"})
    elem = MinimalElement(Name(EX, "a", "ex"), {Name(EX, "b", "ex"): "1"})
    assert elem.attribute(Name(EX, "b")) == "1"
    assert elem.namespace_scope_option() is None
    assert elem.plus_child(Text("t")).text == "t"
    assert elem.with_name(Name("", "z")).name.local == "z"
    doc = MinimalDocument("urn:d", [Comment("c"), elem])
    assert doc.document_element is elem
    assert doc == MinimalDocument(None, [elem])
    assert doc.with_uri(None).uri is None
    with pytest.raises(DocumentShape):
        MinimalDocument(None, [Comment("c")])
    with pytest.raises(TypeError):
        MinimalElement(Name("", "a"), {}, [Element(Name("", "b"))])
