import pytest
from ixdom import query as q
from ixdom.ancestry import XML_BASE, AncestryAwareDocument, ElementTree
from ixdom.exceptions import LookupMissing
from ixdom.name import Name
from ixdom.navpath import NavigationPath
from ixdom.nodes import NodeBuilder, Text
from ixdom.parsing import DocumentParser

catalog_xml = """<?xml version="1.0"?>
<catalog xmlns="urn:catalog" xml:base="http://example.com/catalog/">
  <!-- books -->
  <book id="b1" xml:base="books/">
    <title>Alpha</title>
    <chapter xml:base="alpha.html">One</chapter>
  </book>
  <book id="b2">
    <title>Beta</title>
  </book>
</catalog>
"""

CAT = "urn:catalog"


@pytest.fixture
def doc():
    return AncestryAwareDocument.from_document(
        DocumentParser().parse_string(catalog_xml, "file:///data/cat.xml"))


def test_tree(doc):
    tree = doc.tree
    assert len(tree) == 6
    assert list(tree.paths()) == [
        (), (0,), (0, 0), (0, 1), (1,), (1, 0)]
    root = tree.root_element()
    assert root == doc.document_element
    assert root.path.is_empty()
    assert root.child_index is None
    assert tree.element_at([0, 1]).text == "One"
    assert tree.element_at_option([2]) is None
    with pytest.raises(LookupMissing):
        tree.element_at(NavigationPath([0, 5]))
    assert doc.uri == "file:///data/cat.xml"
    assert doc.with_uri(None).document_element.doc_uri is None
    assert doc.children[0] is not doc.underlying_document.children[0]


def test_navigation(doc):
    root = doc.document_element
    book1, book2 = root.child_elements()
    assert book2.path == NavigationPath([1])
    assert book2.child_index == 1
    assert book1.parent_element() == root
    assert root.parent_element_option() is None
    with pytest.raises(LookupMissing):
        root.parent_element()
    chapter = next(root.descendant_elements(q.has_name(CAT, "chapter")))
    assert [e.name.local for e in chapter.ancestor_elements_or_self()] == [
        "chapter", "book", "catalog"]
    assert [e.name.local for e in chapter.ancestor_elements()] == [
        "book", "catalog"]
    assert list(chapter.select(q.ancestor_elements(
        q.has_attribute_value("id", "b1")))) == [book1]
    assert list(chapter.select(q.parent_element())) == [book1]
    assert list(root.parent_elements()) == []
    assert chapter.namespace_scope().default_namespace == CAT
    assert chapter.scope == chapter.underlying_element.scope
    assert isinstance(root.children[0], Text)
    assert chapter != tree_copy(doc).element_at(chapter.path)


def tree_copy(doc):
    return ElementTree.build(doc.underlying_document.document_element)


def test_parent_round_trip(doc):
    for elem in doc.document_element.descendant_elements():
        parent = elem.parent_element()
        assert elem in parent.children
        assert elem in list(parent.child_elements())
        assert elem.path == parent.path.append(elem.child_index)
        assert elem.underlying_element in parent.underlying_element.children


def test_base_uri(doc):
    root = doc.document_element
    assert root.base_uri() == "http://example.com/catalog/"
    chapter = root.tree.element_at([0, 1])
    assert chapter.base_uri() == "http://example.com/catalog/books/alpha.html"
    assert root.tree.element_at([1]).base_uri() == (
        "http://example.com/catalog/")


def test_base_uri_resolution():
    nb = NodeBuilder()
    root = nb.element(Name("", "a"), {}, [
        nb.element(Name("", "b"), {XML_BASE: "d/"}, [
            nb.element(Name("", "c"), {XML_BASE: "e"})])])
    inner = ElementTree.build(root, "http://a/b/c").element_at([0, 0])
    assert inner.base_uri() == "http://a/b/d/e"
    assert inner.parent_element().base_uri() == "http://a/b/d/"
    assert inner.tree.root_element().base_uri() == "http://a/b/c"
    no_doc = ElementTree.build(root)
    assert no_doc.element_at([0, 0]).base_uri_option() == "d/e"
    assert no_doc.root_element().base_uri_option() is None
    with pytest.raises(LookupMissing):
        no_doc.root_element().base_uri()


def test_deep_tree():
    root = DocumentParser().parse_string(
        "<a>" * 1200 + "</a>" * 1200).document_element
    tree = ElementTree.build(root)
    assert len(tree) == 1200
    deepest = tree.element_at([0] * 1199)
    assert len(list(deepest.ancestor_elements())) == 1199
    assert deepest.child_index == 0
    assert len(list(tree.root_element().descendant_elements())) == 1199
