import pytest
from xml.dom import minidom
from ixdom.domconvert import (from_dom_document, from_dom_element,
                              to_dom_document, to_dom_element)
from ixdom.enumerations import WellFormednessReason
from ixdom.exceptions import NamespaceWellFormedness
from ixdom.minimal import xml_equal
from ixdom.name import Name
from ixdom.nodes import Comment, Element, ProcessingInstruction, Text
from ixdom.parsing import DocumentParser
from ixdom.scope import NamespaceScope

ATOM = "http://www.w3.org/2005/Atom"
EX = "http://example.com/ns"
XMLNS = "http://www.w3.org/2000/xmlns/"

feed_xml = """<?xml version="1.0"?>
<?xml-stylesheet href="feed.xsl" type="text/xsl"?>
<!-- Atom feed -->
<feed xmlns="http://www.w3.org/2005/Atom" xml:lang="en">
  <title type="text">Example &amp; Co</title>
  <entry xmlns:ex="http://example.com/ns" ex:rating="5">
    <id>urn:uuid:1</id>
    <ex:extra><plain xmlns="">no namespace</plain></ex:extra>
  </entry>
</feed>
"""


@pytest.fixture
def doc():
    return DocumentParser().parse_string(feed_xml, "http://example.com/feed")


def test_from_dom(doc):
    res = from_dom_document(minidom.parseString(feed_xml))
    assert res.uri is None
    assert xml_equal(res, doc)
    feed = res.document_element
    assert feed.scope == NamespaceScope({"": ATOM})
    assert feed.attribute(Name.xml("lang")) == "en"
    entry = next(feed.child_elements(lambda e: e.name.local == "entry"))
    assert entry.attribute(Name(EX, "rating")) == "5"
    plain = next(entry.descendant_elements(
        lambda e: e.name.local == "plain"))
    assert plain.name == Name("", "plain")
    assert plain.scope == NamespaceScope({"ex": EX})
    assert isinstance(res.children[0], ProcessingInstruction)
    assert res.children[1] == Comment(" Atom feed ")


def test_to_dom(doc):
    dom = to_dom_document(doc)
    assert dom.documentURI == "http://example.com/feed"
    root = dom.documentElement
    assert root.namespaceURI == ATOM
    assert root.getAttribute("xmlns") == ATOM
    entry = root.getElementsByTagNameNS(ATOM, "entry")[0]
    assert entry.getAttributeNS(EX, "rating") == "5"
    assert entry.getAttributeNS(XMLNS, "ex") == EX
    assert not entry.hasAttribute("xmlns")
    reparsed = DocumentParser().parse_string(dom.toxml())
    assert xml_equal(reparsed, doc)
    assert from_dom_document(dom) == doc


def test_cdata_and_leaves():
    elem = Element(Name(EX, "r", "ex"), {"a": "1"},
                   NamespaceScope({"ex": EX}),
                   [Text("a"), Text("<b>", True), Comment("c"),
                    ProcessingInstruction("pi", "data")])
    dom_doc = minidom.Document()
    dom_elem = to_dom_element(elem, dom_doc)
    assert [n.nodeType for n in dom_elem.childNodes] == [
        dom_elem.TEXT_NODE, dom_elem.CDATA_SECTION_NODE,
        dom_elem.COMMENT_NODE, dom_elem.PROCESSING_INSTRUCTION_NODE]
    assert "<![CDATA[<b>]]>" in dom_elem.toxml()
    assert from_dom_element(dom_elem) == elem
    inner = to_dom_element(elem, dom_doc, NamespaceScope({"ex": EX}))
    assert not inner.hasAttribute("xmlns:ex")


def test_name_derived_scope():
    dom_doc = minidom.Document()
    dom_elem = dom_doc.createElementNS(EX, "ex:r")
    dom_elem.setAttributeNS("urn:a", "a:x", "1")
    dom_elem.appendChild(dom_doc.createElementNS(None, "s"))
    res = from_dom_element(dom_elem)
    assert res.name == Name(EX, "r", "ex")
    assert res.scope == NamespaceScope({"ex": EX, "a": "urn:a"})
    assert res.attribute(Name("urn:a", "x")) == "1"
    assert res.children[0].scope == NamespaceScope({"ex": EX, "a": "urn:a"})


def test_prefix_undeclaration():
    dom_doc = minidom.Document()
    dom_elem = dom_doc.createElementNS(None, "r")
    dom_elem.setAttributeNS(XMLNS, "xmlns:p", "")
    with pytest.raises(NamespaceWellFormedness) as exc:
        from_dom_element(dom_elem)
    assert exc.value.reason == WellFormednessReason.prefix_undeclaration
