import pytest
from ixdom.enumerations import WellFormednessReason
from ixdom.exceptions import (DocumentShape, LookupMissing,
                              NamespaceWellFormedness, UnknownPrefix)
from ixdom.name import Name
from ixdom.navpath import NavigationPath
from ixdom.nodes import (Comment, Document, Element, NodeBuilder,
                         ProcessingInstruction, Text)
from ixdom.scope import EMPTY_SCOPE, NamespaceScope

ATOM = "http://www.w3.org/2005/Atom"
EX = "http://example.com/ns"


@pytest.fixture
def nb():
    return NodeBuilder(NamespaceScope({"": ATOM, "ex": EX}))


@pytest.fixture
def feed(nb):
    return nb.element(Name(ATOM, "feed"), {"version": "1.0"}, [
        Text("\n  "),
        nb.text_element(Name(ATOM, "title"), "Example Feed"),
        Text("\n  "),
        nb.element(Name(ATOM, "entry"), {}, [
            nb.text_element(Name(ATOM, "id"), "urn:uuid:1"),
            nb.text_element(Name(EX, "rating", "ex"), "5",
                            {Name(EX, "scale", "ex"): "10"}),
            Comment("no summary")]),
        Text("\n")])


def test_element(feed):
    assert feed.attribute("version") == "1.0"
    assert feed.attribute_option(Name("", "version")) == "1.0"
    assert feed.attribute_option("lang") is None
    with pytest.raises(LookupMissing):
        feed.attribute("lang")
    with pytest.raises(TypeError):
        feed.attributes[Name("", "lang")] = "en"
    assert feed.child_element_count == 2
    assert feed.namespace_scope().default_namespace == ATOM
    assert feed.text == "\n  \n  \n"
    title = next(feed.child_elements())
    assert title.text == "Example Feed"
    assert title.is_element()
    assert not title.children[0].is_element()
    assert feed == feed.with_children(list(feed.children))
    assert hash(feed) == hash(feed.with_children(list(feed.children)))
    assert feed != feed.plus_attribute("lang", "en")


def test_invariants(nb):
    with pytest.raises(NamespaceWellFormedness) as exc:
        nb.element(Name("", "feed"))
    assert exc.value.reason == WellFormednessReason.undefined_prefix
    with pytest.raises(NamespaceWellFormedness) as exc:
        nb.element(Name(ATOM, "feed"), {Name(EX, "scale"): "10"})
    assert (exc.value.reason ==
            WellFormednessReason.attribute_default_namespace_misuse)
    with pytest.raises(NamespaceWellFormedness):
        nb.element(Name(ATOM, "feed"), {Name("urn:x", "a", "x"): "1"})
    with pytest.raises(TypeError):
        nb.element(Name(ATOM, "feed"), children=["text"])
    assert nb.element(Name(ATOM, "feed"), {Name.xml("lang"): "en"})


def test_node_builder(nb):
    entry = nb.element_from_syntactic(
        "entry", {"ex:scale": "10", "type": "x"},
        [nb.text_element_from_syntactic("ex:rating", "5")])
    assert entry.name == Name(ATOM, "entry")
    assert entry.attribute(Name(EX, "scale")) == "10"
    assert entry.attribute("type") == "x"
    assert next(entry.child_elements()).name.prefix == "ex"
    with pytest.raises(UnknownPrefix):
        nb.element_from_syntactic("h:div")
    sub = nb.resolve({"h": "http://www.w3.org/1999/xhtml"})
    assert sub.element_from_syntactic("h:div").name.local == "div"
    assert nb.text("x", True).is_cdata
    assert nb.comment("c") == Comment("c")
    assert nb.processing_instruction("pi") == ProcessingInstruction("pi", "")


def test_document(feed):
    doc = Document("http://example.com/feed.xml",
                   [ProcessingInstruction("xml-stylesheet", "href='a.xsl'"),
                    feed, Comment("end")])
    assert doc.document_element is feed
    assert doc.with_uri(None).uri is None
    rfeed = feed.remove_inter_element_whitespace()
    assert doc.remove_inter_element_whitespace().document_element == rfeed
    assert doc.with_document_element(rfeed).children[2] == Comment("end")
    with pytest.raises(DocumentShape):
        Document(None, [])
    with pytest.raises(DocumentShape):
        Document(None, [feed, feed])
    with pytest.raises(DocumentShape):
        Document(None, [Text("x"), feed])


def test_functional_updates(feed):
    assert feed.plus_attribute("lang", "en").attribute("lang") == "en"
    assert feed.plus_attribute_option("lang", None) is feed
    assert feed.minus_attribute("version").attributes == {}
    assert feed.minus_attribute("absent") is feed
    assert feed.plus_child_option(None) is feed
    assert feed.with_text("x").children == (Text("x"),)
    assert feed.plus_text("!").children[-1] == Text("!")
    assert len(feed.plus_children([Comment("a"), Comment("b")]).children) == 7
    renamed = feed.transform_self(lambda e: e.with_name(Name(ATOM, "f")))
    assert renamed.name.local == "f"
    assert feed.children[1].name.local == "title"


def test_child_transforms(feed):
    no_comments = feed.transform_descendants_or_self(
        lambda e: e.transform_child_nodes(
            lambda n: [] if isinstance(n, Comment) else [n]))
    entry = list(no_comments.child_elements())[1]
    assert not any(isinstance(n, Comment) for n in entry.children)
    dup = feed.transform_child_elements_to_lists(lambda e: [e, e])
    assert dup.child_element_count == 4
    upper = feed.transform_descendants(
        lambda e: e.with_text(e.text.upper())
        if e.child_element_count == 0 else e)
    assert next(upper.child_elements()).text == "EXAMPLE FEED"
    assert upper.text == feed.text


def test_update_at_paths(feed):
    paths = {NavigationPath([1, 0]), NavigationPath([1]), NavigationPath()}
    seen = []

    def mark(path, elem):
        seen.append(path)
        return elem.plus_attribute("path", str(path))
    res = feed.update_at_paths(paths, mark)
    assert seen == [NavigationPath([1, 0]), NavigationPath([1]),
                    NavigationPath()]
    assert res.attribute("path") == "/"
    entry = list(res.child_elements())[1]
    assert entry.attribute("path") == "/1"
    assert next(entry.child_elements()).attribute("path") == "/1/0"
    assert feed.update_at_path(NavigationPath([7]), lambda e: None) == feed


def test_remove_inter_element_whitespace(feed):
    res = feed.remove_inter_element_whitespace()
    assert all(not isinstance(n, Text) for n in res.children)
    assert next(res.child_elements()).text == "Example Feed"
    assert res.remove_inter_element_whitespace() == res
    mixed = feed.plus_text("tail")
    assert mixed.remove_inter_element_whitespace().children[0] == Text("\n  ")


def test_with_parent_attribute_scope(nb):
    inner = Element(Name(ATOM, "entry"), {}, NamespaceScope({"": ATOM}))
    outer = nb.element(Name(ATOM, "feed"), {}, [inner])
    res = outer.with_parent_attribute_scope(EMPTY_SCOPE)
    assert next(res.child_elements()).scope == nb.scope
    assert res.with_parent_attribute_scope(EMPTY_SCOPE) == res
    assert outer.not_undeclaring_prefixes(EMPTY_SCOPE) == res
    plain = Element(Name("", "x"), {}, EMPTY_SCOPE)
    assert plain.with_parent_attribute_scope(nb.scope).scope == NamespaceScope(
        {"ex": EX})
    own = Element(Name("urn:y", "a", "ex"), {}, NamespaceScope({"ex": "urn:y"}))
    assert own.with_parent_attribute_scope(
        NamespaceScope({"ex": EX, "p": "urn:p"})).scope == NamespaceScope(
            {"ex": "urn:y", "p": "urn:p"})
