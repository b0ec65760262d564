import re
import pytest
from ixdom import query as q
from ixdom.ancestry import ElementTree
from ixdom.minimal import to_minimal
from ixdom.name import Name
from ixdom.navpath import NavigationPath
from ixdom.nodes import Element, Text
from ixdom.parsing import DocumentParser
from ixdom.scope import EMPTY_SCOPE

XBRLI = "http://www.xbrl.org/2003/instance"
XBRLDI = "http://xbrl.org/2006/xbrldi"
GAAP = "http://xasb.org/gaap"

instance_xml = """<?xml version="1.0" encoding="UTF-8"?>
<xbrl xmlns="http://www.xbrl.org/2003/instance"
      xmlns:xbrldi="http://xbrl.org/2006/xbrldi"
      xmlns:gaap="http://xasb.org/gaap">
  <context id="I-2007">
    <entity>
      <identifier scheme="http://www.sec.gov/CIK">1234567890</identifier>
    </entity>
    <scenario>
      <xbrldi:explicitMember dimension="gaap:ProductAxis">
        gaap:AllProductsDomain
      </xbrldi:explicitMember>
      <xbrldi:explicitMember dimension="gaap:RegionAxis">gaap:EuropeDomain</xbrldi:explicitMember>
      <gaap:dimensions>
        <xbrldi:explicitMember dimension="gaap:EntityAxis">gaap:ABCCompanyDomain</xbrldi:explicitMember>
      </gaap:dimensions>
    </scenario>
  </context>
  <gaap:Revenue contextRef="I-2007" decimals="0">1000</gaap:Revenue>
</xbrl>
"""

nested_xml = """<r>
  <x id="1"><a/><x id="2"><x id="3"/></x></x>
  <b><x id="4"/></b>
</r>
"""


@pytest.fixture
def instance():
    return DocumentParser(remove_inter_element_whitespace=True).parse_string(
        instance_xml).document_element


@pytest.fixture
def nested():
    return DocumentParser().parse_string(nested_xml).document_element


def ids(elems):
    return [e.attribute("id") for e in elems]


def test_axes(nested):
    assert [e.name.local for e in nested.child_elements()] == ["x", "b"]
    assert ids(nested.descendant_elements(q.has_name("x"))) == [
        "1", "2", "3", "4"]
    assert [e.name.local for e in nested.elements()] == [
        "r", "x", "a", "x", "x", "b", "x"]
    assert len(list(nested.descendant_elements_or_self())) == 7
    assert len(list(nested.descendant_elements())) == 6
    assert list(nested.self_elements(q.has_name("x"))) == []
    assert list(nested.self_elements()) == [nested]


def test_topmost(nested):
    assert ids(nested.topmost_descendant_elements_or_self(
        q.has_name("x"))) == ["1", "4"]
    assert ids(nested.topmost_elements(q.has_name("x"))) == ["1", "4"]
    x1 = next(nested.child_elements())
    assert ids(x1.topmost_descendant_elements_or_self(
        q.has_name("x"))) == ["1"]
    assert ids(x1.topmost_descendant_elements(q.has_name("x"))) == ["2"]
    visited = []

    def pred(e):
        visited.append(e.name.local)
        return e.name.local == "x"
    list(nested.topmost_descendant_elements(pred))
    assert visited == ["x", "b", "x"]


def test_steps(nested):
    step = q.child_elements(q.has_name("b")).then(
        q.child_elements(q.has_local_name("x")))
    assert ids(step(nested)) == ["4"]
    assert ids(nested.select(q.descendant_elements().where(
        q.has_attribute_value("id", lambda v: int(v) > 2)))) == ["3", "4"]
    assert ids(q.topmost_descendant_elements(q.has_name("x")).then(
        q.descendant_elements_or_self(q.has_name("x")))(nested)) == [
            "1", "2", "3", "4"]
    assert repr(q.child_elements()) == "ElementStep(child)"
    assert q.self_elements().axis.name == "self"
    with pytest.raises(TypeError):
        list(q.parent_element()(nested))


def test_predicates(instance):
    assert q.has_name(XBRLI, "xbrl")(instance)
    assert q.has_name(Name(XBRLI, "xbrl", "xbrli"))(instance)
    assert q.has_name(lambda n: n.local.startswith("xb"))(instance)
    assert not q.has_name("xbrl")(instance)
    assert q.has_namespace(XBRLI)(instance)
    ctx = next(instance.child_elements())
    assert q.has_attribute_with_name("id")(ctx)
    assert q.has_attribute_value("id", "I-2007")(ctx)
    assert q.has_attribute(lambda n, v: v.startswith("I-"))(ctx)
    assert not q.has_attribute_value("id", "D-2007")(ctx)
    rev = list(instance.child_elements(q.has_namespace(GAAP)))
    assert len(rev) == 1
    assert q.has_only_text("1000")(rev[0])
    assert q.has_only_text(str.isdigit)(rev[0])
    assert not q.has_only_text("1000")(ctx)
    members = list(instance.descendant_elements(
        q.has_name(XBRLDI, "explicitMember")))
    assert q.has_only_stripped_text("gaap:AllProductsDomain")(members[0])
    assert not q.has_only_text("gaap:AllProductsDomain")(members[0])


def test_truthy_predicates():
    elem = Element(Name("", "a"), {"id": "abc"}, EMPTY_SCOPE, [Text("abc")])
    assert q.has_attribute_value("id", lambda v: re.match("a", v))(elem)
    assert q.has_only_text(lambda t: re.match("a", t))(elem)
    assert not q.has_attribute_value("id", lambda v: re.match("b", v))(elem)
    assert not q.has_only_text(lambda t: re.match("b", t))(elem)
    assert q.has_name(lambda n: re.match("a", n.local))(elem)


def test_deep_document():
    root = DocumentParser().parse_string("<a>" * 1200 + "</a>" * 1200
                                         ).document_element
    assert len(list(root.descendant_elements())) == 1199
    assert len(list(root.elements(q.has_name("a")))) == 1200
    assert list(root.topmost_descendant_elements(
        lambda e: e.child_element_count == 0))[0].text == ""


def test_dimensional_query(instance):
    tree = ElementTree.build(instance)
    dims = tree.element_at(NavigationPath([0, 1, 2]))
    assert dims.name == Name(GAAP, "dimensions")
    member = next(dims.child_elements(q.has_name(XBRLDI, "explicitMember")))
    scope = member.namespace_scope()
    assert scope.resolve_syntactic_qname(
        member.attribute("dimension")) == Name(GAAP, "EntityAxis")
    assert scope.resolve_syntactic_qname(member.text) == Name(
        GAAP, "ABCCompanyDomain")
    step = q.descendant_elements(q.has_name(XBRLDI, "explicitMember")).where(
        q.has_attribute_value("dimension", "gaap:EntityAxis"))
    found = list(instance.select(step))
    assert len(found) == 1
    assert found[0] == member.underlying_element
    assert [m.text for m in to_minimal(instance).select(step)] == [
        "gaap:ABCCompanyDomain"]
