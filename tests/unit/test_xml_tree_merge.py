"""Recursive merge of free-form XML regions."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from site_skinner.core.tree import XmlNode, merge_nodes


def _node(xml: str) -> XmlNode:
    return XmlNode.from_element(ET.fromstring(xml))


def test_dominant_values_win() -> None:
    dominant = _node("<custom><theme>dark</theme></custom>")
    recessive = _node("<custom><theme>light</theme></custom>")

    merged = merge_nodes(dominant, recessive)

    assert merged.child_value("theme") == "dark"


def test_recessive_fills_gaps_and_extra_children_are_appended() -> None:
    dominant = _node('<custom><theme/><fluido><sideBar>true</sideBar></fluido></custom>')
    recessive = _node(
        '<custom><theme mode="x">light</theme><fluido><topBar>false</topBar></fluido><legacy>1</legacy></custom>'
    )

    merged = merge_nodes(dominant, recessive)

    assert merged.child_value("theme") == "light"
    assert merged.child("theme").attributes == {"mode": "x"}
    fluido = merged.child("fluido")
    assert [child.name for child in fluido.children] == ["sideBar", "topBar"]
    assert [child.name for child in merged.children] == ["theme", "fluido", "legacy"]


def test_same_named_children_pair_up_in_order() -> None:
    dominant = _node("<custom><link>a</link><link/></custom>")
    recessive = _node("<custom><link>x</link><link>y</link><link>z</link></custom>")

    merged = merge_nodes(dominant, recessive)

    assert [child.value for child in merged.children_named("link")] == ["a", "y"]


def test_self_override_keeps_dominant_untouched() -> None:
    dominant = _node('<custom><fluido combine.self="override"><a>1</a></fluido></custom>')
    recessive = _node("<custom><fluido><b>2</b></fluido></custom>")

    merged = merge_nodes(dominant, recessive)

    assert [child.name for child in merged.child("fluido").children] == ["a"]


def test_children_append_concatenates() -> None:
    dominant = _node('<custom combine.children="append"><item>new</item></custom>')
    recessive = _node("<custom><item>old</item></custom>")

    merged = merge_nodes(dominant, recessive)

    assert [child.value for child in merged.children] == ["old", "new"]


def test_inputs_are_not_mutated() -> None:
    dominant = _node("<custom><theme/></custom>")
    recessive = _node("<custom><theme>light</theme><extra/></custom>")

    merge_nodes(dominant, recessive)

    assert dominant.child("theme").value is None
    assert len(dominant.children) == 1


def test_absent_sides() -> None:
    recessive = _node("<custom><a>1</a></custom>")

    assert merge_nodes(None, None) is None
    merged = merge_nodes(None, recessive)
    assert merged == recessive
    assert merged is not recessive
    assert merge_nodes(recessive, None) == recessive


def test_round_trip_through_element() -> None:
    node = _node('<custom><a key="v">text</a><!-- note --><b/></custom>')

    element = node.to_element()

    assert element.tag == "custom"
    assert [child.tag for child in element] == ["a", "b"]
    assert element.find("a").get("key") == "v"
