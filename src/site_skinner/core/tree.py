"""Generic tagged tree used for free-form XML regions.

Plugin configuration blocks and the open-ended regions of a site descriptor
(banners, head, footer, custom) are kept as :class:`XmlNode` trees so they
survive a read/merge/write cycle without a schema.
"""

from __future__ import annotations

import copy
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field

__all__ = ["XmlNode", "merge_nodes", "local_name"]

SELF_COMBINATION_MODE = "combine.self"
SELF_COMBINATION_OVERRIDE = "override"
CHILDREN_COMBINATION_MODE = "combine.children"
CHILDREN_COMBINATION_APPEND = "append"


def local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


@dataclass
class XmlNode:
    """Element with a name, attributes, text value and ordered children."""

    name: str
    value: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["XmlNode"] = field(default_factory=list)
    tail: str | None = None

    def child(self, name: str) -> XmlNode | None:
        for node in self.children:
            if node.name == name:
                return node
        return None

    def children_named(self, name: str) -> list[XmlNode]:
        return [node for node in self.children if node.name == name]

    def child_value(self, name: str, default: str | None = None) -> str | None:
        node = self.child(name)
        if node is None or node.value is None:
            return default
        return node.value.strip()

    def add_child(self, node: XmlNode) -> XmlNode:
        self.children.append(node)
        return node

    def copy(self) -> XmlNode:
        return copy.deepcopy(self)

    @classmethod
    def from_element(cls, element: ET.Element) -> XmlNode:
        """Build a node tree from an ElementTree element, dropping namespaces."""
        node = cls(
            name=local_name(element.tag),
            value=element.text,
            attributes=dict(element.attrib),
            tail=element.tail,
        )
        for child in element:
            if not isinstance(child.tag, str):
                # comments and processing instructions
                continue
            node.children.append(cls.from_element(child))
        if node.children and node.value is not None and not node.value.strip():
            node.value = None
        return node

    def to_element(self) -> ET.Element:
        element = ET.Element(self.name, dict(self.attributes))
        element.text = self.value
        element.tail = self.tail
        for child in self.children:
            element.append(child.to_element())
        return element


def _is_empty(text: str | None) -> bool:
    return text is None or text == ""


def _merge_into(dominant: XmlNode, recessive: XmlNode, child_merge_override: bool | None) -> None:
    if dominant.attributes.get(SELF_COMBINATION_MODE) == SELF_COMBINATION_OVERRIDE:
        return

    if _is_empty(dominant.value) and not _is_empty(recessive.value):
        dominant.value = recessive.value

    for key, value in recessive.attributes.items():
        if _is_empty(dominant.attributes.get(key)):
            dominant.attributes[key] = value

    if not recessive.children:
        return

    if child_merge_override is not None:
        merge_children = child_merge_override
    else:
        merge_children = dominant.attributes.get(CHILDREN_COMBINATION_MODE) != CHILDREN_COMBINATION_APPEND

    if not merge_children:
        dominant.children = [child.copy() for child in recessive.children] + dominant.children
        return

    # Same-named children pair up in document order; recessive extras with a
    # matching name and no dominant partner left are dropped.
    common: dict[str, Iterator[XmlNode]] = {}
    for child in recessive.children:
        if child.name not in common:
            named = dominant.children_named(child.name)
            if named:
                common[child.name] = iter(named)

    for recessive_child in recessive.children:
        matches = common.get(recessive_child.name)
        if matches is None:
            dominant.add_child(recessive_child.copy())
            continue
        dominant_child = next(matches, None)
        if dominant_child is not None:
            _merge_into(dominant_child, recessive_child, child_merge_override)


def merge_nodes(
    dominant: XmlNode | None,
    recessive: XmlNode | None,
    child_merge_override: bool | None = None,
) -> XmlNode | None:
    """Overlay ``dominant`` onto ``recessive`` and return a new tree.

    Dominant values and attributes win when non-empty. Children sharing a
    name are merged pairwise in order, recessive children without a
    counterpart are appended. ``combine.self="override"`` keeps the dominant
    node untouched and ``combine.children="append"`` concatenates children.
    Neither input is modified.
    """
    if dominant is None:
        return recessive.copy() if recessive is not None else None
    result = dominant.copy()
    if recessive is not None:
        _merge_into(result, recessive, child_merge_override)
    return result
