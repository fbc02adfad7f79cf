"""Read and write ``site.xml`` documents."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from html.entities import name2codepoint
from pathlib import Path

from site_skinner.core.tree import XmlNode, local_name
from site_skinner.errors import DescriptorIOFailure
from site_skinner.site.descriptor import Body, PublishDate, SiteDescriptor, Skin

__all__ = ["XmlDescriptorCodec", "descriptor_from_element", "descriptor_to_element"]

logger = logging.getLogger(__name__)

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>", re.DOTALL)
_DECLARED_ENCODING_RE = re.compile(rb"^\s*<\?xml[^>]*encoding\s*=\s*[\"']([A-Za-z0-9._:-]+)[\"']")
_NAMED_ENTITY_RE = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")
_CDATA_RE = re.compile(r"(<!\[CDATA\[.*?\]\]>)", re.DOTALL)
_XML_ENTITIES = {"amp", "lt", "gt", "quot", "apos"}

_BODY_SLOTS = {"head", "links", "breadcrumbs", "footer"}


def _declared_encoding(raw: bytes) -> str | None:
    match = _DECLARED_ENCODING_RE.match(raw.lstrip(b"\xef\xbb\xbf"))
    return match.group(1).decode("ascii") if match else None


def _named_entity(match: re.Match) -> str:
    name = match.group(1)
    if name in _XML_ENTITIES or name not in name2codepoint:
        return match.group(0)
    return chr(name2codepoint[name])


def _expand_html_entities(text: str) -> str:
    """Replace XHTML named entities (``&copy;``, ``&nbsp;``) outside CDATA sections."""
    parts = _CDATA_RE.split(text)
    for index in range(0, len(parts), 2):
        parts[index] = _NAMED_ENTITY_RE.sub(_named_entity, parts[index])
    return "".join(parts)


def _text(node: XmlNode) -> str | None:
    return node.value.strip() if node.value is not None else None


def _read_root_attributes(root: ET.Element, descriptor: SiteDescriptor) -> None:
    if root.tag.startswith("{"):
        descriptor.root_attributes["xmlns"] = root.tag[1:].split("}", 1)[0]
    for key, value in root.attrib.items():
        if key == "name":
            descriptor.name = value
        elif key == f"{{{XSI_NAMESPACE}}}schemaLocation":
            descriptor.root_attributes["xmlns:xsi"] = XSI_NAMESPACE
            descriptor.root_attributes["xsi:schemaLocation"] = value
        else:
            descriptor.root_attributes[key] = value


def _read_body(node: XmlNode) -> Body:
    body = Body()
    for child in node.children:
        if child.name in _BODY_SLOTS:
            setattr(body, child.name, child)
        elif child.name == "menu":
            body.menus.append(child)
        else:
            body.extra.append(child)
    return body


def descriptor_from_element(root: ET.Element) -> SiteDescriptor:
    """Convert a parsed ``<project>`` element into a :class:`SiteDescriptor`."""
    descriptor = SiteDescriptor()
    _read_root_attributes(root, descriptor)

    for child in XmlNode.from_element(root).children:
        if child.name == "bannerLeft":
            descriptor.banner_left = child
        elif child.name == "bannerRight":
            descriptor.banner_right = child
        elif child.name == "googleAnalyticsAccountId":
            descriptor.google_analytics_account_id = _text(child)
        elif child.name == "publishDate":
            descriptor.publish_date = PublishDate(
                position=child.attributes.get("position"),
                format=child.attributes.get("format"),
            )
        elif child.name == "version":
            descriptor.version = child
        elif child.name == "poweredBy":
            descriptor.powered_by = child
        elif child.name == "skin":
            descriptor.skin = Skin.from_node(child)
        elif child.name == "body":
            descriptor.body = _read_body(child)
        elif child.name == "custom":
            descriptor.custom = child
        else:
            descriptor.extra.append(child)
    return descriptor


def _root_attributes(descriptor: SiteDescriptor) -> dict[str, str]:
    attributes = {k: v for k, v in descriptor.root_attributes.items() if k.startswith("xmlns")}
    if descriptor.name is not None:
        attributes["name"] = descriptor.name
    attributes.update(
        {k: v for k, v in descriptor.root_attributes.items() if not k.startswith("xmlns")}
    )
    return attributes


def descriptor_to_element(descriptor: SiteDescriptor) -> ET.Element:
    """Build the ``<project>`` element in the canonical element order."""
    nodes: list[XmlNode] = []
    for node in (descriptor.banner_left, descriptor.banner_right):
        if node is not None:
            nodes.append(node)
    if descriptor.google_analytics_account_id is not None:
        nodes.append(XmlNode("googleAnalyticsAccountId", value=descriptor.google_analytics_account_id))
    if descriptor.publish_date is not None:
        attributes = {}
        if descriptor.publish_date.position is not None:
            attributes["position"] = descriptor.publish_date.position
        if descriptor.publish_date.format is not None:
            attributes["format"] = descriptor.publish_date.format
        nodes.append(XmlNode("publishDate", attributes=attributes))
    for node in (descriptor.version, descriptor.powered_by):
        if node is not None:
            nodes.append(node)
    if descriptor.skin is not None:
        nodes.append(descriptor.skin.to_node())
    if descriptor.body is not None:
        body = XmlNode("body")
        for node in (descriptor.body.head, descriptor.body.links, descriptor.body.breadcrumbs):
            if node is not None:
                body.add_child(node)
        body.children.extend(descriptor.body.menus)
        if descriptor.body.footer is not None:
            body.add_child(descriptor.body.footer)
        body.children.extend(descriptor.body.extra)
        nodes.append(body)
    nodes.extend(descriptor.extra)
    if descriptor.custom is not None:
        nodes.append(descriptor.custom)

    root = ET.Element("project", _root_attributes(descriptor))
    for node in nodes:
        root.append(node.to_element())
    return root


class XmlDescriptorCodec:
    """``site.xml`` reader/writer.

    The encoding named in the XML declaration wins over the configured
    input encoding. Output uses the descriptor's own encoding when it has
    one, the configured output encoding otherwise.
    """

    def read(self, path: Path, encoding: str) -> SiteDescriptor:
        try:
            raw = Path(path).read_bytes()
            declared = _declared_encoding(raw)
            text = raw.decode(declared or encoding).lstrip("﻿")
            root = ET.fromstring(_expand_html_entities(_DECLARATION_RE.sub("", text, count=1)))
        except (OSError, UnicodeDecodeError, LookupError, ET.ParseError) as exc:
            raise DescriptorIOFailure(f"Unable to read site descriptor {path}: {exc}") from exc

        if local_name(root.tag) != "project":
            raise DescriptorIOFailure(
                f"Unable to read site descriptor {path}: expected <project> root, found <{local_name(root.tag)}>"
            )
        descriptor = descriptor_from_element(root)
        descriptor.model_encoding = declared
        return descriptor

    def write(self, path: Path, descriptor: SiteDescriptor, encoding: str) -> None:
        target_encoding = descriptor.model_encoding or encoding
        root = descriptor_to_element(descriptor)
        ET.indent(root, space="  ")
        document = ET.tostring(root, encoding="unicode")
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            with Path(path).open("w", encoding=target_encoding, errors="xmlcharrefreplace") as handle:
                handle.write(f'<?xml version="1.0" encoding="{target_encoding}"?>\n')
                handle.write(document)
                handle.write("\n")
        except (OSError, LookupError) as exc:
            raise DescriptorIOFailure(f"Unable to write site descriptor {path}: {exc}") from exc
        logger.debug("Wrote site descriptor %s (%s)", path, target_encoding)
