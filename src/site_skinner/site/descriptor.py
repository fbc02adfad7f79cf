"""In-memory model of a site descriptor (``site.xml``).

Regions with a fixed meaning (skin, publish date, menus) are typed; regions
that hold arbitrary markup (banners, head, footer, custom) stay generic
:class:`~site_skinner.core.tree.XmlNode` trees.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from site_skinner.core.constants import DEFAULT_PUBLISH_DATE_FORMAT
from site_skinner.core.tree import XmlNode

__all__ = ["Skin", "PublishDate", "Body", "SiteDescriptor"]


@dataclass
class Skin:
    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None

    @classmethod
    def from_node(cls, node: XmlNode) -> "Skin":
        return cls(
            group_id=node.child_value("groupId"),
            artifact_id=node.child_value("artifactId"),
            version=node.child_value("version"),
        )

    def to_node(self) -> XmlNode:
        node = XmlNode("skin")
        for name, value in (
            ("groupId", self.group_id),
            ("artifactId", self.artifact_id),
            ("version", self.version),
        ):
            if value is not None:
                node.add_child(XmlNode(name, value=value))
        return node

    def __str__(self) -> str:
        return ":".join(part for part in (self.group_id, self.artifact_id, self.version) if part)


@dataclass
class PublishDate:
    position: str | None = None
    format: str | None = None

    @property
    def effective_format(self) -> str:
        return self.format or DEFAULT_PUBLISH_DATE_FORMAT


@dataclass
class Body:
    head: XmlNode | None = None
    links: XmlNode | None = None
    breadcrumbs: XmlNode | None = None
    menus: list[XmlNode] = field(default_factory=list)
    footer: XmlNode | None = None
    extra: list[XmlNode] = field(default_factory=list)


@dataclass
class SiteDescriptor:
    """A parsed ``site.xml``.

    ``model_encoding`` is the encoding named in the XML declaration.
    ``root_attributes`` keeps namespace and schema attributes of the root
    element and ``extra`` keeps top-level elements this model does not know,
    so both survive a read/write cycle.
    """

    name: str | None = None
    model_encoding: str | None = None
    banner_left: XmlNode | None = None
    banner_right: XmlNode | None = None
    google_analytics_account_id: str | None = None
    publish_date: PublishDate | None = None
    version: XmlNode | None = None
    powered_by: XmlNode | None = None
    skin: Skin | None = None
    body: Body | None = None
    custom: XmlNode | None = None
    root_attributes: dict[str, str] = field(default_factory=dict)
    extra: list[XmlNode] = field(default_factory=list)

    @property
    def menus(self) -> list[XmlNode]:
        return self.body.menus if self.body is not None else []

    def custom_children(self, name: str) -> list[XmlNode]:
        if self.custom is None:
            return []
        return self.custom.children_named(name)
