"""Overlay the current skin and layout onto a released site descriptor."""

from __future__ import annotations

import copy
import logging

from site_skinner.core.tree import XmlNode, merge_nodes
from site_skinner.errors import MissingSkin
from site_skinner.site.descriptor import Body, SiteDescriptor

__all__ = ["merge_descriptors", "IDENTITY_FIELDS", "BODY_FIELDS"]

logger = logging.getLogger(__name__)

# Copied from the current descriptor even when absent there.
IDENTITY_FIELDS = (
    "banner_left",
    "banner_right",
    "google_analytics_account_id",
    "model_encoding",
    "name",
    "powered_by",
    "publish_date",
    "skin",
    "version",
)

# Layout copied with merge_body. Menus stay those of the release.
BODY_FIELDS = ("breadcrumbs", "footer", "head", "links")


def merge_descriptors(
    current: SiteDescriptor,
    released: SiteDescriptor,
    merge_body: bool,
    publish_date_node: XmlNode,
) -> SiteDescriptor:
    """Return a copy of ``released`` wearing the skin of ``current``.

    The custom regions are merged with ``current`` dominant and the
    publish date node is appended to the result. Neither input is modified.

    Raises:
        MissingSkin: ``current`` declares no skin.
    """
    if current.skin is None:
        raise MissingSkin()

    merged = copy.deepcopy(released)
    for name in IDENTITY_FIELDS:
        setattr(merged, name, copy.deepcopy(getattr(current, name)))

    if merge_body and current.body is not None:
        if merged.body is None:
            merged.body = Body()
        for name in BODY_FIELDS:
            setattr(merged.body, name, copy.deepcopy(getattr(current.body, name)))

    if not merged.root_attributes:
        merged.root_attributes = dict(current.root_attributes)

    merged.custom = merge_nodes(current.custom, released.custom) or XmlNode("custom")
    merged.custom.add_child(publish_date_node.copy())
    logger.debug("Applied skin %s, publish date %s", merged.skin, publish_date_node.value)
    return merged
