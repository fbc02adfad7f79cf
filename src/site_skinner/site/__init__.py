"""Site descriptor model, ``site.xml`` codec and skin merge."""

from __future__ import annotations

from .descriptor import Body, PublishDate, SiteDescriptor, Skin

__all__ = ["Body", "PublishDate", "SiteDescriptor", "Skin"]
