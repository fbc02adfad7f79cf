"""Authoritative release date of the re-skinned version."""

from __future__ import annotations

from .date import ReleaseDateResolver, format_date, publish_date_node

__all__ = ["ReleaseDateResolver", "format_date", "publish_date_node"]
