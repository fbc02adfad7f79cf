"""CLI command modules for site-skinner."""

from .skin import skin

__all__ = ["skin"]
