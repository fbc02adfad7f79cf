"""Locate the per-locale site descriptors of a project."""

from __future__ import annotations

from pathlib import Path

from site_skinner.core.constants import DEFAULT_LOCALE, DEFAULT_SITE_DIRECTORY, SITE_PLUGIN_KEY
from site_skinner.core.models import ProjectModel

__all__ = ["available_locales", "site_directory", "descriptor_path"]


def available_locales(project: ProjectModel) -> list[str]:
    """Locales declared by the site plugin, ``en`` when none are configured."""
    declared = project.declared_locales
    if not declared:
        return [DEFAULT_LOCALE]
    locales = [locale.strip() for locale in declared.split(",") if locale.strip()]
    return locales or [DEFAULT_LOCALE]


def site_directory(project: ProjectModel, basedir: Path | None = None) -> Path:
    """The ``siteDirectory`` of the site plugin, resolved against ``basedir``."""
    root = Path(basedir) if basedir is not None else (project.basedir or Path.cwd())
    configuration = project.plugin_configuration(SITE_PLUGIN_KEY)
    configured = configuration.child_value("siteDirectory") if configuration is not None else None
    directory = Path(configured or DEFAULT_SITE_DIRECTORY)
    if directory.is_absolute():
        return directory
    return root / directory


def descriptor_path(site_dir: Path, locale: str) -> Path:
    """``site_<lang>.xml`` when present, ``site.xml`` otherwise."""
    localized = Path(site_dir) / f"site_{locale}.xml"
    if localized.exists():
        return localized
    return Path(site_dir) / "site.xml"
