"""Shared constants for the skin workflow."""

from __future__ import annotations

SITE_PLUGIN_KEY = "org.apache.maven.plugins:maven-site-plugin"
DEFAULT_SITE_DIRECTORY = "src/site"
DEFAULT_LOCALE = "en"
DEFAULT_WORKING_DIRECTORY = "target/siteskinner"
DEFAULT_PUBLISH_DATE_FORMAT = "yyyy-MM-dd"
DEFAULT_INPUT_ENCODING = "ISO-8859-1"
DEFAULT_OUTPUT_ENCODING = "UTF-8"
SNAPSHOT_QUALIFIER = "SNAPSHOT"
CONFIG_DIR = ".skinner"
CONFIG_FILE = "config.yaml"

__all__ = [
    "SITE_PLUGIN_KEY",
    "DEFAULT_SITE_DIRECTORY",
    "DEFAULT_LOCALE",
    "DEFAULT_WORKING_DIRECTORY",
    "DEFAULT_PUBLISH_DATE_FORMAT",
    "DEFAULT_INPUT_ENCODING",
    "DEFAULT_OUTPUT_ENCODING",
    "SNAPSHOT_QUALIFIER",
    "CONFIG_DIR",
    "CONFIG_FILE",
]
