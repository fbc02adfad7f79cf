"""Determine and format the release date stamped into the merged descriptor.

The artifact is fetched again at the start of the run. A file whose
modification time predates that fetch was already cached locally and its
mtime says nothing about the release, so the timestamp of the first archive
entry is used instead.
"""

from __future__ import annotations

import logging
import zipfile
from datetime import datetime
from pathlib import Path

from site_skinner.core.constants import DEFAULT_PUBLISH_DATE_FORMAT
from site_skinner.core.tree import XmlNode

__all__ = ["ReleaseDateResolver", "format_date", "publish_date_node"]

logger = logging.getLogger(__name__)

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _first_entry_date(artifact_file: Path) -> datetime | None:
    try:
        with zipfile.ZipFile(artifact_file) as archive:
            entries = archive.infolist()
    except (zipfile.BadZipFile, OSError) as exc:
        logger.debug("%s is not a readable archive: %s", artifact_file, exc)
        return None
    if not entries:
        return None
    return datetime(*entries[0].date_time)


class ReleaseDateResolver:
    """Pick the release timestamp of a freshly re-resolved artifact file."""

    def resolve_date(self, artifact_file: Path, resolve_start_time: float) -> datetime:
        """Return the release date of ``artifact_file``.

        Args:
            artifact_file: the artifact after the forced re-resolve.
            resolve_start_time: epoch seconds taken just before the re-resolve.
        """
        artifact_file = Path(artifact_file)
        modified = artifact_file.stat().st_mtime
        if modified < resolve_start_time:
            entry_date = _first_entry_date(artifact_file)
            if entry_date is not None:
                logger.debug("Using archive entry date of %s: %s", artifact_file, entry_date)
                return entry_date
        release_date = datetime.fromtimestamp(modified)
        logger.debug("Using modification date of %s: %s", artifact_file, release_date)
        return release_date


def _tokenize(pattern: str) -> list[tuple[str, str]]:
    """Split a SimpleDateFormat pattern into ``("field", run)`` and ``("text", literal)``."""
    tokens: list[tuple[str, str]] = []
    index = 0
    while index < len(pattern):
        char = pattern[index]
        if char == "'":
            if pattern.startswith("''", index):
                tokens.append(("text", "'"))
                index += 2
                continue
            end = index + 1
            literal = []
            while end < len(pattern):
                if pattern[end] == "'":
                    if pattern.startswith("''", end):
                        literal.append("'")
                        end += 2
                        continue
                    break
                literal.append(pattern[end])
                end += 1
            if end >= len(pattern):
                raise ValueError(f"Unterminated quote in date pattern: {pattern}")
            tokens.append(("text", "".join(literal)))
            index = end + 1
        elif char.isascii() and char.isalpha():
            end = index
            while end < len(pattern) and pattern[end] == char:
                end += 1
            tokens.append(("field", pattern[index:end]))
            index = end
        else:
            tokens.append(("text", char))
            index += 1
    return tokens


def _number(value: int, width: int) -> str:
    return str(value).zfill(width)


def _text_field(names: tuple[str, ...], position: int, width: int) -> str:
    name = names[position]
    return name if width >= 4 else name[:3]


def _zone_offset(moment: datetime) -> str:
    offset = moment.astimezone().utcoffset() if moment.tzinfo is None else moment.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{minutes:02d}"


def _format_field(run: str, moment: datetime) -> str:
    letter, width = run[0], len(run)
    if letter == "G":
        return "AD"
    if letter in ("y", "Y"):
        if width == 2:
            return _number(moment.year % 100, 2)
        return _number(moment.year, width)
    if letter in ("M", "L"):
        if width >= 3:
            return _text_field(_MONTHS, moment.month - 1, width)
        return _number(moment.month, width)
    if letter == "d":
        return _number(moment.day, width)
    if letter == "D":
        return _number(moment.timetuple().tm_yday, width)
    if letter == "H":
        return _number(moment.hour, width)
    if letter == "k":
        return _number(moment.hour or 24, width)
    if letter == "K":
        return _number(moment.hour % 12, width)
    if letter == "h":
        return _number(moment.hour % 12 or 12, width)
    if letter == "m":
        return _number(moment.minute, width)
    if letter == "s":
        return _number(moment.second, width)
    if letter == "S":
        return _number(moment.microsecond // 1000, width)
    if letter == "E":
        return _text_field(_WEEKDAYS, moment.weekday(), width)
    if letter == "u":
        return _number(moment.isoweekday(), width)
    if letter == "a":
        return "AM" if moment.hour < 12 else "PM"
    if letter == "z":
        local = moment.astimezone() if moment.tzinfo is None else moment
        return local.tzname() or "GMT"
    if letter == "Z":
        return _zone_offset(moment)
    raise ValueError(f"Illegal pattern character '{letter}'")


def format_date(moment: datetime, pattern: str = DEFAULT_PUBLISH_DATE_FORMAT) -> str:
    """Format ``moment`` with a Java ``SimpleDateFormat`` pattern.

    >>> format_date(datetime(2011, 3, 7, 14, 5), "yyyy-MM-dd'T'HH:mm")
    '2011-03-07T14:05'
    """
    parts = []
    for kind, value in _tokenize(pattern):
        parts.append(value if kind == "text" else _format_field(value, moment))
    return "".join(parts)


def publish_date_node(moment: datetime, pattern: str | None = None) -> XmlNode:
    """The ``<publishDate>`` element appended to the merged custom region."""
    return XmlNode("publishDate", value=format_date(moment, pattern or DEFAULT_PUBLISH_DATE_FORMAT))
