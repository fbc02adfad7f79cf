"""Maven artifact versions.

``ArtifactVersion`` exposes the major/minor/incremental/build/qualifier split
used to recognise snapshots and orders versions the way Maven repositories
do: ``1.0-alpha-1 < 1.0-beta < 1.0-rc-1 < 1.0-SNAPSHOT < 1.0 < 1.0-sp``.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Union

__all__ = ["ArtifactVersion"]

QUALIFIERS = ["alpha", "beta", "milestone", "rc", "snapshot", "", "sp"]
ALIASES = {"ga": "", "final": "", "release": "", "cr": "rc"}
RELEASE_VERSION_INDEX = str(QUALIFIERS.index(""))


def _comparable_qualifier(qualifier: str) -> str:
    # Unknown qualifiers sort after the known ones, lexically among themselves.
    if qualifier in QUALIFIERS:
        return str(QUALIFIERS.index(qualifier))
    return f"{len(QUALIFIERS)}-{qualifier}"


class _IntItem:
    def __init__(self, value: int):
        self.value = value

    def is_null(self) -> bool:
        return self.value == 0

    def compare(self, other: "_Item | None") -> int:
        if other is None:
            return 0 if self.value == 0 else 1
        if isinstance(other, _IntItem):
            return (self.value > other.value) - (self.value < other.value)
        return 1


class _StringItem:
    def __init__(self, value: str, followed_by_digit: bool):
        if followed_by_digit and len(value) == 1:
            value = {"a": "alpha", "b": "beta", "m": "milestone"}.get(value, value)
        self.value = ALIASES.get(value, value)

    def is_null(self) -> bool:
        return _comparable_qualifier(self.value) == RELEASE_VERSION_INDEX

    def compare(self, other: "_Item | None") -> int:
        mine = _comparable_qualifier(self.value)
        if other is None:
            return (mine > RELEASE_VERSION_INDEX) - (mine < RELEASE_VERSION_INDEX)
        if isinstance(other, _IntItem):
            return -1
        if isinstance(other, _StringItem):
            theirs = _comparable_qualifier(other.value)
            return (mine > theirs) - (mine < theirs)
        return -1


class _ListItem(list):
    def is_null(self) -> bool:
        return len(self) == 0

    def normalize(self) -> None:
        for index in range(len(self) - 1, -1, -1):
            item = self[index]
            if item.is_null():
                del self[index]
            elif not isinstance(item, _ListItem):
                break

    def compare(self, other: "_Item | None") -> int:
        if other is None:
            if not self:
                return 0
            return self[0].compare(None)
        if isinstance(other, _IntItem):
            return -1
        if isinstance(other, _StringItem):
            return 1
        for index in range(max(len(self), len(other))):
            left = self[index] if index < len(self) else None
            right = other[index] if index < len(other) else None
            if left is None:
                result = 0 if right is None else -right.compare(None)
            else:
                result = left.compare(right)
            if result != 0:
                return result
        return 0


_Item = Union[_IntItem, _StringItem, _ListItem]


def _parse_item(is_digit: bool, token: str, followed_by_digit: bool = False) -> _Item:
    if is_digit:
        return _IntItem(int(token))
    return _StringItem(token, followed_by_digit)


def _parse_comparable(version: str) -> _ListItem:
    version = version.lower()
    root = current = _ListItem()
    stack = [root]
    is_digit = False
    start = 0

    def open_sublist() -> _ListItem:
        nested = _ListItem()
        current.append(nested)
        stack.append(nested)
        return nested

    for index, char in enumerate(version):
        if char in ".-":
            if index == start:
                current.append(_IntItem(0))
            else:
                current.append(_parse_item(is_digit, version[start:index]))
            start = index + 1
            if char == "-":
                current = open_sublist()
        elif char.isdigit():
            if not is_digit and index > start:
                current.append(_StringItem(version[start:index], True))
                start = index
                current = open_sublist()
            is_digit = True
        else:
            if is_digit and index > start:
                current.append(_parse_item(True, version[start:index]))
                start = index
                current = open_sublist()
            is_digit = False

    if len(version) > start:
        current.append(_parse_item(is_digit, version[start:]))

    while stack:
        stack.pop().normalize()
    return root


def _canonical(item: _Item) -> str:
    if isinstance(item, _ListItem):
        return "(" + ",".join(_canonical(child) for child in item) + ")"
    return str(item.value)


def _parse_int(token: str) -> int | None:
    if not token.isdigit():
        return None
    return int(token)


@total_ordering
class ArtifactVersion:
    """A Maven version string with Maven ordering semantics."""

    def __init__(self, version: str):
        self._raw = version.strip()
        self._comparable = _parse_comparable(self._raw)
        self.major: int | None = None
        self.minor: int | None = None
        self.incremental: int | None = None
        self.build_number: int | None = None
        self.qualifier: str | None = None
        self._split(self._raw)

    def _split(self, version: str) -> None:
        part1, sep, part2 = version.partition("-")
        if sep:
            if len(part2) == 1 or not part2.startswith("0"):
                self.build_number = _parse_int(part2)
                if self.build_number is None:
                    self.qualifier = part2
            else:
                self.qualifier = part2

        if "." not in part1 and not part1.startswith("0"):
            self.major = _parse_int(part1)
            if self.major is None:
                self._fallback(version)
            return

        tokens = part1.split(".")
        numbers = [_parse_int(token) for token in tokens]
        if len(tokens) > 3 or any(number is None for number in numbers):
            self._fallback(version)
            return
        self.major = numbers[0]
        self.minor = numbers[1] if len(numbers) > 1 else None
        self.incremental = numbers[2] if len(numbers) > 2 else None

    def _fallback(self, version: str) -> None:
        self.major = self.minor = self.incremental = self.build_number = None
        self.qualifier = version

    def compare(self, other: "ArtifactVersion") -> int:
        return self._comparable.compare(other._comparable)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            other = ArtifactVersion(other)
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "ArtifactVersion | str") -> bool:
        if isinstance(other, str):
            other = ArtifactVersion(other)
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(_canonical(self._comparable))

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"ArtifactVersion({self._raw!r})"
