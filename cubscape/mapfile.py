"""Locating and extracting the map grid inside a scene description file."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

_MAP_CHARS = frozenset("10NSEW")
_BLANKS = (" ", "\t")
_TEXTURE_KEYS = ("NO", "SO", "EA", "WE")
_COLOR_KEYS = ("F", "C")


class MapFileError(ValueError):
    """Raised when the map section of a scene file is missing or malformed."""


@dataclass(frozen=True)
class MapInfo:
    """Where the map starts (1-based line number) and how many lines it spans."""

    map_start: int
    real_height: int
    total_lines: int


def is_data_line(line: str) -> bool:
    """Tell whether a line is a texture (NO/SO/WE/EA) or colour (F/C) entry."""
    if not line:
        return False
    rest = line.lstrip(" \t")
    if rest[:1] in _COLOR_KEYS and rest[1:2] in _BLANKS:
        return True
    return rest[:2] in _TEXTURE_KEYS and rest[2:3] in _BLANKS


def is_map_start(line: str) -> int:
    """Classify a line: 1 for a map row, 0 for none, -1 for a line with stray characters."""
    if is_data_line(line):
        return 0
    found = False
    for char in line.lstrip(" \t"):
        if char in _MAP_CHARS:
            found = True
        elif char not in " \t\n":
            return -1
    return 1 if found else 0


def analyze_map_lines(lines: Iterable[str]) -> MapInfo:
    """Find the map in the file's lines and check that nothing else follows it."""
    map_start: int | None = None
    real_height = 0
    total_lines = 0
    for number, line in enumerate(lines, start=1):
        if map_start is None:
            if is_data_line(line):
                continue
            if is_map_start(line):
                map_start = number
        if map_start is not None:
            if is_map_start(line):
                real_height += 1
            total_lines += 1
    if map_start is None or real_height == 0 or total_lines == 0:
        raise MapFileError("No map")
    if total_lines != real_height:
        raise MapFileError("Wrong map configuration")
    return MapInfo(map_start, real_height, total_lines)


def read_map_lines(lines: Iterable[str]) -> list[str]:
    """Return the map rows of a scene file, without their line endings."""
    lines = list(lines)
    info = analyze_map_lines(lines)
    rows: list[str] = []
    started = False
    for line in lines:
        if is_data_line(line):
            continue
        status = is_map_start(line)
        if status == -1:
            raise MapFileError("Wrong map configuration")
        if not started and status == 1:
            started = True
        if started:
            if status != 1:
                raise MapFileError("Wrong map configuration")
            if len(rows) < info.total_lines:
                rows.append(line.removesuffix("\n"))
    return rows


def map_height(grid: Sequence[str]) -> int:
    """Number of rows in the grid."""
    return len(grid)


def max_width(grid: Iterable[str]) -> int:
    """Length of the longest row, or 0 for an empty grid."""
    return max((len(row) for row in grid), default=0)