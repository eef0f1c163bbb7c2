"""Checking that a map is closed by walls and locating the player."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from cubscape.mapfile import max_width

_CLOSED = frozenset("1 ")
_PLAYER_CHARS = frozenset("NSEW")


class MapError(ValueError):
    """Raised when a map is open or has the wrong number of players."""


@dataclass(frozen=True)
class PlayerStart:
    """The square the player starts on and the direction it faces (N, S, E or W)."""

    x: int
    y: int
    facing: str


def _is_closed_row(row: str) -> bool:
    return all(char in _CLOSED for char in row)


def _has_closed_ends(row: str) -> bool:
    return bool(row) and row[0] in _CLOSED and row[-1] in _CLOSED


def check_walls(grid: Sequence[str]) -> bool:
    """Strict check: first and last rows are solid walls and the sides are closed."""
    if not grid:
        return False
    if any(char != "1" for char in grid[0]) or any(char != "1" for char in grid[-1]):
        return False
    return check_side_walls(grid)


def check_side_walls(grid: Sequence[str]) -> bool:
    """Check the ends of the inner rows and the steps between rows of unequal length."""
    if not all(_has_closed_ends(row) for row in grid[1:-1]):
        return False
    return check_wall_gaps(grid)


def check_wall_gaps(grid: Sequence[str]) -> bool:
    """Check that no floor cell overhangs the end of the row above or below it."""
    for current, following in zip(grid, grid[1:]):
        if "0" in current[len(following):] or "0" in following[len(current):]:
            return False
    return True


def _spaces_are_enclosed(grid: Sequence[str]) -> bool:
    last_row = len(grid) - 1
    for i, row in enumerate(grid):
        for j, char in enumerate(row):
            if char != " ":
                continue
            neighbours = []
            if i > 0 and j < len(grid[i - 1]):
                neighbours.append(grid[i - 1][j])
            if i < last_row and j < len(grid[i + 1]):
                neighbours.append(grid[i + 1][j])
            if j > 0:
                neighbours.append(row[j - 1])
            if j < len(row) - 1:
                neighbours.append(row[j + 1])
            if any(cell not in _CLOSED for cell in neighbours):
                return False
    return True


def check_map_border(grid: Sequence[str]) -> bool:
    """Lenient check: borders are walls or spaces, and spaces touch only walls or spaces."""
    if not grid:
        return False
    if not _is_closed_row(grid[0]) or not _is_closed_row(grid[-1]):
        return False
    if not all(_has_closed_ends(row) for row in grid):
        return False
    return _spaces_are_enclosed(grid)


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    line = grid[row]
    return line[col] if col < len(line) else ""


def _row_closed(line: str, j: int) -> bool:
    col = j
    while col < len(line) and line[col] != "1":
        if col == 0:
            return False
        col -= 1
    col = j
    while col < len(line) and line[col] != "1":
        if col + 1 >= len(line):
            return False
        col += 1
    return True


def _cell_closed(grid: Sequence[str], i: int, j: int) -> bool:
    row = i
    while _cell(grid, row, j) != "1":
        if row == 0:
            return False
        if not _row_closed(grid[row], j):
            return False
        if j > len(grid[row - 1]):
            return False
        row -= 1
    row = i
    while _cell(grid, row, j) != "1":
        if row + 1 >= len(grid):
            return False
        if not _row_closed(grid[row], j):
            return False
        if j > len(grid[row + 1]):
            return False
        row += 1
    return True


def validate_closure(grid: Sequence[str]) -> bool:
    """Check that every floor cell is walled in left, right, above and below."""
    return all(
        _cell_closed(grid, i, j)
        for i, row in enumerate(grid)
        for j, char in enumerate(row)
        if char == "0"
    )


def pad_map(grid: Iterable[str]) -> list[str]:
    """Turn spaces into walls and pad every row with walls to the widest row."""
    rows = list(grid)
    width = max_width(rows)
    return [row.replace(" ", "1").ljust(width, "1") for row in rows]


def is_player(cell: str) -> bool:
    """Tell whether a map cell is a player start (N, S, E or W)."""
    return cell in _PLAYER_CHARS


def find_player(grid: Sequence[str]) -> PlayerStart:
    """Return the single player start in the grid."""
    start: PlayerStart | None = None
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if is_player(char):
                if start is not None:
                    raise MapError("One player only")
                start = PlayerStart(x, y, char)
    if start is None:
        raise MapError("One player needed")
    return start


def parse_map(grid: Iterable[str]) -> tuple[list[str], PlayerStart]:
    """Validate the raw map rows; return the padded grid and the player start."""
    rows = list(grid)
    if not rows:
        raise MapError("No map")
    if not check_walls(rows) and (
        not validate_closure(rows) or not check_map_border(rows)
    ):
        raise MapError("Open map")
    padded = pad_map(rows)
    return padded, find_player(padded)