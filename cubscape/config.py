"""Reading the texture paths and colours of a scene file, and whole scenes."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from cubscape.image import trgb
from cubscape.mapfile import read_map_lines
from cubscape.walls import PlayerStart, parse_map

_BLANKS = " \t"
_SEPARATORS = (" ", "\t")
_TEXTURE_KEYS = (("NO", "north"), ("SO", "south"), ("WE", "west"), ("EA", "east"))
_COLOR_KEYS = {
    "F": ("floor", "Only one floor color needed"),
    "C": ("ceiling", "Only one ceiling color needed"),
}
_REQUIRED_TEXTURES = (
    ("west", "WEST"),
    ("north", "NORTH"),
    ("east", "EAST"),
    ("south", "SOUTH"),
)
_SEGMENT = re.compile(r"[ \t]*[0-9]+[ \t]*")
_COLOR_CHARS = re.compile(r"[0-9, \t]*")
_LINES = re.compile(r"[^\n]*\n|[^\n]+")


class ConfigError(ValueError):
    """Raised when a scene file's path, textures or colours are invalid."""


@dataclass(frozen=True)
class SceneConfig:
    """Texture paths for the four wall faces and the floor and ceiling colours."""

    north: str
    south: str
    east: str
    west: str
    floor: int
    ceiling: int

    @property
    def texture_paths(self) -> tuple[str, str, str, str]:
        """Texture paths in north, south, east, west order."""
        return (self.north, self.south, self.east, self.west)


@dataclass
class Scene:
    """A fully validated scene: settings, padded map grid and player start."""

    config: SceneConfig
    grid: list[str]
    start: PlayerStart


def _check_file(path: str | Path, suffix: str, texture: bool) -> None:
    name = str(path)
    kind = "texture " if texture else ""
    if len(name) < 4:
        raise ConfigError(f"{'Texture ' if texture else ''}File name too short")
    if not name.endswith(suffix):
        raise ConfigError(f"Wrong {kind}file extension")
    empty = f"Empty {kind}file / Name is a directory"
    if Path(name).is_dir():
        raise ConfigError(empty)
    try:
        with open(name, "rb") as handle:
            first = handle.read(1)
    except OSError as exc:
        raise ConfigError(f"Can't open {kind}file") from exc
    if not first:
        raise ConfigError(empty)


def check_map_path(path: str | Path) -> None:
    """Check that a scene path ends in .cub and names a readable, non-empty file."""
    _check_file(path, ".cub", texture=False)


def check_texture_path(path: str | Path) -> None:
    """Check that a texture path ends in .xpm and names a readable, non-empty file."""
    _check_file(path, ".xpm", texture=True)


def check_commas_and_spacing(text: str) -> bool:
    """Tell whether the first three comma-separated fields are each one number.

    Spaces and tabs may surround each number.
    """
    parts = text.split(",")
    return len(parts) >= 3 and all(_SEGMENT.fullmatch(part) for part in parts[:3])


def parse_color(text: str) -> int:
    """Parse ``R,G,B`` (each 0 to 255) into a 0xRRGGBB colour."""
    if (
        not check_commas_and_spacing(text)
        or not _COLOR_CHARS.fullmatch(text)
        or text.count(",") != 2
    ):
        raise ConfigError("Wrong color config")
    values = [part.strip(_BLANKS) for part in text.split(",")]
    if len(values) != 3 or any(not value or len(value) > 3 for value in values):
        raise ConfigError("Wrong color config")
    channels = [int(value) for value in values]
    if any(not 0 <= channel <= 255 for channel in channels):
        raise ConfigError("Wrong color config")
    return trgb(0, *channels)


def _read_texture(rest: str, textures: dict[str, str]) -> None:
    for key, field in _TEXTURE_KEYS:
        if rest.startswith(key) and rest[len(key):len(key) + 1] in _SEPARATORS:
            if field in textures:
                raise ConfigError(f"More than one {key} value")
            path = rest.removesuffix("\n")[3:].strip(_BLANKS)
            check_texture_path(path)
            textures[field] = path


def _read_color(rest: str, colors: dict[str, str]) -> None:
    key = rest[:1]
    if key not in _COLOR_KEYS or rest[1:2] not in _SEPARATORS:
        return
    field, duplicate = _COLOR_KEYS[key]
    if field in colors:
        raise ConfigError(duplicate)
    if len(rest) <= 3:
        raise ConfigError("Line too short")
    colors[field] = rest[2:len(rest) - 1] if "\n" in rest else rest[2:]


def read_config(lines: Iterable[str]) -> SceneConfig:
    """Collect the texture and colour entries of a scene file's lines."""
    textures: dict[str, str] = {}
    colors: dict[str, str] = {}
    for line in lines:
        rest = line.lstrip(_BLANKS)
        _read_texture(rest, textures)
        _read_color(rest, colors)
    for field, label in _REQUIRED_TEXTURES:
        if field not in textures:
            raise ConfigError(f"No {label} texture")
    if "floor" not in colors:
        raise ConfigError("No Floor color")
    if "ceiling" not in colors:
        raise ConfigError("No Ceiling color")
    ceiling = parse_color(colors["ceiling"])
    floor = parse_color(colors["floor"])
    return SceneConfig(
        north=textures["north"],
        south=textures["south"],
        east=textures["east"],
        west=textures["west"],
        floor=floor,
        ceiling=ceiling,
    )


def load_scene(path: str | Path) -> Scene:
    """Read and validate a .cub scene file.

    Raises ConfigError for settings problems, and the map module's errors
    (both ValueError subclasses) for a missing, malformed or open map.
    """
    check_map_path(path)
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise ConfigError("Can't open file") from exc
    lines = _LINES.findall(text)
    config = read_config(lines)
    rows = read_map_lines(lines)
    grid, start = parse_map(rows)
    return Scene(config=config, grid=grid, start=start)