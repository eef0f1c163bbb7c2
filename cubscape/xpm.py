"""Reading XPM images into :class:`Image` objects."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from cubscape.colornames import lookup_color
from cubscape.image import Image

_TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63
_ATOI = re.compile(r"[ \t\n\r\f\v]*([+-]?\d+)")
_HEX = re.compile(r"[ \t\n\r\f\v]*([+-]?)(?:0[xX])?([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


def split_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _find_unquoted(text: str, token: str) -> int:
    quoted = False
    for pos in range(len(text) - len(token) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def strip_comments(text: str) -> str:
    """Blank out C-style comments that lie outside quoted strings.

    Each removed character becomes a space, so the length is unchanged.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        stop = len(text) if end == -1 else end + 2
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        stop = len(text) if end == -1 else end + 1
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def text_to_rgb(name: str, extra: str | None) -> int:
    """Turn an XPM colour spec into 0xRRGGBB.

    ``#hex`` values are parsed directly; otherwise ``name`` (joined with
    ``extra`` when given) is looked up by name. ``None`` gives -1 and
    unknown names give 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name[1:])
        digits = match.group(2)
        if not digits:
            return 0
        value = int(digits, 16)
        return -value if match.group(1) == "-" else value
    if extra:
        name = f"{name} {extra}"[:_NAME_LIMIT]
    color = lookup_color(name)
    return 0 if color is None else color


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before {what}") from None


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the quoted strings of an XPM file, in order."""
    it = iter(lines)
    words = split_words(_next_line(it, "header"))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(words[:4])!r}")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(it, "colour definition")
        key = line[:cpp]
        spec = split_words(line[cpp:])
        try:
            index = spec.index("c") + 1
        except ValueError:
            raise XpmError(f"colour definition without 'c' key: {line!r}") from None
        if index >= len(spec):
            raise XpmError(f"colour definition without value: {line!r}")
        extra = spec[index + 1] if index + 1 < len(spec) else None
        rgb = text_to_rgb(spec[index], extra)
        if cpp <= 2 or key not in palette:
            palette[key] = rgb

    image = Image(width, height)
    for y in range(height):
        line = _next_line(it, "pixel row")
        for x in range(width):
            color = palette.get(line[cpp * x:cpp * (x + 1)], 0)
            if color == -1:
                color = _TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def load_xpm(path: str | Path) -> Image:
    """Read an XPM file from disk."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm(quoted_lines(strip_comments(text)))