"""A small top-down view of the map drawn in the corner of the screen."""

from __future__ import annotations

from collections.abc import Sequence

from cubscape.image import Image
from cubscape.mapfile import map_height, max_width
from cubscape.walls import is_player

MINIMAP_WIDTH = 200
MINIMAP_HEIGHT = 200
MAX_MINIMAP_SIZE = 300

DARK_WALL = 0x1F1F1F
OPEN_FLOOR = 0xFFFFFF


def minimap_pixel_size(map_width: int, map_height: int) -> int:
    """Side in pixels of one map square on the minimap (at least 1)."""
    if map_width <= 0 or map_height <= 0:
        raise ValueError(f"invalid map size {map_width}x{map_height}")
    pixel_size = min(MINIMAP_WIDTH // map_width, MINIMAP_HEIGHT // map_height)
    if pixel_size * map_width > MAX_MINIMAP_SIZE:
        pixel_size = MAX_MINIMAP_SIZE // map_width
    if pixel_size * map_height > MAX_MINIMAP_SIZE:
        pixel_size = MAX_MINIMAP_SIZE // map_height
    return max(pixel_size, 1)


def _grid_pixel_size(grid: Sequence[str]) -> int:
    return minimap_pixel_size(max_width(grid), map_height(grid))


def new_minimap(grid: Sequence[str]) -> Image:
    """Create a blank image just large enough for the minimap of ``grid``."""
    pixel_size = _grid_pixel_size(grid)
    return Image(max_width(grid) * pixel_size, map_height(grid) * pixel_size)


def _draw_square(image: Image, left: int, top: int, size: int, color: int) -> None:
    for y in range(max(top, 0), min(top + size, image.height)):
        for x in range(max(left, 0), min(left + size, image.width)):
            image.put_pixel(x, y, color)


def draw_minimap(image: Image, grid: Sequence[str], floor: int, ceiling: int) -> None:
    """Paint walls, open floor and the player square of ``grid`` into ``image``.

    Walls take the floor colour (dark grey when the floor is black), open
    cells are white and the player's square takes the ceiling colour.
    """
    pixel_size = _grid_pixel_size(grid)
    wall_color = DARK_WALL if floor == 0 else floor
    for y, row in enumerate(grid):
        color = 0
        for x, cell in enumerate(row):
            if cell == "1":
                color = wall_color
            elif cell == "0":
                color = OPEN_FLOOR
            elif is_player(cell):
                color = ceiling
            _draw_square(image, x * pixel_size, y * pixel_size, pixel_size, color)