"""Player movement, ray casting and rendering of a textured first-person view."""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from enum import IntEnum

from cubscape.image import Image
from cubscape.walls import PlayerStart

MOVE_SPEED = 0.07
PLANE_LENGTH = 0.66
WALL = "1"
EMPTY = "0"

_DIRECTIONS = {
    "N": (0.0, -1.0),
    "S": (0.0, 1.0),
    "W": (-1.0, 0.0),
    "E": (1.0, 0.0),
}
_PLANES = {
    "N": (PLANE_LENGTH, 0.0),
    "S": (-PLANE_LENGTH, 0.0),
    "W": (0.0, -PLANE_LENGTH),
    "E": (0.0, PLANE_LENGTH),
}


class Orientation(IntEnum):
    """Which face of a wall a ray struck; also the index of its texture."""

    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3


def initial_direction(facing: str) -> tuple[float, float]:
    """Unit direction vector for a starting facing of N, S, E or W."""
    try:
        return _DIRECTIONS[facing]
    except KeyError:
        raise ValueError(f"unknown facing {facing!r}") from None


def initial_plane(facing: str) -> tuple[float, float]:
    """Camera plane vector, perpendicular to the direction, for a starting facing."""
    try:
        return _PLANES[facing]
    except KeyError:
        raise ValueError(f"unknown facing {facing!r}") from None


def _set_cell(grid: MutableSequence[str], row: int, col: int, char: str) -> None:
    line = grid[row]
    grid[row] = line[:col] + char + line[col + 1:]


def _is_walkable(cell: str) -> bool:
    return cell == EMPTY


@dataclass
class Player:
    """Position, view direction and camera plane of the player."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    facing: str

    @classmethod
    def from_start(cls, start: PlayerStart) -> Player:
        """Place the player in the centre of its starting square."""
        dir_x, dir_y = initial_direction(start.facing)
        plane_x, plane_y = initial_plane(start.facing)
        return cls(
            x=start.x + 0.5,
            y=start.y + 0.5,
            dir_x=dir_x,
            dir_y=dir_y,
            plane_x=plane_x,
            plane_y=plane_y,
            facing=start.facing,
        )

    def _try_move(self, grid: MutableSequence[str], new_x: float, new_y: float) -> bool:
        square_x, square_y = int(self.x), int(self.y)
        _set_cell(grid, int(self.y), int(self.x), EMPTY)
        moved = _is_walkable(grid[int(new_y)][square_x]) and _is_walkable(
            grid[square_y][int(new_x)]
        )
        if moved:
            self.x, self.y = new_x, new_y
        _set_cell(grid, int(self.y), int(self.x), self.facing)
        return moved

    def move(self, grid: MutableSequence[str], forward: bool) -> bool:
        """Step along the view direction, forwards or backwards.

        The player's marker in ``grid`` follows it. Returns whether it moved.
        """
        sign = 1.0 if forward else -1.0
        new_x = self.x + sign * self.dir_x * MOVE_SPEED
        new_y = self.y + sign * self.dir_y * MOVE_SPEED
        return self._try_move(grid, new_x, new_y)

    def strafe(self, grid: MutableSequence[str], left: bool) -> bool:
        """Step sideways, to the left or right. Returns whether it moved."""
        if left:
            new_x = self.x + self.dir_y * MOVE_SPEED
            new_y = self.y - self.dir_x * MOVE_SPEED
        else:
            new_x = self.x - self.dir_y * MOVE_SPEED
            new_y = self.y + self.dir_x * MOVE_SPEED
        return self._try_move(grid, new_x, new_y)

    def rotate(self, angle: float) -> None:
        """Turn the view direction and camera plane by ``angle`` radians."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        old_dir_x = self.dir_x
        self.dir_x = self.dir_x * cos_a - self.dir_y * sin_a
        self.dir_y = old_dir_x * sin_a + self.dir_y * cos_a
        old_plane_x = self.plane_x
        self.plane_x = self.plane_x * cos_a - self.plane_y * sin_a
        self.plane_y = old_plane_x * sin_a + self.plane_y * cos_a


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall."""

    map_x: int
    map_y: int
    side: int
    orientation: Orientation
    distance: float
    wall_x: float
    ray_x: float
    ray_y: float


def _delta(component: float) -> float:
    return math.inf if component == 0 else abs(1.0 / component)


def _orientation(side: int, ray_x: float, ray_y: float) -> Orientation:
    if side == 1:
        return Orientation.NORTH if ray_y <= 0 else Orientation.SOUTH
    return Orientation.EAST if ray_x > 0 else Orientation.WEST


def cast_ray(grid: Sequence[str], player: Player, camera_x: float) -> RayHit:
    """Cast one ray through camera position ``camera_x`` (-1 left, 1 right)."""
    map_x, map_y = int(player.x), int(player.y)
    ray_x = player.dir_x + player.plane_x * camera_x
    ray_y = player.dir_y + player.plane_y * camera_x
    delta_x = _delta(ray_x)
    delta_y = _delta(ray_y)

    if ray_x < 0:
        step_x = -1
        side_x = (player.x - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1.0 - player.x) * delta_x
    if ray_y < 0:
        step_y = -1
        side_y = (player.y - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1.0 - player.y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if grid[map_y][map_x] == WALL:
            break

    if side == 0:
        distance = side_x - delta_x
        wall_x = player.y + distance * ray_y
    else:
        distance = side_y - delta_y
        wall_x = player.x + distance * ray_x
    wall_x -= math.floor(wall_x)
    return RayHit(
        map_x=map_x,
        map_y=map_y,
        side=side,
        orientation=_orientation(side, ray_x, ray_y),
        distance=distance,
        wall_x=wall_x,
        ray_x=ray_x,
        ray_y=ray_y,
    )


def line_bounds(distance: float, screen_height: int) -> tuple[int, int, int]:
    """Return (line height, first row, last row) of a wall slice at ``distance``.

    A zero distance gives a slice as tall as the screen.
    """
    if distance == 0:
        line_height = screen_height
    else:
        line_height = int(screen_height / distance)
    half = screen_height // 2
    draw_start = -(line_height // 2) + half
    if draw_start < 0 or distance == 0 or line_height < 0:
        draw_start = 0
    draw_end = line_height // 2 + half
    if draw_end >= screen_height or distance == 0 or line_height < 0:
        draw_end = screen_height - 1
    return line_height, draw_start, draw_end


def _texel(texture: Image, x: int, y: int) -> int:
    if 0 <= x < texture.width and 0 <= y < texture.height:
        return texture.get_pixel(x, y)
    return 0


def _draw_column(
    frame: Image,
    x: int,
    hit: RayHit,
    texture: Image,
    bounds: tuple[int, int, int],
    floor: int,
    ceiling: int,
) -> None:
    height = frame.height
    line_height, draw_start, draw_end = bounds
    tex_x = int(hit.wall_x * texture.width)
    if (hit.side == 0 and hit.ray_x < 0) or (hit.side == 1 and hit.ray_y > 0):
        tex_x = texture.width - tex_x - 1
    step = texture.height / line_height if line_height else 0.0
    pos = (draw_start - height // 2 + line_height // 2) * step
    for y in range(draw_start, min(draw_end, height)):
        tex_y = int(pos)
        pos += step
        frame.put_pixel(x, y, _texel(texture, tex_x, tex_y))
    for y in range(min(draw_start, height)):
        frame.put_pixel(x, y, ceiling)
    for y in range(max(draw_end, 0), height):
        frame.put_pixel(x, y, floor)


def render_frame(
    frame: Image,
    grid: Sequence[str],
    player: Player,
    textures: Sequence[Image],
    floor: int,
    ceiling: int,
) -> None:
    """Draw the player's view into ``frame``.

    ``textures`` holds the north, south, east and west wall images, in that order.
    """
    for x in range(frame.width):
        camera_x = 2 * x / frame.width - 1
        hit = cast_ray(grid, player, camera_x)
        bounds = line_bounds(hit.distance, frame.height)
        _draw_column(
            frame, x, hit, textures[hit.orientation], bounds, floor, ceiling
        )