import math

import pytest

from cubscape.image import Image
from cubscape.raycast import (
    MOVE_SPEED,
    Orientation,
    Player,
    cast_ray,
    initial_direction,
    initial_plane,
    line_bounds,
    render_frame,
)
from cubscape.walls import PlayerStart


def _room(facing="E"):
    return [
        "11111",
        f"1{facing}001",
        "10001",
        "11111",
    ]


def _player(facing="E"):
    return Player.from_start(PlayerStart(1, 1, facing))


def _solid(color, size=4):
    image = Image(size, size)
    image.fill(color)
    return image


def test_initial_vectors_match_facing():
    assert initial_direction("N") == (0.0, -1.0)
    assert initial_direction("E") == (1.0, 0.0)
    assert initial_plane("N") == (0.66, 0.0)
    assert initial_plane("W") == (0.0, -0.66)


@pytest.mark.parametrize("facing", ["N", "S", "E", "W"])
def test_plane_is_perpendicular_to_direction(facing):
    dx, dy = initial_direction(facing)
    px, py = initial_plane(facing)
    assert dx * px + dy * py == 0


def test_unknown_facing_raises():
    with pytest.raises(ValueError):
        initial_direction("X")
    with pytest.raises(ValueError):
        initial_plane("Q")


def test_from_start_centres_player():
    player = _player("S")
    assert (player.x, player.y) == (1.5, 1.5)
    assert (player.dir_x, player.dir_y) == initial_direction("S")
    assert player.facing == "S"


def test_rotate_preserves_lengths_and_reverses():
    player = _player("N")
    player.rotate(0.04)
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert math.hypot(player.plane_x, player.plane_y) == pytest.approx(0.66)
    player.rotate(-0.04)
    assert player.dir_x == pytest.approx(0.0, abs=1e-12)
    assert player.dir_y == pytest.approx(-1.0)


def test_move_forward_in_open_space():
    grid = _room("E")
    player = _player("E")
    assert player.move(grid, forward=True) is True
    assert player.x == pytest.approx(1.5 + MOVE_SPEED)
    assert player.y == 1.5
    assert grid[1][1] == "E"


def test_move_back_then_forward_returns():
    grid = _room("E")
    player = _player("E")
    player.move(grid, forward=True)
    player.move(grid, forward=False)
    assert player.x == pytest.approx(1.5)


def test_move_into_wall_is_blocked():
    grid = _room("W")
    player = _player("W")
    for _ in range(20):
        player.move(grid, forward=True)
    assert player.x >= 1.0
    assert grid[1][0] == "1"
    assert grid[int(player.y)][int(player.x)] == "W"


def test_strafe_marker_follows_player():
    grid = _room("N")
    player = _player("N")
    for _ in range(10):
        player.strafe(grid, left=False)
    assert player.x > 1.5
    assert player.y == pytest.approx(1.5)
    assert grid[int(player.y)][int(player.x)] == "N"
    assert sum(row.count("N") for row in grid) == 1


def test_strafe_left_into_wall_is_blocked():
    grid = _room("N")
    player = _player("N")
    for _ in range(20):
        player.strafe(grid, left=True)
    assert int(player.x) == 1


def test_cast_ray_straight_east():
    grid = _room("E")
    hit = cast_ray(grid, _player("E"), 0.0)
    assert hit.orientation is Orientation.EAST
    assert hit.side == 0
    assert (hit.map_x, hit.map_y) == (4, 1)
    assert hit.distance == pytest.approx(2.5)
    assert 0.0 <= hit.wall_x < 1.0


def test_cast_ray_north_hits_north_face():
    grid = _room("N")
    hit = cast_ray(grid, _player("N"), 0.0)
    assert hit.orientation is Orientation.NORTH
    assert hit.side == 1
    assert grid[hit.map_y][hit.map_x] == "1"


@pytest.mark.parametrize("distance", [0.3, 1.0, 2.5, 10.0])
def test_line_bounds_stay_on_screen(distance):
    height, start, end = line_bounds(distance, 100)
    assert 0 <= start <= end <= 99
    assert height >= 0


def test_line_bounds_zero_distance_fills_screen():
    _, start, end = line_bounds(0.0, 80)
    assert (start, end) == (0, 79)


def test_render_frame_colours():
    grid = _room("E")
    player = _player("E")
    frame = Image(16, 20)
    textures = [_solid(0x110000), _solid(0x220000), _solid(0x330000), _solid(0x440000)]
    render_frame(frame, grid, player, textures, floor=0x00AA00, ceiling=0x0000BB)
    assert frame.get_pixel(8, 0) == 0x0000BB
    assert frame.get_pixel(8, 19) == 0x00AA00
    assert frame.get_pixel(8, 10) == 0x330000