import pytest

from cubscape.walls import (
    MapError,
    PlayerStart,
    check_map_border,
    check_side_walls,
    check_wall_gaps,
    check_walls,
    find_player,
    is_player,
    pad_map,
    parse_map,
    validate_closure,
)

CLOSED = ["1111", "1N01", "1111"]
OPEN_BOTTOM = ["111", "101", "10"]
IRREGULAR = [" 111", "11N1", "1111"]
SPACE_BESIDE_FLOOR = [" 111", "10 1", "1111"]


def test_closed_rectangle_passes_strict_check():
    assert check_walls(CLOSED) is True
    assert validate_closure(CLOSED) is True
    assert check_map_border(CLOSED) is True


def test_open_bottom_fails_every_check():
    assert check_walls(OPEN_BOTTOM) is False
    assert validate_closure(OPEN_BOTTOM) is False
    assert check_map_border(OPEN_BOTTOM) is False


def test_wall_gaps():
    assert check_wall_gaps(["11", "1101"]) is False
    assert check_wall_gaps(["1101", "11"]) is False
    assert check_wall_gaps(["111", "11"]) is True


def test_side_walls_reject_empty_inner_row():
    assert check_side_walls(["111", "", "111"]) is False
    assert check_side_walls(["111", "0 1", "111"]) is False
    assert check_side_walls(["111", " 11", "111"]) is True


def test_space_next_to_floor_fails_border_check():
    assert check_map_border(["1111", "10 1", "1111"]) is False
    assert validate_closure(SPACE_BESIDE_FLOOR) is True
    assert check_map_border(SPACE_BESIDE_FLOOR) is False


def test_pad_map():
    padded = pad_map(["1 1", "1"])
    assert padded == ["111", "111"]
    assert all(len(row) == len(padded[0]) for row in padded)
    assert all(" " not in row for row in pad_map(IRREGULAR))


def test_is_player():
    assert all(is_player(c) for c in "NSEW")
    assert not any(is_player(c) for c in "10 X")
    assert is_player("") is False


def test_find_player():
    assert find_player(CLOSED) == PlayerStart(1, 1, "N")


def test_find_player_none():
    with pytest.raises(MapError, match="One player needed"):
        find_player(["111", "101", "111"])


def test_find_player_two():
    with pytest.raises(MapError, match="One player only"):
        find_player(["1111", "1NS1", "1111"])


def test_parse_closed_map():
    grid, start = parse_map(CLOSED)
    assert grid == CLOSED
    assert start == PlayerStart(1, 1, "N")


def test_parse_irregular_map_is_padded():
    grid, start = parse_map(IRREGULAR)
    assert grid == pad_map(IRREGULAR)
    assert grid[start.y][start.x] == start.facing == "N"


def test_parse_inner_space_becomes_wall():
    grid, start = parse_map(["11111", "1W0 1", "11111"])
    assert grid[1] == "1W011"
    assert start.facing == "W"


def test_parse_open_map():
    with pytest.raises(MapError, match="Open map"):
        parse_map(OPEN_BOTTOM)


def test_parse_map_with_space_beside_floor():
    with pytest.raises(MapError, match="Open map"):
        parse_map(SPACE_BESIDE_FLOOR)


def test_parse_empty_map():
    with pytest.raises(MapError, match="No map"):
        parse_map([])


def test_parse_without_player():
    with pytest.raises(MapError, match="One player needed"):
        parse_map(["111", "101", "111"])