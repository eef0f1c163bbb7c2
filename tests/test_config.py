import re

import pytest

from cubscape.config import (
    ConfigError,
    SceneConfig,
    check_commas_and_spacing,
    check_map_path,
    check_texture_path,
    load_scene,
    parse_color,
    read_config,
)
from cubscape.image import trgb
from cubscape.mapfile import MapFileError
from cubscape.walls import MapError, PlayerStart


@pytest.fixture
def textures(tmp_path):
    paths = {}
    for name in ("north", "south", "east", "west"):
        path = tmp_path / f"{name}.xpm"
        path.write_text("/* XPM */\n")
        paths[name] = str(path)
    return paths


def _config_lines(t, floor="220,100,0", ceiling="225,30,0"):
    return [
        f"NO {t['north']}\n",
        f"SO {t['south']}\n",
        f"WE {t['west']}\n",
        f"EA {t['east']}\n",
        "\n",
        f"F {floor}\n",
        f"C {ceiling}\n",
    ]


# --- colours ---------------------------------------------------------------

@pytest.mark.parametrize("text", ["1,2,3", " 1 , 2 ,3 ", "\t255,0,\t0\t", "1,2,3,"])
def test_commas_and_spacing_accepts(text):
    assert check_commas_and_spacing(text) is True


@pytest.mark.parametrize("text", ["1,,3", "1,2", "a,2,3", "1 2,3,4", "", "1,2,"])
def test_commas_and_spacing_rejects(text):
    assert check_commas_and_spacing(text) is False


def test_parse_color_values():
    assert parse_color("220,100,0") == trgb(0, 220, 100, 0)
    assert parse_color(" 1 , 2 , 3 ") == trgb(0, 1, 2, 3)
    assert parse_color("0,0,0") == 0


def test_parse_color_white_matches_format():
    assert parse_color("255,255,255") == 0xFFFFFF


@pytest.mark.parametrize(
    "text",
    ["256,0,0", "0255,0,0", "1,2,3,4", "-1,0,0", "1,2", "1,2,3,", "x,y,z", ""],
)
def test_parse_color_rejects(text):
    with pytest.raises(ConfigError, match="Wrong color config"):
        parse_color(text)


# --- paths -----------------------------------------------------------------

def test_check_map_path_valid(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("x")
    assert check_map_path(path) is None


def test_check_map_path_short_name():
    with pytest.raises(ConfigError, match="File name too short"):
        check_map_path("a.c")


def test_check_map_path_wrong_extension(tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("x")
    with pytest.raises(ConfigError, match="Wrong file extension"):
        check_map_path(path)


def test_check_map_path_missing(tmp_path):
    with pytest.raises(ConfigError, match="Can't open file"):
        check_map_path(tmp_path / "missing.cub")


def test_check_map_path_empty(tmp_path):
    path = tmp_path / "empty.cub"
    path.write_text("")
    with pytest.raises(ConfigError, match=re.escape("Empty file / Name is a directory")):
        check_map_path(path)


def test_check_map_path_directory(tmp_path):
    path = tmp_path / "dir.cub"
    path.mkdir()
    with pytest.raises(ConfigError, match="Name is a directory"):
        check_map_path(path)


def test_check_texture_path_errors(tmp_path):
    with pytest.raises(ConfigError, match="Texture File name too short"):
        check_texture_path("a.x")
    png = tmp_path / "wall.png"
    png.write_text("x")
    with pytest.raises(ConfigError, match="Wrong texture file extension"):
        check_texture_path(png)
    with pytest.raises(ConfigError, match="Can't open texture file"):
        check_texture_path(tmp_path / "nothing.xpm")
    empty = tmp_path / "empty.xpm"
    empty.write_text("")
    with pytest.raises(ConfigError, match="Empty texture file"):
        check_texture_path(empty)


def test_check_texture_path_valid(textures):
    assert check_texture_path(textures["north"]) is None


# --- read_config -------------------------------------------------------------

def test_read_config_valid(textures):
    config = read_config(_config_lines(textures))
    assert config == SceneConfig(
        north=textures["north"],
        south=textures["south"],
        east=textures["east"],
        west=textures["west"],
        floor=trgb(0, 220, 100, 0),
        ceiling=trgb(0, 225, 30, 0),
    )
    assert config.texture_paths == (
        textures["north"],
        textures["south"],
        textures["east"],
        textures["west"],
    )


def test_read_config_trims_whitespace(textures):
    lines = _config_lines(textures)
    lines[0] = f"   NO\t\t {textures['north']}  \t\n"
    lines[5] = "\t F  10, 20 ,30\n"
    config = read_config(lines)
    assert config.north == textures["north"]
    assert config.floor == trgb(0, 10, 20, 30)


def test_read_config_last_line_without_newline(textures):
    lines = _config_lines(textures)
    lines[-1] = "C 1,2,3"
    assert read_config(lines).ceiling == trgb(0, 1, 2, 3)


def test_read_config_duplicate_texture(textures):
    lines = _config_lines(textures) + [f"NO {textures['north']}\n"]
    with pytest.raises(ConfigError, match="More than one NO value"):
        read_config(lines)


def test_read_config_duplicate_colors(textures):
    with pytest.raises(ConfigError, match="Only one floor color needed"):
        read_config(_config_lines(textures) + ["F 1,2,3\n"])
    with pytest.raises(ConfigError, match="Only one ceiling color needed"):
        read_config(_config_lines(textures) + ["C 1,2,3\n"])


def test_read_config_missing_texture(textures):
    lines = [line for line in _config_lines(textures) if not line.startswith("WE")]
    with pytest.raises(ConfigError, match="No WEST texture"):
        read_config(lines)


def test_read_config_missing_colors(textures):
    lines = [line for line in _config_lines(textures) if not line.startswith("F")]
    with pytest.raises(ConfigError, match="No Floor color"):
        read_config(lines)
    lines = [line for line in _config_lines(textures) if not line.startswith("C")]
    with pytest.raises(ConfigError, match="No Ceiling color"):
        read_config(lines)


def test_read_config_line_too_short(textures):
    lines = _config_lines(textures)
    lines[5] = "F 1"
    with pytest.raises(ConfigError, match="Line too short"):
        read_config(lines)


def test_read_config_bad_color(textures):
    with pytest.raises(ConfigError, match="Wrong color config"):
        read_config(_config_lines(textures, floor="256,0,0"))


def test_read_config_bad_texture_paths(tmp_path, textures):
    lines = _config_lines(textures)
    lines[0] = "NO ./north.png\n"
    with pytest.raises(ConfigError, match="Wrong texture file extension"):
        read_config(lines)
    lines[0] = f"NO {tmp_path / 'absent.xpm'}\n"
    with pytest.raises(ConfigError, match="Can't open texture file"):
        read_config(lines)


# --- load_scene ----------------------------------------------------------------

def _write_scene(tmp_path, textures, map_rows, name="scene.cub"):
    path = tmp_path / name
    path.write_text("".join(_config_lines(textures)) + "\n" + "".join(map_rows))
    return path


def test_load_scene(tmp_path, textures):
    rows = ["111111\n", "100101\n", "1N0001\n", "111111\n"]
    scene = load_scene(_write_scene(tmp_path, textures, rows))
    assert scene.grid == ["111111", "100101", "1N0001", "111111"]
    assert scene.start == PlayerStart(1, 2, "N")
    assert scene.config.floor == trgb(0, 220, 100, 0)
    assert scene.config.ceiling == trgb(0, 225, 30, 0)


def test_load_scene_pads_short_rows(tmp_path, textures):
    rows = ["1111111\n", "1S0001\n", "111111\n"]
    scene = load_scene(_write_scene(tmp_path, textures, rows))
    assert {len(row) for row in scene.grid} == {7}
    assert scene.start.facing == "S"


def test_load_scene_open_map(tmp_path, textures):
    rows = ["111\n", "1N0\n", "111\n"]
    with pytest.raises(MapError, match="Open map"):
        load_scene(_write_scene(tmp_path, textures, rows))


def test_load_scene_text_after_map(tmp_path, textures):
    rows = ["111\n", "1N1\n", "111\n", "\n", "hello\n"]
    with pytest.raises(MapFileError, match="Wrong map configuration"):
        load_scene(_write_scene(tmp_path, textures, rows))


def test_load_scene_no_map(tmp_path, textures):
    with pytest.raises(MapFileError, match="No map"):
        load_scene(_write_scene(tmp_path, textures, []))


def test_load_scene_wrong_extension(tmp_path, textures):
    path = _write_scene(tmp_path, textures, ["111\n", "1N1\n", "111\n"], name="scene.txt")
    with pytest.raises(ConfigError, match="Wrong file extension"):
        load_scene(path)