import pytest

from cubscape.xpm import (
    XpmError,
    load_xpm,
    parse_xpm,
    quoted_lines,
    split_words,
    strip_comments,
    text_to_rgb,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"2 2 3 1",
"a c #FF0000",
"b c white",
". c None",
// pixels
"ab",
".a"
};
"""


def test_split_words_spaces_and_tabs():
    assert split_words("  12\t 34   5 \t") == ["12", "34", "5"]
    assert split_words(" \t ") == []


def test_strip_comments_keeps_length_and_quotes():
    text = '/* head */ "a /* kept */" // tail\n"b"'
    stripped = strip_comments(text)
    assert len(stripped) == len(text)
    assert "head" not in stripped and "tail" not in stripped
    assert list(quoted_lines(stripped)) == ["a /* kept */", "b"]


def test_strip_comments_unterminated_block():
    assert strip_comments('"x" /* open').strip() == '"x"'


def test_quoted_lines():
    assert list(quoted_lines('{"one", "two"}, "unterminated')) == ["one", "two"]


def test_text_to_rgb():
    assert text_to_rgb("#FF0000", None) == 0xFF0000
    assert text_to_rgb("white", None) == 0xFFFFFF
    assert text_to_rgb("GHOST", "white") == 0xF8F8FF
    assert text_to_rgb("None", None) == -1
    assert text_to_rgb("not-a-colour", None) == 0
    assert text_to_rgb("#zz", None) == 0


def test_load_xpm(tmp_path):
    path = tmp_path / "sample.xpm"
    path.write_text(SAMPLE)
    image = load_xpm(path)
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == 0xFFFFFF
    assert image.get_pixel(0, 1) == 0xFF000000
    assert image.get_pixel(1, 1) == 0xFF0000


def test_parse_xpm_multi_char_keys():
    image = parse_xpm(["3 1 2 3", "aaa c #0000FF", "bbb c black", "bbbaaabbb"])
    assert [image.get_pixel(x, 0) for x in range(3)] == [0, 0x0000FF, 0]


def test_parse_xpm_unknown_key_is_black():
    image = parse_xpm(["1 1 1 1", "a c #FFFFFF", "z"])
    assert image.get_pixel(0, 0) == 0


@pytest.mark.parametrize(
    "lines",
    [
        ["0 1 1 1", "a c black", "a"],
        ["1 1 1", "a c black", "a"],
        ["1 1 1 1", "a black", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c black", "a"],
        [],
    ],
)
def test_parse_xpm_errors(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_load_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")