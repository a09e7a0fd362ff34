import pytest

from cubraycast.mapfile import (
    has_extension,
    is_cub,
    is_invalid,
    is_map_line,
    is_player,
    is_png,
    is_xpm,
    map_height,
    map_lines,
    map_start,
    map_width,
    pad_line,
    parse_int,
    split_nonempty,
    tokenize,
)

SAMPLE = (
    "NO ./textures/north.xpm\n"
    "SO ./textures/south.xpm\n"
    "\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
    "  111\n"
    "1101\n"
    "10N1\n"
    "1111\n"
)


def test_split_nonempty_drops_empty_pieces():
    assert split_nonempty("a,,b,", ",") == ["a", "b"]
    assert split_nonempty(",,,", ",") == []
    assert split_nonempty("", ",") == []


def test_split_nonempty_keeps_inner_spaces():
    assert split_nonempty(" 1, 2 ,3", ",") == [" 1", " 2 ", "3"]


@pytest.mark.parametrize("n", [0, 7, 255, -13, 100000])
def test_parse_int_round_trip(n):
    assert parse_int(str(n)) == n


def test_parse_int_skips_whitespace_and_stops_at_non_digit():
    assert parse_int("\t\n 12") == 12
    assert parse_int("  -42abc") == -42
    assert parse_int("+8,9") == 8


@pytest.mark.parametrize("text", ["", "abc", "-", "+-5", " x1"])
def test_parse_int_without_digits_is_zero(text):
    assert parse_int(text) == 0


def test_tokenize_splits_texture_lines():
    tokens = tokenize("NO ./tex/n.xpm extra\nF 1,2,3\n  111\n")
    assert tokens == ["NO", "./tex/n.xpm", "F 1,2,3", "  111"]


def test_tokenize_texture_line_with_leading_tab():
    assert tokenize("\tWE path/w.xpm\tjunk") == ["WE", "path/w.xpm"]


def test_tokenize_non_texture_identifier_kept_whole():
    assert tokenize("NOX a\nNO\n") == ["NOX a", "NO"]


def test_tokenize_sample_skips_blank_lines():
    tokens = tokenize(SAMPLE)
    assert "" not in tokens
    assert tokens[:4] == ["NO", "./textures/north.xpm", "SO", "./textures/south.xpm"]
    assert tokens[-1] == "1111"


def test_extensions():
    assert is_cub("maps/level.cub")
    assert not is_cub("maps/level.cub.bak")
    assert is_xpm("a.xpm") and not is_xpm("a.png")
    assert is_png("a.png") and not is_png("apng")
    assert has_extension("x.tar", ".tar")
    assert not has_extension("", ".cub")


@pytest.mark.parametrize("c", list("NSEW"))
def test_is_player_true_for_directions(c):
    assert is_player(c)
    assert not is_invalid(c)


@pytest.mark.parametrize("c", list("10G"))
def test_map_cells_not_player_but_valid(c):
    assert not is_player(c)
    assert not is_invalid(c)


@pytest.mark.parametrize("c", [" ", "X", "\n", "2"])
def test_is_invalid_rejects_others(c):
    assert is_invalid(c)


def test_is_map_line():
    assert is_map_line("1 0N")
    assert is_map_line("")
    assert not is_map_line("1X")
    assert not is_map_line("F 1,2")


def test_map_start_skips_colour_lines():
    tokens = ["NO", "a.xpm", "F 1,2,3", "111", "101", "111"]
    assert map_start(tokens) == 3
    assert map_lines(tokens) == ["111", "101", "111"]


def test_map_start_none_without_map():
    tokens = ["NO", "a.xpm", "F 1,2,3"]
    assert map_start(tokens) is None
    assert map_lines(tokens) == []
    assert map_width(tokens) == 0
    assert map_height(tokens) == 0


def test_map_dimensions_of_sample():
    tokens = tokenize(SAMPLE)
    lines = map_lines(tokens)
    assert lines == ["  111", "1101", "10N1", "1111"]
    assert map_height(tokens) == len(lines)
    assert map_width(tokens) == max(len(line) for line in lines)


def test_pad_line_pads_with_spaces():
    assert pad_line("101", 5) == "101  "
    assert pad_line("101", 3) == "101"


def test_pad_line_width_invariant():
    tokens = tokenize(SAMPLE)
    width = map_width(tokens)
    padded = [pad_line(line, width) for line in map_lines(tokens)]
    assert all(len(line) == width for line in padded)
    assert [line.rstrip(" ") for line in padded] == map_lines(tokens)