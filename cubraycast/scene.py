"""Parsing and validation of .cub scene files."""

from dataclasses import dataclass
from pathlib import Path

from .constants import Direction, rgb_to_int
from .mapfile import (
    is_invalid,
    is_player,
    map_lines,
    parse_int,
    split_nonempty,
    tokenize,
)

GUN_TEXTURE = "./textures/gun_final.xpm"
GUN_FIRE_TEXTURE = "./textures/gun_fire.xpm"

PARSE_ERROR = "Parsing error, make sure the map is valid"
INVALID_FILE = "Make sure the map file is valid"
OPEN_ERROR = "File cannot be opened"

_TEXTURE_ORDER = ("NO", "SO", "WE", "EA")
_ALLOWED_MAP_CHARS = frozenset("NWSE10 \n")
_PLAYER_DIRECTIONS = {
    "N": Direction.NO,
    "S": Direction.SO,
    "W": Direction.WE,
    "E": Direction.EA,
}
_CLEAR_PLAYERS = str.maketrans({c: "0" for c in _PLAYER_DIRECTIONS})


class MapError(ValueError):
    """Raised when a scene file is unreadable or describes an invalid scene."""


@dataclass(frozen=True)
class Scene:
    """A validated scene: texture paths, colours and the rectangular map."""

    north: str
    south: str
    west: str
    east: str
    floor: int
    ceiling: int
    lines: tuple
    grid: tuple
    width: int
    height: int
    spawns: tuple
    gun: str = GUN_TEXTURE
    gun_fire: str = GUN_FIRE_TEXTURE


def square_map(lines, width, height, fill):
    """Make the map rectangular: spaces and missing cells become fill."""
    return [line.replace(" ", fill).ljust(width, fill) for line in lines[:height]]


def check_invalids(lines):
    """True when the raw map lines hold only cells, spaces and newlines."""
    return all(c in _ALLOWED_MAP_CHARS for line in lines for c in line)


def _enclosed(grid, y, x):
    """True when every neighbour of (x, y) exists and is not outside space."""
    if y < 1 or x < 1 or y + 1 >= len(grid):
        return False
    for dy in (-1, 0, 1):
        row = grid[y + dy]
        for dx in (-1, 0, 1):
            if dy == 0 and dx == 0:
                continue
            if x + dx >= len(row) or row[x + dx] == "G":
                return False
    return True


def check_map(grid):
    """True when a 'G'-filled map has only valid cells and is closed by walls."""
    for y, row in enumerate(grid):
        for x, c in enumerate(row):
            if is_invalid(c):
                return False
            if (c == "0" or is_player(c)) and not _enclosed(grid, y, x):
                return False
    return True


def _rgb_spec(token, key):
    stripped = token.lstrip(" ")
    if stripped[:1] == key and stripped[1:2] == " ":
        return stripped[2:]
    return None


def parse_rgb(tokens, key):
    """Return the packed colour of the single 'key r,g,b' line."""
    specs = [spec for spec in (_rgb_spec(t, key) for t in tokens) if spec is not None]
    if len(specs) != 1:
        raise MapError(INVALID_FILE)
    parts = split_nonempty(specs[0], ",")
    if len(parts) != 3 or not all(0 <= parse_int(p) <= 255 for p in parts):
        raise MapError(INVALID_FILE)
    red, green, blue = (parse_int(p) for p in parts)
    return rgb_to_int(red, green, blue)


def parse_textures(tokens):
    """Map each wall identifier to its texture path; each must appear once."""
    paths = {}
    for ident in _TEXTURE_ORDER:
        positions = [i for i, token in enumerate(tokens) if token == ident]
        if len(positions) != 1 or positions[0] + 1 >= len(tokens):
            raise MapError(INVALID_FILE)
        paths[ident] = tokens[positions[0] + 1]
    return paths


def find_player(grid):
    """List (x, y, direction) for every player cell, in row order."""
    return [
        (x, y, _PLAYER_DIRECTIONS[c])
        for y, row in enumerate(grid)
        for x, c in enumerate(row)
        if is_player(c)
    ]


def parse_scene(text):
    """Parse and validate the contents of a scene file."""
    tokens = tokenize(text)
    lines = map_lines(tokens)
    if not lines:
        raise MapError(PARSE_ERROR)
    width = max(len(line) for line in lines)
    height = len(lines)
    grid = square_map(lines, width, height, "1")
    textures = parse_textures(tokens)
    floor = parse_rgb(tokens, "F")
    ceiling = parse_rgb(tokens, "C")
    if not check_invalids(lines):
        raise MapError(INVALID_FILE)
    if not check_map(square_map(lines, width, height, "G")):
        raise MapError(INVALID_FILE)
    spawns = find_player(grid)
    return Scene(
        north=textures["NO"],
        south=textures["SO"],
        west=textures["WE"],
        east=textures["EA"],
        floor=floor,
        ceiling=ceiling,
        lines=tuple(lines),
        grid=tuple(row.translate(_CLEAR_PLAYERS) for row in grid),
        width=width,
        height=height,
        spawns=tuple(spawns),
    )


def load_scene(path):
    """Read a scene file from disk and parse it."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise MapError(OPEN_ERROR) from exc
    return parse_scene(text)