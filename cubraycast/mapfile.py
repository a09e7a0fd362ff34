"""Tokenising of scene description files and helpers for the map section."""

import re

TEXTURE_IDS = ("NO", "SO", "EA", "WE")
PLAYER_CHARS = frozenset("NSEW")
MAP_CHARS = frozenset("10NSEWG")

_ATOI_SPACE = frozenset("\t\n\v\f\r ")
_PATH_RE = re.compile(r"[^ \t]*")


def split_nonempty(text, sep):
    """Split text on sep, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def parse_int(text):
    """Read a leading decimal integer, atoi style; 0 when there is none."""
    pos = 0
    while pos < len(text) and text[pos] in _ATOI_SPACE:
        pos += 1
    negative = False
    if pos < len(text) and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1
    value = 0
    while pos < len(text) and "0" <= text[pos] <= "9":
        value = value * 10 + (ord(text[pos]) - ord("0"))
        pos += 1
    return -value if negative else value


def _texture_split(line):
    """Return (identifier, path) for a texture line, or None."""
    stripped = line.lstrip(" \t")
    if stripped[:2] in TEXTURE_IDS and stripped[2:3] == " ":
        path = _PATH_RE.match(stripped, 3).group()
        return stripped[:2], path
    return None


def tokenize(text):
    """Turn file contents into tokens: texture lines give id and path, others the whole line."""
    tokens = []
    for line in split_nonempty(text, "\n"):
        texture = _texture_split(line)
        if texture is None:
            tokens.append(line)
        else:
            tokens.extend(texture)
    return tokens


def has_extension(path, ext):
    """True when path ends with the given extension, dot included."""
    return path.endswith(ext)


def is_cub(path):
    return has_extension(path, ".cub")


def is_xpm(path):
    return has_extension(path, ".xpm")


def is_png(path):
    return has_extension(path, ".png")


def is_player(c):
    return c in PLAYER_CHARS


def is_invalid(c):
    """True for any character that cannot appear in a map cell."""
    return c not in MAP_CHARS


def is_map_line(s):
    """True when every character is a map cell or a space."""
    return all(c == " " or not is_invalid(c) for c in s)


def map_start(tokens):
    """Index of the first token that begins the map, or None."""
    for index, token in enumerate(tokens):
        if "1" in token and is_map_line(token):
            return index
    return None


def map_lines(tokens):
    """Tokens from the start of the map to the end; empty when there is no map."""
    start = map_start(tokens)
    return [] if start is None else list(tokens[start:])


def map_width(tokens):
    """Length of the longest map line."""
    return max((len(line) for line in map_lines(tokens)), default=0)


def map_height(tokens):
    """Number of map lines."""
    return len(map_lines(tokens))


def pad_line(line, width):
    """Pad a map line with spaces up to width."""
    return line.ljust(width)