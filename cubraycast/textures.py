"""Loading of XPM images into square texture buffers."""

import re
from dataclasses import dataclass
from pathlib import Path

from .constants import rgb_to_int

TRANSPARENT = -1

_TOKEN_RE = re.compile(r'/\*.*?\*/|"((?:[^"\\]|\\.)*)"', re.DOTALL)
_CONTEXT_KEYS = ("c", "g", "g4", "m", "s")
_PREFERRED_KEYS = ("c", "g", "g4", "m")
_NAMED_COLORS = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
    "yellow": 0xFFFF00,
    "cyan": 0x00FFFF,
    "magenta": 0xFF00FF,
    "gray": 0xBEBEBE,
    "grey": 0xBEBEBE,
}


@dataclass(frozen=True)
class Texture:
    """A square image stored row by row as packed 0xRRGGBB integers."""

    size: int
    pixels: tuple

    def __post_init__(self):
        if self.size <= 0 or len(self.pixels) != self.size * self.size:
            raise ValueError("texture pixel count does not match its size")

    def at(self, x, y):
        """Colour at column x, row y."""
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError(f"pixel ({x}, {y}) outside a {self.size}px texture")
        return self.pixels[y * self.size + x]


def _hex_color(digits):
    if len(digits) not in (3, 6, 9, 12) or any(
        c not in "0123456789abcdef" for c in digits
    ):
        raise ValueError(f"bad colour #{digits}")
    width = len(digits) // 3
    channels = [int(digits[i : i + width], 16) for i in range(0, len(digits), width)]
    if width == 1:
        channels = [value * 17 for value in channels]
    else:
        channels = [value >> (4 * (width - 2)) for value in channels]
    return rgb_to_int(*channels)


def _color_value(value):
    value = value.strip().lower()
    if value == "none":
        return TRANSPARENT
    if value.startswith("#"):
        return _hex_color(value[1:])
    name = value.replace(" ", "")
    if name not in _NAMED_COLORS:
        raise ValueError(f"unknown colour {value!r}")
    return _NAMED_COLORS[name]


def _parse_color_spec(spec):
    contexts = {}
    key = None
    for word in spec.split():
        if word in _CONTEXT_KEYS and (key is None or contexts[key]):
            key = word
            contexts[key] = []
        elif key is None:
            raise ValueError(f"malformed colour entry {spec!r}")
        else:
            contexts[key].append(word)
    for preferred in _PREFERRED_KEYS:
        if contexts.get(preferred):
            return _color_value(" ".join(contexts[preferred]))
    raise ValueError(f"colour entry without a colour: {spec!r}")


def _parse_xpm(text):
    strings = [m.group(1) for m in _TOKEN_RE.finditer(text) if m.group(1) is not None]
    if not strings:
        raise ValueError("not an XPM image")
    try:
        width, height, ncolors, cpp = (int(v) for v in strings[0].split()[:4])
    except ValueError as exc:
        raise ValueError("malformed XPM header") from exc
    if min(width, height, ncolors, cpp) <= 0:
        raise ValueError("malformed XPM header")
    color_lines = strings[1 : 1 + ncolors]
    pixel_lines = strings[1 + ncolors : 1 + ncolors + height]
    if len(color_lines) != ncolors or len(pixel_lines) != height:
        raise ValueError("truncated XPM image")
    palette = {line[:cpp]: _parse_color_spec(line[cpp:]) for line in color_lines}
    rows = []
    for line in pixel_lines:
        if len(line) < width * cpp:
            raise ValueError("short XPM pixel row")
        try:
            rows.append(
                [palette[line[i : i + cpp]] for i in range(0, width * cpp, cpp)]
            )
        except KeyError as exc:
            raise ValueError(f"undefined XPM colour {exc.args[0]!r}") from exc
    return width, height, rows


def load_xpm(path, size):
    """Load the top-left size x size pixels of an XPM file."""
    if size <= 0:
        raise ValueError("texture size must be positive")
    text = Path(path).read_text(encoding="latin-1")
    width, height, rows = _parse_xpm(text)
    if width < size or height < size:
        raise ValueError(f"{path}: image is {width}x{height}, need {size}x{size}")
    pixels = tuple(color for row in rows[:size] for color in row[:size])
    return Texture(size, pixels)