"""Frame composition: floor and ceiling, wall layer, gun sprite and minimap."""

from dataclasses import dataclass, field

from .constants import PIXEL_SIZE, SCREEN_HEIGHT, SCREEN_WIDTH, VIEW_DIST

COLOR_PLAYER = 0xFF0000
COLOR_WALL = 0x808080
COLOR_FLOOR = 0xE6E6E6
COLOR_SPACE = 0x404040

GUN_X = 280
GUN_Y = 280
COMPASS_X = 64
COMPASS_Y = 0
BORDER_WIDTH = 5

_TILE_COLORS = {
    "P": COLOR_PLAYER,
    "1": COLOR_WALL,
    "0": COLOR_FLOOR,
    " ": COLOR_SPACE,
}


@dataclass
class Frame:
    """A screen-sized image of packed 0xRRGGBB pixels, stored row by row."""

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    pixels: list = field(default=None)

    def __post_init__(self):
        if self.pixels is None:
            self.pixels = [0] * (self.width * self.height)
        elif len(self.pixels) != self.width * self.height:
            raise ValueError("frame pixel count does not match its size")

    def draw_pix(self, x, y, color):
        """Set one pixel; points outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color

    def get(self, x, y):
        """Colour at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside the frame")
        return self.pixels[y * self.width + x]

    def to_rgb_bytes(self):
        """Pixels as packed 8-bit RGB triples."""
        data = bytearray(3 * len(self.pixels))
        data[0::3] = bytes((c >> 16) & 0xFF for c in self.pixels)
        data[1::3] = bytes((c >> 8) & 0xFF for c in self.pixels)
        data[2::3] = bytes(c & 0xFF for c in self.pixels)
        return bytes(data)


def compose_frame(tex_pix, ceiling, floor):
    """Build a frame from the wall layer, filling the rest with ceiling and floor."""
    frame = Frame()
    half = SCREEN_HEIGHT // 2
    for y, row in enumerate(tex_pix[:SCREEN_HEIGHT]):
        for x, color in enumerate(row[:SCREEN_WIDTH]):
            if color > 0:
                frame.draw_pix(x, y, color)
            elif y < half:
                frame.draw_pix(x, y, ceiling)
            elif y < SCREEN_HEIGHT - 1:
                frame.draw_pix(x, y, floor)
    return frame


def minimap_offset(view_dist, size, map_size, pos):
    """First map cell shown by the minimap along one axis."""
    if pos > view_dist and map_size - pos > view_dist + 1:
        return pos - view_dist
    if pos > view_dist and map_size - pos <= view_dist + 1:
        return map_size - size
    return 0


def minimap_grid(player, scene):
    """Rows of minimap cells around the player: 'P', '1' or '0', cut where the map ends."""
    size = 2 * VIEW_DIST + 1
    px, py = int(player.x), int(player.y)
    off_x = minimap_offset(VIEW_DIST, size, SCREEN_WIDTH, px)
    off_y = minimap_offset(VIEW_DIST, size, SCREEN_HEIGHT, py)
    rows = []
    for y in range(size):
        my = y + off_y
        cells = []
        for x in range(min(size, SCREEN_WIDTH)):
            mx = x + off_x
            if my >= scene.height or mx >= scene.width:
                break
            if (mx, my) == (px, py):
                cells.append("P")
            elif scene.grid[my][mx] in "10":
                cells.append(scene.grid[my][mx])
            else:
                break
        rows.append("".join(cells))
    return rows


def _fill_tile(frame, x, y, tile_size, color):
    for i in range(tile_size):
        for j in range(tile_size):
            frame.draw_pix(x + i, y + j, color)


def _draw_compass(frame, compass, x, y):
    for row in range(compass.size):
        for col in range(compass.size):
            color = compass.at(col, row)
            if color > 0:
                frame.draw_pix(x + col, y + row, color)


def draw_border(frame, tile_size, color):
    """Frame the minimap area with a band of the given colour."""
    size = PIXEL_SIZE + tile_size
    for y in range(size):
        for x in range(size + 1):
            if (
                x < BORDER_WIDTH
                or x > size - BORDER_WIDTH
                or y < BORDER_WIDTH
                or y > size - BORDER_WIDTH
            ):
                frame.draw_pix(x, y, color)


def draw_minimap(frame, grid, compass):
    """Paint minimap rows as tiles, the compass on top, then the border."""
    tile_size = PIXEL_SIZE // (2 * VIEW_DIST)
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            color = _TILE_COLORS.get(cell)
            if color is not None:
                _fill_tile(frame, x * tile_size, y * tile_size, tile_size, color)
            if y == 0 and x == 4 and compass is not None:
                _draw_compass(frame, compass, COMPASS_X, COMPASS_Y)
    draw_border(frame, tile_size, COLOR_SPACE)


def draw_gun(frame, gun):
    """Overlay the gun sprite at the bottom of the screen, skipping empty pixels."""
    for hy in range(min(gun.size, SCREEN_HEIGHT - GUN_Y)):
        for hx in range(gun.size):
            color = gun.at(hx, hy)
            if color > 0:
                frame.draw_pix(GUN_X + hx, GUN_Y + hy, color)