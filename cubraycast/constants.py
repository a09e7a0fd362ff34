"""Shared constants, direction and speed enums, and colour packing."""

from enum import IntEnum

SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480

TILE_SIZE = 512
NUM_RAYS = 320
ROTATION_SPEED = 0.025

IMG_SIZE = 64
GUN_SIZE = 240
COMPASS_SIZE = 16

WALK_SPEED = 0.005
RUN_SPEED = 0.01

PIXEL_SIZE = 128
VIEW_DIST = 4


class Direction(IntEnum):
    """Facing of the player at spawn time."""

    NO = 1
    SO = 2
    EA = 3
    WE = 4


class SpeedMode(IntEnum):
    """Movement pace of the player."""

    RUN = 5
    WALK = 6


def rgb_to_int(r, g, b):
    """Pack three channel values into a single 0xRRGGBB integer."""
    return (r << 16) | (g << 8) | b