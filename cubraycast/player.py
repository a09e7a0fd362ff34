"""Player state, spawning, key handling and collision-checked movement."""

import math
from dataclasses import dataclass
from enum import IntEnum

from .constants import RUN_SPEED, WALK_SPEED, Direction, SpeedMode
from .scene import MapError

MANY_PLAYERS = "Only one player is accepted"
NO_PLAYER = "One player character is needed"
ESCAPE_QUIT = "Game quit with ESC key"

# Camera vectors (dir_x, dir_y, plane_x, plane_y) for each spawn facing.
_CAMERAS = {
    Direction.NO: (0.0, -1.0, 0.66, 0.0),
    Direction.SO: (0.0, 1.0, -0.66, 0.0),
    Direction.EA: (1.0, 0.0, 0.0, 0.66),
    Direction.WE: (-1.0, 0.0, 0.0, -0.66),
}


class Key(IntEnum):
    """Keyboard keys the game reacts to, as X11 keysym values."""

    ESCAPE = 0xFF1B
    LEFT = 0xFF51
    RIGHT = 0xFF53
    SHIFT_L = 0xFFE1
    A = 0x61
    D = 0x64
    F = 0x66
    S = 0x73
    W = 0x77


class QuitRequested(Exception):
    """Raised when the player asks to leave the game."""


def is_valid_pos(grid, width, height, x, y, bonus):
    """True when (x, y) is inside the map margins and, with bonus, not in a wall."""
    if x <= 0.2 or x >= width - 1.2:
        return False
    if y <= 0.2 or y >= height - 1.2:
        return False
    if bonus and grid[int(y)][int(x)] > "0":
        return False
    return True


@dataclass
class Player:
    """Position, camera and input state of the player."""

    x: float
    y: float
    nswe: Direction = Direction.NO
    dir_x: float = 0.0
    dir_y: float = -1.0
    plane_x: float = 0.66
    plane_y: float = 0.0
    has_moved: int = 0
    move_x: int = 0
    move_y: int = 0
    rot_r: int = 0
    rot_l: int = 0
    sprint: int = 0
    fire: int = 0
    gauge: float = 100.0
    speed: float = WALK_SPEED
    rot_speed: float = WALK_SPEED
    bonus: bool = True

    def rotate(self, rot_dir):
        """Turn the view by rot_speed * rot_dir radians."""
        angle = self.rot_speed * rot_dir
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )
        return 1

    def validate_move(self, scene, new_x, new_y):
        """Move along each axis separately where allowed; True when anything moved."""
        moved = False
        if is_valid_pos(scene.grid, scene.width, scene.height, new_x, self.y, self.bonus):
            self.x = new_x
            moved = True
        if is_valid_pos(scene.grid, scene.width, scene.height, self.x, new_y, self.bonus):
            self.y = new_y
            moved = True
        return moved

    def move(self, scene):
        """Apply pending rotations and steps; return how many of them took effect."""
        moved = 0
        if self.rot_r:
            moved += self.rotate(self.rot_r)
        if self.rot_l:
            moved += self.rotate(self.rot_l)
        step_x = self.dir_x * self.speed
        step_y = self.dir_y * self.speed
        if self.move_y == 1:
            moved += self.validate_move(scene, self.x + step_x, self.y + step_y)
        if self.move_y == -1:
            moved += self.validate_move(scene, self.x - step_x, self.y - step_y)
        if self.move_x == -1:
            moved += self.validate_move(
                scene, self.x + self.dir_y * self.speed, self.y - self.dir_x * self.speed
            )
        if self.move_x == 1:
            moved += self.validate_move(
                scene, self.x - self.dir_y * self.speed, self.y + self.dir_x * self.speed
            )
        return moved

    def set_speed(self, mode):
        """Switch between walking and running pace."""
        if mode == SpeedMode.WALK:
            self.speed = WALK_SPEED
            self.rot_speed = WALK_SPEED
            self.sprint = 0
        elif mode == SpeedMode.RUN:
            self.speed = RUN_SPEED
            self.rot_speed = RUN_SPEED
            self.sprint = 1

    def key_press(self, key):
        """React to a key going down."""
        if key == Key.ESCAPE:
            raise QuitRequested(ESCAPE_QUIT)
        if key == Key.LEFT:
            self.rot_l -= 1
        elif key == Key.RIGHT:
            self.rot_r += 1
        elif key == Key.W:
            self.move_y = 1
        elif key == Key.S:
            self.move_y = -1
        elif key == Key.A:
            self.move_x = -1
        elif key == Key.D:
            self.move_x = 1
        elif key == Key.SHIFT_L:
            if self.gauge > 0:
                self.set_speed(SpeedMode.RUN)
        elif key == Key.F:
            self.fire = 1

    def key_release(self, key):
        """React to a key coming up."""
        if key == Key.ESCAPE:
            raise QuitRequested(ESCAPE_QUIT)
        if key == Key.W and self.move_y == 1:
            self.move_y = 0
        elif key == Key.LEFT and self.rot_l <= 1:
            self.rot_l = 0
        elif key == Key.RIGHT and self.rot_r >= -1:
            self.rot_r = 0
        elif key == Key.SHIFT_L:
            self.set_speed(SpeedMode.WALK)
        elif key == Key.S and self.move_y == -1:
            self.move_y = 0
        elif key == Key.A and self.move_x == -1:
            self.move_x = 0
        elif key == Key.D and self.move_x == 1:
            self.move_x = 0
        elif key == Key.F and self.fire == 1:
            self.fire = 0

    def update_gauge(self):
        """Refill the sprint gauge while walking, drain it while running."""
        if self.sprint == 0 and self.gauge <= 100:
            self.gauge += 0.05
        if self.sprint == 1 and self.gauge > 0:
            self.gauge -= 0.125
        if self.gauge <= 0:
            self.set_speed(SpeedMode.WALK)


def spawn_player(scene):
    """Create the player at the single spawn cell of the scene."""
    if len(scene.spawns) > 1:
        raise MapError(MANY_PLAYERS)
    if not scene.spawns:
        raise MapError(NO_PLAYER)
    x, y, facing = scene.spawns[-1]
    dir_x, dir_y, plane_x, plane_y = _CAMERAS[facing]
    return Player(
        x=x + 0.5,
        y=y + 0.5,
        nswe=facing,
        dir_x=dir_x,
        dir_y=dir_y,
        plane_x=plane_x,
        plane_y=plane_y,
    )