"""Game state, per-tick update, rendering and the command-line entry point."""

import sys

from .constants import (
    COMPASS_SIZE,
    GUN_SIZE,
    IMG_SIZE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    Direction,
)
from .mapfile import is_cub
from .player import Key, QuitRequested, spawn_player
from .raycaster import cast_rays
from .render import compose_frame, draw_gun, draw_minimap, minimap_grid
from .scene import MapError, load_scene
from .textures import load_xpm

GUN_KEY = "gun"
GUN_FIRE_KEY = "gun_fire"
COMPASS_KEY = "compass"
COMPASS_TEXTURE = "./textures/north_mm.xpm"

RED = "\033[0;31m"
RST = "\033[0m"

FORMAT_ERROR = "Format must be ./cub3D maps/map_name.cub"
EXTENSION_ERROR = "Make sure the input map file is .cub"
XPM_ERROR = "Mlx_xpm_file_to_image error"
GAME_ENDED = "Game ended successfully"

MOUSE_DEAD_ZONE = 100
MOUSE_TURN = 0.75


def _report(msg):
    print(f"{RED}ERROR\n{msg}{RST}")


def mouse_rotation(x):
    """Rotation step for a mouse at column x: right, left or none."""
    centre = SCREEN_WIDTH // 2
    if x > centre + MOUSE_DEAD_ZONE:
        return MOUSE_TURN
    if x < centre - MOUSE_DEAD_ZONE:
        return -MOUSE_TURN
    return 0.0


class Game:
    """A running game: scene, textures, player and the current wall layer."""

    def __init__(self, scene, textures, bonus=False):
        self.scene = scene
        self.textures = dict(textures)
        self.bonus = bonus
        self.img_size = IMG_SIZE
        self.player = spawn_player(scene)
        self.player.bonus = bonus
        self._showing_fire = False
        self.tex_pix = self._cast()

    def _cast(self):
        return cast_rays(self.player, self.scene, self.textures, self.img_size)

    def tick(self, mouse_x=None):
        """Advance one step; True when the view changed and must be redrawn."""
        if self.bonus and mouse_x is not None:
            turn = mouse_rotation(mouse_x)
            if turn:
                self.player.rotate(turn)
        self.player.has_moved += self.player.move(self.scene)
        if self.player.has_moved == 0:
            return False
        self.player.update_gauge()
        self.tex_pix = self._cast()
        return True

    def _next_gun(self):
        if self.player.fire == 0 or self._showing_fire:
            self._showing_fire = False
            return self.textures.get(GUN_KEY)
        self._showing_fire = True
        return self.textures.get(GUN_FIRE_KEY)

    def render(self):
        """Compose the current frame."""
        frame = compose_frame(self.tex_pix, self.scene.ceiling, self.scene.floor)
        if self.bonus:
            gun = self._next_gun()
            if gun is not None:
                draw_gun(frame, gun)
            draw_minimap(
                frame,
                minimap_grid(self.player, self.scene),
                self.textures.get(COMPASS_KEY),
            )
        return frame


def _load_textures(scene, bonus):
    textures = {
        GUN_KEY: load_xpm(scene.gun, GUN_SIZE),
        GUN_FIRE_KEY: load_xpm(scene.gun_fire, GUN_SIZE),
        Direction.NO: load_xpm(scene.north, IMG_SIZE),
        Direction.SO: load_xpm(scene.south, IMG_SIZE),
        Direction.EA: load_xpm(scene.east, IMG_SIZE),
        Direction.WE: load_xpm(scene.west, IMG_SIZE),
    }
    if bonus:
        textures[COMPASS_KEY] = load_xpm(COMPASS_TEXTURE, COMPASS_SIZE)
    return textures


def _present(pygame, screen, frame):
    surface = pygame.image.frombuffer(
        frame.to_rgb_bytes(), (frame.width, frame.height), "RGB"
    )
    screen.blit(surface, (0, 0))
    pygame.display.flip()


def _run(game):
    import pygame

    keymap = {
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_LSHIFT: Key.SHIFT_L,
        pygame.K_a: Key.A,
        pygame.K_d: Key.D,
        pygame.K_f: Key.F,
        pygame.K_s: Key.S,
        pygame.K_w: Key.W,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("cub3D")
        _present(pygame, screen, game.render())
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    _report(GAME_ENDED)
                    return 0
                if event.type in (pygame.KEYDOWN, pygame.KEYUP):
                    key = keymap.get(event.key)
                    if key is None:
                        continue
                    if event.type == pygame.KEYDOWN:
                        game.player.key_press(key)
                    else:
                        game.player.key_release(key)
            mouse_x = None
            if game.bonus:
                mouse_x, _ = pygame.mouse.get_pos()
                if mouse_x < 0 or mouse_x > SCREEN_WIDTH:
                    pygame.mouse.set_pos(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
            if game.tick(mouse_x):
                _present(pygame, screen, game.render())
    except QuitRequested as exc:
        _report(str(exc))
        return 1
    finally:
        pygame.quit()


def main(argv=None):
    """Run the game on a .cub scene file; pass --bonus for minimap, gun and mouse look."""
    args = list(sys.argv[1:] if argv is None else argv)
    bonus = "--bonus" in args
    args = [arg for arg in args if arg != "--bonus"]
    if len(args) != 1:
        _report(FORMAT_ERROR)
        return 255
    if not is_cub(args[0]):
        _report(EXTENSION_ERROR)
        return 255
    try:
        scene = load_scene(args[0])
        game_scene = scene
    except MapError as exc:
        _report(str(exc))
        return 1
    try:
        textures = _load_textures(game_scene, bonus)
    except (OSError, ValueError):
        _report(XPM_ERROR)
        return 1
    try:
        game = Game(game_scene, textures, bonus)
    except MapError as exc:
        _report(str(exc))
        return 1
    return _run(game)