"""DDA ray casting into the map and texturing of wall columns."""

import math
from dataclasses import dataclass

from .constants import SCREEN_HEIGHT, SCREEN_WIDTH, Direction
from .player import is_valid_pos


@dataclass
class Ray:
    """One screen column's ray and the wall slice it hit."""

    camera_x: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    map_x: int = 0
    map_y: int = 0
    step_x: int = 0
    step_y: int = 0
    sidedist_x: float = 0.0
    sidedist_y: float = 0.0
    deltadist_x: float = 0.0
    deltadist_y: float = 0.0
    wall_dist: float = 0.0
    wall_x: float = 0.0
    side: int = 0
    line_height: int = 0
    draw_start: int = 0
    draw_end: int = 0


def _delta(component):
    return math.inf if component == 0 else abs(1 / component)


def _setup(ray, player, x):
    ray.camera_x = 2 * x / SCREEN_WIDTH - 1
    ray.dir_x = player.dir_x + player.plane_x * ray.camera_x
    ray.dir_y = player.dir_y + player.plane_y * ray.camera_x
    ray.map_x = int(player.x)
    ray.map_y = int(player.y)
    ray.deltadist_x = _delta(ray.dir_x)
    ray.deltadist_y = _delta(ray.dir_y)
    if ray.dir_x < 0:
        ray.step_x = -1
        ray.sidedist_x = (player.x - ray.map_x) * ray.deltadist_x
    else:
        ray.step_x = 1
        ray.sidedist_x = (ray.map_x + 1.0 - player.x) * ray.deltadist_x
    if ray.dir_y < 0:
        ray.step_y = -1
        ray.sidedist_y = (player.y - ray.map_y) * ray.deltadist_y
    else:
        ray.step_y = 1
        ray.sidedist_y = (ray.map_y + 1.0 - player.y) * ray.deltadist_y


def _walk(ray, scene):
    while True:
        if ray.sidedist_x < ray.sidedist_y:
            ray.sidedist_x += ray.deltadist_x
            ray.map_x += ray.step_x
            ray.side = 0
        else:
            ray.sidedist_y += ray.deltadist_y
            ray.map_y += ray.step_y
            ray.side = 1
        if (
            ray.map_y < 0.1
            or ray.map_x < 0.1
            or ray.map_y > SCREEN_HEIGHT - 0.1
            or ray.map_x > SCREEN_WIDTH - 1.1
        ):
            return
        if scene.grid[ray.map_y][ray.map_x] > "0":
            return
        if not is_valid_pos(
            scene.grid, scene.width, scene.height, ray.map_x, ray.map_y, False
        ):
            return


def _line_height(ray, player):
    if ray.side == 0:
        ray.wall_dist = ray.sidedist_x - ray.deltadist_x
    else:
        ray.wall_dist = ray.sidedist_y - ray.deltadist_y
    if ray.wall_dist > 0:
        ray.line_height = int(SCREEN_HEIGHT / ray.wall_dist)
    else:
        ray.line_height = SCREEN_HEIGHT
    ray.draw_start = max(0, -(ray.line_height // 2) + SCREEN_HEIGHT // 2)
    ray.draw_end = min(SCREEN_HEIGHT - 1, ray.line_height // 2 + SCREEN_HEIGHT // 2)
    if ray.side == 0:
        wall_x = player.y + ray.wall_dist * ray.dir_y
    else:
        wall_x = player.x + ray.wall_dist * ray.dir_x
    ray.wall_x = wall_x - math.floor(wall_x)


def cast_ray(player, scene, x):
    """Cast the ray for screen column x and measure the wall slice it hits."""
    ray = Ray()
    _setup(ray, player, x)
    _walk(ray, scene)
    _line_height(ray, player)
    return ray


def wall_texture(ray, textures):
    """Pick the texture for the wall face the ray hit from a Direction mapping."""
    if ray.side == 0:
        return textures[Direction.WE if ray.dir_x < 0 else Direction.EA]
    return textures[Direction.NO if ray.dir_y < 0 else Direction.SO]


def texture_x(ray, img_size):
    """Texture column for the hit point, mirrored on west and south faces."""
    tex_x = int(ray.wall_x * img_size)
    if (ray.side == 0 and ray.dir_x < 0) or (ray.side == 1 and ray.dir_y > 0):
        tex_x = img_size - tex_x - 1
    return tex_x


def cast_rays(player, scene, textures, img_size):
    """Return the wall layer: SCREEN_HEIGHT rows of colours, 0 where no wall is drawn."""
    tex_pix = [[0] * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT)]
    for x in range(SCREEN_WIDTH):
        ray = cast_ray(player, scene, x)
        if ray.draw_start >= ray.draw_end:
            continue
        texture = wall_texture(ray, textures)
        tex_x = texture_x(ray, img_size)
        step = img_size / ray.line_height
        pos = (ray.draw_start - SCREEN_HEIGHT // 2 + ray.line_height // 2) * step
        for y in range(ray.draw_start, ray.draw_end):
            tex_y = int(pos) & (img_size - 1)
            pos += step
            color = texture.at(tex_x, tex_y)
            if color > 0:
                tex_pix[y][x] = color
    return tex_pix