import math

import pytest

from cubraycast.constants import RUN_SPEED, WALK_SPEED, Direction, SpeedMode
from cubraycast.player import (
    Key,
    Player,
    QuitRequested,
    is_valid_pos,
    spawn_player,
)
from cubraycast.scene import MapError, parse_scene

HEADER = "NO ./n.xpm\nSO ./s.xpm\nWE ./w.xpm\nEA ./e.xpm\nF 10,20,30\nC 40,50,60\n"


def make_scene(spawn="N", second=None):
    rows = ["111111", "100001", f"10{spawn}001", "100001", "111111"]
    if second is not None:
        rows[3] = f"1000{second}1"
    return parse_scene(HEADER + "\n".join(rows) + "\n")


def test_spawn_north_position_and_camera():
    p = spawn_player(make_scene("N"))
    assert (p.x, p.y) == (2.5, 2.5)
    assert (p.dir_x, p.dir_y, p.plane_x, p.plane_y) == (0.0, -1.0, 0.66, 0.0)
    assert p.nswe == Direction.NO
    assert p.gauge == 100


@pytest.mark.parametrize(
    "char, expected",
    [
        ("S", (0.0, 1.0, -0.66, 0.0)),
        ("E", (1.0, 0.0, 0.0, 0.66)),
        ("W", (-1.0, 0.0, 0.0, -0.66)),
    ],
)
def test_spawn_directions(char, expected):
    p = spawn_player(make_scene(char))
    assert (p.dir_x, p.dir_y, p.plane_x, p.plane_y) == expected


def test_spawn_two_players_rejected():
    with pytest.raises(MapError, match="Only one player"):
        spawn_player(make_scene("N", second="S"))


def test_spawn_no_player_rejected():
    with pytest.raises(MapError, match="One player character"):
        spawn_player(make_scene("0"))


def test_is_valid_pos_margins_and_walls():
    scene = make_scene()
    g, w, h = scene.grid, scene.width, scene.height
    assert is_valid_pos(g, w, h, 2.5, 2.5, True) is True
    assert is_valid_pos(g, w, h, 0.2, 2.5, False) is False
    assert is_valid_pos(g, w, h, 2.5, h - 1.2, False) is False
    assert is_valid_pos(g, w, h, 0.9, 2.5, True) is False
    assert is_valid_pos(g, w, h, 0.9, 2.5, False) is True


def test_rotate_keeps_lengths_and_orthogonality():
    p = spawn_player(make_scene())
    for _ in range(37):
        assert p.rotate(3) == 1
    assert math.hypot(p.dir_x, p.dir_y) == pytest.approx(1.0)
    assert math.hypot(p.plane_x, p.plane_y) == pytest.approx(0.66)
    assert p.dir_x * p.plane_x + p.dir_y * p.plane_y == pytest.approx(0.0, abs=1e-12)


def test_rotate_back_and_forth_restores():
    p = spawn_player(make_scene())
    p.rotate(5)
    p.rotate(-5)
    assert p.dir_x == pytest.approx(0.0, abs=1e-12)
    assert p.dir_y == pytest.approx(-1.0)


def test_move_forward_steps_by_speed():
    scene = make_scene()
    p = spawn_player(scene)
    p.key_press(Key.W)
    assert p.move(scene) == 1
    assert p.y == pytest.approx(2.5 - WALK_SPEED)
    assert p.x == pytest.approx(2.5)


def test_validate_move_blocked_by_wall_with_bonus():
    scene = make_scene()
    p = Player(x=1.3, y=2.5, bonus=True)
    p.validate_move(scene, 0.9, 2.5)
    assert p.x == 1.3
    free = Player(x=1.3, y=2.5, bonus=False)
    free.validate_move(scene, 0.9, 2.5)
    assert free.x == 0.9


def test_escape_raises_quit():
    p = Player(x=2.5, y=2.5)
    with pytest.raises(QuitRequested):
        p.key_press(Key.ESCAPE)
    with pytest.raises(QuitRequested):
        p.key_release(Key.ESCAPE)


def test_press_and_release_movement_keys():
    p = Player(x=2.5, y=2.5)
    p.key_press(Key.S)
    p.key_press(Key.D)
    p.key_press(Key.F)
    assert (p.move_y, p.move_x, p.fire) == (-1, 1, 1)
    p.key_release(Key.S)
    p.key_release(Key.D)
    p.key_release(Key.F)
    assert (p.move_y, p.move_x, p.fire) == (0, 0, 0)


def test_release_w_keeps_backward_motion():
    p = Player(x=2.5, y=2.5)
    p.key_press(Key.S)
    p.key_release(Key.W)
    assert p.move_y == -1


def test_rotation_keys_accumulate_and_clear():
    p = Player(x=2.5, y=2.5)
    p.key_press(Key.LEFT)
    p.key_press(Key.RIGHT)
    assert (p.rot_l, p.rot_r) == (-1, 1)
    p.key_release(Key.LEFT)
    p.key_release(Key.RIGHT)
    assert (p.rot_l, p.rot_r) == (0, 0)


def test_shift_runs_only_with_gauge():
    p = Player(x=2.5, y=2.5)
    p.key_press(Key.SHIFT_L)
    assert (p.speed, p.sprint) == (RUN_SPEED, 1)
    p.key_release(Key.SHIFT_L)
    assert (p.speed, p.sprint) == (WALK_SPEED, 0)
    p.gauge = 0
    p.key_press(Key.SHIFT_L)
    assert p.sprint == 0


def test_gauge_drains_and_refills():
    p = Player(x=2.5, y=2.5)
    p.set_speed(SpeedMode.RUN)
    p.update_gauge()
    assert p.gauge == pytest.approx(100 - 0.125)
    p.set_speed(SpeedMode.WALK)
    p.gauge = 50
    p.update_gauge()
    assert p.gauge == pytest.approx(50.05)


def test_gauge_empty_forces_walk():
    p = Player(x=2.5, y=2.5, gauge=0.1)
    p.set_speed(SpeedMode.RUN)
    p.update_gauge()
    assert p.gauge <= 0
    assert (p.sprint, p.speed) == (0, WALK_SPEED)


def test_move_with_rotation_counts():
    scene = make_scene()
    p = spawn_player(scene)
    p.key_press(Key.RIGHT)
    assert p.move(scene) == 1
    assert p.dir_x > 0