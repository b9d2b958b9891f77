import math

import pytest

from terto3d.mapfile import MapData, MapError
from terto3d.player import (
    Player,
    WIDTH,
    is_inside_map,
    mouse_rotation,
    spawn_player,
    strafe,
    update_player_position,
    walk,
)


def make_map(rows):
    return MapData(grid=list(rows), width=max(len(r) for r in rows), height=len(rows))


ROOM = [
    "111111",
    "1X0001",
    "101001",
    "100001",
    "111111",
]


def room_with(letter):
    return make_map([row.replace("X", letter) for row in ROOM])


@pytest.mark.parametrize(
    "letter, vectors",
    [
        ("N", (0.0, -1.0, 0.66, 0.0)),
        ("S", (0.0, 1.0, -0.66, 0.0)),
        ("E", (1.0, 0.0, 0.0, 0.66)),
        ("W", (-1.0, 0.0, 0.0, -0.66)),
    ],
)
def test_spawn_player_direction(letter, vectors):
    player = spawn_player(room_with(letter))
    assert (player.dir_x, player.dir_y, player.plane_x, player.plane_y) == vectors
    assert (player.x, player.y) == (1.5, 1.5)


def test_spawn_replaces_start_tile():
    map_data = room_with("N")
    spawn_player(map_data)
    assert map_data.grid[1] == "100001"


def test_spawn_without_start_raises():
    with pytest.raises(MapError):
        spawn_player(room_with("0"))


def test_rotate_keeps_lengths():
    player = spawn_player(room_with("E"))
    player.rotate(0.7)
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert math.hypot(player.plane_x, player.plane_y) == pytest.approx(0.66)


def test_rotate_round_trip():
    player = Player(2.0, 2.0, 0.0, -1.0, 0.66, 0.0)
    player.rotate(0.3)
    player.rotate(-0.3)
    assert player.dir_x == pytest.approx(0.0, abs=1e-12)
    assert player.dir_y == pytest.approx(-1.0)
    assert player.plane_x == pytest.approx(0.66)


def test_is_inside_open_tile():
    map_data = room_with("0")
    assert is_inside_map(map_data, 2.5, 1.5) is True


def test_is_inside_inner_wall_with_closed_surroundings():
    map_data = room_with("0")
    assert is_inside_map(map_data, 2.5, 2.5) is True


def test_is_inside_rejects_border():
    map_data = room_with("0")
    assert is_inside_map(map_data, 0.5, 0.5) is False
    assert is_inside_map(map_data, 100.0, 1.5) is False


def test_is_inside_rejects_space_neighbour():
    map_data = make_map(["1111", "1 11", "1111", "1111"])
    assert is_inside_map(map_data, 2.5, 2.5) is False


def test_solid_walls_block_move_into_wall():
    map_data = room_with("0")
    player = Player(1.5, 1.5, 1.0, 0.0, 0.0, 0.66)
    update_player_position(map_data, player, 2.5, 2.5, True)
    assert (player.x, player.y) == (1.5, 2.5)


def test_without_solid_walls_player_enters_wall():
    map_data = room_with("0")
    player = Player(1.5, 1.5, 1.0, 0.0, 0.0, 0.66)
    update_player_position(map_data, player, 2.5, 2.5, False)
    assert (player.x, player.y) == (2.5, 2.5)


def test_walk_forward_and_back():
    map_data = room_with("E")
    player = spawn_player(map_data)
    walk(map_data, player, 1, 0.5)
    assert player.x == pytest.approx(2.0)
    walk(map_data, player, -1, 0.5)
    assert player.x == pytest.approx(1.5)
    assert player.y == pytest.approx(1.5)


def test_walk_rejects_bad_direction():
    map_data = room_with("E")
    player = spawn_player(map_data)
    with pytest.raises(ValueError):
        walk(map_data, player, 0)


def test_strafe_right_facing_north_moves_east():
    map_data = room_with("N")
    player = spawn_player(map_data)
    strafe(map_data, player, 1, 0.5)
    assert player.x == pytest.approx(2.0)
    assert player.y == pytest.approx(1.5)


def test_strafe_left_then_right_returns():
    map_data = room_with("S")
    player = spawn_player(map_data)
    player.x, player.y = 3.5, 3.5
    strafe(map_data, player, -1, 0.25)
    strafe(map_data, player, 1, 0.25)
    assert (player.x, player.y) == pytest.approx((3.5, 3.5))


def test_mouse_at_centre_does_not_turn():
    player = Player(2.0, 2.0, 0.0, -1.0, 0.66, 0.0)
    assert mouse_rotation(player, WIDTH // 2) == 0
    assert (player.dir_x, player.dir_y) == (0.0, -1.0)


def test_mouse_right_turns_clockwise():
    player = Player(2.0, 2.0, 0.0, -1.0, 0.66, 0.0)
    angle = mouse_rotation(player, WIDTH)
    assert angle > 0
    assert player.dir_x > 0
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)