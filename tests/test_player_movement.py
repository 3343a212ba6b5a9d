import math

import pytest

from boxengine.body import BodyComponent
from boxengine.component import get_component_library
from boxengine.game_object import GameObject
from boxengine.input_component import InputComponent
from boxengine.input_config import Key
from boxengine.input_manager import InputManager
from boxengine.player_movement import PlayerMovementComponent


def make_player(keys=(), source=-1, move_speed=200.0):
    manager = InputManager()
    manager.update_from(set(keys), {})
    obj = GameObject()
    body = obj.add_component(BodyComponent(obj))
    obj.add_component(InputComponent(obj, source, manager=manager))
    movement = obj.add_component(PlayerMovementComponent(obj, move_speed))
    return obj, body, movement


def test_default_serialized_form():
    movement = PlayerMovementComponent(GameObject())
    assert movement.to_dict() == {"type": "PlayerMovementComponent", "moveSpeed": 200.0}


def test_right_key_adds_full_speed_and_turns():
    _, body, movement = make_player({Key.D})
    movement.update()
    vel_x, vel_y, vel_angle = body.velocity()
    assert vel_x == pytest.approx(movement.move_speed)
    assert vel_y == 0.0
    assert vel_angle > 0.0


def test_left_key_moves_left_and_turns_other_way():
    _, body, movement = make_player({Key.LEFT}, move_speed=150.0)
    movement.update()
    vel_x, vel_y, vel_angle = body.velocity()
    assert vel_x == pytest.approx(-150.0)
    assert vel_y == 0.0
    assert vel_angle < 0.0


def test_up_key_moves_up():
    _, body, movement = make_player({Key.W})
    movement.update()
    assert body.velocity()[1] == pytest.approx(-movement.move_speed)
    assert body.velocity()[0] == 0.0


def test_walk_halves_speed():
    _, running, run_move = make_player({Key.D})
    _, walking, walk_move = make_player({Key.D, Key.LSHIFT})
    run_move.update()
    walk_move.update()
    assert walking.velocity()[0] == pytest.approx(running.velocity()[0] / 2)


def test_angular_velocity_is_clamped():
    _, body, movement = make_player({Key.S})
    movement.update()
    assert body.velocity()[2] == pytest.approx(16.0)


def test_turn_stays_within_limit():
    _, body, movement = make_player({Key.D, Key.S})
    movement.update()
    assert 0.0 < abs(body.velocity()[2]) <= 16.0 + 1e-9


def test_rotation_damped_when_still():
    _, body, movement = make_player()
    body.set_velocity(0.0, 0.0, 2.0)
    movement.update()
    assert body.velocity() == pytest.approx((0.0, 0.0, 1.0))


def test_tiny_rotation_left_alone():
    _, body, movement = make_player()
    body.set_velocity(0.0, 0.0, 0.005)
    movement.update()
    assert body.velocity() == (0.0, 0.0, 0.005)


def test_inactive_source_does_nothing():
    _, body, movement = make_player({Key.D}, source=0)
    movement.update()
    assert body.velocity() == (0.0, 0.0, 0.0)


def test_components_added_later_are_not_found():
    manager = InputManager()
    manager.update_from({Key.D}, {})
    obj = GameObject()
    movement = obj.add_component(PlayerMovementComponent(obj))
    obj.add_component(InputComponent(obj, manager=manager))
    body = obj.add_component(BodyComponent(obj))
    movement.update()
    assert body.velocity() == (0.0, 0.0, 0.0)


def test_from_dict_reads_move_speed():
    movement = PlayerMovementComponent.from_dict(GameObject(), {"moveSpeed": 350})
    assert movement.move_speed == 350.0
    assert movement.to_dict()["moveSpeed"] == 350.0


def test_from_dict_rejects_non_number():
    with pytest.raises(ValueError):
        PlayerMovementComponent.from_dict(GameObject(), {"moveSpeed": "fast"})


def test_registered_in_library():
    library = get_component_library()
    created = library.create("PlayerMovementComponent", GameObject(), {"moveSpeed": 80.0})
    assert isinstance(created, PlayerMovementComponent)
    assert created.move_speed == 80.0
    assert not math.isnan(created.move_speed)