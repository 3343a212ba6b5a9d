import math
from types import SimpleNamespace

import pytest

from boxengine.body import BodyComponent
from boxengine.box_behavior import BoxBehaviorComponent
from boxengine.component import get_component_library
from boxengine.game_object import GameObject, set_engine


@pytest.fixture
def world():
    objects = []
    set_engine(SimpleNamespace(objects=objects))
    yield objects
    set_engine(None)


def make_box(objects, x=0.0, y=0.0):
    obj = GameObject()
    body = obj.add_component(BodyComponent(obj))
    body.set_position(x, y, 0.0)
    box = obj.add_component(BoxBehaviorComponent(obj))
    objects.append(obj)
    return body, box


def make_pusher(objects, x, y, vx, vy):
    obj = GameObject()
    body = obj.add_component(BodyComponent(obj))
    body.set_position(x, y, 0.0)
    body.set_velocity(vx, vy, 0.0)
    objects.append(obj)
    return body


def test_fast_pusher_applies_full_force(world):
    body, box = make_box(world)
    make_pusher(world, -10.0, 0.0, 200.0, 0.0)
    box.update()
    assert body.velocity() == pytest.approx((box.push_force, 0.0, 0.0))


def test_slower_pusher_scales_force(world):
    body, box = make_box(world)
    make_pusher(world, -10.0, 0.0, 100.0, 0.0)
    box.update()
    assert body.velocity()[0] == pytest.approx(box.push_force / 2)


def test_diagonal_push_has_push_force_magnitude(world):
    body, box = make_box(world)
    make_pusher(world, -10.0, -10.0, 400.0, 400.0)
    box.update()
    vel_x, vel_y, _ = body.velocity()
    assert vel_x == pytest.approx(vel_y)
    assert math.hypot(vel_x, vel_y) == pytest.approx(box.push_force)


def test_slow_pusher_does_not_push(world):
    body, box = make_box(world)
    make_pusher(world, -10.0, 0.0, 5.0, 0.0)
    box.update()
    assert body.velocity() == (0.0, 0.0, 0.0)


def test_distant_pusher_does_not_push(world):
    body, box = make_box(world)
    make_pusher(world, -100.0, 0.0, 300.0, 0.0)
    box.update()
    assert body.velocity() == (0.0, 0.0, 0.0)


def test_coincident_pusher_does_not_push(world):
    body, box = make_box(world)
    make_pusher(world, 0.0, 0.0, 300.0, 0.0)
    box.update()
    assert body.velocity() == (0.0, 0.0, 0.0)


def test_objects_without_body_and_self_are_ignored(world):
    body, box = make_box(world)
    body.set_velocity(50.0, 0.0, 0.0)
    world.append(GameObject())
    box.update()
    assert body.velocity() == (50.0, 0.0, 0.0)


def test_no_engine_means_no_push():
    objects = []
    body, box = make_box(objects)
    make_pusher(objects, -10.0, 0.0, 200.0, 0.0)
    set_engine(None)
    box.update()
    assert body.velocity() == (0.0, 0.0, 0.0)


def test_serialized_form_round_trips():
    box = BoxBehaviorComponent.from_dict(GameObject(), {"pushForce": 250})
    assert box.to_dict() == {"type": "BoxBehaviorComponent", "pushForce": 250.0}
    again = get_component_library().create("BoxBehaviorComponent", GameObject(), box.to_dict())
    assert again.push_force == 250.0


def test_default_push_force():
    assert BoxBehaviorComponent(GameObject()).to_dict()["pushForce"] == 100.0


def test_from_dict_rejects_non_number():
    with pytest.raises(ValueError):
        BoxBehaviorComponent.from_dict(GameObject(), {"pushForce": True})