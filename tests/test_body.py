import pytest

from boxengine.body import BodyComponent
from boxengine.component import get_component_library


def test_defaults():
    body = BodyComponent(None)
    assert body.position() == (0.0, 0.0, 0.0)
    assert body.velocity() == (0.0, 0.0, 0.0)
    assert body.drag == pytest.approx(0.95)


def test_drag_constructor_argument():
    assert BodyComponent(None, 0.5).drag == 0.5


def test_set_and_mod_velocity():
    body = BodyComponent(None)
    body.set_velocity(1.0, 2.0, 3.0)
    body.mod_velocity(0.5, -1.0, 1.0)
    assert body.velocity() == (1.5, 1.0, 4.0)


def test_set_position():
    body = BodyComponent(None)
    body.set_position(10.0, 20.0, 1.5)
    assert body.position() == (10.0, 20.0, 1.5)


def test_to_dict_round_trip():
    body = BodyComponent(None, 0.9)
    body.set_position(1.0, 2.0, 0.25)
    body.set_velocity(-3.0, 4.0, 0.5)
    data = body.to_dict()
    assert data["type"] == "BodyComponent"
    restored = BodyComponent.from_dict(None, data)
    assert restored.to_dict() == data


def test_from_dict_partial_keeps_defaults():
    body = BodyComponent.from_dict(None, {"posX": 5})
    assert body.position() == (5.0, 0.0, 0.0)
    assert body.drag == pytest.approx(0.95)


def test_from_dict_rejects_non_number():
    with pytest.raises(ValueError):
        BodyComponent.from_dict(None, {"posX": "left"})


def test_created_through_library():
    body = get_component_library().create("BodyComponent", None, {"posY": 7})
    assert isinstance(body, BodyComponent)
    assert body.position()[1] == 7.0


def test_update_at_rest_keeps_position():
    body = BodyComponent(None)
    body.set_position(3.0, 4.0, 0.0)
    body.update(0.5)
    assert body.position() == (3.0, 4.0, 0.0)


def test_update_applies_drag_before_integration():
    body = BodyComponent(None)
    body.set_velocity(100.0, 0.0, 0.0)
    body.update(0.5)
    vx, vy, _ = body.velocity()
    assert 0.0 < vx < 100.0
    assert vy == 0.0
    assert body.position()[0] == pytest.approx(vx * 0.5)


def test_update_drag_worked_example():
    # With drag 0.95 at speed 800 the multiplier is 0.925.
    body = BodyComponent(None)
    body.set_velocity(800.0, 0.0, 0.0)
    body.update(0.0)
    assert body.velocity()[0] == pytest.approx(800.0 * 0.925)


def test_update_drag_is_clamped():
    body = BodyComponent(None)
    body.set_velocity(1_000_000.0, 0.0, 0.0)
    body.update(0.0)
    assert body.velocity()[0] == pytest.approx(1_000_000.0 * 0.5)


def test_angular_drag_is_plain_drag():
    body = BodyComponent(None)
    body.set_velocity(300.0, 0.0, 2.0)
    body.update(1.0)
    assert body.velocity()[2] == pytest.approx(2.0 * 0.95)
    assert body.position()[2] == pytest.approx(2.0 * 0.95)


def test_faster_bodies_lose_more_speed_fraction():
    slow = BodyComponent(None)
    fast = BodyComponent(None)
    slow.set_velocity(100.0, 0.0, 0.0)
    fast.set_velocity(1000.0, 0.0, 0.0)
    slow.update(0.0)
    fast.update(0.0)
    assert fast.velocity()[0] / 1000.0 < slow.velocity()[0] / 100.0