from types import SimpleNamespace

import pytest

from boxengine.body import BodyComponent
from boxengine.box_behavior import BoxBehaviorComponent
from boxengine.game_object import GameObject, get_engine, set_engine
from boxengine.sprite_component import SpriteComponent


@pytest.fixture
def restore_engine():
    yield
    set_engine(None)


def test_add_and_get_component():
    obj = GameObject()
    body = obj.add_component(BodyComponent(obj))
    assert obj.get_component(BodyComponent) is body
    assert obj.has_component(BodyComponent)
    assert obj.components == (body,)


def test_missing_component_is_none():
    obj = GameObject()
    assert obj.get_component(SpriteComponent) is None
    assert obj.has_component(SpriteComponent) is False


def test_to_dict_keeps_order():
    obj = GameObject()
    obj.add_component(BodyComponent(obj))
    obj.add_component(BoxBehaviorComponent(obj))
    types = [entry["type"] for entry in obj.to_dict()["components"]]
    assert types == ["BodyComponent", "BoxBehaviorComponent"]


def test_round_trip_through_dict():
    obj = GameObject()
    body = obj.add_component(BodyComponent(obj))
    body.set_position(12.0, 34.0, 0.5)
    body.set_velocity(1.0, 2.0, 3.0)
    copy = GameObject()
    copy.from_dict(obj.to_dict())
    copied = copy.get_component(BodyComponent)
    assert copied.position() == (12.0, 34.0, 0.5)
    assert copied.velocity() == (1.0, 2.0, 3.0)
    assert copy.to_dict() == obj.to_dict()


def test_from_dict_skips_unknown_and_untyped_entries():
    obj = GameObject()
    obj.from_dict(
        {
            "components": [
                {"posX": 1.0},
                {"type": "NoSuchComponent"},
                {"type": "BodyComponent", "posX": 5.0},
                {"type": "BodyComponent", "posY": "bad"},
            ]
        }
    )
    assert len(obj.components) == 1
    assert obj.get_component(BodyComponent).position() == (5.0, 0.0, 0.0)


def test_from_dict_replaces_existing_components():
    obj = GameObject()
    obj.add_component(BodyComponent(obj))
    obj.from_dict({"components": [{"type": "SpriteComponent", "spriteName": "box"}]})
    assert obj.has_component(BodyComponent) is False
    assert obj.get_component(SpriteComponent).sprite_name == "box"


def test_from_dict_without_components_clears():
    obj = GameObject()
    obj.add_component(BodyComponent(obj))
    obj.from_dict({})
    assert obj.components == ()


def test_from_dict_rejects_non_string_type():
    with pytest.raises(ValueError):
        GameObject().from_dict({"components": [{"type": 3}]})


def test_components_find_earlier_siblings_when_loaded():
    obj = GameObject()
    obj.from_dict(
        {"components": [{"type": "BodyComponent"}, {"type": "BoxBehaviorComponent"}]}
    )
    assert obj.get_component(BoxBehaviorComponent)._body is obj.get_component(BodyComponent)


def test_update_moves_body():
    obj = GameObject()
    body = obj.add_component(BodyComponent(obj))
    body.set_velocity(60.0, 0.0, 0.0)
    obj.update(1.0)
    assert body.pos_x > 0.0
    assert body.pos_x == pytest.approx(body.vel_x)


def test_engine_accessors(restore_engine):
    engine = SimpleNamespace(objects=[])
    set_engine(engine)
    assert get_engine() is engine
    assert GameObject().engine is engine
    set_engine(None)
    assert GameObject().engine is None