import pygame
import pytest

from boxengine.body import BodyComponent
from boxengine.sprite_component import SpriteComponent
from boxengine.sprite_manager import Flip, SpriteManager

RED = (255, 0, 0)
GREEN = (0, 255, 0)


class FakeParent:
    def __init__(self, *components):
        self._components = {type(c): c for c in components}

    def get_component(self, component_class):
        return self._components.get(component_class)


SPRITE_DATA = {
    "textures": {
        "sheet.bmp": {
            "sprites": {
                "walk": {
                    "frames": [
                        {"x": 0, "y": 0, "w": 2, "h": 2},
                        {"x": 2, "y": 0, "w": 2, "h": 2},
                        {"x": 4, "y": 0, "w": 2, "h": 2},
                    ]
                },
                "still": {"x": 0, "y": 0, "w": 2, "h": 2},
            }
        }
    }
}


@pytest.fixture
def sprites():
    manager = SpriteManager()
    manager.load_sprite_dict(SPRITE_DATA)
    return manager


def make(sprites, name="walk", animate=True, loop=False, parent=None):
    component = SpriteComponent(parent, name, animate, loop, sprites=sprites)
    component.animation_speed = 1.0
    return component


def test_update_advances_frame(sprites):
    component = make(sprites)
    component.update(1.0)
    assert component.current_frame == 1


def test_update_waits_for_timer(sprites):
    component = make(sprites)
    component.update(0.5)
    assert component.current_frame == 0
    component.update(0.5)
    assert component.current_frame == 1


def test_looping_wraps_to_first_frame(sprites):
    component = make(sprites, loop=True)
    for _ in range(3):
        component.update(1.0)
    assert component.current_frame == 0
    assert component.animating


def test_non_looping_stops_on_last_frame(sprites):
    component = make(sprites, loop=False)
    for _ in range(5):
        component.update(1.0)
    assert component.current_frame == 2
    assert not component.animating


def test_single_frame_sprite_does_not_animate(sprites):
    component = make(sprites, name="still")
    component.update(1.0)
    assert component.current_frame == 0
    assert component.animation_timer == 0.0


def test_not_animating_does_nothing(sprites):
    component = make(sprites, animate=False)
    component.update(1.0)
    assert component.current_frame == 0


def test_set_frame_out_of_range_resets(sprites):
    component = make(sprites)
    component.set_frame(1)
    assert component.current_frame == 1
    component.set_frame(3)
    assert component.current_frame == 0


def test_play_and_stop_animation(sprites):
    component = make(sprites, animate=False)
    component.animation_timer = 0.7
    component.play_animation()
    assert component.animating and component.looping
    assert component.animation_timer == 0.0
    component.animation_timer = 0.3
    component.stop_animation()
    assert not component.animating
    assert component.animation_timer == 0.0


def test_flip_flags(sprites):
    component = make(sprites)
    component.set_flip_horizontal(True)
    component.set_flip_vertical(True)
    assert component.flip == Flip.HORIZONTAL | Flip.VERTICAL
    component.set_flip_horizontal(False)
    assert component.flip == Flip.VERTICAL


def test_to_dict_round_trip(sprites):
    component = make(sprites, loop=True)
    component.set_flip_vertical(True)
    component.alpha = 128
    data = component.to_dict()
    assert data["type"] == "SpriteComponent"
    assert data["flipFlags"] == int(Flip.VERTICAL)
    assert SpriteComponent.from_dict(None, data).to_dict() == data


def test_from_dict_defaults():
    component = SpriteComponent.from_dict(None, {"spriteName": "walk"})
    assert component.sprite_name == "walk"
    assert not component.animating
    assert component.alpha == 255
    assert component.animation_speed == 10.0


def test_from_dict_rejects_wrong_type():
    with pytest.raises(ValueError):
        SpriteComponent.from_dict(None, {"animating": "yes"})


@pytest.fixture
def drawing(sprites, tmp_path):
    sheet = pygame.Surface((6, 2))
    sheet.fill(RED, pygame.Rect(0, 0, 2, 2))
    sheet.fill(GREEN, pygame.Rect(2, 0, 2, 2))
    pygame.image.save(sheet, str(tmp_path / "sheet.bmp"))
    sprites.base_path = str(tmp_path)
    target = pygame.Surface((16, 16))
    target.fill((0, 0, 0))
    sprites.surface = target
    return sprites, target


def test_draw_at_body_position(drawing):
    sprites, target = drawing
    body = BodyComponent(None)
    body.set_position(3.7, 4.2, 0.0)
    component = make(sprites, parent=FakeParent(body))
    component.draw()
    assert tuple(target.get_at((3, 4)))[:3] == RED
    assert tuple(target.get_at((0, 0)))[:3] == (0, 0, 0)


def test_draw_current_frame_without_body(drawing):
    sprites, target = drawing
    component = make(sprites, parent=FakeParent())
    component.set_frame(1)
    component.draw()
    assert tuple(target.get_at((0, 0)))[:3] == GREEN
    assert tuple(target.get_at((5, 5)))[:3] == (0, 0, 0)


def test_draw_unknown_sprite_draws_nothing(drawing):
    sprites, target = drawing
    component = make(sprites, name="missing", parent=FakeParent())
    component.draw()
    assert tuple(target.get_at((0, 0)))[:3] == (0, 0, 0)