# boxengine

A small component-based 2D game engine built on pygame. A level is a JSON
file that lists game objects and the components attached to them. Each frame
the engine reads keyboard and game-controller input, updates every object and
draws their sprites.

## Installing

```
pip install .
```

To get pytest as well, install the `test` extra: `pip install .[test]`.

## Running a level

Run the command from a directory that holds an `assets/` folder:

```
boxengine                      # runs assets/level1.json
boxengine path/to/level.json   # runs another level file
```

The engine reads these files:

- the level file, which is a JSON object with an `objects` array
- `assets/spriteData.json`: texture sheets and the sprite frames within them
- `assets/textures/`: the images that the sprite data names
- `assets/input_config.json`: keyboard and controller bindings (optional;
  the built-in defaults apply if it is missing or invalid)
- `assets/gamecontrollerdb.txt`: extra controller mappings (optional)

If the level cannot be read, the error is logged and the window opens with no
objects. Default controls: WASD or the arrow keys move, Shift walks, Space or
E interacts, and F or Q throws. A controller's left stick moves, its left
trigger walks, A interacts, and X or B throws. The D-pad also moves. Escape or
closing the window quits.

## Levels

```json
{
  "objects": [
    {
      "components": [
        {"type": "BodyComponent", "posX": 400, "posY": 300},
        {"type": "SpriteComponent", "spriteName": "player"},
        {"type": "InputComponent", "inputSources": [-1, 0]},
        {"type": "PlayerMovementComponent", "moveSpeed": 200}
      ]
    },
    {
      "components": [
        {"type": "BodyComponent", "posX": 500, "posY": 300},
        {"type": "SpriteComponent", "spriteName": "box"},
        {"type": "BoxBehaviorComponent", "pushForce": 100}
      ]
    }
  ]
}
```

Built-in component types:

- `BodyComponent`: holds position, angle, velocity and drag (`posX`, `posY`,
  `angle`, `velX`, `velY`, `velAngle`, `drag`). Drag grows with speed.
- `SpriteComponent`: draws a sprite at the body's position and can step
  through its frames (`spriteName`, `currentFrame`, `animating`, `looping`,
  `animationSpeed`, `animationTimer`, `flipFlags`, `alpha`).
- `InputComponent`: reads actions from its input sources. With several
  sources, the highest value wins. Source `-1` is the keyboard and `0` to `3`
  are controller slots.
- `PlayerMovementComponent`: adds velocity from input and turns the body
  toward its direction of travel.
- `BoxBehaviorComponent`: pushes its body away from overlapping bodies that
  are moving. It finds those bodies through the engine that loaded the level.

A component looks up the components it depends on when it is created. Those
must therefore come earlier in the list, as `BodyComponent` and
`InputComponent` do above. An entry of an unknown type is logged and skipped,
and so is an entry with a value of the wrong type.

## Sprite data

```json
{
  "textures": {
    "sheet.png": {
      "sprites": {
        "box": {"x": 0, "y": 0, "w": 32, "h": 32},
        "player": {"frames": [
          {"x": 32, "y": 0, "w": 32, "h": 32},
          {"x": 64, "y": 0, "w": 32, "h": 32}
        ]}
      }
    }
  }
}
```

## Input configuration

```json
{
  "keyboard": {"move_up": ["W", "Up"], "action_interact": "Space"},
  "controller": {
    "move_up": {"type": "axis", "axis": "LeftY", "direction": "negative"},
    "action_walk": {"type": "axis", "axis": "TriggerLeft", "range": "full"},
    "action_throw": {"type": "button", "buttons": ["X", "B"]}
  },
  "settings": {"deadzone": 0.15, "dpad_as_axis": true}
}
```

The action names are `move_up`, `move_down`, `move_left`, `move_right`,
`action_walk`, `action_interact` and `action_throw`. A configuration file
only needs to list the actions it changes. Names it does not recognise are
ignored.

## Using the library

```python
from boxengine.game_object import GameObject
from boxengine.body import BodyComponent
from boxengine.serializer import save_objects, load_objects, object_to_string

obj = GameObject()
body = obj.add_component(BodyComponent(obj))
body.set_position(100.0, 50.0, 0.0)
body.set_velocity(60.0, 0.0, 0.0)
obj.update(1 / 60)

print(object_to_string(obj, 2))
save_objects([obj], "saved_objects.json")
objects = load_objects("saved_objects.json")
```

`boxengine.serializer` also has `save_object`, `load_object` and
`object_from_string`. Loading raises `OSError` when a file cannot be read and
`ValueError` when it holds invalid JSON.

To add a component type, subclass `boxengine.component.Component`. Give it
`update`, `draw` and `to_dict`, and optionally a `from_dict` classmethod.
Then decorate it with `boxengine.component.register_component("MyType")`, and
levels can create it by that name.

Input bindings live in `boxengine.input_config.InputConfig`. It has
`load_from_file`, `save_to_file`, `to_dict` and `update_from_dict`. The shared
`boxengine.input_manager.get_input_manager()` can give one source its own
configuration through `set_config_for_source` or `load_config_for_source`.
`InputManager.update_from` computes action values from given pressed keys and
`ControllerSnapshot`s, without any device attached.

## Limits

The engine draws sprites only. It has no sound, no text rendering and no
rigid-body physics: bodies are moved by velocity and drag alone. The only
interaction between objects is the box push. Objects are created only from
JSON or in code. There is no editor.