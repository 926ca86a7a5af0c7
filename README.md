# arenafighter

An isometric tile-map viewer built on a small entity-component-system (ECS)
core. It loads a level from a CSV tile map and turns each cell into an
entity that has a `Position` and a `Sprite` component. It then draws the
tiles with pygame through a camera that can zoom and pan.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Running

```
arenafighter [--map PATH] [--sprites PATH]
```

- `--map`: the CSV tile map of the level. The default is
  `bin/maps/level1.csv`.
- `--sprites`: the sprite sheet image. The default is
  `sprites/spritesheet.png`.

Both default paths are relative to the current directory. The command
prints an error and exits with status 1 in two cases: when a file cannot
be read, and when a file does not have the expected layout. It exits with
status 0 when the window is closed.

### Controls

| Keys                 | Action                                |
|----------------------|---------------------------------------|
| W A S D / arrow keys | pan the camera                        |
| E / Page Up          | zoom in                               |
| C / Page Down        | zoom out                              |
| mouse wheel          | zoom                                  |
| right mouse drag     | pan the camera                        |
| R                    | load the map file again               |

Zoom is kept between 0.01 and 100 and changes smoothly toward its target.
The camera is held inside the bounds of the level. The top-left corner of
the window shows the frame rate, the zoom and the camera position.

## Sprite sheet

The sprite sheet is cut into square tiles of 32 pixels. Each `SpriteID`
comes from a fixed column and row of the sheet. `load_sprite_sheet` raises
`ValueError` when a tile falls outside the image.

## Map format

A map is a square CSV file of integer tile IDs. The IDs are the values of
`SpriteID`, from 0 (`DEFAULT`) to 10 (`ROCK_PEAK_1`). Blank lines are
skipped. A cell that is not an integer, or that is not a known ID, becomes
the default tile. The map is centred inside a 32 × 32 level of 32-pixel
tiles, and cells outside it hold the default tile. `load_map` raises
`ValueError` for an empty map, a map that is not square, rows of unequal
length, or a map larger than 32 × 32.

## Using the ECS core

```python
from arenafighter.components import Position, Sprite, SpriteID
from arenafighter.manager import Coordinator

co = Coordinator()
entity = co.add_entity([Position(1.0, 2.0), Sprite(SpriteID.LIGHT_GRASS)])
co.update_render_list()
assert co.render_list == [entity]
```

- `Coordinator.add_entity(components)` registers the components as a new
  entity. The entity is filed under the archetype that matches its
  component types.
- `Coordinator.create_tile(x, y, z, tile_type)` creates a tile entity that
  can be drawn. It returns 0 when no entity id is left.
- `Coordinator.find_render_archetype()` and
  `Coordinator.update_render_list()` select the entities that have both a
  `Position` and a `Sprite`.
- `Coordinator.new_level1(path)` loads a map and creates a tile for every
  cell.
- `Coordinator.render_level(screen, game)` draws the visible tiles and
  returns how many it drew.

`arenafighter.core` is the lower level. It provides `EntityManager`,
`ComponentManager` and `ArchetypeManager`, together with `ComponentSlice`,
a dense store that removes an entry by moving the last entry into its
place. Errors are subclasses of `ECSError`:

- `TooManyEntitiesError`: raised after 100000 entities.
- `EntityOutOfRangeError`
- `ComponentNotFoundError`

`arenafighter.game` has `Game` and `InputState`. `Game.update(inputs)`
applies one tick of input to the camera, and `InputState` can be built
without a window, so the camera logic can be driven from code.

## What it does not do

This is a map viewer, not yet a fighting game:

- There are no creatures, no movement and no combat. `Creature`,
  `Velocity`, `Health`, `BaseSpeed` and `Color` are data types only, and
  nothing in the game uses them.
- Only `Position` and `Sprite` components are stored.
- No map or sprite sheet comes with the package. You must supply both.
- Pressing R loads the map again. It adds new tiles to the world and does
  not remove the old ones.

## Tests

```
pytest
```