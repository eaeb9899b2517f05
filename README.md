# emberquest

The game-state core of a small tile-based role-playing game. It loads the
game's configuration files. It holds every entity in one table and applies
the game rules to them: inventory handling, HUD bars, camera movement and
mob behaviour. It uses only the standard library.

## Modules

- `emberquest.words`: `split_words(text, separators)` splits a line on any of
  the given characters and drops empty words. `concat_reversed(dest, src)`
  returns `src + dest`.
- `emberquest.errors`: `ConfigError`, plus these helpers:
  - `report(*args)` writes its arguments to standard error.
  - `read_first_line(path)` returns the first line of a file.
  - `is_eof(line)` tells whether a line is missing or empty.
- `emberquest.ecs`: the data model.
  - Enums: `Component`, `ItemType`, `Equipment`, `SpellId`, `Faction`, `Target`,
    `MoveType`, `EffectType`, `EffectKind`, `HudType`, `MapId`.
  - Geometry: `Vec2`, `IntRect`, `FloatRect`, and `Sprite` with
    `global_bounds()`.
  - Components: `Animation`, `Item`, `StatComp` and the other component
    dataclasses.
  - `SpellMemory`: the entities a spell has already touched.
  - `Entity`, with `has(mask)`.
- `emberquest.world`: the `World` entity table.
  - `World` methods: `find_empty()`, `find_component(mask)`, `anim_id(name)`.
  - Component initialisers: `init_render`, `init_hitbox`, `init_mob`,
    `init_input`, `init_position`.
  - Animation playback: `play_animation`, `set_sprite`, `is_in_animation`,
    `update_sprite_direction`.
  - Teardown: `kill_entity` and `kill_world`.
- `emberquest.animations`: `read_animation_conf(path)`, `load_animation` and
  `parse_animation_line`.
- `emberquest.tilemap`: `Tileset`, `MapLayer` and `MapList`, with
  `load_tilesets`, `load_maps`, `parse_csv_layer`, `parse_tileset_line` and
  `tile_source_rect`.
- `emberquest.camera`: `View` and `Camera`.
  - `Camera.follow` moves the camera with an entity.
  - `Camera.move_within` clamps the view to the map.
  - `Camera.resize_to` shrinks the view to fit the map.
  - `Camera.set_destination` and `Camera.move_to_destination` travel to a
    point.
  - `Camera.in_range` tests render distance. `Camera.center_on` centres the
    view.
  - `create_light(size, color)` returns a grid of RGBA tuples forming a round
    halo.
- `emberquest.items`: `read_items_conf`, `load_item` and `parse_item_line`.
  - `create_item` places an item in the world.
  - `item_mask_from_name` and `spell_from_name` look up names.
- `emberquest.hud`: `init_healthbar`, `init_xpbar`, `init_manabar`,
  `update_hud` and `update_healthbar`.
- `emberquest.inventory`: slots, the hotbar and the mouse.
  - Set-up and lookup: `init_inventory`, `add_item_to_inventory`,
    `find_empty_slot`, `find_item_in_inventory`, `is_in_inventory`.
  - Screen positions: `slot_position`, `slot_at`, `hotbar_slot_at`.
  - Items: `drag_item`, `drop_item`, `use_item`, `item_events`,
    `manage_inventory_slots`.
  - Display: `layout_inventory`, `update_cursor`, `tooltip_layout`.
  - Mouse entity: `init_mouse` and `move_mouse`.
- `emberquest.mob_config`: `read_mob_conf`, `read_mob` and `parse_mob_line`.
- `emberquest.mobs`:
  - `update_mobs` runs one frame of mob behaviour: following the player,
    spawning clones and despawning clones.
  - `spawn_copy` spawns one clone.
  - `mob_death` gives the player experience and sometimes drops loot.

## Configuration files

The file name defaults follow the game's data layout:

- `animations/animations.conf`: the first line is a count. Each following line
  is an animation file made of `key=value` lines. The keys are `name`,
  `base_rect`, `frame_count`, `frame_size`, `frame_rate`, `scale` and
  `filename`.
- `tileset/tilesets.conf`: the first line is a count. Each following line is
  `name:texture:width:height:tile_width:tile_height`.
- Map configuration: the first line is the number of maps. Each map is a
  header line `name:layers:music:display_hud:can_attack`. One line per layer
  follows it, `csv:name:width:height:tileset:priority`.
- `maps/items.conf`: the first line is a count. Each following line is an item
  file. Item files use these keys: `type`, `name`, `description`,
  `animation_id`, `tooltip_box`, `tooltip_scale`, `font`, `healing`, `attack`,
  `defense`, `regen`, `mana`, `xp` and `spell`. The `name` and `description`
  values are written in double quotes.
- `maps/mobs.conf`: one mob file per line. Mob files use these keys: `pos`,
  `texture`, `does_follow`, `respawn`, `does_damage`, `take_damage`, `range`,
  `speed`, `attack_delay`, `damage`, `defense`, `health`, `health_regen`,
  `faction`, `spawn_rate`, `rand_spawn`, `mob_cap` and `exp_loot`.

In every file format, reading stops at the first empty line.

## Errors

Invalid input raises `emberquest.errors.ConfigError`. This covers files that
cannot be opened, wrong field counts and out-of-range values. Some readers
keep going instead of raising:

- `load_animation` writes a bad line to standard error and clears the
  animation before it reads on.
- `read_mob` writes a bad line to standard error, frees the mob and
  returns -1.
- `read_mob_conf` skips the mobs that fail to load.

## Example

```python
import random

from emberquest.animations import read_animation_conf
from emberquest.inventory import init_inventory
from emberquest.mobs import update_mobs
from emberquest.mob_config import read_mob_conf
from emberquest.world import World

world = World()
world.animations = read_animation_conf("animations/animations.conf")
player_slot = world.find_empty()
init_inventory(world, world.entities[player_slot], 28)
read_mob_conf(world, "maps/mobs.conf")
update_mobs(world, rng=random.Random(1))
```

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What this package does not do

There is no window, renderer, sound or game loop, and no command to start a
game. Sprites are plain data: texture path, position, scale, origin and
texture rectangle. Textures are never loaded. The tilemap, item and light
functions record placement data and do not draw anything. Keyboard and mouse
input are not read. The caller passes in positions and sets the flags on
`World`. Collision against the map is also left to the caller, through the
`collides` callback of `spawn_copy` and `update_mobs`.

The package holds no NPCs, dialogs, portals, particles, spells in flight,
sound lists or menus.