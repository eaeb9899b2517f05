"""Item descriptions: parsing item files and placing items in the world."""

from __future__ import annotations

import copy
import re
from dataclasses import replace
from pathlib import Path
from typing import Callable

from emberquest.ecs import (
    EQUIP_NAMES,
    ITEM_TYPE_NAMES,
    SPELL_NAMES,
    Component,
    Item,
    ItemType,
    SpellId,
    Sprite,
    Vec2,
)
from emberquest.errors import ConfigError, is_eof, read_first_line
from emberquest.tilemap import ITEM_CONF
from emberquest.world import World, init_position, init_render
from emberquest.words import split_words

_SEPARATORS = "= \n\t"
_LIST_SEPARATORS = ",\n\t"
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def item_mask_from_name(name: str) -> int:
    """Return the item-type or equipment bit called ``name``, 0 if unknown."""
    if name in ITEM_TYPE_NAMES:
        return int(ITEM_TYPE_NAMES[name])
    if name in EQUIP_NAMES:
        return int(EQUIP_NAMES[name])
    return 0


def spell_from_name(name: str) -> SpellId:
    """Return the spell called ``name``, SpellId.NONE if unknown."""
    return SPELL_NAMES.get(name, SpellId.NONE)


def _value(line: str) -> str:
    words = split_words(line, _SEPARATORS)
    if len(words) < 2:
        raise ConfigError(f"Invalid args :{line}")
    return words[1]


def _quoted(line: str) -> str:
    parts = split_words(line, '"')
    if len(parts) < 2:
        raise ConfigError(f"Invalid args :{line}")
    return parts[1]


def _set_type(world: World, item: Item, line: str) -> None:
    parts = split_words(_value(line), _LIST_SEPARATORS)
    if not parts:
        raise ConfigError(f"Invalid args :{line}")
    item.type_mask = ItemType(int(item.type_mask) | item_mask_from_name(parts[0]))
    if item.type_mask == 0:
        raise ConfigError(f"Invalid mask :{line}")


def _set_name(world: World, item: Item, line: str) -> None:
    _value(line)
    item.tooltip.name = _quoted(line)


def _set_description(world: World, item: Item, line: str) -> None:
    _value(line)
    item.tooltip.description = _quoted(line)


def _set_animation_id(world: World, item: Item, line: str) -> None:
    item.animation_id = world.anim_id(_value(line))


def _set_tooltip(world: World, item: Item, line: str) -> None:
    texture = _value(line)
    if not Path(texture).is_file():
        raise ConfigError(f"Invalid texture :{line}")
    item.tooltip.sprite = Sprite(texture=texture)


def _set_scale(world: World, item: Item, line: str) -> None:
    if item.tooltip.sprite is None:
        raise ConfigError(f"No texture set for tooltip :{line}")
    parts = split_words(_value(line), _LIST_SEPARATORS)
    if len(parts) < 2:
        raise ConfigError(f"Invalid args :{line}")
    item.tooltip.scale = Vec2(_atof(parts[0]), _atof(parts[1]))


def _set_font(world: World, item: Item, line: str) -> None:
    font = _value(line)
    if not Path(font).is_file():
        raise ConfigError(f"Invalid font: {font}")
    if item.tooltip.name is None or item.tooltip.description is None:
        raise ConfigError(f"No name or description set :{line}")
    item.tooltip.font = font


def _set_health(world: World, item: Item, line: str) -> None:
    item.stats.health = _atof(_value(line))
    item.stats.max_health = item.stats.health


def _set_attack(world: World, item: Item, line: str) -> None:
    value = _value(line)
    item.stats.damage = _atof(value)
    if item.stats.damage < 0:
        raise ConfigError(f"Invalid dmg: {value}")


def _set_defense(world: World, item: Item, line: str) -> None:
    value = _value(line)
    item.stats.defense = _atof(value)
    if item.stats.defense < 0:
        raise ConfigError(f"Invalid def: {value}")


def _set_regen(world: World, item: Item, line: str) -> None:
    value = _value(line)
    item.stats.health_regen = _atof(value)
    if item.stats.health_regen < 0:
        raise ConfigError(f"Invalid regen:{value}")


def _set_mana(world: World, item: Item, line: str) -> None:
    value = _atof(_value(line))
    item.stats.mana_max = value
    item.stats.mana = value


def _set_xp(world: World, item: Item, line: str) -> None:
    item.stats.exp = _atof(_value(line))


def _set_spell(world: World, item: Item, line: str) -> None:
    item.spell_id = spell_from_name(_value(line))


ITEM_FLAGS: dict[str, Callable[[World, Item, str], None]] = {
    "type": _set_type,
    "name": _set_name,
    "description": _set_description,
    "animation_id": _set_animation_id,
    "tooltip_box": _set_tooltip,
    "tooltip_scale": _set_scale,
    "font": _set_font,
    "healing": _set_health,
    "attack": _set_attack,
    "defense": _set_defense,
    "regen": _set_regen,
    "mana": _set_mana,
    "xp": _set_xp,
    "spell": _set_spell,
}


def parse_item_line(world: World, item: Item, line: str) -> None:
    """Apply one ``key = value`` line to ``item``; unknown keys are ignored.

    Raises ConfigError when the line is blank or its value is invalid.
    """
    words = split_words(line, _SEPARATORS)
    if not words:
        raise ConfigError(f"Invalid line: {line}")
    setter = ITEM_FLAGS.get(words[0])
    if setter is not None:
        setter(world, item, line)


def load_item(world: World, path: str | Path, item_id: int) -> Item:
    """Fill ``world.item_list[item_id]`` from the item file at ``path``.

    Reading stops at the first empty line. Raises ConfigError when the
    file cannot be opened or a line is invalid.
    """
    item = world.item_list[item_id]
    try:
        stream = open(path, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Fail openning: {path}") from exc
    with stream:
        for raw in stream:
            if is_eof(raw):
                break
            parse_item_line(world, item, raw.rstrip("\n"))
    return item


def read_items_conf(world: World, path: str | Path = ITEM_CONF) -> list[Item]:
    """Load every item listed in the configuration file at ``path``.

    The first line gives the number of items, then one item file per
    line; reading stops at an empty line or once that many are read.
    The items are stored in ``world.item_list`` and returned.
    """
    first = read_first_line(path)
    count = _atoi(first)
    if count <= 0:
        raise ConfigError(f"Invalid items nb: {first.rstrip()}")
    world.item_list = [Item() for _ in range(count)]
    with open(path, encoding="utf-8") as stream:
        stream.readline()
        for item_id, raw in enumerate(stream):
            if item_id >= count:
                break
            line = raw[:-1] if raw.endswith("\n") else raw
            if not line:
                break
            item = world.item_list[item_id]
            item.stats = type(item.stats)()
            item.is_picked = False
            item.id = item_id
            load_item(world, line, item_id)
    return world.item_list


def create_item(world: World, pos: Vec2, item_id: int) -> int:
    """Place a copy of item ``item_id`` at ``pos`` in the current map.

    Returns the entity slot used, or -1 when the world is full.
    """
    template = world.item_list[item_id]
    slot = world.find_empty()
    if slot == -1:
        return -1
    entity = world.entities[slot]
    entity.entity = slot
    entity.mask |= Component.ITEM | Component.STAT
    entity.comp_stat = copy.deepcopy(template.stats)
    entity.comp_item = replace(
        template,
        tooltip=replace(template.tooltip),
        stats=copy.deepcopy(template.stats),
    )
    entity.comp_item.id_in_world = slot
    init_render(entity, world, world.animations[template.animation_id], pos)
    init_position(entity, pos, world.map_id)
    return slot