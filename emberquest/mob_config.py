"""Reading mob descriptions from configuration files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable

from emberquest.ecs import Component, Entity, Faction, Vec2
from emberquest.errors import ConfigError, report
from emberquest.tilemap import MOB_CONF
from emberquest.world import World, init_hitbox, init_position, init_render
from emberquest.words import split_words

_SEPARATORS = " =\n"
_MAX_SPEED = 32.0
_NO_COLLISION_ANIMS = ("intro", "transparent")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _value(line: str) -> str:
    words = split_words(line, _SEPARATORS)
    if len(words) < 2:
        raise ConfigError(f"Invalid args: {line}")
    return words[1]


def _flag(line: str) -> bool:
    return _value(line) == "true"


def _non_negative(line: str) -> float:
    value = _atof(_value(line))
    if value < 0.0:
        raise ConfigError(f"Invalid args: {line}")
    return value


def _set_does_damage(world: World, entity: Entity, line: str) -> None:
    entity.comp_stat.do_damage = _flag(line)


def _set_does_respawn(world: World, entity: Entity, line: str) -> None:
    entity.comp_stat.do_respawn = _flag(line)


def _set_does_follow(world: World, entity: Entity, line: str) -> None:
    entity.comp_mob.does_follow = _flag(line)
    entity.comp_position.can_move = entity.comp_mob.does_follow


def _set_does_take_damage(world: World, entity: Entity, line: str) -> None:
    # The "take_damage" key drives the follow flag, as the game expects.
    entity.comp_mob.does_follow = _flag(line)


def _set_damage(world: World, entity: Entity, line: str) -> None:
    entity.comp_stat.damage = _non_negative(line)


def _set_defense(world: World, entity: Entity, line: str) -> None:
    entity.comp_stat.defense = _non_negative(line)


def _set_health(world: World, entity: Entity, line: str) -> None:
    entity.comp_stat.health = _non_negative(line)
    entity.comp_stat.max_health = entity.comp_stat.health


def _set_health_regen(world: World, entity: Entity, line: str) -> None:
    entity.comp_stat.health_regen = _non_negative(line)


def _set_delay(world: World, entity: Entity, line: str) -> None:
    entity.comp_stat.invinsibility_frames = int(_non_negative(line))


def _set_speed(world: World, entity: Entity, line: str) -> None:
    value = _atof(_value(line))
    if value < 0.0 or value > _MAX_SPEED:
        raise ConfigError(f"Invalid args: {line}")
    entity.comp_mob.speed = int(value)


def _set_range(world: World, entity: Entity, line: str) -> None:
    entity.comp_mob.range = _non_negative(line)


def _set_faction(world: World, entity: Entity, line: str) -> None:
    value = _atoi(_value(line))
    if value < 0 or value > int(max(Faction)):
        raise ConfigError(f"Invalid args: {line}")
    entity.comp_stat.faction = Faction(value)


def _set_does_rand(world: World, entity: Entity, line: str) -> None:
    entity.comp_mob.does_rand_spawn = _flag(line)
    if entity.comp_mob.does_rand_spawn:
        entity.comp_mob.is_alive = False
        entity.comp_render.is_visible = False


def _set_spawn_rate(world: World, entity: Entity, line: str) -> None:
    entity.comp_mob.spawn_rate = _non_negative(line)


def _set_mob_pos(world: World, entity: Entity, line: str) -> None:
    value = _value(line)
    parts = split_words(value, ",")
    if len(parts) < 2:
        raise ConfigError(f"Invalid args: {line}")
    x, y = _atof(parts[0]), _atof(parts[1])
    map_index = int(entity.comp_position.world)
    if not 0 <= map_index < len(world.map_list):
        raise ConfigError(f"Invalid pos: {value}")
    size = world.map_list[map_index].layers[0].size
    if x < 0 or y < 0 or x > size.x or y > size.y:
        raise ConfigError(f"Invalid pos: {value}")
    init_position(entity, Vec2(x, y), map_index)


def _set_anim(world: World, entity: Entity, line: str) -> None:
    name = _value(line)
    index = world.anim_id(name)
    entity.comp_mob.anim_id = index
    position = entity.comp_position.position
    init_render(entity, world, world.animations[index], position)
    init_hitbox(entity, position)
    if name in _NO_COLLISION_ANIMS:
        entity.comp_hitbox.do_collide = False


def _set_mob_cap(world: World, entity: Entity, line: str) -> None:
    value = _atoi(_value(line))
    if value < 0:
        raise ConfigError(f"Invalid args: {line}")
    entity.comp_mob.mob_cap = value


def _set_exp_loot(world: World, entity: Entity, line: str) -> None:
    entity.comp_stat.exp_loot = _non_negative(line)


MOB_ARGS: dict[str, Callable[[World, Entity, str], None]] = {
    "pos": _set_mob_pos,
    "does_follow": _set_does_follow,
    "texture": _set_anim,
    "respawn": _set_does_respawn,
    "does_damage": _set_does_damage,
    "range": _set_range,
    "take_damage": _set_does_take_damage,
    "speed": _set_speed,
    "attack_delay": _set_delay,
    "damage": _set_damage,
    "defense": _set_defense,
    "health": _set_health,
    "health_regen": _set_health_regen,
    "faction": _set_faction,
    "spawn_rate": _set_spawn_rate,
    "rand_spawn": _set_does_rand,
    "mob_cap": _set_mob_cap,
    "exp_loot": _set_exp_loot,
}


def parse_mob_line(world: World, entity: Entity, line: str) -> None:
    """Apply one ``key = value`` line to the mob ``entity``.

    Unknown keys are ignored. Raises ConfigError when the line is blank
    or its value is invalid.
    """
    words = split_words(line, _SEPARATORS)
    if not words:
        raise ConfigError(f"Invalid line: {line}")
    setter = MOB_ARGS.get(words[0])
    if setter is not None:
        setter(world, entity, line)


def read_mob(world: World, path: str | Path) -> int:
    """Create a mob from the description file at ``path``.

    Reading stops at the first empty line. A bad line is reported and
    frees the mob again. Returns the mob's slot, or -1 when a line was bad.
    Raises ConfigError when the world is full or the file cannot be opened.
    """
    slot = world.find_empty()
    if slot == -1:
        raise ConfigError("No free entity slot")
    entity = world.entities[slot]
    try:
        stream = open(path, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Fail openning: {path}") from exc
    entity.comp_mob.is_alive = True
    with stream:
        for raw in stream:
            if raw == "" or raw.startswith("\n"):
                break
            entity.mask |= Component.STAT | Component.MOB
            try:
                parse_mob_line(world, entity, raw.rstrip("\n"))
            except ConfigError as exc:
                report(str(exc), "\n")
                entity.mask = Component.NONE
                return -1
    return slot


def read_mob_conf(world: World, path: str | Path = MOB_CONF) -> list[int]:
    """Create every mob listed, one description file per line, in ``path``.

    Reading stops at an empty line. Mobs that fail to load are reported
    and skipped. Returns the slots of the mobs created.
    Raises ConfigError when the list itself cannot be opened.
    """
    try:
        stream = open(path, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Fail openning: {path}") from exc
    slots: list[int] = []
    with stream:
        for raw in stream:
            line = raw[:-1] if raw.endswith("\n") else raw
            if not line:
                break
            try:
                slot = read_mob(world, line)
            except ConfigError as exc:
                report(str(exc), "\n")
                continue
            if slot != -1:
                slots.append(slot)
    return slots