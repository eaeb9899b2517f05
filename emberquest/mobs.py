"""Mob behaviour each frame: following, spawning copies, despawning and loot."""

from __future__ import annotations

import copy
import math
import random
from dataclasses import replace
from typing import Callable, Optional

from emberquest.ecs import Component, Entity, ItemType, Vec2
from emberquest.items import create_item
from emberquest.world import (
    DISPAWN_RANGE,
    World,
    init_hitbox,
    init_position,
    init_render,
    kill_entity,
    update_sprite_direction,
)

SPAWN_DISTANCE = 400.0
LOOT_CHANCE = 10
RAND_LIMIT = 2 ** 31
MOB_HEALTHBAR_ANIM = "mob_healthbar"

Collides = Callable[[Entity], bool]

_default_rng = random.Random()


def _never_collides(entity: Entity) -> bool:
    return False


def _player(world: World) -> Optional[Entity]:
    index = world.find_component(Component.PLAYER)
    return world.entities[index] if index != -1 else None


def mob_death(world: World, entity: Entity, rng=None) -> int:
    """Reward the player for killing ``entity``; sometimes drop loot.

    One time in ten a random lootable item is placed where the mob died.
    Returns the slot of the dropped item, or -1 when nothing dropped.
    """
    rng = rng if rng is not None else _default_rng
    player = _player(world)
    if not entity.has(Component.MOB) or player is None:
        return -1
    player.comp_stat.exp += entity.comp_stat.exp_loot
    items = world.item_list
    if not items:
        return -1
    if rng.randrange(LOOT_CHANCE) != 0:
        return -1
    if not any(item.type_mask & ItemType.LOOTABLE for item in items):
        return -1
    while True:
        choice = rng.randrange(len(items))
        if items[choice].type_mask & ItemType.LOOTABLE:
            break
    return create_item(world, entity.comp_position.position, choice)


def _healthbar_position(mob: Entity, mob_pos: Vec2) -> Vec2:
    anim = mob.comp_render.current_animation
    lift = anim.frame_size.y * anim.scale.y / 3 if anim is not None else 0.0
    return Vec2(mob_pos.x, mob_pos.y - lift)


def _init_mob_healthbar(world: World, mob: Entity) -> int:
    slot = world.find_empty()
    if slot == -1:
        return -1
    healthbar = world.entities[slot]
    anim = world.animations[world.anim_id(MOB_HEALTHBAR_ANIM)]
    init_render(healthbar, world, anim, Vec2(0, 0))
    init_position(healthbar,
                  _healthbar_position(mob, mob.comp_position.position),
                  mob.comp_position.world)
    mob.comp_mob.healthbar_id = slot
    return slot


def spawn_copy(world: World, entity: Entity, angle: float,
               camera_moving: bool = False,
               collides: Optional[Collides] = None) -> int:
    """Spawn a clone of the mob ``entity`` around the player.

    The clone appears at the spawn distance from the player in direction
    ``angle`` (radians). It is discarded when ``collides`` says it overlaps
    something. Returns the clone's slot, or -1 when none was spawned.
    """
    collides = collides if collides is not None else _never_collides
    slot = world.find_empty()
    player = _player(world)
    if slot == -1 or player is None or camera_moving:
        return -1
    player_pos = player.comp_position.position
    pos = Vec2(math.cos(angle) * SPAWN_DISTANCE + player_pos.x,
               math.sin(angle) * SPAWN_DISTANCE + player_pos.y)
    clone = world.entities[slot]
    init_render(clone, world, world.animations[entity.comp_mob.anim_id], pos)
    init_position(clone, pos, entity.comp_position.world)
    init_hitbox(clone, pos)
    clone.comp_mob = replace(entity.comp_mob)
    clone.comp_stat = copy.deepcopy(entity.comp_stat)
    clone.entity = slot
    clone.mask |= Component.STAT | Component.MOB
    clone.comp_mob.is_alive = True
    clone.comp_mob.does_rand_spawn = False
    clone.comp_stat.do_respawn = False
    clone.comp_hitbox.do_collide = True
    clone.comp_mob.is_clone = True
    clone.comp_mob.clone = entity.entity
    if not collides(clone):
        entity.comp_mob.mob_count += 1
        _init_mob_healthbar(world, clone)
        return slot
    clone.comp_render.sprite = None
    clone.comp_render.texture = None
    clone.mask = Component.NONE
    return -1


def _queue_velocity(entity: Entity, vector: Vec2, length: int) -> None:
    pos = entity.comp_position
    for index, remaining in enumerate(pos.vector_length):
        if remaining <= 0:
            pos.velocity[index] = vector
            pos.vector_length[index] = length
            return


def _update_mob_healthbar(world: World, mob: Entity, mob_pos: Vec2) -> None:
    if mob.comp_mob.healthbar_id == 0:
        return
    healthbar = world.entities[mob.comp_mob.healthbar_id]
    anim = healthbar.comp_render.current_animation
    if anim is None:
        return
    stat = mob.comp_stat
    ratio = stat.health / stat.max_health if stat.max_health else 0.0
    rect = replace(anim.base_text_rect,
                   width=int(ratio * anim.base_text_rect.width))
    healthbar.comp_render.is_visible = True
    if healthbar.comp_render.sprite is not None:
        healthbar.comp_render.sprite.texture_rect = rect
    healthbar.comp_position.position = _healthbar_position(mob, mob_pos)


def _follow_move(world: World, mob: Entity, player: Entity) -> None:
    mob_pos = mob.comp_position.position
    player_pos = player.comp_position.position
    dx = player_pos.x - mob_pos.x
    dy = player_pos.y - mob_pos.y
    hyp = math.hypot(dx, dy)
    if hyp > 0:
        speed = mob.comp_mob.speed
        _queue_velocity(mob, Vec2(dx / hyp * speed, dy / hyp * speed), 1)
    _update_mob_healthbar(world, mob, mob_pos)
    update_sprite_direction(mob)


def _distance_sq(a: Vec2, b: Vec2) -> float:
    return (a.x - b.x) ** 2 + (a.y - b.y) ** 2


def _in_range(mob: Entity, player: Entity) -> bool:
    reach = mob.comp_mob.range
    return _distance_sq(mob.comp_position.position,
                        player.comp_position.position) <= reach * reach


def _check_clone_dispawn(world: World, mob: Entity, player: Entity) -> None:
    far = _distance_sq(mob.comp_position.position,
                       player.comp_position.position) > DISPAWN_RANGE
    if mob.comp_mob.is_clone and (mob.comp_position.world != world.map_id
                                  or far):
        kill_entity(mob, world)
    if mob.comp_mob.healthbar_id != 0:
        world.entities[mob.comp_mob.healthbar_id].comp_render.is_visible = False


def _next_frame(world: World, entity: Entity, camera_moving: bool,
                collides: Collides, rng) -> None:
    ran = rng.randrange(RAND_LIMIT)
    player = _player(world)
    if player is None:
        return
    if entity.comp_position.world != world.map_id:
        _check_clone_dispawn(world, entity, player)
        return
    mob = entity.comp_mob
    if mob.does_follow and mob.is_alive and _in_range(entity, player):
        _follow_move(world, entity, player)
        return
    if (mob.does_rand_spawn and mob.mob_count < mob.mob_cap
            and (ran % 10000) / 100.0 < mob.spawn_rate):
        spawn_copy(world, entity, (ran % 360) * math.pi / 180.0,
                   camera_moving, collides)
    _check_clone_dispawn(world, entity, player)


def update_mobs(world: World, camera_moving: bool = False,
                collides: Optional[Collides] = None, rng=None) -> None:
    """Run one frame of behaviour for every mob in the world."""
    collides = collides if collides is not None else _never_collides
    rng = rng if rng is not None else _default_rng
    for entity in world.entities:
        if entity.has(Component.MOB) and entity.mask != Component.NONE:
            _next_frame(world, entity, camera_moving, collides, rng)