"""The game world: entity storage, component set-up, animations and teardown."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any, Optional

from emberquest.ecs import (
    ENTITY_COUNT,
    NB_KEYS,
    Animation,
    Component,
    Effect,
    Entity,
    FloatRect,
    IntRect,
    Item,
    MapId,
    SpellComp,
    Sprite,
    Vec2,
)

RENDER_DISTANCE = 600.0 * 600.0
DISPAWN_RANGE = 800.0 * 800.0
WEATHER_RATE = 0.01


class Weather(IntEnum):
    CLEAR = 0
    RAIN = 1
    MAX_WEATHER = 2


@dataclass(eq=False)
class World:
    """Every entity slot and the shared resources the systems read."""

    entity_count: int = ENTITY_COUNT
    is_paused: bool = False
    ui_id: int = 0
    map_id: int = MapId.INTRO
    map_list: list[Any] = field(default_factory=list)
    sound_list: list[Any] = field(default_factory=list)
    texture_list: list[Optional[str]] = field(default_factory=list)
    item_list: list[Item] = field(default_factory=list)
    effect_list: list[Effect] = field(default_factory=list)
    animations: list[Animation] = field(default_factory=list)
    spell_list: list[SpellComp] = field(default_factory=list)
    key_pressed: list[bool] = field(default_factory=lambda: [False] * NB_KEYS)
    key_down: list[bool] = field(default_factory=lambda: [False] * NB_KEYS)
    mouse_left_pressed: bool = False
    mouse_right_pressed: bool = False
    weather: Weather = Weather.CLEAR
    light_sprite: Optional[Sprite] = None
    sound_volume: int = 100
    music_volume: int = 100
    entities: list[Entity] = field(init=False)

    def __post_init__(self) -> None:
        self.entities = [Entity(entity=i) for i in range(self.entity_count)]

    def find_empty(self) -> int:
        """Reset the first unused slot and return its index, or -1 if full."""
        for index, entity in enumerate(self.entities):
            if entity.mask == Component.NONE:
                self.entities[index] = Entity(entity=index)
                return index
        return -1

    def find_component(self, mask: int) -> int:
        """Return the index of the first entity holding ``mask``, or -1."""
        for index, entity in enumerate(self.entities):
            if entity.has(mask) and entity.mask != Component.NONE:
                return index
        return -1

    def anim_id(self, name: str) -> int:
        """Return the index of the animation called ``name``, 0 if unknown."""
        for index, anim in enumerate(self.animations):
            if anim.filename is None:
                break
            if anim.name == name:
                return index
        return 0


def _texture_at(textures: list[Optional[str]], index: int) -> Optional[str]:
    return textures[index] if 0 <= index < len(textures) else None


def init_render(entity: Entity, world: World, anim: Animation,
                position: Vec2) -> None:
    """Give ``entity`` a sprite showing the first frame of ``anim``."""
    render = entity.comp_render
    rect = anim.base_text_rect
    entity.mask |= Component.RENDER
    render.current_animation = anim
    render.act_frame = 0
    render.clock = 0
    render.does_loop = True
    render.is_visible = True
    render.texture = _texture_at(world.texture_list, anim.index)
    render.texture_list = world.texture_list
    render.sprite = Sprite(
        texture=render.texture,
        position=position,
        scale=anim.scale,
        origin=Vec2(int(rect.width / 2), int(rect.height / 2)),
        texture_rect=replace(rect),
    )


def init_hitbox(entity: Entity, position: Vec2) -> None:
    """Set a hitbox covering the central half of the entity's sprite."""
    sprite = entity.comp_render.sprite
    bounds = sprite.global_bounds() if sprite is not None else FloatRect()
    entity.mask |= Component.HITBOX
    entity.comp_hitbox.do_collide = True
    entity.comp_hitbox.hitbox = FloatRect(
        bounds.left + bounds.width / 4.0 - position.x,
        bounds.top + bounds.height / 4.0 - position.y,
        bounds.width / 2.0,
        bounds.height / 2.0,
    )


def init_mob(entity: Entity) -> None:
    """Mark ``entity`` as a living mob that follows the player."""
    entity.mask |= Component.MOB
    entity.comp_mob.is_alive = True
    entity.comp_mob.range = 200.0
    entity.comp_mob.speed = 1
    entity.comp_mob.does_follow = True


def init_input(entity: Entity, world: World) -> None:
    """Share the world's key state with ``entity``."""
    entity.mask |= Component.INPUT
    entity.comp_input.key_pressed = world.key_pressed
    entity.comp_input.key_down = world.key_down


def init_position(entity: Entity, position: Vec2, world_id: int) -> None:
    """Place ``entity`` at ``position`` in map ``world_id``; it spawns there."""
    entity.mask |= Component.POSITION
    entity.comp_position.position = position
    entity.comp_position.can_move = True
    entity.comp_position.spawn = position
    entity.comp_position.world = world_id


def _movement(entity: Entity) -> Vec2:
    """The entity's queued movement: the sum of its active velocities."""
    pos = entity.comp_position
    total = Vec2()
    for velocity, length in zip(pos.velocity, pos.vector_length):
        if length > 0:
            total = total + velocity
    return total


def update_sprite_direction(entity: Entity) -> None:
    """Mirror the sprite so that it faces the way the entity moves."""
    sprite = entity.comp_render.sprite
    if sprite is None:
        return
    velocity = _movement(entity)
    scale = sprite.scale
    if (scale.x < 0 and velocity.x > 0) or (scale.x > 0 and velocity.x < 0):
        sprite.scale = Vec2(-scale.x, scale.y)


def is_in_animation(entity: Entity) -> bool:
    """Tell whether a one-shot animation is still playing."""
    render = entity.comp_render
    if render.does_loop:
        return False
    anim = render.current_animation
    if anim is None or render.act_frame >= anim.frame_count:
        return False
    return True


def play_animation(world: World, entity: Entity, animation_index: int,
                   does_loop: bool) -> None:
    """Switch ``entity`` to animation ``animation_index`` from its first frame."""
    if animation_index == -1:
        animation_index = 0
    render = entity.comp_render
    anim = world.animations[animation_index]
    sprite = render.sprite
    mult_scale = -1.0 if sprite is not None and sprite.scale.x < 0 else 1.0
    if render.current_animation is anim and render.does_loop:
        return
    render.current_animation = anim
    render.act_frame = 0
    render.clock = 0
    render.does_loop = does_loop
    render.is_visible = True
    render.texture = _texture_at(render.texture_list, animation_index)
    set_sprite(entity, anim, mult_scale, anim.base_text_rect)


def set_sprite(entity: Entity, anim: Animation, mult_scale: float,
               rect: IntRect) -> None:
    """Point the entity's sprite at ``anim``'s first frame."""
    render = entity.comp_render
    if render.sprite is None:
        render.sprite = Sprite()
    sprite = render.sprite
    sprite.texture = render.texture
    sprite.position = entity.comp_position.position
    sprite.scale = Vec2(anim.scale.x * mult_scale, anim.scale.x)
    sprite.texture_rect = replace(anim.base_text_rect)
    sprite.origin = Vec2(int(rect.width / 2), int(rect.height / 2))


def kill_entity(entity: Entity, world: World) -> None:
    """Release ``entity``'s resources and free its slot."""
    if entity.has(Component.MOB) and entity.comp_mob.is_clone:
        world.entities[entity.comp_mob.clone].comp_mob.mob_count -= 1
        healthbar = world.entities[entity.comp_mob.healthbar_id]
        healthbar.comp_render.is_visible = False
        healthbar.comp_render.sprite = None
        healthbar.comp_render.texture = None
        healthbar.mask = Component.NONE
    if entity.has(Component.RENDER):
        entity.comp_render.texture = None
        entity.comp_render.sprite = None
    if entity.has(Component.SPELL):
        entity.comp_spell.memory.clear()
    entity.mask = Component.NONE


def kill_world(world: World) -> None:
    """Drop every shared resource the world holds."""
    world.animations = []
    world.effect_list = []
    world.spell_list = []
    world.sound_list = []
    world.map_list = []