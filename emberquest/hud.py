"""The heads-up display: health, experience and mana bars."""

from __future__ import annotations

from dataclasses import replace

from emberquest.ecs import Component, Entity, HudType, MapId, Vec2
from emberquest.world import World, init_position, init_render

HUD_MAP = MapId.INTRO


def _bar_width(frame_width: float, value: float, maximum: float) -> int:
    # An empty maximum shows an empty bar.
    if maximum == 0:
        return 0
    return int(int(frame_width) * value / maximum)


def _place(world: World, anim_name: str, x_base: float, y_base: float,
           hud_type: HudType) -> int:
    slot = world.find_empty()
    if slot < 0:
        return slot
    entity = world.entities[slot]
    entity.entity = slot
    init_render(entity, world, world.animations[world.anim_id(anim_name)],
                Vec2(0, 0))
    anim = entity.comp_render.current_animation
    rect = anim.base_text_rect
    init_position(entity, Vec2(
        x_base + rect.width * anim.scale.x / 2,
        rect.height * anim.scale.y / 2 + y_base), HUD_MAP)
    entity.mask |= Component.HUD
    entity.comp_hud.hud_type = hud_type
    return slot


def _init_bar(world: World, anim_name: str, x_base: float, y_base: float,
              hud_type: HudType) -> int:
    slot = _place(world, anim_name, x_base, y_base, hud_type)
    if slot < 0:
        return slot
    render = world.entities[slot].comp_render
    render.sprite.texture_rect = replace(render.current_animation.base_text_rect)
    return slot


def _init_heart(world: World) -> int:
    slot = world.find_empty()
    if slot < 0:
        return slot
    anim = world.animations[world.anim_id("spinning_heart")]
    heart = world.entities[slot]
    heart.entity = slot
    init_render(heart, world, anim, Vec2(0, 0))
    rect = anim.base_text_rect
    init_position(heart, Vec2(
        int(rect.width / 2) * anim.scale.x - 60,
        int(rect.height / 2) * anim.scale.y - 40), HUD_MAP)
    heart.mask |= Component.HUD
    return slot


def init_healthbar(world: World) -> int:
    """Create the health bar, its plate and the heart; return the bar's slot."""
    slot = _init_bar(world, "healthbar", 120 + 8, 40, HudType.HEALTHBAR)
    if slot < 0:
        return slot
    _place(world, "healthbar_plate", 120, 10, HudType.PLATE)
    _init_heart(world)
    return slot


def init_xpbar(world: World) -> int:
    """Create the experience bar and its plate; return the bar's slot."""
    slot = _init_bar(world, "xpbar", 120 + 2, 115, HudType.XPBAR)
    if slot < 0:
        return slot
    _place(world, "xpbar_plate", 120, 100, HudType.PLATE)
    return slot


def init_manabar(world: World) -> int:
    """Create the mana bar and its plate; return the bar's slot."""
    slot = _init_bar(world, "manabar", 320 + 2, 115, HudType.MANABAR)
    if slot < 0:
        return slot
    _place(world, "xpbar_plate", 320, 100, HudType.PLATE)
    return slot


def _update_bar(world: World, index: int, anim_name: str, value: float,
                maximum: float) -> None:
    render = world.entities[index].comp_render
    anim = render.current_animation
    if anim is None:
        return
    frame_width = world.animations[world.anim_id(anim_name)].frame_size.x
    anim.base_text_rect.width = _bar_width(frame_width, value, maximum)
    if render.sprite is not None:
        render.sprite.texture_rect = replace(anim.base_text_rect)


def update_healthbar(world: World, index: int, player: Entity) -> None:
    """Size the health bar at ``index`` to the player's remaining health."""
    stat = player.comp_stat
    _update_bar(world, index, "healthbar", stat.health, stat.max_health)


def update_hud(world: World, player: Entity) -> None:
    """Resize every bar of the HUD to the player's current stats."""
    stat = player.comp_stat
    for index, entity in enumerate(world.entities):
        if not entity.has(Component.HUD):
            continue
        hud_type = entity.comp_hud.hud_type
        if hud_type == HudType.HEALTHBAR:
            update_healthbar(world, index, player)
        elif hud_type == HudType.XPBAR:
            _update_bar(world, index, "xpbar", stat.exp, stat.exp_requiered)
        elif hud_type == HudType.MANABAR:
            _update_bar(world, index, "manabar", stat.mana, stat.mana_max)