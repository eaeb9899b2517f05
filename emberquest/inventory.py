"""The player's inventory, its hotbar cursor, item handling and the mouse."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from emberquest.ecs import (
    HOTBAR_COORDS,
    INV_COORDS,
    Component,
    Entity,
    IntRect,
    Item,
    ItemType,
    SpellId,
    Sprite,
    StatComp,
    Vec2,
)
from emberquest.errors import report
from emberquest.world import World, init_hitbox, init_position, init_render

INVENTORY_TEXTURE = "effect/inventory.png"
CURSOR_TEXTURE = "effect/inventory_select.png"
MOUSE_TEXTURE = "effect/empty.png"
INVENTORY_TEXTURE_SIZE = (203, 97)
CURSOR_TEXTURE_SIZE = (19, 19)
INVENTORY_SCALE = 3
SLOT_SIZE = 19 * INVENTORY_SCALE
HOTBAR_FIRST = 18
CLOSED_RECT = IntRect(0, 67, 203, 30)
CURSOR_START = Vec2(8, 74)
ITEM_ICON_SIZE = 64
DROPPED_SCALE = Vec2(0.5, 0.5)
SF_KEY_A = 0


@dataclass
class TooltipLayout:
    """Where a tooltip box and its two lines of text are drawn."""

    box: Sprite
    name: Optional[str]
    name_pos: Vec2
    description: Optional[str]
    description_pos: Vec2


def _centered_sprite(texture: str, size: tuple[int, int]) -> Sprite:
    sprite = Sprite(texture=texture, texture_rect=IntRect(0, 0, size[0], size[1]))
    bounds = sprite.global_bounds()
    sprite.origin = Vec2(bounds.width / 2, bounds.height / 2)
    sprite.scale = Vec2(INVENTORY_SCALE, INVENTORY_SCALE)
    return sprite


def init_inventory(world: World, entity: Entity, size: int) -> None:
    """Give ``entity`` an empty inventory of ``size`` slots and a hotbar cursor."""
    inv = entity.comp_inventory
    entity.mask |= Component.INVENTORY
    inv.size = size
    inv.sprite = _centered_sprite(INVENTORY_TEXTURE, INVENTORY_TEXTURE_SIZE)
    inv.cursor_sprite = _centered_sprite(CURSOR_TEXTURE, CURSOR_TEXTURE_SIZE)
    inv.cursor_sprite.position = CURSOR_START
    inv.base_rect = replace(inv.sprite.texture_rect)
    inv.scale = Vec2(INVENTORY_SCALE, INVENTORY_SCALE)
    inv.items = [Item() for _ in range(size)]


def _occupied(entity: Entity):
    for index, item in enumerate(entity.comp_inventory.items[:entity.comp_inventory.size]):
        if item.type_mask != 0:
            yield index, item


def is_in_inventory(entity: Entity, item_id: int) -> bool:
    """Tell whether ``entity`` carries an item of kind ``item_id``."""
    return find_item_in_inventory(entity, item_id) != -1


def find_item_in_inventory(entity: Entity, item_id: int) -> int:
    """Return the slot holding an item of kind ``item_id``, or -1."""
    if not entity.has(Component.INVENTORY):
        return -1
    for index, item in _occupied(entity):
        if item.id == item_id:
            return index
    return -1


def find_empty_slot(entity: Entity) -> int:
    """Return the first empty slot, or -1 when the inventory is full."""
    inv = entity.comp_inventory
    for index, item in enumerate(inv.items[:inv.size]):
        if item.type_mask == 0:
            return index
    return -1


def add_item_to_inventory(entity: Entity, item: Entity, index: int) -> bool:
    """Pick up the item entity at world slot ``index``; False if impossible."""
    slot = find_empty_slot(entity)
    if slot == -1 or not entity.has(Component.INVENTORY):
        return False
    for _, held in _occupied(entity):
        if held.id_in_world == item.comp_item.id_in_world:
            return False
    item.comp_item.id_in_world = index
    item.comp_render.is_visible = False
    entity.comp_inventory.items[slot] = replace(item.comp_item)
    return True


def _inventory_frame(entity: Entity) -> tuple[int, int, int, int]:
    """Top-left corner and size of the inventory on screen, in whole pixels."""
    sprite = entity.comp_inventory.sprite
    bounds = sprite.global_bounds()
    width = int(bounds.width)
    height = int(bounds.height)
    left = int(sprite.position.x - width // 2)
    top = int(sprite.position.y - height // 2)
    return left, top, width, height


def _inside(pos: Vec2, left: float, top: float, width: float,
            height: float) -> bool:
    return left <= pos.x <= left + width and top <= pos.y <= top + height


def slot_position(entity: Entity, slot: int) -> Vec2:
    """Return the screen centre of inventory slot ``slot``."""
    left, top, _, _ = _inventory_frame(entity)
    x, y = INV_COORDS[slot]
    return Vec2(x * INVENTORY_SCALE + left + SLOT_SIZE // 2,
                y * INVENTORY_SCALE + top + SLOT_SIZE // 2)


def slot_at(entity: Entity, mouse_pos: Vec2) -> int:
    """Return the slot under ``mouse_pos``; -2 elsewhere on the inventory, else -1."""
    left, top, width, height = _inventory_frame(entity)
    for slot, (x, y) in enumerate(INV_COORDS):
        if _inside(mouse_pos, x * INVENTORY_SCALE + left,
                   y * INVENTORY_SCALE + top, SLOT_SIZE, SLOT_SIZE):
            return slot
    if _inside(mouse_pos, left, top, width, height):
        return -2
    return -1


def hotbar_slot_at(entity: Entity, mouse_pos: Vec2) -> int:
    """Return the hotbar slot under ``mouse_pos``; -2 on the inventory, else -1."""
    half = SLOT_SIZE // 2
    for slot, (x, y) in enumerate(HOTBAR_COORDS):
        if _inside(mouse_pos, x - half, y - half, 2 * half, 2 * half):
            return slot
    left, top, width, height = _inventory_frame(entity)
    if _inside(mouse_pos, left, top, width, height):
        return -2
    return -1


def selected_spell(entity: Entity) -> SpellId:
    """Return the spell of the hotbar item under the cursor."""
    inv = entity.comp_inventory
    return inv.items[inv.cursor_slot + HOTBAR_FIRST].spell_id


def drag_item(entity: Entity, mouse: Entity, slot: int) -> None:
    """Swap the item held by the mouse with the one in ``slot``."""
    items = entity.comp_inventory.items
    picked = mouse.comp_mouse.item_picked_i
    items[picked].is_picked = False
    items[picked], items[slot] = items[slot], items[picked]
    mouse.comp_mouse.item_picked = False
    mouse.comp_mouse.item_picked_i = 0


def item_id_by_name(items: list[Item], name: str) -> int:
    """Return the index of the item called ``name``; 0, reported, if unknown."""
    for index, item in enumerate(items):
        if item.tooltip.name == name:
            return index
    report("Invalid item :", name, "\n")
    return 0


def is_mouse_over(pos: Vec2, entity: Entity) -> bool:
    """Tell whether ``pos`` lies on the entity's sprite."""
    sprite = entity.comp_render.sprite
    if not entity.has(Component.RENDER) or sprite is None:
        return False
    bounds = sprite.global_bounds()
    return _inside(pos, bounds.left, bounds.top, bounds.width, bounds.height)


def _player(world: World) -> Optional[Entity]:
    index = world.find_component(Component.PLAYER)
    return world.entities[index] if index != -1 else None


def drop_item(world: World, item: Entity, mouse_pos: Vec2, index: int) -> bool:
    """Drop the item in slot ``index`` at the player's feet if the mouse is on it.

    Key items and empty items are never dropped.
    """
    player = _player(world)
    if player is None:
        return False
    if item.comp_item.type_mask == 0 or item.comp_item.type_mask & ItemType.KEY:
        return False
    if not is_mouse_over(mouse_pos, item):
        return False
    item.comp_render.is_visible = True
    item.comp_render.sprite.scale = DROPPED_SCALE
    player.comp_inventory.items[index].type_mask = ItemType.NONE
    item.comp_position.position = player.comp_position.position
    item.comp_render.sprite.position = player.comp_position.position
    item.comp_position.world = player.comp_position.world
    return True


def _apply_stats(player: Entity, item: Entity) -> None:
    stat = player.comp_stat
    bonus = item.comp_stat
    stat.health = min(stat.health + bonus.health, stat.max_health)
    stat.damage = max(stat.damage + bonus.damage, 0)
    stat.defense = max(stat.defense + bonus.defense, 0)
    stat.mana = min(stat.mana + bonus.mana, stat.mana_max)
    stat.exp += bonus.exp
    item.comp_stat = StatComp()


def use_item(player: Entity, item: Entity, index: int, mouse_pos: Vec2) -> bool:
    """Consume the item in slot ``index`` on a right click over it."""
    if (not player.comp_input.mouse_right_down
            or not item.comp_item.type_mask
            or not is_mouse_over(mouse_pos, item)
            or not item.comp_item.type_mask & ItemType.CONSUMABLE):
        return False
    _apply_stats(player, item)
    player.comp_inventory.items[index].type_mask = ItemType.NONE
    item.comp_render.is_visible = False
    return True


def tooltip_layout(item: Entity, pos: Vec2) -> Optional[TooltipLayout]:
    """Place the item's tooltip at ``pos``; None when it has no box."""
    tooltip = item.comp_item.tooltip
    tooltip.pos = pos
    if tooltip.sprite is None:
        return None
    tooltip.sprite.position = pos
    tooltip.sprite.scale = tooltip.scale
    return TooltipLayout(
        box=tooltip.sprite,
        name=tooltip.name,
        name_pos=Vec2(pos.x + 10, pos.y + 20),
        description=tooltip.description,
        description_pos=Vec2(pos.x + 10, pos.y + 50),
    )


def _highlight(world: World, entity: Entity, index: int,
               mouse_pos: Vec2) -> Optional[TooltipLayout]:
    inv = entity.comp_inventory
    if (not entity.has(Component.INVENTORY) or not inv.is_open
            or index >= inv.size or inv.items[index].type_mask == 0):
        return None
    target = world.entities[inv.items[index].id_in_world]
    if (is_mouse_over(mouse_pos, target) and not world.mouse_left_pressed
            and not world.mouse_right_pressed):
        return tooltip_layout(target, target.comp_render.sprite.position)
    return None


def item_events(world: World, entity: Entity,
                mouse_pos: Vec2) -> Optional[TooltipLayout]:
    """Handle dropping, using and hovering items in the open inventory.

    Stops at the first item acted upon. Returns the tooltip to show, if any.
    """
    inv = entity.comp_inventory
    if not entity.has(Component.INVENTORY) or not inv.is_open:
        return None
    for index in range(inv.size):
        target = world.entities[inv.items[index].id_in_world]
        if world.key_pressed[SF_KEY_A] and drop_item(world, target, mouse_pos, index):
            return None
        if use_item(entity, target, index, mouse_pos):
            return None
        layout = _highlight(world, entity, index, mouse_pos)
        if layout is not None:
            return layout
    return None


def _drop_picked(world: World, entity: Entity, mouse_pos: Vec2,
                 mouse: Entity) -> None:
    picked = mouse.comp_mouse.item_picked_i
    target = world.entities[entity.comp_inventory.items[picked].id_in_world]
    if drop_item(world, target, mouse_pos, picked):
        mouse.comp_mouse.item_picked = False
    mouse.comp_mouse.item_picked_i = -1


def _pick(world: World, entity: Entity, mouse_pos: Vec2, mouse: Entity) -> None:
    for index, item in _occupied(entity):
        target = world.entities[item.id_in_world]
        if is_mouse_over(mouse_pos, target) and world.mouse_left_pressed:
            mouse.comp_mouse.item_picked = True
            mouse.comp_mouse.item_picked_i = index
            item.is_picked = True
            world.mouse_left_pressed = False
            target.comp_position.position = mouse_pos
            return


def manage_inventory_slots(world: World, entity: Entity, mouse_pos: Vec2) -> None:
    """Pick up, move or drop items in the inventory with the mouse."""
    mouse_index = world.find_component(Component.MOUSE)
    if mouse_index == -1:
        return
    mouse = world.entities[mouse_index]
    items = entity.comp_inventory.items
    if not mouse.comp_mouse.item_picked:
        _pick(world, entity, mouse_pos, mouse)
        return
    held = items[mouse.comp_mouse.item_picked_i]
    world.entities[held.id_in_world].comp_position.position = mouse_pos
    slot = slot_at(entity, mouse_pos)
    if world.key_pressed[SF_KEY_A]:
        _drop_picked(world, entity, mouse_pos, mouse)
        return
    if world.mouse_left_pressed:
        world.mouse_left_pressed = False
        if slot >= 0:
            drag_item(entity, mouse, slot)
        if slot == -1:
            _drop_picked(world, entity, mouse_pos, mouse)


def _place_item(world: World, entity: Entity, index: int) -> None:
    if not entity.comp_inventory.is_open:
        return
    pos = slot_position(entity, index)
    target = world.entities[entity.comp_inventory.items[index].id_in_world]
    target.comp_position.position = pos
    target.comp_position.can_move = False
    sprite = target.comp_render.sprite
    if sprite is None:
        return
    sprite.position = pos
    anim = target.comp_render.current_animation
    if anim is not None and anim.frame_size.x and anim.frame_size.y:
        sprite.scale = Vec2(int(ITEM_ICON_SIZE / int(anim.frame_size.x)),
                            int(ITEM_ICON_SIZE / int(anim.frame_size.y)))


def _items_to_draw(world: World, entity: Entity) -> list[int]:
    drawn: list[int] = []
    inv = entity.comp_inventory
    for index in range(inv.size):
        item = inv.items[index]
        if item.type_mask != 0 and not item.is_picked:
            _place_item(world, entity, index)
        if item.type_mask != 0 and world.entities[item.id_in_world].comp_inventory.is_visible:
            drawn.append(item.id_in_world)
    return drawn


def layout_inventory(world: World, window_size: tuple[int, int]) -> list[int]:
    """Lay out the player's inventory for a window of ``window_size``.

    An open inventory is centred and its items placed in their slots; a
    closed one shrinks to the hotbar at the bottom of the screen. Returns
    the world slots of the item entities to draw, in order.
    """
    player = _player(world)
    if player is None:
        return []
    width, height = window_size
    inv = player.comp_inventory
    if not inv.is_open:
        inv.sprite.position = Vec2(width // 2, height // 2 + 500)
        inv.sprite.texture_rect = replace(CLOSED_RECT)
        for index, item in _occupied(player):
            target = world.entities[item.id_in_world]
            if index >= HOTBAR_FIRST:
                target.comp_position.position = Vec2(
                    target.comp_position.position.x, height // 2 + 402)
            else:
                target.comp_inventory.is_visible = False
        return _items_to_draw(world, player)
    for item in inv.items[:inv.size]:
        world.entities[item.id_in_world].comp_inventory.is_visible = True
    inv.sprite.texture_rect = replace(inv.base_rect)
    inv.sprite.position = Vec2(width // 2, height // 2)
    return _items_to_draw(world, player)


def update_cursor(player: Entity) -> int:
    """Move the hotbar cursor to a clicked hotbar slot and return its slot."""
    inv = player.comp_inventory
    slot = inv.cursor_slot
    if player.comp_input.mouse_left_down:
        new_slot = hotbar_slot_at(player, player.comp_input.mouse_pos)
        if 0 <= new_slot <= 9:
            slot = new_slot
    inv.cursor_slot = slot
    if not inv.is_open and inv.cursor_sprite is not None:
        inv.cursor_sprite.position = Vec2(*HOTBAR_COORDS[slot])
    return slot


def init_mouse(world: World, mouse_pos: Vec2) -> int:
    """Create the mouse entity at ``mouse_pos``; return its slot or -1."""
    slot = world.find_empty()
    if slot == -1:
        return -1
    mouse = world.entities[slot]
    init_render(mouse, world, world.animations[world.anim_id("mouse")], mouse_pos)
    init_hitbox(mouse, mouse_pos)
    init_position(mouse, mouse_pos, world.map_id)
    mouse.comp_render.is_visible = True
    mouse.comp_position.can_move = True
    mouse.comp_hitbox.do_collide = False
    mouse.mask |= Component.MOUSE
    mouse.comp_mouse.item_picked = False
    mouse.comp_mouse.item_picked_i = 0
    return slot


def move_mouse(world: World, pos: Vec2) -> int:
    """Put the mouse entity at world position ``pos``; return its slot or -1."""
    slot = world.find_component(Component.MOUSE)
    if slot != -1:
        world.entities[slot].comp_position.position = pos
    return slot