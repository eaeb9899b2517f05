"""Entity and component data shared by every game system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Callable, Iterator, Optional

ENTITY_COUNT = 10000
NB_KEYS = 120
MAX_DIALOGS = 5
MAX_VECTOR = 10
MAX_EFFECT = 10

ANIM_CONF = "animations/animations.conf"
SPELL_CONF = "maps/spells.conf"
EFFECT_CONF = "maps/effects.conf"
BUTTON_CONF = "ui/buttons.conf"


class MapId(IntEnum):
    MAIN_WORLD = 0
    HOUSE1 = 1
    INTRO = 2
    LIBRARY = 3


class HudType(IntEnum):
    NONE = 0
    HEALTHBAR = 1
    PLATE = 1 << 2
    INVENTORY = 1 << 3
    XPBAR = 1 << 4
    MANABAR = 1 << 5


class Component(IntFlag):
    NONE = 0
    RENDER = 1 << 0
    POSITION = 1 << 1
    INPUT = 1 << 2
    PLAYER = 1 << 3
    MOB = 1 << 4
    HITBOX = 1 << 5
    PORTAL = 1 << 6
    DIALOG = 1 << 7
    STAT = 1 << 8
    SOUND = 1 << 9
    INVENTORY = 1 << 10
    ITEM = 1 << 11
    HUD = 1 << 12
    NPC = 1 << 13
    SPELL = 1 << 14
    MOUSE = 1 << 15
    PARTICLE = 1 << 16
    UI = 1 << 17


class Faction(IntEnum):
    FRIENDLY = 0
    NEUTRAL = 1
    ENEMY = 2
    MAX_FACTION = 3


class Target(IntEnum):
    NONE = 0
    SELF = 1
    ONE_ENNEMY = 2
    ALL_ENNEMY = 3
    ONE_ALLY = 4
    ALL_ALLY = 5


class MoveType(IntEnum):
    DIRECT = 0
    FOLLOW = 1


class SpellId(IntEnum):
    NONE = 0
    DARK = 1
    FIRE_SPIRIT = 2
    PHOENIX = 3
    END = 4


class EffectType(IntEnum):
    HEAL = 0
    DAMAGE = 1


class EffectKind(IntEnum):
    NONE = 0
    BURN = 1


class ItemType(IntFlag):
    NONE = 0
    CONSUMABLE = 1 << 0
    EQUIPABLE = 1 << 1
    QUEST = 1 << 2
    KEY = 1 << 3
    LOOTABLE = 1 << 4
    STACKABLE = 1 << 5
    USABLE = 1 << 6


class Equipment(IntFlag):
    NONE = 0
    HELMET = 1 << 0
    CHESTPLATE = 1 << 1
    LEGGINGS = 1 << 2
    BOOTS = 1 << 3
    WEAPON = 1 << 4
    SHIELD = 1 << 5
    RING = 1 << 6
    AMULET = 1 << 7


TARGET_NAMES: dict[str, Target] = {
    "none": Target.NONE,
    "self": Target.SELF,
    "one_ennemy": Target.ONE_ENNEMY,
    "all_ennemy": Target.ALL_ENNEMY,
    "one_ally": Target.ONE_ALLY,
    "all_ally": Target.ALL_ALLY,
}

MOVE_NAMES: dict[str, MoveType] = {
    "direct": MoveType.DIRECT,
    "follow": MoveType.FOLLOW,
}

EFFECT_NAMES: dict[str, EffectKind] = {
    "empty": EffectKind.NONE,
    "burn": EffectKind.BURN,
}

EFFECT_TYPES: dict[str, EffectType] = {
    "damage": EffectType.DAMAGE,
    "heal": EffectType.HEAL,
}

SPELL_NAMES: dict[str, SpellId] = {
    "dark": SpellId.DARK,
    "fire_spirit": SpellId.FIRE_SPIRIT,
    "phoenix": SpellId.PHOENIX,
}

EQUIP_NAMES: dict[str, Equipment] = {
    "Helmet": Equipment.HELMET,
    "Chestplate": Equipment.CHESTPLATE,
    "Leggings": Equipment.LEGGINGS,
    "Boots": Equipment.BOOTS,
    "Weapon": Equipment.WEAPON,
    "Shield": Equipment.SHIELD,
    "Ring": Equipment.RING,
    "Amulet": Equipment.AMULET,
}

ITEM_TYPE_NAMES: dict[str, ItemType] = {
    "consumable": ItemType.CONSUMABLE,
    "equipable": ItemType.EQUIPABLE,
    "quest": ItemType.QUEST,
    "key": ItemType.KEY,
    "lootable": ItemType.LOOTABLE,
    "stackable": ItemType.STACKABLE,
    "usable": ItemType.USABLE,
}

# Top-left corner of each inventory slot, in unscaled inventory pixels.
INV_COORDS: tuple[tuple[int, int], ...] = (
    (84, 8), (103, 8), (122, 8), (141, 8), (160, 8), (179, 8),
    (84, 27), (103, 27), (122, 27), (141, 27), (160, 27), (179, 27),
    (84, 46), (103, 46), (122, 46), (141, 46), (160, 46), (179, 46),
    (8, 74), (27, 74), (46, 74), (65, 74), (84, 74),
    (103, 74), (122, 74), (141, 74), (160, 74), (179, 74),
)

# Centre of each hotbar slot on screen.
HOTBAR_COORDS: tuple[tuple[int, int], ...] = tuple(
    (704 + i * 57, 938) for i in range(10)
)


@dataclass(frozen=True)
class Vec2:
    """A 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)


@dataclass
class IntRect:
    left: int = 0
    top: int = 0
    width: int = 0
    height: int = 0


@dataclass
class FloatRect:
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class Sprite:
    """A textured rectangle placed in the world."""

    texture: Optional[str] = None
    position: Vec2 = field(default_factory=Vec2)
    scale: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))
    origin: Vec2 = field(default_factory=Vec2)
    texture_rect: IntRect = field(default_factory=IntRect)

    def global_bounds(self) -> FloatRect:
        """Return the axis-aligned rectangle the sprite covers in the world."""
        width = abs(self.texture_rect.width)
        height = abs(self.texture_rect.height)
        xs = [(corner - self.origin.x) * self.scale.x + self.position.x
              for corner in (0.0, width)]
        ys = [(corner - self.origin.y) * self.scale.y + self.position.y
              for corner in (0.0, height)]
        return FloatRect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


@dataclass
class Animation:
    index: int = 0
    filename: Optional[str] = None
    name: Optional[str] = None
    base_text_rect: IntRect = field(default_factory=IntRect)
    frame_count: int = 0
    frame_size: Vec2 = field(default_factory=Vec2)
    scale: Vec2 = field(default_factory=Vec2)
    frame_rate: int = 0


@dataclass
class Effect:
    name: Optional[str] = None
    effect_type: EffectType = EffectType.HEAL
    value: int = 0
    base_tick_cooldown: int = 0
    duration: int = 0


class SpellMemory:
    """The entities a spell has already touched, compared by identity."""

    def __init__(self) -> None:
        self._seen: list[Entity] = []

    def add(self, entity: Entity) -> None:
        """Remember ``entity``; the most recent comes first."""
        self._seen.insert(0, entity)

    def __contains__(self, entity: object) -> bool:
        return any(seen is entity for seen in self._seen)

    def clear(self) -> None:
        """Forget every entity."""
        self._seen.clear()

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._seen)


@dataclass
class RenderComp:
    current_animation: Optional[Animation] = None
    sprite: Optional[Sprite] = None
    texture: Optional[str] = None
    texture_list: list[Optional[str]] = field(default_factory=list)
    is_visible: bool = False
    does_loop: bool = False
    act_frame: int = 0
    clock: int = 0


@dataclass
class PositionComp:
    position: Vec2 = field(default_factory=Vec2)
    velocity: list[Vec2] = field(
        default_factory=lambda: [Vec2() for _ in range(MAX_VECTOR)])
    vector_length: list[int] = field(default_factory=lambda: [0] * MAX_VECTOR)
    spawn: Vec2 = field(default_factory=Vec2)
    world: int = MapId.MAIN_WORLD
    can_move: bool = False


@dataclass
class InputComp:
    key_pressed: list[bool] = field(default_factory=lambda: [False] * NB_KEYS)
    key_down: list[bool] = field(default_factory=lambda: [False] * NB_KEYS)
    mouse_left_down: bool = False
    mouse_right_down: bool = False
    mouse_pos: Vec2 = field(default_factory=Vec2)
    pressed_func: dict[int, Callable[..., None]] = field(default_factory=dict)
    down_func: dict[int, Callable[..., None]] = field(default_factory=dict)


@dataclass
class MobComp:
    healthbar_id: int = 0
    hurt: Optional[Animation] = None
    death: Optional[Animation] = None
    attack: Optional[Animation] = None
    is_alive: bool = False
    does_follow: bool = False
    range: float = 0.0
    speed: int = 0
    anim_id: int = 0
    does_take_damage: bool = False
    does_rand_spawn: bool = False
    spawn_rate: float = 0.0
    mob_cap: int = 0
    mob_count: int = 0
    is_clone: bool = False
    clone: int = 0


@dataclass
class HitboxComp:
    do_collide: bool = False
    hitbox: FloatRect = field(default_factory=FloatRect)


@dataclass
class StatComp:
    faction: Faction = Faction.FRIENDLY
    max_health: float = 0.0
    health: float = 0.0
    health_regen: float = 0.0
    do_damage: bool = False
    do_respawn: bool = False
    damage: float = 0.0
    defense: float = 0.0
    level_up: bool = False
    exp_loot: float = 0.0
    exp: float = 0.0
    level: int = 0
    exp_requiered: float = 0.0
    clock: int = 0
    invinsibility_frames: int = 0
    effect: list[Optional[Effect]] = field(
        default_factory=lambda: [None] * MAX_EFFECT)
    effect_duration: list[int] = field(default_factory=lambda: [0] * MAX_EFFECT)
    effect_tick_cooldown: list[int] = field(
        default_factory=lambda: [0] * MAX_EFFECT)
    mana: float = 0.0
    mana_max: float = 0.0
    mana_regen: float = 0.0


@dataclass
class Tooltip:
    name: Optional[str] = None
    description: Optional[str] = None
    sprite: Optional[Sprite] = None
    pos: Vec2 = field(default_factory=Vec2)
    scale: Vec2 = field(default_factory=Vec2)
    font: Optional[str] = None


@dataclass
class Item:
    is_picked: bool = False
    id_in_world: int = 0
    id: int = 0
    animation_id: int = 0
    equip_mask: Equipment = Equipment.NONE
    type_mask: ItemType = ItemType.NONE
    quantity: int = 0
    drop_rate: float = 0.0
    tooltip: Tooltip = field(default_factory=Tooltip)
    stats: StatComp = field(default_factory=StatComp)
    spell_id: SpellId = SpellId.NONE


@dataclass
class InventoryComp:
    size: int = 0
    is_open: bool = False
    items: list[Item] = field(default_factory=list)
    sprite: Optional[Sprite] = None
    cursor_sprite: Optional[Sprite] = None
    cursor_slot: int = 0
    scale: Vec2 = field(default_factory=Vec2)
    base_rect: IntRect = field(default_factory=IntRect)
    is_visible: bool = False


@dataclass
class MouseComp:
    item_picked: bool = False
    item_picked_i: int = 0


@dataclass
class HudComp:
    hud_type: HudType = HudType.NONE


@dataclass
class SpellComp:
    index: int = 0
    target: Target = Target.NONE
    move_type: MoveType = MoveType.DIRECT
    damage: float = 0.0
    duration: float = 0.0
    speed: float = 0.0
    cost: float = 0.0
    effect_index: EffectKind = EffectKind.NONE
    animation: Optional[Animation] = None
    memory: SpellMemory = field(default_factory=SpellMemory)


@dataclass(eq=False)
class Entity:
    """One slot of the world: a component mask and the components it holds."""

    mask: Component = Component.NONE
    entity: int = 0
    comp_render: RenderComp = field(default_factory=RenderComp)
    comp_position: PositionComp = field(default_factory=PositionComp)
    comp_input: InputComp = field(default_factory=InputComp)
    comp_mob: MobComp = field(default_factory=MobComp)
    comp_hitbox: HitboxComp = field(default_factory=HitboxComp)
    comp_stat: StatComp = field(default_factory=StatComp)
    comp_inventory: InventoryComp = field(default_factory=InventoryComp)
    comp_item: Item = field(default_factory=Item)
    comp_mouse: MouseComp = field(default_factory=MouseComp)
    comp_hud: HudComp = field(default_factory=HudComp)
    comp_spell: SpellComp = field(default_factory=SpellComp)

    def has(self, mask: int) -> bool:
        """Tell whether every component bit of ``mask`` is set."""
        return (self.mask & mask) == mask