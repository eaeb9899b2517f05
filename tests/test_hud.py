import pytest

from emberquest.ecs import (
    Animation,
    Component,
    Entity,
    HudType,
    IntRect,
    MapId,
    Vec2,
)
from emberquest.hud import (
    init_healthbar,
    init_manabar,
    init_xpbar,
    update_healthbar,
    update_hud,
)
from emberquest.world import World

NAMES = ["healthbar", "healthbar_plate", "spinning_heart", "xpbar",
         "xpbar_plate", "manabar"]


def _anim(index, name, width=40, height=10, scale=1.0):
    return Animation(index=index, filename=f"{name}.png", name=name,
                     base_text_rect=IntRect(0, 0, width, height),
                     frame_size=Vec2(width, height), frame_count=1,
                     scale=Vec2(scale, scale))


@pytest.fixture
def world():
    return World(entity_count=30,
                 animations=[_anim(i, n) for i, n in enumerate(NAMES)])


def test_healthbar_creates_bar_plate_and_heart(world):
    slot = init_healthbar(world)
    bar = world.entities[slot]
    plate = world.entities[slot + 1]
    heart = world.entities[slot + 2]
    assert bar.comp_hud.hud_type == HudType.HEALTHBAR
    assert plate.comp_hud.hud_type == HudType.PLATE
    assert heart.comp_hud.hud_type == HudType.NONE
    for entity in (bar, plate, heart):
        assert entity.has(Component.HUD | Component.RENDER | Component.POSITION)
        assert entity.comp_position.world == MapId.INTRO
    offset = bar.comp_position.position - plate.comp_position.position
    assert offset == Vec2(8, 30)


def test_heart_uses_integer_half_width():
    anims = [_anim(i, n) for i, n in enumerate(NAMES)]
    anims[2] = _anim(2, "spinning_heart", width=41, height=10, scale=2.0)
    world = World(entity_count=10, animations=anims)
    slot = init_healthbar(world)
    heart = world.entities[slot + 2]
    assert heart.comp_position.position.x == -20


def test_xpbar_and_manabar_layout(world):
    xp = world.entities[init_xpbar(world)]
    xp_plate = world.entities[xp.entity + 1]
    mana = world.entities[init_manabar(world)]
    mana_plate = world.entities[mana.entity + 1]
    assert xp.comp_hud.hud_type == HudType.XPBAR
    assert mana.comp_hud.hud_type == HudType.MANABAR
    assert xp_plate.comp_hud.hud_type == HudType.PLATE
    assert xp.comp_position.position - xp_plate.comp_position.position \
        == Vec2(2, 15)
    assert mana.comp_position.position - mana_plate.comp_position.position \
        == Vec2(2, 15)
    assert mana.comp_position.position.x - xp.comp_position.position.x == 200


def test_full_world_creates_nothing():
    world = World(entity_count=0,
                  animations=[_anim(i, n) for i, n in enumerate(NAMES)])
    assert init_healthbar(world) == -1
    assert init_xpbar(world) == -1
    assert init_manabar(world) == -1


def test_update_healthbar_widths(world):
    slot = init_healthbar(world)
    player = Entity()
    player.comp_stat.max_health = 100.0
    player.comp_stat.health = 100.0
    update_healthbar(world, slot, player)
    sprite = world.entities[slot].comp_render.sprite
    assert sprite.texture_rect.width == 40
    player.comp_stat.health = 50.0
    update_healthbar(world, slot, player)
    assert sprite.texture_rect.width == 20
    player.comp_stat.health = 0.0
    update_healthbar(world, slot, player)
    assert sprite.texture_rect.width == 0


def test_update_hud_sizes_every_bar(world):
    health = init_healthbar(world)
    xp = init_xpbar(world)
    mana = init_manabar(world)
    player = Entity()
    stat = player.comp_stat
    stat.max_health, stat.health = 10.0, 0.0
    stat.exp_requiered, stat.exp = 8.0, 8.0
    stat.mana_max, stat.mana = 4.0, 4.0
    update_hud(world, player)
    widths = [world.entities[i].comp_render.sprite.texture_rect.width
              for i in (health, xp, mana)]
    assert widths == [0, 40, 40]


def test_zero_maximum_gives_empty_bar(world):
    slot = init_manabar(world)
    player = Entity()
    update_hud(world, player)
    assert world.entities[slot].comp_render.sprite.texture_rect.width == 0


def test_plates_are_not_resized(world):
    slot = init_healthbar(world)
    plate = world.entities[slot + 1]
    player = Entity()
    player.comp_stat.max_health = 10.0
    update_hud(world, player)
    assert plate.comp_render.sprite.texture_rect.width == 40