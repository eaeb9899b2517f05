import pytest

from emberquest.ecs import Animation, Component, Faction, IntRect, Vec2
from emberquest.errors import ConfigError
from emberquest.mob_config import (
    parse_mob_line,
    read_mob,
    read_mob_conf,
)
from emberquest.tilemap import MapLayer, MapList
from emberquest.world import World


def _anim(index, name):
    return Animation(index=index, filename=f"{name}.png", name=name,
                     base_text_rect=IntRect(0, 0, 32, 32), frame_count=1,
                     frame_size=Vec2(32, 32), scale=Vec2(1, 1), frame_rate=1)


@pytest.fixture
def world():
    w = World(entity_count=20)
    w.animations = [_anim(0, "slime"), _anim(1, "transparent")]
    w.map_list = [MapList(layers=[MapLayer(size=Vec2(100, 100))])]
    return w


@pytest.fixture
def mob(world):
    slot = world.find_empty()
    entity = world.entities[slot]
    entity.mask = Component.MOB | Component.STAT
    return entity


def test_pos_sets_position_and_spawn(world, mob):
    parse_mob_line(world, mob, "pos = 10,20")
    assert (mob.comp_position.position.x, mob.comp_position.position.y) == (10, 20)
    assert (mob.comp_position.spawn.x, mob.comp_position.spawn.y) == (10, 20)
    assert mob.has(Component.POSITION)


@pytest.mark.parametrize("line", ["pos = 150,20", "pos = -1,5", "pos = 10", "pos"])
def test_bad_pos_raises(world, mob, line):
    with pytest.raises(ConfigError):
        parse_mob_line(world, mob, line)


def test_health_sets_max_health(world, mob):
    parse_mob_line(world, mob, "health = 42.5")
    assert mob.comp_stat.health == 42.5
    assert mob.comp_stat.max_health == mob.comp_stat.health


@pytest.mark.parametrize("key", ["damage", "defense", "health", "health_regen",
                                 "range", "spawn_rate", "exp_loot", "attack_delay"])
def test_negative_values_raise(world, mob, key):
    with pytest.raises(ConfigError):
        parse_mob_line(world, mob, f"{key} = -3")


def test_speed_limits(world, mob):
    parse_mob_line(world, mob, "speed = 5")
    assert mob.comp_mob.speed == 5
    with pytest.raises(ConfigError):
        parse_mob_line(world, mob, "speed = 33")


def test_faction(world, mob):
    parse_mob_line(world, mob, "faction = 2")
    assert mob.comp_stat.faction == Faction.ENEMY
    with pytest.raises(ConfigError):
        parse_mob_line(world, mob, "faction = 4")


def test_does_follow_controls_can_move(world, mob):
    parse_mob_line(world, mob, "does_follow = true")
    assert mob.comp_mob.does_follow is True
    assert mob.comp_position.can_move is True
    parse_mob_line(world, mob, "does_follow = false")
    assert mob.comp_position.can_move is False


def test_take_damage_drives_follow_flag(world, mob):
    parse_mob_line(world, mob, "does_follow = true")
    parse_mob_line(world, mob, "take_damage = false")
    assert mob.comp_mob.does_follow is False


def test_rand_spawn_hides_template(world, mob):
    parse_mob_line(world, mob, "texture = slime")
    parse_mob_line(world, mob, "rand_spawn = true")
    assert mob.comp_mob.does_rand_spawn is True
    assert mob.comp_mob.is_alive is False
    assert mob.comp_render.is_visible is False


def test_texture_sets_render_and_hitbox(world, mob):
    parse_mob_line(world, mob, "texture = slime")
    assert mob.comp_mob.anim_id == 0
    assert mob.has(Component.RENDER | Component.HITBOX)
    assert mob.comp_hitbox.do_collide is True


def test_transparent_texture_does_not_collide(world, mob):
    parse_mob_line(world, mob, "texture = transparent")
    assert mob.comp_mob.anim_id == 1
    assert mob.comp_hitbox.do_collide is False


def test_flags_and_cap(world, mob):
    parse_mob_line(world, mob, "does_damage = true")
    parse_mob_line(world, mob, "respawn = false")
    parse_mob_line(world, mob, "mob_cap = 3")
    assert mob.comp_stat.do_damage is True
    assert mob.comp_stat.do_respawn is False
    assert mob.comp_mob.mob_cap == 3
    with pytest.raises(ConfigError):
        parse_mob_line(world, mob, "mob_cap = -1")


def test_unknown_key_is_ignored(world, mob):
    before = mob.mask
    parse_mob_line(world, mob, "colour = red")
    assert mob.mask == before


def test_blank_line_raises(world, mob):
    with pytest.raises(ConfigError):
        parse_mob_line(world, mob, "   ")


def test_read_mob_from_file(world, tmp_path):
    path = tmp_path / "slime.conf"
    path.write_text("pos = 10,20\ntexture = slime\nhealth = 7\n\nhealth = 99\n")
    slot = read_mob(world, path)
    mob = world.entities[slot]
    assert mob.has(Component.MOB | Component.STAT | Component.RENDER)
    assert mob.comp_stat.health == 7
    assert mob.comp_mob.is_alive is True


def test_read_mob_bad_line_frees_slot(world, tmp_path):
    path = tmp_path / "bad.conf"
    path.write_text("health = 7\nspeed = 99\n")
    assert read_mob(world, path) == -1
    assert all(e.mask == Component.NONE for e in world.entities)


def test_read_mob_missing_file(world, tmp_path):
    with pytest.raises(ConfigError):
        read_mob(world, tmp_path / "missing.conf")


def test_read_mob_conf_skips_failures(world, tmp_path):
    first = tmp_path / "a.conf"
    first.write_text("health = 1\n")
    second = tmp_path / "b.conf"
    second.write_text("health = 2\n")
    conf = tmp_path / "mobs.conf"
    conf.write_text(f"{first}\n{tmp_path / 'missing.conf'}\n{second}\n")
    slots = read_mob_conf(world, conf)
    assert len(slots) == 2
    assert [world.entities[s].comp_stat.health for s in slots] == [1, 2]


def test_read_mob_conf_missing(world, tmp_path):
    with pytest.raises(ConfigError):
        read_mob_conf(world, tmp_path / "nothing.conf")