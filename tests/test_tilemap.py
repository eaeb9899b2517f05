import pytest

from emberquest.ecs import IntRect, Vec2
from emberquest.errors import ConfigError
from emberquest.tilemap import (
    MapLayer,
    Tileset,
    load_maps,
    load_tilesets,
    parse_csv_layer,
    parse_tileset_line,
    tile_source_rect,
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "tiles.png").write_bytes(b"img")
    return tmp_path


def _tileset():
    return Tileset(count=1, name="ts", texture="tiles.png",
                   size=Vec2(64, 64), tile_size=Vec2(32, 32))


def test_parse_tileset_line(workdir):
    tileset = parse_tileset_line("ts:tiles.png:64:64:32:32\n", 2)
    assert tileset == Tileset(2, "ts", "tiles.png", Vec2(64, 64), Vec2(32, 32))


def test_parse_tileset_line_wrong_count(workdir):
    with pytest.raises(ConfigError):
        parse_tileset_line("ts:tiles.png:64:64:32\n", 1)


def test_parse_tileset_line_missing_texture(workdir):
    with pytest.raises(ConfigError):
        parse_tileset_line("ts:nothing.png:64:64:32:32\n", 1)


def test_load_tilesets_reads_count(workdir):
    conf = workdir / "tilesets.conf"
    conf.write_text("1\nts:tiles.png:64:64:32:32\nother:tiles.png:1:1:1:1\n")
    tilesets = load_tilesets(conf)
    assert [t.name for t in tilesets] == ["ts"]
    assert tilesets[0].tile_size == Vec2(32, 32)


def test_load_tilesets_missing_file(workdir):
    with pytest.raises(ConfigError):
        load_tilesets(workdir / "absent.conf")


def test_tile_source_rect_walks_the_grid():
    tileset = _tileset()
    assert tile_source_rect(0, tileset) == IntRect(0, 0, 32, 32)
    assert tile_source_rect(1, tileset) == IntRect(32, 0, 32, 32)
    assert tile_source_rect(2, tileset) == IntRect(0, 32, 32, 32)


def test_parse_csv_layer(workdir):
    (workdir / "layer.csv").write_text("0,1\n2,-1\n")
    layer = MapLayer(name="ground", size=Vec2(64, 64))
    parse_csv_layer(layer, "layer.csv", _tileset())
    assert layer.csv_map == [[0, 1], [2, -1]]
    assert [pos for pos, _ in layer.draws] == [
        Vec2(0, 0), Vec2(32, 0), Vec2(0, 32)]
    assert layer.draws[2][1] == tile_source_rect(2, _tileset())


def test_parse_csv_layer_missing_file_leaves_layer(workdir):
    layer = MapLayer(name="ground", size=Vec2(64, 64))
    parse_csv_layer(layer, "absent.csv", _tileset())
    assert layer.csv_map == []
    assert layer.draws == []


def test_load_maps(workdir):
    (workdir / "layer.csv").write_text("0,1\n2,3\n")
    conf = workdir / "map.conf"
    conf.write_text(
        "1\n"
        "world:2:music.ogg:true:false\n"
        "layer.csv:ground:64:64:ts:0\n"
        "layer.csv:collision:64:64:ts:1\n"
    )
    maps = load_maps(conf, [_tileset()])
    assert len(maps) == 1
    world = maps[0]
    assert world.name == "world"
    assert world.music == "music.ogg"
    assert world.display_hud is True
    assert world.can_attack is False
    assert [layer.name for layer in world.layers] == ["ground", "collision"]
    assert world.layers[0].tile_size == Vec2()
    assert world.layers[1].tile_size == Vec2(32, 32)
    assert world.layers[1].priority == 1
    assert world.layers[0].csv_map == [[0, 1], [2, 3]]


@pytest.mark.parametrize("content", [
    "0\n",
    "1\nworld:1:music.ogg:true\n",
    "1\nworld:0:music.ogg:true:false\n",
    "1\nworld:1:music.ogg:true:false\nlayer.csv:ground:64:64:ts\n",
    "1\nworld:1:music.ogg:true:false\nlayer.csv:ground:64:64:missing:0\n",
    "1\nworld:2:music.ogg:true:false\nlayer.csv:ground:64:64:ts:0\n",
    "2\nworld:1:music.ogg:true:false\nlayer.csv:ground:64:64:ts:0\n",
])
def test_load_maps_errors(workdir, content):
    (workdir / "layer.csv").write_text("0\n")
    conf = workdir / "map.conf"
    conf.write_text(content)
    with pytest.raises(ConfigError):
        load_maps(conf, [_tileset()])


def test_load_maps_needs_tilesets(workdir):
    conf = workdir / "map.conf"
    conf.write_text("1\n")
    with pytest.raises(ConfigError):
        load_maps(conf, [])