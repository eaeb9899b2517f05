"""Tilesets and layered tile maps read from configuration files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from emberquest.ecs import IntRect, Vec2
from emberquest.errors import ConfigError, read_first_line, report
from emberquest.words import split_words

TEXTURE_PATH = "tileset/big_tileset.png"
MAP_FILE = "maps/map.conf"
PORTAL_CONF = "maps/portals.conf"
NPC_CONF = "maps/npcs.conf"
ITEM_CONF = "maps/items.conf"
MOB_CONF = "maps/mobs.conf"
PART_CONF = "maps/part.conf"
TILESET_CONF = "tileset/tilesets.conf"

WIDTH = 1920
HEIGHT = 1080
TILE_WIDTH = 32
TILE_HEIGHT = TILE_WIDTH
SPRITESHEET_WIDTH = 1952
SPRITESHEET_HEIGHT = 1088
THRESHOLD = 8
MAP_CONF_NB_ARGS = 6
PORTAL_CONF_NB_ARGS = 9
NPC_CONF_NB_ARGS = 12
TILESET_NB_ARGS = 6
MAP_HEADER_NB_ARGS = 5

DIALOG_BOX_POS = Vec2(WIDTH // 2, HEIGHT * 2 // 3)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


@dataclass
class Tileset:
    """A sheet of equally sized tiles."""

    count: int = 0
    name: str = ""
    texture: str = ""
    size: Vec2 = field(default_factory=Vec2)
    tile_size: Vec2 = field(default_factory=Vec2)


@dataclass
class MapLayer:
    """One layer of a map: its tile grid and the tiles drawn on it."""

    name: str = ""
    size: Vec2 = field(default_factory=Vec2)
    priority: int = 0
    tile_size: Vec2 = field(default_factory=Vec2)
    texture: Optional[str] = None
    csv_map: list[list[int]] = field(default_factory=list)
    draws: list[tuple[Vec2, IntRect]] = field(default_factory=list)


@dataclass
class MapList:
    """A whole map: its settings and its stack of layers."""

    name: str = ""
    nb_layer: int = 0
    display_hud: bool = False
    can_attack: bool = False
    music: Optional[str] = None
    layers: list[MapLayer] = field(default_factory=list)
    has_cam: bool = False
    cam_size: Vec2 = field(default_factory=Vec2)


def parse_tileset_line(line: str, count: int) -> Tileset:
    """Parse ``name:texture:width:height:tile_width:tile_height``.

    Raises ConfigError on a wrong field count or a missing texture file.
    """
    args = split_words(line, ":")
    if len(args) != TILESET_NB_ARGS:
        raise ConfigError(f"Invalid nbr of args -->{line}")
    if not Path(args[1]).is_file():
        raise ConfigError(f"Fail openning: {args[1]}")
    return Tileset(
        count=count,
        name=args[0],
        texture=args[1],
        size=Vec2(_atoi(args[2]), _atoi(args[3])),
        tile_size=Vec2(_atoi(args[4]), _atoi(args[5])),
    )


def load_tilesets(path: str | Path = TILESET_CONF) -> list[Tileset]:
    """Read the tileset list: a count line, then one tileset per line."""
    count = _atoi(read_first_line(path))
    tilesets: list[Tileset] = []
    with open(path, encoding="utf-8") as stream:
        stream.readline()
        for line in stream:
            if len(tilesets) >= count:
                break
            tilesets.append(parse_tileset_line(line, count))
    return tilesets


def tile_source_rect(tile_id: int, tileset: Tileset) -> IntRect:
    """Return the rectangle of tile ``tile_id`` inside the tileset texture."""
    per_line = int(tileset.size.x / tileset.tile_size.x)
    tile_w = int(tileset.tile_size.x)
    tile_h = int(tileset.tile_size.y)
    row = int(tile_id / per_line)
    col = tile_id - row * per_line
    return IntRect(tile_w * col, tile_h * row, tile_w, tile_h)


def parse_csv_layer(layer: MapLayer, path: str | Path,
                    tileset: Optional[Tileset]) -> None:
    """Fill ``layer`` from the comma-separated tile grid at ``path``.

    Tile -1 leaves its cell empty. An unreadable file is reported and
    leaves the layer untouched.
    """
    if tileset is None:
        return
    try:
        stream = open(path, encoding="utf-8")
    except OSError:
        report("Fail openning: ", path, "\n")
        return
    x = 0.0
    y = 0.0
    with stream:
        for line in stream:
            row: list[int] = []
            for token in split_words(line, ","):
                tile_id = _atoi(token)
                row.append(tile_id)
                if tile_id != -1:
                    layer.draws.append(
                        (Vec2(x, y), tile_source_rect(tile_id, tileset)))
                x += tileset.tile_size.x
                if x >= layer.size.x:
                    x = 0.0
                    y += tileset.tile_size.y
            layer.csv_map.append(row)


def _find_tileset(tilesets: list[Tileset], name: str) -> Tileset:
    for tileset in tilesets:
        if tileset.name == name:
            return tileset
    raise ConfigError(f"Unable to find tileset ->{name}")


def _build_layer(args: list[str], tilesets: list[Tileset]) -> MapLayer:
    tileset = _find_tileset(tilesets, args[4])
    layer = MapLayer(
        name=args[1],
        size=Vec2(_atoi(args[2]), _atoi(args[3])),
        priority=_atoi(args[5]),
        texture=tileset.texture,
    )
    if args[1] == "collision":
        layer.tile_size = tileset.tile_size
    parse_csv_layer(layer, args[0], tileset)
    return layer


def _read_map(header: str, lines, tilesets: list[Tileset]) -> MapList:
    split = split_words(header, ":\n")
    if len(split) != MAP_HEADER_NB_ARGS:
        raise ConfigError(f"Invalid nbr of args ->{header}")
    map_list = MapList(
        name=split[0],
        nb_layer=_atoi(split[1]),
        music=split[2],
        display_hud=split[3] == "true",
        can_attack=split[4] == "true",
    )
    if map_list.nb_layer <= 0:
        raise ConfigError(f"Invalid nbr of layers ->{header}")
    for _ in range(map_list.nb_layer):
        line = next(lines, None)
        if line is None:
            raise ConfigError("Fail reading line")
        args = split_words(line, ":\n")
        if len(args) != MAP_CONF_NB_ARGS:
            raise ConfigError(f"Invalid nbr of args ->{line}")
        map_list.layers.append(_build_layer(args, tilesets))
    return map_list


def load_maps(path: str | Path, tilesets: list[Tileset]) -> list[MapList]:
    """Read every map described in the configuration file at ``path``.

    The first line gives the number of maps; each map is a header line
    ``name:layers:music:display_hud:can_attack`` followed by one line per
    layer ``csv:name:width:height:tileset:priority``.
    Raises ConfigError on any malformed or missing line.
    """
    first = read_first_line(path)
    if not tilesets:
        raise ConfigError("No tileset loaded")
    nb_maps = _atoi(first)
    if nb_maps <= 0:
        raise ConfigError(f"Invalid nbr of maps ->{first}")
    maps: list[MapList] = []
    with open(path, encoding="utf-8") as stream:
        stream.readline()
        lines = iter(stream)
        for _ in range(nb_maps):
            header = next(lines, None)
            if header is None:
                raise ConfigError("Fail reading line")
            maps.append(_read_map(header, lines, tilesets))
    return maps