"""Game-state core of a tile-based role-playing game: config loading, entities, inventory, HUD, camera and mobs."""

__version__ = "0.1.0"
__all__ = [
    "animations",
    "camera",
    "ecs",
    "errors",
    "hud",
    "inventory",
    "items",
    "mob_config",
    "mobs",
    "tilemap",
    "words",
    "world",
]