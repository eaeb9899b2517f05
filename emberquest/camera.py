"""The camera that follows the player, and the light halo texture."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence

from emberquest.ecs import FloatRect, Vec2
from emberquest.world import RENDER_DISTANCE

if TYPE_CHECKING:
    from emberquest.tilemap import MapList

CAM_THRESHOLD = 20
DEFAULT_VIEW_RECT = (0.0, 0.0, 624.0, 351.0)
DEFAULT_OFFSET = Vec2(6.0, 6.0)
STOPPED_OFFSET = Vec2(0.5, 0.5)
ZOOM_STEP = 0.99

Pixel = tuple[int, int, int, int]
TRANSPARENT: Pixel = (0, 0, 0, 0)
LIGHT_ALPHA = 100


@dataclass
class View:
    """A rectangle of the world shown on screen, given by centre and size."""

    center: Vec2 = field(default_factory=Vec2)
    size: Vec2 = field(default_factory=Vec2)

    @classmethod
    def from_rect(cls, rect: FloatRect) -> View:
        """Build a view covering ``rect``."""
        return cls(
            center=Vec2(rect.left + rect.width / 2, rect.top + rect.height / 2),
            size=Vec2(rect.width, rect.height),
        )

    def move(self, offset: Vec2) -> None:
        """Shift the view by ``offset``."""
        self.center = self.center + offset

    def zoom(self, factor: float) -> None:
        """Scale the view's size by ``factor`` around its centre."""
        self.size = self.size * factor


def _default_rect() -> FloatRect:
    return FloatRect(*DEFAULT_VIEW_RECT)


@dataclass
class Camera:
    """The game camera: a view, an optional destination and a move speed."""

    view_rect: FloatRect = field(default_factory=_default_rect)
    view: View = field(default_factory=lambda: View.from_rect(_default_rect()))
    is_moving: bool = False
    destination: Optional[Vec2] = None
    offset: Vec2 = DEFAULT_OFFSET

    def set_destination(self, destination: Vec2) -> None:
        """Start travelling towards ``destination``."""
        self.destination = destination
        self.is_moving = True

    def move_to_destination(self) -> None:
        """Take one step towards the destination, stopping once close enough."""
        dest = self.destination
        center = self.view.center
        if (not self.is_moving or dest is None
                or (abs(int(dest.x - center.x)) <= CAM_THRESHOLD
                    and abs(int(dest.y - center.y)) <= CAM_THRESHOLD)):
            self.is_moving = False
            return
        dx = dest.x - center.x
        dy = dest.y - center.y
        hyp = math.hypot(dx, dy)
        step = Vec2(dx / hyp * self.offset.x, dy / hyp * self.offset.y)
        if step.x == 0.0 and step.y == 0.0:
            self.offset = STOPPED_OFFSET
            self.is_moving = False
        self.view.move(step)

    def _fits(self, map_size: Vec2) -> bool:
        center, size = self.view.center, self.view.size
        return (center.x - size.x / 2 >= 0
                and center.x + size.x / 2 <= map_size.x
                and center.y - size.y / 2 >= 0
                and center.y + size.y / 2 <= map_size.y)

    def move_within(self, map_size: Vec2) -> None:
        """Push the view back inside a map of ``map_size``, one unit at a time."""
        if self._fits(map_size):
            return
        size = self.view.size
        while self.view.center.x - size.x / 2 < 0:
            self.view.move(Vec2(1, 0))
        while self.view.center.x + size.x / 2 > map_size.x:
            self.view.move(Vec2(-1, 0))
        while self.view.center.y - size.y / 2 < 0:
            self.view.move(Vec2(0, 1))
        while self.view.center.y - size.y / 2 > map_size.y:
            self.view.move(Vec2(0, -1))
        if self._fits(map_size):
            return
        self.move_to_destination()

    def resize_to(self, map_list: MapList) -> None:
        """Shrink the view until it fits the map, remembering the result."""
        map_size = map_list.layers[0].size
        if map_list.has_cam:
            self.view.size = map_list.cam_size
            return
        cam_size = self.view.size
        if map_size.x - cam_size.x > 0 and map_size.y - cam_size.y > 0:
            map_list.has_cam = True
            map_list.cam_size = self.view.size
            return
        while map_size.x - cam_size.x < 0 or map_size.y - cam_size.y < 0:
            self.view.zoom(ZOOM_STEP)
            cam_size = self.view.size
        self.view_rect.width = cam_size.x
        self.view_rect.height = cam_size.y
        map_list.has_cam = True
        map_list.cam_size = self.view.size

    def follow(self, entity_pos: Vec2, map_size: Vec2, offset: Vec2) -> None:
        """Move along with an entity moving by ``offset``, within map bounds."""
        cam = self.view.center
        half_w = int(self.view_rect.width) // 2
        half_h = int(self.view_rect.height) // 2
        near_x = abs(int(entity_pos.x - cam.x)) < CAM_THRESHOLD
        near_y = abs(int(entity_pos.y - cam.y)) < CAM_THRESHOLD
        if offset.x <= 0 and cam.x - half_w > -offset.x and near_x:
            self.view.move(Vec2(offset.x, 0))
        if offset.x >= 0 and cam.x + half_w < map_size.x + offset.x and near_x:
            self.view.move(Vec2(offset.x, 0))
        if offset.y <= 0 and cam.y - half_h > -offset.y and near_y:
            self.view.move(Vec2(0, offset.y))
        if offset.y >= 0 and cam.y + half_h < map_size.y + offset.y and near_y:
            self.view.move(Vec2(0, offset.y))

    def in_range(self, pos: Vec2) -> bool:
        """Tell whether ``pos`` lies within render distance of the view centre."""
        cam = self.view.center
        return (cam.x - pos.x) ** 2 + (cam.y - pos.y) ** 2 <= RENDER_DISTANCE

    def center_on(self, pos: Vec2) -> None:
        """Centre the view on ``pos`` and stop any travel."""
        self.view.center = pos
        self.is_moving = False


def create_light(size: int, color: Sequence[int]) -> list[list[Pixel]]:
    """Return a ``size`` by ``size`` grid of RGBA pixels forming a round halo.

    Brightness falls off linearly from the centre; pixels outside the
    circle stay transparent. Rows are indexed first.
    """
    red, green, blue = color[0], color[1], color[2]
    half = size // 2
    pixels = [[TRANSPARENT] * size for _ in range(size)]
    if half == 0:
        return pixels
    for row in range(size):
        for col in range(size):
            x = col - half
            y = row - half
            dist = math.sqrt(x * x + y * y)
            if dist < half:
                ratio = 1 - dist / half
                pixels[row][col] = (int(red * ratio), int(green * ratio),
                                    int(blue * ratio), LIGHT_ALPHA)
    return pixels