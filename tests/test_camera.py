import math

import pytest

from emberquest.camera import CAM_THRESHOLD, Camera, View, create_light
from emberquest.ecs import FloatRect, Vec2
from emberquest.tilemap import MapLayer, MapList


def test_default_view_matches_initial_rect():
    cam = Camera()
    assert cam.view.size == Vec2(624, 351)
    assert cam.view.center == Vec2(624 / 2, 351 / 2)
    assert cam.offset == Vec2(6, 6)
    assert cam.is_moving is False


def test_view_move_and_zoom():
    view = View.from_rect(FloatRect(0, 0, 100, 50))
    view.move(Vec2(10, -5))
    assert view.center == Vec2(60, 20)
    view.zoom(0.5)
    assert view.size == Vec2(50, 25)
    assert view.center == Vec2(60, 20)


def test_set_destination_starts_moving():
    cam = Camera()
    cam.set_destination(Vec2(1000, 1000))
    assert cam.is_moving is True
    assert cam.destination == Vec2(1000, 1000)


def test_move_to_destination_gets_closer():
    cam = Camera()
    dest = Vec2(1000, 800)
    cam.set_destination(dest)
    before = math.dist((cam.view.center.x, cam.view.center.y), (dest.x, dest.y))
    cam.move_to_destination()
    after = math.dist((cam.view.center.x, cam.view.center.y), (dest.x, dest.y))
    assert after < before
    assert cam.is_moving is True


def test_move_to_destination_stops_within_threshold():
    cam = Camera()
    center = cam.view.center
    cam.set_destination(Vec2(center.x + CAM_THRESHOLD, center.y - CAM_THRESHOLD))
    cam.move_to_destination()
    assert cam.is_moving is False
    assert cam.view.center == center


def test_move_to_destination_with_zero_offset_stops():
    cam = Camera()
    cam.offset = Vec2(0, 0)
    cam.set_destination(Vec2(2000, 2000))
    cam.move_to_destination()
    assert cam.is_moving is False
    assert cam.offset == Vec2(0.5, 0.5)


def test_repeated_moves_reach_destination():
    cam = Camera()
    cam.set_destination(Vec2(900, 700))
    for _ in range(1000):
        if not cam.is_moving:
            break
        cam.move_to_destination()
    assert cam.is_moving is False
    assert abs(cam.view.center.x - 900) <= CAM_THRESHOLD + 1
    assert abs(cam.view.center.y - 700) <= CAM_THRESHOLD + 1


def test_move_within_pushes_view_inside_map():
    cam = Camera()
    cam.view.center = Vec2(-50.0, 10.0)
    cam.move_within(Vec2(2000, 2000))
    size = cam.view.size
    assert cam.view.center.x - size.x / 2 >= 0
    assert cam.view.center.y - size.y / 2 >= 0


def test_move_within_leaves_fitting_view_alone():
    cam = Camera()
    center = cam.view.center
    cam.move_within(Vec2(2000, 2000))
    assert cam.view.center == center


def _map_list(width, height):
    return MapList(name="m", nb_layer=1,
                   layers=[MapLayer(name="ground", size=Vec2(width, height))])


def test_resize_to_shrinks_view_to_map():
    cam = Camera()
    maps = _map_list(300, 200)
    cam.resize_to(maps)
    assert cam.view.size.x <= 300
    assert cam.view.size.y <= 200
    assert maps.has_cam is True
    assert maps.cam_size == cam.view.size
    assert cam.view_rect.width == cam.view.size.x


def test_resize_to_keeps_view_on_large_map():
    cam = Camera()
    maps = _map_list(5000, 5000)
    cam.resize_to(maps)
    assert cam.view.size == Vec2(624, 351)
    assert maps.cam_size == Vec2(624, 351)


def test_resize_to_restores_saved_size():
    cam = Camera()
    maps = _map_list(5000, 5000)
    maps.has_cam = True
    maps.cam_size = Vec2(100, 60)
    cam.resize_to(maps)
    assert cam.view.size == Vec2(100, 60)


def test_follow_moves_with_close_entity():
    cam = Camera()
    cam.view.center = Vec2(500, 500)
    cam.follow(Vec2(505, 500), Vec2(2000, 2000), Vec2(3, 0))
    assert cam.view.center == Vec2(503, 500)


def test_follow_ignores_far_entity():
    cam = Camera()
    cam.view.center = Vec2(500, 500)
    cam.follow(Vec2(800, 800), Vec2(2000, 2000), Vec2(3, 3))
    assert cam.view.center == Vec2(500, 500)


def test_follow_stops_at_map_edge():
    cam = Camera()
    cam.view.center = Vec2(312, 500)
    cam.follow(Vec2(312, 500), Vec2(2000, 2000), Vec2(-3, 0))
    assert cam.view.center == Vec2(312, 500)


def test_in_range_and_center_on():
    cam = Camera()
    cam.is_moving = True
    cam.center_on(Vec2(100, 100))
    assert cam.view.center == Vec2(100, 100)
    assert cam.is_moving is False
    assert cam.in_range(Vec2(100, 700)) is True
    assert cam.in_range(Vec2(100, 701)) is False


def test_create_light_center_and_corner():
    light = create_light(200, (255, 255, 153, 255))
    assert len(light) == 200
    assert all(len(row) == 200 for row in light)
    assert light[100][100] == (255, 255, 153, 100)
    assert light[0][0] == (0, 0, 0, 0)


def test_create_light_is_symmetric_and_fades():
    light = create_light(40, (200, 100, 50))
    assert light[20][25] == light[25][20] == light[20][15]
    assert light[20][30][0] < light[20][25][0] < light[20][20][0]


@pytest.mark.parametrize("size", [0, 1])
def test_create_light_tiny_is_transparent(size):
    light = create_light(size, (255, 255, 255))
    assert all(pixel == (0, 0, 0, 0) for row in light for pixel in row)
    assert len(light) == size