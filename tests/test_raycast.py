import math

import pytest

from raycub.raycast import (
    RayHit,
    cast_ray,
    delta_distances,
    deg_to_rad,
    ray_angle,
    spawn_angle,
)

TILE = 64
WIDTH = 640
FOV = 60
BOX = ["11111", "10001", "10001", "10001", "11111"]
CENTER = 2.5 * TILE


def test_deg_to_rad():
    assert deg_to_rad(180) == pytest.approx(math.pi)
    assert deg_to_rad(0) == 0


@pytest.mark.parametrize(
    "marker, degrees", [("N", 270), ("S", 90), ("E", 0), ("W", 180), ("?", 180)]
)
def test_spawn_angle(marker, degrees):
    assert spawn_angle(marker) == pytest.approx(deg_to_rad(degrees))


def test_ray_angle_centre_column_is_view_direction():
    assert ray_angle(1.25, WIDTH // 2, WIDTH, FOV) == pytest.approx(1.25)


def test_ray_angle_edges_span_field_of_view():
    left = ray_angle(1.0, 0, WIDTH, FOV)
    right = ray_angle(1.0, WIDTH, WIDTH, FOV)
    assert left == pytest.approx(1.0 - deg_to_rad(FOV) / 2)
    assert right - 1.0 == pytest.approx(-(left - 1.0))


def test_delta_distances_axis_aligned():
    assert delta_distances(0, 1) == (1e30, 1.0)
    assert delta_distances(1, 0) == (1.0, 1e30)


def test_delta_distances_unit_vector():
    dx, dy = math.cos(0.7), math.sin(0.7)
    delta_x, delta_y = delta_distances(dx, dy)
    assert delta_x == pytest.approx(1 / abs(dx))
    assert delta_y == pytest.approx(1 / abs(dy))


def test_cast_east_hits_east_wall():
    hit = cast_ray(BOX, CENTER, CENTER, 0.0, WIDTH // 2, WIDTH, FOV, TILE)
    assert isinstance(hit, RayHit)
    assert (hit.map_x, hit.map_y, hit.side) == (4, 2, 0)
    assert hit.distance == pytest.approx(4 * TILE - CENTER)
    assert hit.hit_x == pytest.approx(CENTER)


def test_cast_north_hits_north_wall():
    angle = spawn_angle("N")
    hit = cast_ray(BOX, CENTER, CENTER, angle, WIDTH // 2, WIDTH, FOV, TILE)
    assert (hit.map_x, hit.map_y, hit.side) == (2, 0, 1)
    assert hit.distance == pytest.approx(CENTER - TILE)


def test_every_column_stops_on_a_wall():
    for column in range(0, WIDTH, 40):
        hit = cast_ray(BOX, CENTER, CENTER, 0.3, column, WIDTH, FOV, TILE)
        assert BOX[hit.map_y][hit.map_x] == "1"
        assert hit.distance > 0


def test_door_cell_stops_ray():
    grid = ["11111", "10021", "11111"]
    hit = cast_ray(grid, 1.5 * TILE, 1.5 * TILE, 0.0, WIDTH // 2, WIDTH, FOV, TILE)
    assert (hit.map_x, hit.map_y) == (3, 1)
    assert grid[hit.map_y][hit.map_x] == "2"


def test_ray_leaving_map_stops_at_edge():
    grid = ["000"]
    hit = cast_ray(grid, 0.5 * TILE, 0.5 * TILE, 0.0, WIDTH // 2, WIDTH, FOV, TILE)
    assert hit.map_x == len(grid[0])
    assert hit.side == 0
    assert hit.distance == pytest.approx(3 * TILE - 0.5 * TILE)