"""Grid ray casting with the DDA algorithm."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

EMPTY_CELL = "0"
_FAR = 1e30


@dataclass(frozen=True)
class RayHit:
    """Where a ray cast from the player stops.

    ``side`` is 0 when the ray crossed a vertical grid line last and 1 when it
    crossed a horizontal one. ``distance`` is corrected for the fish-eye
    effect; ``hit_x`` is the world coordinate along the wall that was struck.
    """

    angle: float
    dx: float
    dy: float
    map_x: int
    map_y: int
    side: int
    distance: float
    hit_x: float


def _cell(grid: Sequence[Sequence[str]], x: int, y: int) -> Optional[str]:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return None


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * (math.pi / 180.0)


def spawn_angle(direction: str) -> float:
    """Initial view angle for a spawn marker: N, S, E, anything else faces west."""
    if direction == "N":
        return deg_to_rad(270)
    if direction == "S":
        return deg_to_rad(90)
    if direction == "E":
        return deg_to_rad(0)
    return deg_to_rad(180)


def ray_angle(player_angle: float, column: int, screen_width: int, fov: float) -> float:
    """Angle of the ray that draws screen ``column``."""
    camera_x = 2.0 * column / screen_width - 1.0
    return player_angle + math.atan(camera_x * math.tan(deg_to_rad(fov) / 2))


def delta_distances(dx: float, dy: float) -> tuple[float, float]:
    """Ray length between successive vertical and horizontal grid lines."""
    delta_x = _FAR if dx == 0 else math.sqrt(1 + (dy * dy) / (dx * dx))
    delta_y = _FAR if dy == 0 else math.sqrt(1 + (dx * dx) / (dy * dy))
    return delta_x, delta_y


def cast_ray(
    grid: Sequence[Sequence[str]],
    px: float,
    py: float,
    player_angle: float,
    column: int,
    screen_width: int,
    fov: float,
    tile_size: float,
) -> RayHit:
    """Cast the ray for ``column`` from (px, py) until it leaves empty cells."""
    map_x = int(px / tile_size)
    map_y = int(py / tile_size)
    angle = ray_angle(player_angle, column, screen_width, fov)
    dx, dy = math.cos(angle), math.sin(angle)
    delta_x, delta_y = delta_distances(dx, dy)

    if dx < 0:
        step_x = -1
        side_x = (px / tile_size - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1 - px / tile_size) * delta_x
    if dy < 0:
        step_y = -1
        side_y = (py / tile_size - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1 - py / tile_size) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _cell(grid, map_x, map_y) != EMPTY_CELL:
            break

    if side == 0:
        raw = (side_x - delta_x) * tile_size
        hit_x = py + raw * math.sin(angle)
    else:
        raw = (side_y - delta_y) * tile_size
        hit_x = px + raw * math.cos(angle)
    return RayHit(
        angle=angle,
        dx=dx,
        dy=dy,
        map_x=map_x,
        map_y=map_y,
        side=side,
        distance=raw * math.cos(angle - player_angle),
        hit_x=hit_x,
    )