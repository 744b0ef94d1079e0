"""Drawing wall columns: texture choice, door animation and column rendering."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from .image import Image
from .raycast import RayHit

DOOR_CELL = "2"


def _cell(grid: Sequence[Sequence[str]], x: int, y: int) -> Optional[str]:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return None


@dataclass
class DoorAnimation:
    """Frame index of an animated door, advancing every ``interval`` milliseconds.

    Frame 0 is shown until the first interval has passed; after that the
    animation cycles through frames 1 .. frame_count - 1.
    """

    frame_count: int = 6
    interval: float = 300
    last_time: float = 0
    index: int = 0

    def __post_init__(self) -> None:
        if self.frame_count < 2:
            raise ValueError(f"a door animation needs at least 2 frames, got {self.frame_count}")

    def current(self, now: Optional[float] = None) -> int:
        """Return the frame index to show at ``now`` (milliseconds)."""
        if now is None:
            now = time.time() * 1000
        if now - self.last_time < self.interval:
            return self.index
        self.last_time = now
        self.index += 1
        if self.index >= self.frame_count:
            self.index = 1
        return self.index


@dataclass(eq=False)
class Textures:
    """Wall textures for each compass side plus the door animation frames."""

    north: Image
    south: Image
    west: Image
    east: Image
    door_frames: tuple[Image, ...]

    def __post_init__(self) -> None:
        self.door_frames = tuple(self.door_frames)
        if not self.door_frames:
            raise ValueError("at least one door frame is required")

    @property
    def door_width(self) -> int:
        """Width used to map door hits to texture columns."""
        return self.door_frames[min(1, len(self.door_frames) - 1)].width

    def for_hit(
        self,
        hit: RayHit,
        grid: Sequence[Sequence[str]],
        animation: DoorAnimation,
        now: Optional[float] = None,
    ) -> Image:
        """Pick the texture for the wall a ray struck."""
        if _cell(grid, hit.map_x, hit.map_y) == DOOR_CELL:
            return self.door_frames[animation.current(now)]
        if hit.side == 0:
            return self.west if hit.dx < 0 else self.east
        return self.north if hit.dy < 0 else self.south


def texture_x(
    hit: RayHit, grid: Sequence[Sequence[str]], textures: Textures, tile_size: float
) -> int:
    """Texture column for the point a ray struck."""
    if _cell(grid, hit.map_x, hit.map_y) == DOOR_CELL:
        width = textures.door_width
    elif hit.side == 0:
        width = textures.east.width if hit.dx < 0 else textures.west.width
    else:
        width = textures.north.width if hit.dy < 0 else textures.south.width
    offset = math.fmod(hit.hit_x, tile_size)
    return int(offset / tile_size * width)


def render_column(
    frame: Image,
    column: int,
    wall_height: int,
    texture: Image,
    tex_x: int,
    ceiling: int,
    floor: int,
) -> None:
    """Draw ceiling, textured wall slice and floor into one column of ``frame``."""
    if wall_height < 0:
        raise ValueError(f"wall height must not be negative, got {wall_height}")
    screen_h = frame.height
    half = screen_h // 2
    wall_start = half - wall_height // 2
    wall_end = min(wall_start + wall_height, screen_h)
    wall_start = max(wall_start, 0)

    for y in range(wall_start):
        frame.put_pixel(column, y, ceiling)

    if wall_height:
        step = texture.height / wall_height
        tex_pos = (wall_start - half + wall_height // 2) * step
        for y in range(wall_start, min(wall_start + wall_height, screen_h)):
            tex_y = int(tex_pos)
            if 0 <= tex_y < texture.height and 0 <= tex_x < texture.width:
                frame.put_pixel(column, y, texture.get_pixel(tex_x, tex_y))
            tex_pos += step

    for y in range(wall_end, screen_h):
        frame.put_pixel(column, y, floor)