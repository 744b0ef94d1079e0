import pytest

from raycub.image import Image
from raycub.raycast import RayHit
from raycub.render import DoorAnimation, Textures, render_column, texture_x

TILE = 64
GRID = ["11111", "10001", "10201", "11111"]


def _image(width, height, color=0):
    image = Image(width, height)
    image.fill(color)
    return image


@pytest.fixture
def textures():
    return Textures(
        north=_image(4, 4, 0x111111),
        south=_image(6, 4, 0x222222),
        west=_image(16, 4, 0x333333),
        east=_image(8, 4, 0x444444),
        door_frames=(_image(2, 2, 0x555555), _image(12, 2, 0x666666)),
    )


def _hit(side, dx, dy, map_x=4, map_y=1, hit_x=3 * TILE + TILE / 2):
    return RayHit(
        angle=0.0, dx=dx, dy=dy, map_x=map_x, map_y=map_y,
        side=side, distance=100.0, hit_x=hit_x,
    )


def test_animation_holds_first_frame_until_interval():
    anim = DoorAnimation(last_time=1000)
    assert anim.current(1100) == 0
    assert anim.current(1300) == 1


def test_animation_cycles_without_first_frame():
    anim = DoorAnimation(last_time=1000)
    anim.current(1300)
    seen = [anim.current(1300 + 300 * k) for k in range(1, 6)]
    assert seen == [2, 3, 4, 5, 1]
    assert anim.current(2900) == 1


def test_animation_needs_two_frames():
    with pytest.raises(ValueError):
        DoorAnimation(frame_count=1)


def test_textures_need_door_frame(textures):
    with pytest.raises(ValueError):
        Textures(textures.north, textures.south, textures.west, textures.east, ())


def test_for_hit_picks_side_textures(textures):
    anim = DoorAnimation(frame_count=2)
    assert textures.for_hit(_hit(0, -1.0, 0.0), GRID, anim, 0) is textures.west
    assert textures.for_hit(_hit(0, 1.0, 0.0), GRID, anim, 0) is textures.east
    assert textures.for_hit(_hit(1, 0.0, -1.0), GRID, anim, 0) is textures.north
    assert textures.for_hit(_hit(1, 0.0, 1.0), GRID, anim, 0) is textures.south


def test_for_hit_door_uses_animation(textures):
    anim = DoorAnimation(frame_count=2, last_time=0)
    door_hit = _hit(0, 1.0, 0.0, map_x=2, map_y=2)
    assert textures.for_hit(door_hit, GRID, anim, 100) is textures.door_frames[0]
    assert textures.for_hit(door_hit, GRID, anim, 400) is textures.door_frames[1]


def test_texture_x_side_widths(textures):
    assert texture_x(_hit(0, 1.0, 0.0), GRID, textures, TILE) == textures.west.width // 2
    assert texture_x(_hit(0, -1.0, 0.0), GRID, textures, TILE) == textures.east.width // 2
    assert texture_x(_hit(1, 0.0, -1.0), GRID, textures, TILE) == textures.north.width // 2
    assert texture_x(_hit(1, 0.0, 1.0), GRID, textures, TILE) == textures.south.width // 2


def test_texture_x_door_width(textures):
    door_hit = _hit(0, 1.0, 0.0, map_x=2, map_y=2)
    assert texture_x(door_hit, GRID, textures, TILE) == textures.door_frames[1].width // 2


def test_texture_x_start_of_tile(textures):
    assert texture_x(_hit(0, 1.0, 0.0, hit_x=2 * TILE), GRID, textures, TILE) == 0


def test_render_column_layout():
    frame = Image(4, 10)
    texture = Image(1, 4)
    colors = [0x0A0000 + row for row in range(4)]
    for row, color in enumerate(colors):
        texture.put_pixel(0, row, color)
    render_column(frame, 1, 4, texture, 0, 0xAAAAAA, 0xBBBBBB)
    column = [frame.get_pixel(1, y) for y in range(10)]
    assert column[:3] == [0xAAAAAA] * 3
    assert column[3:7] == colors
    assert column[7:] == [0xBBBBBB] * 3
    assert all(frame.get_pixel(0, y) == 0 for y in range(10))


def test_render_column_tall_wall_fills_column():
    frame = Image(2, 10)
    texture = Image(1, 4)
    colors = {0x010101, 0x020202, 0x030303, 0x040404}
    for row, color in enumerate(sorted(colors)):
        texture.put_pixel(0, row, color)
    render_column(frame, 0, 20, texture, 0, 0xAAAAAA, 0xBBBBBB)
    column = {frame.get_pixel(0, y) for y in range(10)}
    assert column <= colors


def test_render_column_texture_column_outside_skips_wall():
    frame = Image(1, 10)
    texture = _image(2, 2, 0x123456)
    render_column(frame, 0, 4, texture, 5, 0xAAAAAA, 0xBBBBBB)
    assert [frame.get_pixel(0, y) for y in range(3, 7)] == [0] * 4


def test_render_column_rejects_negative_height():
    with pytest.raises(ValueError):
        render_column(Image(1, 4), 0, -1, Image(1, 1), 0, 0, 0)