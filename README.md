# raycub

A small, dependency-free raycasting engine in pure Python. It casts one ray
per screen column through a grid map with a DDA grid walk, picks wall
textures loaded from XPM files, animates doors, and draws each column into an
in-memory image.

## Modules

- `raycub.colors` – the named X11 colour table `COLOR_NAMES` and
  `text_rgb(name, suffix=None)`, which resolves an XPM colour spec: `#hex`
  values are parsed as hexadecimal, names are looked up case-insensitively
  (joined with `suffix` by a space when one is given). Unknown names give 0
  and `none` gives -1.
- `raycub.pixel_format` – `ColorFormat`, built with
  `ColorFormat.from_masks(depth, red_mask, green_mask, blue_mask)`; its
  `convert(color)` packs a `0xRRGGBB` colour into a pixel value. Depths of
  24 or more pass the colour through unchanged.
- `raycub.text` – `find`, `find_unquoted` (skips matches inside double
  quotes) and `split_words` (splits on spaces and tabs).
- `raycub.image` – `Image(width, height, endian=0)`, a 32-bit pixel buffer
  with `put_pixel`, `get_pixel` and `fill`. Out-of-range pixels raise
  `IndexError`.
- `raycub.xpm` – the XPM reader: `load_xpm(path)`, `xpm_from_text(text)`,
  `parse_xpm(lines)`, plus `strip_comments` and `quoted_strings`. Malformed
  data raises `XpmError`; the colour `none` becomes `0xFF000000`.
- `raycub.display` – `Display`, `Window`, `Event` and `EventType`: a headless
  window system. Windows have an `Image` canvas; `pixel_put`, `clear`,
  `put_image` (clipped) and `string_put` draw on them (`string_put` records
  a `DrawnText` in `Window.texts` rather than rendering glyphs). Hooks are
  installed with `hook`, `key_hook` (key release), `mouse_hook` (button
  press) and `expose_hook`. `Display.post` queues events and `Display.loop`
  delivers them, calling the `loop_hook` function whenever the queue is
  empty. The loop returns when no window is left, after `loop_end`, or when
  the queue is empty and no loop hook is set. A new window queues its first
  expose event.
- `raycub.raycast` – `deg_to_rad`, `spawn_angle` (`N`, `S`, `E`, anything
  else faces west), `ray_angle`, `delta_distances` and `cast_ray`, which
  returns a `RayHit` with the struck cell, side, fish-eye-corrected distance
  and hit coordinate. Any cell other than `"0"`, or leaving the grid, stops
  the ray.
- `raycub.render` – `Textures` (four wall textures plus door frames) with
  `for_hit`, `DoorAnimation` (advances a frame every 300 ms by default),
  `texture_x` and `render_column`, which fills one column of a frame with
  ceiling, textured wall slice and floor.
- `raycub.game` – `Game`, holding map, player position and angle, `Door`s
  and held keys. `press` and `release` handle key codes through a keymap
  (default: `w`/`s`/`a`/`d`, Left/Right arrows to rotate, `o` and `c` to open
  and close the door in front, Escape to quit by raising `GameExit`).
  `tick` runs the handler registered for the active movement.
  `load_textures(north, south, west, east, asset_dir="./tex")` loads the wall
  textures and the door frames `door_b.xpm` and `anim0.xpm` … `anim4.xpm`.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from raycub.xpm import xpm_from_text

image = xpm_from_text('''
/* XPM */
static char *pix[] = {
"2 2 2 1",
"a c #ff0000",
"b c blue",
"ab",
"ba"
};
''')
print(image.width, image.height, hex(image.get_pixel(0, 0)))  # 2 2 0xff0000
```

Casting a ray and drawing the column:

```python
from raycub.image import Image
from raycub.raycast import cast_ray, spawn_angle
from raycub.render import render_column

grid = [list("1111"), list("1001"), list("1001"), list("1111")]
hit = cast_ray(grid, 96.0, 96.0, spawn_angle("E"), 400, 800, 60, 64)
print(hit.map_x, hit.map_y, hit.side, hit.distance)

frame = Image(800, 600)
wall = Image(64, 64)
wall.fill(0x808080)
render_column(frame, 400, 200, wall, 0, 0x87CEEB, 0x333333)
```

## What it does not do

- There is no command and no on-screen output: `Display` keeps windows and
  events in memory only.
- No map-file reader: `Game` takes a ready grid and spawn cell.
- Player movement and rotation are not built in; `Game.tick` only calls
  the functions you pass in `handlers`.
- Wall height is not derived from ray distance; `render_column` takes the
  height as an argument.