"""Game state: player, doors, key handling and texture loading."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

from .raycast import spawn_angle
from .render import Textures
from .xpm import XpmError, load_xpm

DOOR_CELL = "2"
EMPTY_CELL = "0"
DOOR_REACH = 90
DOOR_FRAME_FILES = (
    "door_b.xpm", "anim0.xpm", "anim1.xpm", "anim2.xpm", "anim3.xpm", "anim4.xpm",
)


class Action(enum.Enum):
    """What a key does."""

    FORWARD = "forward"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    OPEN_DOOR = "open_door"
    CLOSE_DOOR = "close_door"
    EXIT = "exit"


# Held movement keys, in the order they take priority.
MOVEMENTS = (
    Action.FORWARD,
    Action.BACK,
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE_LEFT,
    Action.ROTATE_RIGHT,
)

DEFAULT_KEYMAP: Mapping[int, Action] = {
    0x77: Action.FORWARD,
    0x73: Action.BACK,
    0x61: Action.LEFT,
    0x64: Action.RIGHT,
    0xFF51: Action.ROTATE_LEFT,
    0xFF53: Action.ROTATE_RIGHT,
    0x6F: Action.OPEN_DOOR,
    0x63: Action.CLOSE_DOOR,
    0xFF1B: Action.EXIT,
}


class GameExit(Exception):
    """Raised when the player asks to quit."""


@dataclass
class Door:
    """A door at grid cell (x, y)."""

    x: int
    y: int
    is_open: bool = False


class Game:
    """Player position, map and held keys."""

    def __init__(
        self,
        grid: Sequence[Sequence[str]],
        spawn_x: int,
        spawn_y: int,
        *,
        tile_size: float = 64,
        fov: float = 60,
        doors: Optional[Iterable[Door]] = None,
        keymap: Optional[Mapping[int, Action]] = None,
        handlers: Optional[Mapping[Action, Callable[["Game"], object]]] = None,
    ) -> None:
        self.grid = [list(row) for row in grid]
        if self._cell(spawn_x, spawn_y) is None:
            raise ValueError(f"spawn ({spawn_x}, {spawn_y}) is outside the map")
        self.tile_size = tile_size
        self.fov = fov
        self.angle = spawn_angle(self.grid[spawn_y][spawn_x])
        self.px = spawn_x * tile_size + 0.5 * tile_size
        self.py = spawn_y * tile_size + 0.5 * tile_size
        self.grid[spawn_y][spawn_x] = EMPTY_CELL
        if doors is None:
            self.doors = [
                Door(x, y)
                for y, row in enumerate(self.grid)
                for x, cell in enumerate(row)
                if cell == DOOR_CELL
            ]
        else:
            self.doors = list(doors)
        self.keymap = dict(DEFAULT_KEYMAP if keymap is None else keymap)
        self.handlers = dict(handlers or {})
        self.held: set[Action] = set()

    def _cell(self, x: int, y: int) -> Optional[str]:
        if 0 <= y < len(self.grid) and 0 <= x < len(self.grid[y]):
            return self.grid[y][x]
        return None

    def _door_at(self, x: int, y: int) -> Optional[Door]:
        return next((d for d in self.doors if (d.x, d.y) == (x, y)), None)

    def facing_cell(self) -> tuple[int, int]:
        """Grid cell a door-reach ahead of the player."""
        x = int((self.px + math.cos(self.angle) * DOOR_REACH) / self.tile_size)
        y = int((self.py + math.sin(self.angle) * DOOR_REACH) / self.tile_size)
        return x, y

    def open_door(self) -> bool:
        """Open the closed door in front of the player; return whether one opened."""
        x, y = self.facing_cell()
        if self._cell(x, y) != DOOR_CELL:
            return False
        door = self._door_at(x, y)
        if door is None:
            return False
        door.is_open = True
        self.grid[y][x] = EMPTY_CELL
        return True

    def close_door(self) -> bool:
        """Close the door in front of the player; return whether one was found."""
        x, y = self.facing_cell()
        door = self._door_at(x, y)
        if door is None:
            return False
        door.is_open = False
        if self._cell(x, y) is not None:
            self.grid[y][x] = DOOR_CELL
        return True

    def press(self, keycode: int) -> None:
        """Handle a key press; raises GameExit for the exit key."""
        action = self.keymap.get(keycode)
        if action is None:
            return
        if action in MOVEMENTS:
            self.held.add(action)
        elif action is Action.OPEN_DOOR:
            self.open_door()
        elif action is Action.CLOSE_DOOR:
            self.close_door()
        elif action is Action.EXIT:
            raise GameExit()

    def release(self, keycode: int) -> None:
        """Handle a key release."""
        action = self.keymap.get(keycode)
        if action in MOVEMENTS:
            self.held.discard(action)

    def active_action(self) -> Optional[Action]:
        """The held movement that applies this frame, if any."""
        return next((action for action in MOVEMENTS if action in self.held), None)

    def tick(self) -> Optional[Action]:
        """Run the handler of the active movement and return that movement."""
        action = self.active_action()
        if action is not None:
            handler = self.handlers.get(action)
            if handler is not None:
                handler(self)
        return action


def _load(path: Path):
    try:
        return load_xpm(path)
    except (OSError, XpmError) as exc:
        raise XpmError(f"Invalid Textures: {path}") from exc


def load_textures(
    north: Union[str, Path],
    south: Union[str, Path],
    west: Union[str, Path],
    east: Union[str, Path],
    asset_dir: Union[str, Path] = "./tex",
) -> Textures:
    """Load the four wall textures and the door frames from ``asset_dir``."""
    assets = Path(asset_dir)
    return Textures(
        north=_load(Path(north)),
        south=_load(Path(south)),
        west=_load(Path(west)),
        east=_load(Path(east)),
        door_frames=tuple(_load(assets / name) for name in DOOR_FRAME_FILES),
    )