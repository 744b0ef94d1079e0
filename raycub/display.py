"""A headless window system: windows with pixel canvases, hooks and an event loop."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional, Union

from .image import Image
from .pixel_format import ColorFormat

LAST_EVENT = 36

NO_EVENT_MASK = 0
KEY_PRESS_MASK = 1 << 0
KEY_RELEASE_MASK = 1 << 1
BUTTON_PRESS_MASK = 1 << 2
BUTTON_RELEASE_MASK = 1 << 3
POINTER_MOTION_MASK = 1 << 6
EXPOSURE_MASK = 1 << 15
STRUCTURE_NOTIFY_MASK = 1 << 17

_DEFAULT_FORMAT = ColorFormat.from_masks(24, 0xFF0000, 0x00FF00, 0x0000FF)


class EventType(enum.IntEnum):
    """Window event types, numbered as in the X protocol."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35


@dataclass(frozen=True)
class Event:
    """One event addressed to a window.

    ``close_request`` marks a client message asking the window to close.
    """

    type: Union[EventType, int]
    window: Optional["Window"] = None
    keysym: int = 0
    button: int = 0
    x: int = 0
    y: int = 0
    count: int = 0
    close_request: bool = False


@dataclass(frozen=True)
class DrawnText:
    """A string drawn on a window."""

    x: int
    y: int
    color: int
    text: str


@dataclass
class _Hook:
    mask: int
    func: Callable[..., object]


def _check_event(event: int) -> int:
    if not 0 <= int(event) < LAST_EVENT:
        raise ValueError(f"event type must be in 0..{LAST_EVENT - 1}, got {event!r}")
    return int(event)


class Window:
    """A fixed-size window whose content is a 32-bit canvas."""

    def __init__(self, display: "Display", width: int, height: int, title: str) -> None:
        self._display = display
        self.width = width
        self.height = height
        self.title = title
        self.canvas = Image(width, height)
        self.texts: list[DrawnText] = []
        self.hooks: dict[int, _Hook] = {}
        self.destroyed = False

    def __repr__(self) -> str:
        return f"Window({self.title!r}, {self.width}x{self.height})"

    @property
    def event_mask(self) -> int:
        """Union of the masks of all installed hooks."""
        mask = NO_EVENT_MASK
        for hook in self.hooks.values():
            mask |= hook.mask
        return mask

    def _ensure_alive(self) -> None:
        if self.destroyed:
            raise RuntimeError(f"{self!r} has been destroyed")

    def hook(self, event: Union[EventType, int], mask: int, func: Callable[..., object]) -> None:
        """Install ``func`` for ``event``, selecting events with ``mask``."""
        self.hooks[_check_event(event)] = _Hook(mask, func)

    def key_hook(self, func: Callable[[int], object]) -> None:
        """Call ``func(keysym)`` when a key is released."""
        self.hook(EventType.KEY_RELEASE, KEY_RELEASE_MASK, func)

    def mouse_hook(self, func: Callable[[int, int, int], object]) -> None:
        """Call ``func(button, x, y)`` when a mouse button is pressed."""
        self.hook(EventType.BUTTON_PRESS, BUTTON_PRESS_MASK, func)

    def expose_hook(self, func: Callable[[], object]) -> None:
        """Call ``func()`` when the window needs redrawing."""
        self.hook(EventType.EXPOSE, EXPOSURE_MASK, func)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel_put(self, x: int, y: int, color: int) -> None:
        """Draw one pixel; points outside the window are clipped."""
        self._ensure_alive()
        if self._inside(x, y):
            self.canvas.put_pixel(x, y, self._display.color_value(color))

    def clear(self) -> None:
        """Reset the window to its black background."""
        self._ensure_alive()
        self.canvas.fill(0)
        self.texts.clear()

    def put_image(self, image: Image, x: int, y: int) -> None:
        """Copy ``image`` with its top-left corner at (x, y), clipped to the window."""
        self._ensure_alive()
        left, top = max(x, 0), max(y, 0)
        right = min(x + image.width, self.width)
        bottom = min(y + image.height, self.height)
        if left >= right or top >= bottom:
            return
        canvas = self.canvas
        same_layout = (
            image.endian == canvas.endian
            and image.bytes_per_pixel == canvas.bytes_per_pixel
        )
        bpp = canvas.bytes_per_pixel
        for dest_y in range(top, bottom):
            src_y = dest_y - y
            if same_layout:
                src = src_y * image.size_line + (left - x) * bpp
                dst = dest_y * canvas.size_line + left * bpp
                length = (right - left) * bpp
                canvas.data[dst:dst + length] = image.data[src:src + length]
            else:
                for dest_x in range(left, right):
                    canvas.put_pixel(dest_x, dest_y, image.get_pixel(dest_x - x, src_y))

    def string_put(self, x: int, y: int, color: int, text: str) -> None:
        """Draw ``text`` with its baseline origin at (x, y)."""
        self._ensure_alive()
        self.texts.append(DrawnText(x, y, self._display.color_value(color), text))


class Display:
    """Connection to the window system: windows, an event queue and the main loop."""

    def __init__(self, color_format: Optional[ColorFormat] = None) -> None:
        self.color_format = color_format or _DEFAULT_FORMAT
        self.windows: list[Window] = []
        self.events: Deque[Event] = deque()
        self._loop_hook: Optional[Callable[[], object]] = None
        self._end_loop = False

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a window; its first expose event is queued."""
        window = Window(self, width, height, title)
        self.windows.insert(0, window)
        self.events.append(Event(EventType.EXPOSE, window))
        return window

    def destroy_window(self, window: Window) -> None:
        """Close ``window``; it receives no further events."""
        if window not in self.windows:
            raise ValueError(f"{window!r} does not belong to this display")
        self.windows.remove(window)
        window.destroyed = True

    def loop_hook(self, func: Optional[Callable[[], object]]) -> None:
        """Call ``func()`` each time the loop has no pending events."""
        self._loop_hook = func

    def post(self, event: Event) -> None:
        """Queue an event for delivery by the loop."""
        self.events.append(event)

    def flush_events(self) -> int:
        """Discard all pending events and return how many there were."""
        count = len(self.events)
        self.events.clear()
        return count

    def _dispatch(self, event: Event) -> None:
        window = event.window
        if window is None or window not in self.windows:
            return
        if event.type == EventType.CLIENT_MESSAGE and event.close_request:
            closer = window.hooks.get(EventType.DESTROY_NOTIFY)
            if closer is not None:
                closer.func()
        if not 0 <= event.type < LAST_EVENT:
            return
        hook = window.hooks.get(int(event.type))
        if hook is None:
            return
        kind = int(event.type)
        if kind < EventType.KEY_PRESS:
            return
        if kind in (EventType.KEY_PRESS, EventType.KEY_RELEASE):
            hook.func(event.keysym)
        elif kind in (EventType.BUTTON_PRESS, EventType.BUTTON_RELEASE):
            hook.func(event.button, event.x, event.y)
        elif kind == EventType.MOTION_NOTIFY:
            hook.func(event.x, event.y)
        elif kind == EventType.EXPOSE:
            if event.count == 0:
                hook.func()
        else:
            hook.func()

    def loop(self) -> None:
        """Deliver events and run the loop hook until no window is left.

        The loop also stops after :meth:`loop_end`, or when there is neither a
        pending event nor a loop hook, since nothing more could happen.
        """
        while self.windows and not self._end_loop:
            while not self._end_loop and (self._loop_hook is None or self.events):
                if not self.events:
                    return
                self._dispatch(self.events.popleft())
            if self._loop_hook is not None and not self._end_loop:
                self._loop_hook()

    def loop_end(self) -> None:
        """Make :meth:`loop` return."""
        self._end_loop = True

    def color_value(self, color: int) -> int:
        """Convert a 0xRRGGBB colour to this display's pixel value."""
        return self.color_format.convert(color)