import pytest

from raycub.display import (
    BUTTON_PRESS_MASK,
    EXPOSURE_MASK,
    KEY_RELEASE_MASK,
    POINTER_MOTION_MASK,
    Display,
    Event,
    EventType,
)
from raycub.image import Image
from raycub.pixel_format import ColorFormat

WIN1_SX = 242
WIN1_SY = 242
ESCAPE = 0xFF1B


@pytest.fixture
def display():
    return Display()


def test_new_window_registers_and_queues_expose(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    assert display.windows == [win]
    assert (win.width, win.height, win.title) == (242, 242, "Title1")
    assert [e.type for e in display.events] == [EventType.EXPOSE]


def test_newest_window_first(display):
    w1 = display.new_window(10, 10, "a")
    w2 = display.new_window(10, 10, "b")
    assert display.windows == [w2, w1]


def test_color_map_pixel_put(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    for x, y in [(0, 0), (241, 241)]:
        w, h = WIN1_SX, WIN1_SY
        color = (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
        win.pixel_put(x, y, color)
    assert win.canvas.get_pixel(0, 0) == 0xFF0000
    assert win.canvas.get_pixel(241, 241) == 0x01FDFD


def test_pixel_put_clips_outside(display):
    win = display.new_window(4, 4, "w")
    win.pixel_put(10, 10, 0xFFFFFF)
    win.pixel_put(-1, 0, 0xFFFFFF)
    assert bytes(win.canvas.data) == bytes(4 * 4 * 4)


def test_pixel_put_converts_for_16_bit_display():
    fmt = ColorFormat.from_masks(16, 0xF800, 0x07E0, 0x001F)
    disp = Display(fmt)
    win = disp.new_window(2, 2, "w")
    win.pixel_put(1, 1, 0xFFFFFF)
    assert disp.color_value(0xFFFFFF) == 0xFFFF
    assert win.canvas.get_pixel(1, 1) == 0xFFFF


def test_clear_window(display):
    win = display.new_window(3, 3, "w")
    win.pixel_put(1, 1, 0x123456)
    win.string_put(5, 5, 0xFF99FF, "String output")
    win.clear()
    assert win.canvas.get_pixel(1, 1) == 0
    assert win.texts == []


def test_put_image_at_offset(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    im1 = Image(42, 42)
    im1.fill(0x00AABB)
    win.put_image(im1, 20, 20)
    assert win.canvas.get_pixel(20, 20) == 0x00AABB
    assert win.canvas.get_pixel(61, 61) == 0x00AABB
    assert win.canvas.get_pixel(19, 20) == 0
    assert win.canvas.get_pixel(62, 62) == 0


def test_put_image_clipped_and_other_endian(display):
    win = display.new_window(4, 4, "w")
    img = Image(3, 3, endian=1)
    img.fill(0x112233)
    win.put_image(img, 2, -1)
    assert win.canvas.get_pixel(3, 0) == 0x112233
    assert win.canvas.get_pixel(2, 1) == 0x112233
    assert win.canvas.get_pixel(1, 0) == 0
    assert win.canvas.get_pixel(2, 2) == 0


def test_string_put_records_text(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    win.string_put(5, WIN1_SY // 2, 0xFF99FF, "String output")
    win.string_put(15, WIN1_SY // 2 + 20, 0x00FFFF, "MinilibX test")
    assert [(t.x, t.y, t.color, t.text) for t in win.texts] == [
        (5, 121, 0xFF99FF, "String output"),
        (15, 141, 0x00FFFF, "MinilibX test"),
    ]


def test_hook_helpers_set_events_and_masks(display):
    win = display.new_window(10, 10, "w")
    win.key_hook(lambda key: None)
    win.mouse_hook(lambda b, x, y: None)
    win.expose_hook(lambda: None)
    win.hook(EventType.MOTION_NOTIFY, POINTER_MOTION_MASK, lambda x, y: None)
    assert set(win.hooks) == {3, 4, 12, 6}
    assert win.event_mask == (
        KEY_RELEASE_MASK | BUTTON_PRESS_MASK | EXPOSURE_MASK | POINTER_MOTION_MASK
    )


def test_hook_rejects_unknown_event(display):
    win = display.new_window(10, 10, "w")
    with pytest.raises(ValueError):
        win.hook(36, 0, lambda: None)


def test_loop_dispatches_hooks(display):
    calls = []
    win1 = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    win1.expose_hook(lambda: calls.append("expose"))
    win1.mouse_hook(lambda b, x, y: calls.append(("mouse", b, x, y)))
    win1.key_hook(lambda key: calls.append(("key", key)))
    win1.hook(EventType.MOTION_NOTIFY, POINTER_MOTION_MASK,
              lambda x, y: calls.append(("motion", x, y)))
    display.post(Event(EventType.BUTTON_PRESS, win1, button=1, x=3, y=4))
    display.post(Event(EventType.KEY_PRESS, win1, keysym=97))
    display.post(Event(EventType.KEY_RELEASE, win1, keysym=97))
    display.post(Event(EventType.MOTION_NOTIFY, win1, x=7, y=8))
    display.loop()
    assert calls == ["expose", ("mouse", 1, 3, 4), ("key", 97), ("motion", 7, 8)]
    assert not display.events


def test_expose_with_pending_count_is_skipped(display):
    calls = []
    win = display.new_window(5, 5, "w")
    display.flush_events()
    win.expose_hook(lambda: calls.append(1))
    display.post(Event(EventType.EXPOSE, win, count=2))
    display.post(Event(EventType.EXPOSE, win, count=0))
    display.loop()
    assert calls == [1]


def test_expose_draws_image(display):
    win1 = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    im3 = Image(WIN1_SX, WIN1_SY)
    im3.fill(0x445566)
    win1.expose_hook(lambda: win1.put_image(im3, 0, 0))
    display.loop()
    assert win1.canvas.get_pixel(100, 100) == 0x445566


def test_escape_in_third_window_destroys_it(display):
    win1 = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    win3 = display.new_window(WIN1_SX, WIN1_SY, "Title3")
    win3.key_hook(lambda key: display.destroy_window(win3) if key == ESCAPE else None)
    display.post(Event(EventType.KEY_RELEASE, win3, keysym=ESCAPE))
    display.loop()
    assert display.windows == [win1]
    assert win3.destroyed
    with pytest.raises(RuntimeError):
        win3.pixel_put(0, 0, 1)


def test_escape_in_first_window_ends_loop(display):
    seen = []
    win1 = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    win1.key_hook(lambda key: display.loop_end() if key == ESCAPE else None)
    win1.mouse_hook(lambda b, x, y: seen.append(b))
    display.post(Event(EventType.KEY_RELEASE, win1, keysym=ESCAPE))
    display.post(Event(EventType.BUTTON_PRESS, win1, button=1))
    display.loop()
    assert seen == []
    assert len(display.events) == 1


def test_mouse_event_replaces_window(display):
    state = {}

    def gere_mouse(button, x, y):
        display.destroy_window(state["win1"])
        state["win1"] = display.new_window(123, 45, "new win")
        state["win1"].mouse_hook(gere_mouse)
        state["clicks"] = state.get("clicks", 0) + 1

    state["win1"] = display.new_window(300, 300, "win1")
    win2 = display.new_window(600, 600, "win2")
    state["win1"].mouse_hook(gere_mouse)
    win2.mouse_hook(gere_mouse)
    old = state["win1"]
    display.post(Event(EventType.BUTTON_PRESS, old, button=1))
    display.post(Event(EventType.BUTTON_PRESS, old, button=1))
    display.loop()
    assert state["clicks"] == 1
    assert old.destroyed
    assert state["win1"].title == "new win"
    assert state["win1"] in display.windows and win2 in display.windows
    assert len(display.windows) == 2


def test_close_request_calls_destroy_notify_hook(display):
    win = display.new_window(5, 5, "w")
    win.hook(EventType.DESTROY_NOTIFY, 0, lambda: display.destroy_window(win))
    display.post(Event(EventType.CLIENT_MESSAGE, win, close_request=True))
    display.loop()
    assert display.windows == []


def test_loop_hook_runs_until_loop_end(display):
    win = display.new_window(5, 5, "w")
    ticks = []

    def tick():
        ticks.append(len(ticks))
        if len(ticks) == 3:
            display.loop_end()

    display.loop_hook(tick)
    display.loop()
    assert ticks == [0, 1, 2]
    assert display.windows == [win]
    assert len(display.events) == 0


def test_loop_hook_runs_after_pending_events(display):
    order = []
    win = display.new_window(5, 5, "w")
    win.expose_hook(lambda: order.append("expose"))

    def tick():
        order.append("tick")
        display.loop_end()

    display.loop_hook(tick)
    display.loop()
    assert order == ["expose", "tick"]


def test_loop_without_windows_returns_without_hook(display):
    calls = []
    display.loop_hook(lambda: calls.append(1))
    display.loop()
    assert calls == []


def test_flush_events_discards_pending(display):
    calls = []
    win = display.new_window(5, 5, "w")
    win.expose_hook(lambda: calls.append(1))
    display.post(Event(EventType.EXPOSE, win))
    assert display.flush_events() == 2
    display.loop()
    assert calls == []


def test_destroy_unknown_window_raises(display):
    other = Display().new_window(5, 5, "w")
    with pytest.raises(ValueError):
        display.destroy_window(other)