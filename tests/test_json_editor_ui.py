import curses

import pytest

from tinyapps.json_editor import (
    BACKSPACE,
    ENTER,
    ESC,
    TAB,
    App,
    CurrentlyEditing,
    CurrentScreen,
)
from tinyapps.json_editor_ui import (
    Rect,
    centered_rect,
    draw,
    key_hint,
    mode_text,
    pair_lines,
    read_key,
)


class _FakeScreen:
    def __init__(self, rows=24, cols=80, keys=()):
        self.rows = rows
        self.cols = cols
        self.grid = [[" "] * cols for _ in range(rows)]
        self.keys = list(keys)
        self.refreshed = 0

    def getmaxyx(self):
        return self.rows, self.cols

    def erase(self):
        self.grid = [[" "] * self.cols for _ in range(self.rows)]

    def refresh(self):
        self.refreshed += 1

    def addstr(self, y, x, text, attr=0):
        if not (0 <= y < self.rows and 0 <= x < self.cols):
            raise curses.error("out of bounds")
        for offset, char in enumerate(text):
            if x + offset >= self.cols:
                raise curses.error("out of bounds")
            self.grid[y][x + offset] = char

    def get_wch(self):
        key = self.keys.pop(0)
        if isinstance(key, Exception):
            raise key
        return key

    def text(self):
        return "\n".join("".join(row) for row in self.grid)


def test_centered_rect_full_percentages_is_whole_area():
    area = Rect(3, 4, 50, 20)
    assert centered_rect(100, 100, area) == area


@pytest.mark.parametrize("width, height", [(80, 24), (81, 25), (10, 5), (200, 60)])
def test_centered_rect_stays_inside_and_centred(width, height):
    area = Rect(0, 0, width, height)
    inner = centered_rect(60, 25, area)
    assert inner.x >= 0 and inner.y >= 0
    assert inner.x + inner.width <= width
    assert inner.y + inner.height <= height
    left = inner.x
    right = width - inner.x - inner.width
    assert abs(left - right) <= 1 + width // 100


@pytest.mark.parametrize("px, py", [(101, 50), (50, -1)])
def test_centered_rect_rejects_bad_percentages(px, py):
    with pytest.raises(ValueError):
        centered_rect(px, py, Rect(0, 0, 10, 10))


def test_pair_lines_pad_key_to_25_columns():
    app = App(pairs={"name": "value", "x": "y"})
    lines = pair_lines(app)
    assert len(lines) == 2
    assert lines[0].startswith("name")
    assert lines[0].index(" : ") == 25
    assert lines[0].endswith("value")
    assert lines[1].endswith(" : y")


def test_pair_lines_long_key_not_truncated():
    key = "k" * 30
    assert pair_lines(App(pairs={key: "v"})) == [f"{key} : v"]


def test_mode_text_main():
    texts = [text for text, _ in mode_text(App())]
    assert texts == ["Normal Mode", " | ", "Not Editing Anything"]


def test_mode_text_editing_value():
    app = App(current_screen=CurrentScreen.EDITING,
              currently_editing=CurrentlyEditing.VALUE)
    texts = [text for text, _ in mode_text(app)]
    assert texts == ["Editing Mode", " | ", "Editing Json Value"]


def test_mode_text_exiting_with_key():
    app = App(current_screen=CurrentScreen.EXITING,
              currently_editing=CurrentlyEditing.KEY)
    assert mode_text(app)[0][0] == "Exiting"
    assert mode_text(app)[2][0] == "Editing Json Key"


def test_key_hint_per_screen():
    assert key_hint(App()) == "(q) to quit / (e) to make new pair"
    assert key_hint(App(current_screen=CurrentScreen.EXITING)) == key_hint(App())
    editing = App(current_screen=CurrentScreen.EDITING)
    assert key_hint(editing) == "(ESC) to cancel/(TAB) to switch boxes/enter to complete"


def test_draw_main_screen_shows_title_pairs_and_footer():
    screen = _FakeScreen()
    app = App(pairs={"city": "Paris"})
    draw(screen, app)
    text = screen.text()
    assert "Create New Json" in text
    assert pair_lines(app)[0] in text
    assert "Normal Mode | Not Editing Anything" in text
    assert screen.refreshed == 1


def test_draw_editing_shows_popup_with_inputs():
    screen = _FakeScreen(rows=40, cols=120)
    app = App(current_screen=CurrentScreen.EDITING,
              currently_editing=CurrentlyEditing.KEY,
              key_input="mykey", value_input="myval")
    draw(screen, app)
    text = screen.text()
    assert "Enter a new key-value pair" in text
    assert "Key" in text and "Value" in text
    assert "mykey" in text and "myval" in text


def test_draw_exit_screen_clears_everything_else():
    screen = _FakeScreen(rows=40, cols=120)
    app = App(current_screen=CurrentScreen.EXITING, pairs={"city": "Paris"})
    draw(screen, app)
    text = screen.text()
    assert "Y/N" in text
    assert "Would you like" in text
    assert "Create New Json" not in text
    assert "Paris" not in text


def test_draw_on_tiny_screen_still_refreshes():
    screen = _FakeScreen(rows=2, cols=3)
    draw(screen, App(current_screen=CurrentScreen.EDITING,
                     currently_editing=CurrentlyEditing.VALUE))
    assert screen.refreshed == 1


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("\n", ENTER),
        (curses.KEY_ENTER, ENTER),
        ("\x7f", BACKSPACE),
        (curses.KEY_BACKSPACE, BACKSPACE),
        ("\x1b", ESC),
        ("\t", TAB),
        ("a", "a"),
        ("é", "é"),
        (curses.KEY_RESIZE, None),
        ("\x01", None),
    ],
)
def test_read_key_maps_keys(raw, expected):
    assert read_key(_FakeScreen(keys=[raw])) == expected


def test_read_key_returns_none_on_curses_error():
    assert read_key(_FakeScreen(keys=[curses.error("no input")])) is None


def test_read_key_feeds_app():
    screen = _FakeScreen(keys=["e", "k", "\t", "v", "\n", "\t", "\n"])
    app = App()
    for _ in range(7):
        app.handle_key(read_key(screen))
    assert app.pairs == {"k": "v"}
    assert app.current_screen is CurrentScreen.MAIN