"""Terminal screen for the key-value JSON editor."""

from __future__ import annotations

import argparse
import curses
import os
import sys
import textwrap
from dataclasses import dataclass
from typing import Any

from tinyapps.json_editor import (
    BACKSPACE,
    ENTER,
    ESC,
    TAB,
    App,
    CurrentlyEditing,
    CurrentScreen,
)

TITLE = "Create New Json"
POPUP_TITLE = "Enter a new key-value pair"
EXIT_TITLE = "Y/N"
EXIT_TEXT = "Would you like to output the buffer as json? (y/n)"


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells."""

    x: int
    y: int
    width: int
    height: int


@dataclass
class _Styles:
    title: int = 0
    pair: int = 0
    normal_mode: int = 0
    editing_mode: int = 0
    exiting_mode: int = 0
    separator: int = 0
    editing_key: int = 0
    editing_value: int = 0
    not_editing: int = 0
    hint: int = 0
    popup: int = 0
    active: int = 0
    exit_text: int = 0


_styles = _Styles()


def centered_rect(percent_x: int, percent_y: int, rect: Rect) -> Rect:
    """Return a rectangle of the given percentages centred in ``rect``."""
    for percent in (percent_x, percent_y):
        if not 0 <= percent <= 100:
            raise ValueError(f"percentage out of range: {percent}")
    return Rect(
        rect.x + rect.width * ((100 - percent_x) // 2) // 100,
        rect.y + rect.height * ((100 - percent_y) // 2) // 100,
        rect.width * percent_x // 100,
        rect.height * percent_y // 100,
    )


def pair_lines(app: App) -> list[str]:
    """Return one line per stored pair, the key padded to 25 columns."""
    return [f"{key:<25} : {value}" for key, value in app.pairs.items()]


def mode_text(app: App) -> list[tuple[str, str]]:
    """Return the mode footer as (text, style name) spans."""
    screen = {
        CurrentScreen.MAIN: ("Normal Mode", "normal_mode"),
        CurrentScreen.EDITING: ("Editing Mode", "editing_mode"),
        CurrentScreen.EXITING: ("Exiting", "exiting_mode"),
    }[app.current_screen]
    if app.currently_editing is CurrentlyEditing.KEY:
        editing = ("Editing Json Key", "editing_key")
    elif app.currently_editing is CurrentlyEditing.VALUE:
        editing = ("Editing Json Value", "editing_value")
    else:
        editing = ("Not Editing Anything", "not_editing")
    return [screen, (" | ", "separator"), editing]


def key_hint(app: App) -> str:
    """Return the key help shown in the footer."""
    if app.current_screen is CurrentScreen.EDITING:
        return "(ESC) to cancel/(TAB) to switch boxes/enter to complete"
    return "(q) to quit / (e) to make new pair"


def _put(screen: Any, y: int, x: int, text: str, attr: int = 0, width: int | None = None) -> None:
    if width is not None:
        text = text[: max(width, 0)]
    if not text:
        return
    try:
        screen.addstr(y, x, text, attr)
    except curses.error:
        pass


def _fill(screen: Any, rect: Rect, attr: int) -> None:
    for row in range(rect.y, rect.y + rect.height):
        _put(screen, row, rect.x, " " * rect.width, attr)


def _bordered(screen: Any, rect: Rect, title: str = "", attr: int = 0) -> Rect:
    """Draw a box and return the area inside it."""
    if rect.width < 2 or rect.height < 2:
        return Rect(rect.x, rect.y, 0, 0)
    inner_width = rect.width - 2
    _put(screen, rect.y, rect.x, "┌" + "─" * inner_width + "┐", attr)
    for row in range(rect.y + 1, rect.y + rect.height - 1):
        _put(screen, row, rect.x, "│", attr)
        _put(screen, row, rect.x + rect.width - 1, "│", attr)
    _put(screen, rect.y + rect.height - 1, rect.x, "└" + "─" * inner_width + "┘", attr)
    _put(screen, rect.y, rect.x + 1, title, attr, inner_width)
    return Rect(rect.x + 1, rect.y + 1, inner_width, rect.height - 2)


def _halves(rect: Rect) -> tuple[Rect, Rect]:
    left = rect.width // 2
    return (
        Rect(rect.x, rect.y, left, rect.height),
        Rect(rect.x + left, rect.y, rect.width - left, rect.height),
    )


def _draw_spans(screen: Any, rect: Rect, spans: list[tuple[str, int]]) -> None:
    if rect.height <= 0:
        return
    x = rect.x
    for text, attr in spans:
        room = rect.x + rect.width - x
        _put(screen, rect.y, x, text, attr, room)
        x += len(text)


def _draw_main(screen: Any, app: App, area: Rect) -> None:
    top_height = min(3, area.height)
    bottom_height = min(3, max(area.height - top_height - 1, 0))
    middle_height = area.height - top_height - bottom_height
    top = Rect(area.x, area.y, area.width, top_height)
    middle = Rect(area.x, area.y + top_height, area.width, middle_height)
    bottom = Rect(area.x, area.y + top_height + middle_height, area.width, bottom_height)

    title_inner = _bordered(screen, top)
    _draw_spans(screen, title_inner, [(TITLE, _styles.title)])

    for offset, line in enumerate(pair_lines(app)[: middle.height]):
        _put(screen, middle.y + offset, middle.x, line, _styles.pair, middle.width)

    mode_area, hint_area = _halves(bottom)
    spans = [(text, getattr(_styles, style)) for text, style in mode_text(app)]
    _draw_spans(screen, _bordered(screen, mode_area), spans)
    _draw_spans(screen, _bordered(screen, hint_area), [(key_hint(app), _styles.hint)])


def _draw_popup(screen: Any, app: App, area: Rect) -> None:
    popup = centered_rect(60, 25, area)
    _fill(screen, popup, _styles.popup)
    _put(screen, popup.y, popup.x, POPUP_TITLE, _styles.popup, popup.width)
    if popup.width < 2 or popup.height < 2:
        return
    inner = Rect(popup.x + 1, popup.y + 1, popup.width - 2, popup.height - 2)
    key_area, value_area = _halves(inner)
    boxes = (
        (key_area, "Key", app.key_input, CurrentlyEditing.KEY),
        (value_area, "Value", app.value_input, CurrentlyEditing.VALUE),
    )
    for rect, title, text, mode in boxes:
        attr = _styles.active if app.currently_editing is mode else 0
        if attr:
            _fill(screen, rect, attr)
        box_inner = _bordered(screen, rect, title, attr)
        _draw_spans(screen, box_inner, [(text, attr)])


def _draw_exit(screen: Any, area: Rect) -> None:
    popup = centered_rect(60, 25, area)
    _fill(screen, popup, _styles.popup)
    _put(screen, popup.y, popup.x, EXIT_TITLE, _styles.popup, popup.width)
    if popup.width <= 0:
        return
    lines = textwrap.wrap(EXIT_TEXT, popup.width) or [""]
    for offset, line in enumerate(lines[: max(popup.height - 1, 0)], start=1):
        _put(screen, popup.y + offset, popup.x, line, _styles.exit_text | _styles.popup, popup.width)


def draw(screen: Any, app: App) -> None:
    """Draw the whole editor for the app's current state."""
    height, width = screen.getmaxyx()
    area = Rect(0, 0, width, height)
    screen.erase()
    if app.current_screen is CurrentScreen.EXITING:
        _draw_exit(screen, area)
    else:
        _draw_main(screen, app, area)
        if app.currently_editing is not None:
            _draw_popup(screen, app, area)
    screen.refresh()


_SPECIAL_KEYS = {
    "\n": ENTER,
    "\r": ENTER,
    curses.KEY_ENTER: ENTER,
    "\x7f": BACKSPACE,
    "\b": BACKSPACE,
    curses.KEY_BACKSPACE: BACKSPACE,
    "\x1b": ESC,
    "\t": TAB,
}


def read_key(screen: Any) -> str | None:
    """Wait for a key and return it as the editor understands it, or None."""
    try:
        raw = screen.get_wch()
    except curses.error:
        return None
    if raw in _SPECIAL_KEYS:
        return _SPECIAL_KEYS[raw]
    if isinstance(raw, str) and raw.isprintable():
        return raw
    return None


def _init_styles() -> None:
    global _styles
    if not curses.has_colors():
        _styles = _Styles(active=curses.A_REVERSE, popup=curses.A_REVERSE)
        return
    curses.start_color()
    curses.use_default_colors()
    bright = curses.COLORS >= 16

    def pair(number: int, fg: int, bg: int = -1) -> int:
        curses.init_pair(number, fg, bg)
        return curses.color_pair(number)

    dark_gray = 8 if bright else curses.COLOR_BLACK
    green = pair(1, curses.COLOR_GREEN)
    yellow = pair(2, curses.COLOR_YELLOW)
    red = pair(3, curses.COLOR_RED)
    light_red = pair(4, 9 if bright else curses.COLOR_RED)
    white = pair(5, curses.COLOR_WHITE)
    gray = pair(6, dark_gray) if bright else curses.A_DIM
    light_green = pair(7, 10 if bright else curses.COLOR_GREEN)
    popup = pair(8, -1, dark_gray)
    active = pair(9, curses.COLOR_BLACK, 11 if bright else curses.COLOR_YELLOW)
    exit_text = pair(10, curses.COLOR_RED, dark_gray)
    _styles = _Styles(
        title=green,
        pair=yellow,
        normal_mode=green,
        editing_mode=yellow,
        exiting_mode=light_red,
        separator=white,
        editing_key=green,
        editing_value=light_green,
        not_editing=gray,
        hint=red,
        popup=popup,
        active=active,
        exit_text=exit_text,
    )


def _run(screen: Any, app: App) -> bool:
    _init_styles()
    while True:
        draw(screen, app)
        key = read_key(screen)
        if key is None:
            continue
        outcome = app.handle_key(key)
        if outcome is not None:
            return outcome


def main(argv: list[str] | None = None) -> int:
    """Run the editor and print the pairs as JSON if asked to on exit."""
    argparse.ArgumentParser(
        prog="json-editor", description="Build a JSON object of key-value pairs."
    ).parse_args(argv)
    os.environ.setdefault("ESCDELAY", "25")
    app = App()
    try:
        do_print = curses.wrapper(_run, app)
    except curses.error as error:
        print(f"{error!r}")
        return 1
    if do_print:
        print(app.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())