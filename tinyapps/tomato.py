"""A small terminal to-do list."""

from __future__ import annotations

import argparse
import curses
import os
import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, NamedTuple

ESC = "Esc"
ENTER = "Enter"
BACKSPACE = "Backspace"

HIGHLIGHT_SYMBOL = ">"


class FormAction(Enum):
    """What a key press does to the new-item form."""

    NONE = auto()
    SUBMIT = auto()
    ESCAPE = auto()


@dataclass
class TodoItem:
    """One entry of the list."""

    description: str
    is_done: bool = False


@dataclass
class ListState:
    """The selected item; it may point past the end until the list is drawn."""

    selected: int | None = None

    def select_next(self) -> None:
        """Move down one item, starting at the first."""
        self.selected = 0 if self.selected is None else min(self.selected + 1, sys.maxsize)

    def select_previous(self) -> None:
        """Move up one item, never above the first; with no selection pick the last."""
        self.selected = sys.maxsize if self.selected is None else max(self.selected - 1, 0)

    def _clamp(self, length: int) -> int | None:
        if length == 0:
            self.selected = None
        elif self.selected is not None and self.selected >= length:
            self.selected = length - 1
        return self.selected


@dataclass
class TodoState:
    """The items, the selection and the new-item form.

    Keys are single characters or one of ``ENTER``, ``BACKSPACE`` and ``ESC``.
    """

    items: list[TodoItem] = field(default_factory=list)
    list_state: ListState = field(default_factory=ListState)
    is_add_new: bool = False
    input_value: str = ""

    def handle_add_new(self, key: str) -> FormAction:
        """Apply a key to the form text and say whether the form is done."""
        if key == ESC:
            return FormAction.ESCAPE
        if key == ENTER:
            return FormAction.SUBMIT
        if key == BACKSPACE:
            self.input_value = self.input_value[:-1]
        elif len(key) == 1:
            self.input_value += key
        return FormAction.NONE

    def handle_key(self, key: str) -> bool:
        """Apply a list command; return True when the program should quit."""
        if key == ESC:
            return True
        if key == ENTER:
            index = self.list_state.selected
            if index is not None and index < len(self.items):
                item = self.items[index]
                item.is_done = not item.is_done
        elif key == "j":
            self.list_state.select_next()
        elif key == "k":
            self.list_state.select_previous()
        elif key == "D":
            index = self.list_state.selected
            if index is not None and index < len(self.items):
                del self.items[index]
        elif key == "A":
            self.is_add_new = True
        return False

    def process_key(self, key: str) -> bool:
        """Feed a key to the form when it is open, then to the list commands.

        Returns True when the program should quit.
        """
        if self.is_add_new:
            action = self.handle_add_new(key)
            if action is FormAction.SUBMIT:
                self.is_add_new = False
                self.items.append(TodoItem(self.input_value))
                self.input_value = ""
            elif action is FormAction.ESCAPE:
                self.is_add_new = False
                self.input_value = ""
        return self.handle_key(key)


class _Area(NamedTuple):
    x: int
    y: int
    width: int
    height: int


@dataclass
class _Styles:
    green: int = 0
    yellow: int = 0


_styles = _Styles()


def _put(screen: Any, y: int, x: int, text: str, attr: int = 0, width: int | None = None) -> None:
    if width is not None:
        text = text[: max(width, 0)]
    if not text:
        return
    try:
        screen.addstr(y, x, text, attr)
    except curses.error:
        pass


def _rounded_box(screen: Any, area: _Area, title: str, attr: int) -> _Area:
    if area.width < 2 or area.height < 2:
        return _Area(area.x, area.y, 0, 0)
    inner = area.width - 2
    _put(screen, area.y, area.x, "╭" + "─" * inner + "╮", attr)
    for row in range(area.y + 1, area.y + area.height - 1):
        _put(screen, row, area.x, "│", attr)
        _put(screen, row, area.x + area.width - 1, "│", attr)
    _put(screen, area.y + area.height - 1, area.x, "╰" + "─" * inner + "╯", attr)
    shown = title[:inner]
    _put(screen, area.y, area.x + 1 + (inner - len(shown)) // 2, shown, attr)
    return _Area(area.x + 1, area.y + 1, inner, area.height - 2)


def _shrink(area: _Area, margin: int) -> _Area:
    return _Area(
        area.x + margin,
        area.y + margin,
        max(area.width - 2 * margin, 0),
        max(area.height - 2 * margin, 0),
    )


def _strike(text: str) -> str:
    return "".join(char + "\u0336" for char in text)


def _render_input_form(screen: Any, state: TodoState, area: _Area) -> None:
    inner = _shrink(_rounded_box(screen, area, " Input Description ", _styles.green), 1)
    if inner.height > 0:
        _put(screen, inner.y, inner.x, state.input_value, _styles.green, inner.width)


def _render_list(screen: Any, state: TodoState, border_area: _Area) -> None:
    _rounded_box(screen, border_area, " Tomato ", _styles.yellow)
    inner = _shrink(border_area, 1)
    selected = state.list_state._clamp(len(state.items))
    if inner.width <= 0 or inner.height <= 0:
        return
    gutter = len(HIGHLIGHT_SYMBOL) if selected is not None else 0
    offset = max(0, (selected or 0) - inner.height + 1)
    for number, item in enumerate(state.items[offset : offset + inner.height]):
        y = inner.y + number
        is_selected = selected == offset + number
        attr = _styles.green if is_selected else 0
        if is_selected:
            _put(screen, y, inner.x, HIGHLIGHT_SYMBOL, attr)
        text = _strike(item.description) if item.is_done else item.description
        _put(screen, y, inner.x + gutter, text, attr)


def _render(screen: Any, state: TodoState) -> None:
    height, width = screen.getmaxyx()
    frame = _Area(0, 0, width, height)
    screen.erase()
    if state.is_add_new:
        _render_input_form(screen, state, frame)
    else:
        _render_list(screen, state, _shrink(frame, 1))
    screen.refresh()


_SPECIAL_KEYS = {
    "\x1b": ESC,
    "\n": ENTER,
    "\r": ENTER,
    curses.KEY_ENTER: ENTER,
    "\x7f": BACKSPACE,
    "\b": BACKSPACE,
    curses.KEY_BACKSPACE: BACKSPACE,
}


def _read_key(screen: Any) -> str | None:
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
        _styles = _Styles(green=curses.A_BOLD, yellow=0)
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(1, curses.COLOR_GREEN, -1)
    curses.init_pair(2, curses.COLOR_YELLOW, -1)
    _styles = _Styles(green=curses.color_pair(1), yellow=curses.color_pair(2))


def _run(screen: Any, state: TodoState) -> None:
    _init_styles()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    while True:
        _render(screen, state)
        key = _read_key(screen)
        if key is not None and state.process_key(key):
            return


def main(argv: list[str] | None = None) -> int:
    """Run the to-do list until Esc is pressed."""
    argparse.ArgumentParser(prog="tomato_todo", description="A small to-do list.").parse_args(
        argv
    )
    os.environ.setdefault("ESCDELAY", "25")
    try:
        curses.wrapper(_run, TodoState())
    except curses.error as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())