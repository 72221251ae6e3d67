"""A small terminal process monitor with a CPU chart and a searchable table."""

from __future__ import annotations

import argparse
import curses
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Iterable, NamedTuple

import psutil

ESC = "Esc"
ENTER = "Enter"
BACKSPACE = "Backspace"
CTRL_C = "Ctrl+C"

REFRESH_EVERY = 60
POLL_MS = 60
HEADER = ("PID", "Name", "CPU")
HIGHLIGHT_SYMBOL = ">>"


def _format_cpu(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class ProcessRow:
    """One process as shown in the table."""

    pid: int
    name: str
    cpu: float

    @property
    def cells(self) -> tuple[str, str, str]:
        """Return the text of the PID, name and CPU columns."""
        return (str(self.pid), self.name, _format_cpu(self.cpu))


@dataclass
class Selection:
    """The selected row of a table; it may point past the end until drawn."""

    selected: int | None = None

    def select_next(self) -> None:
        """Move down one row, starting at the first."""
        self.selected = 0 if self.selected is None else min(self.selected + 1, sys.maxsize)

    def select_previous(self) -> None:
        """Move up one row, never above the first; with no selection pick the last."""
        self.selected = sys.maxsize if self.selected is None else max(self.selected - 1, 0)

    def _clamp(self, length: int) -> int | None:
        if length == 0:
            self.selected = None
        elif self.selected is not None and self.selected >= length:
            self.selected = length - 1
        return self.selected


@dataclass
class TopState:
    """Everything the monitor remembers between frames."""

    running: bool = True
    cpu: list[tuple[float, float]] = field(default_factory=list)
    selection: Selection = field(default_factory=lambda: Selection(0))
    search: bool = False
    search_lines: list[str] = field(default_factory=lambda: [""])

    @property
    def query(self) -> str:
        """Return the text that filters the table: the first line of the search box."""
        return self.search_lines[0]

    def _search_input(self, key: str) -> None:
        if key == ENTER:
            self.search_lines.append("")
        elif key == BACKSPACE:
            if self.search_lines[-1]:
                self.search_lines[-1] = self.search_lines[-1][:-1]
            elif len(self.search_lines) > 1:
                self.search_lines.pop()
        elif len(key) == 1 and key.isprintable():
            self.search_lines[-1] += key

    def handle_key(self, key: str) -> None:
        """Apply one key press; while searching the key is also typed into the box."""
        if self.search:
            self._search_input(key)
        if key in (ESC, "q", CTRL_C):
            self.running = False
        elif key == "s":
            self.search = not self.search
        elif key == "j":
            self.selection.select_next()
        elif key == "k":
            self.selection.select_previous()

    def record_cpu(self, tick: int, usage: float) -> None:
        """Add one point to the CPU history."""
        self.cpu.append((float(tick), float(usage)))

    def visible_rows(self, rows: Iterable[ProcessRow]) -> list[ProcessRow]:
        """Return the rows sorted by CPU use and filtered by the search text."""
        return filter_rows(sort_rows(rows), self.query)


def collect_processes() -> list[ProcessRow]:
    """Return a row for every running process that can be seen."""
    rows = []
    for process in psutil.process_iter(["pid", "name", "cpu_percent"]):
        info = process.info
        rows.append(
            ProcessRow(
                int(info["pid"]),
                info.get("name") or "",
                float(info.get("cpu_percent") or 0.0),
            )
        )
    return rows


def sort_rows(rows: Iterable[ProcessRow]) -> list[ProcessRow]:
    """Return the rows with the busiest processes first."""
    return sorted(rows, key=lambda row: row.cpu, reverse=True)


def filter_rows(rows: Iterable[ProcessRow], query: str) -> list[ProcessRow]:
    """Keep rows with a cell that holds the query, ignoring case."""
    needle = query.lower()
    return [row for row in rows if any(needle in cell.lower() for cell in row.cells)]


class _Area(NamedTuple):
    x: int
    y: int
    width: int
    height: int


@dataclass
class _Styles:
    cyan: int = 0
    highlight: int = 0
    bold: int = 0


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


def _box(screen: Any, area: _Area, title: str = "", attr: int = 0) -> _Area:
    if area.width < 2 or area.height < 2:
        return _Area(area.x, area.y, 0, 0)
    inner = area.width - 2
    _put(screen, area.y, area.x, "┌" + "─" * inner + "┐", attr)
    for row in range(area.y + 1, area.y + area.height - 1):
        _put(screen, row, area.x, "│", attr)
        _put(screen, row, area.x + area.width - 1, "│", attr)
    _put(screen, area.y + area.height - 1, area.x, "└" + "─" * inner + "┘", attr)
    _put(screen, area.y, area.x + 1, title, attr, inner)
    return _Area(area.x + 1, area.y + 1, inner, area.height - 2)


def _draw_chart(screen: Any, state: TopState, area: _Area) -> None:
    inner = _box(screen, area, "CPU", _styles.cyan)
    if inner.width <= 0 or inner.height <= 0 or not state.cpu:
        return
    span = float(len(state.cpu))
    for x, y in state.cpu:
        column = min(int(x / span * inner.width), inner.width - 1)
        level = min(max(y, 0.0), 100.0) / 100.0
        row = inner.height - 1 - int(level * (inner.height - 1))
        _put(screen, inner.y + row, inner.x + column, "•", _styles.cyan)


def _draw_table(screen: Any, state: TopState, rows: list[ProcessRow], area: _Area) -> None:
    inner = _box(screen, area, "Processes")
    if inner.width <= 0 or inner.height <= 0:
        return
    selected = state.selection._clamp(len(rows))
    gutter = len(HIGHLIGHT_SYMBOL) if selected is not None else 0
    usable = max(inner.width - gutter - 2, 0)
    first = min(10, usable)
    second = (usable - first) // 2
    starts = (0, first + 1, first + 1 + second + 1)
    widths = (first, second, usable - first - second)

    def line(y: int, cells: tuple[str, ...], attr: int) -> None:
        for start, width, cell in zip(starts, widths, cells):
            _put(screen, y, inner.x + gutter + start, cell, attr, width)

    line(inner.y, HEADER, _styles.bold)
    room = inner.height - 1
    offset = max(0, (selected or 0) - room + 1)
    for number, row in enumerate(rows[offset : offset + room]):
        y = inner.y + 1 + number
        is_selected = selected == offset + number
        attr = _styles.highlight if is_selected else 0
        if is_selected:
            _put(screen, y, inner.x, " " * inner.width, attr)
            _put(screen, y, inner.x, HIGHLIGHT_SYMBOL, attr, gutter)
        line(y, row.cells, attr)


def _draw_search(screen: Any, state: TopState, area: _Area) -> None:
    box = _Area(area.x + 1, area.y + 1, max(area.width - 2, 0), 3)
    for row in range(box.y, box.y + box.height):
        _put(screen, row, box.x, " " * box.width)
    inner = _box(screen, box, "Search")
    if inner.height > 0:
        _put(screen, inner.y, inner.x, state.search_lines[-1], 0, inner.width)


def _draw(screen: Any, state: TopState, rows: list[ProcessRow]) -> None:
    height, width = screen.getmaxyx()
    screen.erase()
    top_height = height * 25 // 100
    rest = height - top_height
    second_height = rest // 2
    top = _Area(0, 0, width, top_height)
    second = _Area(0, top_height, width, second_height)
    bottom = _Area(0, top_height + second_height, width, rest - second_height)
    left_width = width // 2

    _box(screen, _Area(second.x, second.y, left_width, second.height))
    _box(screen, _Area(second.x + left_width, second.y, width - left_width, second.height))
    _draw_chart(screen, state, top)
    _draw_table(screen, state, state.visible_rows(rows), bottom)
    if state.search:
        _draw_search(screen, state, bottom)
    screen.refresh()


_SPECIAL_KEYS = {
    "\x1b": ESC,
    "\x03": CTRL_C,
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
        _styles = _Styles(highlight=curses.A_REVERSE, bold=curses.A_BOLD)
        return
    curses.start_color()
    curses.use_default_colors()
    dark_gray = 8 if curses.COLORS >= 16 else curses.COLOR_BLACK
    curses.init_pair(1, curses.COLOR_CYAN, -1)
    curses.init_pair(2, -1, dark_gray)
    _styles = _Styles(
        cyan=curses.color_pair(1),
        highlight=curses.color_pair(2),
        bold=curses.A_BOLD,
    )


def _run(screen: Any, state: TopState) -> None:
    _init_styles()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    curses.raw()
    screen.timeout(POLL_MS)
    psutil.cpu_percent(interval=None)
    rows: list[ProcessRow] = []
    tick = 0
    while state.running:
        if tick % REFRESH_EVERY == 0:
            rows = collect_processes()
        state.record_cpu(tick, psutil.cpu_percent(interval=None))
        _draw(screen, state, rows)
        tick += 1
        key = _read_key(screen)
        if key is not None:
            state.handle_key(key)


def main(argv: list[str] | None = None) -> int:
    """Run the process monitor until the user quits."""
    argparse.ArgumentParser(
        prog="ratatop", description="Watch CPU use and running processes."
    ).parse_args(argv)
    os.environ.setdefault("ESCDELAY", "25")
    try:
        curses.wrapper(_run, TopState())
    except curses.error as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())