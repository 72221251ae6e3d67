"""State and key handling for a small key-value JSON editor."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum

ENTER = "Enter"
BACKSPACE = "Backspace"
ESC = "Esc"
TAB = "Tab"


class CurrentScreen(Enum):
    """Which screen the editor shows."""

    MAIN = "main"
    EDITING = "editing"
    EXITING = "exiting"


class CurrentlyEditing(Enum):
    """Which input box receives typed characters."""

    KEY = "key"
    VALUE = "value"


@dataclass
class App:
    """The editor's inputs, the collected pairs and the current mode.

    Keys given to ``handle_key`` are single characters, or one of the names
    ``ENTER``, ``BACKSPACE``, ``ESC`` and ``TAB``.
    """

    key_input: str = ""
    value_input: str = ""
    pairs: dict[str, str] = field(default_factory=dict)
    current_screen: CurrentScreen = CurrentScreen.MAIN
    currently_editing: CurrentlyEditing | None = None

    def save_key_value(self) -> None:
        """Store the typed pair and clear both inputs."""
        self.pairs[self.key_input] = self.value_input
        self.key_input = ""
        self.value_input = ""
        self.currently_editing = None

    def toggle_editing(self) -> None:
        """Switch between the key and value boxes, starting with the key."""
        if self.currently_editing is CurrentlyEditing.KEY:
            self.currently_editing = CurrentlyEditing.VALUE
        else:
            self.currently_editing = CurrentlyEditing.KEY

    def to_json(self) -> str:
        """Return the pairs as a compact JSON object."""
        return json.dumps(self.pairs, separators=(",", ":"), ensure_ascii=False)

    def handle_key(self, key: str) -> bool | None:
        """Apply one key press.

        Returns None while the editor keeps running; on exit returns True if
        the pairs should be printed and False otherwise.
        """
        if self.current_screen is CurrentScreen.MAIN:
            if key == "e":
                self.current_screen = CurrentScreen.EDITING
                self.currently_editing = CurrentlyEditing.KEY
            elif key == "q":
                self.current_screen = CurrentScreen.EXITING
            return None

        if self.current_screen is CurrentScreen.EXITING:
            if key == "y":
                return True
            if key in ("n", "q"):
                return False
            return None

        self._handle_editing_key(key)
        return None

    def _handle_editing_key(self, key: str) -> None:
        editing = self.currently_editing
        if key == ENTER:
            if editing is CurrentlyEditing.KEY:
                self.currently_editing = CurrentlyEditing.VALUE
            elif editing is CurrentlyEditing.VALUE:
                self.save_key_value()
                self.current_screen = CurrentScreen.MAIN
        elif key == BACKSPACE:
            if editing is CurrentlyEditing.KEY:
                self.key_input = self.key_input[:-1]
            elif editing is CurrentlyEditing.VALUE:
                self.value_input = self.value_input[:-1]
        elif key == ESC:
            self.current_screen = CurrentScreen.MAIN
            self.currently_editing = None
        elif key == TAB:
            self.toggle_editing()
        elif len(key) == 1:
            if editing is CurrentlyEditing.KEY:
                self.key_input += key
            elif editing is CurrentlyEditing.VALUE:
                self.value_input += key