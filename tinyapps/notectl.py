"""Take notes from the terminal and keep them in a local JSON file."""

from __future__ import annotations

import argparse
import json
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from platformdirs import user_data_dir
from termcolor import colored

_TIMESTAMP_RE = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})"
)

_BANNER = r"""
 _   _       _            _   _
| \ | | ___ | |_ ___  ___| |_| |
|  \| |/ _ \| __/ _ \/ __| __| |
| |\  | (_) | ||  __/ (__| |_| |
|_| \_|\___/ \__\___|\___|\__|_|
""".strip("\n")


def _paint(text: str, color: str | None = None, attrs: list[str] | None = None) -> str:
    return colored(text, color, attrs=attrs, force_color=True)


def _parse_timestamp(text: str) -> datetime:
    match = _TIMESTAMP_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    fraction = (match["fraction"] or "")[:6].ljust(6, "0")
    offset = "+00:00" if match["offset"] == "Z" else match["offset"]
    return datetime.fromisoformat(f"{match['base']}.{fraction}{offset}").astimezone()


@dataclass
class Note:
    """One note with its id, title, body and creation time."""

    id: int
    title: str
    body: str
    created: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "created": self.created.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Note:
        note_id = data["id"]
        if not isinstance(note_id, int) or isinstance(note_id, bool) or note_id < 0:
            raise ValueError(f"invalid note id: {note_id!r}")
        title, body = data["title"], data["body"]
        if not isinstance(title, str) or not isinstance(body, str):
            raise ValueError("note title and body must be strings")
        return cls(note_id, title, body, _parse_timestamp(data["created"]))


@dataclass
class NoteStore:
    """The notes kept in one JSON file."""

    path: Path
    notes: list[Note] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def load(self) -> list[Note]:
        """Read the notes from disk; a missing file means no notes."""
        if not self.path.exists():
            self.notes = []
            return self.notes
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError("notes file must hold a JSON array")
        try:
            self.notes = [Note.from_dict(item) for item in data]
        except (KeyError, TypeError) as error:
            raise ValueError(f"malformed note: {error}") from error
        return self.notes

    def save(self) -> None:
        """Write the notes to disk as pretty-printed JSON."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(
            [note.to_dict() for note in self.notes], indent=2, ensure_ascii=False
        )
        self.path.write_text(payload, encoding="utf-8")

    def add(self, title: str, body: str) -> Note:
        """Append a new note, numbered one past the last, and save."""
        note_id = self.notes[-1].id + 1 if self.notes else 1
        note = Note(note_id, title, body, datetime.now().astimezone())
        self.notes.append(note)
        self.save()
        return note

    def find(self, note_id: int) -> Note | None:
        """Return the note with this id, or None."""
        return next((note for note in self.notes if note.id == note_id), None)

    def delete(self, note_id: int) -> bool:
        """Remove the note with this id; save and return True if one was removed."""
        remaining = [note for note in self.notes if note.id != note_id]
        if len(remaining) == len(self.notes):
            return False
        self.notes = remaining
        self.save()
        return True

    def search(self, query: str) -> list[Note]:
        """Return notes whose title or body holds the query, ignoring case."""
        needle = query.lower()
        return [
            note
            for note in self.notes
            if needle in note.title.lower() or needle in note.body.lower()
        ]


def default_db_path() -> Path:
    """Return the notes file in the user's data directory, creating the directory."""
    path = Path(user_data_dir("notectl", appauthor=False)) / "notes.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def prompt_multiline(prompt: str, stdin: TextIO | None = None) -> str:
    """Print the prompt and read lines until an empty line or end of input."""
    stdin = stdin if stdin is not None else sys.stdin
    print(_paint(prompt, "blue", ["bold"]))
    lines = []
    for raw in iter(stdin.readline, ""):
        line = raw.rstrip()
        if not line:
            break
        lines.append(line)
    return "\n".join(lines)


def banner() -> str:
    """Return the program's ASCII-art banner."""
    return _BANNER


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notectl",
        description="Take notes straight from your terminal — with style ✨",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Add a new note")
    add.add_argument("-t", "--title", required=True, help="Title of the note (required)")
    add.add_argument(
        "-b", "--body", action="append", default=[], help="Body (omit to enter via stdin)"
    )

    listing = commands.add_parser("list", help="List existing notes")
    listing.add_argument(
        "-v", "--verbose", action="store_true", help="Show full body text for each note"
    )

    view = commands.add_parser("view", help="Show a note")
    view.add_argument("-i", "--id", type=int, required=True, metavar="ID")

    delete = commands.add_parser("delete", help="Delete a note")
    delete.add_argument("id", type=int, help="Note ID")

    search = commands.add_parser("search", help="Search notes")
    search.add_argument("-q", "--query", required=True, metavar="QUERY")
    return parser


def _run(args: argparse.Namespace) -> None:
    store = NoteStore(default_db_path())
    store.load()

    if args.command == "add":
        body = (
            " ".join(args.body)
            if args.body
            else prompt_multiline("Enter note body. Finish with an empty line:")
        )
        store.add(args.title, body)
        print(_paint("✅ Note added!", "green", ["bold"]))
    elif args.command == "list":
        if not store.notes:
            print(_paint("No notes yet. Add one with `notectl add <title>`!", "yellow"))
        for note in store.notes:
            print(
                f"{_paint(f'[#{note.id}]', 'cyan', ['bold'])} "
                f"{_paint(note.title, attrs=['bold'])} · "
                f"{_paint(note.created.astimezone().strftime('%Y-%m-%d %H:%M'), attrs=['dark'])}"
            )
            if args.verbose:
                print(f"  {note.body}")
    elif args.command == "view":
        note = store.find(args.id)
        if note is None:
            print(_paint("Note not found", "red"))
        else:
            underline = "-" * len(note.title.encode("utf-8"))
            print(
                f"{_paint(note.title, attrs=['bold', 'underline'])}\n"
                f"{_paint(underline, 'green')}\n{note.body}"
            )
    elif args.command == "delete":
        if store.delete(args.id):
            print(_paint("🗑️ Note deleted", "red", ["bold"]))
        else:
            print(_paint("Note not found", "red"))
    else:
        results = store.search(args.query)
        if not results:
            print(_paint("No matches 😯", "yellow"))
        for note in results:
            print(
                f"{_paint(f'[#{note.id}]', 'cyan', ['bold'])} "
                f"{_paint(note.title, attrs=['bold'])}"
            )


def main(argv: list[str] | None = None) -> int:
    """Run the note-taking command line."""
    args = _build_parser().parse_args(argv)
    print(_paint(banner(), "light_magenta"))
    try:
        _run(args)
    except (OSError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())