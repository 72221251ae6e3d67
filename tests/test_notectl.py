import io
import json
from datetime import datetime, timedelta, timezone

import pytest

from tinyapps.notectl import NoteStore, banner, prompt_multiline


@pytest.fixture
def store(tmp_path):
    return NoteStore(tmp_path / "data" / "notes.json")


def test_load_missing_file_gives_no_notes(store):
    assert store.load() == []


def test_add_numbers_notes_from_one(store):
    store.load()
    first = store.add("First", "one")
    second = store.add("Second", "two")
    assert (first.id, second.id) == (1, 2)


def test_add_persists_to_disk(store):
    store.load()
    store.add("Groceries", "milk\neggs")
    reloaded = NoteStore(store.path)
    notes = reloaded.load()
    assert [(n.id, n.title, n.body) for n in notes] == [(1, "Groceries", "milk\neggs")]


def test_round_trip_keeps_created_time(store):
    store.load()
    note = store.add("Time", "check")
    loaded = NoteStore(store.path).load()[0]
    assert loaded.created == note.created


def test_saved_file_has_expected_fields(store):
    store.load()
    store.add("Fields", "body text")
    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert sorted(data[0]) == ["body", "created", "id", "title"]


def test_next_id_follows_last_note(store):
    store.load()
    store.add("a", "")
    store.add("b", "")
    store.delete(1)
    assert store.add("c", "").id == 3


def test_delete_missing_returns_false(store):
    store.load()
    store.add("a", "")
    assert store.delete(42) is False
    assert len(store.notes) == 1


def test_delete_removes_and_saves(store):
    store.load()
    store.add("a", "")
    store.add("b", "")
    assert store.delete(2) is True
    assert [n.title for n in NoteStore(store.path).load()] == ["a"]


def test_find(store):
    store.load()
    store.add("alpha", "x")
    store.add("beta", "y")
    assert store.find(2).title == "beta"
    assert store.find(7) is None


def test_search_is_case_insensitive_over_title_and_body(store):
    store.load()
    store.add("Shopping", "buy APPLES")
    store.add("Work", "meeting")
    store.add("apple pie", "recipe")
    assert [n.title for n in store.search("Apple")] == ["Shopping", "apple pie"]
    assert store.search("nothing here") == []


def test_load_nanosecond_timestamp(tmp_path):
    path = tmp_path / "notes.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 5,
                    "title": "t",
                    "body": "b",
                    "created": "2024-05-01T12:34:56.123456789+02:00",
                }
            ]
        ),
        encoding="utf-8",
    )
    note = NoteStore(path).load()[0]
    expected = datetime(2024, 5, 1, 12, 34, 56, 123456, tzinfo=timezone(timedelta(hours=2)))
    assert note.created == expected
    assert note.id == 5


def test_load_rejects_malformed_file(tmp_path):
    path = tmp_path / "notes.json"
    path.write_text(json.dumps([{"id": 1}]), encoding="utf-8")
    with pytest.raises(ValueError):
        NoteStore(path).load()


def test_load_rejects_invalid_json(tmp_path):
    path = tmp_path / "notes.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        NoteStore(path).load()


def test_prompt_multiline_stops_at_empty_line():
    stdin = io.StringIO("first line\nsecond  \n\nignored\n")
    assert prompt_multiline("Body:", stdin) == "first line\nsecond"


def test_prompt_multiline_stops_at_end_of_input():
    assert prompt_multiline("Body:", io.StringIO("only")) == "only"


def test_banner_is_multiline_art():
    lines = banner().splitlines()
    assert len(lines) >= 5
    assert all(line.strip() for line in lines)