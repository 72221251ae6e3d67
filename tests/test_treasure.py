import io
import json
import random
from collections import Counter

import pytest

from tinyapps.treasure import (
    CHEST_COST,
    STRENGTH_PER_DAY,
    Player,
    Rarity,
    Treasure,
    load_player,
    main,
    random_treasure,
    save_path,
    save_player,
)


class FixedRng:
    def __init__(self, roll=0, coins=0):
        self.roll = roll
        self.coins = coins

    def randrange(self, stop):
        return self.roll

    def randint(self, low, high):
        return self.coins

    def choice(self, seq):
        return seq[0]


def test_weights_match_rolls_over_full_range():
    counts = Counter(random_treasure(FixedRng(roll=roll)).rarity for roll in range(100))
    assert counts == {rarity: rarity.weight() for rarity in Rarity}
    assert [Rarity.COMMON.weight(), Rarity.RARE.weight(), Rarity.EPIC.weight(), Rarity.LEGENDARY.weight()] == [
        60,
        25,
        10,
        5,
    ]


def test_new_player_starts_full():
    player = Player("Ann")
    assert (player.strength, player.coins, player.collection) == (STRENGTH_PER_DAY, 0, [])


def test_hit_rock_spends_strength_and_adds_coins():
    player = Player("Ann")
    player.hit_rock(FixedRng(coins=7))
    assert player.strength == STRENGTH_PER_DAY - 1
    assert player.coins == 7


def test_hit_rock_with_real_rng_stays_in_range():
    rng = random.Random(3)
    player = Player("Ann")
    for _ in range(50):
        before = player.coins
        player.hit_rock(rng)
        assert 0 <= player.coins - before <= 10


def test_hit_rock_without_strength_does_nothing():
    player = Player("Ann", strength=0, coins=5)
    message = player.hit_rock(FixedRng(coins=9))
    assert (player.strength, player.coins) == (0, 5)
    assert "out of strength" in message


def test_new_day_restores_strength():
    player = Player("Ann", strength=3)
    player.new_day()
    assert player.strength == STRENGTH_PER_DAY


def test_open_chest_needs_enough_coins():
    player = Player("Ann", coins=CHEST_COST - 1)
    player.open_chest(FixedRng())
    assert player.coins == CHEST_COST - 1
    assert player.collection == []


def test_open_chest_buys_a_treasure():
    player = Player("Ann", coins=CHEST_COST + 10)
    player.open_chest(FixedRng(roll=0))
    assert player.coins == 10
    assert player.collection == [Treasure("Rusty Dagger", Rarity.COMMON)]


@pytest.mark.parametrize(
    "roll, rarity",
    [
        (0, Rarity.COMMON),
        (59, Rarity.COMMON),
        (60, Rarity.RARE),
        (85, Rarity.EPIC),
        (99, Rarity.LEGENDARY),
    ],
)
def test_random_treasure_rarity_by_roll(roll, rarity):
    assert random_treasure(FixedRng(roll=roll)).rarity is rarity


def test_random_treasure_name_matches_rarity():
    rng = random.Random(11)
    by_rarity = {}
    for _ in range(300):
        treasure = random_treasure(rng)
        by_rarity.setdefault(treasure.rarity, set()).add(treasure.name)
    assert by_rarity[Rarity.LEGENDARY] <= {"Excalibur", "Philosopher's Stone"}
    assert by_rarity[Rarity.COMMON] <= {"Rusty Dagger", "Old Boots"}


def test_collection_lines():
    player = Player("Ann")
    assert "empty" in player.collection_lines()[0]
    player.collection.append(Treasure("Excalibur", Rarity.LEGENDARY))
    lines = player.collection_lines()
    assert len(lines) == 2
    assert lines[1].startswith("  1. ")
    assert "Excalibur" in lines[1]


def test_describe_shows_rarity_name():
    text = Treasure("Silver Ring", Rarity.RARE).describe()
    assert "Silver Ring" in text and "(Rare)" in text


def test_save_path_lowercases():
    assert save_path("Adventurer") == "adventurer.json"


def test_save_and_load_round_trip(tmp_path):
    player = Player("Ann", strength=40, coins=12, collection=[Treasure("Dragon Scale", Rarity.EPIC)])
    path = tmp_path / "ann.json"
    save_player(player, path)
    assert load_player(path) == player
    assert json.loads(path.read_text())["collection"][0]["rarity"] == "Epic"


def test_load_missing_or_broken(tmp_path):
    assert load_player(tmp_path / "missing.json") is None
    broken = tmp_path / "broken.json"
    broken.write_text('{"name": "x"}')
    assert load_player(broken) is None


def test_from_dict_rejects_unknown_rarity():
    data = {"name": "x", "strength": 1, "coins": 0, "collection": [{"name": "a", "rarity": "Mythic"}]}
    with pytest.raises(ValueError):
        Player.from_dict(data)


def test_main_plays_and_saves(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n4\n1\n9\n5\n"))
    assert main(["--name", "Bob"]) == 0
    saved = load_player(tmp_path / "bob.json")
    assert saved.name == "Bob"
    assert saved.strength == STRENGTH_PER_DAY - 1


def test_main_loads_previous_save(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    save_player(Player("Bob", strength=5, coins=33), tmp_path / "bob.json")
    monkeypatch.setattr("sys.stdin", io.StringIO("5\n"))
    assert main(["--name", "Bob", "--load"]) == 0
    assert load_player(tmp_path / "bob.json").coins == 33