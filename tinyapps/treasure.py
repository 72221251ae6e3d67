"""Bust rocks, earn coins and open chests for treasures."""

from __future__ import annotations

import argparse
import json
import random
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from termcolor import colored

STRENGTH_PER_DAY = 100
CHEST_COST = 50
ROCK_ART = "🪨"
CHEST_ART = "📦"


def _paint(text: str, color: str | None = None, attrs: list[str] | None = None) -> str:
    return colored(text, color, attrs=attrs, force_color=True)


class Rarity(Enum):
    """How rare a treasure is; the order is the order of the draw."""

    COMMON = "Common"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"

    def color(self) -> str:
        """Return the terminal colour used for this rarity."""
        return _RARITY_COLORS[self]

    def weight(self) -> int:
        """Return the chance, out of 100, of drawing this rarity."""
        return _RARITY_WEIGHTS[self]


_RARITY_COLORS = {
    Rarity.COMMON: "light_grey",
    Rarity.RARE: "cyan",
    Rarity.EPIC: "magenta",
    Rarity.LEGENDARY: "yellow",
}

_RARITY_WEIGHTS = {
    Rarity.COMMON: 60,
    Rarity.RARE: 25,
    Rarity.EPIC: 10,
    Rarity.LEGENDARY: 5,
}

_TREASURES = (
    ("Rusty Dagger", Rarity.COMMON),
    ("Old Boots", Rarity.COMMON),
    ("Silver Ring", Rarity.RARE),
    ("Emerald Amulet", Rarity.RARE),
    ("Phoenix Feather", Rarity.EPIC),
    ("Dragon Scale", Rarity.EPIC),
    ("Excalibur", Rarity.LEGENDARY),
    ("Philosopher's Stone", Rarity.LEGENDARY),
)


@dataclass(frozen=True)
class Treasure:
    """A treasure found in a chest."""

    name: str
    rarity: Rarity

    def describe(self) -> str:
        """Return the coloured line that shows this treasure."""
        color = self.rarity.color()
        return f"{_paint(self.name, color, ['bold'])} {_paint(f'({self.rarity.value})', color)}"


def random_treasure(rng: random.Random | None = None) -> Treasure:
    """Draw a rarity by weight, then one treasure of that rarity."""
    rng = rng if rng is not None else random.Random()
    roll = rng.randrange(100)
    rarity = Rarity.COMMON
    cumulative = 0
    for candidate in Rarity:
        cumulative += candidate.weight()
        if roll < cumulative:
            rarity = candidate
            break
    names = [name for name, kind in _TREASURES if kind is rarity]
    return Treasure(rng.choice(names), rarity)


@dataclass
class Player:
    """An adventurer with strength, coins and a treasure collection."""

    name: str
    strength: int = STRENGTH_PER_DAY
    coins: int = 0
    collection: list[Treasure] = field(default_factory=list)

    def new_day(self) -> str:
        """Restore full strength and return the morning message."""
        self.strength = STRENGTH_PER_DAY
        return f"\n{_paint('☀️', 'yellow')} It's a new day! Your strength is full ({self.strength})."

    def hit_rock(self, rng: random.Random | None = None) -> str:
        """Spend one strength for 0 to 10 coins and return what happened."""
        if self.strength == 0:
            return f"{_paint('⚠️', 'yellow')} You are out of strength for today!"
        rng = rng if rng is not None else random.Random()
        self.strength -= 1
        found = rng.randint(0, 10)
        self.coins += found
        return (
            f"{_paint(ROCK_ART, attrs=['dark'])} You swing your pickaxe... "
            f"{_paint('💰', 'yellow')} coins fly out! (+{found})"
        )

    def open_chest(self, rng: random.Random | None = None) -> str:
        """Pay for a chest, add its treasure to the collection and return what happened."""
        if self.coins < CHEST_COST:
            return (
                f"{_paint('🚫', 'red')} Not enough coins ({CHEST_COST} needed). "
                f"You have {self.coins}."
            )
        self.coins -= CHEST_COST
        treasure = random_treasure(rng)
        self.collection.append(treasure)
        return f"{_paint(CHEST_ART, 'yellow')} Opening chest...\n{treasure.describe()}"

    def collection_lines(self) -> list[str]:
        """Return the lines that show the treasure collection."""
        if not self.collection:
            return [f"{_paint('📭', attrs=['dark'])} Your collection is empty!"]
        header = f"\n{_paint('📜', 'white', ['bold'])} Treasure Collection:"
        return [header] + [
            f"{number:3}. {treasure.describe()}"
            for number, treasure in enumerate(self.collection, start=1)
        ]

    def to_dict(self) -> dict[str, Any]:
        """Return the player as JSON-ready data."""
        return {
            "name": self.name,
            "strength": self.strength,
            "coins": self.coins,
            "collection": [
                {"name": treasure.name, "rarity": treasure.rarity.value}
                for treasure in self.collection
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        """Build a player from saved data; raise ValueError if it is malformed."""
        try:
            name = data["name"]
            strength = data["strength"]
            coins = data["coins"]
            collection = [
                Treasure(item["name"], Rarity(item["rarity"])) for item in data["collection"]
            ]
        except (KeyError, TypeError) as error:
            raise ValueError(f"malformed save data: {error}") from error
        if not isinstance(name, str):
            raise ValueError("player name must be a string")
        for value in (strength, coins):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"invalid counter: {value!r}")
        if not all(isinstance(treasure.name, str) for treasure in collection):
            raise ValueError("treasure names must be strings")
        return cls(name, strength, coins, collection)


def save_path(name: str) -> str:
    """Return the save file name for an adventurer."""
    return f"{name.lower()}.json"


def load_player(path: str | Path) -> Player | None:
    """Return the saved player, or None if the file is missing or unreadable."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        return Player.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError):
        return None


def save_player(player: Player, path: str | Path) -> None:
    """Write the player to a JSON file; raise OSError if that fails."""
    payload = json.dumps(player.to_dict(), indent=2, ensure_ascii=False)
    try:
        Path(path).write_text(payload, encoding="utf-8")
    except OSError as error:
        raise OSError(f"Failed to save game: {error}") from error


def _prompt(text: str) -> str | None:
    print(f"{_paint(text, 'green', ['bold'])} ", end="", flush=True)
    line = sys.stdin.readline()
    return line.strip() if line else None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rock_treasure_hunter",
        description="Bust rocks, earn coins, and discover treasures!",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("-n", "--name", default="Adventurer", help="Your adventurer name")
    parser.add_argument(
        "-l", "--load", action="store_true", help="Load previous save if it exists"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Play the game until the player saves and quits."""
    args = _build_parser().parse_args(argv)
    save_file = save_path(args.name)
    player = (load_player(save_file) if args.load else None) or Player(args.name)
    rng = random.Random()

    print(f"{_paint('✨', 'light_yellow')} Welcome, {_paint(player.name, attrs=['bold'])}!")
    print("Type the number of an action and press Enter.\n")

    day = 1
    while True:
        print(
            f"\n{_paint('🗓️', 'cyan')} Day {day} | "
            f"Strength: {_paint(str(player.strength), 'blue')} | "
            f"Coins: {_paint(str(player.coins), 'yellow')}"
        )
        print(
            f"1️⃣  Hit Rock\n2️⃣  Open Chest (cost {CHEST_COST})\n"
            "3️⃣  View Collection\n4️⃣  End Day\n5️⃣  Save & Quit"
        )
        choice = _prompt("Your choice?")
        if choice is None:
            return 0
        if choice == "1":
            print(player.hit_rock(rng))
        elif choice == "2":
            print(player.open_chest(rng))
        elif choice == "3":
            print("\n".join(player.collection_lines()))
        elif choice == "4":
            day += 1
            print(player.new_day())
        elif choice == "5":
            try:
                save_player(player, save_file)
            except OSError as error:
                print(f"Error: {error}", file=sys.stderr)
                return 1
            print(f"{_paint('💾', 'green')} Game saved. Goodbye!")
            return 0
        else:
            print(f"{_paint('❓', 'red')} Invalid choice!")


if __name__ == "__main__":
    sys.exit(main())