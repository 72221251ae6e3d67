"""Small terminal programs: binary and CSV/JSON converters, a quiz, notes, a game, a JSON editor, a process viewer and a to-do list."""

__version__ = "0.1.0"