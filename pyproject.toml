[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyapps"
version = "0.1.0"
description = "Small terminal applications: a binary converter, a CSV/JSON converter, a quiz, notes, a mining game, a JSON editor, a process viewer and a to-do list."
requires-python = ">=3.10"
keywords = ["cli", "terminal", "curses", "csv", "json", "notes", "quiz", "todo", "top", "game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "termcolor",
    "platformdirs",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bin2dec = "tinyapps.bin2dec:main"
csv2json = "tinyapps.csv2json:main"
quiz-app = "tinyapps.quiz:main"
notectl = "tinyapps.notectl:main"
rock-treasure-hunter = "tinyapps.treasure:main"
json-editor = "tinyapps.json_editor_ui:main"
ratatop = "tinyapps.ratatop:main"
tomato-todo = "tinyapps.tomato:main"

[tool.hatch.build.targets.wheel]
packages = ["tinyapps"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
