# tinyapps

A handful of small, self-contained terminal applications in one package.
Each one is installed as its own command. The full-screen programs
(`json-editor`, `ratatop`, `tomato-todo`) use the standard `curses` module
and so need a terminal where it is available.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Commands

### bin2dec

Convert a binary number of up to 8 digits to decimal.

```
bin2dec 101101
```

Prints `Decimal output: 45`. Input longer than 8 digits, or holding anything
other than `0` and `1`, is reported on standard error as `Error: ...`.

### csv2json

Convert CSV to JSON or JSON to CSV. Input is read from the file given with
`-i`/`--input` or from standard input; output goes to the file given with
`-o`/`--output` or to standard output. A path of `-` means the standard
stream. When a file is written, `Wrote <n> bytes to <path>` is printed.

```
csv2json to-json -i data.csv -o data.json --pretty
csv2json to-csv -i data.json -o data.csv
cat data.csv | csv2json to-json > out.json
```

When converting to JSON the first line is the header and every other
non-blank line must have as many fields; double quotes group fields and `""`
inside quotes is a literal quote. Each field is given the most fitting JSON
type: empty fields become `null`, integers and floats become numbers,
`true` and `false` (in any case) become booleans, and everything else stays
a trimmed string. Object keys are written in sorted order; `--pretty` indents
by two spaces.

When converting to CSV the JSON root must be a non-empty array of objects;
the header is the sorted union of all object keys, missing values are empty,
and fields holding a comma, a quote or a newline are quoted.

Errors are printed as `error: ...` and the command exits with status 1.

### quiz-app

A terminal quiz with two bundled quizzes, `general` and `science`.

```
quiz-app list
quiz-app take general
quiz-app take science
```

Answer each question with a number from 1 to 4; anything else asks again.
At the end the score, percentage and elapsed seconds are shown, along with
whether the quiz's pass mark was reached.

### notectl

Note taking from the terminal. Notes are kept as JSON in `notes.json` in the
user data directory for `notectl`.

```
notectl add -t "Shopping" -b "milk eggs bread"
notectl add -t "Shopping" -b milk -b eggs      # parts are joined with spaces
notectl add -t "Ideas"            # body is read from standard input, ending at an empty line
notectl list
notectl list --verbose
notectl view --id 1
notectl delete 1
notectl search --query milk
```

New notes are numbered one past the last note. Search ignores case and looks
in both titles and bodies. Every run starts by printing a banner.

### rock-treasure-hunter

Bust rocks, earn coins and open chests for treasures of four rarities:
Common (60 %), Rare (25 %), Epic (10 %) and Legendary (5 %).

```
rock-treasure-hunter --name Ada
rock-treasure-hunter --name Ada --load
```

Each day you have 100 strength; every rock you hit costs one and yields 0 to
10 coins. A chest costs 50 coins. "Save & Quit" writes your progress to
`<name in lower case>.json` in the current directory, which `--load` picks
up next time. Ending the input leaves without saving.

### json-editor

A full-screen editor for building a flat JSON object of key/value pairs.

```
json-editor
```

Press `e` to add a pair, `Tab` to switch between the key and value boxes,
`Enter` to move on or to store the pair, and `Esc` to cancel. Press `q` to
leave; answer `y` to have the collected object printed as compact JSON, or
`n` (or `q`) to leave without output.

### ratatop

A small process viewer with a CPU usage chart and a process table sorted by
CPU usage. The process list is refreshed every 60 frames.

```
ratatop
```

Keys: `j`/`k` move the selection, `s` toggles the search box whose first
line filters the table (a row stays if any of its cells holds the text,
ignoring case), and `q`, `Esc` or `Ctrl-C` quit. While the search box is
open, typed keys go into it and still act as the commands above.

### tomato-todo

A minimal to-do list in the terminal.

```
tomato-todo
```

Keys: `A` opens the form for a new item (type the description, `Enter` to
submit, `Esc` to cancel), `j`/`k` move the selection, `Enter` toggles an
item done, `D` deletes the selected item and `Esc` quits. Keys typed into the
form are also applied as list commands afterwards, so `Esc` in the form
closes it and quits.

## Using the pieces as a library

The converters are plain functions:

```python
from tinyapps.bin2dec import bin2dec
from tinyapps.csv2json import csv_to_json, json_to_csv

bin2dec("1010")                       # 10
csv_to_json("a,b\n1,x\n", False)      # '[{"a":1,"b":"x"}]'
json_to_csv('[{"b": 2, "a": 1}]')     # 'a,b\n1,2\n'
```

`bin2dec` raises `ValueError`; the `csv2json` functions raise
`tinyapps.csv2json.ConversionError`.

The interactive programs keep their state in plain objects that can be
driven without a terminal: `tinyapps.json_editor.App` and
`tinyapps.tomato.TodoState` take keys through `handle_key` /
`process_key`, `tinyapps.ratatop.TopState` through `handle_key`,
`tinyapps.notectl.NoteStore` adds, finds, deletes and searches notes in a
given file, and `tinyapps.treasure.Player` plays the game and returns the
messages it would print.

## What it does not do

- `tomato-todo` keeps its list in memory only; nothing is saved on exit.
- `json-editor` starts from an empty object, cannot load an existing file,
  and stores every value as a string.
- `notectl` cannot edit a note; delete it and add it again.
- `ratatop` only shows processes; it cannot signal or end them, and the two
  middle panels of its screen are empty frames.