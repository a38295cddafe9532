# obvtools

Support library and a small command-line front end for PCB board view data.
It uses only the standard library.

## Modules

- `obvtools.confparse.Confparse` reads and writes the line-based
  `key = value` configuration format. A key counts only at the start of a
  line. Values are read with `parse`, `parse_str`, `parse_int`, `parse_hex`,
  `parse_double` and `parse_bool`, and written in place with `write_str`,
  `write_bool`, `write_int`, `write_hex` and `write_float`. Before a write
  the old file is kept as `<name>~`, and after it the file is read again.
  `load(path, save_default=True)` creates a missing file from the built-in
  `DEFAULT_CONF`. Without `save_default` it creates an empty file.
- `obvtools.history.FileHistory` keeps up to 20 recently opened files,
  newest first. Its methods are `load` and `prepend_save`.
  `trim_filename(path, stops)` keeps only the last path components.
- `obvtools.spell.SpellCorrector.suggest` lists the dictionary words close
  to a word, ignoring case, best match first. The distance comes from
  `levenshtein_distance` and is cut off at a threshold of 3 by default.
- `obvtools.searcher.Searcher` searches parts and nets by name, ignoring
  case. `SearchMode` selects `SUB`, `PREFIX` or `WHOLE`, and results can be
  capped with a limit. Items need a `name` attribute. When `search_details`
  is set, the strings from an item's `searchable_string_details()` are
  searched as well. `mode_matches` does a single comparison.
- `obvtools.vectorhulls` provides `Vec2`, `rotate_point`, `angle_to_x`,
  `convex_hull_orientation`, `convex_hull` (gift wrapping), `tighten_hull`,
  `minimum_bounding_box` (four corners) and `get_intersection` (a `Vec2`,
  or `None`).
- `obvtools.utils` provides `file_as_buffer`, `check_fileext`,
  `find_str_in_buf`, `compare_string_insensitive`,
  `lookup_file_insensitive` and `split_string`.
- `obvtools.annotations.Annotations` stores board notes in SQLite. For
  `board.brd` the database is `board_brd.sqlite3`, given by
  `database_path()`. The methods are `load`, `add`, `update`, `remove` and
  `generate_list`. `remove` hides a row and does not delete it. The class
  also works as a context manager.
- `obvtools.docfile` has `PDFFile` and `OBDataFile`, which attach a document
  to a board through its configuration file. The keys are `PDFFilePath` and
  `OBDataFilePath`. When no path is stored, the document's path is the
  configuration path with its extension changed to `.pdf` or `.obd`. The
  `DocumentBridge` base class only records what was opened and searched.
  Subclass it to drive a real document viewer.
- `obvtools.userdirs.get_user_dir(UserDir.CONFIG | UserDir.DATA)` follows
  `XDG_CONFIG_HOME`, `XDG_DATA_HOME` and `HOME`, and creates
  `.../OpenBoardView/` if it is missing. If that fails it returns `./`.
- `obvtools.obdata.OBData` loads a measurement data file from local disk.
  The file holds diode, voltage and resistance readings per net and
  condition, and part fields. `OBData` builds tooltip text and table rows
  with `testpad_tooltip`, `pin_tooltip`, `part_tooltip` and
  `condition_rows`. The module also has `url_decode`, `url_encode` and
  `format_measurement`.
- `obvtools.keybindings.KeyBindings` holds the default bindings for named
  actions and reads and writes them as `KeyBinding<Action>` entries in a
  `Confparse`. Bindings are separated by `|` and modifiers are joined with
  `~`. Key state comes from the caller through `is_down` and `was_pressed`
  callables.

## Example

```python
from obvtools.confparse import Confparse
from obvtools.vectorhulls import Vec2, convex_hull, minimum_bounding_box

conf = Confparse()
conf.load("obv.conf", save_default=True)
print(conf.parse_int("windowX", 1100))
conf.write_bool("showFPS", True)

points = [Vec2(0, 0), Vec2(4, 0), Vec2(4, 3), Vec2(0, 3), Vec2(2, 1)]
hull = convex_hull(points)
box = minimum_bounding_box(hull, 0.5)
```

## Command line

```
obvtools [-h] [-V] [-l] [-c <config file>] [-i <input file>] [-x <width>] [-y <height>] [-z <fontsize>] [-p <dpi>] [-r <renderer>] [-d]
```

The command parses these options. It loads the user configuration, or the
file given with `-c`, and the file history. It then prints the resulting
start-up settings: window size, the order in which renderers would be tried,
DPI, font size and large-font scale, candidate fonts, the input file and the
recent files.

## What it does not do

The package has no graphical interface. It opens no window, renders nothing
and reads no board layout file formats. The command only reports settings.
`OBData.load` reads a local file and downloads nothing. `DocumentBridge`
starts no external document viewer.

## Tests

```
pip install -e .[test]
pytest
```