# modbase

Shared helpers for mod-manager style applications. The library parses mod
version strings and writes files safely. It also copies and prunes files,
adds up task progress, finds Steam games and remembers a user's answers to
questions. It uses only the standard library.

## Installation

```
pip install modbase
```

To run the tests, install the test extra:

```
pip install "modbase[test]"
pytest
```

## Modules

### `modbase.versioninfo`

`VersionInfo.from_string(text, scheme=VersionScheme.DISCOVER, manual_input=False)`
parses free-form version strings such as `"1.2.3b"`, `"v2.0rc1"`, `"f1.05"`
or `"d2020.1.15"`. It detects the `VersionScheme` (`REGULAR`, `DECIMALMARK`,
`NUMBERSANDLETTERS`, `DATE`, `LITERAL`) from prefix hints and from the shape
of the number. In the regular scheme it also picks out the `ReleaseType`
(`PREALPHA`, `ALPHA`, `BETA`, `CANDIDATE`, `FINAL`).

- `VersionInfo(major, minor, subminor, subsubminor, release_type)` builds a
  version directly. `VersionInfo()` with no arguments is invalid.
- The properties `is_valid` and `scheme` report the state of a version.
- `canonical_string()` gives a string that parses back into the same
  version. `display_string(forced_version_segments=2)` gives a string meant
  for users.
- `as_version_tuple()` gives the leading numeric segments of the display
  string, with trailing zeros removed.
- Versions compare with `<`, `<=`, `>`, `>=`, `==` and `!=`. Date versions
  order before all others. Decimal versions compare as numbers. A release
  type orders before a final release of the same number.

### `modbase.safewritefile`

`SafeWriteFile(file_name)` creates a temporary file next to the target.
`write()` takes bytes, or text, which it stores as UTF-8. `hash()` returns
the MD5 digest of what has been written so far.

- `commit()` replaces the target with the temporary file.
- `commit_if_different(known_hash)` commits only if the content differs from
  `known_hash` or the target does not exist yet. It returns the new hash when
  it writes and `None` when it does not.
- `close()`, or leaving the `with` block, discards the temporary file if it
  was never committed.

If the temporary file cannot be created, the constructor raises `OSError`.

### `modbase.fileops`

Each of these raises `FileOperationError`, a subclass of `OSError`, on
failure.

- `remove_dir(dir_name)` removes a tree and clears read-only flags on the
  way.
- `copy_dir(source, destination, merge=False)` copies a tree. With `merge`
  the destination may already exist, and files already there are kept.
  Hidden entries and symlinked directories are skipped.
- `move_file_recursive(source, base_dir, destination)` and
  `copy_file_recursive(...)` create the directories in a `/`-separated
  `destination` under `base_dir`. They never overwrite an existing target.
- `remove_old_files(path, pattern, num_to_keep, sort_key=None)` deletes
  matching files until only the last `num_to_keep` remain. By default the
  files are ordered by modification time. It returns the removed paths.
- `delete_quiet(file_name)` deletes a file and retries after clearing the
  read-only flag.

### `modbase.progress`

`TaskProgressManager(taskbar=None, clock=time.monotonic)` hands out task ids
through `get_id()` and takes `update_progress(task_id, value, maximum)` and
`forget_me(task_id)`. After each change it calls the taskbar's
`set_progress_state(ProgressState)` and `set_progress_value(completed,
total)`. Tasks that report nothing for 15 seconds are dropped. Without a
taskbar, updates are ignored.

### `modbase.steam`

- `find_steam()` reads the Steam path from the Windows registry. It returns
  `""` elsewhere.
- `find_steam_game(app_name, valid_file="", steam_path=None)` searches the
  Steam install and every library listed in `steamapps/libraryfolders.vdf`
  for `steamapps/common/<app_name>`. If `valid_file` is given, that file must
  exist in the game directory.
- `parse_library_folders(lines)` extracts the library paths from the lines of
  that file.

### `modbase.questionbox`

`Button` is an `IntFlag` of standard dialog buttons. `button_to_string(b)`
formats a button as `'yes' (0x4000)`, or as the bare hex value if it is not a
single known button.

`QuestionBoxMemory` keeps remembered answers through callbacks that you
register with `set_callbacks(get, set_window, set_file)`. These are:

- `get(window, file)`, which returns the stored answer or
  `Button.NO_BUTTON`.
- `set_window(window, button)`.
- `set_file(window, file, button)`.

`query(window_name, ask, file_name=None)` returns the remembered answer if
there is one. Otherwise it calls `ask(file_name)`, which must return
`(button, remember, remember_for_file)`. It stores the choice as asked,
except when the answer is `Button.CANCEL`.

## Example

```python
from modbase.versioninfo import VersionInfo
from modbase.safewritefile import SafeWriteFile
from modbase.questionbox import Button, QuestionBoxMemory

assert VersionInfo.from_string("1.0.0rc1") < VersionInfo.from_string("1.0.0")
print(VersionInfo.from_string("1.2.3b").display_string())  # "1.2.3beta"

with SafeWriteFile("settings.ini") as f:
    f.write(b"[General]\nkey=value\n")
    f.commit()

memory = {}
QuestionBoxMemory.set_callbacks(
    lambda window, file: memory.get((window, file), Button.NO_BUTTON),
    lambda window, button: memory.__setitem__((window, ""), button),
    lambda window, file, button: memory.__setitem__((window, file), button),
)
answer = QuestionBoxMemory.query("overwrite", lambda file: (Button.YES, True, False))
assert answer == Button.YES
assert QuestionBoxMemory.query("overwrite", lambda file: (Button.NO, False, False)) == Button.YES
```

## What it does not do

The package has no user interface and no command-line tool. Questions are
put to the user through the `ask` callable that you supply, and
`QuestionBoxMemory` does not store answers itself. The package also has no
helpers for:

- launching programs or opening URLs;
- formatting byte sizes or remaining times;
- natural sorting or decoding text of unknown encoding;
- scope guards or timers;
- tutorials.