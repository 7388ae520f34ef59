# mgedit

The editing core of a small Emacs-style text editor, as a Python library.
It works on in-memory buffers and is driven from your own code.

## Modules

- `mgedit.core`: the data model and the editing primitives.
  - `Buffer` holds a list of `Line` objects. It has `set_text()`, `text()`
    and `line_count()`, and `BufferFlag` values such as `READONLY` and
    `NOTAB`.
  - `Window` holds a dot, a mark and a screen area. `Region` gives a start
    line, an offset and a size.
  - `Editor` keeps the current buffer and window. It has `insert()`,
    `newline()`, `delete()`, `forward_char()`, `backward_char()`,
    `goto_bol()`, `goto_eol()`, `set_mark()`, `clear_mark()` and
    `char_at_dot()`.
  - Messages meant for the echo line are appended to `Editor.messages`.
  - `show_version()` returns the version string.
- `mgedit.chars`: character classification. It has `is_word`, `is_upper`,
  `is_lower`, `is_ctrl`, `is_digit` and `is_eosp`. It also has `to_upper`,
  `to_lower` and `ctrl` (so `ctrl("?")` is DEL).
- `mgedit.windows`: `Layout`, the vertical stack of windows. It has
  `split()`, `next_window()`, `previous_window()`, `only_window()`,
  `enlarge()`, `shrink()`, `delete_window()`, `resize()` and
  `reposition()`.
- `mgedit.textutil`: whitespace and indentation commands.
  - Commands: `twiddle`, `open_line`, `delete_blank_lines`, `just_one_space`,
    `delete_whitespace`, `delete_leading_whitespace`,
    `delete_trailing_whitespace`, `newline_and_indent`, `space_to_tab_stop`,
    `back_to_indentation` and `join_line`.
  - Helpers: `next_tab_stop`, `column_position` and `cursor_position`.
- `mgedit.killring`: `KillRing`, with the `kill_line` and `yank` commands.
- `mgedit.region`: commands on the region between dot and mark.
  - Region commands: `get_region`, `region_text`, `kill_region`,
    `copy_region`, `lower_region`, `upper_region`, `prefix_region` and
    `mark_buffer`.
  - Other functions: `put_text` and `run_shell_command`.
  - `run_shell_command` runs a command through `$SHELL` (or `/bin/sh`) and
    can feed it text. It returns a read-only `Buffer` that holds the output.
- `mgedit.search`: `Searcher`, which holds the pattern and the last
  direction.
  - Searches: `forward()`, `backward()` and `search_again()`.
  - Replacement: `replace_all()`, and `query_replace()`, which takes its
    answers from an iterable of keys.
  - `zap()` kills up to or through a character.
  - `chars_equal()` compares characters. Case is ignored unless the pattern
    has an upper case letter.
- `mgedit.undo`: `UndoLog`, which records inserts, deletes, changes,
  boundaries and the unmodified point by absolute position.
  - `undo()` reverses the records. Calling it again walks further back.
  - `dump()` lists the records, newest first.
- `mgedit.words`: word commands.
  - Motion: `in_word`, `forward_word` and `backward_word`.
  - Case: `upper_word`, `lower_word` and `capitalize_word`.
  - Editing: `count_word`, `delete_forward_word`, `delete_backward_word` and
    `transpose_words`.
- `mgedit.tags`: `TagTable` loads ctags files and keeps a stack of saved
  positions.
  - Helpers: `parse_tag_line`, `strip_pattern` and `search_pattern`.
  - `token_at_dot` returns the identifier under dot.

## Example

```python
from mgedit.core import Editor
from mgedit.killring import KillRing, yank
from mgedit.search import Searcher
from mgedit.words import delete_forward_word

editor = Editor()
editor.buffer.set_text("hello world\nhello again")

searcher = Searcher("hello")
searcher.replace_all(editor, "goodbye")
print(editor.buffer.text())        # goodbye world\ngoodbye again

ring = KillRing()
editor.window.dot_line, editor.window.dot_offset = 1, 0
delete_forward_word(editor, ring)  # kills "goodbye"
yank(editor, ring)                 # puts it back
```

Commands that fail raise `mgedit.core.EditorError`. The message it carries
is the one the editor would show. Invalid counts raise `ValueError`.

## What it does not do

- There is no terminal display and no keyboard input.
- There are no key bindings and no command loop. Incremental search is not
  included.
- Files are not visited or saved. Buffers exist only in memory.
- `Editor` does not write to an `UndoLog` by itself. The caller records
  changes with the `add_*` methods.
- `TagTable` finds tags and stores positions. Opening the tag's file in a
  buffer is left to the caller, for example with `Buffer.set_text()`
  followed by `search_pattern()`.

## Running the tests

```
pip install -e .[test]
pytest
```