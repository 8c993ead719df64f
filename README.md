# sib

`sib` is a terminal note finder built on curses. It reads every Markdown file
(`*.md`) under your notes directory, along with the file's YAML frontmatter.
As you type a query it ranks the notes. It opens the note you pick in your
editor.

## Installing

```
pip install .
```

For the test suite, install with the `test` extra and run `pytest`.

## Running

```
sib
```

The command accepts only `--help`.

At startup `sib` creates the following default locations if they are missing:

- the config directory, `sib` under your platform's user config directory;
- `config.toml` inside that directory, created empty;
- the default notes directory, `sib/notes` under your platform's user data directory;
- the default usage file, `usage.toml` in the config directory.

`sib` does not create paths that you set in `config.toml`.

The log goes to `app.log` in the current directory. The file is overwritten on
every run.

## Configuration

Every key in `config.toml` is optional. A missing key takes its default value.
A leading `~` in a path expands to your home directory.

```toml
base_notes_dir = "~/notes"
usage_file = "~/.config/sib/usage.toml"
editor = "nvim"          # default
glyph_mode = "unicode"   # default; or "nerd" for Nerd Font glyphs
```

If the file cannot be parsed, `sib` uses the defaults for every key. The same
happens if a value has the wrong type or `glyph_mode` is unknown.

## Notes

Notes are Markdown files. A note may start with a YAML frontmatter block
between `---` lines:

```markdown
---
tags: [rust, tui]
author: alice
difficulty: easy
---
# My note
```

`tags` must be a list of strings. Every other key is kept as free-form
metadata. `sib` still lists a note whose frontmatter is malformed or never
closed, but tag and metadata terms never match it.

## Queries

Separate the terms of a query with spaces. A double quote switches grouping on
or off, so spaces between quotes stay inside one term. The quotes themselves
are dropped.

| Query term        | Meaning                                                      |
|-------------------|--------------------------------------------------------------|
| `t:rust`          | the note must have a tag containing `rust`                   |
| `author:"john d"` | the note's `author` field must contain `john d`              |
| `tui`             | raises the score of notes whose path contains `tui`          |

Matching is case-sensitive.

Tag and metadata terms are hard filters. A term with an empty tag, key or
value (`t:`, `author:`, `:x`) is ignored.

Each matched tag or metadata term adds 100 to a note's score. Each text term
found in the path adds 50. A note you have opened before gets a further boost.
The boost decays with the time since you last opened the note, and it grows
with the number of times you have opened it.

Only notes with a score above zero are listed. With an empty query, this means
only notes you have opened before appear.

Open counts are kept in the usage file. They are written when `sib` exits,
and only if something was opened.

## Screen and keys

The screen has four panels:

- Input, the query;
- Notes, the ranked notes;
- Filters, the parsed query terms;
- Liveview.

The best match appears at the bottom of the Notes list and starts out
selected.

| Key       | Action                                                      |
|-----------|-------------------------------------------------------------|
| Esc       | quit                                                        |
| Tab       | move focus: Input → Notes → Filters → Input                 |
| Up / Down | move the selection                                          |
| Enter     | open the selected note in the editor                        |
| Backspace | delete the last query character (Input panel focused)       |

Typed characters go into the query only while the Input panel has focus.

## Using it as a library

- `sib.tokenizer.parse_query(text)` returns a list of `Tag`, `Meta` and `Text` tokens.
- `sib.parse.ParseService(base_dir).collect_notes()` reads every note below `base_dir` and returns `Note` objects.
- `sib.ranker.RankerService(usage_file)` scores notes with `score()` and ranks them with `compute_results()`, lowest score first. It records openings with `record_open()`. Use it as a context manager to save changed usage on exit.
- `sib.config.load_config()` returns the resolved `Config`.

## Limitations

The Liveview panel is a placeholder. It shows no preview of the selected
note. There is no way to create, rename or delete notes from within `sib`.