# querycrafter

Pieces of a terminal front-end for SQL databases. Each module can be used on its own:

- `querycrafter.theme`: the colour palette and named styles. It provides `Color`, `Modifier`
  and an immutable `Style` with `fg`, `bg` and `add_modifier`, plus helpers such as
  `selection_active()`, `input_style()` and `sql_keyword()`.
- `querycrafter.action`: the `Action` messages passed between components (`ActionKind`,
  `ComponentKind`). `action_to_json` and `action_from_json` serialise them. Variants without
  data become a bare JSON string. Variants with data become a single-key object.
- `querycrafter.autocomplete`: SQL context detection (`analyze_context`), fuzzy
  subsequence scoring (`fuzzy_score`), the `AutocompleteState` selection model, and an
  `AutocompleteProvider` that suggests tables, columns and keywords. It returns at most
  20 suggestions, best score first.
- `querycrafter.autocomplete_widget`: popup placement (`AutocompletePopup.calculate_popup_area`)
  and the styled lines of the popup (`AutocompletePopup.render`, returning lists of `Span`).
- `querycrafter.vim_editor`: a small modal editor (`CustomVimEditor`) with these modes:
  - normal, insert and visual modes;
  - `h`/`j`/`k`/`l` movement;
  - `x` to delete;
  - `q` or Ctrl-C to quit, which returns an `Action`;
  - `gc` or visual `c` to toggle comments (`//`, `#` or `--`).
- `querycrafter.lsp_wrapper`: the `sql-lsp-wrapper` command. It finds and starts
  `sql-language-server` and relays its LSP traffic over standard input and output.

## Installation

```
pip install .
```

## Autocomplete

```python
from querycrafter.autocomplete import AutocompleteProvider, DbTable, analyze_context

provider = AutocompleteProvider()
provider.update_tables([DbTable(name="users"), DbTable(name="posts")])

sql = "SELECT name FROM us"
context, word = analyze_context(sql, len(sql))   # table-name context, word "us"
for item in provider.get_suggestions(context, word):
    print(item.kind, item.text, item.score)
```

## Editor

```python
from querycrafter.vim_editor import CustomVimEditor, Key

editor = CustomVimEditor()
editor.set_text("select 1")
editor.on_key_event(Key("g"))
editor.on_key_event(Key("c"))
print(editor.get_text())  # "//select 1"
```

`render_lines()` returns one `Span` per character. The selection and the cursor are drawn
with the `REVERSED` modifier. `title()` names the current mode.

## Language-server launcher

```
sql-lsp-wrapper
```

The command tries these, in order:

1. The command named by `SQL_LANGUAGE_SERVER_PATH`, which defaults to `sql-language-server`.
2. `node_modules/.bin/sql-language-server` in the current directory and its parents, up to
   five directories in all.
3. `npx sql-language-server`.

Each is started with `up --method stdio --debug false`. If `.sqllsrc.json` exists in the
current directory, the server uses it. Otherwise `--no-personal-config` is added.

The command exits with status 1 in two cases:

- none of the candidates can be started;
- the server exits straight away.

Diagnostics go to standard error. These include the header and a preview of each message.

## What this package does not do

It does not connect to a database or run queries. It does not store query history. It has
no full-screen terminal application. The widget and editor modules compute layout and
styled text, but they do not draw to a terminal themselves.

## Tests

```
pip install .[test]
pytest
```