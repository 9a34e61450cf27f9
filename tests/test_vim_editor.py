import pytest

from querycrafter.action import ActionKind
from querycrafter.theme import Modifier
from querycrafter.vim_editor import (
    INSERT,
    NORMAL,
    VISUAL,
    CustomVimEditor,
    Key,
    Mode,
    ModeKind,
    comment_style,
)


def _type(editor: CustomVimEditor, *codes: str) -> list:
    return [editor.on_key_event(Key(code)) for code in codes]


def test_new_editor_is_empty_and_normal():
    editor = CustomVimEditor()
    assert editor.get_text() == ""
    assert editor.mode == NORMAL
    assert editor.cursor_position() == (0, 0)


def test_set_text_round_trip():
    editor = CustomVimEditor()
    editor.set_text("SELECT * FROM users;")
    assert editor.get_text() == "SELECT * FROM users;"
    editor.set_text("")
    assert editor.get_text() == ""


def test_insert_mode_typing():
    editor = CustomVimEditor()
    _type(editor, "i", "S", "E", "L")
    assert editor.mode == INSERT
    assert editor.get_text() == "SEL"
    assert editor.cursor_position() == (0, len("SEL"))
    _type(editor, Key.ESC)
    assert editor.mode == NORMAL


def test_enter_splits_line():
    editor = CustomVimEditor()
    _type(editor, "i", "a", "b", Key.ENTER, "c")
    assert editor.get_text() == "ab\nc"
    assert editor.cursor_position() == (1, 1)


def test_backspace_removes_previous_char():
    editor = CustomVimEditor()
    _type(editor, "i", "a", "b", "c", Key.BACKSPACE)
    assert editor.get_text() == "ab"


def test_backspace_at_line_start_joins_lines():
    editor = CustomVimEditor()
    editor.set_text("ab\ncd")
    _type(editor, "j", "i", Key.BACKSPACE)
    assert editor.get_text() == "abcd"
    assert editor.cursor_position()[0] == 0


def test_backspace_at_start_of_text_does_nothing():
    editor = CustomVimEditor()
    editor.set_text("ab")
    _type(editor, "i", Key.BACKSPACE)
    assert editor.get_text() == "ab"


def test_x_deletes_under_cursor():
    editor = CustomVimEditor()
    editor.set_text("abc")
    _type(editor, "x")
    assert editor.get_text() == "bc"


def test_quit_keys():
    editor = CustomVimEditor()
    assert editor.on_key_event(Key("q")).kind is ActionKind.QUIT
    assert editor.on_key_event(Key("c", ctrl=True)).kind is ActionKind.QUIT
    assert editor.on_key_event(Key("c")) is None


def test_movement_is_clamped():
    editor = CustomVimEditor()
    editor.set_text("ab")
    _type(editor, "k", "h")
    assert editor.cursor_position() == (0, 0)
    _type(editor, "j", "j")
    assert editor.cursor_position()[0] == 0


def test_gc_toggles_comment_round_trip():
    editor = CustomVimEditor()
    editor.set_text("SELECT 1")
    _type(editor, "g")
    assert editor.mode == Mode(ModeKind.OPERATOR, "g")
    _type(editor, "c")
    assert editor.get_text() == "//SELECT 1"
    assert editor.mode == NORMAL
    _type(editor, "g", "c")
    assert editor.get_text() == "SELECT 1"


def test_gc_removes_existing_sql_comment_marker():
    editor = CustomVimEditor()
    editor.set_text("  --x")
    _type(editor, "g", "c")
    assert editor.get_text() == "  x"


def test_g_followed_by_other_key_returns_to_normal():
    editor = CustomVimEditor()
    editor.set_text("abc")
    _type(editor, "g", "z")
    assert editor.mode == NORMAL
    assert editor.get_text() == "abc"


@pytest.mark.parametrize(
    "line, marker",
    [("# note", "#"), ("  -- note", "--"), ("// note", "//"), ("SELECT", "//")],
)
def test_comment_style(line, marker):
    assert comment_style(line) == marker


def test_visual_selection_and_escape():
    editor = CustomVimEditor()
    editor.set_text("hello")
    _type(editor, "v")
    assert editor.mode == VISUAL
    assert editor.get_selected_text() == ""
    _type(editor, "l", "l")
    assert editor.get_selected_text() == "h"
    _type(editor, Key.ESC)
    assert editor.get_selected_text() is None
    assert editor.mode == NORMAL


def test_visual_comment_covers_selected_lines():
    editor = CustomVimEditor()
    editor.set_text("a\nb")
    _type(editor, "v", "j", "j", "c")
    assert editor.get_text() == "//a\n//b"
    assert editor.get_selected_text() is None


def test_set_text_clears_selection_and_cursor():
    editor = CustomVimEditor()
    editor.set_text("abc")
    _type(editor, "v", "l", "l")
    editor.set_text("xyz")
    assert editor.get_selected_text() is None
    assert editor.cursor_position() == (0, 0)


def test_render_lines_marks_cursor():
    editor = CustomVimEditor()
    editor.set_text("ab\ncd")
    lines = editor.render_lines()
    assert "".join(span.text for line in lines for span in line) == "ab\ncd"
    assert Modifier.REVERSED in lines[0][0].style.modifiers
    assert Modifier.REVERSED not in lines[0][1].style.modifiers
    assert all(Modifier.REVERSED not in span.style.modifiers for span in lines[1])


def test_title_names_mode():
    editor = CustomVimEditor()
    assert editor.title() == f"Custom Vim Editor - {NORMAL}"
    _type(editor, "i")
    assert editor.title() == f"Custom Vim Editor - {INSERT}"