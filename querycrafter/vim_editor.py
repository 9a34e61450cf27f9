"""A small modal text editor with vim-style keys and comment toggling."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from itertools import accumulate
from typing import ClassVar, Optional

from .action import Action, ActionKind
from .autocomplete_widget import Span
from .theme import Modifier, Style

_LINE_BREAK = re.compile("\r\n|[\n\v\f\r\x85\u2028\u2029]")


class ModeKind(enum.Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    VISUAL = "VISUAL"
    OPERATOR = "OPERATOR"


@dataclass(frozen=True)
class Mode:
    """An editing mode; operator-pending modes remember their operator key."""

    kind: ModeKind
    operator: Optional[str] = None

    def __str__(self) -> str:
        if self.kind is ModeKind.OPERATOR:
            return f"{self.kind.value}({self.operator})"
        return self.kind.value


NORMAL = Mode(ModeKind.NORMAL)
INSERT = Mode(ModeKind.INSERT)
VISUAL = Mode(ModeKind.VISUAL)


@dataclass(frozen=True)
class Key:
    """A key press: a single character or one of the named keys."""

    code: str
    ctrl: bool = False

    ESC: ClassVar[str] = "Esc"
    ENTER: ClassVar[str] = "Enter"
    BACKSPACE: ClassVar[str] = "Backspace"
    TAB: ClassVar[str] = "Tab"

    @property
    def char(self) -> Optional[str]:
        return self.code if len(self.code) == 1 else None


def comment_style(line: str) -> str:
    """The comment marker a line already uses, defaulting to ``//``."""
    stripped = line.lstrip()
    for marker in ("//", "#", "--"):
        if stripped.startswith(marker):
            return marker
    return "//"


def _split_lines(text: str) -> list[str]:
    lines = []
    start = 0
    for match in _LINE_BREAK.finditer(text):
        lines.append(text[start:match.end()])
        start = match.end()
    lines.append(text[start:])
    return lines


_MOVES = {"h": (0, -1), "j": (1, 0), "k": (-1, 0), "l": (0, 1)}


class CustomVimEditor:
    """Editor holding its text with a cursor, a mode and an optional selection."""

    def __init__(self) -> None:
        self.mode = NORMAL
        self._content = ""
        self._row = 0
        self._col = 0
        self._selection: Optional[tuple[int, int]] = None

    def on_key_event(self, key: Key) -> Optional[Action]:
        """Handle a key; returns an action for the application, if any."""
        kind = self.mode.kind
        if kind is ModeKind.NORMAL:
            return self._normal_key(key)
        if kind is ModeKind.INSERT:
            self._insert_key(key)
        elif kind is ModeKind.VISUAL:
            self._visual_key(key)
        elif kind is ModeKind.OPERATOR and self.mode.operator == "g":
            if key.char == "c":
                self._toggle_comment()
            self.mode = NORMAL
        return None

    def get_text(self) -> str:
        return self._content

    def get_selected_text(self) -> Optional[str]:
        if self._selection is None:
            return None
        start, end = self._selection
        return self._content[start:end]

    def set_text(self, text: str) -> None:
        self._content = text
        self._row = 0
        self._col = 0
        self._selection = None

    def cursor_position(self) -> tuple[int, int]:
        """The cursor as (row, column)."""
        return self._row, self._col

    def render_lines(self) -> list[list[Span]]:
        """One span per character, reversed where selected or under the cursor."""
        lines = _split_lines(self._content)
        starts = [0, *accumulate(len(line) for line in lines)]
        reversed_style = Style().add_modifier(Modifier.REVERSED)
        rendered = []
        for i, line in enumerate(lines):
            spans = []
            for j, char in enumerate(line):
                index = starts[i] + j
                selected = self._selection is not None and self._selection[0] <= index < self._selection[1]
                under_cursor = (self._row, self._col) == (i, j)
                spans.append(Span(char, reversed_style if selected or under_cursor else Style()))
            rendered.append(spans)
        return rendered

    def title(self) -> str:
        return f"Custom Vim Editor - {self.mode}"

    def _normal_key(self, key: Key) -> Optional[Action]:
        char = key.char
        if char in _MOVES:
            self._move_cursor(*_MOVES[char])
        elif char == "i":
            self.mode = INSERT
        elif char == "v":
            self._start_selection()
            self.mode = VISUAL
        elif char == "x":
            self._delete_forwards()
        elif char == "q" or (char == "c" and key.ctrl):
            return Action(ActionKind.QUIT)
        elif char == "g":
            self.mode = Mode(ModeKind.OPERATOR, "g")
        return None

    def _insert_key(self, key: Key) -> None:
        if key.code == Key.ESC:
            self.mode = NORMAL
        elif key.code == Key.BACKSPACE:
            self._delete_backwards()
        elif key.code == Key.ENTER:
            self._insert_newline()
        elif key.char is not None:
            self._insert_char(key.char)

    def _visual_key(self, key: Key) -> None:
        self._update_selection()
        char = key.char
        if key.code == Key.ESC:
            self._selection = None
            self.mode = NORMAL
        elif char in _MOVES:
            self._move_cursor(*_MOVES[char])
        elif char == "c":
            self._toggle_comment()
            self.mode = NORMAL

    def _line_to_char(self, row: int) -> int:
        return sum(len(line) for line in _split_lines(self._content)[:row])

    def _char_to_line(self, index: int) -> int:
        lines = _split_lines(self._content)
        start = 0
        for row, line in enumerate(lines):
            start += len(line)
            if index < start:
                return row
        return len(lines) - 1

    def _cursor_index(self) -> int:
        return self._line_to_char(self._row) + self._col

    def _move_cursor(self, row_offset: int, col_offset: int) -> None:
        lines = _split_lines(self._content)
        row = min(max(self._row + row_offset, 0), len(lines) - 1)
        col = min(max(self._col + col_offset, 0), len(lines[row]))
        self._row, self._col = row, col

    def _insert_char(self, char: str) -> None:
        index = self._cursor_index()
        self._content = self._content[:index] + char + self._content[index:]
        self._move_cursor(0, 1)

    def _insert_newline(self) -> None:
        index = self._cursor_index()
        self._content = self._content[:index] + "\n" + self._content[index:]
        self._row += 1
        self._col = 0

    def _delete_backwards(self) -> None:
        if self._col == 0 and self._row == 0:
            return
        index = self._cursor_index()
        self._content = self._content[:index - 1] + self._content[index:]
        if self._col > 0:
            self._move_cursor(0, -1)
        else:
            previous_len = len(_split_lines(self._content)[self._row - 1])
            self._move_cursor(-1, previous_len)

    def _delete_forwards(self) -> None:
        index = self._cursor_index()
        if index < len(self._content):
            self._content = self._content[:index] + self._content[index + 1:]

    def _toggle_comment(self) -> None:
        if self._selection is not None:
            start_line = self._char_to_line(self._selection[0])
            end_line = self._char_to_line(self._selection[1])
        else:
            start_line = end_line = self._row
        for row in range(start_line, end_line + 1):
            line = _split_lines(self._content)[row]
            stripped = line.lstrip()
            marker = comment_style(line)
            position = self._line_to_char(row) + len(line) - len(stripped)
            if stripped.startswith(marker):
                self._content = self._content[:position] + self._content[position + len(marker):]
            else:
                self._content = self._content[:position] + marker + self._content[position:]
        self._selection = None

    def _start_selection(self) -> None:
        index = self._cursor_index()
        self._selection = (index, index)

    def _update_selection(self) -> None:
        if self._selection is None:
            return
        anchor = self._selection[0]
        current = self._cursor_index()
        self._selection = (current, anchor) if current < anchor else (anchor, current)