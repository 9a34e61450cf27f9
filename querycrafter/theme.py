"""Colour palette and pre-built styles for the terminal interface."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Color:
    """A 24-bit RGB colour."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


class Modifier(enum.Flag):
    """Text attributes that can be combined on a style."""

    NONE = 0
    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    REVERSED = enum.auto()
    CROSSED_OUT = enum.auto()


@dataclass(frozen=True)
class Style:
    """An immutable text style; the builder methods return new styles."""

    foreground: Optional[Color] = None
    background: Optional[Color] = None
    modifiers: Modifier = Modifier.NONE

    def fg(self, color: Color) -> "Style":
        return replace(self, foreground=color)

    def bg(self, color: Color) -> "Style":
        return replace(self, background=color)

    def add_modifier(self, modifier: Modifier) -> "Style":
        return replace(self, modifiers=self.modifiers | modifier)


ACCENT_BLUE = Color(97, 175, 239)
ACCENT_CYAN = Color(86, 182, 194)
ACCENT_GREEN = Color(152, 195, 121)
ACCENT_ORANGE = Color(209, 154, 102)
ACCENT_PURPLE = Color(198, 120, 221)
ACCENT_RED = Color(224, 108, 117)
BG_CURSOR = Color(82, 89, 102)
BG_PRIMARY = Color(40, 44, 52)
BG_SECONDARY = Color(33, 37, 43)
BG_SELECTION = Color(62, 68, 81)
BG_TERTIARY = Color(44, 49, 58)
BORDER_FOCUSED = Color(97, 175, 239)
BORDER_MUTED = Color(62, 68, 81)
BORDER_NORMAL = Color(92, 99, 112)
ERROR = Color(224, 108, 117)
FG_PRIMARY = Color(171, 178, 191)
FG_SECONDARY = Color(92, 99, 112)
FG_TERTIARY = Color(139, 148, 158)
INFO = Color(97, 175, 239)
SUCCESS = Color(152, 195, 121)
WARNING = Color(229, 192, 123)

_BOLD = Modifier.BOLD
_BOLD_UNDERLINED = Modifier.BOLD | Modifier.UNDERLINED

STYLE_BG_PRIMARY = Style().bg(BG_PRIMARY).fg(FG_PRIMARY)
STYLE_BG_SECONDARY = Style().bg(BG_SECONDARY).fg(FG_PRIMARY)
STYLE_INPUT = Style().bg(BG_TERTIARY).fg(FG_PRIMARY)
STYLE_BORDER_NORMAL = Style().fg(BORDER_NORMAL)
STYLE_BORDER_FOCUSED = Style().fg(BORDER_FOCUSED)
STYLE_MUTED = Style().fg(FG_SECONDARY)
STYLE_LINE_NUMBERS = Style().fg(FG_TERTIARY)
STYLE_TAB_NORMAL = Style().fg(FG_SECONDARY)
STYLE_STATUS_BAR = Style().bg(BG_SECONDARY).fg(FG_PRIMARY)
STYLE_INFO = Style().fg(INFO)

STYLE_SELECTION = Style().bg(BG_SELECTION).fg(FG_PRIMARY).add_modifier(_BOLD)
STYLE_SELECTION_ACTIVE = Style().bg(ACCENT_BLUE).fg(BG_PRIMARY).add_modifier(_BOLD)
STYLE_HEADER = Style().bg(BG_SELECTION).fg(ACCENT_CYAN).add_modifier(_BOLD_UNDERLINED)
STYLE_TITLE = Style().fg(ACCENT_BLUE).add_modifier(_BOLD)
STYLE_SUCCESS = Style().fg(SUCCESS).add_modifier(_BOLD)
STYLE_WARNING = Style().fg(WARNING).add_modifier(_BOLD)
STYLE_ERROR = Style().fg(ERROR).add_modifier(_BOLD)
STYLE_TAB_SELECTED = Style().fg(ACCENT_BLUE).add_modifier(_BOLD_UNDERLINED)

STYLE_CURSOR_NORMAL = Style().bg(ACCENT_ORANGE).fg(BG_PRIMARY).add_modifier(_BOLD)
STYLE_CURSOR_INSERT = Style().bg(ACCENT_GREEN).fg(BG_PRIMARY).add_modifier(_BOLD)
STYLE_CURSOR_VISUAL = Style().bg(ACCENT_PURPLE).fg(BG_PRIMARY).add_modifier(_BOLD)

STYLE_SQL_KEYWORD = Style().fg(ACCENT_PURPLE).add_modifier(_BOLD)
STYLE_SQL_FUNCTION = Style().fg(ACCENT_BLUE)
STYLE_SQL_STRING = Style().fg(ACCENT_GREEN)
STYLE_SQL_NUMBER = Style().fg(ACCENT_ORANGE)
STYLE_SQL_COMMENT = Style().fg(FG_SECONDARY)
STYLE_SQL_OPERATOR = Style().fg(ACCENT_CYAN)


def bg_primary() -> Style:
    return STYLE_BG_PRIMARY


def bg_secondary() -> Style:
    return STYLE_BG_SECONDARY


def input_style() -> Style:
    return STYLE_INPUT


def selection() -> Style:
    return STYLE_SELECTION


def selection_active() -> Style:
    return STYLE_SELECTION_ACTIVE


def border_normal() -> Style:
    return STYLE_BORDER_NORMAL


def border_focused() -> Style:
    return STYLE_BORDER_FOCUSED


def header() -> Style:
    return STYLE_HEADER


def title() -> Style:
    return STYLE_TITLE


def success() -> Style:
    return STYLE_SUCCESS


def warning() -> Style:
    return STYLE_WARNING


def error() -> Style:
    return STYLE_ERROR


def info() -> Style:
    return STYLE_INFO


def muted() -> Style:
    return STYLE_MUTED


def line_numbers() -> Style:
    return STYLE_LINE_NUMBERS


def tab_normal() -> Style:
    return STYLE_TAB_NORMAL


def tab_selected() -> Style:
    return STYLE_TAB_SELECTED


def status_bar() -> Style:
    return STYLE_STATUS_BAR


def cursor_normal() -> Style:
    return STYLE_CURSOR_NORMAL


def cursor_insert() -> Style:
    return STYLE_CURSOR_INSERT


def cursor_visual() -> Style:
    return STYLE_CURSOR_VISUAL


def sql_keyword() -> Style:
    return STYLE_SQL_KEYWORD


def sql_function() -> Style:
    return STYLE_SQL_FUNCTION


def sql_string() -> Style:
    return STYLE_SQL_STRING


def sql_number() -> Style:
    return STYLE_SQL_NUMBER


def sql_comment() -> Style:
    return STYLE_SQL_COMMENT


def sql_operator() -> Style:
    return STYLE_SQL_OPERATOR