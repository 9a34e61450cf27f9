"""Placement and content of the autocomplete popup."""

from __future__ import annotations

from dataclasses import dataclass

from . import theme
from .autocomplete import AutocompleteState, SuggestionItem, SuggestionKind
from .theme import Color, Style

DEFAULT_MAX_HEIGHT = 10
DEFAULT_MAX_WIDTH = 50
EMPTY_SUGGESTION_WIDTH = 20
POPUP_TITLE = " Autocomplete "
HIGHLIGHT_SYMBOL = "▶ "
HELP_TEXT = "↑↓: Navigate • Enter/Tab: Accept • Esc: Cancel"

_ICONS = {
    SuggestionKind.TABLE: "📋 ",
    SuggestionKind.COLUMN: "📊 ",
    SuggestionKind.KEYWORD: "🔧 ",
}

_KIND_COLORS = {
    SuggestionKind.TABLE: theme.ACCENT_BLUE,
    SuggestionKind.COLUMN: theme.ACCENT_GREEN,
    SuggestionKind.KEYWORD: theme.ACCENT_PURPLE,
}


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells."""

    x: int
    y: int
    width: int
    height: int

    def bottom(self) -> int:
        return self.y + self.height

    def right(self) -> int:
        return self.x + self.width

    def inner(self) -> "Rect":
        """The area left inside a one-cell border on every side."""
        return Rect(
            min(self.x + 1, self.right()),
            min(self.y + 1, self.bottom()),
            max(self.width - 2, 0),
            max(self.height - 2, 0),
        )


@dataclass(frozen=True)
class Span:
    """A piece of text drawn with a single style."""

    text: str
    style: Style = Style()


def format_suggestion(suggestion: SuggestionItem) -> str:
    """The plain text shown for a suggestion, icon included."""
    icon = _ICONS[suggestion.kind]
    if suggestion.kind is SuggestionKind.COLUMN and suggestion.table_context is not None:
        return f"{icon}{suggestion.table_context}.{suggestion.text}"
    return f"{icon}{suggestion.text}"


def kind_color(kind: SuggestionKind) -> Color:
    """The colour of the icon for a kind of suggestion."""
    return _KIND_COLORS[kind]


@dataclass
class AutocompletePopup:
    """A popup listing the suggestions of an autocomplete state."""

    state: AutocompleteState
    max_height: int = DEFAULT_MAX_HEIGHT
    max_width: int = DEFAULT_MAX_WIDTH

    def calculate_popup_area(self, parent_area: Rect, cursor_pos: tuple[int, int]) -> Rect:
        """Place the popup below the cursor, or above it when there is no room."""
        cursor_x, cursor_y = cursor_pos
        popup_height = min(self.max_height + 2, len(self.state.suggestions) + 2)
        popup_width = min(self.max_width, self._max_suggestion_width() + 4)

        if cursor_y + popup_height < parent_area.bottom():
            popup_y = cursor_y + 1
        elif cursor_y >= popup_height:
            popup_y = cursor_y - popup_height
        else:
            popup_y = max(parent_area.bottom() - popup_height, 0)

        if cursor_x + popup_width <= parent_area.right():
            popup_x = cursor_x
        else:
            popup_x = max(parent_area.right() - popup_width, 0)

        return Rect(
            max(popup_x, parent_area.x),
            max(popup_y, parent_area.y),
            min(popup_width, parent_area.width),
            min(popup_height, parent_area.height),
        )

    def render(self, area: Rect) -> list[list[Span]]:
        """Return the styled lines drawn inside the popup's border.

        Nothing is drawn while the state is inactive or has no suggestions.
        """
        suggestions = self.state.suggestions
        if not self.state.is_active or not suggestions:
            return []
        visible = area.inner().height
        if visible <= 0:
            return []
        selected = min(self.state.selected_index, len(suggestions) - 1)
        offset = max(selected - visible + 1, 0)
        lines = [
            self._line(suggestion, index == selected)
            for index, suggestion in enumerate(suggestions[offset:offset + visible], start=offset)
        ]
        if visible > len(suggestions) + 1:
            lines.append([Span(HELP_TEXT, Style().fg(theme.FG_SECONDARY))])
        return lines

    def _max_suggestion_width(self) -> int:
        widest = max(
            (len(format_suggestion(s).encode("utf-8")) for s in self.state.suggestions),
            default=EMPTY_SUGGESTION_WIDTH,
        )
        return min(widest, max(self.max_width - 4, 0))

    @staticmethod
    def _line(suggestion: SuggestionItem, is_selected: bool) -> list[Span]:
        text_style = theme.selection_active() if is_selected else Style().fg(theme.FG_PRIMARY)
        prefix = Span(
            HIGHLIGHT_SYMBOL if is_selected else " " * len(HIGHLIGHT_SYMBOL),
            theme.selection_active() if is_selected else Style(),
        )
        spans = [prefix, Span(_ICONS[suggestion.kind], Style().fg(kind_color(suggestion.kind)))]
        if suggestion.kind is SuggestionKind.COLUMN and suggestion.table_context is not None:
            secondary = Style().fg(theme.FG_SECONDARY)
            spans += [Span(suggestion.table_context, secondary), Span(".", secondary)]
        spans.append(Span(suggestion.text, text_style))
        return spans