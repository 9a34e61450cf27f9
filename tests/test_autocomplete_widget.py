import pytest

from querycrafter import theme
from querycrafter.autocomplete import (
    AutocompleteState,
    SuggestionKind,
    column_suggestion,
    keyword_suggestion,
    table_suggestion,
)
from querycrafter.autocomplete_widget import (
    HELP_TEXT,
    HIGHLIGHT_SYMBOL,
    AutocompletePopup,
    Rect,
    format_suggestion,
    kind_color,
)


def _state(*names: str) -> AutocompleteState:
    state = AutocompleteState()
    state.suggestions = [table_suggestion(name) for name in names]
    state.is_active = True
    return state


def test_popup_area_calculation():
    popup = AutocompletePopup(_state("users", "posts"))
    area = popup.calculate_popup_area(Rect(0, 0, 80, 24), (10, 5))
    assert area.y == 6
    assert area.x == 10


def test_popup_area_above_cursor():
    popup = AutocompletePopup(_state("users", "posts"))
    area = popup.calculate_popup_area(Rect(0, 0, 80, 24), (10, 22))
    assert area.y < 22
    assert area.bottom() <= 22


def test_popup_stays_inside_parent_on_the_right():
    popup = AutocompletePopup(_state("users", "posts"))
    parent = Rect(0, 0, 80, 24)
    area = popup.calculate_popup_area(parent, (78, 5))
    assert area.right() <= parent.right()
    assert area.x < 78


def test_popup_width_respects_max_width():
    popup = AutocompletePopup(_state("a_very_long_table_name_indeed_" * 3), max_width=30)
    area = popup.calculate_popup_area(Rect(0, 0, 200, 50), (0, 0))
    assert area.width <= 30


def test_popup_height_limited_by_max_height():
    popup = AutocompletePopup(_state(*[f"t{i}" for i in range(30)]), max_height=5)
    area = popup.calculate_popup_area(Rect(0, 0, 80, 40), (0, 0))
    assert area.height == 5 + 2


def test_rect_edges():
    rect = Rect(2, 3, 10, 5)
    assert rect.right() == 2 + 10
    assert rect.bottom() == 3 + 5


def test_format_suggestion_variants():
    assert format_suggestion(table_suggestion("users")) == "📋 users"
    assert format_suggestion(column_suggestion("id", "users")) == "📊 users.id"
    assert format_suggestion(keyword_suggestion("SELECT")) == "🔧 SELECT"


def test_kind_colors():
    assert kind_color(SuggestionKind.TABLE) == theme.ACCENT_BLUE
    assert kind_color(SuggestionKind.COLUMN) == theme.ACCENT_GREEN
    assert kind_color(SuggestionKind.KEYWORD) == theme.ACCENT_PURPLE


def test_render_inactive_draws_nothing():
    state = _state("users")
    state.is_active = False
    assert AutocompletePopup(state).render(Rect(0, 0, 30, 10)) == []


def test_render_marks_selected_and_adds_help():
    state = _state("users", "posts")
    state.selected_index = 1
    lines = AutocompletePopup(state).render(Rect(0, 0, 40, 10))
    assert len(lines) == 3
    assert lines[1][0].text == HIGHLIGHT_SYMBOL
    assert lines[0][0].text != HIGHLIGHT_SYMBOL
    assert lines[1][-1].text == "posts"
    assert lines[1][-1].style == theme.selection_active()
    assert lines[2][0].text == HELP_TEXT


def test_render_without_room_for_help():
    lines = AutocompletePopup(_state("users", "posts")).render(Rect(0, 0, 40, 4))
    assert [line[-1].text for line in lines] == ["users", "posts"]


def test_render_column_shows_table():
    state = AutocompleteState()
    state.suggestions = [column_suggestion("id", "users")]
    state.is_active = True
    lines = AutocompletePopup(state).render(Rect(0, 0, 40, 10))
    assert "".join(span.text for span in lines[0][1:]) == format_suggestion(state.suggestions[0])


@pytest.mark.parametrize("selected", [0, 7, 19])
def test_render_scrolls_to_selected(selected):
    state = _state(*[f"t{i}" for i in range(20)])
    state.selected_index = selected
    lines = AutocompletePopup(state).render(Rect(0, 0, 40, 7))
    assert len(lines) == 5
    assert any(line[0].text == HIGHLIGHT_SYMBOL and line[-1].text == f"t{selected}" for line in lines)