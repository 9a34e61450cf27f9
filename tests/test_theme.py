import pytest

from querycrafter import theme
from querycrafter.theme import Color, Modifier, Style


def test_builder_returns_new_style_and_keeps_original():
    base = Style()
    coloured = base.fg(theme.ACCENT_BLUE)
    assert base.foreground is None
    assert coloured.foreground == theme.ACCENT_BLUE
    assert coloured.background is None


def test_add_modifier_accumulates():
    style = Style().add_modifier(Modifier.BOLD).add_modifier(Modifier.UNDERLINED)
    assert Modifier.BOLD in style.modifiers
    assert Modifier.UNDERLINED in style.modifiers
    assert Modifier.REVERSED not in style.modifiers


def test_color_rejects_out_of_range_channel():
    with pytest.raises(ValueError):
        Color(256, 0, 0)
    with pytest.raises(ValueError):
        Color(0, -1, 0)


def test_hex_of_accent_blue():
    colour = Color(97, 175, 239)
    assert colour == theme.ACCENT_BLUE
    assert colour.hex == "#61afef"
    assert theme.sql_function().foreground.hex == "#61afef"


def test_selection_active_uses_accent_background():
    style = theme.selection_active()
    assert style.background == theme.ACCENT_BLUE
    assert style.foreground == theme.BG_PRIMARY
    assert Modifier.BOLD in style.modifiers


def test_header_is_bold_and_underlined():
    style = theme.header()
    assert style.modifiers == Modifier.BOLD | Modifier.UNDERLINED
    assert style.foreground == theme.ACCENT_CYAN
    assert style.background == theme.BG_SELECTION


def test_plain_styles_have_no_modifiers():
    for style in (
        theme.bg_primary(),
        theme.bg_secondary(),
        theme.input_style(),
        theme.border_normal(),
        theme.border_focused(),
        theme.muted(),
        theme.info(),
        theme.line_numbers(),
        theme.tab_normal(),
        theme.status_bar(),
        theme.sql_function(),
        theme.sql_string(),
        theme.sql_number(),
        theme.sql_comment(),
        theme.sql_operator(),
    ):
        assert style.modifiers == Modifier.NONE


def test_emphasised_styles_are_bold():
    for style in (
        theme.selection(),
        theme.title(),
        theme.success(),
        theme.warning(),
        theme.error(),
        theme.tab_selected(),
        theme.cursor_normal(),
        theme.cursor_insert(),
        theme.cursor_visual(),
        theme.sql_keyword(),
    ):
        assert Modifier.BOLD in style.modifiers


def test_cursor_styles_share_foreground_but_differ_in_background():
    cursors = [theme.cursor_normal(), theme.cursor_insert(), theme.cursor_visual()]
    assert {c.foreground for c in cursors} == {theme.BG_PRIMARY}
    assert [c.background for c in cursors] == [
        theme.ACCENT_ORANGE,
        theme.ACCENT_GREEN,
        theme.ACCENT_PURPLE,
    ]


def test_status_colours_match_palette():
    assert theme.error().foreground == theme.ERROR
    assert theme.success().foreground == theme.SUCCESS
    assert theme.warning().foreground == theme.WARNING
    assert theme.bg_secondary().background == theme.BG_SECONDARY
    assert theme.input_style().background == theme.BG_TERTIARY