"""Context detection and fuzzy suggestions for SQL autocompletion."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

MAX_SUGGESTIONS = 20
EMPTY_PATTERN_SCORE = 100

SQL_KEYWORDS = (
    "SELECT", "FROM", "WHERE", "INSERT", "UPDATE", "DELETE", "CREATE", "DROP",
    "ALTER", "TABLE", "INDEX", "VIEW", "JOIN", "INNER", "LEFT", "RIGHT", "OUTER",
    "ON", "GROUP", "BY", "ORDER", "HAVING", "LIMIT", "OFFSET", "UNION", "DISTINCT",
    "COUNT", "SUM", "AVG", "MAX", "MIN",
)


@dataclass(frozen=True)
class DbTable:
    name: str


@dataclass(frozen=True)
class DbColumn:
    name: str
    data_type: str = ""
    is_nullable: bool = True


class SuggestionKind(enum.Enum):
    TABLE = "table"
    COLUMN = "column"
    KEYWORD = "keyword"


@dataclass(frozen=True)
class SuggestionItem:
    text: str
    kind: SuggestionKind
    score: int = 0
    table_context: Optional[str] = None

    def with_score(self, score: int) -> "SuggestionItem":
        return replace(self, score=score)


def table_suggestion(name: str) -> SuggestionItem:
    return SuggestionItem(name, SuggestionKind.TABLE)


def column_suggestion(name: str, table: str) -> SuggestionItem:
    return SuggestionItem(name, SuggestionKind.COLUMN, table_context=table)


def keyword_suggestion(keyword: str) -> SuggestionItem:
    return SuggestionItem(keyword, SuggestionKind.KEYWORD)


@dataclass
class AutocompleteState:
    """Suggestions on display and which one is selected."""

    suggestions: list[SuggestionItem] = field(default_factory=list)
    selected_index: int = 0
    is_active: bool = False
    trigger_position: int = 0
    current_word: str = ""

    def activate(self, position: int, word: str) -> None:
        self.is_active = True
        self.trigger_position = position
        self.current_word = word
        self.selected_index = 0

    def deactivate(self) -> None:
        self.is_active = False
        self.suggestions.clear()
        self.selected_index = 0
        self.current_word = ""

    def select_next(self) -> None:
        if self.suggestions:
            self.selected_index = (self.selected_index + 1) % len(self.suggestions)

    def select_previous(self) -> None:
        if self.suggestions:
            self.selected_index = (self.selected_index - 1) % len(self.suggestions)

    def selected_suggestion(self) -> Optional[SuggestionItem]:
        if 0 <= self.selected_index < len(self.suggestions):
            return self.suggestions[self.selected_index]
        return None

    def update_suggestions(self, suggestions: Iterable[SuggestionItem]) -> None:
        self.suggestions = list(suggestions)
        self.selected_index = 0


class SqlContextKind(enum.Enum):
    NONE = "None"
    TABLE_NAME = "TableName"
    COLUMN_NAME = "ColumnName"
    AFTER_SELECT = "AfterSelect"
    AFTER_FROM = "AfterFrom"
    AFTER_WHERE = "AfterWhere"


@dataclass(frozen=True)
class SqlContext:
    """What may be typed at the cursor; ``table`` only matters for column names."""

    kind: SqlContextKind
    table: Optional[str] = None


_LAST_TOKEN_CONTEXTS = {
    "SELECT": SqlContextKind.AFTER_SELECT,
    "FROM": SqlContextKind.AFTER_FROM,
    "WHERE": SqlContextKind.AFTER_WHERE,
}


def _current_word(text: str) -> str:
    if text != text.rstrip():
        return ""
    words = text.split()
    return words[-1] if words else ""


def _complex_context(tokens: list[str]) -> Optional[SqlContext]:
    for i, token in enumerate(tokens):
        if token == "FROM":
            return SqlContext(SqlContextKind.TABLE_NAME)
        if token == "SELECT":
            if i == len(tokens) - 1:
                return SqlContext(SqlContextKind.AFTER_SELECT)
            if "FROM" not in tokens[i:]:
                return SqlContext(SqlContextKind.COLUMN_NAME)
    return None


def analyze_context(sql: str, cursor_pos: int) -> tuple[SqlContext, str]:
    """Return the context at ``cursor_pos`` and the word being typed there."""
    before = sql[:cursor_pos] if cursor_pos <= len(sql) else sql
    word = _current_word(before)
    tokens = before.upper().split()
    if not tokens:
        return SqlContext(SqlContextKind.NONE), word
    last = _LAST_TOKEN_CONTEXTS.get(tokens[-1])
    if last is not None:
        return SqlContext(last), word
    return _complex_context(tokens) or SqlContext(SqlContextKind.NONE), word


_SCORE_MATCH = 16
_BONUS_BOUNDARY = 8
_BONUS_CAMEL = 7
_BONUS_CONSECUTIVE = 4
_FIRST_CHAR_MULTIPLIER = 2
_GAP_START = 3
_GAP_EXTENSION = 1


def _boundary_bonus(text: str, pos: int) -> int:
    if pos == 0 or not text[pos - 1].isalnum():
        return _BONUS_BOUNDARY
    if text[pos - 1].islower() and text[pos].isupper():
        return _BONUS_CAMEL
    return 0


def _score_positions(text: str, positions: list[int]) -> int:
    score = 0
    previous = None
    for pos in positions:
        bonus = _boundary_bonus(text, pos)
        if previous is None:
            score += _SCORE_MATCH + bonus * _FIRST_CHAR_MULTIPLIER
        else:
            score += _SCORE_MATCH + bonus
            gap = pos - previous - 1
            if gap == 0:
                score += _BONUS_CONSECUTIVE
            else:
                score -= _GAP_START + (gap - 1) * _GAP_EXTENSION
        previous = pos
    return max(score, 0)


def fuzzy_score(pattern: str, text: str) -> Optional[int]:
    """Score ``text`` against ``pattern`` as a case-insensitive subsequence.

    Returns None when the pattern does not match; an empty pattern matches
    everything with a fixed high score.
    """
    if not pattern:
        return EMPTY_PATTERN_SCORE
    needle = pattern.lower()
    haystack = text.lower()
    if len(needle) != len(pattern) or len(haystack) != len(text):
        needle, haystack = pattern, text
    best: Optional[int] = None
    for start, char in enumerate(haystack):
        if char != needle[0]:
            continue
        positions = [start]
        cursor = start + 1
        for wanted in needle[1:]:
            found = haystack.find(wanted, cursor)
            if found < 0:
                break
            positions.append(found)
            cursor = found + 1
        else:
            score = _score_positions(text, positions)
            if best is None or score > best:
                best = score
            continue
        break
    return best


class AutocompleteProvider:
    """Suggests tables, columns and keywords from the known schema."""

    def __init__(self) -> None:
        self.tables: list[DbTable] = []
        self.table_columns: dict[str, list[DbColumn]] = {}
        self.keywords: tuple[str, ...] = SQL_KEYWORDS

    def update_tables(self, tables: Iterable[DbTable]) -> None:
        self.tables = list(tables)

    def update_table_columns(self, table_name: str, columns: Iterable[DbColumn]) -> None:
        self.table_columns[table_name] = list(columns)

    def get_suggestions(self, context: SqlContext, text: str) -> list[SuggestionItem]:
        """Return up to twenty suggestions, best score first."""
        kind = context.kind
        if kind in (SqlContextKind.TABLE_NAME, SqlContextKind.AFTER_FROM):
            found = list(self._tables(text))
        elif kind is SqlContextKind.COLUMN_NAME:
            found = list(self._columns(text, context.table))
        elif kind in (SqlContextKind.AFTER_SELECT, SqlContextKind.AFTER_WHERE):
            found = [*self._columns(text, None), *self._keywords(text)]
        else:
            found = list(self._keywords(text))
        found.sort(key=lambda item: item.score, reverse=True)
        return found[:MAX_SUGGESTIONS]

    def _tables(self, text: str) -> Iterable[SuggestionItem]:
        for table in self.tables:
            score = fuzzy_score(text, table.name)
            if score is not None:
                yield table_suggestion(table.name).with_score(score)

    def _columns(self, text: str, table: Optional[str]) -> Iterable[SuggestionItem]:
        if table is not None:
            sources = [(table, self.table_columns.get(table, []))]
        else:
            sources = list(self.table_columns.items())
        for table_name, columns in sources:
            for column in columns:
                score = fuzzy_score(text, column.name)
                if score is not None:
                    yield column_suggestion(column.name, table_name).with_score(score)

    def _keywords(self, text: str) -> Iterable[SuggestionItem]:
        for keyword in self.keywords:
            score = fuzzy_score(text, keyword)
            if score is not None:
                yield keyword_suggestion(keyword).with_score(score)