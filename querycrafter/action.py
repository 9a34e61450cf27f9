"""Messages passed between the application's components."""

from __future__ import annotations

import enum
import json
from dataclasses import asdict, dataclass
from typing import Any

from .autocomplete import DbColumn, DbTable


class ComponentKind(enum.Enum):
    HOME = "Home"
    QUERY = "Query"
    RESULTS = "Results"


class ActionKind(enum.Enum):
    TICK = "Tick"
    RENDER = "Render"
    RESIZE = "Resize"
    SUSPEND = "Suspend"
    RESUME = "Resume"
    QUIT = "Quit"
    REFRESH = "Refresh"
    ERROR = "Error"
    HELP = "Help"
    TABLES_LOADED = "TablesLoaded"
    TABLE_MOVE_UP = "TableMoveUp"
    TABLE_MOVE_DOWN = "TableMoveDown"
    ROW_MOVE_UP = "RowMoveUp"
    ROW_MOVE_DOWN = "RowMoveDown"
    SCROLL_TABLE_LEFT = "ScrollTableLeft"
    SCROLL_TABLE_RIGHT = "ScrollTableRight"
    LOAD_SELECTED_TABLE = "LoadSelectedTable"
    LOAD_TABLES = "LoadTables"
    LOAD_TABLE = "LoadTable"
    VIEW_TABLE_COLUMNS = "ViewTableColumns"
    VIEW_TABLE_SCHEMA = "ViewTableSchema"
    TABLE_COLUMNS_LOADED = "TableColumnsLoaded"
    QUERY_RESULT = "QueryResult"
    QUERY_EXECUTION_TIME = "QueryExecutionTime"
    FOCUS_QUERY = "FocusQuery"
    FOCUS_RESULTS = "FocusResults"
    FOCUS_HOME = "FocusHome"
    SELECT_COMPONENT = "SelectComponent"
    EXECUTE_QUERY = "ExecuteQuery"
    HANDLE_QUERY = "HandleQuery"
    QUERY_STARTED = "QueryStarted"
    QUERY_COMPLETED = "QueryCompleted"
    ROW_DETAILS = "RowDetails"
    SWITCH_EDITOR = "SwitchEditor"
    CLEAR_QUERY = "ClearQuery"
    TRIGGER_AUTOCOMPLETE = "TriggerAutocomplete"
    UPDATE_AUTOCOMPLETE_DOCUMENT = "UpdateAutocompleteDocument"
    REQUEST_AUTOCOMPLETE = "RequestAutocomplete"
    AUTOCOMPLETE_RESULTS = "AutocompleteResults"
    SET_TUNNEL_MODE = "SetTunnelMode"
    EXPORT_RESULTS_TO_CSV = "ExportResultsToCsv"
    ROW_JUMP_TO_TOP = "RowJumpToTop"
    ROW_JUMP_TO_BOTTOM = "RowJumpToBottom"
    TABLE_JUMP_TO_TOP = "TableJumpToTop"
    TABLE_JUMP_TO_BOTTOM = "TableJumpToBottom"
    ROW_PAGE_UP = "RowPageUp"
    ROW_PAGE_DOWN = "RowPageDown"
    TABLE_PAGE_UP = "TablePageUp"
    TABLE_PAGE_DOWN = "TablePageDown"
    FORMAT_QUERY = "FormatQuery"
    FORMAT_SELECTION = "FormatSelection"
    TOGGLE_AUTO_FORMAT = "ToggleAutoFormat"
    EXPLAIN_QUERY = "ExplainQuery"
    EXPLAIN_ANALYZE_QUERY = "ExplainAnalyzeQuery"
    TOGGLE_EXPLAIN_VIEW = "ToggleExplainView"
    TOGGLE_EXPLAIN_ANALYZE = "ToggleExplainAnalyze"
    COPY_EXPLAIN_RESULTS = "CopyExplainResults"


_STRING_KINDS = {
    ActionKind.ERROR,
    ActionKind.LOAD_TABLES,
    ActionKind.LOAD_TABLE,
    ActionKind.HANDLE_QUERY,
    ActionKind.UPDATE_AUTOCOMPLETE_DOCUMENT,
}
_PAIR_KINDS = {ActionKind.RESIZE, ActionKind.TABLE_COLUMNS_LOADED, ActionKind.QUERY_RESULT}
_REQUEST_FIELDS = frozenset({"text", "cursor_line", "cursor_col", "context"})
_UNIT_KINDS = frozenset(ActionKind) - _STRING_KINDS - _PAIR_KINDS - {
    ActionKind.TABLES_LOADED,
    ActionKind.QUERY_EXECUTION_TIME,
    ActionKind.SELECT_COMPONENT,
    ActionKind.REQUEST_AUTOCOMPLETE,
    ActionKind.AUTOCOMPLETE_RESULTS,
    ActionKind.SET_TUNNEL_MODE,
}


@dataclass(frozen=True)
class Action:
    """An action; ``payload`` carries the data of variants that have any.

    Pair variants (Resize, TableColumnsLoaded, QueryResult) take a 2-tuple;
    RequestAutocomplete takes a dict with text, cursor_line, cursor_col and context.
    """

    kind: ActionKind
    payload: Any = None

    def __post_init__(self) -> None:
        if self.kind in _UNIT_KINDS:
            if self.payload is not None:
                raise ValueError(f"{self.kind.value} carries no data")
            return
        if self.payload is None:
            raise ValueError(f"{self.kind.value} requires data")
        if self.kind in _PAIR_KINDS and not (
            isinstance(self.payload, tuple) and len(self.payload) == 2
        ):
            raise ValueError(f"{self.kind.value} requires a pair")
        if self.kind is ActionKind.REQUEST_AUTOCOMPLETE and (
            not isinstance(self.payload, dict) or set(self.payload) != _REQUEST_FIELDS
        ):
            raise ValueError("RequestAutocomplete requires text, cursor_line, cursor_col, context")

    def __str__(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping of the variant name to its data."""
        return {self.kind.value: _encode(self.kind, self.payload)}


def _encode(kind: ActionKind, payload: Any) -> Any:
    if payload is None:
        return None
    if kind is ActionKind.TABLES_LOADED:
        return [asdict(table) for table in payload]
    if kind is ActionKind.TABLE_COLUMNS_LOADED:
        name, columns = payload
        return [name, [asdict(column) for column in columns]]
    if kind is ActionKind.SELECT_COMPONENT:
        return payload.value
    if kind is ActionKind.AUTOCOMPLETE_RESULTS:
        return [[text, item_kind] for text, item_kind in payload]
    if kind is ActionKind.RESIZE:
        return list(payload)
    if kind is ActionKind.QUERY_RESULT:
        headers, rows = payload
        return [list(headers), [list(row) for row in rows]]
    if kind is ActionKind.REQUEST_AUTOCOMPLETE:
        return dict(payload)
    return payload


def _expect(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _decode(kind: ActionKind, data: Any) -> Any:
    if kind in _UNIT_KINDS:
        _expect(data is None, f"{kind.value} carries no data")
        return None
    if kind in _STRING_KINDS:
        _expect(isinstance(data, str), f"{kind.value} expects a string")
        return data
    if kind is ActionKind.QUERY_EXECUTION_TIME:
        _expect(isinstance(data, int) and not isinstance(data, bool) and data >= 0,
                "QueryExecutionTime expects a non-negative integer")
        return data
    if kind is ActionKind.SET_TUNNEL_MODE:
        _expect(isinstance(data, bool), "SetTunnelMode expects a boolean")
        return data
    if kind is ActionKind.SELECT_COMPONENT:
        return ComponentKind(data)
    if kind is ActionKind.TABLES_LOADED:
        return [DbTable(**table) for table in data]
    if kind is ActionKind.TABLE_COLUMNS_LOADED:
        name, columns = data
        _expect(isinstance(name, str), "table name must be a string")
        return (name, [DbColumn(**column) for column in columns])
    if kind is ActionKind.AUTOCOMPLETE_RESULTS:
        return [(str(text), str(item_kind)) for text, item_kind in data]
    if kind is ActionKind.RESIZE:
        width, height = data
        for value in (width, height):
            _expect(isinstance(value, int) and 0 <= value <= 0xFFFF, "Resize expects two u16 values")
        return (width, height)
    if kind is ActionKind.QUERY_RESULT:
        headers, rows = data
        return (list(headers), [list(row) for row in rows])
    if kind is ActionKind.REQUEST_AUTOCOMPLETE:
        _expect(isinstance(data, dict), "RequestAutocomplete expects an object")
        return dict(data)
    raise ValueError(f"unhandled action {kind.value}")


def action_to_json(action: Action) -> str:
    """Serialise an action; variants without data become a bare string."""
    if action.payload is None:
        return json.dumps(action.kind.value)
    return json.dumps(action.to_dict())


def action_from_json(text: str) -> Action:
    """Parse an action written by :func:`action_to_json`."""
    data = json.loads(text)
    if isinstance(data, str):
        name, body = data, None
    elif isinstance(data, dict) and len(data) == 1:
        ((name, body),) = data.items()
    else:
        raise ValueError("an action is a string or a single-key object")
    try:
        kind = ActionKind(name)
    except ValueError:
        raise ValueError(f"unknown action: {name!r}") from None
    try:
        payload = _decode(kind, body)
    except (TypeError, KeyError) as exc:
        raise ValueError(f"malformed data for {name}: {exc}") from exc
    return Action(kind, payload)