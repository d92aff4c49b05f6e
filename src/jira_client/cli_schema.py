"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """Describe how to pull a column for Rich tables.

    `path` walks nested mappings, e.g. ("fields", "status", "name").
    """

    header: str
    path: tuple[str, ...] = ()
    extractor: ValueExtractor | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value: Any | None = None
        if self.path:
            value = _dig(row, self.path)
        if value is None and self.extractor:
            value = self.extractor(row)
        if value is None:
            return ""
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]


def _dig(row: Row, path: tuple[str, ...]) -> Any:
    current: Any = row
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _assignee(row: Row) -> str | None:
    assignee = _dig(row, ("fields", "assignee"))
    if not isinstance(assignee, Mapping):
        return None
    return assignee.get("displayName") or assignee.get("name") or assignee.get("emailAddress")


ISSUES_VIEW = TableView(
    title="Issues",
    columns=(
        Column("Key", path=("key",)),
        Column("Summary", path=("fields", "summary")),
        Column("Status", path=("fields", "status", "name")),
        Column("Assignee", extractor=_assignee),
    ),
)

CLI_TABLE_VIEWS: dict[str, TableView] = {
    "issues": ISSUES_VIEW,
}
