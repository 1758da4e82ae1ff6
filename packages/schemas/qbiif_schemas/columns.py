"""Column and row formatting primitives for the IIF wire format.

IIF rows are tab separated columns; rows are newline separated. Textual
columns are wrapped in double quotes with inner quotes backslash-escaped.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Protocol, Sequence, runtime_checkable

from .errors import InvalidValueError, MissingRequiredFieldError

COLUMN_SEPARATOR = "\t"
LINE_SEPARATOR = "\n"


@runtime_checkable
class Renderable(Protocol):
    """Anything that knows its own IIF text."""

    def render(self) -> str: ...


def strip_quotes(value: str) -> str:
    """Remove one pair of double quotes wrapping the whole value, if present."""
    if value is None:
        raise InvalidValueError("value", "cannot be None")
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def escape_column(value: str) -> str:
    """Quote a textual column, escaping any inner double quotes."""
    escaped = strip_quotes(value).replace('"', '\\"')
    return f'"{escaped}"'


def join_columns(columns: Iterable[str]) -> str:
    return COLUMN_SEPARATOR.join(columns)


def join_lines(lines: Iterable[str]) -> str:
    return LINE_SEPARATOR.join(lines)


def export_columns(
    prefix: Sequence[str],
    columns: Sequence[Renderable | None],
    suffix: Sequence[str] = (),
    names: Sequence[str] | None = None,
) -> str:
    """Render one IIF row from literal prefix/suffix text and value columns.

    ``columns`` must all be set; the first unset column raises
    ``MissingRequiredFieldError`` with its one-based index among ``columns``.
    """
    if names is not None and len(names) != len(columns):
        msg = f"Expected {len(columns)} column names, got {len(names)}"
        raise ValueError(msg)
    row: list[str] = list(prefix)
    for index, column in enumerate(columns):
        if column is None:
            name = names[index] if names is not None else None
            raise MissingRequiredFieldError(index + 1, name)
        row.append(column.render())
    row.extend(suffix)
    return join_columns(row)


def _render(node: Renderable) -> str:
    return node.render()


def render_in_order(
    nodes: Sequence[Renderable], max_workers: int | None = None
) -> list[str]:
    """Render ``nodes`` and return their text in the original order.

    With ``max_workers`` above one, nodes render on a thread pool; the
    results are still collected by position.
    """
    if not max_workers or max_workers < 2 or len(nodes) < 2:
        return [node.render() for node in nodes]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(nodes))) as pool:
        return list(pool.map(_render, nodes))


__all__ = [
    "COLUMN_SEPARATOR",
    "LINE_SEPARATOR",
    "Renderable",
    "escape_column",
    "export_columns",
    "join_columns",
    "join_lines",
    "render_in_order",
    "strip_quotes",
]
