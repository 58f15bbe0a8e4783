"""Output rendering for command results.

The output format is passed explicitly by the caller; there is no shared
formatter registry. Tables are rendered with rich into a plain-text
string so callers decide where it is written.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from src.mapsync.commands.dispatch import DispatchResult
from src.mapsync.config import OutputFormat
from src.mapsync.mappings.schemas import MappingDefinition

__all__ = [
    "DISPATCH_COLUMNS",
    "MAPPING_COLUMNS",
    "OutputFormat",
    "render_dispatch_result",
    "render_mappings",
    "render_rows",
]

MAPPING_COLUMNS = [
    "name",
    "label",
    "local_entity_type",
    "remote_object_type",
    "push",
    "pull",
]

DISPATCH_COLUMNS = ["mapping", "direction", "status", "detail"]

TABLE_WIDTH = 200


def render_rows(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[str],
    fmt: OutputFormat | str,
) -> str:
    """Render rows of column -> value dicts in the requested format."""
    fmt = OutputFormat(fmt)

    if fmt == OutputFormat.JSON:
        return json.dumps([{c: row.get(c) for c in columns} for row in rows], indent=2)

    if fmt == OutputFormat.CSV:
        buffer = io.StringIO()
        writer = csv.DictWriter(
            buffer, fieldnames=list(columns), extrasaction="ignore", lineterminator="\n"
        )
        writer.writeheader()
        writer.writerows(rows)
        return buffer.getvalue().rstrip("\n")

    return _render_table(rows, columns)


def _render_table(rows: Sequence[dict[str, Any]], columns: Sequence[str]) -> str:
    table = Table(box=box.SIMPLE_HEAD, show_edge=False, pad_edge=False)
    for column in columns:
        table.add_column(column, no_wrap=True)
    for row in rows:
        table.add_row(*(Text(_cell(row.get(c))) for c in columns))

    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=TABLE_WIDTH,
        color_system=None,
        force_terminal=False,
        highlight=False,
    )
    console.print(table)
    return "\n".join(line.rstrip() for line in buffer.getvalue().splitlines() if line.strip())


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def mapping_rows(mappings: Sequence[MappingDefinition]) -> list[dict[str, Any]]:
    return [
        {
            "name": m.name,
            "label": m.label,
            "local_entity_type": m.local_entity_type,
            "remote_object_type": m.remote_object_type,
            "push": m.supports_push,
            "pull": m.supports_pull,
        }
        for m in mappings
    ]


def render_mappings(mappings: Sequence[MappingDefinition], fmt: OutputFormat | str) -> str:
    """Render mapping definitions as a table, JSON array or CSV."""
    return render_rows(mapping_rows(mappings), MAPPING_COLUMNS, fmt)


def render_dispatch_result(result: DispatchResult, fmt: OutputFormat | str) -> str:
    """Render one row per dispatched mapping and one per error."""
    rows: list[dict[str, Any]] = [
        {"mapping": name, "direction": result.direction.value, "status": "dispatched", "detail": ""}
        for name in result.dispatched
    ]
    rows.extend(
        {"mapping": name, "direction": result.direction.value, "status": "error", "detail": error}
        for name, error in zip(result.failed, result.errors)
    )
    return render_rows(rows, DISPATCH_COLUMNS, fmt)
