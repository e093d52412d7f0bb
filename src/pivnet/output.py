"""Rendering of command results as text tables, JSON, or YAML."""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, List, Mapping, Optional, Sequence, TextIO

import yaml
from pydantic import BaseModel
from rich import box
from rich.console import Console
from rich.table import Table


# Columns shown in text mode, keyed by model class name.
_COLUMNS: Dict[str, Sequence[str]] = {
    "Product": ("id", "slug", "name"),
    "EULA": ("id", "slug", "name"),
    "EULAAcceptance": ("accepted_at",),
    "Release": ("id", "version", "release_type", "release_date", "availability", "description"),
    "ProductFile": ("id", "name", "file_version", "aws_object_key"),
    "FileGroup": ("id", "name", "product_files"),
    "ReleaseUpgradePath": ("id", "version"),
    "ReleaseDependency": ("id", "version", "product"),
    "UserGroup": ("id", "name", "description"),
}


def to_plain(data: Any) -> Any:
    """Convert models (and lists of models) into JSON-ready values."""

    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    return data


def print_output(data: Any, output_format: str, stream: Optional[TextIO] = None) -> None:
    out = stream or sys.stdout
    if output_format == "yaml":
        yaml.safe_dump(to_plain(data), out, sort_keys=False)
    elif output_format == "json":
        json.dump(to_plain(data), out, indent=2)
        out.write("\n")
    else:
        Console(file=out, markup=False, highlight=False).print(_render_text(data))


def _render_text(data: Any) -> Any:
    if isinstance(data, (list, tuple)):
        if not data:
            return "No results"
        if all(isinstance(item, str) for item in data):
            return "\n".join(data)
        return _table(list(data))
    if isinstance(data, BaseModel):
        return _key_value_rows(to_plain(data))
    if isinstance(data, Mapping):
        return _key_value_rows(data)
    return str(data)


def _row_values(item: Any, columns: Sequence[str]) -> List[str]:
    plain = to_plain(item)
    # Upgrade paths and dependencies nest the interesting fields under "release".
    if isinstance(plain, Mapping) and set(plain) == {"release"}:
        plain = plain["release"]
    return [_cell(plain.get(column)) for column in columns]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(_cell(item.get("name") if isinstance(item, Mapping) else item) for item in value)
    if isinstance(value, Mapping):
        return str(value.get("name") or value.get("slug") or value.get("id") or "")
    return str(value)


def _table(items: List[Any]) -> Table:
    columns = _COLUMNS.get(type(items[0]).__name__) or tuple(to_plain(items[0]).keys())
    table = Table(show_header=True, header_style="bold cyan", box=box.ASCII)
    for index, column in enumerate(columns):
        # Identifying columns stay on one line so they can be grepped.
        table.add_column(column.replace("_", " ").title(), no_wrap=index < 2)
    for item in items:
        table.add_row(*_row_values(item, columns))
    return table


def _key_value_rows(values: Mapping[str, Any]) -> Table:
    table = Table(show_header=False, box=box.ASCII)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in values.items():
        if key == "_links":
            continue
        table.add_row(key, _cell(value))
    return table
