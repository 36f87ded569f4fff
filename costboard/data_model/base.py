from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ColumnDefinition:
    """Lightweight schema descriptor used by the record forms."""

    field: str
    label: str
    kind: str = "text"  # text | number | integer | select | date
    default: Any = ""
    options: List[str] | None = None
    min_value: float | None = None
    step: float | None = None
    format: str | None = None
    help: str | None = None

    def coerce(self, value: Any) -> Any:
        if self.kind == "number":
            return to_float(value)
        if self.kind == "integer":
            return int(to_float(value))
        if self.kind == "select":
            text = "" if value is None else str(value).strip()
            if self.options and text not in self.options:
                return self.default
            return text
        return "" if value is None else str(value)


def to_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


@dataclass
class TableModel:
    """Container for a record schema plus default rows."""

    name: str
    columns: List[ColumnDefinition]
    default_rows: List[dict[str, Any]] = field(default_factory=list)

    def blank_record(self) -> Dict[str, Any]:
        return {col.field: col.default for col in self.columns}

    def coerce(self, row: Dict[str, Any] | None, partial: bool = False) -> Dict[str, Any]:
        """Normalizes form values against the schema.

        With ``partial`` only the fields present in ``row`` are returned, so the
        result can be merged into an existing record. Unknown keys are dropped.
        """
        row = row or {}
        clean: Dict[str, Any] = {}
        for col in self.columns:
            if col.field in row:
                clean[col.field] = col.coerce(row[col.field])
            elif not partial:
                clean[col.field] = col.default
        return clean

    def payload(self) -> Dict[str, Any]:
        columns: List[Dict[str, Any]] = []
        for col in self.columns:
            columns.append(
                {
                    "field": col.field,
                    "label": col.label,
                    "kind": col.kind,
                    "default": col.default,
                    "options": col.options or [],
                    "min": col.min_value,
                    "step": col.step,
                    "format": col.format,
                    "help": col.help,
                }
            )
        return {"name": self.name, "columns": columns, "defaults": self.blank_record()}
