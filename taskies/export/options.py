#!/usr/bin/env python3
"""
options.py
----------
Export options and named export presets.

ExportOptions bundles every formatting choice an export makes. Presets save
a set of options together with a column selection under a name, in a YAML
file, so a recurring export can be repeated with one flag.

Presets file layout:
    presets:
      weekly:
        options:
          delimiter: semicolon
          text_qualifier: double_quote
          ...
        columns:
          - name: Date
            header: Day
          - name: Description
            header: ""

Usage:
    store = PresetStore(PRESETS_PATH, logger=logger)
    store.save(ExportPreset("weekly", ExportOptions(), columns))
    preset = store.get("weekly")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from taskies.core.exceptions import PresetError, ValidationError
from taskies.core.logging_manager import TaskiesLogger, safe_logger

from .columns import ColumnExportModel
from .enums import (
    BooleanHandler,
    Delimiter,
    EmptyValues,
    LineTerminator,
    NewLines,
    TextQualifier,
)


_ENUM_FIELDS = {
    "delimiter": Delimiter,
    "text_qualifier": TextQualifier,
    "line_terminator": LineTerminator,
    "empty_values": EmptyValues,
    "new_lines": NewLines,
    "boolean_handler": BooleanHandler,
}
_FLAG_FIELDS = ("include_attributes", "exclude_headers")


@dataclass
class ExportOptions:
    """
    Formatting choices for one export.

    Attributes:
        delimiter: Field separator
        text_qualifier: Quote character (NONE disables quoting)
        line_terminator: Line ending written after every line
        empty_values: BLANK or NULL for empty cells
        new_lines: Line break policy inside cells
        boolean_handler: Labels for lone 0/1 cells
        include_attributes: Append pivoted attribute columns
        exclude_headers: Omit the header line
    """

    delimiter: Delimiter = Delimiter.COMMA
    text_qualifier: TextQualifier = TextQualifier.DOUBLE_QUOTE
    line_terminator: LineTerminator = LineTerminator.UNIX
    empty_values: EmptyValues = EmptyValues.BLANK
    new_lines: NewLines = NewLines.MERGE
    boolean_handler: BooleanHandler = BooleanHandler.ONE_ZERO
    include_attributes: bool = False
    exclude_headers: bool = False

    def __post_init__(self) -> None:
        for name, enum_cls in _ENUM_FIELDS.items():
            if not isinstance(getattr(self, name), enum_cls):
                raise ValidationError(
                    f"Invalid {name}: {getattr(self, name)!r} "
                    f"(expected a {enum_cls.__name__})"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain choice names and flags."""
        data: Dict[str, Any] = {
            name: getattr(self, name).name.lower() for name in _ENUM_FIELDS
        }
        for name in _FLAG_FIELDS:
            data[name] = bool(getattr(self, name))
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ExportOptions":
        """
        Build options from choice names, defaulting anything missing.

        Raises:
            ValidationError: On unknown keys or choice names
        """
        data = data or {}
        unknown = set(data) - set(_ENUM_FIELDS) - set(_FLAG_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown export options: {sorted(unknown)}")

        kwargs: Dict[str, Any] = {}
        for name, enum_cls in _ENUM_FIELDS.items():
            if name not in data:
                continue
            try:
                kwargs[name] = enum_cls.from_choice(str(data[name]))
            except KeyError:
                raise ValidationError(
                    f"Invalid {name}: {data[name]!r} "
                    f"(expected one of {', '.join(enum_cls.choices())})"
                ) from None

        for name in _FLAG_FIELDS:
            if name not in data:
                continue
            if not isinstance(data[name], bool):
                raise ValidationError(
                    f"Invalid {name}: {data[name]!r} (expected true or false)"
                )
            kwargs[name] = data[name]

        return cls(**kwargs)


@dataclass
class ExportPreset:
    """A named set of export options and columns."""

    name: str
    options: ExportOptions = field(default_factory=ExportOptions)
    columns: List[ColumnExportModel] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        ordered = sorted(self.columns, key=lambda column: column.order)
        return {
            "options": self.options.to_dict(),
            "columns": [
                {"name": column.original_column, "header": column.column}
                for column in ordered
            ],
        }

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "ExportPreset":
        if not isinstance(data, dict):
            raise PresetError(f"Preset '{name}' is not a mapping")

        columns: List[ColumnExportModel] = []
        for order, entry in enumerate(data.get("columns") or []):
            if not isinstance(entry, dict) or not entry.get("name"):
                raise PresetError(f"Preset '{name}' has a malformed column: {entry!r}")
            columns.append(
                ColumnExportModel(
                    str(entry["name"]), str(entry.get("header") or ""), order
                )
            )

        try:
            options = ExportOptions.from_dict(data.get("options"))
        except ValidationError as e:
            raise PresetError(f"Preset '{name}' has invalid options: {e}") from e

        return cls(name, options, columns)


class PresetStore:
    """
    YAML-backed storage for export presets.

    The file is read on every call, so edits made by hand are picked up.
    """

    def __init__(
        self, path: Union[str, Path], logger: Optional[TaskiesLogger] = None
    ) -> None:
        self.path = Path(path)
        self.logger = logger

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PresetError(f"Cannot parse presets file {self.path}: {e}") from e
        except OSError as e:
            raise PresetError(f"Cannot read presets file {self.path}: {e}") from e

        if not data:
            return {}
        presets = data.get("presets") if isinstance(data, dict) else None
        if not isinstance(presets, dict):
            raise PresetError(f"Presets file {self.path} has no 'presets' mapping")
        return presets

    def _dump(self, presets: Dict[str, Any]) -> None:
        content = yaml.safe_dump(
            {"presets": presets},
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise PresetError(f"Cannot write presets file {self.path}: {e}") from e

    def list(self) -> List[str]:
        """Names of all saved presets, sorted."""
        return sorted(self._load())

    def get(self, name: str) -> ExportPreset:
        """
        Load a preset by name.

        Raises:
            PresetError: If the preset does not exist or is malformed
        """
        presets = self._load()
        if name not in presets:
            raise PresetError(f"Preset not found: '{name}'")
        return ExportPreset.from_dict(name, presets[name])

    def save(self, preset: ExportPreset) -> None:
        """Create or replace a preset."""
        if not preset.name.strip():
            raise PresetError("Preset name cannot be empty")

        presets = self._load()
        replaced = preset.name in presets
        presets[preset.name] = preset.to_dict()
        self._dump(presets)

        safe_logger(self.logger).log_operation(
            "preset_saved",
            {"name": preset.name, "replaced": replaced, "path": str(self.path)},
        )

    def remove(self, name: str) -> None:
        """
        Delete a preset.

        Raises:
            PresetError: If the preset does not exist
        """
        presets = self._load()
        if name not in presets:
            raise PresetError(f"Preset not found: '{name}'")

        del presets[name]
        self._dump(presets)
        safe_logger(self.logger).log_operation(
            "preset_removed", {"name": name, "path": str(self.path)}
        )
