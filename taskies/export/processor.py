#!/usr/bin/env python3
"""
processor.py
------------
Per-cell text processing for delimited output.

A cell value passes through four steps, always in this order:
    1. Empty values  - "" becomes NULL under the NULL policy
    2. New lines     - kept, removed, or replaced by a space
    3. Booleans      - a lone "0"/"1" is relabeled (e.g. no/yes)
    4. Qualifier     - every qualifier character is doubled and the cell is
                       wrapped when it holds the delimiter or a line break

Step 3 looks at the text only: any cell that is exactly "0" or "1" is
relabeled, whether or not its column is boolean.

Step 4 never wraps a cell without the delimiter or a line break, so running
it again on such a cell adds no second pair of qualifiers.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re

# --- Local imports ---
from .enums import BooleanHandler, EmptyValues, NewLines
from .options import ExportOptions


NULL_LITERAL = "NULL"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class CsvExportProcessor:
    """Applies ExportOptions to single cell values."""

    def __init__(self, options: ExportOptions) -> None:
        self.options = options

    def process(self, value: str) -> str:
        """Run all four steps on a cell value."""
        value = self._apply_empty_values(value)
        value = self._apply_new_lines(value)
        value = self._apply_booleans(value)
        return self._apply_qualifier(value)

    def process_header(self, value: str) -> str:
        """Headers are only escaped and qualified."""
        return self._apply_qualifier(value)

    def _apply_empty_values(self, value: str) -> str:
        if value == "" and self.options.empty_values == EmptyValues.NULL:
            return NULL_LITERAL
        return value

    def _apply_new_lines(self, value: str) -> str:
        policy = self.options.new_lines
        if policy == NewLines.MERGE:
            return value.replace("\r", "").replace("\n", "")
        if policy == NewLines.MERGE_AND_SPACE:
            return _LINE_BREAK.sub(" ", value)
        return value

    def _apply_booleans(self, value: str) -> str:
        handler = self.options.boolean_handler
        if handler == BooleanHandler.ONE_ZERO or value not in ("0", "1"):
            return value
        false_label, true_label = handler.labels
        return true_label if value == "1" else false_label

    def _apply_qualifier(self, value: str) -> str:
        qualifier = self.options.text_qualifier.value
        if not qualifier:
            return value

        escaped = value.replace(qualifier, qualifier * 2)

        if (
            self.options.delimiter.value in escaped
            or "\n" in escaped
            or "\r" in escaped
        ):
            return f"{qualifier}{escaped}{qualifier}"
        return escaped
