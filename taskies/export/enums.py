"""
Export Enumeration Types
------------------------

Enum classes describing export options and catalog metadata.

Enums:
    - Delimiter: Field separator character
    - TextQualifier: Quoting character wrapping fields that need it
    - LineTerminator: End-of-line sequence
    - EmptyValues: How empty cells are written
    - NewLines: How line breaks inside a cell are handled
    - BooleanHandler: How lone 0/1 cells are relabeled
    - JoinType: SQL join kind for catalog tables
    - FieldType: Plain column or formatted expression
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class _ChoiceEnum(str, Enum):
    """String enum with a `choices()` helper for CLI options."""

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available choice names (lowercase)."""
        return [member.name.lower() for member in cls]

    @classmethod
    def from_choice(cls, name: str):
        """Look up a member by its lowercase choice name."""
        return cls[name.upper()]


class Delimiter(_ChoiceEnum):
    COMMA = ","
    SEMICOLON = ";"
    SPACE = " "
    TAB = "\t"
    PIPE = "|"


class TextQualifier(_ChoiceEnum):
    """
    Quoting character. NONE disables qualifying and escaping entirely.
    """

    DOUBLE_QUOTE = '"'
    SINGLE_QUOTE = "'"
    NONE = ""


class LineTerminator(_ChoiceEnum):
    WINDOWS = "\r\n"
    UNIX = "\n"
    CLASSIC_MAC = "\r"


class EmptyValues(_ChoiceEnum):
    """
    - BLANK: Leave empty cells empty
    - NULL: Write the literal NULL
    """

    BLANK = "blank"
    NULL = "null"


class NewLines(_ChoiceEnum):
    """
    - PRESERVE: Keep line breaks (the field is then qualified)
    - MERGE: Remove line breaks
    - MERGE_AND_SPACE: Replace each line break with a single space
    """

    PRESERVE = "preserve"
    MERGE = "merge"
    MERGE_AND_SPACE = "merge_and_space"


class BooleanHandler(_ChoiceEnum):
    ONE_ZERO = "one_zero"
    TRUE_FALSE_LOWER = "true_false_lower"
    TRUE_FALSE_TITLE = "true_false_title"
    YES_NO_LOWER = "yes_no_lower"
    YES_NO_TITLE = "yes_no_title"

    @property
    def labels(self) -> tuple:
        """(false_label, true_label) for this handler."""
        label_map = {
            BooleanHandler.ONE_ZERO: ("0", "1"),
            BooleanHandler.TRUE_FALSE_LOWER: ("false", "true"),
            BooleanHandler.TRUE_FALSE_TITLE: ("False", "True"),
            BooleanHandler.YES_NO_LOWER: ("no", "yes"),
            BooleanHandler.YES_NO_TITLE: ("No", "Yes"),
        }
        return label_map[self]


class JoinType(_ChoiceEnum):
    INNER = "INNER"
    LEFT = "LEFT"


class FieldType(_ChoiceEnum):
    """
    - DEFAULT: A plain table.column selection
    - FORMATTED: A computed SQL expression (e.g. HH:MM duration)
    """

    DEFAULT = "default"
    FORMATTED = "formatted"
