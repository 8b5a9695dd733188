"""
LettersOnlyValidator - accepts strings made of ASCII letters only.
"""

import re
from re import Pattern
from typing import Any

from .base_validator import BaseValidator

LETTERS_ONLY_PATTERN = "^[a-zA-Z]*$"


class LettersOnlyValidator(BaseValidator):
    """
    Validates that a string contains only ASCII letters (upper or lower case).

    The empty string is valid. None and non-string values are invalid.
    """

    _pattern: Pattern = re.compile(LETTERS_ONLY_PATTERN)

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False

        # fullmatch so that "$" cannot accept a trailing newline
        return self._pattern.fullmatch(value) is not None

    def format_error_message(self, field_name: str, value: Any) -> str:
        return (
            f"The property, field or parameter '{field_name}' is invalid, "
            f"because only letters are allowed. "
            f"The value of '{field_name}' is '{_display(value)}', "
            f"but must match regex pattern '{LETTERS_ONLY_PATTERN}'."
        )

    @property
    def rule_type(self) -> str:
        return "letters_only"


def _display(value: Any) -> str:
    return "" if value is None else str(value)
