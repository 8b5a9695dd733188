"""
MinimumAgeValidator - accepts integers that reach the legal age.
"""

from typing import Any

from .base_validator import BaseValidator

LEGAL_AGE = 18


class MinimumAgeValidator(BaseValidator):
    """
    Validates that an integer is at least the legal age (18).

    Only defined for integers: the comparison is ``value > LEGAL_AGE - 1``,
    which equals ``value >= LEGAL_AGE`` only while the field stays an int.
    None, bool and non-integer values are invalid.
    """

    def is_valid(self, value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, int):
            return False

        return value > LEGAL_AGE - 1

    def format_error_message(self, field_name: str, value: Any) -> str:
        shown = "" if value is None else value
        return (
            f"The property, field or parameter '{field_name}' is invalid, "
            f"because no legal age is given. "
            f"The value of '{field_name}' is '{shown}', "
            f"but must be at least '{LEGAL_AGE}'."
        )

    @property
    def rule_type(self) -> str:
        return "minimum_age"
