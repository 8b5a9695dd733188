"""
Field rule implementations.

Provides the letters-only and minimum-age rules and the base class new
rules follow.
"""

from .base_validator import BaseValidator, ValidationError
from .letters_only_validator import LETTERS_ONLY_PATTERN, LettersOnlyValidator
from .minimum_age_validator import LEGAL_AGE, MinimumAgeValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "LettersOnlyValidator",
    "MinimumAgeValidator",
    "LETTERS_ONLY_PATTERN",
    "LEGAL_AGE",
]
