"""
Core data models for request validation.

All models use Pydantic for runtime validation and type safety.
"""

from .field_binding import FieldBinding
from .problem_details import PROBLEM_TITLE, PROBLEM_TYPE, ValidationProblemDetails
from .requests import LegalAgeQuery, LettersOnlyQuery, User
from .validation_outcome import ValidationOutcome, ValidationState

__all__ = [
    "FieldBinding",
    "ValidationOutcome",
    "ValidationState",
    "ValidationProblemDetails",
    "PROBLEM_TYPE",
    "PROBLEM_TITLE",
    "User",
    "LettersOnlyQuery",
    "LegalAgeQuery",
]
