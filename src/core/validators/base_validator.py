"""
Base validator interface for all field rules.

All validators must inherit from BaseValidator and implement is_valid()
and format_error_message().
"""

from abc import ABC, abstractmethod
from typing import Any


class ValidationError(Exception):
    """Raised when a validation rule fails."""

    def __init__(self, rule_name: str, field_name: str, message: str):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        super().__init__(f"[{rule_name}] {field_name}: {message}")


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    A validator is not tied to a field: the field name and the value are
    passed in on every call, so a single instance can be shared between
    fields, schemas and concurrent requests.
    """

    def __init__(self, parameters: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            parameters: Rule-specific parameters
        """
        self.parameters = dict(parameters or {})

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        """
        Check a value against this rule.

        Must never raise. An absent value (None) is always invalid.

        Args:
            value: The field value to check

        Returns:
            True if the value satisfies the rule
        """
        pass

    @abstractmethod
    def format_error_message(self, field_name: str, value: Any) -> str:
        """
        Build the failure message for a rejected value.

        Args:
            field_name: Name of the field, as reported to the caller
            value: The rejected value

        Returns:
            Human-readable failure message
        """
        pass

    def validate(self, value: Any, field_name: str) -> None:
        """
        Validate a value against this rule.

        Args:
            value: The field value to validate
            field_name: Name of the field being validated

        Raises:
            ValidationError: If validation fails
        """
        if not self.is_valid(value):
            raise ValidationError(
                rule_name=self.rule_type,
                field_name=field_name,
                message=self.format_error_message(field_name, value),
            )

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(params={self.parameters})"
