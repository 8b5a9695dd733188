"""
ValidationOutcome model representing the result of validating one request (ephemeral).
"""

from enum import Enum

from pydantic import BaseModel, Field


class ValidationState(str, Enum):
    """Lifecycle of a request validation: pending until every rule has run."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ValidationOutcome(BaseModel):
    """
    Outcome of validating one request (ephemeral, never persisted).

    Attributes:
        errors: Field name -> ordered failure messages. A field with no
                messages is valid.
        state: PENDING while rules are still being evaluated, then
               ACCEPTED or REJECTED once complete() is called.
    """

    errors: dict[str, list[str]] = Field(default_factory=dict)
    state: ValidationState = ValidationState.PENDING

    def add_error(self, field_name: str, message: str) -> None:
        """Append a failure message for a field, keeping insertion order."""
        self._ensure_pending()
        self.errors.setdefault(field_name, []).append(message)

    def merge(self, errors: dict[str, list[str]]) -> None:
        """Append every message of another errors map."""
        for field_name, messages in errors.items():
            for message in messages:
                self.add_error(field_name, message)

    def complete(self) -> "ValidationOutcome":
        """Move from PENDING to the terminal ACCEPTED or REJECTED state."""
        self._ensure_pending()
        self.state = ValidationState.ACCEPTED if self.is_valid else ValidationState.REJECTED
        return self

    @property
    def is_valid(self) -> bool:
        return all(len(messages) == 0 for messages in self.errors.values())

    @property
    def failed_fields(self) -> list[str]:
        return [name for name, messages in self.errors.items() if messages]

    def _ensure_pending(self) -> None:
        if self.state is not ValidationState.PENDING:
            raise RuntimeError(f"Validation outcome is already {self.state.value}")
