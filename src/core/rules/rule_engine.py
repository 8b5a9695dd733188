"""
Rule engine for evaluating field rules on bound request models.

The rule engine runs every bound rule of a schema against a request model
and produces a completed validation outcome.
"""

from typing import Any

from pydantic import BaseModel

from src.core.models import ValidationOutcome
from src.core.schema import BindingResult, RequestSchema
from src.core.validators import (
    BaseValidator,
    LettersOnlyValidator,
    MinimumAgeValidator,
    ValidationError,
)
from src.observability.logger import get_logger

logger = get_logger(__name__)

VALIDATOR_REGISTRY: dict[str, type[BaseValidator]] = {
    "letters_only": LettersOnlyValidator,
    "minimum_age": MinimumAgeValidator,
}


class RuleEngine:
    """
    Evaluates the rules of one RequestSchema.

    Every rule is evaluated, even after a failure, so that a single outcome
    lists every invalid field.
    """

    def __init__(self, schema: RequestSchema):
        """
        Initialize the rule engine.

        Args:
            schema: The schema whose bindings are evaluated
        """
        self.schema = schema

    def validate_model(
        self,
        model: BaseModel,
        binding_errors: dict[str, list[str]] | None = None,
    ) -> ValidationOutcome:
        """
        Validate a request model against all rules of the schema.

        Args:
            model: The populated request model
            binding_errors: Failures recorded while binding the raw request.
                            A field listed here reports its binding error
                            instead of being evaluated by its rule.

        Returns:
            Completed ValidationOutcome (ACCEPTED or REJECTED)
        """
        binding_errors = binding_errors or {}
        outcome = ValidationOutcome()

        for field_name, messages in binding_errors.items():
            if self.schema.get_binding(field_name) is None:
                # Payload-level errors ("$") are not tied to a binding
                for message in messages:
                    outcome.add_error(field_name, message)

        for binding in self.schema.bindings:
            field_name = binding.field_name

            if field_name in binding_errors:
                for message in binding_errors[field_name]:
                    outcome.add_error(field_name, message)
                continue

            if binding.validator is None:
                continue

            value = getattr(model, binding.attribute, None)

            try:
                binding.validator.validate(value, field_name)
            except ValidationError as e:
                outcome.add_error(e.field_name, e.message)

        outcome.complete()

        logger.debug(
            f"Validated {self.schema.name}: {outcome.state.value}",
            extra={"schema": self.schema.name, "failed_fields": outcome.failed_fields},
        )

        return outcome

    def validate_binding(self, result: BindingResult) -> ValidationOutcome:
        """Validate the output of FieldBinder.bind()."""
        return self.validate_model(result.model, result.errors)

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of bound rules.

        Returns:
            Dictionary with field and rule counts
        """
        return {
            "schema": self.schema.name,
            "total_fields": len(self.schema.bindings),
            "total_rules": sum(1 for b in self.schema.bindings if b.validator is not None),
            "rules_by_type": self._count_by_type(),
        }

    def _count_by_type(self) -> dict[str, int]:
        """Count bound rules by rule type."""
        counts: dict[str, int] = {}
        for binding in self.schema.bindings:
            if binding.validator is None:
                continue
            rule_type = binding.validator.rule_type
            counts[rule_type] = counts.get(rule_type, 0) + 1
        return counts
