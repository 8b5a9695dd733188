"""
FieldBinding model associating one request-model field with at most one rule.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.core.validators import BaseValidator


class FieldBinding(BaseModel):
    """
    Association between a model field and zero-or-one validation rule.

    Attributes:
        field_name: Name reported to the caller in the errors map ("Name")
        source_key: Key of the raw value in the request body or query ("name")
        attribute: Attribute on the request model that receives the bound value
        field_type: Declared type the raw value is coerced to (str or int)
        validator: The rule applied to the bound value, if any
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    field_name: str = Field(..., min_length=1)
    source_key: str = Field(..., min_length=1)
    attribute: str = Field(..., min_length=1)
    field_type: type = str
    validator: BaseValidator | None = None

    @property
    def rule_type(self) -> str | None:
        return self.validator.rule_type if self.validator else None
