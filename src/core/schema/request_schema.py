"""
Request schemas and the field binder.

A RequestSchema lists, per field, where the raw value comes from, which type
it is coerced to and which rule (if any) checks it. The FieldBinder maps a
raw request (JSON object or query parameters) onto the schema's model.
"""

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.core.models import FieldBinding

# Key used for errors that concern the whole payload rather than one field
PAYLOAD_ERROR_KEY = "$"


class RequestSchema:
    """
    Explicit, per-field registration of bindings for one request model.

    At most one binding (and therefore at most one rule) is allowed per field.
    """

    def __init__(self, name: str, model: type[BaseModel], bindings: list[FieldBinding]):
        """
        Initialize the schema.

        Args:
            name: Schema name ("User")
            model: Pydantic model instantiated per request
            bindings: Field bindings, in the order errors are reported

        Raises:
            ValueError: If a field is bound twice or a binding targets an
                        attribute the model does not declare
        """
        self.name = name
        self.model = model
        self.bindings: tuple[FieldBinding, ...] = tuple(bindings)

        seen: set[str] = set()
        for binding in self.bindings:
            if binding.field_name in seen:
                raise ValueError(
                    f"Field '{binding.field_name}' is bound more than once in schema '{name}'"
                )
            seen.add(binding.field_name)

            if binding.attribute not in model.model_fields:
                raise ValueError(
                    f"Model {model.__name__} has no attribute '{binding.attribute}' "
                    f"(bound as '{binding.field_name}')"
                )

    def get_binding(self, field_name: str) -> FieldBinding | None:
        for binding in self.bindings:
            if binding.field_name == field_name:
                return binding
        return None

    def __repr__(self) -> str:
        fields = ", ".join(b.field_name for b in self.bindings)
        return f"RequestSchema(name={self.name}, model={self.model.__name__}, fields=[{fields}])"


class BindingResult(BaseModel):
    """
    Result of binding a raw request onto a schema's model.

    Attributes:
        model: The populated request model instance
        values: Field name -> bound (coerced) value, None when absent or unbindable
        errors: Field name -> binding failure messages
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: BaseModel
    values: dict[str, Any] = Field(default_factory=dict)
    errors: dict[str, list[str]] = Field(default_factory=dict)


@lru_cache(maxsize=None)
def _adapter_for(field_type: type) -> TypeAdapter:
    return TypeAdapter(field_type)


class FieldBinder:
    """
    Maps raw request fields onto a RequestSchema's model.

    Keys are looked up exactly first, then case-insensitively. Raw values are
    coerced to the binding's declared type with pydantic. Lax conversion
    (query strings such as "42" bind to int fields) is the default; JSON
    bodies are bound strictly, so 18.0, true or "42" never bind to an int.
    """

    def __init__(self, schema: RequestSchema):
        self.schema = schema

    def bind(self, raw: Any, strict: bool = False) -> BindingResult:
        """
        Bind a raw payload.

        Args:
            raw: JSON body (expected to be an object) or query parameters
            strict: Require values of exactly the declared type (JSON bodies)

        Returns:
            BindingResult with the model instance, bound values and binding errors
        """
        errors: dict[str, list[str]] = {}
        values: dict[str, Any] = {}

        if raw is None:
            raw = {}

        if not isinstance(raw, Mapping):
            errors[PAYLOAD_ERROR_KEY] = [
                f"The request payload must be an object, got {type(raw).__name__}."
            ]
            raw = {}

        for binding in self.schema.bindings:
            found, raw_value = self._lookup(raw, binding.source_key)

            if not found or raw_value is None:
                values[binding.field_name] = None
                continue

            try:
                values[binding.field_name] = _adapter_for(binding.field_type).validate_python(
                    raw_value, strict=strict
                )
            except PydanticValidationError:
                values[binding.field_name] = None
                errors.setdefault(binding.field_name, []).append(
                    f"The value '{raw_value}' is not valid for {binding.field_name}."
                )

        model = self.schema.model(
            **{binding.attribute: values[binding.field_name] for binding in self.schema.bindings}
        )

        return BindingResult(model=model, values=values, errors=errors)

    @staticmethod
    def _lookup(raw: Mapping, key: str) -> tuple[bool, Any]:
        if key in raw:
            return True, raw[key]

        lowered = key.lower()
        for candidate in raw.keys():
            if isinstance(candidate, str) and candidate.lower() == lowered:
                return True, raw[candidate]

        return False, None
