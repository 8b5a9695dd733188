"""
Rule configuration management.

Builds request schemas programmatically or loads them from YAML files.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from src.core.models import FieldBinding, LegalAgeQuery, LettersOnlyQuery, User
from src.core.schema import RequestSchema, SchemaRegistry
from src.core.validators import LettersOnlyValidator, MinimumAgeValidator

from .rule_engine import VALIDATOR_REGISTRY

TYPE_MAPPING: dict[str, type] = {
    "integer": int,
    "int": int,
    "string": str,
    "str": str,
}

MODEL_REGISTRY: dict[str, type[BaseModel]] = {
    "User": User,
    "LettersOnlyQuery": LettersOnlyQuery,
    "LegalAgeQuery": LegalAgeQuery,
}


def _camel(field_name: str) -> str:
    return field_name[:1].lower() + field_name[1:]


class RuleConfigBuilder:
    """
    Programmatically build field bindings (for schemas defined in code or tests).

    Field names are the names reported in errors ("Name"). Unless given, the
    raw source key and the model attribute default to the camel-cased name.
    """

    def __init__(self):
        """Initialize empty binding list."""
        self.bindings: list[FieldBinding] = []

    def add_letters_only(
        self,
        field_name: str,
        source_key: str | None = None,
        attribute: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add a string field checked by the letters-only rule."""
        return self._add(field_name, str, LettersOnlyValidator(), source_key, attribute)

    def add_minimum_age(
        self,
        field_name: str,
        source_key: str | None = None,
        attribute: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add an integer field checked by the minimum-age rule."""
        return self._add(field_name, int, MinimumAgeValidator(), source_key, attribute)

    def add_unvalidated(
        self,
        field_name: str,
        field_type: type = str,
        source_key: str | None = None,
        attribute: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add a field that is bound but carries no rule."""
        return self._add(field_name, field_type, None, source_key, attribute)

    def _add(self, field_name, field_type, validator, source_key, attribute) -> "RuleConfigBuilder":
        self.bindings.append(FieldBinding(
            field_name=field_name,
            source_key=source_key or _camel(field_name),
            attribute=attribute or _camel(field_name),
            field_type=field_type,
            validator=validator,
        ))
        return self

    def build(self) -> list[FieldBinding]:
        """Build and return the bindings."""
        return list(self.bindings)

    def build_schema(self, name: str, model: type[BaseModel]) -> RequestSchema:
        """Build a RequestSchema from the bindings."""
        return RequestSchema(name, model, self.build())


class RuleConfigLoader:
    """
    Loads request schemas from YAML configuration files.

    Expected YAML format:
    ```yaml
    schemas:
      User:
        model: User
        fields:
          Name:
            source: name
            type: string
            rule: letters_only
          Age:
            source: age
            type: integer
            rule: minimum_age
    ```

    A field has at most one ``rule``; ``source`` and ``attribute`` default to
    the camel-cased field name, ``type`` defaults to string and ``model``
    defaults to the schema name.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_schemas(self) -> list[RequestSchema]:
        """
        Load and parse request schemas from the YAML file.

        Returns:
            List of RequestSchema objects

        Raises:
            ValueError: If YAML is invalid or a schema definition is malformed
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict) or "schemas" not in config:
            raise ValueError("Configuration file must contain 'schemas' section")

        if not isinstance(config["schemas"], dict):
            raise ValueError("'schemas' must be a mapping of schema name to definition")

        schemas = []
        for schema_name, schema_def in config["schemas"].items():
            schema_def = schema_def or {}
            if not isinstance(schema_def, dict):
                raise ValueError(f"Schema '{schema_name}' must be a mapping")
            schemas.append(self._parse_schema(schema_name, schema_def))

        return schemas

    def load_registry(self) -> SchemaRegistry:
        """Load the schemas into a new SchemaRegistry."""
        return SchemaRegistry(self.load_schemas())

    def _parse_schema(self, schema_name: str, schema_def: dict[str, Any]) -> RequestSchema:
        model_name = schema_def.get("model", schema_name)
        model = MODEL_REGISTRY.get(model_name)
        if model is None:
            raise ValueError(f"Unknown model '{model_name}' for schema '{schema_name}'")

        fields = schema_def.get("fields")
        if not isinstance(fields, dict) or not fields:
            raise ValueError(f"Schema '{schema_name}' must define a 'fields' mapping")

        bindings = []
        for field_name, field_def in fields.items():
            field_def = field_def or {}
            if not isinstance(field_def, dict):
                raise ValueError(
                    f"Field '{field_name}' in schema '{schema_name}' must be a mapping "
                    f"(got {type(field_def).__name__})"
                )
            bindings.append(self._parse_field(schema_name, field_name, field_def))
        return RequestSchema(schema_name, model, bindings)

    def _parse_field(self, schema_name: str, field_name: str, field_def: dict[str, Any]) -> FieldBinding:
        """
        Parse a single field definition.

        Raises:
            ValueError: If the type or rule is unknown, or more than one rule is given
        """
        if "rules" in field_def:
            raise ValueError(
                f"Field '{field_name}' in schema '{schema_name}' declares 'rules'; "
                "at most one 'rule' is allowed per field"
            )

        type_name = field_def.get("type", "string")
        field_type = TYPE_MAPPING.get(str(type_name).lower())
        if field_type is None:
            raise ValueError(f"Unknown type '{type_name}' for field '{field_name}'")

        validator = None
        rule_type = field_def.get("rule")
        if rule_type is not None:
            if not isinstance(rule_type, str):
                raise ValueError(
                    f"Field '{field_name}' in schema '{schema_name}' must name a single "
                    "'rule'; at most one rule is allowed per field"
                )
            validator_class = VALIDATOR_REGISTRY.get(rule_type)
            if validator_class is None:
                raise ValueError(f"Unknown rule type: {rule_type}")
            validator = validator_class(field_def.get("params"))

        return FieldBinding(
            field_name=field_name,
            source_key=field_def.get("source", _camel(field_name)),
            attribute=field_def.get("attribute", _camel(field_name)),
            field_type=field_type,
            validator=validator,
        )


def build_default_registry() -> SchemaRegistry:
    """
    Build the registry of schemas served by the API.

    - User: body {"name", "age"}, errors keyed "Name" / "Age"
    - LettersOnlyQuery: query parameter "text"
    - LegalAgeQuery: query parameter "value"
    """
    return SchemaRegistry([
        RuleConfigBuilder()
        .add_letters_only("Name")
        .add_minimum_age("Age")
        .build_schema("User", User),
        RuleConfigBuilder()
        .add_letters_only("text")
        .build_schema("LettersOnlyQuery", LettersOnlyQuery),
        RuleConfigBuilder()
        .add_minimum_age("value")
        .build_schema("LegalAgeQuery", LegalAgeQuery),
    ])
