"""
Unit tests for request schemas, the field binder and the schema registry.
"""

import pytest

from src.core.models import FieldBinding, LegalAgeQuery, User
from src.core.rules import RuleConfigBuilder
from src.core.schema import PAYLOAD_ERROR_KEY, FieldBinder, RequestSchema, SchemaRegistry
from src.core.validators import LettersOnlyValidator, MinimumAgeValidator


class TestRequestSchema:
    """Tests for RequestSchema"""

    def test_duplicate_field_raises_error(self):
        """Test a field can carry at most one binding"""
        bindings = [
            FieldBinding(field_name="Name", source_key="name", attribute="name",
                         validator=LettersOnlyValidator()),
            FieldBinding(field_name="Name", source_key="name", attribute="name",
                         validator=LettersOnlyValidator()),
        ]
        with pytest.raises(ValueError, match="bound more than once"):
            RequestSchema("User", User, bindings)

    def test_unknown_attribute_raises_error(self):
        bindings = [FieldBinding(field_name="Email", source_key="email", attribute="email")]
        with pytest.raises(ValueError, match="no attribute 'email'"):
            RequestSchema("User", User, bindings)

    def test_get_binding(self, user_schema):
        assert user_schema.get_binding("Age").field_type is int
        assert user_schema.get_binding("Missing") is None


class TestFieldBinder:
    """Tests for FieldBinder"""

    def test_bind_json_body(self, user_schema):
        result = FieldBinder(user_schema).bind({"name": "ArthurDent", "age": 42})

        assert isinstance(result.model, User)
        assert result.model.name == "ArthurDent"
        assert result.model.age == 42
        assert result.values == {"Name": "ArthurDent", "Age": 42}
        assert result.errors == {}

    def test_keys_are_case_insensitive(self, user_schema):
        result = FieldBinder(user_schema).bind({"Name": "Ford", "AGE": 30})
        assert result.model.name == "Ford"
        assert result.model.age == 30

    def test_absent_and_null_fields_bind_none(self, user_schema):
        result = FieldBinder(user_schema).bind({"name": None})

        assert result.model.name is None
        assert result.model.age is None
        assert result.errors == {}

    def test_query_string_coerced_to_int(self, registry):
        result = FieldBinder(registry.get("LegalAgeQuery")).bind({"value": "42"})

        assert isinstance(result.model, LegalAgeQuery)
        assert result.model.value == 42

    def test_unconvertible_value_records_binding_error(self, registry):
        result = FieldBinder(registry.get("LegalAgeQuery")).bind({"value": "abc"})

        assert result.model.value is None
        assert result.errors == {"value": ["The value 'abc' is not valid for value."]}

    @pytest.mark.parametrize("age", [18.0, True, "42"])
    def test_strict_binding_rejects_non_integer_age(self, user_schema, age):
        result = FieldBinder(user_schema).bind({"name": "Arthur", "age": age}, strict=True)

        assert result.model.age is None
        assert result.errors == {"Age": [f"The value '{age}' is not valid for Age."]}

    def test_lax_binding_coerces_numeric_string(self, user_schema):
        result = FieldBinder(user_schema).bind({"name": "Arthur", "age": "42"})
        assert result.model.age == 42

    def test_number_is_not_bound_to_string_field(self, user_schema):
        result = FieldBinder(user_schema).bind({"name": 42, "age": 42})

        assert result.model.name is None
        assert "Name" in result.errors

    def test_non_object_payload(self, user_schema):
        result = FieldBinder(user_schema).bind(["ArthurDent", 42])

        assert PAYLOAD_ERROR_KEY in result.errors
        assert result.model.name is None

    def test_none_payload_binds_empty(self, user_schema):
        result = FieldBinder(user_schema).bind(None)
        assert result.errors == {}
        assert result.model == User()

    def test_unvalidated_field_is_bound(self):
        schema = RuleConfigBuilder() \
            .add_letters_only("Name") \
            .add_unvalidated("Age", field_type=int) \
            .build_schema("User", User)

        result = FieldBinder(schema).bind({"name": "Trillian", "age": "7"})
        assert result.model.age == 7


class TestSchemaRegistry:
    """Tests for SchemaRegistry"""

    def test_default_schemas(self, registry):
        assert registry.names() == ["LegalAgeQuery", "LettersOnlyQuery", "User"]
        assert "User" in registry
        assert len(registry) == 3

    def test_unknown_schema(self, registry):
        with pytest.raises(KeyError, match="Unknown schema 'Nope'"):
            registry.get("Nope")

    def test_duplicate_registration(self, user_schema):
        registry = SchemaRegistry([user_schema])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(user_schema)

    def test_validators_are_shared_instances(self, user_schema):
        """Test rules are plain objects without per-request state"""
        assert isinstance(user_schema.get_binding("Name").validator, LettersOnlyValidator)
        assert isinstance(user_schema.get_binding("Age").validator, MinimumAgeValidator)
        assert vars(user_schema.get_binding("Name").validator) == {"parameters": {}}
