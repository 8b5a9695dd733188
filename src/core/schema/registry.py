"""
Schema registry: lookup of request schemas by name.
"""

from .request_schema import RequestSchema


class SchemaRegistry:
    """
    In-memory registry of request schemas.

    Schemas are immutable once registered, so a registry can be shared by
    every request the application serves.
    """

    def __init__(self, schemas: list[RequestSchema] | None = None):
        self._schemas: dict[str, RequestSchema] = {}
        for schema in schemas or []:
            self.register(schema)

    def register(self, schema: RequestSchema) -> None:
        """
        Register a schema.

        Raises:
            ValueError: If a schema with the same name is already registered
        """
        if schema.name in self._schemas:
            raise ValueError(f"Schema '{schema.name}' is already registered")
        self._schemas[schema.name] = schema

    def get(self, name: str) -> RequestSchema:
        """
        Get a schema by name.

        Raises:
            KeyError: If no schema is registered under that name
        """
        try:
            return self._schemas[name]
        except KeyError:
            available = ", ".join(sorted(self._schemas)) or "none"
            raise KeyError(f"Unknown schema '{name}' (available: {available})") from None

    def names(self) -> list[str]:
        return sorted(self._schemas)

    def __contains__(self, name: str) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
