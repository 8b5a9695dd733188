"""
Request models bound from incoming HTTP requests.

Fields are optional so that an absent value can be bound and then rejected
by its rule rather than by the model itself.
"""

from pydantic import BaseModel


class User(BaseModel):
    """Body of POST /api/test-user."""

    name: str | None = None
    age: int | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "ArthurDent",
                "age": 42,
            }
        }


class LettersOnlyQuery(BaseModel):
    """Query of POST /api/test-letters-only."""

    text: str | None = None


class LegalAgeQuery(BaseModel):
    """Query of POST /api/test-of-legal-age."""

    value: int | None = None
