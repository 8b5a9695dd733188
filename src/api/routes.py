"""
API route handlers.

Each endpoint declares its validated model as a dependency: the handler only
runs once every field rule has passed. The raw request is read by that
dependency, so the request body and query parameters are described to
OpenAPI through ``openapi_extra``.
"""

from fastapi import APIRouter, Depends

from src.core.models import LegalAgeQuery, LettersOnlyQuery, User

from .validation import validated_request

router = APIRouter(prefix="/api", tags=["validation"])


def _query_parameter(name: str, schema: dict, description: str) -> dict:
    return {
        "name": name,
        "in": "query",
        "required": False,
        "schema": schema,
        "description": description,
    }


@router.post(
    "/test-letters-only",
    openapi_extra={
        "parameters": [
            _query_parameter("text", {"type": "string"}, "Letters only (^[a-zA-Z]*$)"),
        ],
    },
)
async def letters_only(
    query: LettersOnlyQuery = Depends(validated_request("LettersOnlyQuery", source="query")),
) -> str:
    """Echo `text` when it contains letters only."""
    return query.text


@router.post(
    "/test-of-legal-age",
    openapi_extra={
        "parameters": [
            _query_parameter("value", {"type": "integer"}, "Age, at least 18"),
        ],
    },
)
async def of_legal_age(
    query: LegalAgeQuery = Depends(validated_request("LegalAgeQuery", source="query")),
) -> int:
    """Echo `value` when it is at least the legal age."""
    return query.value


@router.post(
    "/test-user",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": User.model_json_schema()}},
        },
    },
)
async def create_user(user: User = Depends(validated_request("User", source="body"))) -> User:
    """Echo the user when both name and age are valid."""
    return user
