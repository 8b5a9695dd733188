"""
Request validation for API endpoints.

Binds the raw request onto a schema's model, runs the rule engine and
translates the outcome: an accepted request reaches its handler with the
bound model, a rejected one is answered with HTTP 400 and a problem-details
body and its handler is never invoked.
"""

import json
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.core.models import ValidationOutcome, ValidationProblemDetails, ValidationState
from src.core.rules import RuleEngine
from src.core.schema import PAYLOAD_ERROR_KEY, FieldBinder, SchemaRegistry
from src.observability.logger import get_logger
from src.observability.metrics import record_outcome, track_duration

logger = get_logger(__name__)

TRACE_ID_HEADER = "X-Request-ID"


class RequestRejected(Exception):
    """Raised when a request fails validation; carries the completed outcome."""

    def __init__(self, schema_name: str, outcome: ValidationOutcome):
        self.schema_name = schema_name
        self.outcome = outcome
        super().__init__(
            f"Request for {schema_name} rejected: {', '.join(outcome.failed_fields)}"
        )


def new_trace_id() -> str:
    """Generate a W3C traceparent-style id: 00-<trace>-<span>-00."""
    return f"00-{uuid.uuid4().hex}-{uuid.uuid4().hex[:16]}-00"


def get_trace_id(request: Request) -> str:
    """Return the request's trace id, taken from X-Request-ID when the client sent one."""
    trace_id = getattr(request.state, "trace_id", None)
    if trace_id is None:
        trace_id = request.headers.get(TRACE_ID_HEADER) or new_trace_id()
        request.state.trace_id = trace_id
    return trace_id


def build_problem_details(outcome: ValidationOutcome, trace_id: str) -> ValidationProblemDetails:
    """Build the 400 body listing every failing field."""
    errors = {name: list(messages) for name, messages in outcome.errors.items() if messages}
    return ValidationProblemDetails(traceId=trace_id, errors=errors)


class ResponseTranslator:
    """
    Turns a validation outcome into a response.

    PENDING -> {ACCEPTED, REJECTED}. Only a completed outcome can be
    translated; there are no retries.
    """

    def translate(
        self,
        outcome: ValidationOutcome,
        handler: Callable[[BaseModel], Any],
        model: BaseModel,
        trace_id: str,
    ) -> Any:
        """
        Pass an accepted request through to its handler, or reject it.

        Args:
            outcome: Completed validation outcome
            handler: Downstream handler, called with the bound model
            model: The bound request model
            trace_id: Request trace id reported in the failure body

        Returns:
            The handler's return value, or a 400 JSONResponse

        Raises:
            RuntimeError: If the outcome is still pending
        """
        if outcome.state is ValidationState.PENDING:
            raise RuntimeError("Cannot translate a pending validation outcome")

        if outcome.state is ValidationState.ACCEPTED:
            return handler(model)

        return self.rejection_response(outcome, trace_id)

    def rejection_response(self, outcome: ValidationOutcome, trace_id: str) -> JSONResponse:
        body = build_problem_details(outcome, trace_id)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(by_alias=True),
            media_type="application/problem+json",
        )


async def _read_raw(request: Request, source: str) -> tuple[Any, str | None]:
    if source == "query":
        return request.query_params, None

    body = await request.body()
    if not body:
        return {}, None
    try:
        return json.loads(body), None
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}, "The request body is not valid JSON."


def validated_request(schema_name: str, source: str = "body") -> Callable:
    """
    Build a FastAPI dependency that returns the bound, validated model.

    Args:
        schema_name: Name of the schema in the application's SchemaRegistry
        source: "body" (JSON object) or "query" (query parameters)

    Returns:
        Async dependency raising RequestRejected when validation fails
    """
    if source not in ("body", "query"):
        raise ValueError(f"Unknown request source: {source}")

    async def dependency(request: Request) -> BaseModel:
        registry: SchemaRegistry = request.app.state.schema_registry
        schema = registry.get(schema_name)
        endpoint = request.url.path

        raw, payload_error = await _read_raw(request, source)

        with track_duration(endpoint=endpoint):
            result = FieldBinder(schema).bind(raw, strict=source == "body")
            if payload_error:
                result.errors.setdefault(PAYLOAD_ERROR_KEY, []).append(payload_error)
            outcome = RuleEngine(schema).validate_binding(result)

        record_outcome(endpoint, outcome)

        if outcome.state is ValidationState.REJECTED:
            logger.warning(
                f"Rejected request for {schema.name}",
                extra={
                    "path": endpoint,
                    "trace_id": get_trace_id(request),
                    "failed_fields": outcome.failed_fields,
                },
            )
            raise RequestRejected(schema.name, outcome)

        logger.debug(f"Accepted request for {schema.name}", extra={"path": endpoint})
        return result.model

    return dependency
