"""
ValidationProblemDetails model: the body of a rejected request.
"""

from pydantic import BaseModel, ConfigDict, Field

PROBLEM_TYPE = "https://tools.ietf.org/html/rfc7231#section-6.5.1"
PROBLEM_TITLE = "One or more validation errors occurred."


class ValidationProblemDetails(BaseModel):
    """
    Structured failure body returned with HTTP 400.

    Serialize with ``model_dump(by_alias=True)`` so the trace id is emitted
    as ``traceId``.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "type": PROBLEM_TYPE,
                "title": PROBLEM_TITLE,
                "status": 400,
                "traceId": "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-00",
                "errors": {
                    "Name": [
                        "The property, field or parameter 'Name' is invalid, because only "
                        "letters are allowed. The value of 'Name' is 'ArthurDent_42', but "
                        "must match regex pattern '^[a-zA-Z]*$'."
                    ]
                },
            }
        },
    )

    type: str = PROBLEM_TYPE
    title: str = PROBLEM_TITLE
    status: int = 400
    trace_id: str = Field(..., alias="traceId")
    errors: dict[str, list[str]] = Field(default_factory=dict)
