"""Error response models following RFC 7807 Problem Details."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from txgroups.domain.errors import ErrorKind

RFC_9110_URL = "https://datatracker.ietf.org/doc/html/rfc9110#section-"

# Sections of RFC 9110 describing the status codes this API returns
status_to_section: dict[int, str] = {
    400: "15.5.1",
    404: "15.5.5",
    409: "15.5.10",
    422: "15.5.21",
    500: "15.6.1",
    503: "15.6.4",
}

# HTTP status for each domain error kind
kind_to_status: dict[ErrorKind, int] = {
    ErrorKind.GROUP_FULL: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.TRANSIENT_TRANSACTION: 503,
    ErrorKind.RETRIES_EXHAUSTED: 503,
    ErrorKind.INVALID_SNAPSHOT: 500,
    ErrorKind.STORAGE: 500,
}


def get_rfc_section_url(status: int) -> str:
    """Get the RFC section URL describing an HTTP status code.

    Unknown codes point at 500 Internal Server Error.
    """
    return f"{RFC_9110_URL}{status_to_section.get(status, status_to_section[500])}"


class ValidationErrorDetail(BaseModel):
    """Validation error detail for a specific request field."""

    type: str = Field(..., description="Error type")
    loc: tuple[str, ...] = Field(..., description="Error location in request")
    msg: str = Field(..., description="Human-readable error message")
    input: Any = Field(None, description="Invalid input value")


class ProblemDetail(BaseModel):
    """Problem Detail response as defined in RFC 7807.

    Attributes:
        type: URI reference to the problem type (auto-generated from status).
        title: Short, human-readable summary of the problem type.
        status: HTTP status code.
        detail: Human-readable explanation specific to this occurrence.
        instance: URI reference identifying the specific occurrence.
        kind: Domain error kind, for errors raised by the group service.
        errors: List of validation errors (for 422 responses).
    """

    type: str | None = Field(
        default=None,
        description="URI reference to the problem type (RFC 7807)",
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        json_schema_extra={"example": "Group Full"},
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        json_schema_extra={"example": 409},
    )
    detail: str | None = Field(
        default=None,
        description="Human-readable explanation",
        json_schema_extra={"example": "adding user u1 to group g1: group is full"},
    )
    instance: str | None = Field(
        default=None,
        description="URI reference identifying this occurrence",
        json_schema_extra={"example": "/groups/g1/members"},
    )
    kind: ErrorKind | None = Field(
        default=None,
        description="Domain error kind",
        json_schema_extra={"example": "group_full"},
    )
    errors: list[ValidationErrorDetail] | None = Field(
        default=None,
        description="Validation errors (for 422 responses)",
    )

    @model_validator(mode="before")
    @classmethod
    def set_default_type(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Set the default type based on the status if not provided."""
        if values.get("type") is None:
            values["type"] = get_rfc_section_url(values.get("status", 500))
        return values
