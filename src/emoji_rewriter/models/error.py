"""Error response models for the HTTP API.

Every error response shares one JSON shape so clients can switch on
error_code alone.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    error_code: str = Field(
        ..., description="Error code (e.g. INVALID_OPTION, INPUT_TOO_LARGE)"
    )
    error_type: str = Field(..., description="Exception class name")
    message: str = Field(..., description="Human readable message")
    request_id: str | None = Field(None, description="Request ID (X-Request-ID)")
    details: dict[str, Any] | None = Field(None, description="Extra error details")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error_code": "INVALID_OPTION",
                "error_type": "InvalidOptionError",
                "message": "Invalid rewrite option 'size': must be a number or a folder name",
                "request_id": "req-xyz-456",
                "details": {"option": "size", "reason": "must be a number or a folder name"},
            }
        }
    }


class ErrorDetail(BaseModel):
    """Per-field validation error."""

    field: str = Field(..., description="Field path")
    message: str = Field(..., description="Error message")
    value: Any | None = Field(None, description="Rejected input value")


class ValidationErrorResponse(ErrorResponse):
    """Validation error response listing every failing field."""

    errors: list[ErrorDetail] = Field(
        default_factory=list, description="Per-field errors"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "error_code": "VALIDATION_ERROR",
                "error_type": "ValidationError",
                "message": "Input validation failed",
                "request_id": "req-xyz-456",
                "details": None,
                "errors": [
                    {"field": "body.text", "message": "Field required", "value": None},
                ],
            }
        }
    }
