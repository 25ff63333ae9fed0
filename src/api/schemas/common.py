"""Common Pydantic schemas shared across the API."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """One error entry. ``param`` names the offending field when there is one."""

    msg: str
    param: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    errors: list[ErrorDetail]


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
