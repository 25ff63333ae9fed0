"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (reported as 400, see NotFoundError)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"

    # Upstream not found (404)
    GITHUB_PROFILE_NOT_FOUND = "GITHUB_PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (400)
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair did not match a stored identity."""

    def __init__(self) -> None:
        super().__init__(
            message="Invalid credentials",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )


class TokenError(AuthenticationError):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """Token is past its expiry."""

    def __init__(self) -> None:
        super().__init__(
            message="Token has expired, authorization denied",
            error_code=ErrorCode.TOKEN_EXPIRED,
        )


class InvalidSignatureError(TokenError):
    """Token signature does not verify with the server secret."""

    def __init__(self) -> None:
        super().__init__(
            message="Invalid token, authorization denied",
            error_code=ErrorCode.INVALID_TOKEN,
        )


class MalformedTokenError(TokenError):
    """Token cannot be decoded or lacks the identity claim."""

    def __init__(self, reason: str = "Malformed token") -> None:
        super().__init__(
            message=f"{reason}, authorization denied",
            error_code=ErrorCode.MALFORMED_TOKEN,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class ValidationError(AppException):
    """Input failed validation outside of request-body parsing."""

    def __init__(self, message: str, param: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"param": param} if param else None,
        )


class NotFoundError(AppException):
    """Referenced resource is absent or its id is malformed.

    Reported with status 400, not 404, to keep the client contract.
    """

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            ErrorCode.USER_NOT_FOUND,
            "User not found",
            {"user_id": user_id},
        )


class ProfileNotFoundError(NotFoundError):
    """Profile not found."""

    def __init__(self, user_id: str = "") -> None:
        super().__init__(
            ErrorCode.PROFILE_NOT_FOUND,
            "There is no profile for this user",
            {"user_id": user_id} if user_id else None,
        )


class PostNotFoundError(NotFoundError):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.POST_NOT_FOUND,
            "Post not found",
            {"post_id": post_id},
        )


class CommentNotFoundError(NotFoundError):
    """Comment not found on the post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            ErrorCode.COMMENT_NOT_FOUND,
            "Comment already deleted",
            {"comment_id": comment_id},
        )


class ExperienceNotFoundError(NotFoundError):
    """Experience entry not found on the profile."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            ErrorCode.EXPERIENCE_NOT_FOUND,
            "Experience not found",
            {"experience_id": entry_id},
        )


class EducationNotFoundError(NotFoundError):
    """Education entry not found on the profile."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            ErrorCode.EDUCATION_NOT_FOUND,
            "Education not found",
            {"education_id": entry_id},
        )


class UserAlreadyExistsError(AppException):
    """A user with this email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_ALREADY_EXISTS,
            message="User already exists",
            status_code=400,
            details={"email": email},
        )


class GitHubProfileNotFoundError(AppException):
    """GitHub did not return repositories for the username."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.GITHUB_PROFILE_NOT_FOUND,
            message="No GitHub profile found",
            status_code=404,
            details={"username": username},
        )
