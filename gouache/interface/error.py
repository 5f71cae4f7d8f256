"""Interface layer errors.

Maps domain and adapter errors onto HTTP responses. The code in each
response body lets the frontend pick an actionable message, for example
"sign in with the invited address" on an email mismatch.
"""

from fastapi import HTTPException, status

from gouache.adapter.error import StripeError
from gouache.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    EmailMismatchError,
    IdentityPendingError,
    IdentityUnavailableError,
    InviteUnavailableError,
    MissingFieldsError,
    NotAuthorizedError,
    NotFoundError,
    OracleUnavailableError,
    SessionCompletedError,
    ValidationError,
)

# Most specific first
ERROR_STATUS: list[tuple[type[Exception], int, str]] = [
    (IdentityPendingError, status.HTTP_503_SERVICE_UNAVAILABLE, "identity_pending"),
    (IdentityUnavailableError, status.HTTP_401_UNAUTHORIZED, "not_authenticated"),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN, "not_authorized"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (EmailMismatchError, status.HTTP_409_CONFLICT, "email_mismatch"),
    (SessionCompletedError, status.HTTP_409_CONFLICT, "already_completed"),
    (InviteUnavailableError, status.HTTP_409_CONFLICT, "invite_unavailable"),
    (MissingFieldsError, status.HTTP_422_UNPROCESSABLE_ENTITY, "missing_fields"),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid"),
    (OracleUnavailableError, status.HTTP_502_BAD_GATEWAY, "processor_unavailable"),
    (StripeError, status.HTTP_502_BAD_GATEWAY, "processor_error"),
    (BusinessRuleViolationError, status.HTTP_409_CONFLICT, "conflict"),
    (DomainError, status.HTTP_400_BAD_REQUEST, "bad_request"),
]


class InterfaceError(Exception):
    """Base interface error."""

    pass


def to_http_exception(error: Exception) -> HTTPException:
    """Translate an error raised below the interface layer.

    Args:
        error: Domain or adapter error

    Returns:
        HTTPException with a {"code", "message"} detail

    Raises:
        InterfaceError: If the error has no HTTP mapping
    """
    for error_type, status_code, code in ERROR_STATUS:
        if isinstance(error, error_type):
            detail: dict[str, object] = {"code": code, "message": str(error)}
            if isinstance(error, MissingFieldsError):
                detail["fields"] = error.fields
            if isinstance(error, InviteUnavailableError):
                detail["reason"] = error.reason
            headers = None
            if isinstance(error, IdentityPendingError):
                headers = {"Retry-After": str(error.retry_after)}
            return HTTPException(
                status_code=status_code, detail=detail, headers=headers
            )

    raise InterfaceError(f"No HTTP mapping for {type(error).__name__}") from error


# Errors routes translate with to_http_exception
MAPPED_ERRORS = (DomainError, StripeError)


def invalid_input(error: ValueError) -> HTTPException:
    """422 for input rejected by value objects."""
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"code": "invalid", "message": str(error)},
    )
