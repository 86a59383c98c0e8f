"""Domain error taxonomy and exception handlers with request_id in responses.

Services raise these errors; the handlers below render them as
``{"detail": ..., "code": ..., "request_id": ...}``.
"""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.core.logging import get_logger

logger = get_logger(__name__)


class DomainError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BAD_REQUEST"
    default_message: str = "Request could not be processed"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        extra: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        self.extra = extra or {}
        super().__init__(self.message)


# --- Validation ---


class ValidationError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_message = "Validation error"


# --- Conflicts ---


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    default_message = "Conflicting state"


class DuplicateRegistrationError(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "DUPLICATE_REGISTRATION"
    default_message = "A member with this email or membership number already exists"


class ApplicationExistsError(ConflictError):
    code = "APPLICATION_EXISTS"
    default_message = "An application for this applicant already exists"


class PersonaConflictError(ConflictError):
    code = "PERSONA_CONFLICT"
    default_message = "Account already holds a different persona"


class AccountExistsError(ConflictError):
    code = "USER_ALREADY_EXISTS"
    default_message = "An account with this email already exists. Please log in instead."


# --- Authentication / authorization ---


class AuthenticationError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"
    default_message = "Missing or invalid authorization header"


class AuthorizationError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    default_message = "Not allowed"


class UserNotRegisteredError(AuthorizationError):
    code = "USER_NOT_REGISTERED"
    default_message = "No account exists for this identity"


class MemberProfileRequiredError(AuthorizationError):
    code = "MEMBER_PROFILE_REQUIRED"
    default_message = "Member profile required"


class VerificationRequiredError(AuthorizationError):
    code = "VERIFICATION_REQUIRED"
    default_message = "You must be a verified member to perform this action"


# --- Not found ---


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Not found"


class MemberNotFoundError(NotFoundError):
    code = "MEMBER_NOT_FOUND"
    default_message = "Member profile not found"

    def __init__(self, message: str | None = None):
        super().__init__(message, extra={"requires_registration": True})


class ProfileNotFoundError(NotFoundError):
    code = "PROFILE_NOT_FOUND"
    default_message = "Profile not found"


class InvalidInvitationError(NotFoundError):
    code = "INVALID_TOKEN"
    default_message = "Invalid or expired invitation token"


# --- External services ---


class ExternalServiceError(DomainError):
    status_code = status.HTTP_502_BAD_GATEWAY
    code = "EXTERNAL_SERVICE_ERROR"
    default_message = "An external service failed"


class PaymentProviderError(ExternalServiceError):
    code = "PAYMENT_PROVIDER_ERROR"
    default_message = "Payment account provisioning failed"


class UserLinkingFailedError(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "USER_LINKING_FAILED"
    default_message = "Registration failed while linking your account. Please try again."


def error_body(detail: Any, code: str | None, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"detail": detail}
    if code:
        body["code"] = code
    body.update(extra)
    body["request_id"] = correlation_id.get()
    return body


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                code=exc.code,
                path=request.url.path,
                error=exc.message,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.code, **exc.extra),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                "Validation error",
                ValidationError.code,
                errors=jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.detail, None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
