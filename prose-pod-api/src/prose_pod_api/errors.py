"""Errors returned by the API, with the HTTP status they map to."""

from typing import Any

from fastapi import status


class ApiError(Exception):
    """Base class of errors rendered as an ``ErrorResponse``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "internal_server_error"
    default_message: str = "An unexpected error occurred"
    recovery_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message or self.default_message
        self.details = details
        self.headers = headers
        super().__init__(self.message)

    def response_details(self) -> dict[str, Any] | None:
        if not self.recovery_suggestions:
            return self.details
        return {**(self.details or {}), "recovery_suggestions": list(self.recovery_suggestions)}


class ServerConfigNotInitialized(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "server_config_not_initialized"
    default_message = "XMPP server not initialized."
    recovery_suggestions = ["Set `PROSE_POD_SERVER_DOMAIN` to initialize it."]


class PodAddressNotInitialized(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "pod_address_not_initialized"
    default_message = "Pod address not initialized."
    recovery_suggestions = ["Call `PUT /v1/pod/config/address` to initialize it."]


class InvalidRetryInterval(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "bad_request"
    default_message = (
        "Invalid retry interval. Authorized values must be between 1 second and 1 minute (inclusive)."
    )


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "unauthorized"
    default_message = "Invalid authentication credentials"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, details, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "forbidden"
    default_message = "This action requires administrator rights"
