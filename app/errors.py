"""Service errors rendered as ``{"ok": false, "error": ...}`` envelopes."""
from fastapi import status


class ServiceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class UpstreamError(ServiceError):
    """A collaborator (Sheets, Xendit, Resend) failed or answered non-2xx."""

    status_code = status.HTTP_502_BAD_GATEWAY


class ConfigurationError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
