"""Domain exceptions raised by the booking and filter services.

Each exception carries a human-readable ``message`` and the HTTP status it
maps to. The handlers registered in :mod:`stayhub.main` turn them into
``{"detail": message}`` JSON responses.
"""

from fastapi import status


class StayHubError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(StayHubError):
    """A referenced booking, filter, apartment or renter does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class BusinessRuleViolation(StayHubError):
    """A structurally valid request that breaks a domain rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class OwnershipViolation(StayHubError):
    """The authenticated caller does not own the resource it is acting on."""

    status_code = status.HTTP_403_FORBIDDEN


class CollaboratorUnavailable(StayHubError):
    """A remote service failed or could not be reached."""

    status_code = status.HTTP_502_BAD_GATEWAY
