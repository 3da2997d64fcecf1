"""
Error taxonomy shared by services and routers.

Services raise these; the exception handlers registered in ``guardian.main``
turn them into ``{"error": message}`` responses with the matching status.
"""

from typing import Optional

from fastapi import status


class GuardianError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(GuardianError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(GuardianError):
    # Duplicate signups are reported as a plain 400, not 409
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class AuthError(GuardianError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class ForbiddenError(GuardianError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin required"


class NotFoundError(GuardianError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ServerError(GuardianError):
    pass
