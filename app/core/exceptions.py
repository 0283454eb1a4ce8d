"""
Application Exceptions

Only authentication and authorization failures are classified. Anything
else (driver errors, malformed ObjectIds) propagates to the catch-all
handler in app.main.
"""

from typing import Optional


class BistroBossError(Exception):
    """Base class for errors that map to a fixed HTTP status and message."""

    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnauthorizedError(BistroBossError):
    """No token, an invalid token, or a token for a different user."""

    status_code = 401
    message = "Unauthorized Access"


class ForbiddenError(BistroBossError):
    """Authenticated, but the stored role is not admin."""

    status_code = 403
    message = "Forbidden Access"
