from fastapi import status
from libs.result import Error


class ClientError(Exception):
    """Request-level failure rendered as {code, message} with status_code"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    """Unexpected failure rendered as a 500"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def unauthenticated() -> ClientError:
    """Single 401 for every authentication failure, whatever the cause"""
    return ClientError(
        Error("NOT_AUTHENTICATED", "Not authenticated"),
        status_code=status.HTTP_401_UNAUTHORIZED,
    )
