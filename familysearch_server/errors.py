"""Exceptions raised by the FamilySearch client and caught at the tool boundary."""


class FamilySearchError(Exception):
    """Base class for all FamilySearch server failures."""


class NotConfiguredError(FamilySearchError):
    def __init__(self, message: str = "FamilySearch client ID is not configured"):
        super().__init__(message)


class NotAuthenticatedError(FamilySearchError):
    def __init__(self, message: str = "No access token available"):
        super().__init__(message)


class ApiError(FamilySearchError):
    """A non-2xx response or transport failure from the FamilySearch API.

    status_code is None when the request never produced a response
    (connection refused, timeout, DNS failure).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401
