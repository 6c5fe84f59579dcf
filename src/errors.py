"""Error types for tierlist.

Everything the app recovers from derives from TierListError. Controllers catch
it at the UI boundary and turn it into a notification.
"""


class TierListError(Exception):
    """Base class for recoverable tierlist failures."""


class NetworkFailure(TierListError):
    """A request failed, timed out, or returned an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationFailure(TierListError):
    """Required input was missing or malformed before a request was made."""


class NotFoundOrForbidden(TierListError):
    """The server refused access (401/403) or the record does not exist (404)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StaleReferenceFailure(TierListError):
    """A drop target refers to a container or item that no longer exists."""
