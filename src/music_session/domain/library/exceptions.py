"""Track lookup exceptions for error handling."""


class TrackLookupError(Exception):
    """Base exception for track lookup operations.

    ``description`` is a human-readable message suitable for display.
    """

    description = "Track lookup failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.description)
        if message:
            self.description = message


class InvalidQueryError(TrackLookupError):
    """Raised when a query cannot be turned into a lookup request."""

    description = "Invalid search query"


class LookupRequestError(TrackLookupError):
    """Raised when the lookup service cannot be reached or returns an error."""

    description = "No data received"


class LookupDecodeError(TrackLookupError):
    """Raised when the lookup response cannot be decoded."""

    description = "Failed to decode response"
