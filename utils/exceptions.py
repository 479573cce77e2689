"""Custom exception hierarchy for season-streams.

Provides specific exception types for different failure scenarios,
making error handling more precise and testable.
"""


class SeasonStreamsError(Exception):
    """Base exception for all season-streams errors."""

    pass


class SourceError(SeasonStreamsError):
    """Raised when a streaming source request or payload fails.

    Caught by the streaming resolver and treated as "no platforms from this source".
    """

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


class ListingFetchError(SeasonStreamsError):
    """Raised when the seasonal listing cannot be fetched.

    This is the only failure surfaced to the user.
    """

    pass
