"""Exceptions raised inside the chat engine."""


class ChatEngineError(Exception):
    """Base class for chat engine errors."""


class RemoteServiceError(ChatEngineError):
    """The remote AI service failed or returned an unusable reply."""


class RateLimitExceeded(RemoteServiceError):
    """Too many remote requests for one user inside the rate window."""

    def __init__(self, user_id: str, retry_after: float):
        super().__init__(
            f"Rate limit exceeded for {user_id}, retry in {retry_after:.0f}s"
        )
        self.user_id = user_id
        self.retry_after = retry_after


class SnapshotUnavailableError(ChatEngineError):
    """The team-data source could not produce a snapshot."""
