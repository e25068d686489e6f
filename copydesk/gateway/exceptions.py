from typing import Any


class APIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {"detail": str(self)}


class BodyTooLargeError(APIError):
    """Raised when an article body exceeds the configured size - maps to HTTP 413."""

    status_code = 413

    def __init__(self, size: int, limit: int, *, message: str | None = None):
        super().__init__(message or f"Body is {size} characters, limit is {limit}")
        self.size = size
        self.limit = limit

    def to_dict(self) -> dict[str, Any]:
        return {"detail": str(self), "size": self.size, "limit": self.limit}


class UnsupportedVideoUrlError(APIError):
    """Raised when a video URL matches no supported provider - maps to HTTP 422."""

    status_code = 422

    def __init__(self, url: str, reason: str):
        super().__init__(reason)
        self.url = url

    def to_dict(self) -> dict[str, Any]:
        return {"detail": str(self), "url": self.url}
