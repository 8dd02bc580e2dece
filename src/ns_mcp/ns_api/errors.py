"""Error types for the NS API client."""

from __future__ import annotations


class NSApiError(Exception):
    """The NS API answered with a non-success status, or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)
