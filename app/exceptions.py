"""Application exception classes."""
from typing import Any


class GoogleWeatherApiError(Exception):
    """Raised when the Google Weather API answers with a non-2xx status."""

    def __init__(self, status_code: int, details: Any) -> None:
        super().__init__(f"Google Weather API returned HTTP {status_code}")
        self.status_code = status_code
        self.details = details
