from __future__ import annotations

from typing import Optional


class PhotoInsightError(RuntimeError):
    """Base class for failures raised by photo_insight components."""


class ConfigurationError(PhotoInsightError):
    """Raised when the settings file is missing, unreadable, or incomplete."""


class ServiceError(PhotoInsightError):
    """Raised when a call to the vision service fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class ImageProcessingError(PhotoInsightError):
    """Raised when image bytes cannot be decoded, drawn on, or encoded."""
