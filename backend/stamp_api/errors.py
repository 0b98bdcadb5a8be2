from __future__ import annotations


class StampApiError(Exception):
    """Base class for every error raised by the API."""


class UploadValidationError(StampApiError):
    """The caller sent an unusable upload (missing file or name)."""


class ConfigError(StampApiError):
    """Required configuration is missing."""


class LinkError(StampApiError):
    """A pinning phase failed. ``phase`` is ``"image"`` or ``"metadata"``."""

    def __init__(self, phase: str, message: str):
        super().__init__(message)
        self.phase = phase


class LinkTimeoutError(LinkError):
    pass


class LinkServiceError(LinkError):
    def __init__(self, phase: str, message: str, status_code: int | None = None):
        super().__init__(phase, message)
        self.status_code = status_code


class LinkTransportError(LinkError):
    pass
