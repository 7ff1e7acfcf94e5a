from __future__ import annotations


class EnhancementError(Exception):
    """Base for failures that end a request with `{"status": "error"}`."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(EnhancementError):
    status_code = 400


class ConfigurationError(EnhancementError):
    status_code = 500


class UpstreamError(EnhancementError):
    """The completion API answered with a non-success status; the status is forwarded as-is."""

    def __init__(self, message: str, *, status_code: int):
        super().__init__(message, status_code=status_code)


class TransportError(EnhancementError):
    status_code = 500
