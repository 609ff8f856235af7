"""Application exception types."""

from app.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        self.headers = headers
        super().__init__(message)


class ConfigurationError(ValueError):
    """Raised at wiring time when calling code supplies an invalid policy or setting."""


__all__ = ["ApiError", "ConfigurationError"]
