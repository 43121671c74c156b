"""SDK-specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    import httpx


class SonarQubeError(Exception):
    """Base exception for all SonarQube SDK failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
        body: object = None,
        headers: Mapping[str, str] | None = None,
        response: "httpx.Response | None" = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.body = body
        self.headers = dict(headers) if headers is not None else {}
        self.response = response
        self.cause = cause

    @property
    def message(self) -> str:
        return str(self.args[0])

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        if self.status_code is None:
            return str(self.args[0])
        parts = [f"{self.status_code}"]
        if self.error_code:
            parts.append(self.error_code)
        return " ".join(parts) + f": {self.args[0]}"


class SonarQubeValidationError(SonarQubeError):
    """Raised before any request is sent when options break a field rule.

    ``field`` names the offending option and ``constraint`` the kind of rule
    that failed (``required``, ``max_length``, ``min_length``, ``range``,
    ``enum``, ``type`` or ``unknown``). No response exists for this error.
    """

    def __init__(self, field: str, message: str, *, constraint: str = "invalid") -> None:
        super().__init__(f"validation error for field {field!r}: {message}", error_code=constraint)
        self.field = field
        self.constraint = constraint
        self.reason = message


class SonarQubeHTTPError(SonarQubeError):
    """Raised for HTTP non-success responses."""

    @property
    def is_unavailable(self) -> bool:
        """True for 503, which SonarQube returns while indexing or starting up."""
        return self.status_code == 503


class SonarQubeAuthError(SonarQubeHTTPError):
    """Raised for authentication and authorization failures."""


class SonarQubeNotFoundError(SonarQubeHTTPError):
    """Raised for HTTP 404 responses."""


class SonarQubeServerError(SonarQubeHTTPError):
    """Raised for HTTP 5xx responses."""


class SonarQubeTransportError(SonarQubeError):
    """Raised for transport-level failures like DNS and TCP errors."""


class SonarQubeTimeoutError(SonarQubeTransportError):
    """Raised when a request exceeds configured timeout."""


class SonarQubeDecodeError(SonarQubeError):
    """Raised when a successful response body cannot be decoded."""
