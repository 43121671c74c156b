"""Typed client for the SonarQube Web API."""

from __future__ import annotations

from .auth import Anonymous, AuthProvider, BasicAuth, TokenAuth
from .client import SonarQubeClient, __version__
from .exceptions import (
    SonarQubeAuthError,
    SonarQubeDecodeError,
    SonarQubeError,
    SonarQubeHTTPError,
    SonarQubeNotFoundError,
    SonarQubeServerError,
    SonarQubeTimeoutError,
    SonarQubeTransportError,
    SonarQubeValidationError,
)
from .pagination import MAX_PAGE_SIZE, iter_pages
from .request_options import RequestOptions
from .security import verify_webhook_signature
from .streams import EventStream, SSEEvent

__all__ = [
    "Anonymous",
    "AuthProvider",
    "BasicAuth",
    "EventStream",
    "MAX_PAGE_SIZE",
    "RequestOptions",
    "SSEEvent",
    "SonarQubeAuthError",
    "SonarQubeClient",
    "SonarQubeDecodeError",
    "SonarQubeError",
    "SonarQubeHTTPError",
    "SonarQubeNotFoundError",
    "SonarQubeServerError",
    "SonarQubeTimeoutError",
    "SonarQubeTransportError",
    "SonarQubeValidationError",
    "TokenAuth",
    "__version__",
    "iter_pages",
    "verify_webhook_signature",
]
