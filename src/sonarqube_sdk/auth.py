"""Authentication strategies attached to every request of a client session.

The set is closed: anonymous, HTTP Basic with a login and password, and a user
token. Each strategy is an :class:`httpx.Auth`, so httpx applies it to the
outgoing request and the client never edits ``Authorization`` itself.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Generator

import httpx


def _basic_header(username: str, password: str) -> str:
    credentials = f"{username}:{password}".encode()
    return "Basic " + base64.b64encode(credentials).decode("ascii")


class Anonymous(httpx.Auth):
    """Sends no credentials."""

    def __repr__(self) -> str:
        return "Anonymous()"


@dataclass(frozen=True)
class BasicAuth(httpx.Auth):
    username: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.username:
            raise ValueError("username is required for basic authentication")

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = _basic_header(self.username, self.password)
        yield request


@dataclass(frozen=True)
class TokenAuth(httpx.Auth):
    """User token authentication.

    SonarQube 10 and later accept ``Authorization: Bearer <token>``. Older
    servers expect the token as the Basic username with an empty password;
    pass ``scheme="basic"`` for those.
    """

    token: str = field(repr=False)
    scheme: str = "bearer"

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("token is required for token authentication")
        if self.scheme not in {"bearer", "basic"}:
            raise ValueError(f"Unsupported token scheme: {self.scheme}")

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if self.scheme == "basic":
            request.headers["Authorization"] = _basic_header(self.token, "")
        else:
            request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


AuthProvider = Anonymous | BasicAuth | TokenAuth
