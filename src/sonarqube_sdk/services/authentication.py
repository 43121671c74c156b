"""Web session authentication."""

from __future__ import annotations

from typing import Annotated

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import Required


class LoginOption(OptionModel):
    login: Annotated[str | None, Required()] = None
    password: Annotated[str | None, Required()] = None


class AuthenticationValidation(SonarQubeModel):
    valid: bool = False


class AuthenticationService(Service):
    name = "authentication"

    @endpoint("POST", "/api/authentication/login", options=LoginOption)
    def login(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Open a web session with a login and password."""

    @endpoint("POST", "/api/authentication/logout")
    def logout(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Close the current web session."""

    @endpoint("GET", "/api/authentication/validate", result=AuthenticationValidation)
    def validate(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> AuthenticationValidation:
        """Report whether the session's credentials are valid."""
