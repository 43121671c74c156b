"""User access tokens."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import MaxLength, OneOf, Required, RequiredIf

MAX_TOKEN_NAME_LENGTH = 100

TOKEN_TYPES = ("USER_TOKEN", "GLOBAL_ANALYSIS_TOKEN", "PROJECT_ANALYSIS_TOKEN")


class GenerateOption(OptionModel):
    expiration_date: date | str | None = None
    login: str | None = None
    name: Annotated[str | None, Required(), MaxLength(MAX_TOKEN_NAME_LENGTH)] = None
    project_key: str | None = None
    type: Annotated[str | None, OneOf(*TOKEN_TYPES)] = None

    conditional_rules = (RequiredIf("project_key", "type", "PROJECT_ANALYSIS_TOKEN"),)


class RevokeOption(OptionModel):
    login: str | None = None
    name: Annotated[str | None, Required()] = None


class SearchOption(OptionModel):
    login: str | None = None


class TokenProject(SonarQubeModel):
    key: str | None = None
    name: str | None = None


class UserToken(SonarQubeModel):
    name: str | None = None
    type: str | None = None
    created_at: str | None = None
    expiration_date: str | None = None
    last_connection_date: str | None = None
    is_expired: bool = False
    project: TokenProject | None = None


class GeneratedToken(SonarQubeModel):
    """The ``token`` value is only ever returned here, once."""

    login: str | None = None
    name: str | None = None
    token: str | None = None
    type: str | None = None
    created_at: str | None = None
    expiration_date: str | None = None

    def __repr__(self) -> str:
        return f"GeneratedToken(login={self.login!r}, name={self.name!r}, type={self.type!r})"


class UserTokens(SonarQubeModel):
    login: str | None = None
    user_tokens: list[UserToken] = Field(default_factory=list)


class UserTokensService(Service):
    name = "user_tokens"

    @endpoint("POST", "/api/user_tokens/generate", options=GenerateOption, result=GeneratedToken)
    def generate(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> GeneratedToken:
        """Generate a token for the current user, or for ``login`` as an administrator.

        ``PROJECT_ANALYSIS_TOKEN`` tokens need ``project_key``.
        """

    @endpoint("POST", "/api/user_tokens/revoke", options=RevokeOption, missing_ok=True)
    def revoke(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Revoke a token. Revoking a token that no longer exists is not an error."""

    @endpoint("GET", "/api/user_tokens/search", options=SearchOption, result=UserTokens)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> UserTokens:
        """List the tokens of a user. Token values are never returned."""
