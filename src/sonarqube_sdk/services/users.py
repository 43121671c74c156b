"""User accounts."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel, Repeated
from ..pagination import PaginationArgs, Paging
from ..request_options import RequestOptions
from ..rules import MaxLength, MinLength, Required, RequiredIf

MIN_LOGIN_LENGTH = 2
MAX_LOGIN_LENGTH = 255
MAX_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 100
MIN_PASSWORD_LENGTH = 12

Login = Annotated[str | None, Required(), MinLength(MIN_LOGIN_LENGTH), MaxLength(MAX_LOGIN_LENGTH)]


class CreateOption(OptionModel):
    email: Annotated[str | None, MaxLength(MAX_EMAIL_LENGTH)] = None
    local: bool | None = None
    login: Login = None
    name: Annotated[str | None, Required(), MaxLength(MAX_NAME_LENGTH)] = None
    password: Annotated[str | None, MinLength(MIN_PASSWORD_LENGTH)] = None
    scm_accounts: Annotated[list[str] | None, Repeated(), Field(alias="scmAccount")] = None

    conditional_rules = (RequiredIf("password", "local", (True,)),)


class DeactivateOption(OptionModel):
    login: Annotated[str | None, Required()] = None
    anonymize: bool | None = None


class SearchOption(PaginationArgs):
    deactivated: bool | None = None
    external_identity: str | None = None
    last_connected_after: datetime | date | str | None = None
    last_connected_before: datetime | date | str | None = None
    managed: bool | None = None
    query: Annotated[str | None, Field(alias="q")] = None
    sl_last_connected_after: datetime | date | str | None = None
    sl_last_connected_before: datetime | date | str | None = None


class UpdateOption(OptionModel):
    email: Annotated[str | None, MaxLength(MAX_EMAIL_LENGTH)] = None
    login: Annotated[str | None, Required()] = None
    name: Annotated[str | None, MaxLength(MAX_NAME_LENGTH)] = None
    scm_accounts: Annotated[list[str] | None, Repeated(), Field(alias="scmAccount")] = None


class User(SonarQubeModel):
    login: str | None = None
    name: str | None = None
    email: str | None = None
    active: bool = False
    local: bool = False
    managed: bool = False
    avatar: str | None = None
    external_identity: str | None = None
    external_provider: str | None = None
    groups: list[str] = Field(default_factory=list)
    scm_accounts: list[str] = Field(default_factory=list)
    last_connection_date: str | None = None
    sonar_lint_last_connection_date: str | None = None
    tokens_count: int = 0


class UserEnvelope(SonarQubeModel):
    user: User = Field(default_factory=User)


class UsersSearch(SonarQubeModel):
    users: list[User] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


class UsersService(Service):
    name = "users"

    @endpoint("POST", "/api/users/create", options=CreateOption, result=UserEnvelope)
    def create(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> UserEnvelope:
        """Create a user. Local users need a password of at least 12 characters."""

    @endpoint("POST", "/api/users/deactivate", options=DeactivateOption, result=UserEnvelope)
    def deactivate(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> UserEnvelope:
        """Deactivate a user, optionally anonymizing their personal data."""

    @endpoint("GET", "/api/users/search", options=SearchOption, result=UsersSearch)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> UsersSearch:
        """Search active users, or deactivated ones with ``deactivated=True``."""

    @endpoint("POST", "/api/users/update", options=UpdateOption, result=UserEnvelope)
    def update(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> UserEnvelope:
        """Update a user's name, email or SCM accounts."""
