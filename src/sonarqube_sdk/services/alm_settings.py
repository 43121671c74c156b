"""ALM settings: the server-side definitions of GitHub, GitLab and other platforms."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import MaxLength, Required

MAX_ALM_KEY_LENGTH = 200
MAX_ALM_URL_LENGTH = 2000
MAX_PERSONAL_ACCESS_TOKEN_LENGTH = 2000
MAX_GITHUB_APP_ID_LENGTH = 80
MAX_GITHUB_CLIENT_ID_LENGTH = 80
MAX_GITHUB_CLIENT_SECRET_LENGTH = 160
MAX_GITHUB_PRIVATE_KEY_LENGTH = 2500
MAX_GITHUB_WEBHOOK_SECRET_LENGTH = 160


class CreateGithubOption(OptionModel):
    app_id: Annotated[str | None, Required(), MaxLength(MAX_GITHUB_APP_ID_LENGTH)] = None
    client_id: Annotated[str | None, Required(), MaxLength(MAX_GITHUB_CLIENT_ID_LENGTH)] = None
    client_secret: Annotated[str | None, Required(), MaxLength(MAX_GITHUB_CLIENT_SECRET_LENGTH)] = None
    key: Annotated[str | None, Required(), MaxLength(MAX_ALM_KEY_LENGTH)] = None
    private_key: Annotated[str | None, Required(), MaxLength(MAX_GITHUB_PRIVATE_KEY_LENGTH)] = None
    url: Annotated[str | None, Required(), MaxLength(MAX_ALM_URL_LENGTH)] = None
    webhook_secret: Annotated[str | None, MaxLength(MAX_GITHUB_WEBHOOK_SECRET_LENGTH)] = None


class CreateGitlabOption(OptionModel):
    key: Annotated[str | None, Required(), MaxLength(MAX_ALM_KEY_LENGTH)] = None
    personal_access_token: Annotated[
        str | None, Required(), MaxLength(MAX_PERSONAL_ACCESS_TOKEN_LENGTH)
    ] = None
    url: Annotated[str | None, Required(), MaxLength(MAX_ALM_URL_LENGTH)] = None


class KeyArgs(OptionModel):
    key: Annotated[str | None, Required(), MaxLength(MAX_ALM_KEY_LENGTH)] = None


class ListOption(OptionModel):
    project: str | None = None


class AlmSetting(SonarQubeModel):
    alm: str | None = None
    key: str | None = None
    url: str | None = None


class AlmSettingsList(SonarQubeModel):
    alm_settings: list[AlmSetting] = Field(default_factory=list)


class AlmDefinition(SonarQubeModel):
    key: str | None = None
    url: str | None = None
    app_id: str | None = None
    client_id: str | None = None
    workspace: str | None = None


class AlmDefinitions(SonarQubeModel):
    azure: list[AlmDefinition] = Field(default_factory=list)
    bitbucket: list[AlmDefinition] = Field(default_factory=list)
    bitbucketcloud: list[AlmDefinition] = Field(default_factory=list)
    github: list[AlmDefinition] = Field(default_factory=list)
    gitlab: list[AlmDefinition] = Field(default_factory=list)


class AlmValidationMessage(SonarQubeModel):
    msg: str | None = None


class AlmValidation(SonarQubeModel):
    """An empty ``errors`` list means the configuration is valid."""

    errors: list[AlmValidationMessage] = Field(default_factory=list)


class AlmSettingsService(Service):
    name = "alm_settings"

    @endpoint("POST", "/api/alm_settings/create_github", options=CreateGithubOption)
    def create_github(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Register a GitHub App as an ALM setting. Requires 'Administer System'."""

    @endpoint("POST", "/api/alm_settings/create_gitlab", options=CreateGitlabOption)
    def create_gitlab(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Register a GitLab instance as an ALM setting. Requires 'Administer System'."""

    @endpoint("POST", "/api/alm_settings/delete", options=KeyArgs)
    def delete(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Delete an ALM setting."""

    @endpoint("GET", "/api/alm_settings/list", options=ListOption, result=AlmSettingsList)
    def list(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> AlmSettingsList:
        """List ALM settings available for a project, or all of them."""

    @endpoint("GET", "/api/alm_settings/list_definitions", result=AlmDefinitions)
    def list_definitions(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> AlmDefinitions:
        """List every ALM definition grouped by platform."""

    @endpoint("GET", "/api/alm_settings/validate", options=KeyArgs, result=AlmValidation)
    def validate(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> AlmValidation:
        """Check that the server can reach the platform behind an ALM setting."""
