"""ALM integrations: personal access tokens and repository imports."""

from __future__ import annotations

from typing import Annotated, ClassVar

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..pagination import MIN_PAGE_SIZE, PaginationArgs, Paging
from ..request_options import RequestOptions
from ..rules import ForbiddenIf, MaxLength, OneOf, RangeIf, Required, RequiredIf, Range

MAX_ALM_SETTING_KEY_LENGTH = 200
MAX_PAT_LENGTH = 2000
MAX_USERNAME_LENGTH = 2000
MAX_GITHUB_REPO_KEY_LENGTH = 256
MAX_PAGE_SIZE_ALM_INTEGRATIONS = 100
MIN_NEW_CODE_DEFINITION_DAYS = 1
MAX_NEW_CODE_DEFINITION_DAYS = 90

NEW_CODE_DEFINITION_TYPES = ("PREVIOUS_VERSION", "NUMBER_OF_DAYS", "REFERENCE_BRANCH")


class _NewCodeDefinitionArgs(OptionModel):
    new_code_definition_type: Annotated[str | None, OneOf(*NEW_CODE_DEFINITION_TYPES)] = None
    new_code_definition_value: str | None = None

    conditional_rules = (
        RequiredIf("new_code_definition_value", "new_code_definition_type", "NUMBER_OF_DAYS"),
        RangeIf(
            "new_code_definition_value",
            "new_code_definition_type",
            "NUMBER_OF_DAYS",
            minimum=MIN_NEW_CODE_DEFINITION_DAYS,
            maximum=MAX_NEW_CODE_DEFINITION_DAYS,
        ),
        ForbiddenIf(
            "new_code_definition_value",
            "new_code_definition_type",
            ("PREVIOUS_VERSION", "REFERENCE_BRANCH"),
        ),
    )


class AlmSettingArgs(OptionModel):
    alm_setting: Annotated[str | None, Required(), MaxLength(MAX_ALM_SETTING_KEY_LENGTH)] = None


class ImportGithubProjectOption(_NewCodeDefinitionArgs):
    alm_setting: Annotated[str | None, MaxLength(MAX_ALM_SETTING_KEY_LENGTH)] = None
    repository_key: Annotated[str | None, Required(), MaxLength(MAX_GITHUB_REPO_KEY_LENGTH)] = None


class ImportGitlabProjectOption(_NewCodeDefinitionArgs):
    alm_setting: Annotated[str | None, MaxLength(MAX_ALM_SETTING_KEY_LENGTH)] = None
    gitlab_project_id: Annotated[str | None, Required()] = None


class SearchGitlabReposOption(PaginationArgs):
    max_page_size: ClassVar[int] = MAX_PAGE_SIZE_ALM_INTEGRATIONS

    page_size: Annotated[
        int | None,
        Range(minimum=MIN_PAGE_SIZE, maximum=MAX_PAGE_SIZE_ALM_INTEGRATIONS),
        Field(alias="ps"),
    ] = None
    alm_setting: Annotated[str | None, Required(), MaxLength(MAX_ALM_SETTING_KEY_LENGTH)] = None
    project_name: Annotated[str | None, MaxLength(MAX_ALM_SETTING_KEY_LENGTH)] = None


class SetPatOption(OptionModel):
    alm_setting: Annotated[str | None, MaxLength(MAX_ALM_SETTING_KEY_LENGTH)] = None
    pat: Annotated[str | None, Required(), MaxLength(MAX_PAT_LENGTH)] = None
    username: Annotated[str | None, MaxLength(MAX_USERNAME_LENGTH)] = None


class GithubClientId(SonarQubeModel):
    client_id: str | None = None


class AzureProject(SonarQubeModel):
    name: str | None = None
    description: str | None = None


class AzureProjects(SonarQubeModel):
    projects: list[AzureProject] = Field(default_factory=list)


class GitlabRepository(SonarQubeModel):
    id: int | None = None
    name: str | None = None
    path_name: str | None = None
    path_slug: str | None = None
    slug: str | None = None
    url: str | None = None
    sq_project_key: str | None = None
    sq_project_name: str | None = None


class GitlabRepositories(SonarQubeModel):
    paging: Paging = Field(default_factory=Paging)
    repositories: list[GitlabRepository] = Field(default_factory=list)


class AlmIntegrationsService(Service):
    name = "alm_integrations"

    @endpoint("GET", "/api/alm_integrations/check_pat", options=AlmSettingArgs)
    def check_pat(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Check that the stored personal access token for an ALM setting is valid."""

    @endpoint("GET", "/api/alm_integrations/get_github_client_id", options=AlmSettingArgs, result=GithubClientId)
    def get_github_client_id(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> GithubClientId:
        """Return the client id of the GitHub App behind an ALM setting."""

    @endpoint("POST", "/api/alm_integrations/import_github_project", options=ImportGithubProjectOption)
    def import_github_project(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> None:
        """Create a SonarQube project bound to a GitHub repository."""

    @endpoint("POST", "/api/alm_integrations/import_gitlab_project", options=ImportGitlabProjectOption)
    def import_gitlab_project(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> None:
        """Create a SonarQube project bound to a GitLab project."""

    @endpoint("GET", "/api/alm_integrations/list_azure_projects", options=AlmSettingArgs, result=AzureProjects)
    def list_azure_projects(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> AzureProjects:
        """List Azure DevOps projects visible through an ALM setting."""

    @endpoint("GET", "/api/alm_integrations/search_gitlab_repos", options=SearchGitlabReposOption, result=GitlabRepositories)
    def search_gitlab_repos(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> GitlabRepositories:
        """Search GitLab repositories. Page size is capped at 100."""

    @endpoint("POST", "/api/alm_integrations/set_pat", options=SetPatOption)
    def set_pat(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Store a personal access token for the current user and ALM setting."""
