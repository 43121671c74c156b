"""Projects, applications and portfolios."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..pagination import PaginationArgs, Paging
from ..request_options import RequestOptions
from ..rules import AnyOf, MaxLength, OneOf, Required

MAX_PROJECT_KEY_LENGTH = 400
MAX_PROJECT_NAME_LENGTH = 500

PROJECT_QUALIFIERS = ("TRK", "VW", "APP")
PROJECT_VISIBILITIES = ("private", "public")


class BulkDeleteOption(OptionModel):
    analyzed_before: date | str | None = None
    on_provisioned_only: bool | None = None
    projects: list[str] | None = None
    query: Annotated[str | None, Field(alias="q")] = None
    qualifiers: Annotated[list[str] | None, OneOf(*PROJECT_QUALIFIERS)] = None

    conditional_rules = (AnyOf("projects", "analyzed_before", "query"),)


class CreateOption(OptionModel):
    name: Annotated[str | None, Required(), MaxLength(MAX_PROJECT_NAME_LENGTH)] = None
    project: Annotated[str | None, Required(), MaxLength(MAX_PROJECT_KEY_LENGTH)] = None
    main_branch: str | None = None
    new_code_definition_type: str | None = None
    new_code_definition_value: str | None = None
    visibility: Annotated[str | None, OneOf(*PROJECT_VISIBILITIES)] = None


class ProjectArgs(OptionModel):
    project: Annotated[str | None, Required()] = None


class SearchOption(PaginationArgs):
    analyzed_before: date | str | None = None
    on_provisioned_only: bool | None = None
    projects: list[str] | None = None
    query: Annotated[str | None, Field(alias="q")] = None
    qualifiers: Annotated[list[str] | None, OneOf(*PROJECT_QUALIFIERS)] = None


class SearchMyProjectsOption(PaginationArgs):
    pass


class UpdateKeyOption(OptionModel):
    from_: Annotated[str | None, Required(), Field(alias="from")] = None
    to: Annotated[str | None, Required(), MaxLength(MAX_PROJECT_KEY_LENGTH)] = None


class UpdateVisibilityOption(OptionModel):
    project: Annotated[str | None, Required()] = None
    visibility: Annotated[str | None, Required(), OneOf(*PROJECT_VISIBILITIES)] = None


class UpdateDefaultVisibilityOption(OptionModel):
    project_visibility: Annotated[str | None, Required(), OneOf(*PROJECT_VISIBILITIES)] = None


class Project(SonarQubeModel):
    key: str | None = None
    name: str | None = None
    qualifier: str | None = None
    visibility: str | None = None
    last_analysis_date: str | None = None
    revision: str | None = None
    managed: bool = False


class CreatedProject(SonarQubeModel):
    project: Project = Field(default_factory=Project)


class ProjectsSearch(SonarQubeModel):
    components: list[Project] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


class MyProjectLink(SonarQubeModel):
    name: str | None = None
    type: str | None = None
    href: str | None = None


class MyProject(SonarQubeModel):
    key: str | None = None
    name: str | None = None
    description: str | None = None
    last_analysis_date: str | None = None
    quality_gate: str | None = None
    links: list[MyProjectLink] = Field(default_factory=list)


class MyProjects(SonarQubeModel):
    projects: list[MyProject] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


class ProjectsService(Service):
    name = "projects"

    @endpoint("POST", "/api/projects/bulk_delete", options=BulkDeleteOption)
    def bulk_delete(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Delete several projects at once.

        At least one of ``projects``, ``analyzed_before`` or ``query`` must be
        set so a bare call never wipes the whole instance.
        """

    @endpoint("POST", "/api/projects/create", options=CreateOption, result=CreatedProject)
    def create(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> CreatedProject:
        """Create a project. Requires 'Create Projects' permission."""

    @endpoint("POST", "/api/projects/delete", options=ProjectArgs)
    def delete(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Delete a project."""

    @endpoint("GET", "/api/projects/search", options=SearchOption, result=ProjectsSearch)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> ProjectsSearch:
        """Search projects, applications and portfolios. Requires 'Administer System'."""

    @endpoint("GET", "/api/projects/search_my_projects", options=SearchMyProjectsOption, result=MyProjects)
    def search_my_projects(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> MyProjects:
        """List projects the current user administers."""

    @endpoint("POST", "/api/projects/update_key", options=UpdateKeyOption)
    def update_key(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Change a project key."""

    @endpoint("POST", "/api/projects/update_visibility", options=UpdateVisibilityOption)
    def update_visibility(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Make a project public or private."""

    @endpoint("POST", "/api/projects/update_default_visibility", options=UpdateDefaultVisibilityOption)
    def update_default_visibility(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> None:
        """Set the visibility of projects created from now on."""
