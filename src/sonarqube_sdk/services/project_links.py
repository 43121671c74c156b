"""Links displayed on a project's home page."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import AnyOf, MaxLength, Required

MAX_LINK_NAME_LENGTH = 128
MAX_LINK_URL_LENGTH = 2048


class CreateOption(OptionModel):
    name: Annotated[str | None, Required(), MaxLength(MAX_LINK_NAME_LENGTH)] = None
    project_id: str | None = None
    project_key: str | None = None
    url: Annotated[str | None, Required(), MaxLength(MAX_LINK_URL_LENGTH)] = None

    conditional_rules = (AnyOf("project_key", "project_id"),)


class DeleteOption(OptionModel):
    id: Annotated[str | None, Required()] = None


class SearchOption(OptionModel):
    project_id: str | None = None
    project_key: str | None = None

    conditional_rules = (AnyOf("project_key", "project_id"),)


class ProjectLink(SonarQubeModel):
    id: str | None = None
    name: str | None = None
    type: str | None = None
    url: str | None = None


class CreatedLink(SonarQubeModel):
    link: ProjectLink = Field(default_factory=ProjectLink)


class ProjectLinks(SonarQubeModel):
    links: list[ProjectLink] = Field(default_factory=list)


class ProjectLinksService(Service):
    name = "project_links"

    @endpoint("POST", "/api/project_links/create", options=CreateOption, result=CreatedLink)
    def create(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> CreatedLink:
        """Add a link to a project, identified by key or id."""

    @endpoint("POST", "/api/project_links/delete", options=DeleteOption)
    def delete(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Delete a link by id."""

    @endpoint("GET", "/api/project_links/search", options=SearchOption, result=ProjectLinks)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> ProjectLinks:
        """List the links of a project."""
