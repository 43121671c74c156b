"""Project tags."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import KeepEmpty, OptionModel
from ..pagination import PaginationArgs
from ..request_options import RequestOptions
from ..rules import Required


class SearchOption(PaginationArgs):
    query: Annotated[str | None, Field(alias="q")] = None


class SetOption(OptionModel):
    """An empty ``tags`` list removes every tag from the project."""

    project: Annotated[str | None, Required()] = None
    tags: Annotated[list[str], KeepEmpty()] = Field(default_factory=list)


class ProjectTags(SonarQubeModel):
    tags: list[str] = Field(default_factory=list)


class ProjectTagsService(Service):
    name = "project_tags"

    @endpoint("GET", "/api/project_tags/search", options=SearchOption, result=ProjectTags)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> ProjectTags:
        """Search tags used on projects."""

    @endpoint("POST", "/api/project_tags/set", options=SetOption)
    def set(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Replace the tags of a project."""
