"""User groups and their members."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..pagination import PaginationArgs, Paging
from ..request_options import RequestOptions
from ..rules import MaxLength, OneOf, Required

MAX_GROUP_NAME_LENGTH = 255
MAX_GROUP_DESCRIPTION_LENGTH = 200

GROUP_SEARCH_FIELDS = ("name", "description", "membersCount", "managed")


class MembershipOption(OptionModel):
    login: str | None = None
    name: Annotated[str | None, Required()] = None


class CreateOption(OptionModel):
    description: Annotated[str | None, MaxLength(MAX_GROUP_DESCRIPTION_LENGTH)] = None
    name: Annotated[str | None, Required(), MaxLength(MAX_GROUP_NAME_LENGTH)] = None


class DeleteOption(OptionModel):
    name: Annotated[str | None, Required()] = None


class SearchOption(PaginationArgs):
    managed: bool | None = None
    fields: Annotated[list[str] | None, OneOf(*GROUP_SEARCH_FIELDS), Field(alias="f")] = None
    query: Annotated[str | None, Field(alias="q")] = None


class UpdateOption(OptionModel):
    current_name: Annotated[str | None, Required()] = None
    description: Annotated[str | None, MaxLength(MAX_GROUP_DESCRIPTION_LENGTH)] = None
    name: Annotated[str | None, MaxLength(MAX_GROUP_NAME_LENGTH)] = None


class UserGroup(SonarQubeModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    members_count: int = 0
    default: bool = False
    managed: bool = False


class CreatedUserGroup(SonarQubeModel):
    group: UserGroup = Field(default_factory=UserGroup)


class UserGroupsSearch(SonarQubeModel):
    groups: list[UserGroup] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)

    def find(self, name: str) -> UserGroup | None:
        for group in self.groups:
            if group.name == name:
                return group
        return None


class UserGroupsService(Service):
    name = "user_groups"

    @endpoint("POST", "/api/user_groups/add_user", options=MembershipOption)
    def add_user(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Add a user to a group. Without ``login`` the current user is added."""

    @endpoint("POST", "/api/user_groups/create", options=CreateOption, result=CreatedUserGroup)
    def create(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> CreatedUserGroup:
        """Create a group."""

    @endpoint("POST", "/api/user_groups/delete", options=DeleteOption)
    def delete(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Delete a group. The default group cannot be deleted."""

    @endpoint("POST", "/api/user_groups/remove_user", options=MembershipOption)
    def remove_user(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Remove a user from a group."""

    @endpoint("GET", "/api/user_groups/search", options=SearchOption, result=UserGroupsSearch)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> UserGroupsSearch:
        """Search for user groups."""

    @endpoint("POST", "/api/user_groups/update", options=UpdateOption)
    def update(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Rename a group or change its description."""
