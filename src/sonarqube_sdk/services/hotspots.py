"""Security hotspots: search, review and discussion."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..pagination import PaginationArgs, Paging
from ..request_options import RequestOptions
from ..rules import AnyOf, MaxLength, OneOf, Required

MAX_HOTSPOT_COMMENT_LENGTH = 1000

HOTSPOT_STATUSES = ("TO_REVIEW", "REVIEWED")
HOTSPOT_RESOLUTIONS = ("FIXED", "SAFE", "ACKNOWLEDGED")
OWASP_ASVS_LEVELS = ("1", "2", "3")
OWASP_CATEGORIES = tuple(f"a{index}" for index in range(1, 11))
SANS_TOP25_CATEGORIES = ("insecure-interaction", "risky-resource", "porous-defenses")


class AddCommentOption(OptionModel):
    comment: Annotated[str | None, Required(), MaxLength(MAX_HOTSPOT_COMMENT_LENGTH)] = None
    hotspot: Annotated[str | None, Required()] = None


class ChangeStatusOption(OptionModel):
    comment: Annotated[str | None, MaxLength(MAX_HOTSPOT_COMMENT_LENGTH)] = None
    hotspot: Annotated[str | None, Required()] = None
    resolution: Annotated[str | None, OneOf(*HOTSPOT_RESOLUTIONS)] = None
    status: Annotated[str | None, Required(), OneOf(*HOTSPOT_STATUSES)] = None


class SearchOption(PaginationArgs):
    branch: str | None = None
    cwe: list[str] | None = None
    files: list[str] | None = None
    hotspots: list[str] | None = None
    in_new_code_period: bool | None = None
    only_mine: bool | None = None
    owasp_asvs_level: Annotated[str | None, OneOf(*OWASP_ASVS_LEVELS)] = None
    owasp_top10: Annotated[list[str] | None, OneOf(*OWASP_CATEGORIES), Field(alias="owaspTop10")] = None
    owasp_top10_2021: Annotated[list[str] | None, OneOf(*OWASP_CATEGORIES), Field(alias="owaspTop10-2021")] = None
    project: str | None = None
    pull_request: str | None = None
    resolution: Annotated[str | None, OneOf(*HOTSPOT_RESOLUTIONS)] = None
    sans_top25: Annotated[list[str] | None, OneOf(*SANS_TOP25_CATEGORIES), Field(alias="sansTop25")] = None
    sonarsource_security: list[str] | None = None
    status: Annotated[str | None, OneOf(*HOTSPOT_STATUSES)] = None

    conditional_rules = (AnyOf("project", "hotspots"),)


class ShowOption(OptionModel):
    hotspot: Annotated[str | None, Required()] = None


class HotspotComponent(SonarQubeModel):
    key: str | None = None
    name: str | None = None
    long_name: str | None = None
    path: str | None = None
    qualifier: str | None = None


class HotspotSummary(SonarQubeModel):
    key: str | None = None
    component: str | None = None
    project: str | None = None
    rule_key: str | None = None
    security_category: str | None = None
    vulnerability_probability: str | None = None
    status: str | None = None
    resolution: str | None = None
    line: int | None = None
    message: str | None = None
    assignee: str | None = None
    author: str | None = None
    creation_date: str | None = None
    update_date: str | None = None
    flows: list[Any] = Field(default_factory=list)


class HotspotsSearch(SonarQubeModel):
    components: list[HotspotComponent] = Field(default_factory=list)
    hotspots: list[HotspotSummary] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


class HotspotComment(SonarQubeModel):
    key: str | None = None
    login: str | None = None
    html_text: str | None = None
    markdown: str | None = None
    created_at: str | None = None
    updatable: bool = False


class HotspotRule(SonarQubeModel):
    key: str | None = None
    name: str | None = None
    security_category: str | None = None
    vulnerability_probability: str | None = None


class HotspotUser(SonarQubeModel):
    login: str | None = None
    name: str | None = None
    active: bool = False


class HotspotDiff(SonarQubeModel):
    key: str | None = None
    new_value: str | None = None
    old_value: str | None = None


class HotspotChangelogEntry(SonarQubeModel):
    user: str | None = None
    user_name: str | None = None
    creation_date: str | None = None
    is_user_active: bool = False
    diffs: list[HotspotDiff] = Field(default_factory=list)


class HotspotDetails(SonarQubeModel):
    key: str | None = None
    status: str | None = None
    resolution: str | None = None
    message: str | None = None
    line: int | None = None
    hash: str | None = None
    assignee: str | None = None
    author: str | None = None
    creation_date: str | None = None
    update_date: str | None = None
    can_change_status: bool = False
    component: HotspotComponent = Field(default_factory=HotspotComponent)
    project: HotspotComponent = Field(default_factory=HotspotComponent)
    rule: HotspotRule = Field(default_factory=HotspotRule)
    comment: list[HotspotComment] = Field(default_factory=list)
    changelog: list[HotspotChangelogEntry] = Field(default_factory=list)
    users: list[HotspotUser] = Field(default_factory=list)
    code_variants: list[str] = Field(default_factory=list)


class HotspotsService(Service):
    name = "hotspots"

    @endpoint("POST", "/api/hotspots/add_comment", options=AddCommentOption)
    def add_comment(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Comment on a hotspot. Comments are limited to 1000 characters."""

    @endpoint("POST", "/api/hotspots/change_status", options=ChangeStatusOption)
    def change_status(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Move a hotspot to TO_REVIEW, or to REVIEWED with a resolution."""

    @endpoint("GET", "/api/hotspots/search", options=SearchOption, result=HotspotsSearch)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> HotspotsSearch:
        """Search hotspots of a project or by key. One of ``project`` or ``hotspots`` is needed."""

    @endpoint("GET", "/api/hotspots/show", options=ShowOption, result=HotspotDetails)
    def show(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> HotspotDetails:
        """Return the details of one hotspot."""
