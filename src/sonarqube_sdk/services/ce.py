"""Compute engine: background tasks such as report processing."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, ClassVar

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..pagination import MIN_PAGE_SIZE, PaginationArgs, Paging
from ..request_options import RequestOptions
from ..rules import OneOf, Range, Required

MAX_CE_PAGE_SIZE = 1000

TASK_STATUSES = ("SUCCESS", "FAILED", "CANCELED", "PENDING", "IN_PROGRESS")
TASK_TYPES = ("REPORT", "ISSUE_SYNC", "AUDIT_PURGE", "PROJECT_EXPORT")


class ActivityOption(PaginationArgs):
    max_page_size: ClassVar[int] = MAX_CE_PAGE_SIZE

    page_size: Annotated[
        int | None, Range(minimum=MIN_PAGE_SIZE, maximum=MAX_CE_PAGE_SIZE), Field(alias="ps")
    ] = None
    component: str | None = None
    max_executed_at: datetime | str | None = None
    min_submitted_at: datetime | str | None = None
    only_currents: bool | None = None
    query: Annotated[str | None, Field(alias="q")] = None
    statuses: Annotated[list[str] | None, OneOf(*TASK_STATUSES), Field(alias="status")] = None
    type: Annotated[str | None, OneOf(*TASK_TYPES)] = None


class TaskOption(OptionModel):
    additional_fields: list[str] | None = None
    id: Annotated[str | None, Required()] = None


class CeTask(SonarQubeModel):
    id: str | None = None
    type: str | None = None
    status: str | None = None
    analysis_id: str | None = None
    branch: str | None = None
    branch_type: str | None = None
    pull_request: str | None = None
    component_id: str | None = None
    component_key: str | None = None
    component_name: str | None = None
    component_qualifier: str | None = None
    error_message: str | None = None
    error_stacktrace: str | None = None
    error_type: str | None = None
    has_error_stacktrace: bool = False
    has_scanner_context: bool = False
    scanner_context: str | None = None
    submitted_at: str | None = None
    submitter_login: str | None = None
    started_at: str | None = None
    executed_at: str | None = None
    finished_at: str | None = None
    execution_time_ms: int | None = None
    warning_count: int = 0
    warnings: list[str] = Field(default_factory=list)
    info_messages: list[str] = Field(default_factory=list)


class CeActivity(SonarQubeModel):
    paging: Paging = Field(default_factory=Paging)
    tasks: list[CeTask] = Field(default_factory=list)


class CeTaskDetails(SonarQubeModel):
    task: CeTask = Field(default_factory=CeTask)


class CeService(Service):
    name = "ce"

    @endpoint("GET", "/api/ce/activity", options=ActivityOption, result=CeActivity)
    def activity(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> CeActivity:
        """Search background tasks. Page size goes up to 1000 here."""

    @endpoint("GET", "/api/ce/task", options=TaskOption, result=CeTaskDetails)
    def task(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> CeTaskDetails:
        """Return one background task, optionally with ``scannerContext`` or ``stacktrace``."""
