"""Branches of a project."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import MaxLength, Required

MAX_BRANCH_NAME_LENGTH = 255


class ProjectArgs(OptionModel):
    project: Annotated[str | None, Required()] = None


class BranchArgs(OptionModel):
    branch: Annotated[str | None, Required()] = None
    project: Annotated[str | None, Required()] = None


class RenameOption(OptionModel):
    name: Annotated[str | None, Required(), MaxLength(MAX_BRANCH_NAME_LENGTH)] = None
    project: Annotated[str | None, Required()] = None


class DeletionProtectionOption(BranchArgs):
    value: Annotated[bool | None, Required()] = None


class BranchStatus(SonarQubeModel):
    quality_gate_status: str | None = None


class Branch(SonarQubeModel):
    name: str | None = None
    type: str | None = None
    is_main: bool = False
    branch_id: str | None = None
    analysis_date: str | None = None
    excluded_from_purge: bool = False
    status: BranchStatus = Field(default_factory=BranchStatus)


class BranchList(SonarQubeModel):
    branches: list[Branch] = Field(default_factory=list)

    def main(self) -> Branch | None:
        return next((branch for branch in self.branches if branch.is_main), None)


class ProjectBranchesService(Service):
    name = "project_branches"

    @endpoint("POST", "/api/project_branches/delete", options=BranchArgs)
    def delete(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Delete a branch. The server answers 400 for the main branch."""

    @endpoint("GET", "/api/project_branches/list", options=ProjectArgs, result=BranchList)
    def list(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> BranchList:
        """List the branches of a project."""

    @endpoint("POST", "/api/project_branches/rename", options=RenameOption)
    def rename(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Rename the main branch of a project."""

    @endpoint("POST", "/api/project_branches/set_automatic_deletion_protection", options=DeletionProtectionOption)
    def set_automatic_deletion_protection(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> None:
        """Protect a branch from, or expose it to, automatic purging of inactive branches."""

    @endpoint("POST", "/api/project_branches/set_main", options=BranchArgs)
    def set_main(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Make another branch the main branch."""
