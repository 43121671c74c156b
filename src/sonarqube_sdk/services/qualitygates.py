"""Quality gates, their conditions and project associations."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import AnyOf, MaxLength, OneOf, Required

MAX_QUALITY_GATE_NAME_LENGTH = 100
MAX_CONDITION_ERROR_LENGTH = 64

CONDITION_OPERATORS = ("LT", "GT")


class CopyOption(OptionModel):
    name: Annotated[str | None, Required(), MaxLength(MAX_QUALITY_GATE_NAME_LENGTH)] = None
    source_name: Annotated[str | None, Required(), MaxLength(MAX_QUALITY_GATE_NAME_LENGTH)] = None


class NameArgs(OptionModel):
    name: Annotated[str | None, Required(), MaxLength(MAX_QUALITY_GATE_NAME_LENGTH)] = None


class CreateConditionOption(OptionModel):
    error: Annotated[str | None, Required(), MaxLength(MAX_CONDITION_ERROR_LENGTH)] = None
    gate_name: Annotated[str | None, Required(), MaxLength(MAX_QUALITY_GATE_NAME_LENGTH)] = None
    metric: Annotated[str | None, Required()] = None
    op: Annotated[str | None, OneOf(*CONDITION_OPERATORS)] = None


class ConditionArgs(OptionModel):
    id: Annotated[str | None, Required()] = None


class DeselectOption(OptionModel):
    project_key: Annotated[str | None, Required()] = None


class GetByProjectOption(OptionModel):
    project: Annotated[str | None, Required()] = None


class ProjectStatusOption(OptionModel):
    analysis_id: str | None = None
    branch: str | None = None
    project_id: str | None = None
    project_key: str | None = None
    pull_request: str | None = None

    conditional_rules = (AnyOf("project_key", "analysis_id", "project_id"),)


class RenameOption(OptionModel):
    current_name: Annotated[str | None, Required(), MaxLength(MAX_QUALITY_GATE_NAME_LENGTH)] = None
    name: Annotated[str | None, Required(), MaxLength(MAX_QUALITY_GATE_NAME_LENGTH)] = None


class SelectOption(OptionModel):
    gate_name: Annotated[str | None, Required(), MaxLength(MAX_QUALITY_GATE_NAME_LENGTH)] = None
    project_key: Annotated[str | None, Required()] = None


class ShowOption(OptionModel):
    name: Annotated[str | None, Required()] = None


class QualityGateActions(SonarQubeModel):
    rename: bool = False
    set_as_default: bool = False
    copy_: Annotated[bool, Field(alias="copy")] = False
    associate_projects: bool = False
    delete: bool = False
    manage_conditions: bool = False
    delegate: bool = False


class CreatedQualityGate(SonarQubeModel):
    id: str | None = None
    name: str | None = None


class Condition(SonarQubeModel):
    id: str | None = None
    metric: str | None = None
    op: str | None = None
    error: str | None = None


class QualityGateRef(SonarQubeModel):
    name: str | None = None
    default: bool = False


class ProjectQualityGate(SonarQubeModel):
    quality_gate: QualityGateRef = Field(default_factory=QualityGateRef)


class QualityGate(SonarQubeModel):
    name: str | None = None
    is_default: bool = False
    is_built_in: bool = False
    cayc_status: str | None = None
    has_standard_conditions: bool = False
    has_mqr_conditions: Annotated[bool, Field(alias="hasMQRConditions")] = False
    actions: QualityGateActions = Field(default_factory=QualityGateActions)


class QualityGatesActions(SonarQubeModel):
    create: bool = False


class QualityGateList(SonarQubeModel):
    qualitygates: list[QualityGate] = Field(default_factory=list)
    actions: QualityGatesActions = Field(default_factory=QualityGatesActions)

    def default(self) -> QualityGate | None:
        return next((gate for gate in self.qualitygates if gate.is_default), None)


class ConditionStatus(SonarQubeModel):
    status: str | None = None
    metric_key: str | None = None
    comparator: str | None = None
    error_threshold: str | None = None
    actual_value: str | None = None


class AnalysisPeriod(SonarQubeModel):
    mode: str | None = None
    date: str | None = None
    parameter: str | None = None


class ProjectStatus(SonarQubeModel):
    status: str | None = None
    cayc_status: str | None = None
    ignored_conditions: bool = False
    conditions: list[ConditionStatus] = Field(default_factory=list)
    period: AnalysisPeriod | None = None


class ProjectStatusResponse(SonarQubeModel):
    project_status: ProjectStatus = Field(default_factory=ProjectStatus)


class QualityGateDetails(SonarQubeModel):
    name: str | None = None
    is_default: bool = False
    is_built_in: bool = False
    cayc_status: str | None = None
    conditions: list[Condition] = Field(default_factory=list)
    actions: QualityGateActions = Field(default_factory=QualityGateActions)


class QualityGatesService(Service):
    name = "qualitygates"

    @endpoint("POST", "/api/qualitygates/copy", options=CopyOption)
    def copy(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Copy a quality gate under a new name."""

    @endpoint("POST", "/api/qualitygates/create", options=NameArgs, result=CreatedQualityGate)
    def create(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> CreatedQualityGate:
        """Create an empty quality gate."""

    @endpoint("POST", "/api/qualitygates/create_condition", options=CreateConditionOption, result=Condition)
    def create_condition(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> Condition:
        """Add a condition to a quality gate. ``op`` is LT or GT."""

    @endpoint("POST", "/api/qualitygates/delete_condition", options=ConditionArgs)
    def delete_condition(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Remove a condition by id."""

    @endpoint("POST", "/api/qualitygates/deselect", options=DeselectOption)
    def deselect(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Put a project back on the default quality gate."""

    @endpoint("POST", "/api/qualitygates/destroy", options=NameArgs)
    def destroy(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Delete a quality gate. Built-in and default gates cannot be deleted."""

    @endpoint("GET", "/api/qualitygates/get_by_project", options=GetByProjectOption, result=ProjectQualityGate)
    def get_by_project(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> ProjectQualityGate:
        """Return the quality gate a project uses."""

    @endpoint("GET", "/api/qualitygates/list", result=QualityGateList)
    def list(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> QualityGateList:
        """List every quality gate."""

    @endpoint("GET", "/api/qualitygates/project_status", options=ProjectStatusOption, result=ProjectStatusResponse)
    def project_status(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> ProjectStatusResponse:
        """Return the quality gate status of a project or analysis."""

    @endpoint("POST", "/api/qualitygates/rename", options=RenameOption)
    def rename(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Rename a quality gate."""

    @endpoint("POST", "/api/qualitygates/select", options=SelectOption)
    def select(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Associate a project with a quality gate."""

    @endpoint("POST", "/api/qualitygates/set_as_default", options=NameArgs)
    def set_as_default(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Make a quality gate the instance default."""

    @endpoint("GET", "/api/qualitygates/show", options=ShowOption, result=QualityGateDetails)
    def show(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> QualityGateDetails:
        """Show a quality gate and its conditions."""
