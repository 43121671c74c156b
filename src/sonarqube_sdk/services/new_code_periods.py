"""New code definitions at instance, project and branch level."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import OneOf, RangeIf, Required, RequiredIf

MIN_NUMBER_OF_DAYS = 1
MAX_NUMBER_OF_DAYS = 90

NEW_CODE_PERIOD_TYPES = ("SPECIFIC_ANALYSIS", "PREVIOUS_VERSION", "NUMBER_OF_DAYS", "REFERENCE_BRANCH")


class ScopeOption(OptionModel):
    """Without ``project`` the instance-wide definition is addressed."""

    branch: str | None = None
    project: str | None = None


class ListOption(OptionModel):
    project: Annotated[str | None, Required()] = None


class SetOption(OptionModel):
    branch: str | None = None
    project: str | None = None
    type: Annotated[str | None, Required(), OneOf(*NEW_CODE_PERIOD_TYPES)] = None
    value: str | None = None

    conditional_rules = (
        RequiredIf("value", "type", ("SPECIFIC_ANALYSIS", "NUMBER_OF_DAYS", "REFERENCE_BRANCH")),
        RangeIf("value", "type", "NUMBER_OF_DAYS", minimum=MIN_NUMBER_OF_DAYS, maximum=MAX_NUMBER_OF_DAYS),
    )


class NewCodePeriod(SonarQubeModel):
    project_key: str | None = None
    branch_key: str | None = None
    type: str | None = None
    value: str | None = None
    effective_value: str | None = None
    inherited: bool = False
    updated_at: str | None = None


class NewCodePeriods(SonarQubeModel):
    new_code_periods: list[NewCodePeriod] = Field(default_factory=list)


class NewCodePeriodsService(Service):
    name = "new_code_periods"

    @endpoint("GET", "/api/new_code_periods/list", options=ListOption, result=NewCodePeriods)
    def list(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> NewCodePeriods:
        """List the definitions of every branch of a project."""

    @endpoint("POST", "/api/new_code_periods/set", options=SetOption)
    def set(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Set a definition. ``value`` depends on ``type``:

        * SPECIFIC_ANALYSIS: an analysis uuid, branch level only
        * PREVIOUS_VERSION: no value
        * NUMBER_OF_DAYS: a number between 1 and 90
        * REFERENCE_BRANCH: a branch name
        """

    @endpoint("GET", "/api/new_code_periods/show", options=ScopeOption, result=NewCodePeriod)
    def show(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> NewCodePeriod:
        """Show the effective definition, following inheritance."""

    @endpoint("POST", "/api/new_code_periods/unset", options=ScopeOption)
    def unset(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Remove a definition so the level inherits again. Unsetting twice succeeds."""
