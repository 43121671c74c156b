"""Global and component-level settings."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel, Repeated
from ..request_options import RequestOptions
from ..rules import MaxLength, Required

MAX_SETTING_VALUE_LENGTH = 4000


class ResetOption(OptionModel):
    branch: str | None = None
    component: str | None = None
    keys: Annotated[list[str] | None, Required()] = None
    pull_request: str | None = None


class SetOption(OptionModel):
    """Exactly one of ``value``, ``values`` or ``field_values`` is expected.

    ``field_values`` entries are JSON objects encoded as strings, one per row
    of a property set.
    """

    component: str | None = None
    key: Annotated[str | None, Required()] = None
    value: Annotated[str | None, MaxLength(MAX_SETTING_VALUE_LENGTH)] = None
    values: Annotated[list[str] | None, Repeated()] = None
    field_values: Annotated[list[str] | None, Repeated()] = None


class ValuesOption(OptionModel):
    component: str | None = None
    keys: list[str] | None = None


class SettingValue(SonarQubeModel):
    key: str | None = None
    value: str | None = None
    values: list[str] = Field(default_factory=list)
    field_values: list[dict[str, Any]] = Field(default_factory=list)
    inherited: bool = False


class SettingValues(SonarQubeModel):
    settings: list[SettingValue] = Field(default_factory=list)
    set_secured_settings: list[str] = Field(default_factory=list)

    def get(self, key: str) -> SettingValue | None:
        return next((setting for setting in self.settings if setting.key == key), None)


class SettingsService(Service):
    name = "settings"

    @endpoint("POST", "/api/settings/reset", options=ResetOption)
    def reset(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Restore settings to their default value."""

    @endpoint("POST", "/api/settings/set", options=SetOption)
    def set(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Update a setting value."""

    @endpoint("GET", "/api/settings/values", options=ValuesOption, result=SettingValues)
    def values(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> SettingValues:
        """Return setting values, for the instance or a component."""
