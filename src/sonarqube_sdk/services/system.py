"""System health, status and logging."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import OneOf, Required

LOG_LEVELS = ("TRACE", "DEBUG", "INFO")


class ChangeLogLevelOption(OptionModel):
    level: Annotated[str | None, Required(), OneOf(*LOG_LEVELS)] = None


class HealthCause(SonarQubeModel):
    message: str | None = None


class HealthNode(SonarQubeModel):
    name: str | None = None
    type: str | None = None
    host: str | None = None
    port: int | None = None
    health: str | None = None
    started_at: str | None = None
    causes: list[HealthCause] = Field(default_factory=list)


class SystemHealth(SonarQubeModel):
    health: str | None = None
    causes: list[HealthCause] = Field(default_factory=list)
    nodes: list[HealthNode] = Field(default_factory=list)


class SystemStatus(SonarQubeModel):
    """``status`` is one of STARTING, UP, DOWN, RESTARTING, DB_MIGRATION_NEEDED or DB_MIGRATION_RUNNING."""

    id: str | None = None
    status: str | None = None
    version: str | None = None

    @property
    def is_up(self) -> bool:
        return self.status == "UP"


class SystemService(Service):
    name = "system"

    @endpoint("GET", "/api/system/health", result=SystemHealth)
    def health(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> SystemHealth:
        """Return GREEN, YELLOW or RED health. Needs a system passcode or admin rights."""

    @endpoint("GET", "/api/system/ping", result=str)
    def ping(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> str:
        """Answer ``pong`` when the web server is up."""

    @endpoint("GET", "/api/system/status", result=SystemStatus)
    def status(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> SystemStatus:
        """Return the server state and version. Does not need authentication."""

    @endpoint("POST", "/api/system/change_log_level", options=ChangeLogLevelOption)
    def change_log_level(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Change the log level of every process. Not persisted across restarts."""
