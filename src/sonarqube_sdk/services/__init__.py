"""Service groups of the SonarQube Web API, one module per ``/api/<group>``."""

from __future__ import annotations

from .alm_integrations import AlmIntegrationsService
from .alm_settings import AlmSettingsService
from .analysis_cache import AnalysisCacheService
from .authentication import AuthenticationService
from .ce import CeService
from .dismiss_message import DismissMessageService
from .favorites import FavoritesService
from .hotspots import HotspotsService
from .languages import LanguagesService
from .metrics import MetricsService
from .new_code_periods import NewCodePeriodsService
from .project_branches import ProjectBranchesService
from .project_links import ProjectLinksService
from .project_tags import ProjectTagsService
from .projects import ProjectsService
from .push import PushService
from .qualitygates import QualityGatesService
from .server import ServerService
from .settings import SettingsService
from .system import SystemService
from .user_groups import UserGroupsService
from .user_tokens import UserTokensService
from .users import UsersService
from .webhooks import WebhooksService

SERVICE_CLASSES = (
    AlmIntegrationsService,
    AlmSettingsService,
    AnalysisCacheService,
    AuthenticationService,
    CeService,
    DismissMessageService,
    FavoritesService,
    HotspotsService,
    LanguagesService,
    MetricsService,
    NewCodePeriodsService,
    ProjectBranchesService,
    ProjectLinksService,
    ProjectTagsService,
    ProjectsService,
    PushService,
    QualityGatesService,
    ServerService,
    SettingsService,
    SystemService,
    UserGroupsService,
    UserTokensService,
    UsersService,
    WebhooksService,
)

__all__ = [service.__name__ for service in SERVICE_CLASSES] + ["SERVICE_CLASSES"]
