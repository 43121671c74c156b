"""Webhooks and their delivery history."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..pagination import PaginationArgs, Paging
from ..request_options import RequestOptions
from ..rules import MaxLength, MinLength, Required

MAX_WEBHOOK_NAME_LENGTH = 100
MAX_WEBHOOK_URL_LENGTH = 512
MIN_WEBHOOK_SECRET_LENGTH = 16
MAX_WEBHOOK_SECRET_LENGTH = 200
MAX_WEBHOOK_KEY_LENGTH = 40
MAX_WEBHOOK_PROJECT_LENGTH = 400

Secret = Annotated[str | None, MinLength(MIN_WEBHOOK_SECRET_LENGTH), MaxLength(MAX_WEBHOOK_SECRET_LENGTH)]


class CreateOption(OptionModel):
    name: Annotated[str | None, Required(), MaxLength(MAX_WEBHOOK_NAME_LENGTH)] = None
    project: Annotated[str | None, MaxLength(MAX_WEBHOOK_PROJECT_LENGTH)] = None
    secret: Secret = None
    url: Annotated[str | None, Required(), MaxLength(MAX_WEBHOOK_URL_LENGTH)] = None


class DeleteOption(OptionModel):
    webhook: Annotated[str | None, Required(), MaxLength(MAX_WEBHOOK_KEY_LENGTH)] = None


class ListOption(OptionModel):
    project: str | None = None


class UpdateOption(OptionModel):
    name: Annotated[str | None, Required(), MaxLength(MAX_WEBHOOK_NAME_LENGTH)] = None
    secret: Secret = None
    url: Annotated[str | None, Required(), MaxLength(MAX_WEBHOOK_URL_LENGTH)] = None
    webhook: Annotated[str | None, Required(), MaxLength(MAX_WEBHOOK_KEY_LENGTH)] = None


class DeliveriesOption(PaginationArgs):
    ce_task_id: str | None = None
    component_key: str | None = None
    webhook: str | None = None


class Webhook(SonarQubeModel):
    key: str | None = None
    name: str | None = None
    url: str | None = None
    has_secret: bool = False


class CreatedWebhook(SonarQubeModel):
    webhook: Webhook = Field(default_factory=Webhook)


class Webhooks(SonarQubeModel):
    webhooks: list[Webhook] = Field(default_factory=list)


class WebhookDelivery(SonarQubeModel):
    id: str | None = None
    component_key: str | None = None
    ce_task_id: str | None = None
    name: str | None = None
    url: str | None = None
    at: str | None = None
    success: bool = False
    http_status: int | None = None
    duration_ms: int | None = None
    payload: str | None = None


class WebhookDeliveries(SonarQubeModel):
    deliveries: list[WebhookDelivery] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


class WebhooksService(Service):
    name = "webhooks"

    @endpoint("POST", "/api/webhooks/create", options=CreateOption, result=CreatedWebhook)
    def create(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> CreatedWebhook:
        """Create a webhook, instance-wide or for ``project``.

        When ``secret`` is set, deliveries carry an ``X-Sonar-Webhook-HMAC-SHA256``
        header; see :func:`sonarqube_sdk.security.verify_webhook_signature`.
        """

    @endpoint("POST", "/api/webhooks/delete", options=DeleteOption)
    def delete(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Delete a webhook and its delivery history."""

    @endpoint("GET", "/api/webhooks/list", options=ListOption, result=Webhooks)
    def list(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> Webhooks:
        """List instance-wide webhooks, or those of ``project``."""

    @endpoint("POST", "/api/webhooks/update", options=UpdateOption)
    def update(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Update a webhook."""

    @endpoint("GET", "/api/webhooks/deliveries", options=DeliveriesOption, result=WebhookDeliveries)
    def deliveries(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> WebhookDeliveries:
        """Recent deliveries of a webhook, a project or a Compute Engine task."""
