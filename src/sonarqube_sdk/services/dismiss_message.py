"""Dismissible UI messages shown to the current user."""

from __future__ import annotations

from typing import Annotated

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import Required


class MessageOption(OptionModel):
    message_type: Annotated[str | None, Required()] = None
    project_key: str | None = None


class DismissedMessage(SonarQubeModel):
    dismissed: bool = False


class DismissMessageService(Service):
    name = "dismiss_message"

    @endpoint("GET", "/api/dismiss_message/check", options=MessageOption, result=DismissedMessage)
    def check(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> DismissedMessage:
        """Report whether a message type has been dismissed."""

    @endpoint("POST", "/api/dismiss_message/dismiss", options=MessageOption, missing_ok=True)
    def dismiss(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Dismiss a message. Dismissing twice, or an unknown message, succeeds."""
