"""Server-sent events for IDE connected mode."""

from __future__ import annotations

from typing import Annotated

from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import Required
from ..streams import EventStream


class SonarlintEventsOption(OptionModel):
    languages: Annotated[list[str] | None, Required()] = None
    project_keys: Annotated[list[str] | None, Required()] = None


class PushService(Service):
    name = "push"

    @endpoint("GET", "/api/push/sonarlint_events", options=SonarlintEventsOption, stream=True)
    def sonarlint_events(
        self,
        options: OptionsArg = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> EventStream:
        """Listen to rule activation changes for some languages and projects.

        Returns once headers arrive. The body stays open; close the returned
        stream when done, ideally with ``with``. This is an internal API.
        """
