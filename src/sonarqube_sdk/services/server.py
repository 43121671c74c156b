"""Server metadata."""

from __future__ import annotations

from ..operations import OptionsArg, Service, endpoint
from ..request_options import RequestOptions


class ServerService(Service):
    name = "server"

    @endpoint("GET", "/api/server/version", result=str)
    def version(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> str:
        """Return the server version as plain text, e.g. ``10.7.0.96327``."""
