"""Analysis cache of scanner runs."""

from __future__ import annotations

from typing import Annotated

from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import Required


class ClearOption(OptionModel):
    branch: str | None = None
    project: str | None = None


class GetOption(OptionModel):
    branch: str | None = None
    project: Annotated[str | None, Required()] = None


class AnalysisCacheService(Service):
    name = "analysis_cache"

    @endpoint("POST", "/api/analysis_cache/clear", options=ClearOption, missing_ok=True)
    def clear(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Clear the cache of one branch, one project, or every project.

        Clearing a cache that does not exist is not an error.
        """

    @endpoint("GET", "/api/analysis_cache/get", options=GetOption, result=bytes)
    def get(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> bytes:
        """Download the gzip-compressed scanner cache of a branch."""
