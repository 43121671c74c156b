"""Languages supported by the installed analyzers."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..request_options import RequestOptions
from ..rules import Range


class ListOption(OptionModel):
    query: Annotated[str | None, Field(alias="q")] = None
    page_size: Annotated[int | None, Range(minimum=0), Field(alias="ps")] = None


class Language(SonarQubeModel):
    key: str | None = None
    name: str | None = None


class LanguagesList(SonarQubeModel):
    languages: list[Language] = Field(default_factory=list)


class LanguagesService(Service):
    name = "languages"

    @endpoint("GET", "/api/languages/list", options=ListOption, result=LanguagesList)
    def list(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> LanguagesList:
        """List languages. A page size of 0 returns all of them."""
