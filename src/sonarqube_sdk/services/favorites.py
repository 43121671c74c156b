"""Components favorited by the current user."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..options import OptionModel
from ..pagination import PaginationArgs, Paging
from ..request_options import RequestOptions
from ..rules import Required


class ComponentArgs(OptionModel):
    component: Annotated[str | None, Required()] = None


class SearchOption(PaginationArgs):
    pass


class Favorite(SonarQubeModel):
    key: str | None = None
    name: str | None = None
    qualifier: str | None = None


class FavoritesSearch(SonarQubeModel):
    favorites: list[Favorite] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


class FavoritesService(Service):
    name = "favorites"

    @endpoint("POST", "/api/favorites/add", options=ComponentArgs)
    def add(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Add a component to the current user's favorites."""

    @endpoint("POST", "/api/favorites/remove", options=ComponentArgs)
    def remove(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> None:
        """Remove a component from the current user's favorites."""

    @endpoint("GET", "/api/favorites/search", options=SearchOption, result=FavoritesSearch)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> FavoritesSearch:
        """List the current user's favorites."""
