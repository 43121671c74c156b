"""Metric definitions."""

from __future__ import annotations

from pydantic import Field

from ..models import SonarQubeModel
from ..operations import OptionsArg, Service, endpoint
from ..pagination import PaginationArgs, Paging
from ..request_options import RequestOptions


class SearchOption(PaginationArgs):
    pass


class Metric(SonarQubeModel):
    id: str | None = None
    key: str | None = None
    name: str | None = None
    description: str | None = None
    domain: str | None = None
    type: str | None = None
    direction: int | None = None
    qualitative: bool = False
    hidden: bool = False
    custom: bool = False


class MetricsSearch(SonarQubeModel):
    metrics: list[Metric] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


class MetricTypes(SonarQubeModel):
    types: list[str] = Field(default_factory=list)


class MetricsService(Service):
    name = "metrics"

    @endpoint("GET", "/api/metrics/search", options=SearchOption, result=MetricsSearch)
    def search(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> MetricsSearch:
        """Search metric definitions."""

    @endpoint("GET", "/api/metrics/types", result=MetricTypes)
    def types(self, options: OptionsArg = None, *, request_options: RequestOptions | None = None) -> MetricTypes:
        """List the available metric value types."""
