"""Shared base for decoded Web API responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SonarQubeModel(BaseModel):
    """Response models accept camelCase keys and keep fields added by newer servers."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )
