"""Per-request overrides for the SonarQube client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class RequestOptions:
    timeout: float | None = None
    headers: Mapping[str, str] | None = None
