"""Operation descriptors, request building and the service base class.

Every Web API endpoint is declared once with :func:`endpoint`. The decorated
method keeps its name, signature and docstring for readers, while the call
itself is routed through :meth:`SonarQubeClient.execute`, the one pipeline
shared by all operations.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Mapping, Union

from .exceptions import SonarQubeValidationError
from .options import OptionModel, build_query

if TYPE_CHECKING:
    from .client import SonarQubeClient
    from .request_options import RequestOptions

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

# What every operation method accepts as its options argument.
OptionsArg = Union[OptionModel, Mapping[str, Any], None]


@dataclass(frozen=True)
class PreparedRequest:
    method: str
    path: str
    params: dict[str, Any]
    json: dict[str, Any] | None = None


@dataclass(frozen=True)
class Operation:
    """Static description of one endpoint.

    ``result`` is a pydantic model (or any type a ``TypeAdapter`` accepts),
    ``str`` for plain-text endpoints, ``bytes`` for binary ones, or ``None``
    when the endpoint returns nothing useful.
    """

    method: str
    path: str
    options: type[OptionModel] | None = None
    result: Any = None
    body: bool = False
    missing_ok: bool = False
    stream: bool = False
    name: str = ""

    def build(self, model: OptionModel | None) -> PreparedRequest:
        """Turn a validated option model into method, path, query and body."""
        path_params: dict[str, str] = {}
        query: dict[str, Any] = {}
        raw: dict[str, Any] = {}
        if model is not None:
            path_params, query, raw = build_query(model)

        def substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in path_params:
                raise SonarQubeValidationError(key, "is required", constraint="required")
            return path_params[key]

        path = _PLACEHOLDER.sub(substitute, self.path)
        if self.body:
            return PreparedRequest(self.method, path, {}, _json_ready(raw))
        return PreparedRequest(self.method, path, query, None)


def _json_ready(values: Mapping[str, Any]) -> dict[str, Any]:
    ready: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, (set, frozenset, tuple)):
            value = list(value)
        elif hasattr(value, "isoformat"):
            value = value.isoformat()
        ready[key] = value
    return ready


def endpoint(
    method: str,
    path: str,
    *,
    options: type[OptionModel] | None = None,
    result: Any = None,
    body: bool = False,
    missing_ok: bool = False,
    stream: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Declare a service method as a Web API operation."""
    declared = Operation(
        method=method.upper(),
        path=path,
        options=options,
        result=result,
        body=body,
        missing_ok=missing_ok,
        stream=stream,
    )

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        operation = replace(declared, name=func.__name__)

        @functools.wraps(func)
        def call(
            self: Service,
            options: OptionsArg = None,
            *,
            request_options: RequestOptions | None = None,
        ) -> Any:
            return self._client.execute(operation, options, request_options=request_options)

        call.operation = operation  # type: ignore[attr-defined]
        return call

    return decorator


class Service:
    """Base class for a group of related operations, such as ``projects``."""

    name: ClassVar[str] = ""

    def __init__(self, client: SonarQubeClient) -> None:
        self._client = client

    @classmethod
    def operations(cls) -> dict[str, Operation]:
        """Map method names to the operations this service declares."""
        found: dict[str, Operation] = {}
        for attr in dir(cls):
            operation = getattr(getattr(cls, attr, None), "operation", None)
            if isinstance(operation, Operation):
                found[attr] = operation
        return found

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
